import logging
from pathlib import Path

import pytest
import pandas as pd
import pyreadstat

from surveyviz.data import LabeledDataset, load_dataset

# fixtures

@pytest.fixture
def survey_sav(tmp_path: Path) -> Path:
    df = pd.DataFrame({
        "Gender": [0.0, 1.0, 1.0, None, 0.0],
        "Race": [1.0, 2.0, 1.0, 3.0, 4.0],
        "income": [21.5, 35.0, 41.2, 18.0, 52.3],
    })
    path = tmp_path / "survey.sav"
    pyreadstat.write_sav(
        df, str(path),
        column_labels=["Respondent gender", "Respondent race", "Yearly income"],
        variable_value_labels={
            "Gender": {0: "Male", 1: "Female"},
            "Race": {1: "White", 2: "Black", 3: "Asian"},
        },
    )
    return path

# tests for load_dataset()

def test_load_dataset_reads_data_and_labels(survey_sav):
    dataset = load_dataset(survey_sav)
    assert isinstance(dataset, LabeledDataset)
    assert dataset.shape == (5, 3)
    assert dataset.labels_for("Gender") == {0: "Male", 1: "Female"}
    assert dataset.labels_for("income") == {}
    assert dataset.column_labels["Race"] == "Respondent race"
    assert dataset.path == survey_sav

def test_load_dataset_usecols_and_row_limit(survey_sav):
    dataset = load_dataset(str(survey_sav), usecols=["Gender", "income"], row_limit=2)
    assert list(dataset.data.columns) == ["Gender", "income"]
    assert len(dataset.data) == 2

def test_load_dataset_csv(tmp_path):
    path = tmp_path / "survey.csv"
    pd.DataFrame({"a": [1, 2], "b": ["x", "y"]}).to_csv(path, index=False)
    dataset = load_dataset(path)
    assert dataset.data["b"].tolist() == ["x", "y"]
    assert dataset.value_labels == {}

def test_load_dataset_missing_file(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        with pytest.raises(FileNotFoundError):
            load_dataset(tmp_path / "absent.sav")
    assert "File not found" in caplog.text

def test_load_dataset_corrupt_file(tmp_path):
    path = tmp_path / "broken.sav"
    path.write_bytes(b"this is not an SPSS file")
    with pytest.raises(ValueError, match="Failed to read dataset"):
        load_dataset(path)

def test_load_dataset_unsupported_format(tmp_path):
    path = tmp_path / "survey.xlsx"
    path.write_bytes(b"")
    with pytest.raises(ValueError, match="Unsupported file format '.xlsx'"):
        load_dataset(path)

# tests for LabeledDataset

def test_labeled_dataset_as_categorical(survey_sav):
    dataset = load_dataset(survey_sav)
    df = dataset.as_categorical()
    assert df["Gender"].tolist()[:3] == ["Male", "Female", "Female"]
    assert pd.isna(df["Gender"].iloc[3])
    # code 4 has no value label
    assert pd.isna(df["Race"].iloc[4])
    assert df["income"].dtype == float
    assert dataset.data["Gender"].iloc[0] == 0

def test_labeled_dataset_as_categorical_with_fallback(survey_sav):
    df = load_dataset(survey_sav).as_categorical(columns=["Race"], fallback="Other")
    assert df["Race"].iloc[4] == "Other"
    assert df["Gender"].iloc[0] == 0

def test_labeled_dataset_labels_for_unknown_column():
    dataset = LabeledDataset(pd.DataFrame({"a": [1]}))
    with pytest.raises(ValueError, match="Column 'b' is not present"):
        dataset.labels_for("b")

def test_labeled_dataset_describe(survey_sav):
    result = load_dataset(survey_sav).describe()
    table = result.table
    assert table.loc["Gender", "count_of_nans"] == 1
    assert table.loc["Race", "value_labels"] == 3
    assert table.loc["income", "label"] == "Yearly income"

def test_load_dataset_permission_denied(survey_sav, mocker, caplog):
    reader = mocker.Mock(side_effect=PermissionError("denied"))
    mocker.patch.dict("surveyviz.data.loader.READERS", {".sav": reader})
    with caplog.at_level(logging.ERROR):
        with pytest.raises(PermissionError):
            load_dataset(survey_sav)
    assert "Permission denied in load_dataset" in caplog.text

def test_load_dataset_forwards_reader_options(survey_sav, mocker):
    meta = mocker.Mock(variable_value_labels={"g": {1.0: "a", 2.5: "b"}},
                       column_names_to_labels={"g": None})
    reader = mocker.Mock(return_value=(pd.DataFrame({"g": [1.0, 2.5]}), meta))
    mocker.patch.dict("surveyviz.data.loader.READERS", {".sav": reader})
    dataset = load_dataset(survey_sav, usecols=["g"])
    reader.assert_called_once_with(str(survey_sav), usecols=["g"], row_limit=0)
    assert dataset.value_labels == {"g": {1: "a", 2.5: "b"}}
    assert dataset.column_labels == {}
