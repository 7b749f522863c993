import pytest
import pandas as pd
import numpy as np

from surveyviz.data import frequency_table, describe_numeric, recode

# tests for frequency_table()

def test_frequency_table_counts_and_percentages():
    result = frequency_table(pd.Series(["a", "b", "a", "a"], name="letter"))
    table = result.table
    assert table["count"].tolist() == [3, 1]
    assert table["pct"].tolist() == [75.0, 25.0]
    assert table["cumulative_pct"].iloc[-1] == 100.0
    assert result.title == "Frequencies of letter"

def test_frequency_table_categorical_keeps_level_order():
    gender = recode(pd.Series([1, 1, 0, np.nan]), {0: "Male", 1: "Female"},
                    fallback=None)
    table = frequency_table(gender, dropna=True).table
    assert table.index.tolist() == ["Male", "Female"]
    assert table["count"].tolist() == [1, 2]

def test_frequency_table_counts_missing_by_default():
    table = frequency_table([1, None, 1]).table
    assert table["count"].sum() == 3
    assert len(table) == 2

@pytest.mark.parametrize("sort, expected", [
    (False, ["a", "b"]),
    (True, ["b", "a"]),
])
def test_frequency_table_sort(sort, expected):
    table = frequency_table(["a", "b", "b"], sort=sort).table
    assert table.index.tolist() == expected

# tests for describe_numeric()

def test_describe_numeric_only_numeric_columns():
    df = pd.DataFrame({"age": [20, 30, 40], "name": ["x", "y", "z"]})
    table = describe_numeric(df).table
    assert table.index.tolist() == ["age"]
    assert table.loc["age", "mean"] == 30.0

def test_describe_numeric_unknown_column():
    with pytest.raises(ValueError):
        describe_numeric(pd.DataFrame({"age": [1]}), columns=["income"])
