import pytest
import pandas as pd
import numpy as np

from surveyviz._utils import (
    validate_string_flag, validate_array_not_contains_nan,
    validate_columns_exist, handle_nan)


# tests for validate_string_flag

def test_validate_string_flag_positive_case():
    validate_string_flag(arg="A", supported_values=["A", "B", "C"],
                         err_msg="my_error_message")

def test_validate_string_flag_negative_case():
    with pytest.raises(ValueError, match="my_error_message"):
        validate_string_flag(arg="D", supported_values=["A", "B", "C"],
                             err_msg="my_error_message")

# tests for validate_array_not_contains_nan

def test_validate_array_not_contains_nan_positive_case():
    validate_array_not_contains_nan(pd.Series([1, 2, 3]), err_msg="my_error_message")

@pytest.mark.parametrize("array", [
    pd.Series([1, np.nan, 3]),
    pd.DataFrame({"a": [1, 2], "b": [None, "x"]}),
])
def test_validate_array_not_contains_nan_negative_case(array):
    with pytest.raises(ValueError, match="my_error_message"):
        validate_array_not_contains_nan(array, err_msg="my_error_message")

# tests for validate_columns_exist

def test_validate_columns_exist_positive_case():
    df = pd.DataFrame({"a": [1], "b": [2]})
    validate_columns_exist(df, ["a", "b"], err_msg="{} not in {}")

def test_validate_columns_exist_reports_missing_column():
    df = pd.DataFrame({"a": [1], "b": [2]})
    with pytest.raises(ValueError, match=r"c not in \['a', 'b'\]"):
        validate_columns_exist(df, ["a", "c"], err_msg="{} not in {}")

# tests for handle_nan

def test_handle_nan_drop():
    df = pd.DataFrame({"a": [1, None, 3], "b": ["x", "y", None]})
    result = handle_nan(df, nan_policy="drop")
    assert result.index.tolist() == [0]
    assert len(df) == 3

def test_handle_nan_raise():
    df = pd.DataFrame({"a": [1, None]})
    with pytest.raises(ValueError, match="'my_table' contains NaN values."):
        handle_nan(df, nan_policy="raise", data_name="my_table")

def test_handle_nan_unsupported_policy():
    df = pd.DataFrame({"a": [1, None]})
    with pytest.raises(ValueError, match="Unsupported nan_policy"):
        handle_nan(df, nan_policy="include")

def test_handle_nan_include_when_supported():
    df = pd.DataFrame({"a": [1, None]})
    result = handle_nan(df, nan_policy="include",
                        supported_policy=("drop", "raise", "include"))
    assert len(result) == 2
