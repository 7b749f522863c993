"""
Data validation and integrity checking utilities.

Methods
-------
validate_string_flag(arg, supported_values, err_msg)
    Validate that a string flag is among a set of supported values.
validate_array_not_contains_nan(array, err_msg)
    Validate that a DataFrame or Series contains no ``NaN`` values.
validate_columns_exist(data, columns, err_msg)
    Validate that every requested column is present in a DataFrame.

Examples
--------
>>> import surveyviz._utils as utils

>>> utils.validate_string_flag("pie", {"bar", "point"},
...                            err_msg="Unsupported geometry 'pie'.")
Traceback (most recent call last):
    ...
ValueError: Unsupported geometry 'pie'.
"""

from typing import Iterable, Sequence

import pandas as pd


def validate_string_flag(
    arg: str, supported_values: Iterable[str], err_msg: str
) -> None:
    """
    Validate a string flag against a set of supported values.

    Parameters
    ----------
    arg : str
        The string flag to validate.
    supported_values : Iterable[str]
        All supported flag values.
    err_msg : str
        The error message used in the raised ``ValueError``.

    Raises
    ------
    ValueError
        If `arg` is not found in `supported_values`.
    """
    if arg not in supported_values:
        raise ValueError(err_msg)


def validate_array_not_contains_nan(
    array: pd.DataFrame | pd.Series, err_msg: str
) -> None:
    """
    Validate that a DataFrame or Series does not contain NaN values.

    Raises
    ------
    ValueError
        If at least one cell is missing.
    """
    if pd.isna(array).values.any():
        raise ValueError(err_msg)


def validate_columns_exist(
    data: pd.DataFrame, columns: Iterable[str], err_msg: str
) -> None:
    """
    Validate that all `columns` are present in `data`.

    Parameters
    ----------
    data : pandas.DataFrame
        Table to check.
    columns : Iterable[str]
        Column names that must exist.
    err_msg : str
        Message template with two ``{}`` placeholders: the missing column
        and the list of available columns.

    Raises
    ------
    ValueError
        On the first column that is not found.
    """
    for column in columns:
        if column not in data.columns:
            raise ValueError(err_msg.format(column, list(data.columns)))
