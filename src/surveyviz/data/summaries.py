"""
Descriptive summaries used alongside the charts.

Thin wrappers over pandas returning :class:`surveyviz.types.TableResult`.

Functions
---------
frequency_table(column, dropna=False, sort=False, round_digits=2)
    Counts, percentages and cumulative percentages of a categorical column.
describe_numeric(data, columns=None, round_digits=2)
    Count, mean, std, min, quartiles and max of numeric columns.
"""

from typing import Iterable, Optional, Sequence

import pandas as pd

from .._utils import (
    convert_dataframe,
    convert_series,
    read_config,
    validate_columns_exist,
)
from ..types import TableResult

ERR_MSG_COLUMN_NOT_FOUND_F = read_config("messages")["errors"]["column_not_found_f"]


def frequency_table(
    column: Sequence | pd.Series,
    dropna: bool = False,
    sort: bool = False,
    round_digits: Optional[int] = 2,
) -> TableResult:
    """
    Build a frequency table for a categorical column.

    Parameters
    ----------
    column : Sequence or pandas.Series
        Values to count. For ``category`` dtype, every level is listed
        (including levels with zero count) in level order.
    dropna : bool, default=False
        If False, missing values are counted in their own row.
    sort : bool, default=False
        If True, rows are ordered by descending count instead of level order.
    round_digits : int, optional
        Rounding applied to the percentage columns.

    Returns
    -------
    TableResult
        Table indexed by value with columns ``count``, ``pct`` and
        ``cumulative_pct`` (percentages in 0-100).

    Examples
    --------
    >>> frequency_table(["a", "b", "a"]).table
       count    pct  cumulative_pct
    a      2  66.67           66.67
    b      1  33.33          100.00
    """
    series = convert_series(column)
    counts = series.value_counts(dropna=dropna, sort=sort)
    if not sort and not isinstance(series.dtype, pd.CategoricalDtype):
        counts = counts.sort_index(na_position="last")
    total = counts.sum()
    table = pd.DataFrame({"count": counts.astype(int)})
    table["pct"] = table["count"] / total * 100 if total else 0.0
    table["cumulative_pct"] = table["pct"].cumsum()
    table.index.name = series.name
    if round_digits is not None:
        table[["pct", "cumulative_pct"]] = table[["pct", "cumulative_pct"]].round(
            round_digits
        )
    return TableResult(
        table=table,
        title=f"Frequencies of {series.name}" if series.name is not None else None,
    )


def describe_numeric(
    data: pd.DataFrame,
    columns: Optional[Iterable[str]] = None,
    round_digits: Optional[int] = 2,
) -> TableResult:
    """
    Descriptive statistics of numeric columns (one row per column).

    Parameters
    ----------
    data : pandas.DataFrame or Mapping
        Input table.
    columns : Iterable[str], optional
        Columns to describe. Defaults to every numeric column.
    round_digits : int, optional
        Rounding applied to the result.

    Returns
    -------
    TableResult
        ``pandas.DataFrame.describe`` transposed.
    """
    df = convert_dataframe(data)
    if columns is not None:
        columns = list(columns)
        validate_columns_exist(df, columns, ERR_MSG_COLUMN_NOT_FOUND_F)
        df = df[columns]
    table = df.select_dtypes("number").describe().T
    if round_digits is not None:
        table = table.round(round_digits)
    return TableResult(table=table, title="Descriptive statistics")
