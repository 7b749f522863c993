"""
Categorical recoding of numeric survey codes.

Survey files store answers as numeric codes (``1`` = "Female", ``2`` =
"Male", ...). This module maps such codes to nominal labels and returns
pandas ``category`` columns whose levels follow the order of the mapping.

Functions
---------
recode(column, mapping, fallback="Other", missing=None, ordered=False, verbose=False)
    Map the codes of one column to labels.
recode_columns(data, recodings, verbose=False)
    Apply several independent recodings to a copy of a table.
apply_value_labels(data, value_labels, columns=None, fallback=None)
    Turn value-label dictionaries read from a labeled file into categories.

Classes
-------
Recoding
    Declarative description of one column recoding.

Notes
-----
A code that is not part of the mapping never raises: it is merged into the
`fallback` label (or becomes missing when `fallback` is ``None``). This is
a categorical merge, not a validation step.

Examples
--------
>>> import pandas as pd
>>> from surveyviz.data import recode
>>> gender = pd.Series([0, 1, 1, None, 7], name="Gender")
>>> recode(gender, {0: "Male", 1: "Female"}, fallback=None).value_counts()
Gender
Female    2
Male      1
Name: count, dtype: int64
"""

import logging
from dataclasses import dataclass
from typing import Any, Hashable, Iterable, Mapping, Optional, Sequence

import pandas as pd

from .._utils import (
    convert_dataframe,
    convert_series,
    read_config,
    temp_log_level,
    validate_columns_exist,
)

logger = logging.getLogger(__name__)

ERR_MSG_COLUMN_NOT_FOUND_F = read_config("messages")["errors"]["column_not_found_f"]
LOG_MSG_FALLBACK_USED_F = read_config("messages")["warns"]["Recoding"][
    "fallback_used_f"
]


@dataclass(frozen=True)
class Recoding:
    """
    Description of a single column recoding.

    Parameters
    ----------
    column : str
        Source column holding raw codes.
    mapping : Mapping
        ``{code: label}``. A label of ``None`` maps the code to missing.
    fallback : str or None, default="Other"
        Label for codes absent from `mapping`. ``None`` turns them into
        missing values.
    missing : Iterable, optional
        Codes that must become missing (e.g. "refused", "don't know").
    target : str, optional
        Name of the output column. Defaults to `column` (in-place replace
        in the returned copy).
    ordered : bool, default=False
        Whether the resulting categorical is ordered.
    """

    column: str
    mapping: Mapping[Any, Optional[str]]
    fallback: Optional[str] = "Other"
    missing: Optional[Iterable[Any]] = None
    target: Optional[str] = None
    ordered: bool = False


def _category_levels(mapping: Mapping, fallback: Optional[str]) -> list:
    levels = []
    for label in mapping.values():
        if label is not None and label not in levels:
            levels.append(label)
    if fallback is not None and fallback not in levels:
        levels.append(fallback)
    return levels


def recode(
    column: Sequence[Any] | pd.Series,
    mapping: Mapping[Any, Optional[str]],
    fallback: Optional[str] = "Other",
    missing: Optional[Iterable[Any]] = None,
    ordered: bool = False,
    verbose: bool = False,
) -> pd.Series:
    """
    Map raw codes of a column to nominal labels.

    Parameters
    ----------
    column : Sequence or pandas.Series
        Raw codes. Nulls in the input stay missing.
    mapping : Mapping
        ``{code: label}``. Labels define the category levels in the order
        they first appear in the mapping. A ``None`` label maps the code
        to missing.
    fallback : str or None, default="Other"
        Label given to every code not present in `mapping` (and not listed
        in `missing`). If ``None``, such codes become missing.
    missing : Iterable, optional
        Codes explicitly mapped to missing.
    ordered : bool, default=False
        Create an ordered categorical (useful for Likert scales).
    verbose : bool, default=False
        If True, logs how many values were merged into the fallback.

    Returns
    -------
    pandas.Series
        Series of dtype ``category`` with the same index, name, row order
        and row count as the input.

    Examples
    --------
    >>> recode([1, 2, 3, 4], {1: "White", 2: "Black"}).tolist()
    ['White', 'Black', 'Other', 'Other']
    >>> recode([1, 2, 9], {1: "Yes", 2: "No"}, missing=[9]).tolist()
    ['Yes', 'No', nan]
    """
    series = convert_series(column)
    missing_codes = set(missing) if missing is not None else set()
    levels = _category_levels(mapping, fallback)

    values = []
    fallback_count = 0
    for value in series.astype(object):
        if pd.isna(value) or value in missing_codes:
            values.append(None)
        elif value in mapping:
            values.append(mapping[value])
        else:
            fallback_count += 1
            values.append(fallback)

    result = pd.Series(
        pd.Categorical(values, categories=levels, ordered=ordered),
        index=series.index,
        name=series.name,
    )
    if fallback_count and verbose:
        with temp_log_level(logger, logging.INFO):
            logger.info(
                LOG_MSG_FALLBACK_USED_F.format(fallback_count, series.name, fallback)
            )
    return result


def recode_columns(
    data: pd.DataFrame | Mapping[Hashable, Sequence],
    recodings: Iterable[Recoding] | Mapping[str, Mapping],
    verbose: bool = False,
) -> pd.DataFrame:
    """
    Apply several independent recodings to a table.

    Every recoding reads its source column from the *original* table, so a
    recoding that overwrites a column never affects another recoding that
    reads the same column.

    Parameters
    ----------
    data : pandas.DataFrame or Mapping
        Input table. It is not modified.
    recodings : Iterable[Recoding] or Mapping[str, Mapping]
        Recodings to apply. A plain mapping ``{column: {code: label}}`` is
        shorthand for ``Recoding(column, mapping)`` with default fallback.
    verbose : bool, default=False
        If True, logs the converted columns.

    Returns
    -------
    pandas.DataFrame
        A copy of `data` with recoded columns.

    Raises
    ------
    ValueError
        If a source column does not exist.

    Examples
    --------
    >>> df = pd.DataFrame({"sex": [1, 2, 1], "race": [1, 4, 2]})
    >>> out = recode_columns(df, [
    ...     Recoding("sex", {1: "Male", 2: "Female"}),
    ...     Recoding("race", {1: "White", 2: "Black"}, target="race_cat"),
    ... ])
    >>> out["race_cat"].tolist()
    ['White', 'Other', 'Black']
    """
    source = convert_dataframe(data)
    if isinstance(recodings, Mapping):
        recodings = [Recoding(column, mapping) for column, mapping in recodings.items()]
    recodings = list(recodings)
    validate_columns_exist(
        source, [r.column for r in recodings], ERR_MSG_COLUMN_NOT_FOUND_F
    )

    result = source.copy()
    for recoding in recodings:
        result[recoding.target or recoding.column] = recode(
            source[recoding.column],
            recoding.mapping,
            fallback=recoding.fallback,
            missing=recoding.missing,
            ordered=recoding.ordered,
            verbose=verbose,
        )

    if verbose:
        log_msg = {
            "function": "recode_columns",
            "converted_columns": [r.target or r.column for r in recodings],
            "conversion_count": len(recodings),
        }
        with temp_log_level(logger, logging.INFO):
            logger.info(log_msg)
    return result


def apply_value_labels(
    data: pd.DataFrame,
    value_labels: Mapping[str, Mapping[Any, str]],
    columns: Optional[Iterable[str]] = None,
    fallback: Optional[str] = None,
) -> pd.DataFrame:
    """
    Convert labeled numeric columns into categories using their value labels.

    Parameters
    ----------
    data : pandas.DataFrame
        Table with raw codes.
    value_labels : Mapping[str, Mapping]
        ``{column: {code: label}}`` as read from a labeled file.
    columns : Iterable[str], optional
        Subset of columns to convert. Defaults to every column that has
        value labels and is present in `data`.
    fallback : str or None, default=None
        Label for codes without a value label. ``None`` makes them missing.

    Returns
    -------
    pandas.DataFrame
        A copy of `data` with the selected columns converted.
    """
    if columns is None:
        columns = [c for c in value_labels if c in data.columns]
    recodings = [
        Recoding(column, value_labels.get(column, {}), fallback=fallback)
        for column in columns
    ]
    return recode_columns(data, recodings)
