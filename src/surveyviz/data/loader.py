"""
Loading of labeled survey files.

Statistical packages (SPSS, Stata, SAS) store, next to the data, a label
for every variable and a dictionary of value labels (``1 -> "Female"``).
This module reads such files with `pyreadstat` and keeps both kinds of
labels next to the pandas DataFrame.

Functions
---------
load_dataset(path, usecols=None, row_limit=None)
    Read a labeled file into a :class:`LabeledDataset`.

Classes
-------
LabeledDataset
    A DataFrame together with its variable labels and value labels.

Notes
-----
A missing, unsupported or corrupt file is fatal: the error is logged and
raised, and no partial table is returned.

Examples
--------
>>> from surveyviz.data import load_dataset
>>> survey = load_dataset("survey.sav")  # doctest: +SKIP
>>> survey.labels_for("Gender")  # doctest: +SKIP
{0: 'Male', 1: 'Female'}
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterable, Optional, Sequence

import pandas as pd
import pyreadstat

from .._utils import enable_io_logs, read_config, validate_columns_exist
from ..types import TableResult
from .recoding import apply_value_labels

logger = logging.getLogger(__name__)

ERR_MSG_DATASET_NOT_FOUND_F = read_config("messages")["errors"]["dataset_not_found_f"]
ERR_MSG_DATASET_UNREADABLE_F = read_config("messages")["errors"][
    "dataset_unreadable_f"
]
ERR_MSG_UNSUPPORTED_FILE_FORMAT_F = read_config("messages")["errors"][
    "unsupported_file_format_f"
]
ERR_MSG_COLUMN_NOT_FOUND_F = read_config("messages")["errors"]["column_not_found_f"]

READERS = {
    ".sav": pyreadstat.read_sav,
    ".zsav": pyreadstat.read_sav,
    ".por": pyreadstat.read_por,
    ".dta": pyreadstat.read_dta,
    ".sas7bdat": pyreadstat.read_sas7bdat,
    ".xpt": pyreadstat.read_xport,
}
SUPPORTED_FORMATS = tuple(READERS) + (".csv",)


@dataclass
class LabeledDataset:
    """
    A table read from a labeled statistical file.

    Parameters
    ----------
    data : pandas.DataFrame
        Raw values (numeric codes are kept as read).
    value_labels : dict
        ``{column: {code: label}}`` for every column carrying value labels.
    column_labels : dict
        ``{column: descriptive label}``.
    path : pathlib.Path, optional
        File the dataset was read from.
    """

    data: pd.DataFrame
    value_labels: dict = field(default_factory=dict)
    column_labels: dict = field(default_factory=dict)
    path: Optional[Path] = None

    @property
    def shape(self) -> tuple[int, int]:
        return self.data.shape

    def labels_for(self, column: str) -> dict:
        """Return the value labels of `column` (empty if it has none)."""
        validate_columns_exist(self.data, [column], ERR_MSG_COLUMN_NOT_FOUND_F)
        return dict(self.value_labels.get(column, {}))

    def as_categorical(
        self, columns: Optional[Iterable[str]] = None, fallback: Optional[str] = None
    ) -> pd.DataFrame:
        """
        Return a copy of the data with labeled columns converted to categories.

        Parameters
        ----------
        columns : Iterable[str], optional
            Columns to convert. Defaults to all columns with value labels.
        fallback : str or None, default=None
            Label for codes that have no value label; ``None`` makes them
            missing.
        """
        if columns is not None:
            columns = list(columns)
            validate_columns_exist(self.data, columns, ERR_MSG_COLUMN_NOT_FOUND_F)
        return apply_value_labels(
            self.data, self.value_labels, columns=columns, fallback=fallback
        )

    def describe(self) -> TableResult:
        """
        Variable overview: label, dtype, missing count and number of value labels.
        """
        table = pd.DataFrame(
            {
                "label": [self.column_labels.get(c) for c in self.data.columns],
                "dtype": [str(t) for t in self.data.dtypes],
                "count_of_nans": self.data.isna().sum().to_list(),
                "value_labels": [
                    len(self.value_labels.get(c, {})) for c in self.data.columns
                ],
            },
            index=self.data.columns,
        )
        return TableResult(
            table=table,
            title="Variables",
            description=f"{self.data.shape[0]} rows, {self.data.shape[1]} columns",
        )


@enable_io_logs(logger)
def load_dataset(
    path: str | Path,
    usecols: Optional[Sequence[str]] = None,
    row_limit: Optional[int] = None,
) -> LabeledDataset:
    """
    Read a labeled tabular file.

    The reader is chosen from the file suffix: ``.sav``/``.zsav``/``.por``
    (SPSS), ``.dta`` (Stata), ``.sas7bdat`` and ``.xpt`` (SAS) are read with
    `pyreadstat` and keep their labels; ``.csv`` is read with pandas and has
    no labels.

    Parameters
    ----------
    path : str or pathlib.Path
        File to read.
    usecols : Sequence[str], optional
        Read only these columns.
    row_limit : int, optional
        Read at most this many rows.

    Returns
    -------
    LabeledDataset
        The data with its variable and value labels.

    Raises
    ------
    FileNotFoundError
        If `path` does not exist.
    ValueError
        If the format is unsupported or the file cannot be parsed.
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_FORMATS:
        raise ValueError(
            ERR_MSG_UNSUPPORTED_FILE_FORMAT_F.format(suffix, ", ".join(SUPPORTED_FORMATS))
        )
    if not path.is_file():
        raise FileNotFoundError(ERR_MSG_DATASET_NOT_FOUND_F.format(path))

    try:
        if suffix == ".csv":
            data = pd.read_csv(path, usecols=usecols, nrows=row_limit)
            value_labels, column_labels = {}, {}
        else:
            data, meta = READERS[suffix](
                str(path), usecols=usecols, row_limit=row_limit or 0
            )
            value_labels = _normalize_value_labels(meta.variable_value_labels)
            column_labels = {
                name: label
                for name, label in meta.column_names_to_labels.items()
                if label
            }
    except (FileNotFoundError, PermissionError):
        raise
    except Exception as exc:
        raise ValueError(ERR_MSG_DATASET_UNREADABLE_F.format(path, exc)) from exc

    logger.info("Loaded '%s': %d rows, %d columns", path, *data.shape)
    return LabeledDataset(
        data=data, value_labels=value_labels, column_labels=column_labels, path=path
    )


def _normalize_value_labels(value_labels: dict[str, dict[Any, str]]) -> dict:
    """Turn whole-number float codes (``1.0``) into ``int`` keys."""
    normalized = {}
    for column, labels in value_labels.items():
        normalized[column] = {
            (int(code) if isinstance(code, float) and code.is_integer() else code): label
            for code, label in labels.items()
        }
    return normalized
