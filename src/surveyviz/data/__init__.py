"""
Data preparation for surveyviz: loading labeled files, recoding codes into
categories, and descriptive summaries.

Functions
---------
load_dataset(path, usecols=None, row_limit=None)
    Read a labeled tabular file into a :class:`LabeledDataset`.
recode(column, mapping, fallback="Other", missing=None, ordered=False)
    Map raw codes of a column to nominal labels.
recode_columns(data, recodings, verbose=False)
    Apply several independent recodings to a copy of a table.
apply_value_labels(data, value_labels, columns=None, fallback=None)
    Convert labeled columns into categories using their value labels.
frequency_table(column, dropna=False, sort=False)
    Counts and percentages of a categorical column.
describe_numeric(data, columns=None)
    Descriptive statistics of numeric columns.
"""

from .loader import LabeledDataset, load_dataset
from .recoding import Recoding, apply_value_labels, recode, recode_columns
from .summaries import describe_numeric, frequency_table

__all__ = [
    "LabeledDataset",
    "load_dataset",
    "Recoding",
    "recode",
    "recode_columns",
    "apply_value_labels",
    "frequency_table",
    "describe_numeric",
]
