"""
Conversion utilities for data transformation and standardization.

Methods
-------
convert_dataframe(data)
    Convert tabular input (DataFrame, mapping of columns, labeled dataset)
    to a pandas DataFrame.
convert_series(data)
    Convert an input data to a single pandas Series.

Notes
-----
- Functions return copies of data rather than modifying in-place.
- Tabular inputs are column-based: mapping keys become column names.

Examples
--------
>>> from surveyviz._utils import convert_series

>>> convert_series({"age": [21, 35, 44]})
0    21
1    35
2    44
Name: age, dtype: int64
"""

from typing import Any, Mapping, Sequence, Union

import numpy as np
import pandas as pd

from .readers import read_config

ERR_MSG_MULTIDIMENSIONAL_DATA = read_config("messages")["errors"][
    "multidimensional_data_f"
]
ERR_MSG_UNEXPECTED_TYPE_F = read_config("messages")["errors"]["unexpected_type_f"]


def convert_dataframe(data: Union[pd.DataFrame, Mapping[Any, Sequence]]) -> pd.DataFrame:
    """
    Convert an input data to a pandas DataFrame.

    Parameters
    ----------
    data : pandas.DataFrame, Mapping or object with a ``data`` DataFrame attribute
        Tabular input. A mapping is interpreted as ``{column: values}``.
        Objects exposing a ``data`` DataFrame attribute (such as
        :class:`surveyviz.data.LabeledDataset`) are unwrapped.

    Returns
    -------
    pandas.DataFrame
        A copy of the input as a DataFrame.

    Raises
    ------
    TypeError
        If the input cannot be interpreted as a table.
    """
    if isinstance(getattr(data, "data", None), pd.DataFrame):
        data = data.data
    if isinstance(data, pd.DataFrame):
        return data.copy()
    if isinstance(data, pd.Series):
        return data.to_frame(name=data.name if data.name is not None else 0)
    if isinstance(data, Mapping):
        return pd.DataFrame(dict(data))
    raise TypeError(
        ERR_MSG_UNEXPECTED_TYPE_F.format(
            "a DataFrame or a mapping of columns", type(data).__name__
        )
    )


def convert_series(data: Union[Sequence[Any], Mapping, pd.Series, None]) -> pd.Series:
    """
    Validate and normalize input data into a single-dimensional Pandas Series.

    Parameters
    ----------
    data : array-like, dict or None
        A 1D sequence (list, np.ndarray, pd.Series) or a mapping/DataFrame
        containing a single feature.

    Returns
    -------
    pd.Series
        A one-dimensional series. An empty Series is returned for ``None``
        or empty input. The index of a Series input is preserved.

    Raises
    ------
    ValueError
        If the input contains more than one feature.
    """
    if data is None:
        return pd.Series([], dtype=object)
    if isinstance(data, pd.Series):
        return data.copy()
    if isinstance(data, pd.DataFrame):
        if data.shape[1] > 1:
            raise ValueError(ERR_MSG_MULTIDIMENSIONAL_DATA.format("data"))
        if data.shape[1] == 0:
            return pd.Series([], dtype=object)
        return data.iloc[:, 0].copy()
    if isinstance(data, Mapping):
        if len(data) > 1:
            raise ValueError(ERR_MSG_MULTIDIMENSIONAL_DATA.format("data"))
        if len(data) == 0:
            return pd.Series([], dtype=object)
        name = list(data)[0]
        return pd.Series(list(data[name]), name=name)
    array = np.asarray(list(data), dtype=object)
    if array.ndim > 1:
        raise ValueError(ERR_MSG_MULTIDIMENSIONAL_DATA.format("data"))
    if array.size == 0:
        return pd.Series([], dtype=object)
    return pd.Series(list(data))
