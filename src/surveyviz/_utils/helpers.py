"""
General-purpose helpers.

Methods
-------
handle_nan(data, nan_policy, supported_policy, data_name)
    Handles NaN values in a DataFrame according to a specified policy.
temp_log_level(logger, level)
    Temporarily sets the logging level of a logger within a context.
"""

from contextlib import contextmanager
from typing import Iterable, Literal

import pandas as pd

from .readers import read_config
from .validation import validate_array_not_contains_nan, validate_string_flag


def handle_nan(
    data: pd.DataFrame,
    nan_policy: Literal["drop", "raise", "include"],
    supported_policy: Iterable[str] = ("drop", "raise"),
    data_name: str = "data",
) -> pd.DataFrame:
    """
    Handles NaN values in a DataFrame according to a specified policy.

    Parameters
    ----------
    data : pd.DataFrame
        Input data to process. It is never modified in place.
    nan_policy : {'drop', 'raise', 'include'}
        Policy for handling NaN values:
        - 'drop': drop rows with NaNs.
        - 'raise': raise ValueError if NaNs are present.
        - 'include': treat NaNs as valid values (do nothing).
    supported_policy : Iterable[str], default=('drop', 'raise')
        Policies allowed in the calling context.
    data_name : str, default='data'
        Name of the dataset (used in error messages).

    Returns
    -------
    pd.DataFrame
        DataFrame with NaNs handled according to the policy.

    Raises
    ------
    ValueError
        If `nan_policy` is 'raise' and NaNs are present in the data.
        If `nan_policy` not in `supported_policy`.
    """
    df = data.copy()
    validate_string_flag(
        nan_policy,
        supported_policy,
        err_msg=(
            f"Unsupported nan_policy: '{nan_policy}'. "
            f"Choose from: {tuple(supported_policy)}"
        ),
    )

    if nan_policy == "drop":
        df = df.dropna(axis=0)
    elif nan_policy == "raise":
        error_messages = read_config("messages")["errors"]
        validate_array_not_contains_nan(
            df, err_msg=error_messages["array_contains_nans_f"].format(data_name)
        )
    # 'include' -> do nothing
    return df


@contextmanager
def temp_log_level(logger, level):
    """
    Temporarily sets the logging level of a logger within a context.

    Parameters
    ----------
    logger : logging.Logger
        The logger whose level will be temporarily changed.
    level : int
        The logging level to set (e.g., logging.INFO, logging.DEBUG).

    Notes
    -----
    The original log level is always restored, even if an exception occurs.
    """
    old_level = logger.level
    logger.setLevel(level)
    try:
        yield
    finally:
        logger.setLevel(old_level)
