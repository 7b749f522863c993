"""
Internal utilities for surveyviz.

These are internal APIs and may change without notice.

Methods
-------
convert_dataframe(data)
    Convert tabular input to a pandas DataFrame.
convert_series(data)
    Convert an input data to a pandas Series.
validate_string_flag(arg, supported_values, err_msg)
    Validate a string flag against a set of supported values.
validate_array_not_contains_nan(array, err_msg)
    Validate that a table does not contain NaN values.
validate_columns_exist(data, columns, err_msg)
    Validate that requested columns are present in a DataFrame.
handle_nan(data, nan_policy, supported_policy, data_name)
    Handles NaN values in a dataset according to a specified policy.
temp_log_level(logger, level)
    Temporarily sets the logging level of a logger within a context.
read_config(name)
    Read and cache JSON configuration files.
enable_io_logs(logger)
    Decorator for I/O functions to log and re-raise exceptions.
"""

from .conversion import convert_dataframe, convert_series
from .helpers import handle_nan, temp_log_level
from .readers import read_config
from .io import enable_io_logs
from .validation import (
    validate_array_not_contains_nan,
    validate_columns_exist,
    validate_string_flag,
)

__all__ = [
    "convert_dataframe",
    "convert_series",
    "validate_array_not_contains_nan",
    "validate_columns_exist",
    "validate_string_flag",
    "handle_nan",
    "temp_log_level",
    "read_config",
    "enable_io_logs",
]
