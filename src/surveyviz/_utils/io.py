"""
Logging helpers for filesystem I/O.

Functions
---------
enable_io_logs(io_logger)
    Decorator for I/O functions to automatically log FileNotFoundError,
    PermissionError and other unexpected exceptions before re-raising them.

Examples
--------
>>> import logging
>>> from surveyviz._utils import enable_io_logs
>>> logger = logging.getLogger("surveyviz.data.loader")
>>> @enable_io_logs(logger)
... def _read_bytes(path):
...     with open(path, "rb") as f:
...         return f.read()
"""

import logging
from typing import Callable
import functools

logger = logging.getLogger(__name__)


def enable_io_logs(io_logger: logging.Logger = None) -> Callable:
    """
    Decorator factory for logging I/O errors with a specified logger.

    Parameters
    ----------
    io_logger : logging.Logger, optional
        Logger instance to emit error messages through. Defaults to the
        logger of this module (`surveyviz._utils.io`).

    Returns
    -------
    Callable
        A decorator to wrap I/O functions.

    Notes
    -----
    Catches and logs ``FileNotFoundError``, ``PermissionError`` and any other
    ``Exception``. After logging, all exceptions are re-raised unchanged.
    """
    if io_logger is None:
        io_logger = logger

    def decorator(fn):
        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except FileNotFoundError as e:
                io_logger.error("File not found in %s: %s", fn.__name__, e)
                raise
            except PermissionError as e:
                io_logger.error("Permission denied in %s: %s", fn.__name__, e)
                raise
            except Exception as e:
                io_logger.error("Unexpected IO error in %s: %s", fn.__name__, e)
                raise

        return wrapper

    return decorator
