"""
Configuration file reading utilities.

Message templates used across surveyviz live in JSON files under the
package's ``config/`` directory. They are read once and cached.

Methods
-------
read_config
    Read and cache a JSON configuration file from the package config directory.

Examples
--------
>>> from surveyviz._utils import read_config

>>> read_config("messages")["errors"]["unsupported_geom_f"]
"Unsupported geometry '{}'. Choose from: {}."
"""

import json
import pathlib
from functools import lru_cache


@lru_cache(maxsize=2)
def read_config(name) -> dict:
    """
    Read and cache JSON configuration files.

    Parameters
    ----------
    name : str
        The name of the configuration file (without .json extension).
        File is located at `config/{name}.json` relative to the package root.

    Returns
    -------
    dict
        The parsed JSON content of the configuration file.

    Raises
    ------
    FileNotFoundError
        If the requested configuration file does not exist.
    """
    path = pathlib.Path(__file__).resolve().parent.parent / f"config/{name}.json"
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)
