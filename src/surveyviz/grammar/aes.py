"""
Aesthetic mappings: which column drives which visual channel.

Functions
---------
aes(x=None, y=None, **channels)
    Build an immutable :class:`Aes` mapping.

Classes
-------
Aes
    Read-only ``{channel: column}`` mapping with merge helpers.

Examples
--------
>>> from surveyviz import aes
>>> global_aes = aes("age", "income", color="Gender")
>>> local_aes = aes(color="Race")
>>> dict(global_aes.merge(local_aes))
{'x': 'age', 'y': 'income', 'color': 'Race'}
"""

from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from .._utils import read_config, validate_string_flag

ERR_MSG_UNSUPPORTED_CHANNEL_F = read_config("messages")["errors"][
    "unsupported_channel_f"
]

CHANNELS = ("x", "y", "color", "fill", "shape", "size", "alpha", "group", "label")
CHANNEL_ALIASES = {"colour": "color"}


def normalize_channel(channel: str) -> str:
    """Resolve channel aliases (``colour`` -> ``color``) and validate the name."""
    channel = CHANNEL_ALIASES.get(channel, channel)
    validate_string_flag(
        channel, CHANNELS, ERR_MSG_UNSUPPORTED_CHANNEL_F.format(channel, CHANNELS)
    )
    return channel


class Aes(Mapping):
    """
    Immutable mapping of visual channels to column names.

    Parameters
    ----------
    mapping : Mapping[str, str], optional
        Initial ``{channel: column}`` pairs.
    **channels
        Further ``channel=column`` pairs. ``None`` values are ignored.

    Raises
    ------
    ValueError
        If a channel is not one of :data:`CHANNELS`.
    """

    def __init__(self, mapping: Optional[Mapping[str, str]] = None, **channels):
        merged = {}
        for channel, column in {**(mapping or {}), **channels}.items():
            if column is not None:
                merged[normalize_channel(channel)] = column
        self._mapping = MappingProxyType(merged)

    def __getitem__(self, channel: str) -> str:
        return self._mapping[channel]

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    def __hash__(self):
        return hash(tuple(self._mapping.items()))

    def __repr__(self):
        inner = ", ".join(f"{k}={v!r}" for k, v in self._mapping.items())
        return f"aes({inner})"

    @property
    def columns(self) -> list[str]:
        """Distinct columns referenced by the mapping, in channel order."""
        return list(dict.fromkeys(self._mapping.values()))

    def merge(self, other: Mapping[str, str]) -> "Aes":
        """Return a new mapping where `other` takes precedence over `self`."""
        return Aes({**self._mapping, **dict(other)})

    def without(self, channels: Iterable[str]) -> "Aes":
        """Return a new mapping with `channels` removed."""
        dropped = set(channels)
        return Aes({k: v for k, v in self._mapping.items() if k not in dropped})


def aes(x: Optional[str] = None, y: Optional[str] = None, **channels) -> Aes:
    """
    Map data columns to visual channels.

    Parameters
    ----------
    x, y : str, optional
        Columns for the position channels.
    **channels
        ``color``, ``fill``, ``shape``, ``size``, ``alpha``, ``group`` or
        ``label`` bound to column names. ``colour`` is accepted as an alias.

    Returns
    -------
    Aes
        Immutable mapping.

    Notes
    -----
    ``group`` draws one line (or one fitted curve) per value without adding
    legend entries. ``alpha`` maps a column onto opacity between 0.1 and 1.
    ``label`` annotates points, or sets their hover text in interactive
    charts.
    """
    return Aes(x=x, y=y, **channels)
