"""
Scale overrides: explicit palettes and axis ranges.

Functions
---------
scale_color_manual(values, name=None)
    Fix the colors used for the levels bound to ``color``.
scale_fill_manual(values, name=None)
    Same for ``fill``.
xlim(lower, upper), ylim(lower, upper)
    Fix the range of a position axis.
"""

from dataclasses import dataclass
from itertools import cycle
from typing import Any, Mapping, Optional, Sequence

from .aes import normalize_channel


@dataclass(frozen=True)
class Scale:
    """
    Override of one channel's scale.

    Parameters
    ----------
    channel : str
        Channel the scale applies to.
    values : tuple or Mapping, optional
        Colors for a discrete color/fill scale: either a sequence used in
        level order, or an explicit ``{level: color}`` mapping.
    limits : tuple[float, float], optional
        Axis range for ``x``/``y``.
    name : str, optional
        Legend or axis title.
    """

    channel: str
    values: Optional[Sequence[str] | Mapping[Any, str]] = None
    limits: Optional[tuple] = None
    name: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "channel", normalize_channel(self.channel))
        if self.values is not None and not isinstance(self.values, Mapping):
            object.__setattr__(self, "values", tuple(self.values))

    def palette_for(self, levels: Sequence[Any]) -> dict:
        """
        Assign a color to every level.

        Levels missing from a mapping-style `values` are left out; a
        sequence of colors is recycled when there are more levels than
        colors.
        """
        if self.values is None:
            return {}
        if isinstance(self.values, Mapping):
            return {lvl: self.values[lvl] for lvl in levels if lvl in self.values}
        if not self.values:
            return {}
        return dict(zip(levels, cycle(self.values)))


def scale_color_manual(
    values: Sequence[str] | Mapping[Any, str], name: Optional[str] = None
) -> Scale:
    """Use `values` as the discrete color palette."""
    return Scale("color", values=values, name=name)


def scale_fill_manual(
    values: Sequence[str] | Mapping[Any, str], name: Optional[str] = None
) -> Scale:
    """Use `values` as the discrete fill palette."""
    return Scale("fill", values=values, name=name)


def xlim(lower: float, upper: float) -> Scale:
    """Fix the x axis range."""
    return Scale("x", limits=(lower, upper))


def ylim(lower: float, upper: float) -> Scale:
    """Fix the y axis range."""
    return Scale("y", limits=(lower, upper))
