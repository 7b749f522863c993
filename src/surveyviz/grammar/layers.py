"""
Geometry layers.

A :class:`Layer` couples a geometry (bars, points, a smoothed trend line...)
with an optional *local* aesthetic mapping and *literal* visual settings.
Layers never see the data directly; they are combined with a chart's
global mapping by :meth:`Layer.resolve`.

Functions
---------
geom_bar, geom_col, geom_point, geom_line, geom_smooth, geom_histogram,
geom_boxplot, geom_violin
    Layer constructors.

Notes
-----
Mapping versus setting:

- ``geom_point(aes(color="Gender"))`` *maps* a column to the color channel
  of this layer only; sibling layers do not see it.
- ``geom_point(color="steelblue")`` *sets* a literal color. The channel is
  removed from the layer's effective mapping, every mark gets the same
  color, and no legend entry is produced.

Examples
--------
>>> from surveyviz import aes, geom_point
>>> layer = geom_point(aes(color="Race"), alpha=0.5)
>>> layer.resolve(aes("age", "income", color="Gender")).mapping
aes(x='age', y='income', color='Race')
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional

from .._utils import read_config, validate_string_flag
from ..types import NaturalNumber
from .aes import CHANNEL_ALIASES, CHANNELS, Aes

ERR_MSG_UNSUPPORTED_GEOM_F = read_config("messages")["errors"]["unsupported_geom_f"]
ERR_MSG_UNSUPPORTED_METHOD_F = read_config("messages")["errors"]["unsupported_method_f"]
ERR_MSG_NOT_POSITIVE_INTEGER_F = read_config("messages")["errors"][
    "not_positive_integer_f"
]

# geometry -> channels that must be present in the effective mapping
GEOMS = {
    "bar": ("x",),
    "col": ("x", "y"),
    "point": ("x", "y"),
    "line": ("x", "y"),
    "smooth": ("x", "y"),
    "histogram": ("x",),
    "boxplot": ("y",),
    "violin": ("y",),
}
# channels used to split a layer into colored groups, by priority
GROUP_CHANNELS = {
    "bar": ("fill", "color"),
    "col": ("fill", "color"),
    "histogram": ("fill", "color"),
    "boxplot": ("fill", "color"),
    "violin": ("fill", "color"),
    "point": ("color", "fill"),
    "line": ("color",),
    "smooth": ("color",),
}
SMOOTH_METHODS = ("loess", "lm", "poly")
BAR_POSITIONS = ("stack", "dodge", "fill")


@dataclass(frozen=True)
class ResolvedLayer:
    """
    A layer combined with the chart's global mapping.

    Attributes
    ----------
    index : int
        Position of the layer in the chart (drawing order).
    geom : str
        Geometry name.
    mapping : Aes
        Effective mapping: global mapping overridden by the local one, with
        literal channels removed.
    literals : Mapping
        Literal channel settings (e.g. ``{"color": "red"}``).
    params : Mapping
        Geometry parameters (e.g. ``{"method": "lm"}``).
    """

    index: int
    geom: str
    mapping: Aes
    literals: Mapping[str, Any]
    params: Mapping[str, Any]

    @property
    def group_channel(self) -> Optional[str]:
        """Channel splitting this layer into colored groups, if any is mapped."""
        for channel in GROUP_CHANNELS[self.geom]:
            if channel in self.mapping:
                return channel
        return None

    @property
    def group_column(self) -> Optional[str]:
        channel = self.group_channel
        return self.mapping[channel] if channel is not None else None


@dataclass(frozen=True)
class Layer:
    """
    One geometry with its local mapping, literal settings and parameters.

    Parameters
    ----------
    geom : str
        One of :data:`GEOMS`.
    mapping : Aes, optional
        Local mapping. Takes precedence over the chart's global mapping for
        this layer only.
    literals : Mapping, optional
        Literal channel settings such as ``{"color": "red", "alpha": 0.5}``.
    params : Mapping, optional
        Geometry parameters such as ``{"bins": 20}``.
    inherit_aes : bool, default=True
        If False, the chart's global mapping is ignored by this layer.

    Raises
    ------
    ValueError
        If `geom` is unsupported.
    """

    geom: str
    mapping: Aes = field(default_factory=Aes)
    literals: Mapping[str, Any] = field(default_factory=dict)
    params: Mapping[str, Any] = field(default_factory=dict)
    inherit_aes: bool = True

    def __post_init__(self):
        validate_string_flag(
            self.geom, GEOMS, ERR_MSG_UNSUPPORTED_GEOM_F.format(self.geom, tuple(GEOMS))
        )
        # frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, "mapping", Aes(self.mapping))
        object.__setattr__(self, "literals", MappingProxyType(dict(self.literals)))
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))

    def resolve(self, global_mapping: Mapping[str, str], index: int = 0) -> ResolvedLayer:
        """
        Combine this layer with a chart's global mapping.

        Parameters
        ----------
        global_mapping : Mapping[str, str]
            Mapping supplied when the chart was created.
        index : int, default=0
            Position of the layer in the chart.

        Returns
        -------
        ResolvedLayer
            Layer with its effective mapping.
        """
        base = Aes(global_mapping) if self.inherit_aes else Aes()
        mapping = base.merge(self.mapping).without(self.literals)
        return ResolvedLayer(
            index=index,
            geom=self.geom,
            mapping=mapping,
            literals=self.literals,
            params=self.params,
        )


def _make_layer(
    geom: str,
    mapping: Optional[Mapping[str, str]],
    inherit_aes: bool,
    params: dict,
    settings: dict,
) -> Layer:
    """Split keyword settings into literal channels and geometry params."""
    literals = {}
    extra_params = {}
    for key, value in settings.items():
        channel = CHANNEL_ALIASES.get(key, key)
        if channel in CHANNELS:
            literals[channel] = value
        else:
            extra_params[key] = value
    return Layer(
        geom=geom,
        mapping=Aes(mapping),
        literals=literals,
        params={**params, **extra_params},
        inherit_aes=inherit_aes,
    )


def geom_bar(
    mapping: Optional[Mapping[str, str]] = None,
    position: str = "stack",
    width: float = 0.8,
    inherit_aes: bool = True,
    **settings,
) -> Layer:
    """
    Bars whose height is the number of rows per ``x`` value.

    Parameters
    ----------
    mapping : Aes, optional
        Local mapping; ``fill`` (or ``color``) splits bars into groups.
    position : {'stack', 'dodge', 'fill'}, default='stack'
        How grouped bars are arranged. ``'fill'`` stacks proportions.
    width : float, default=0.8
        Bar width in category units.
    inherit_aes : bool, default=True
        Whether the chart's global mapping applies.
    **settings
        Literal settings (``fill="grey"``, ``alpha=0.7``) or extra parameters.
    """
    validate_string_flag(
        position,
        BAR_POSITIONS,
        ERR_MSG_UNSUPPORTED_METHOD_F.format(position, BAR_POSITIONS),
    )
    return _make_layer(
        "bar", mapping, inherit_aes, {"position": position, "width": width}, settings
    )


def geom_col(
    mapping: Optional[Mapping[str, str]] = None,
    position: str = "stack",
    width: float = 0.8,
    inherit_aes: bool = True,
    **settings,
) -> Layer:
    """Bars whose height is the sum of ``y`` per ``x`` value."""
    validate_string_flag(
        position,
        BAR_POSITIONS,
        ERR_MSG_UNSUPPORTED_METHOD_F.format(position, BAR_POSITIONS),
    )
    return _make_layer(
        "col", mapping, inherit_aes, {"position": position, "width": width}, settings
    )


def geom_point(
    mapping: Optional[Mapping[str, str]] = None, inherit_aes: bool = True, **settings
) -> Layer:
    """Scatter points."""
    return _make_layer("point", mapping, inherit_aes, {}, settings)


def geom_line(
    mapping: Optional[Mapping[str, str]] = None, inherit_aes: bool = True, **settings
) -> Layer:
    """Lines connecting observations ordered by ``x``."""
    return _make_layer("line", mapping, inherit_aes, {}, settings)


def geom_smooth(
    mapping: Optional[Mapping[str, str]] = None,
    method: str = "loess",
    span: float = 0.75,
    degree: int = 2,
    dots: int = 100,
    inherit_aes: bool = True,
    **settings,
) -> Layer:
    """
    Smoothed trend line.

    Parameters
    ----------
    method : {'loess', 'lm', 'poly'}, default='loess'
        ``'loess'``: locally weighted regression (statsmodels LOWESS);
        ``'lm'``: ordinary least squares line; ``'poly'``: polynomial of
        `degree` fitted by least squares.
    span : float, default=0.75
        Fraction of the data used for each local fit (``'loess'`` only).
    degree : int, default=2
        Polynomial degree (``'poly'`` only).
    dots : int, default=100
        Number of points used to draw the fitted curve.

    Raises
    ------
    ValueError
        If `method` is unsupported or `degree`/`dots` are not natural numbers.
    """
    validate_string_flag(
        method, SMOOTH_METHODS, ERR_MSG_UNSUPPORTED_METHOD_F.format(method, SMOOTH_METHODS)
    )
    if not isinstance(degree, NaturalNumber):
        raise ValueError(ERR_MSG_NOT_POSITIVE_INTEGER_F.format("degree"))
    if not isinstance(dots, NaturalNumber):
        raise ValueError(ERR_MSG_NOT_POSITIVE_INTEGER_F.format("dots"))
    return _make_layer(
        "smooth",
        mapping,
        inherit_aes,
        {"method": method, "span": span, "degree": int(degree), "dots": int(dots)},
        settings,
    )


def geom_histogram(
    mapping: Optional[Mapping[str, str]] = None,
    bins: int = 30,
    inherit_aes: bool = True,
    **settings,
) -> Layer:
    """Histogram of ``x`` with `bins` equal-width bins."""
    if not isinstance(bins, NaturalNumber):
        raise ValueError(ERR_MSG_NOT_POSITIVE_INTEGER_F.format("bins"))
    return _make_layer("histogram", mapping, inherit_aes, {"bins": int(bins)}, settings)


def geom_boxplot(
    mapping: Optional[Mapping[str, str]] = None, inherit_aes: bool = True, **settings
) -> Layer:
    """Box-and-whisker plot of ``y``, optionally per ``x`` category."""
    return _make_layer("boxplot", mapping, inherit_aes, {}, settings)


def geom_violin(
    mapping: Optional[Mapping[str, str]] = None, inherit_aes: bool = True, **settings
) -> Layer:
    """Violin (mirrored density) plot of ``y``, optionally per ``x`` category."""
    return _make_layer("violin", mapping, inherit_aes, {}, settings)
