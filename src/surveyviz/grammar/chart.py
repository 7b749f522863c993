"""
Immutable chart specifications.

A :class:`ChartSpec` is built once from a table and a global aesthetic
mapping, then extended with ``+``. Every addition returns a *new*
specification; the original is never modified.

Functions
---------
chart(data, mapping=None)
    Start a chart specification.
labs(title=None, subtitle=None, x=None, y=None, color=None, fill=None, caption=None)
    Titles and axis/legend labels.
theme(**settings)
    Rendering hints: figure size, seaborn style/palette, legend position.

Classes
-------
ChartSpec, Labels, Theme

Examples
--------
>>> import pandas as pd
>>> from surveyviz import aes, chart, geom_point, geom_smooth, facet_wrap, labs
>>> df = pd.DataFrame({"age": [21, 35, 52, 40], "income": [18, 40, 61, 52],
...                    "Gender": ["Male", "Female", "Female", "Male"]})
>>> spec = (chart(df, aes("age", "income", color="Gender"))
...         + geom_point()
...         + geom_smooth(method="lm", color="black")
...         + facet_wrap("Gender")
...         + labs(title="Income by age"))
>>> [layer.mapping.get("color") for layer in spec.resolve_layers()]
['Gender', None]
>>> spec.legend_entries()
['Female', 'Male']
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Iterable, Mapping, Optional

import pandas as pd

from .._utils import convert_dataframe, read_config, validate_columns_exist
from ._utils import ordered_levels
from .aes import Aes
from .facets import FacetGrid, FacetLayout, FacetWrap, compute_layout
from .layers import GEOMS, Layer, ResolvedLayer
from .scales import Scale

ERR_MSG_COLUMN_NOT_FOUND_F = read_config("messages")["errors"]["column_not_found_f"]
ERR_MSG_UNSUPPORTED_COMPONENT_F = read_config("messages")["errors"][
    "unsupported_component_f"
]
ERR_MSG_GEOM_REQUIRES_CHANNEL_F = read_config("messages")["errors"][
    "geom_requires_channel_f"
]
ERR_MSG_UNSUPPORTED_LEGEND_POSITION_F = read_config("messages")["errors"][
    "unsupported_legend_position_f"
]

LEGEND_POSITIONS = ("right", "left", "top", "bottom", "none")


@dataclass(frozen=True)
class Labels:
    """Chart title and axis/legend titles. ``None`` means "use the default"."""

    title: Optional[str] = None
    subtitle: Optional[str] = None
    x: Optional[str] = None
    y: Optional[str] = None
    color: Optional[str] = None
    fill: Optional[str] = None
    caption: Optional[str] = None

    def merge(self, other: "Labels") -> "Labels":
        """Labels of `other` that are set replace those of `self`."""
        updates = {
            f.name: getattr(other, f.name)
            for f in fields(other)
            if getattr(other, f.name) is not None
        }
        return replace(self, **updates)


@dataclass(frozen=True)
class Theme:
    """
    Rendering hints.

    Parameters
    ----------
    figsize : tuple[float, float], optional
        Matplotlib figure size in inches.
    style : str, optional
        Seaborn style (e.g. ``'whitegrid'``).
    palette : str, optional
        Seaborn palette name used for discrete colors (e.g. ``'Set2'``).
    legend_position : {'right', 'left', 'top', 'bottom', 'none'}, optional
    template : str, optional
        Plotly template used by the interactive converter.
    """

    figsize: Optional[tuple] = None
    style: Optional[str] = None
    palette: Optional[str] = None
    legend_position: Optional[str] = None
    template: Optional[str] = None

    def merge(self, other: "Theme") -> "Theme":
        updates = {
            f.name: getattr(other, f.name)
            for f in fields(other)
            if getattr(other, f.name) is not None
        }
        return replace(self, **updates)


def labs(
    title: Optional[str] = None,
    subtitle: Optional[str] = None,
    x: Optional[str] = None,
    y: Optional[str] = None,
    color: Optional[str] = None,
    fill: Optional[str] = None,
    caption: Optional[str] = None,
    colour: Optional[str] = None,
) -> Labels:
    """Set the chart title and axis/legend titles."""
    return Labels(
        title=title,
        subtitle=subtitle,
        x=x,
        y=y,
        color=color if color is not None else colour,
        fill=fill,
        caption=caption,
    )


def theme(**settings) -> Theme:
    """
    Rendering hints; see :class:`Theme` for the accepted keywords.

    Raises
    ------
    ValueError
        If `legend_position` is not supported.
    TypeError
        On unknown keywords.
    """
    position = settings.get("legend_position")
    if position is not None and position not in LEGEND_POSITIONS:
        raise ValueError(
            ERR_MSG_UNSUPPORTED_LEGEND_POSITION_F.format(position, LEGEND_POSITIONS)
        )
    return Theme(**settings)


@dataclass(frozen=True, eq=False)
class ChartSpec:
    """
    Declarative chart: data, global mapping, layers, scales, facet, labels.

    Instances are immutable; use ``spec + component`` or
    :meth:`add` to derive new specifications.

    Attributes
    ----------
    data : pandas.DataFrame
        Data source (a private copy taken at creation).
    mapping : Aes
        Global aesthetic mapping inherited by every layer.
    layers : tuple[Layer, ...]
    scales : tuple[Scale, ...]
        At most one scale per channel; a later scale replaces an earlier one.
    facet : FacetWrap, FacetGrid or None
    labels : Labels
    theme : Theme
    """

    data: pd.DataFrame
    mapping: Aes = field(default_factory=Aes)
    layers: tuple = ()
    scales: tuple = ()
    facet: Optional[FacetWrap | FacetGrid] = None
    labels: Labels = field(default_factory=Labels)
    theme: Theme = field(default_factory=Theme)

    def __add__(self, component: Any) -> "ChartSpec":
        return self.add(component)

    def add(self, component: Any) -> "ChartSpec":
        """
        Return a new specification extended with `component`.

        Parameters
        ----------
        component : Layer, Scale, FacetWrap, FacetGrid, Labels, Theme or list
            A list/tuple adds its elements in order.

        Raises
        ------
        TypeError
            If `component` has an unsupported type.
        ValueError
            If the component references a column that is not in the data,
            or a layer lacks a required channel.
        """
        if isinstance(component, (list, tuple)):
            spec = self
            for item in component:
                spec = spec.add(item)
            return spec
        if isinstance(component, Layer):
            resolved = component.resolve(self.mapping, index=len(self.layers))
            self._validate_layer(resolved)
            return replace(self, layers=self.layers + (component,))
        if isinstance(component, Scale):
            kept = tuple(s for s in self.scales if s.channel != component.channel)
            return replace(self, scales=kept + (component,))
        if isinstance(component, (FacetWrap, FacetGrid)):
            validate_columns_exist(
                self.data, component.columns, ERR_MSG_COLUMN_NOT_FOUND_F
            )
            return replace(self, facet=component)
        if isinstance(component, Labels):
            return replace(self, labels=self.labels.merge(component))
        if isinstance(component, Theme):
            return replace(self, theme=self.theme.merge(component))
        raise TypeError(ERR_MSG_UNSUPPORTED_COMPONENT_F.format(type(component).__name__))

    def _validate_layer(self, layer: ResolvedLayer) -> None:
        validate_columns_exist(
            self.data, layer.mapping.columns, ERR_MSG_COLUMN_NOT_FOUND_F
        )
        for channel in GEOMS[layer.geom]:
            if channel not in layer.mapping:
                raise ValueError(
                    ERR_MSG_GEOM_REQUIRES_CHANNEL_F.format(layer.geom, channel)
                )

    @property
    def n_layers(self) -> int:
        return len(self.layers)

    def resolve_layers(self) -> tuple[ResolvedLayer, ...]:
        """Effective mapping of every layer, in drawing order."""
        return tuple(
            layer.resolve(self.mapping, index=i) for i, layer in enumerate(self.layers)
        )

    def layout(self) -> FacetLayout:
        """Panel layout of the chart (one panel when there is no facet)."""
        return compute_layout(self.facet, self.data)

    def scale_for(self, channel: str) -> Optional[Scale]:
        for scale in self.scales:
            if scale.channel == channel:
                return scale
        return None

    def levels(self, column: str) -> list:
        """Display order of the distinct values of `column`."""
        return ordered_levels(self.data[column])

    def legend_columns(self, channel: str = "color") -> list[str]:
        """Columns bound to `channel` as a grouping channel in any layer."""
        columns = []
        for layer in self.resolve_layers():
            if layer.group_channel == channel and layer.group_column not in columns:
                columns.append(layer.group_column)
        return columns

    def legend_entries(self, channel: Optional[str] = "color") -> list:
        """
        Distinct values shown in the legend for `channel`.

        Parameters
        ----------
        channel : str or None, default='color'
            ``'color'`` or ``'fill'``; ``None`` combines both.

        Returns
        -------
        list
            Levels of every column bound to the channel (literal settings
            never contribute), without duplicates, in display order.
        """
        channels = ("color", "fill") if channel is None else (channel,)
        entries = []
        for ch in channels:
            for column in self.legend_columns(ch):
                for level in self.levels(column):
                    if level not in entries:
                        entries.append(level)
        return entries


def chart(
    data: pd.DataFrame | Mapping[str, Iterable], mapping: Optional[Mapping[str, str]] = None
) -> ChartSpec:
    """
    Start a chart specification.

    Parameters
    ----------
    data : pandas.DataFrame, Mapping or LabeledDataset
        Data source. A copy is stored.
    mapping : Aes, optional
        Global aesthetic mapping, inherited by every layer that does not
        override a channel.

    Returns
    -------
    ChartSpec
        Specification without layers.

    Raises
    ------
    ValueError
        If the mapping references columns missing from `data`.
    """
    df = convert_dataframe(data)
    mapping = Aes(mapping)
    validate_columns_exist(df, mapping.columns, ERR_MSG_COLUMN_NOT_FOUND_F)
    return ChartSpec(data=df, mapping=mapping)
