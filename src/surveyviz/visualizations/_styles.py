"""
Per-layer drawing state shared by the static and interactive renderers.

A :class:`LayerStyle` bundles everything a renderer needs to draw one
layer on any panel: the cleaned layer frame, group levels and their
colors, discrete ``x`` levels, histogram bin edges and size limits.
Levels are computed on the whole table so that every panel (and both
engines) use the same categories and colors.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np
import pandas as pd

from ..grammar.chart import ChartSpec
from ..grammar.layers import ResolvedLayer
from ._stats import histogram_edges, layer_frame, split_groups
from ._utils import resolve_palette

DISCRETE_X_GEOMS = ("bar", "col", "boxplot", "violin")
LINE_GEOMS = ("point", "line", "smooth")
ALPHA_RANGE = (0.1, 1.0)


@dataclass
class LayerStyle:
    """Drawing state of one resolved layer."""

    layer: ResolvedLayer
    frame: pd.DataFrame
    default_color: str
    group: Optional[str] = None
    levels: list = field(default_factory=list)
    colors: dict = field(default_factory=dict)
    x_levels: list = field(default_factory=list)
    shape_levels: list = field(default_factory=list)
    edges: Optional[np.ndarray] = None
    size_limits: Optional[tuple] = None
    split_by: Optional[str] = None
    alpha_levels: list = field(default_factory=list)
    alpha_limits: Optional[tuple] = None

    @property
    def geom(self) -> str:
        return self.layer.geom

    @property
    def alpha(self) -> Optional[float]:
        return self.layer.literals.get("alpha")

    def color(self, level: Any = None) -> str:
        """Color of a group level; the literal or default color otherwise."""
        if self.group is not None and level is not None:
            return self.colors[level]
        order = ("color", "fill") if self.geom in LINE_GEOMS else ("fill", "color")
        for channel in order:
            if channel in self.layer.literals:
                return self.layer.literals[channel]
        return self.default_color

    def groups(self, df: pd.DataFrame):
        """Colored groups of `df`, each split further by the ``group`` channel."""
        return split_groups(df, self.group, self.levels, self.split_by)

    def panel_frame(self, rows: pd.Index) -> pd.DataFrame:
        """Layer rows that belong to a panel."""
        return self.frame.loc[self.frame.index.isin(rows)]

    def scaled_sizes(self, values: pd.Series, low: float, high: float) -> np.ndarray:
        """Map a numeric ``size`` column linearly onto ``[low, high]``."""
        vmin, vmax = self.size_limits
        values = values.astype(float).to_numpy()
        if vmax == vmin:
            return np.full(len(values), (low + high) / 2)
        return np.interp(values, (vmin, vmax), (low, high))

    def mapped_alpha(self, values: pd.Series) -> np.ndarray:
        """
        Opacity of every row from the mapped ``alpha`` column.

        Numeric values are mapped linearly onto :data:`ALPHA_RANGE`;
        categories are spaced evenly over it in level order.
        """
        low, high = ALPHA_RANGE
        if self.alpha_levels:
            ranks = {level: i for i, level in enumerate(self.alpha_levels)}
            values = values.map(ranks)
            vmin, vmax = 0, len(self.alpha_levels) - 1
        else:
            vmin, vmax = self.alpha_limits
        values = values.astype(float).to_numpy()
        if vmax == vmin:
            return np.full(len(values), high)
        return np.interp(values, (vmin, vmax), (low, high))

    def opacity(self, rows: pd.DataFrame) -> Optional[float]:
        """Opacity of one mark drawn from `rows`: mean mapped alpha or the literal."""
        if "alpha" in rows and not rows.empty:
            return float(self.mapped_alpha(rows["alpha"]).mean())
        return self.alpha


def build_layer_styles(
    spec: ChartSpec,
    nan_policy: str = "drop",
    palette: Optional[str] = None,
    engine: str = "matplotlib",
    default_color: str = "#1f77b4",
    smooth_color: str = "#3366FF",
) -> list[LayerStyle]:
    """Compute a :class:`LayerStyle` for every layer of `spec`."""
    styles = []
    for layer in spec.resolve_layers():
        frame = layer_frame(spec.data, layer, nan_policy)
        style = LayerStyle(
            layer=layer,
            frame=frame,
            default_color=smooth_color if layer.geom == "smooth" else default_color,
        )
        channel = layer.group_channel
        if channel is not None:
            style.group = channel
            style.levels = spec.levels(layer.group_column)
            style.colors = resolve_palette(
                style.levels, spec.scale_for(channel), palette, engine
            )
        if "x" in layer.mapping and layer.geom in DISCRETE_X_GEOMS:
            style.x_levels = spec.levels(layer.mapping["x"])
        if "shape" in layer.mapping:
            style.shape_levels = spec.levels(layer.mapping["shape"])
        if "size" in frame and not frame.empty:
            style.size_limits = (float(frame["size"].min()), float(frame["size"].max()))
        if "alpha" in frame and not frame.empty:
            if pd.api.types.is_numeric_dtype(frame["alpha"]):
                style.alpha_limits = (
                    float(frame["alpha"].min()),
                    float(frame["alpha"].max()),
                )
            else:
                style.alpha_levels = spec.levels(layer.mapping["alpha"])
        if "group" in layer.mapping and layer.geom in LINE_GEOMS:
            style.split_by = "group"
        if layer.geom == "histogram":
            style.edges = histogram_edges(frame["x"], layer.params.get("bins", 30))
        styles.append(style)
    return styles


def axis_titles(spec: ChartSpec) -> tuple[str, str]:
    """
    Titles of the x and y axes.

    Explicit labels win; otherwise the column mapped to the channel by the
    first layer that maps it. Count-based layers without ``y`` are titled
    ``'count'`` (``'proportion'`` for filled bars).
    """
    layers = spec.resolve_layers()
    x_title = spec.labels.x
    y_title = spec.labels.y
    if x_title is None:
        x_title = next((lyr.mapping["x"] for lyr in layers if "x" in lyr.mapping), "")
    if y_title is None:
        y_title = next((lyr.mapping["y"] for lyr in layers if "y" in lyr.mapping), None)
    if y_title is None:
        y_title = ""
        for lyr in layers:
            if lyr.geom in ("bar", "histogram"):
                filled = lyr.params.get("position") == "fill"
                y_title = "proportion" if filled else "count"
                break
    return x_title, y_title


def legend_title(spec: ChartSpec) -> str:
    """Title of the color legend: explicit label, scale name or column."""
    for layer in spec.resolve_layers():
        channel = layer.group_channel
        if channel is None:
            continue
        label = getattr(spec.labels, channel, None)
        if label is not None:
            return label
        scale = spec.scale_for(channel)
        if scale is not None and scale.name is not None:
            return scale.name
        return layer.group_column
    return ""
