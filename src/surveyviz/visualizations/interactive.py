"""
Interactive (Plotly) rendering.

Two parallel entry points are provided:

- :func:`to_interactive` converts a finished chart specification into a
  ``plotly.graph_objects.Figure`` that keeps every layer, color mapping,
  facet panel and title of the specification.
- :func:`interactive_plot` builds an interactive chart directly from a
  table and a single geometry with ``plotly.express``, without a chart
  specification.

Layout overrides (size, legend anchor) are applied after conversion with
:func:`update_layout`, which never touches the traces. :func:`inspect_figure`
reads back the number of layers, the legend entries and the number of
panels of a converted figure.

Functions
---------
to_interactive(spec, width=None, height=None, legend=None, **kwargs)
update_layout(result, width=None, height=None, legend=None)
interactive_plot(data, geom, x=None, y=None, color=None, **kwargs)
inspect_figure(figure)

Classes
-------
LegendPosition
    Legend anchor and offset in paper coordinates.
FigureSummary
    Layers, legend entries and panels of a figure.

Examples
--------
>>> import pandas as pd
>>> import surveyviz as sv
>>> df = pd.DataFrame({"age": [21, 35, 52, 40], "income": [18, 40, 61, 52],
...                    "Gender": ["Male", "Female", "Female", "Male"]})
>>> spec = sv.chart(df, sv.aes("age", "income", color="Gender")) + sv.geom_point()
>>> result = sv.to_interactive(spec, width=600, legend="bottom")
>>> sv.inspect_figure(result).legend_entries
('Female', 'Male')
"""

import logging
import re
import warnings
from dataclasses import asdict, dataclass, replace
from itertools import cycle
from typing import Any, Iterable, Mapping, Optional

import numpy as np
import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
from plotly.subplots import make_subplots

from .._utils import (
    convert_dataframe,
    handle_nan,
    read_config,
    validate_columns_exist,
    validate_string_flag,
)
from ..grammar._utils import ordered_levels
from ..grammar.chart import ChartSpec
from ..types import NaturalNumber, VisualizationResult
from ._stats import bar_table, fit_smooth
from ._styles import LayerStyle, axis_titles, build_layer_styles, legend_title
from ._utils import (
    DEFAULT_PLOTLY_PARAMS,
    WRN_MSG_CATEGORIES_EXCEEDS_PALETTE_F,
    WRN_MSG_EMPTY_DATA_F,
    get_empty_plot,
    resolve_plotly_palette,
    save_plot,
)

logger = logging.getLogger(__name__)

ERR_MSG_UNSUPPORTED_METHOD_F = read_config("messages")["errors"]["unsupported_method_f"]
ERR_MSG_COLUMN_NOT_FOUND_F = read_config("messages")["errors"]["column_not_found_f"]
ERR_MSG_UNEXPECTED_TYPE_F = read_config("messages")["errors"]["unexpected_type_f"]
ERR_MSG_NOT_POSITIVE_PIXELS_F = read_config("messages")["errors"]["not_positive_pixels_f"]
ERR_MSG_UNSUPPORTED_LEGEND_TYPE_F = read_config("messages")["errors"][
    "unsupported_legend_type_f"
]
ERR_MSG_POSITION_CHANNEL_REQUIRED = read_config("messages")["errors"][
    "position_channel_required"
]
ERR_MSG_INTERACTIVE_RESULT_REQUIRED = read_config("messages")["errors"][
    "interactive_result_required"
]

SHAPE_SYMBOLS = (
    "circle", "square", "triangle-up", "diamond", "triangle-down", "cross", "x", "star",
)
BARMODES = {"stack": "stack", "fill": "stack", "dodge": "group"}
AXIS_KEY = re.compile(r"xaxis\d*")
DEFAULT_LEGEND_RANK = 1000


@dataclass(frozen=True)
class LegendPosition:
    """
    Legend anchor and offset, in Plotly paper coordinates.

    Parameters
    ----------
    x, y : float
        Position of the anchor point; ``(0, 0)`` is the bottom-left and
        ``(1, 1)`` the top-right corner of the plotting area. Values outside
        ``[0, 1]`` move the legend outside the plot.
    xanchor : {'auto', 'left', 'center', 'right'}, default='left'
    yanchor : {'auto', 'top', 'middle', 'bottom'}, default='top'
    orientation : {'v', 'h'}, default='v'
    """

    x: float = 1.02
    y: float = 1.0
    xanchor: str = "left"
    yanchor: str = "top"
    orientation: str = "v"

    def to_plotly(self) -> dict:
        return asdict(self)


LEGEND_PRESETS = {
    "right": LegendPosition(1.02, 1.0, "left", "top", "v"),
    "left": LegendPosition(-0.12, 1.0, "right", "top", "v"),
    "top": LegendPosition(0.5, 1.08, "center", "bottom", "h"),
    "bottom": LegendPosition(0.5, -0.15, "center", "top", "h"),
    "inside": LegendPosition(0.99, 0.99, "right", "top", "v"),
}


@dataclass(frozen=True)
class FigureSummary:
    """
    What a figure shows, read back from the figure itself.

    Attributes
    ----------
    layers : int
        Number of distinct layers the traces were generated from.
    legend_entries : tuple[str, ...]
        Distinct names shown in the legend, in order.
    panels : int
        Number of subplot panels.
    """

    layers: int
    legend_entries: tuple
    panels: int


def _legend_layout(legend: Any) -> dict:
    if legend is None:
        return {}
    if isinstance(legend, str):
        if legend == "none":
            return {"showlegend": False}
        validate_string_flag(
            legend,
            (*LEGEND_PRESETS, "none"),
            ERR_MSG_UNSUPPORTED_METHOD_F.format(legend, (*LEGEND_PRESETS, "none")),
        )
        return {"showlegend": True, "legend": LEGEND_PRESETS[legend].to_plotly()}
    if isinstance(legend, LegendPosition):
        return {"showlegend": True, "legend": legend.to_plotly()}
    if isinstance(legend, Mapping):
        return {"showlegend": True, "legend": dict(legend)}
    raise TypeError(ERR_MSG_UNSUPPORTED_LEGEND_TYPE_F.format(type(legend).__name__))


def _validate_size(name: str, value: Optional[int]):
    if value is not None and not isinstance(value, NaturalNumber):
        raise ValueError(ERR_MSG_NOT_POSITIVE_PIXELS_F.format(name))


class _LegendTracker:
    """Show each legend name once, in display order; later traces join its group."""

    def __init__(self, entries: Iterable[Any] = ()):
        self._rank = {}
        for level in entries:
            self._rank.setdefault(str(level), len(self._rank) + 1)
        self._seen = set()

    def seen(self, level: Any) -> bool:
        return str(level) in self._seen

    def kws(self, style: LayerStyle, level: Any) -> dict:
        if style.group is None or level is None:
            return {"name": style.geom, "showlegend": False}
        name = str(level)
        show = name not in self._seen
        self._seen.add(name)
        kws = {"name": name, "legendgroup": name, "showlegend": show}
        if name in self._rank:
            kws["legendrank"] = self._rank[name]
        return kws


def _bar_traces(df, style, legend):
    position = style.layer.params.get("position", "stack")
    table = bar_table(
        df,
        style.x_levels,
        group=style.group,
        group_levels=style.levels,
        weight="y" if style.geom == "col" else None,
        position=position,
    )
    x = [str(level) for level in style.x_levels]
    for column in table.columns:
        level = column if style.group is not None else None
        rows = df if level is None else df.loc[df[style.group] == level]
        yield go.Bar(
            x=x,
            y=table[column].tolist(),
            marker_color=style.color(level),
            opacity=style.opacity(rows),
            width=None if position == "dodge" else style.layer.params.get("width"),
            **legend.kws(style, level),
        )


def _point_traces(df, style, legend):
    literals = style.layer.literals
    symbols = dict(zip(style.shape_levels, cycle(SHAPE_SYMBOLS)))
    for level, rows in style.groups(df):
        marker = {"color": style.color(level)}
        if "size" in rows:
            marker["size"] = np.sqrt(style.scaled_sizes(rows["size"], 20, 200)).tolist()
        elif "size" in literals:
            marker["size"] = literals["size"]
        if "shape" in rows:
            marker["symbol"] = [symbols[v] for v in rows["shape"]]
        if "alpha" in rows:
            marker["opacity"] = style.mapped_alpha(rows["alpha"]).tolist()
        yield go.Scatter(
            x=rows["x"].tolist(),
            y=rows["y"].tolist(),
            mode="markers",
            marker=marker,
            opacity=style.alpha,
            text=rows["label"].astype(str).tolist() if "label" in rows else None,
            **legend.kws(style, level),
        )


def _line_traces(df, style, legend):
    width = style.layer.literals.get("size", 2)
    for level, rows in style.groups(df):
        rows = rows.sort_values("x")
        yield go.Scatter(
            x=rows["x"].tolist(),
            y=rows["y"].tolist(),
            mode="lines",
            line={"color": style.color(level), "width": width},
            opacity=style.opacity(rows),
            **legend.kws(style, level),
        )


def _smooth_traces(df, style, legend):
    params = style.layer.params
    width = style.layer.literals.get("size", 2)
    for level, rows in style.groups(df):
        x_domain, y_pred = fit_smooth(
            rows["x"],
            rows["y"],
            method=params.get("method", "loess"),
            span=params.get("span", 0.75),
            degree=params.get("degree", 2),
            dots=params.get("dots", 100),
        )
        if not x_domain.size:
            continue
        yield go.Scatter(
            x=x_domain.tolist(),
            y=y_pred.tolist(),
            mode="lines",
            line={"color": style.color(level), "width": width},
            opacity=style.opacity(rows),
            **legend.kws(style, level),
        )


def _histogram_traces(df, style, legend):
    edges = style.edges
    for level, rows in style.groups(df):
        yield go.Histogram(
            x=rows["x"].astype(float).tolist(),
            xbins={"start": edges[0], "end": edges[-1], "size": edges[1] - edges[0]},
            marker_color=style.color(level),
            opacity=style.opacity(rows),
            **legend.kws(style, level),
        )


def _distribution_traces(df, style, legend):
    trace_cls = go.Box if style.geom == "boxplot" else go.Violin
    for level, rows in style.groups(df):
        kws = legend.kws(style, level)
        color = style.color(level)
        yield trace_cls(
            x=rows["x"].astype(str).tolist() if "x" in rows else None,
            y=rows["y"].tolist(),
            marker_color=color,
            line_color=color,
            opacity=style.opacity(rows),
            offsetgroup=kws["name"] if style.group is not None else None,
            **kws,
        )


def _placeholder_traces(style, legend, drawn):
    """
    Empty traces keeping a layer and its legend levels in the figure.

    Levels whose rows were all dropped get a legend-only trace; a layer
    that drew nothing at all gets one hidden trace.
    """
    mode = "lines" if style.geom in ("line", "smooth") else "markers"
    levels = [level for level in style.levels if not legend.seen(level)]
    if not levels and not drawn:
        levels = [None]
    for level in levels:
        color = style.color(level)
        yield go.Scatter(
            x=[None],
            y=[None],
            mode=mode,
            marker={"color": color},
            line={"color": color},
            opacity=style.alpha,
            **legend.kws(style, level),
        )


_TRACE_BUILDERS = {
    "bar": _bar_traces,
    "col": _bar_traces,
    "point": _point_traces,
    "line": _line_traces,
    "smooth": _smooth_traces,
    "histogram": _histogram_traces,
    "boxplot": _distribution_traces,
    "violin": _distribution_traces,
}


def _layout_modes(styles: Iterable[LayerStyle]) -> dict:
    modes = {}
    for style in styles:
        if style.geom in ("bar", "col") and "barmode" not in modes:
            modes["barmode"] = BARMODES[style.layer.params.get("position", "stack")]
        elif style.geom == "histogram" and "barmode" not in modes:
            modes["barmode"] = "stack"
        elif style.geom == "boxplot" and style.group is not None:
            modes["boxmode"] = "group"
        elif style.geom == "violin" and style.group is not None:
            modes["violinmode"] = "group"
    return modes


def _match_axes(fig: go.Figure):
    """Link every panel's axes to the first panel's axes."""
    for key in fig.layout.to_plotly_json():
        match = re.fullmatch(r"([xy])axis(\d+)", key)
        if match and match.group(2) != "1":
            fig.layout[key].matches = match.group(1)


def _spec_figure(spec: ChartSpec, params: dict) -> go.Figure:
    layout = spec.layout()
    occupied = layout.occupied_cells
    fig = make_subplots(
        rows=layout.nrow,
        cols=layout.ncol,
        specs=[
            [{} if (r, c) in occupied else None for c in range(layout.ncol)]
            for r in range(layout.nrow)
        ],
        subplot_titles=(
            [panel.title for panel in layout.panels] if layout.kind != "none" else None
        ),
        horizontal_spacing=min(0.06, 0.9 / max(layout.ncol - 1, 1)),
        vertical_spacing=min(0.12, 0.9 / max(layout.nrow - 1, 1)),
    )
    styles = build_layer_styles(
        spec,
        nan_policy=params["nan_policy"],
        palette=params["palette"],
        engine="plotly",
        default_color=resolve_plotly_palette(None)[0],
    )
    legend = _LegendTracker(spec.legend_entries(None))
    drawn = set()
    for k, panel in enumerate(layout.panels):
        rows = layout.panel_data(spec.data, panel).index
        for style in styles:
            df = style.panel_frame(rows)
            if df.empty:
                continue
            for trace in _TRACE_BUILDERS[style.geom](df, style, legend):
                trace.meta = {"layer": style.layer.index, "panel": k}
                fig.add_trace(trace, row=panel.row + 1, col=panel.col + 1)
                drawn.add(style.layer.index)
            if style.x_levels:
                fig.update_xaxes(
                    categoryorder="array",
                    categoryarray=[str(level) for level in style.x_levels],
                    row=panel.row + 1,
                    col=panel.col + 1,
                )
    if layout.panels:
        first = layout.panels[0]
        for style in styles:
            drawn_any = style.layer.index in drawn
            for trace in _placeholder_traces(style, legend, drawn_any):
                trace.meta = {"layer": style.layer.index, "panel": 0}
                fig.add_trace(trace, row=first.row + 1, col=first.col + 1)
    fig.update_layout(**_layout_modes(styles))
    if params["share_axes"] and layout.n_panels > 1:
        _match_axes(fig)

    x_title, y_title = axis_titles(spec)
    bottom = {}
    for panel in layout.panels:
        bottom[panel.col] = max(bottom.get(panel.col, 0), panel.row)
    for col, row in bottom.items():
        fig.update_xaxes(title_text=x_title, row=row + 1, col=col + 1)
    for panel in layout.panels:
        if panel.col == 0:
            fig.update_yaxes(title_text=y_title, row=panel.row + 1, col=1)

    for scale in spec.scales:
        if scale.limits is None:
            continue
        if scale.channel == "x":
            fig.update_xaxes(range=list(scale.limits))
        elif scale.channel == "y":
            fig.update_yaxes(range=list(scale.limits))

    fig.update_layout(legend_title_text=legend_title(spec))
    if spec.labels.caption:
        fig.add_annotation(
            text=spec.labels.caption,
            x=1,
            y=-0.12,
            xref="paper",
            yref="paper",
            xanchor="right",
            showarrow=False,
            font={"size": 10, "color": "gray"},
        )
    return fig


def to_interactive(
    spec: ChartSpec,
    width: Optional[int] = None,
    height: Optional[int] = None,
    legend: Optional[str | LegendPosition | Mapping[str, Any]] = None,
    **kwargs,
) -> VisualizationResult:
    """
    Convert a chart specification into an interactive Plotly figure.

    Every layer becomes one trace per (color group, panel); traces carry
    ``meta={'layer': i, 'panel': k}``. Legend entries are merged across
    layers and panels via ``legendgroup``; layers with a literal color
    produce no legend entries.
    Layers without drawable rows keep one hidden empty trace and levels
    whose rows were all dropped keep a legend-only trace, so the figure
    always reports the layers and legend entries of `spec`.

    Parameters
    ----------
    spec : ChartSpec
        Specification to convert.
    width, height : int, optional
        Figure size in pixels (default 800 x 600).
    legend : str, LegendPosition or Mapping, optional
        Legend placement: a preset (``'right'``, ``'left'``, ``'top'``,
        ``'bottom'``, ``'inside'``, ``'none'``), a :class:`LegendPosition`
        or a raw Plotly legend mapping. Defaults to the theme's legend
        position.

    Other Parameters
    ----------------
    title : str, optional
        Defaults to the title set with ``labs``.
    template : str, default='plotly_white'
        Plotly template; defaults to the theme's.
    palette : str, optional
        Palette for discrete colors; defaults to the theme's.
    share_axes : bool, default=True
        Link the axes of all panels.
    nan_policy : {'drop', 'raise'}, default='drop'
    directory : str, optional
        If given, the figure is saved there as HTML.
    verbose : bool, default=False

    Returns
    -------
    VisualizationResult
        ``engine='plotly'``; ``extra_info`` holds ``'layers'``,
        ``'legend_entries'`` and ``'panels'`` read back from the figure.

    Raises
    ------
    TypeError
        If `spec` is not a ChartSpec or `legend` has an unsupported type.
    ValueError
        If `width`/`height` are not positive integers or `legend` names an
        unknown preset.

    Warns
    -----
    UserWarning
        If the chart data is empty; a placeholder figure is returned.
    """
    if not isinstance(spec, ChartSpec):
        raise TypeError(
            ERR_MSG_UNEXPECTED_TYPE_F.format("a ChartSpec", type(spec).__name__)
        )
    _validate_size("width", width)
    _validate_size("height", height)
    params = {
        **DEFAULT_PLOTLY_PARAMS,
        "title": spec.labels.title,
        "template": spec.theme.template or DEFAULT_PLOTLY_PARAMS["template"],
        "palette": spec.theme.palette,
        "share_axes": True,
        **kwargs,
    }
    params["width"] = width or params["width"]
    params["height"] = height or params["height"]
    if legend is None:
        legend = spec.theme.legend_position

    if not spec.data.empty:
        fig = _spec_figure(spec, params)
        fig.update_layout(template=params["template"])
    else:
        fig = get_empty_plot(figsize=(params["width"], params["height"]), engine="plotly")
        warnings.warn(WRN_MSG_EMPTY_DATA_F.format("to_interactive"), UserWarning)
    fig.update_layout(width=params["width"], height=params["height"])
    heading = params["title"]
    if heading and spec.labels.subtitle:
        heading = f"{heading}<br><sup>{spec.labels.subtitle}</sup>"
    if heading:
        fig.update_layout(title={"text": heading, "x": 0.5})
    fig.update_layout(**_legend_layout(legend))

    if params["directory"] is not None:
        save_plot(
            fig,
            directory=params["directory"],
            plot_name="chart",
            verbose=params["verbose"],
            engine="plotly",
        )
    summary = inspect_figure(fig)
    logger.debug(
        "Converted chart: %d layer(s), %d panel(s).", summary.layers, summary.panels
    )
    return VisualizationResult(
        figure=fig,
        engine="plotly",
        width=params["width"],
        height=params["height"],
        title=params["title"],
        extra_info=asdict(summary),
    )


def update_layout(
    result: VisualizationResult,
    width: Optional[int] = None,
    height: Optional[int] = None,
    legend: Optional[str | LegendPosition | Mapping[str, Any]] = None,
) -> VisualizationResult:
    """
    Apply layout overrides to an interactive result.

    A copy of the figure is modified; the traces (and so the data
    bindings) are left as they are.

    Parameters
    ----------
    result : VisualizationResult
        Output of :func:`to_interactive` or :func:`interactive_plot`.
    width, height : int, optional
        New size in pixels.
    legend : str, LegendPosition or Mapping, optional
        New legend placement (see :func:`to_interactive`).

    Returns
    -------
    VisualizationResult
        New result holding the updated figure.

    Raises
    ------
    TypeError
        If `result` does not hold a Plotly figure.
    """
    if not isinstance(result, VisualizationResult) or not isinstance(
        result.figure, go.Figure
    ):
        raise TypeError(ERR_MSG_INTERACTIVE_RESULT_REQUIRED)
    _validate_size("width", width)
    _validate_size("height", height)
    fig = go.Figure(result.figure)
    updates = {k: v for k, v in {"width": width, "height": height}.items() if v}
    fig.update_layout(**updates, **_legend_layout(legend))
    return replace(
        result,
        figure=fig,
        width=width or result.width,
        height=height or result.height,
    )


PX_GEOMS = ("box", "violin", "scatter", "histogram", "bar")


def interactive_plot(
    data: pd.DataFrame | Mapping[str, Iterable],
    geom: str,
    x: Optional[str] = None,
    y: Optional[str] = None,
    color: Optional[str] = None,
    **kwargs,
) -> VisualizationResult:
    """
    Build an interactive chart directly from a table and one geometry.

    Parameters
    ----------
    data : pandas.DataFrame, Mapping or LabeledDataset
        Source table.
    geom : {'box', 'violin', 'scatter', 'histogram', 'bar'}
        ``'bar'`` without `y` counts rows per `x` value.
    x, y : str, optional
        Position columns; at least one is required.
    color : str, optional
        Column splitting the marks into colored groups.

    Other Parameters
    ----------------
    title : str, optional
    width, height : int, default=800, 600
    template : str, default='plotly_white'
    palette : str or Sequence[str], optional
        Plotly qualitative palette name or explicit colors.
    opacity : float, optional
    nan_policy : {'drop', 'raise'}, default='drop'
        Applied to the columns used by the chart.
    directory : str, optional
        If given, the figure is saved there as HTML.
    verbose : bool, default=False
    plot_kws : dict, optional
        Extra keyword arguments for the ``plotly.express`` function. Keys in
        `plot_kws` take precedence.

    Returns
    -------
    VisualizationResult

    Raises
    ------
    ValueError
        If `geom` is unsupported, no position column is given or a column
        is missing.

    Warns
    -----
    UserWarning
        If the data is empty after NaN handling, or the palette has fewer
        colors than `color` has categories.
    """
    params = {**DEFAULT_PLOTLY_PARAMS, "opacity": None, **kwargs}
    validate_string_flag(geom, PX_GEOMS, ERR_MSG_UNSUPPORTED_METHOD_F.format(geom, PX_GEOMS))
    if x is None and y is None:
        raise ValueError(ERR_MSG_POSITION_CHANNEL_REQUIRED)
    df = convert_dataframe(data)
    columns = list(dict.fromkeys(c for c in (x, y, color) if c is not None))
    validate_columns_exist(df, columns, ERR_MSG_COLUMN_NOT_FOUND_F)
    df = handle_nan(
        df[columns],
        nan_policy=params["nan_policy"],
        supported_policy=("drop", "raise"),
        data_name="data",
    )

    plot_kws_merged = {
        "template": params["template"],
        "width": params["width"],
        "height": params["height"],
        "category_orders": {
            c: ordered_levels(df[c])
            for c in (x, color)
            if c is not None and not pd.api.types.is_numeric_dtype(df[c])
        },
    }
    discrete_color = color is not None and not pd.api.types.is_numeric_dtype(df[color])
    if discrete_color:
        plot_kws_merged["color_discrete_sequence"] = resolve_plotly_palette(
            params["palette"]
        )
        n_categories = df[color].nunique()
        if len(plot_kws_merged["color_discrete_sequence"]) < n_categories:
            warnings.warn(
                WRN_MSG_CATEGORIES_EXCEEDS_PALETTE_F.format(
                    n_categories, len(plot_kws_merged["color_discrete_sequence"])
                ),
                UserWarning,
            )
    plot_kws_merged.update(params["plot_kws"] or {})

    if not df.empty:
        if geom == "bar" and y is None:
            plot_func = px.histogram
        else:
            plot_func = getattr(px, geom)
        fig = plot_func(df, x=x, y=y, color=color, **plot_kws_merged)
        fig.update_traces(meta={"layer": 0, "panel": 0})
        if params["opacity"] is not None:
            fig.update_traces(opacity=params["opacity"])
    else:
        fig = get_empty_plot(figsize=(params["width"], params["height"]), engine="plotly")
        warnings.warn(WRN_MSG_EMPTY_DATA_F.format("interactive_plot"), UserWarning)
    if params["title"] is not None:
        fig.update_layout(title={"text": params["title"], "x": 0.5})
    if params["directory"] is not None:
        save_plot(
            fig,
            directory=params["directory"],
            plot_name=f"{geom}plot",
            verbose=params["verbose"],
            engine="plotly",
        )
    return VisualizationResult(
        figure=fig,
        engine="plotly",
        width=params["width"],
        height=params["height"],
        title=params["title"],
        extra_info=asdict(inspect_figure(fig)),
    )


def inspect_figure(figure: go.Figure | VisualizationResult) -> FigureSummary:
    """
    Read layers, legend entries and panels back from a Plotly figure.

    Traces tagged with ``meta={'layer': i}`` are counted per layer; any
    other trace counts as a layer of its own. Legend entries are the
    distinct names of traces shown in the legend, ordered by
    ``legendrank`` and then by trace order. Panels are the x axes of the
    layout.

    Raises
    ------
    TypeError
        If `figure` is not a Plotly figure (or a result holding one).
    """
    if isinstance(figure, VisualizationResult):
        figure = figure.figure
    if not isinstance(figure, go.Figure):
        raise TypeError(
            ERR_MSG_UNEXPECTED_TYPE_F.format("a plotly Figure", type(figure).__name__)
        )
    layers = set()
    entries = {}
    for i, trace in enumerate(figure.data):
        meta = trace.meta
        if isinstance(meta, Mapping) and "layer" in meta:
            layers.add(meta["layer"])
        else:
            layers.add(("trace", i))
        if trace.showlegend is not False and trace.name and trace.name not in entries:
            rank = trace.legendrank
            entries[trace.name] = DEFAULT_LEGEND_RANK if rank is None else rank
    entries = sorted(entries, key=entries.get)
    panels = sum(1 for key in figure.layout.to_plotly_json() if AXIS_KEY.fullmatch(key))
    return FigureSummary(layers=len(layers), legend_entries=tuple(entries), panels=panels)
