"""
Static rendering of chart specifications with Matplotlib and Seaborn.

Each facet panel is drawn on its own Axes; layers are drawn in order on
every panel with the rows that belong to it. A single legend is produced
per figure and lists the levels of the columns bound to ``color`` or
``fill``. Literal colors never appear in the legend.

Functions
---------
render(spec, **kwargs)
    Draw a :class:`~surveyviz.grammar.ChartSpec` and return a
    :class:`~surveyviz.types.VisualizationResult`.

Examples
--------
>>> import pandas as pd
>>> import surveyviz as sv
>>> df = pd.DataFrame({"Gender": ["Male", "Female", "Female"],
...                    "Race": ["White", "Black", "White"]})
>>> spec = sv.chart(df, sv.aes(x="Race", fill="Gender")) + sv.geom_bar()
>>> result = sv.render(spec, title="Respondents by race")
>>> result.extra_info["legend_entries"]
['Female', 'Male']
"""

import logging
import warnings
from itertools import cycle

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns
from matplotlib.lines import Line2D
from matplotlib.patches import Patch

from .._utils import read_config
from ..grammar.chart import ChartSpec
from ..types import VisualizationResult
from ._stats import bar_table, fit_smooth
from ._styles import LayerStyle, axis_titles, build_layer_styles, legend_title
from ._utils import (
    DEFAULT_MPL_PLOT_PARAMS,
    WRN_MSG_EMPTY_DATA_F,
    get_empty_plot,
    save_plot,
    temp_plot_theme,
)

logger = logging.getLogger(__name__)

ERR_MSG_UNEXPECTED_TYPE_F = read_config("messages")["errors"]["unexpected_type_f"]
ERR_MSG_UNSUPPORTED_LEGEND_POSITION_F = read_config("messages")["errors"][
    "unsupported_legend_position_f"
]

SHAPE_MARKERS = ("o", "s", "^", "D", "v", "P", "X", "*")
LEGEND_LOCATIONS = {
    "right": "outside right center",
    "left": "outside left center",
    "top": "outside upper center",
    "bottom": "outside lower center",
}


def _draw_bars(ax, df: pd.DataFrame, style: LayerStyle):
    position = style.layer.params.get("position", "stack")
    width = style.layer.params.get("width", 0.8)
    table = bar_table(
        df,
        style.x_levels,
        group=style.group,
        group_levels=style.levels,
        weight="y" if style.geom == "col" else None,
        position=position,
    )
    positions = np.arange(len(style.x_levels))
    bottom = np.zeros(len(positions))
    n_groups = len(table.columns)
    for j, column in enumerate(table.columns):
        level = column if style.group is not None else None
        rows = df if level is None else df.loc[df[style.group] == level]
        heights = table[column].to_numpy()
        if position == "dodge" and n_groups > 1:
            offset = (j - (n_groups - 1) / 2) * width / n_groups
            ax.bar(
                positions + offset,
                heights,
                width=width / n_groups,
                color=style.color(level),
                alpha=style.opacity(rows),
            )
        else:
            ax.bar(
                positions,
                heights,
                width=width,
                bottom=bottom,
                color=style.color(level),
                alpha=style.opacity(rows),
            )
            bottom = bottom + heights
    ax.set_xticks(positions)
    ax.set_xticklabels([str(level) for level in style.x_levels])


def _draw_points(ax, df: pd.DataFrame, style: LayerStyle):
    literals = style.layer.literals
    markers = dict(zip(style.shape_levels, cycle(SHAPE_MARKERS)))
    for level, rows in style.groups(df):
        kws = {"color": style.color(level), "marker": literals.get("shape", "o")}
        sizes = (
            style.scaled_sizes(rows["size"], 20, 200)
            if "size" in rows
            else literals.get("size", 36)
        )
        alpha = style.mapped_alpha(rows["alpha"]) if "alpha" in rows else style.alpha
        if "shape" not in rows:
            ax.scatter(rows["x"], rows["y"], s=sizes, alpha=alpha, **kws)
        else:
            for shape, marker in markers.items():
                mask = (rows["shape"] == shape).to_numpy()
                if not mask.any():
                    continue
                ax.scatter(
                    rows["x"][mask],
                    rows["y"][mask],
                    s=sizes[mask] if np.ndim(sizes) else sizes,
                    alpha=alpha[mask] if np.ndim(alpha) else alpha,
                    **{**kws, "marker": marker},
                )
        if "label" in rows:
            for x, y, text in zip(rows["x"], rows["y"], rows["label"]):
                ax.annotate(
                    str(text), (x, y), xytext=(3, 3), textcoords="offset points",
                    fontsize=8,
                )


def _draw_lines(ax, df: pd.DataFrame, style: LayerStyle):
    linewidth = style.layer.literals.get("size", 1.5)
    for level, rows in style.groups(df):
        rows = rows.sort_values("x")
        ax.plot(
            rows["x"], rows["y"], color=style.color(level), alpha=style.opacity(rows),
            linewidth=linewidth,
        )


def _draw_smooth(ax, df: pd.DataFrame, style: LayerStyle):
    params = style.layer.params
    linewidth = style.layer.literals.get("size", 2)
    for level, rows in style.groups(df):
        x_domain, y_pred = fit_smooth(
            rows["x"],
            rows["y"],
            method=params.get("method", "loess"),
            span=params.get("span", 0.75),
            degree=params.get("degree", 2),
            dots=params.get("dots", 100),
        )
        if x_domain.size:
            ax.plot(
                x_domain, y_pred, color=style.color(level), alpha=style.opacity(rows),
                linewidth=linewidth,
            )


def _draw_histogram(ax, df: pd.DataFrame, style: LayerStyle):
    groups = list(style.groups(df))
    ax.hist(
        [rows["x"].astype(float).to_numpy() for _, rows in groups],
        bins=style.edges,
        stacked=True,
        color=[style.color(level) for level, _ in groups],
        alpha=style.opacity(df),
        edgecolor="white",
    )


def _draw_distribution(ax, df: pd.DataFrame, style: LayerStyle):
    plot_func = sns.boxplot if style.geom == "boxplot" else sns.violinplot
    kws = {"data": df, "y": "y", "ax": ax}
    if "x" in df:
        kws.update(x="x", order=style.x_levels)
    if style.group is not None:
        kws.update(
            hue=style.group,
            hue_order=[lvl for lvl in style.levels if (df[style.group] == lvl).any()],
            palette=style.colors,
            legend=False,
        )
    else:
        kws["color"] = style.color()
    n_patches, n_collections = len(ax.patches), len(ax.collections)
    plot_func(**kws)
    opacity = style.opacity(df)
    if opacity is not None:
        for artist in [*ax.patches[n_patches:], *ax.collections[n_collections:]]:
            artist.set_alpha(opacity)


_DRAWERS = {
    "bar": _draw_bars,
    "col": _draw_bars,
    "point": _draw_points,
    "line": _draw_lines,
    "smooth": _draw_smooth,
    "histogram": _draw_histogram,
    "boxplot": _draw_distribution,
    "violin": _draw_distribution,
}


def _legend_handles(styles: list[LayerStyle]) -> list:
    handles = {}
    for style in styles:
        if style.group is None:
            continue
        for level in style.levels:
            label = str(level)
            if label in handles:
                continue
            color = style.colors[level]
            if style.geom == "point":
                handles[label] = Line2D(
                    [], [], marker="o", linestyle="", color=color, label=label
                )
            elif style.geom in ("line", "smooth"):
                handles[label] = Line2D([], [], color=color, label=label)
            else:
                handles[label] = Patch(facecolor=color, label=label)
    return list(handles.values())


def _apply_labels(fig, axes: list, spec: ChartSpec, title: str):
    x_title, y_title = axis_titles(spec)
    if len(axes) == 1:
        axes[0].set_xlabel(x_title)
        axes[0].set_ylabel(y_title)
    else:
        fig.supxlabel(x_title)
        fig.supylabel(y_title)
    heading = "\n".join(t for t in (title, spec.labels.subtitle) if t)
    if heading:
        fig.suptitle(heading)
    if spec.labels.caption:
        fig.text(
            0.99, 0.005, spec.labels.caption, ha="right", va="bottom",
            fontsize=9, color="gray",
        )


def _draw_chart(spec: ChartSpec, params: dict):
    layout = spec.layout()
    fig, grid = plt.subplots(
        layout.nrow,
        layout.ncol,
        figsize=params["figsize"],
        squeeze=False,
        sharex=params["sharex"],
        sharey=params["sharey"],
        layout="constrained",
        **(params["plot_kws"] or {}),
    )
    styles = build_layer_styles(
        spec,
        nan_policy=params["nan_policy"],
        palette=params["palette"],
        engine="matplotlib",
        default_color=plt.rcParams["axes.prop_cycle"].by_key()["color"][0],
    )
    panel_axes = []
    for panel in layout.panels:
        ax = grid[panel.row][panel.col]
        rows = layout.panel_data(spec.data, panel).index
        for style in styles:
            df = style.panel_frame(rows)
            if not df.empty:
                _DRAWERS[style.geom](ax, df, style)
        ax.set_xlabel("")
        ax.set_ylabel("")
        if layout.kind != "none":
            ax.set_title(panel.title, fontsize=10)
        panel_axes.append(ax)

    for r in range(layout.nrow):
        for c in range(layout.ncol):
            if (r, c) not in layout.occupied_cells:
                grid[r][c].set_visible(False)
                if r > 0:
                    grid[r - 1][c].xaxis.set_tick_params(labelbottom=True)

    for scale in spec.scales:
        if scale.limits is None:
            continue
        for ax in panel_axes:
            if scale.channel == "x":
                ax.set_xlim(*scale.limits)
            elif scale.channel == "y":
                ax.set_ylim(*scale.limits)

    handles = _legend_handles(styles)
    position = params["legend_position"]
    if handles and position != "none":
        fig.legend(
            handles=handles,
            title=legend_title(spec),
            loc=LEGEND_LOCATIONS[position],
            frameon=False,
        )
    if not panel_axes:
        panel_axes = [grid[0][0]]
    _apply_labels(fig, panel_axes, spec, params["title"])
    return fig, panel_axes, layout


def render(spec: ChartSpec, **kwargs) -> VisualizationResult:
    """
    Draw a chart specification with Matplotlib.

    Parameters
    ----------
    spec : ChartSpec
        Specification built with :func:`surveyviz.chart` and ``+``.

    Other Parameters
    ----------------
    title : str, optional
        Figure title. Defaults to the title set with ``labs``.
    figsize : tuple[float, float], optional
        Figure size in inches. Defaults to the theme's, else ``(10, 6)``.
    style : str, optional
        Seaborn style. Defaults to the theme's.
    palette : str, optional
        Seaborn palette for discrete colors. Defaults to the theme's.
    legend_position : {'right', 'left', 'top', 'bottom', 'none'}, optional
        Defaults to the theme's, else ``'right'``.
    sharex, sharey : bool, default=True
        Whether panels share axis ranges.
    nan_policy : {'drop', 'raise'}, default='drop'
        Rows with missing values in a layer's mapped columns are dropped
        (with a logged warning) or raise ValueError.
    directory : str, optional
        If given, the figure is saved there (see ``save_plot``).
    verbose : bool, default=False
        Enables info-level logging.
    plot_kws : dict, optional
        Extra keyword arguments for ``matplotlib.pyplot.subplots``.

    Returns
    -------
    VisualizationResult
        ``axes`` holds the Axes of every panel in reading order (a single
        Axes for one panel). ``extra_info`` holds ``'layers'``,
        ``'legend_entries'`` and ``'panels'``.

    Raises
    ------
    TypeError
        If `spec` is not a ChartSpec.
    ValueError
        With ``nan_policy='raise'`` when a layer has missing values.

    Warns
    -----
    UserWarning
        If the chart data is empty; an empty placeholder figure is returned.
    """
    if not isinstance(spec, ChartSpec):
        raise TypeError(
            ERR_MSG_UNEXPECTED_TYPE_F.format("a ChartSpec", type(spec).__name__)
        )
    params = {
        **DEFAULT_MPL_PLOT_PARAMS,
        "title": spec.labels.title,
        "style": spec.theme.style,
        "palette": spec.theme.palette,
        "figsize": spec.theme.figsize or DEFAULT_MPL_PLOT_PARAMS["figsize"],
        "legend_position": spec.theme.legend_position or "right",
        "sharex": True,
        "sharey": True,
        **kwargs,
    }
    if params["legend_position"] not in (*LEGEND_LOCATIONS, "none"):
        raise ValueError(
            ERR_MSG_UNSUPPORTED_LEGEND_POSITION_F.format(
                params["legend_position"], (*LEGEND_LOCATIONS, "none")
            )
        )

    with temp_plot_theme(palette=params["palette"], style=params["style"]):
        if not spec.data.empty:
            fig, axes, layout = _draw_chart(spec, params)
            n_panels = layout.n_panels
        else:
            fig, ax = get_empty_plot(figsize=params["figsize"])
            warnings.warn(WRN_MSG_EMPTY_DATA_F.format("render"), UserWarning)
            if params["title"]:
                ax.set_title(params["title"])
            axes = [ax]
            n_panels = 0
        if params["directory"] is not None:
            save_plot(
                fig,
                directory=params["directory"],
                plot_name="chart",
                verbose=params["verbose"],
            )
    logger.debug("Rendered chart with %d layer(s) on %d panel(s).", spec.n_layers, n_panels)
    return VisualizationResult(
        figure=fig,
        axes=axes[0] if len(axes) == 1 else axes,
        engine="matplotlib",
        width=params["figsize"][0],
        height=params["figsize"][1],
        title=params["title"],
        extra_info={
            "layers": spec.n_layers,
            "legend_entries": spec.legend_entries(None),
            "panels": n_panels,
        },
    )
