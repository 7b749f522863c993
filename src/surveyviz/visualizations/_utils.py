"""
Internal infrastructure shared by the surveyviz renderers.

Handles plot saving, temporary styling, placeholder figures for empty data
and color assignment for discrete levels, so that the public rendering
functions stay focused on drawing.

Functions
---------
save_plot(fig, directory, overwrite, plot_name, **kwargs)
    Save a Matplotlib or Plotly figure to disk with logging.
get_empty_plot(message, figsize, engine)
    Placeholder figure for instances where data is unavailable.
temp_plot_theme(palette, style)
    Context manager temporarily applying Seaborn style and palette.
resolve_plotly_palette(palette)
    Plotly qualitative palette by name (or a custom sequence).
resolve_palette(levels, scale, palette, engine)
    ``{level: color}`` for the levels bound to a color channel.

Notes
-----
This module is internal; it is not part of the public API.
"""

import contextlib
import logging
import warnings
from contextlib import ExitStack, contextmanager
from itertools import cycle
from pathlib import Path
from typing import Any, Optional, Sequence

import matplotlib.pyplot as plt
import plotly.express as px
import seaborn as sns
from plotly.graph_objects import Figure as PlotlyFigure

from .._utils import read_config, temp_log_level
from ..grammar.scales import Scale

logger = logging.getLogger(__name__)

DEFAULT_MPL_PLOT_PARAMS = {
    "title": None,
    "style": None,
    "palette": None,
    "figsize": (10, 6),
    "directory": None,
    "nan_policy": "drop",
    "verbose": False,
    "plot_kws": {},
}

DEFAULT_PLOTLY_PARAMS = {
    "title": None,
    "width": 800,
    "height": 600,
    "template": "plotly_white",
    "palette": None,
    "directory": None,
    "nan_policy": "drop",
    "verbose": False,
    "plot_kws": {},
}

SUPPORTED_FORMATS = {
    "matplotlib": {"png", "jpg", "jpeg", "svg", "pdf", "eps", "ps", "tif", "tiff", "webp"},
    "plotly": {"html"},
}

WRN_MSG_CATEGORIES_EXCEEDS_PALETTE_F = read_config("messages")["warns"][
    "Visualizations"
]["categories_exceeds_palette_f"]
WRN_MSG_EMPTY_DATA_F = read_config("messages")["warns"]["Visualizations"][
    "empty_data_f"
]


def validate_file_format(ext: str, engine: str):
    """
    Validate that a file extension is supported by `engine`.

    Raises
    ------
    ValueError
        If the extension is not supported.
    """
    if ext not in SUPPORTED_FORMATS[engine]:
        supported = ", ".join(sorted(SUPPORTED_FORMATS[engine]))
        raise ValueError(
            f"Unsupported file format '{ext}' for engine '{engine}'. "
            f"Supported formats are: {supported}."
        )


def resolve_plot_path(directory: str | Path, plot_name: str, engine: str):
    """
    Resolve the output file path and its extension.

    A path without a suffix is treated as a directory; the file is then
    named ``{plot_name}.png`` (Matplotlib) or ``{plot_name}.html`` (Plotly).

    Returns
    -------
    tuple[Path, str]
        Absolute file path and extension without the leading dot.
    """
    path = Path(directory).absolute()
    ext = path.suffix.lower()
    if ext == "":
        path = path / (f"{plot_name}.html" if engine == "plotly" else f"{plot_name}.png")
        ext = path.suffix.lower()
    return path, ext[1:]


def save_plot(
    fig: plt.Figure | PlotlyFigure,
    directory: str | Path = ".",
    overwrite: bool = True,
    plot_name: str = "plot",
    **kwargs,
) -> Path:
    """
    Save a Matplotlib or Plotly figure to disk.

    Parameters
    ----------
    fig : matplotlib.figure.Figure or plotly.graph_objects.Figure
        Figure to save. Must match `engine`.
    directory : str or Path, default="."
        Target file path or directory. With an extension (``.png``,
        ``.html``...) the figure is written to that file; otherwise to
        ``{plot_name}.png`` / ``{plot_name}.html`` inside the directory.
        Missing parent directories are created.
    overwrite : bool, default=True
        If False and the file exists, FileExistsError is raised.
    plot_name : str, default="plot"
        Name used in log messages and default filenames. Cannot be empty.
    engine : {'matplotlib', 'plotly'}, default='matplotlib'
        Plotting engine the figure belongs to.
    verbose : bool, default=False
        If True, the successful save is logged at INFO level.

    Returns
    -------
    pathlib.Path
        Path of the written file.

    Raises
    ------
    TypeError
        If `fig` is not a Matplotlib or Plotly figure, or `directory` is not
        a string or path.
    ValueError
        If `plot_name` or `directory` is empty, the format is unsupported or
        `engine` is unknown.
    FileExistsError
        If the file exists and `overwrite` is False.
    PermissionError
        If the target location is not writable.
    """
    engine = kwargs.get("engine", "matplotlib")
    log_context = (
        temp_log_level(logger, logging.INFO)
        if kwargs.get("verbose", False)
        else contextlib.nullcontext()
    )
    if not isinstance(fig, (plt.Figure, PlotlyFigure)):
        logger.error(
            "Failed to save '%s' to %s: expected matplotlib or plotly Figure, got %s.",
            plot_name,
            directory,
            type(fig).__name__,
        )
        raise TypeError(
            f"Expected matplotlib or plotly Figure object, got {type(fig).__name__}."
        )
    if not isinstance(directory, (str, Path)):
        logger.error(
            "Invalid type for argument 'directory'. Expected str, but received %s.",
            type(directory).__name__,
        )
        raise TypeError(
            "Invalid type for argument 'directory'. Expected str or pathlib.Path, "
            f"but received {type(directory).__name__}."
        )
    if not str(directory).strip():
        err_msg = "Directory path must not be empty."
        logger.error(err_msg)
        raise ValueError(err_msg)
    if plot_name == "":
        err_msg = "The 'plot_name' cannot be empty."
        logger.error(err_msg)
        raise ValueError(err_msg)
    if engine not in SUPPORTED_FORMATS:
        raise ValueError(
            f"Invalid 'engine' parameter: {engine}. "
            "Supported engines are 'matplotlib' and 'plotly'."
        )

    try:
        path, file_format = resolve_plot_path(directory, plot_name, engine)
        validate_file_format(file_format, engine)
        if not path.parent.exists():
            path.parent.mkdir(parents=True)
            logger.warning("Directory '%s' was created automatically.", path.parent)
        if path.exists() and not overwrite:
            logger.error(
                "Attempted to save plot to existing path without 'overwrite=True'. "
                "Path: %s",
                path,
            )
            raise FileExistsError(
                "Attempted to save plot to existing path without "
                f"'overwrite=True'. Path: {path}"
            )
        if engine == "matplotlib":
            fig.savefig(path, bbox_inches="tight")
        else:
            fig.write_html(path)
        with log_context:
            logger.info("'%s' saved to %s", plot_name, path)
    except PermissionError as e:
        logger.error("Permission denied saving '%s' to %s: %s", plot_name, directory, e)
        raise
    except Exception as e:
        logger.error("Failed to save '%s' to %s: %s", plot_name, directory, e)
        raise
    return path


def get_empty_plot(
    message: str = "No data available for visualization",
    figsize: Sequence[float] = (10, 6),
    engine: str = "matplotlib",
):
    """
    Generate a placeholder plot with a centered message.

    Parameters
    ----------
    message : str
        Text displayed at the center of the plot.
    figsize : Sequence[float], default=(10, 6)
        Inches for Matplotlib, pixels (width, height) for Plotly.
    engine : {'matplotlib', 'plotly'}, default='matplotlib'

    Returns
    -------
    tuple[Figure, Axes] or plotly.graph_objects.Figure
    """
    if engine == "matplotlib":
        fig, ax = plt.subplots(figsize=figsize)
        ax.text(
            0.5,
            0.5,
            message,
            ha="center",
            va="center",
            transform=ax.transAxes,
            fontsize=12,
            color="gray",
            style="italic",
        )
        return fig, ax
    fig = PlotlyFigure()
    fig.add_annotation(
        text=message,
        x=0.5,
        y=0.5,
        xref="paper",
        yref="paper",
        showarrow=False,
        font={"size": 16, "color": "gray"},
    )
    fig.update_layout(
        template="simple_white",
        xaxis={"visible": False},
        yaxis={"visible": False},
        width=figsize[0],
        height=figsize[1],
    )
    return fig


@contextmanager
def temp_plot_theme(palette: Optional[str] = None, style: Optional[str] = None):
    """
    Temporarily apply a Seaborn style and color palette.

    Both settings are restored when the block exits.

    Examples
    --------
    >>> with temp_plot_theme(style="whitegrid", palette="Set2"):
    ...     pass
    """
    contexts = []
    if style is not None:
        contexts.append(sns.axes_style(style))
    if palette is not None:
        contexts.append(sns.color_palette(palette))
    if not contexts:
        contexts.append(contextlib.nullcontext())
    with ExitStack() as stack:
        for ctx in contexts:
            stack.enter_context(ctx)
        yield


def resolve_plotly_palette(palette: Optional[str | Sequence[str]]) -> list[str]:
    """
    Resolve a Plotly qualitative palette.

    Parameters
    ----------
    palette : str, Sequence[str] or None
        Name in ``plotly.express.colors.qualitative`` or explicit colors.
        ``None`` returns the default ``Plotly`` palette.

    Raises
    ------
    ValueError
        If `palette` names an unknown palette.
    """
    if palette is None:
        return list(px.colors.qualitative.Plotly)
    if isinstance(palette, str):
        try:
            return list(getattr(px.colors.qualitative, palette))
        except AttributeError as exc:
            raise ValueError(f"Unknown categorical palette {palette} for Plotly") from exc
    return list(palette)


def _base_colors(palette: Optional[str | Sequence[str]], engine: str) -> list[str]:
    if palette is None:
        if engine == "plotly":
            return resolve_plotly_palette(None)
        return list(plt.rcParams["axes.prop_cycle"].by_key()["color"])
    if engine == "plotly" and isinstance(palette, str):
        if hasattr(px.colors.qualitative, palette):
            return resolve_plotly_palette(palette)
    return list(sns.color_palette(palette).as_hex())


def resolve_palette(
    levels: Sequence[Any],
    scale: Optional[Scale] = None,
    palette: Optional[str | Sequence[str]] = None,
    engine: str = "matplotlib",
) -> dict:
    """
    Assign a color to each discrete level.

    Parameters
    ----------
    levels : Sequence
        Levels in display order.
    scale : Scale, optional
        Manual scale; its colors take precedence.
    palette : str or Sequence[str], optional
        Theme palette (Seaborn name, Plotly qualitative name or colors).
    engine : {'matplotlib', 'plotly'}, default='matplotlib'
        Selects the default palette when `palette` is None.

    Returns
    -------
    dict
        ``{level: color}`` for every level. Colors are reused (with a
        UserWarning) when there are more levels than colors.
    """
    colors = scale.palette_for(levels) if scale is not None else {}
    remaining = [level for level in levels if level not in colors]
    if not remaining:
        return colors
    base = _base_colors(palette, engine)
    if len(remaining) > len(base):
        warnings.warn(
            WRN_MSG_CATEGORIES_EXCEEDS_PALETTE_F.format(len(remaining), len(base)),
            UserWarning,
        )
    colors.update(zip(remaining, cycle(base)))
    return {level: colors[level] for level in levels}
