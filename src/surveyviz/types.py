"""
Shared result types used throughout surveyviz.

Classes
-------
VisualizationResult
    Container object returned by every rendering function. Stores the
    generated figure, axes (if applicable), engine metadata, sizing
    information, and arbitrary additional details.
NaturalNumber
    Type descriptor enabling `isinstance(x, NaturalNumber)` checks for
    positive integers (natural numbers).
TableResult
    Container for tabular summaries (frequency tables, descriptives).

Examples
--------
>>> from surveyviz.types import NaturalNumber
>>> isinstance(5, NaturalNumber)
True
>>> isinstance(0, NaturalNumber)
False
"""

from numbers import Number
from dataclasses import dataclass, field
from typing import Optional, Union

import pandas as pd
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from plotly.graph_objects import Figure as PlotlyFigure


class _NaturalNumberMeta(type):
    """Metaclass to enable isinstance checks for natural numbers."""

    def __instancecheck__(cls, instance):
        """Return True if instance is a positive integer."""
        return (
            isinstance(instance, Number)
            and not isinstance(instance, bool)
            and instance > 0
            and instance == int(instance)
        )

    def __repr__(cls):
        return "NaturalNumber"


# pylint: disable=R0903
class NaturalNumber(metaclass=_NaturalNumberMeta):
    """
    Type descriptor for natural numbers (positive integers).

    `isinstance(value, NaturalNumber)` is True if and only if `value` is
    numeric, strictly greater than zero and a whole number. Floats are
    accepted only if they are exact integers, e.g. ``2.0``. Booleans are
    rejected.
    """


@dataclass
class VisualizationResult:
    """
    Standardized container for the output of all surveyviz renderers.

    Parameters
    ----------
    figure : matplotlib.figure.Figure or plotly.graph_objects.Figure
        The figure object produced by the renderer.
    axes : matplotlib.axes.Axes, sequence of Axes or None, default=None
        For Matplotlib, the axes of every facet panel in reading order
        (a single Axes when the chart has one panel). ``None`` for Plotly.
    engine : {'matplotlib', 'plotly'}
        Name of the plotting engine used to generate the visualization.
    width : float or None
        Figure width: inches for Matplotlib, pixels for Plotly.
    height : float or None
        Figure height: inches for Matplotlib, pixels for Plotly.
    title : str or None
        Title of the generated visualization.
    extra_info : dict or None
        Optional metadata. Renderers of chart specifications store
        ``'layers'``, ``'legend_entries'`` and ``'panels'`` here.

    Examples
    --------
    >>> import surveyviz as sv
    >>> spec = sv.chart({"x": [1, 2], "y": [3, 4]}, sv.aes("x", "y")) + sv.geom_point()
    >>> result = sv.render(spec, title="Demo")
    >>> result.engine
    'matplotlib'
    """

    figure: Union[Figure, PlotlyFigure]
    axes: Optional[Axes] = None
    engine: str = "matplotlib"
    width: Optional[float] = None
    height: Optional[float] = None
    title: Optional[str] = None
    extra_info: dict = None


@dataclass
class TableResult:
    """
    Container for tabular results such as frequency tables.

    Parameters
    ----------
    table : pandas.DataFrame
        Tabular data with a flat index and flat columns.
    title : str, optional
        Short human-readable title describing the table contents.
    description : str, optional
        Longer description of the table.
    render_extra : dict, optional
        Rendering hints, e.g. ``show_index``.
    """

    table: pd.DataFrame
    title: Optional[str] = None
    description: Optional[str] = None
    render_extra: Optional[dict] = field(default_factory=dict)
