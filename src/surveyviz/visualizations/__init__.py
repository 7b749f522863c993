"""
Rendering of chart specifications.

Functions
---------
render(spec, **kwargs)
    Draw a chart specification with Matplotlib and Seaborn.
to_interactive(spec, width=None, height=None, legend=None, **kwargs)
    Convert a chart specification into an interactive Plotly figure.
update_layout(result, width=None, height=None, legend=None)
    Apply size and legend overrides to an interactive result.
interactive_plot(data, geom, x=None, y=None, color=None, **kwargs)
    Interactive chart straight from a table and one geometry.
inspect_figure(figure)
    Layers, legend entries and panels of a Plotly figure.

Classes
-------
LegendPosition, FigureSummary
"""

from .interactive import (
    FigureSummary,
    LegendPosition,
    inspect_figure,
    interactive_plot,
    to_interactive,
    update_layout,
)
from .static import render

__all__ = [
    "render",
    "to_interactive",
    "update_layout",
    "interactive_plot",
    "inspect_figure",
    "LegendPosition",
    "FigureSummary",
]
