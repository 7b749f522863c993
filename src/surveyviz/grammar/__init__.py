"""
Grammar-of-graphics chart specifications.

A chart is described declaratively: a table, a global aesthetic mapping,
and a sequence of components combined with ``+``. Specifications carry no
drawing state; they are rendered by :mod:`surveyviz.visualizations`.

Functions
---------
aes(x=None, y=None, **channels)
    Map columns to visual channels.
chart(data, mapping=None)
    Start a chart specification.
geom_bar, geom_col, geom_point, geom_line, geom_smooth, geom_histogram,
geom_boxplot, geom_violin
    Geometry layers.
facet_wrap(facets, nrow=None, ncol=None), facet_grid(rows, cols=None)
    Small multiples.
scale_color_manual(values), scale_fill_manual(values), xlim(...), ylim(...)
    Scale overrides.
labs(...), theme(...)
    Titles and rendering hints.

Classes
-------
Aes, Layer, ResolvedLayer, Scale, FacetWrap, FacetGrid, FacetLayout, Panel,
ChartSpec, Labels, Theme
"""

from .aes import CHANNELS, Aes, aes
from .chart import ChartSpec, Labels, Theme, chart, labs, theme
from .facets import (
    FacetGrid,
    FacetLayout,
    FacetWrap,
    Panel,
    compute_layout,
    facet_grid,
    facet_wrap,
)
from .layers import (
    GEOMS,
    Layer,
    ResolvedLayer,
    geom_bar,
    geom_boxplot,
    geom_col,
    geom_histogram,
    geom_line,
    geom_point,
    geom_smooth,
    geom_violin,
)
from .scales import Scale, scale_color_manual, scale_fill_manual, xlim, ylim

__all__ = [
    "CHANNELS",
    "GEOMS",
    "Aes",
    "aes",
    "ChartSpec",
    "Labels",
    "Theme",
    "chart",
    "labs",
    "theme",
    "FacetGrid",
    "FacetLayout",
    "FacetWrap",
    "Panel",
    "compute_layout",
    "facet_grid",
    "facet_wrap",
    "Layer",
    "ResolvedLayer",
    "geom_bar",
    "geom_boxplot",
    "geom_col",
    "geom_histogram",
    "geom_line",
    "geom_point",
    "geom_smooth",
    "geom_violin",
    "Scale",
    "scale_color_manual",
    "scale_fill_manual",
    "xlim",
    "ylim",
]
