"""
surveyviz: a small grammar-of-graphics toolkit for labeled survey data.

Features include:
- Loading labeled survey files (SPSS, Stata, SAS, CSV) with value labels
- Recoding numeric codes into nominal categories
- Declarative charts built from aesthetic mappings and geometry layers
- Wrapped and grid facets
- Static (Matplotlib/Seaborn) and interactive (Plotly) rendering
"""
import logging

from .data import (
    LabeledDataset,
    Recoding,
    apply_value_labels,
    describe_numeric,
    frequency_table,
    load_dataset,
    recode,
    recode_columns,
)
from .grammar import (
    Aes,
    ChartSpec,
    FacetGrid,
    FacetLayout,
    FacetWrap,
    Layer,
    Panel,
    aes,
    chart,
    facet_grid,
    facet_wrap,
    geom_bar,
    geom_boxplot,
    geom_col,
    geom_histogram,
    geom_line,
    geom_point,
    geom_smooth,
    geom_violin,
    labs,
    scale_color_manual,
    scale_fill_manual,
    theme,
    xlim,
    ylim,
)
from .types import TableResult, VisualizationResult
from .visualizations import (
    FigureSummary,
    LegendPosition,
    inspect_figure,
    interactive_plot,
    render,
    to_interactive,
    update_layout,
)

__version__ = "0.1.0"

__all__ = [
    "LabeledDataset",
    "Recoding",
    "apply_value_labels",
    "describe_numeric",
    "frequency_table",
    "load_dataset",
    "recode",
    "recode_columns",
    "Aes",
    "ChartSpec",
    "FacetGrid",
    "FacetLayout",
    "FacetWrap",
    "Layer",
    "Panel",
    "aes",
    "chart",
    "facet_grid",
    "facet_wrap",
    "geom_bar",
    "geom_boxplot",
    "geom_col",
    "geom_histogram",
    "geom_line",
    "geom_point",
    "geom_smooth",
    "geom_violin",
    "labs",
    "scale_color_manual",
    "scale_fill_manual",
    "theme",
    "xlim",
    "ylim",
    "TableResult",
    "VisualizationResult",
    "FigureSummary",
    "LegendPosition",
    "inspect_figure",
    "interactive_plot",
    "render",
    "to_interactive",
    "update_layout",
]

logger = logging.getLogger("surveyviz")
if not logger.hasHandlers():
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(name)s: %(message)s"))
    logger.addHandler(handler)
logger.setLevel(logging.WARNING)
