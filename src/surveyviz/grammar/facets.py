"""
Facets: splitting a chart into small-multiple panels.

Two layouts are supported:

- **wrap** (:func:`facet_wrap`): one panel per distinct value of one
  column, or per distinct *present* combination of two columns, flowing
  left to right and top to bottom.
- **grid** (:func:`facet_grid`): a strict matrix, rows indexed by the
  levels of the first column and columns by the levels of the second.
  Every combination gets a panel, even when no row of data falls in it.

Functions
---------
facet_wrap(facets, nrow=None, ncol=None)
facet_grid(rows, cols=None)
compute_layout(facet, data)
    Panel layout for a facet (or a single panel when `facet` is None).

Examples
--------
>>> import pandas as pd
>>> from surveyviz import facet_grid, facet_wrap
>>> df = pd.DataFrame({"sex": ["M", "F", "M"], "smoker": ["y", "n", "n"]})
>>> facet_grid("sex", "smoker").layout(df).n_panels
4
>>> facet_wrap(["sex", "smoker"]).layout(df).n_panels
3
"""

import math
from dataclasses import dataclass
from typing import Any, Optional, Sequence

import pandas as pd

from .._utils import read_config, validate_columns_exist
from ..types import NaturalNumber
from ._utils import ordered_levels

ERR_MSG_FACET_GRID_COLUMNS_F = read_config("messages")["errors"][
    "facet_grid_columns_f"
]
ERR_MSG_FACET_WRAP_COLUMNS_F = read_config("messages")["errors"][
    "facet_wrap_columns_f"
]
ERR_MSG_COLUMN_NOT_FOUND_F = read_config("messages")["errors"]["column_not_found_f"]
ERR_MSG_NOT_POSITIVE_INTEGER_F = read_config("messages")["errors"][
    "not_positive_integer_f"
]


@dataclass(frozen=True)
class Panel:
    """
    One cell of a facet layout.

    Attributes
    ----------
    row, col : int
        Zero-based position in the panel grid.
    keys : tuple
        Facet values selecting this panel's rows (empty without facets).
    title : str
        Strip label.
    """

    row: int
    col: int
    keys: tuple = ()
    title: str = ""


@dataclass(frozen=True)
class FacetLayout:
    """
    Arrangement of panels produced by a facet.

    Attributes
    ----------
    kind : {'none', 'wrap', 'grid'}
    nrow, ncol : int
        Grid dimensions. For wrap layouts cells after the last panel stay
        empty.
    panels : tuple[Panel, ...]
        Panels in reading order (row-major).
    facets : tuple[str, ...]
        Facet columns.
    row_levels, col_levels : tuple
        Grid layouts only: levels indexing rows and columns.
    """

    kind: str
    nrow: int
    ncol: int
    panels: tuple
    facets: tuple = ()
    row_levels: tuple = ()
    col_levels: tuple = ()

    @property
    def n_panels(self) -> int:
        return len(self.panels)

    @property
    def occupied_cells(self) -> set:
        return {(p.row, p.col) for p in self.panels}

    def panel_data(self, data: pd.DataFrame, panel: Panel) -> pd.DataFrame:
        """Rows of `data` belonging to `panel`."""
        if not self.facets:
            return data
        mask = pd.Series(True, index=data.index)
        for column, value in zip(self.facets, panel.keys):
            mask &= data[column] == value
        return data.loc[mask]


def _panel_title(keys: Sequence[Any]) -> str:
    return ", ".join(str(k) for k in keys)


@dataclass(frozen=True)
class FacetWrap:
    """
    Wrapped facet over one or two columns.

    Parameters
    ----------
    facets : tuple[str, ...]
        One or two column names.
    nrow, ncol : int, optional
        Requested grid dimensions. Missing dimensions are derived from the
        panel count; if ``nrow * ncol`` is too small, rows are added.
    """

    facets: tuple
    nrow: Optional[int] = None
    ncol: Optional[int] = None

    @property
    def columns(self) -> tuple:
        return tuple(self.facets)

    def _dimensions(self, n_panels: int) -> tuple[int, int]:
        n = max(n_panels, 1)
        nrow, ncol = self.nrow, self.ncol
        if nrow is None and ncol is None:
            ncol = math.ceil(math.sqrt(n))
            nrow = math.ceil(n / ncol)
        elif nrow is None:
            nrow = math.ceil(n / ncol)
        elif ncol is None:
            ncol = math.ceil(n / nrow)
        elif nrow * ncol < n:
            nrow = math.ceil(n / ncol)
        return nrow, ncol

    def layout(self, data: pd.DataFrame) -> FacetLayout:
        """
        Compute the panels for `data`.

        Only combinations present in the data produce panels. They are
        ordered by the level order of the first column, then the second.
        Rows with a missing facet value are not assigned to any panel.
        """
        validate_columns_exist(data, self.facets, ERR_MSG_COLUMN_NOT_FOUND_F)
        ranks = []
        for column in self.facets:
            levels = ordered_levels(data[column])
            ranks.append({level: i for i, level in enumerate(levels)})

        present = data[list(self.facets)].dropna().drop_duplicates()
        combos = sorted(
            (tuple(row) for row in present.itertuples(index=False, name=None)),
            key=lambda combo: tuple(rank[v] for rank, v in zip(ranks, combo)),
        )

        nrow, ncol = self._dimensions(len(combos))
        panels = tuple(
            Panel(row=i // ncol, col=i % ncol, keys=combo, title=_panel_title(combo))
            for i, combo in enumerate(combos)
        )
        return FacetLayout(
            kind="wrap", nrow=nrow, ncol=ncol, panels=panels, facets=self.columns
        )


@dataclass(frozen=True)
class FacetGrid:
    """
    Grid facet: rows by the levels of `rows`, columns by the levels of `cols`.
    """

    rows: str
    cols: str

    @property
    def columns(self) -> tuple:
        return (self.rows, self.cols)

    def layout(self, data: pd.DataFrame) -> FacetLayout:
        """
        Compute an ``m x n`` panel matrix for `data`.

        Every (row level, column level) pair gets a panel regardless of how
        many observations fall into it.
        """
        validate_columns_exist(data, self.columns, ERR_MSG_COLUMN_NOT_FOUND_F)
        row_levels = ordered_levels(data[self.rows])
        col_levels = ordered_levels(data[self.cols])
        panels = tuple(
            Panel(row=i, col=j, keys=(r, c), title=_panel_title((r, c)))
            for i, r in enumerate(row_levels)
            for j, c in enumerate(col_levels)
        )
        return FacetLayout(
            kind="grid",
            nrow=max(len(row_levels), 1),
            ncol=max(len(col_levels), 1),
            panels=panels,
            facets=self.columns,
            row_levels=tuple(row_levels),
            col_levels=tuple(col_levels),
        )


def facet_wrap(
    facets: str | Sequence[str], nrow: Optional[int] = None, ncol: Optional[int] = None
) -> FacetWrap:
    """
    Wrap panels for each distinct value (or present combination) of `facets`.

    Parameters
    ----------
    facets : str or Sequence[str]
        One or two column names.
    nrow, ncol : int, optional
        Requested number of rows and columns.

    Raises
    ------
    ValueError
        If `facets` does not name one or two columns, or if `nrow`/`ncol`
        are not natural numbers.
    """
    facets = (facets,) if isinstance(facets, str) else tuple(facets)
    if len(facets) not in (1, 2):
        raise ValueError(ERR_MSG_FACET_WRAP_COLUMNS_F.format(len(facets)))
    for name, value in {"nrow": nrow, "ncol": ncol}.items():
        if value is not None and not isinstance(value, NaturalNumber):
            raise ValueError(ERR_MSG_NOT_POSITIVE_INTEGER_F.format(name))
    return FacetWrap(
        facets=facets,
        nrow=int(nrow) if nrow is not None else None,
        ncol=int(ncol) if ncol is not None else None,
    )


def facet_grid(rows: str | Sequence[str], cols: Optional[str] = None) -> FacetGrid:
    """
    Lay out panels in a strict rows x columns matrix.

    Parameters
    ----------
    rows : str or Sequence[str]
        Column indexing the panel rows, or a pair ``(rows, cols)``.
    cols : str, optional
        Column indexing the panel columns.

    Raises
    ------
    ValueError
        Unless exactly two columns are given.
    """
    columns = [rows] if isinstance(rows, str) else list(rows)
    if cols is not None:
        columns.append(cols)
    if len(columns) != 2:
        raise ValueError(ERR_MSG_FACET_GRID_COLUMNS_F.format(len(columns)))
    return FacetGrid(rows=columns[0], cols=columns[1])


def compute_layout(facet: FacetWrap | FacetGrid | None, data: pd.DataFrame) -> FacetLayout:
    """Panel layout of `facet`; a single un-keyed panel when `facet` is None."""
    if facet is None:
        return FacetLayout(kind="none", nrow=1, ncol=1, panels=(Panel(0, 0),))
    return facet.layout(data)
