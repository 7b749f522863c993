"""
Engine-independent statistics behind the geometries.

Both renderers use these helpers so that a chart shows the same numbers
whether it is drawn with Matplotlib or converted to Plotly.

Functions
---------
layer_frame(data, layer, nan_policy)
    Mapped columns of a layer with incomplete rows removed.
split_groups(df, column, levels, by=None)
    Iterate over the colored groups of a layer.
bar_table(df, x_levels, group=None, group_levels=(), weight=None, position="stack")
    Heights of (grouped) bars.
histogram_edges(values, bins)
    Shared bin edges for a histogram layer.
fit_smooth(x, y, method="loess", span=0.75, degree=2, dots=100, x_range=None)
    Smoothed trend curve.
"""

import logging
from typing import Any, Iterator, Optional, Sequence

import numpy as np
import pandas as pd
from statsmodels.nonparametric.smoothers_lowess import lowess

from .._utils import handle_nan, read_config, validate_string_flag
from ..grammar.layers import SMOOTH_METHODS, ResolvedLayer

logger = logging.getLogger(__name__)

ERR_MSG_UNSUPPORTED_METHOD_F = read_config("messages")["errors"]["unsupported_method_f"]


def layer_frame(
    data: pd.DataFrame, layer: ResolvedLayer, nan_policy: str = "drop"
) -> pd.DataFrame:
    """
    Columns mapped by `layer`, renamed to their channels.

    Rows with a missing value in any mapped column are removed (or raise,
    with ``nan_policy='raise'``). Removed rows are reported with a warning.
    """
    mapping = dict(layer.mapping)
    df = pd.DataFrame({channel: data[column] for channel, column in mapping.items()})
    df.index = data.index
    cleaned = handle_nan(
        df,
        nan_policy=nan_policy,
        supported_policy=("drop", "raise"),
        data_name=f"layer {layer.index} ({layer.geom})",
    )
    removed = len(df) - len(cleaned)
    if removed:
        logger.warning(
            "Removed %d row(s) containing missing values from layer %d (%s).",
            removed,
            layer.index,
            layer.geom,
        )
    return cleaned


def split_groups(
    df: pd.DataFrame,
    channel: Optional[str],
    levels: Sequence[Any],
    by: Optional[str] = None,
) -> Iterator[tuple[Any, pd.DataFrame]]:
    """
    Yield ``(level, rows)`` for every level of the grouping channel.

    Without a grouping channel a single ``(None, df)`` pair is produced.
    Levels without rows are skipped. With `by` (the ``group`` channel)
    every colored group is further split into one part per value of `by`;
    the parts share the level of their colored group.
    """
    if channel is None:
        parts = [(None, df)]
    else:
        parts = [(level, df.loc[df[channel] == level]) for level in levels]
    for level, rows in parts:
        if channel is not None and rows.empty:
            continue
        if by is None or by not in rows:
            yield level, rows
            continue
        for _, part in rows.groupby(by, sort=True, observed=True):
            yield level, part


def bar_table(
    df: pd.DataFrame,
    x_levels: Sequence[Any],
    group: Optional[str] = None,
    group_levels: Sequence[Any] = (),
    weight: Optional[str] = None,
    position: str = "stack",
) -> pd.DataFrame:
    """
    Bar heights indexed by ``x`` level, one column per group.

    Parameters
    ----------
    df : pandas.DataFrame
        Layer frame with an ``x`` column (and `group`/`weight` columns).
    x_levels : Sequence
        Levels of ``x`` in display order; missing levels get zero height.
    group : str, optional
        Channel splitting bars into groups.
    group_levels : Sequence
        Levels of `group` in display order.
    weight : str, optional
        Column summed per bar (``geom_col``); rows are counted otherwise.
    position : {'stack', 'dodge', 'fill'}, default='stack'
        With ``'fill'`` the groups of each bar are normalized to sum to 1.

    Returns
    -------
    pandas.DataFrame
        Shape ``(len(x_levels), n_groups)``. Without a group the single
        column is named ``"value"``.
    """
    keys = ["x"] if group is None else ["x", group]
    if weight is None:
        heights = df.groupby(keys, observed=True).size()
    else:
        heights = df.groupby(keys, observed=True)[weight].sum()
    if group is None:
        table = heights.to_frame(name="value")
        columns = ["value"]
    else:
        table = heights.unstack(fill_value=0)
        columns = list(group_levels)
    table = table.reindex(index=list(x_levels), columns=columns, fill_value=0)
    table = table.fillna(0).astype(float)
    if position == "fill":
        totals = table.sum(axis=1).replace(0, np.nan)
        table = table.div(totals, axis=0).fillna(0)
    return table


def histogram_edges(values: Sequence[float], bins: int) -> np.ndarray:
    """Equal-width bin edges covering `values`."""
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        return np.linspace(0, 1, bins + 1)
    return np.histogram_bin_edges(values, bins=bins)


def _fit_linear_ols(x: np.ndarray, y: np.ndarray, x_domain: np.ndarray) -> np.ndarray:
    x_with_intercept = np.column_stack([x, np.ones_like(x)])
    coefficients = np.linalg.lstsq(x_with_intercept, y, rcond=None)[0]
    return x_domain * coefficients[0] + coefficients[1]


def _fit_polynomial_ols(
    x: np.ndarray, y: np.ndarray, x_domain: np.ndarray, degree: int
) -> np.ndarray:
    degree = min(degree, len(np.unique(x)) - 1)
    polynomial = np.poly1d(np.polyfit(x, y, deg=degree))
    return polynomial(x_domain)


def _fit_loess(
    x: np.ndarray, y: np.ndarray, x_domain: np.ndarray, span: float
) -> np.ndarray:
    fitted = lowess(y, x, frac=span, return_sorted=True)
    # lowess returns one row per observation; collapse duplicated x values
    fx, index = np.unique(fitted[:, 0], return_index=True)
    return np.interp(x_domain, fx, fitted[index, 1])


def fit_smooth(
    x: Sequence[float],
    y: Sequence[float],
    method: str = "loess",
    span: float = 0.75,
    degree: int = 2,
    dots: int = 100,
    x_range: Optional[tuple[float, float]] = None,
) -> tuple[np.ndarray, np.ndarray]:
    """
    Fit a smoothed trend of `y` on `x`.

    Parameters
    ----------
    x, y : Sequence[float]
        Observations.
    method : {'loess', 'lm', 'poly'}, default='loess'
    span : float, default=0.75
        LOWESS fraction of data per local fit.
    degree : int, default=2
        Polynomial degree for ``'poly'``; lowered when there are too few
        distinct x values.
    dots : int, default=100
        Number of points of the returned curve.
    x_range : tuple[float, float], optional
        Domain of the curve; the observed range by default.

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        ``(x_domain, y_predicted)``. Both empty when fewer than two distinct
        x values are available.

    Raises
    ------
    ValueError
        If `method` is unsupported.
    """
    validate_string_flag(
        method, SMOOTH_METHODS, ERR_MSG_UNSUPPORTED_METHOD_F.format(method, SMOOTH_METHODS)
    )
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    if len(np.unique(x)) < 2:
        logger.warning(
            "Not enough distinct x values to fit a '%s' smoother; curve skipped.", method
        )
        return np.array([]), np.array([])
    if x_range is None:
        x_range = (x.min(), x.max())
    x_domain = np.linspace(x_range[0], x_range[1], dots)
    if method == "lm":
        y_pred = _fit_linear_ols(x, y, x_domain)
    elif method == "poly":
        y_pred = _fit_polynomial_ols(x, y, x_domain, degree)
    else:
        y_pred = _fit_loess(x, y, x_domain, span)
    return x_domain, y_pred
