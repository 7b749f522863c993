"""
Internal helpers shared by the grammar modules.
"""

from typing import Any

import pandas as pd


def ordered_levels(series: pd.Series) -> list[Any]:
    """
    Distinct non-missing values of `series` in display order.

    Categorical columns follow their level order (unused levels are
    dropped). Other columns are sorted when their values are comparable and
    otherwise kept in order of first appearance.
    """
    present = series.dropna()
    if isinstance(series.dtype, pd.CategoricalDtype):
        used = set(present.unique())
        return [level for level in series.cat.categories if level in used]
    unique = list(pd.unique(present))
    try:
        return sorted(unique)
    except TypeError:
        return unique
