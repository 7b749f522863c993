import logging

import pytest
import numpy as np
import pandas as pd

from surveyviz import aes, geom_point
from surveyviz.visualizations import _stats

BARS = pd.DataFrame({
    "x": ["White", "Black", "White", "White", "Asian"],
    "fill": ["Male", "Female", "Female", "Male", "Male"],
})

# tests for visualizations._stats.layer_frame()

def test_layer_frame_renames_columns_and_drops_missing(caplog):
    data = pd.DataFrame({"age": [20, None, 40], "income": [1.0, 2.0, 3.0], "other": [0, 0, 0]})
    layer = geom_point().resolve(aes("age", "income"), index=1)
    with caplog.at_level(logging.WARNING):
        frame = _stats.layer_frame(data, layer)
    assert list(frame.columns) == ["x", "y"]
    assert list(frame.index) == [0, 2]
    assert any("Removed 1 row(s)" in message and "layer 1 (point)" in message
               for message in caplog.messages)

def test_layer_frame_raise_policy():
    data = pd.DataFrame({"age": [20, None], "income": [1.0, 2.0]})
    layer = geom_point().resolve(aes("age", "income"))
    with pytest.raises(ValueError, match="contains NaN values"):
        _stats.layer_frame(data, layer, nan_policy="raise")

# tests for visualizations._stats.split_groups()

def test_split_groups_skips_empty_levels():
    groups = list(_stats.split_groups(BARS, "fill", ["Female", "Male", "Other"]))
    assert [level for level, _ in groups] == ["Female", "Male"]
    assert len(groups[1][1]) == 3

def test_split_groups_without_channel():
    ((level, rows),) = _stats.split_groups(BARS, None, [])
    assert level is None
    assert rows is BARS

def test_split_groups_by_group_channel():
    df = pd.DataFrame({"x": [1, 2, 1, 2, 3], "color": ["a", "a", "a", "a", "b"],
                       "group": [1, 1, 2, 2, 3]})
    groups = list(_stats.split_groups(df, "color", ["a", "b"], by="group"))
    assert [level for level, _ in groups] == ["a", "a", "b"]
    assert [rows["group"].unique().tolist() for _, rows in groups] == [[1], [2], [3]]

def test_split_groups_by_without_channel():
    df = pd.DataFrame({"x": [1, 2, 3], "group": ["b", "a", "b"]})
    groups = list(_stats.split_groups(df, None, [], by="group"))
    assert [level for level, _ in groups] == [None, None]
    assert [rows.index.tolist() for _, rows in groups] == [[1], [0, 2]]

# tests for visualizations._stats.bar_table()

def test_bar_table_counts_without_group():
    table = _stats.bar_table(BARS, ["Asian", "Black", "White", "Other"])
    assert list(table.columns) == ["value"]
    assert table["value"].tolist() == [1.0, 1.0, 3.0, 0.0]

def test_bar_table_grouped_counts():
    table = _stats.bar_table(BARS, ["Asian", "Black", "White"], group="fill",
                             group_levels=["Female", "Male"])
    assert table.loc["White"].tolist() == [1.0, 2.0]
    assert table.loc["Black"].tolist() == [1.0, 0.0]

def test_bar_table_fill_normalizes_rows():
    table = _stats.bar_table(BARS, ["Asian", "Black", "White"], group="fill",
                             group_levels=["Female", "Male"], position="fill")
    np.testing.assert_allclose(table.sum(axis=1), [1.0, 1.0, 1.0])
    assert table.loc["White", "Male"] == pytest.approx(2 / 3)

def test_bar_table_weighted_sum():
    df = pd.DataFrame({"x": ["a", "b", "a"], "y": [2.0, 5.0, 3.0]})
    table = _stats.bar_table(df, ["a", "b"], weight="y")
    assert table["value"].tolist() == [5.0, 5.0]

def test_bar_table_categorical_x():
    df = pd.DataFrame({"x": pd.Categorical(["b", "a", "b"], categories=["b", "a", "c"])})
    table = _stats.bar_table(df, ["b", "a"])
    assert table["value"].tolist() == [2.0, 1.0]

# tests for visualizations._stats.histogram_edges()

def test_histogram_edges():
    edges = _stats.histogram_edges([0, 10], bins=5)
    np.testing.assert_allclose(edges, [0, 2, 4, 6, 8, 10])
    assert len(_stats.histogram_edges([], bins=4)) == 5

# tests for visualizations._stats.fit_smooth()

def test_fit_smooth_lm_recovers_line():
    x = np.arange(10)
    x_domain, y_pred = _stats.fit_smooth(x, 2 * x + 1, method="lm", dots=5)
    np.testing.assert_allclose(x_domain, [0, 2.25, 4.5, 6.75, 9])
    np.testing.assert_allclose(y_pred, 2 * x_domain + 1)

def test_fit_smooth_poly_recovers_parabola():
    x = np.linspace(-3, 3, 15)
    _, y_pred = _stats.fit_smooth(x, x ** 2, method="poly", degree=2, dots=7)
    np.testing.assert_allclose(y_pred, np.linspace(-3, 3, 7) ** 2, atol=1e-8)

def test_fit_smooth_poly_degree_capped_by_distinct_values():
    x_domain, y_pred = _stats.fit_smooth([0, 0, 1, 1], [1, 1, 3, 3], method="poly",
                                         degree=5, dots=3)
    np.testing.assert_allclose(y_pred, [1, 2, 3])

def test_fit_smooth_loess_follows_trend():
    rng = np.random.default_rng(0)
    x = np.linspace(0, 10, 60)
    y = 3 * x + rng.normal(0, 0.1, size=60)
    x_domain, y_pred = _stats.fit_smooth(x, y, method="loess", dots=20)
    assert len(x_domain) == 20
    np.testing.assert_allclose(y_pred, 3 * x_domain, atol=1)

def test_fit_smooth_x_range():
    x_domain, _ = _stats.fit_smooth([0, 1, 2], [0, 1, 2], method="lm", dots=3,
                                    x_range=(-1, 3))
    np.testing.assert_allclose(x_domain, [-1, 1, 3])

def test_fit_smooth_single_x_value(caplog):
    with caplog.at_level(logging.WARNING):
        x_domain, y_pred = _stats.fit_smooth([1, 1, 1], [1, 2, 3], method="lm")
    assert x_domain.size == 0 and y_pred.size == 0
    assert any("Not enough distinct x values" in message for message in caplog.messages)

def test_fit_smooth_unsupported_method():
    with pytest.raises(ValueError, match="Unsupported method 'gam'"):
        _stats.fit_smooth([1, 2], [1, 2], method="gam")
