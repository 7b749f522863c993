import pytest
import pandas as pd

from surveyviz import (aes, chart, geom_point, geom_bar, facet_wrap, facet_grid,
                       labs, theme, scale_color_manual, xlim)
from surveyviz.grammar import ChartSpec

DF = pd.DataFrame({
    "age": [21, 35, 52, 40],
    "income": [18, 40, 61, 52],
    "Gender": ["Male", "Female", "Female", "Male"],
    "Race": ["White", "Black", "White", "Asian"],
})

# tests for chart() and ChartSpec.add()

def test_chart_copies_data():
    df = DF.copy()
    spec = chart(df, aes("age", "income"))
    df.loc[0, "age"] = 99
    assert spec.data.loc[0, "age"] == 21

def test_chart_accepts_mapping_data():
    spec = chart({"x": [1, 2], "y": [3, 4]}, aes("x", "y"))
    assert isinstance(spec, ChartSpec)
    assert spec.data.shape == (2, 2)

def test_chart_unknown_column_in_global_mapping():
    with pytest.raises(ValueError, match="Column 'salary' is not present"):
        chart(DF, aes("age", "salary"))

def test_add_returns_new_specification():
    base = chart(DF, aes("age", "income"))
    extended = base + geom_point()
    assert base.n_layers == 0
    assert extended.n_layers == 1
    assert extended is not base

def test_add_list_of_components():
    spec = chart(DF, aes("age", "income")) + [geom_point(), labs(title="t")]
    assert spec.n_layers == 1
    assert spec.labels.title == "t"

def test_add_unsupported_component():
    with pytest.raises(TypeError, match="Cannot add object of type 'int'"):
        chart(DF) + 3

def test_add_layer_with_unknown_local_column():
    with pytest.raises(ValueError, match="Column 'Region' is not present"):
        chart(DF, aes("age", "income")) + geom_point(aes(color="Region"))

def test_add_facet_with_unknown_column():
    with pytest.raises(ValueError):
        chart(DF) + facet_wrap("Region")

def test_later_facet_replaces_earlier():
    spec = chart(DF) + facet_wrap("Gender") + facet_grid("Gender", "Race")
    assert spec.layout().kind == "grid"

def test_scales_replace_same_channel():
    spec = (chart(DF, aes("age", "income", color="Gender"))
            + scale_color_manual(["red", "blue"])
            + scale_color_manual({"Male": "black"})
            + xlim(0, 100))
    assert len(spec.scales) == 2
    assert spec.scale_for("color").values == {"Male": "black"}
    assert spec.scale_for("x").limits == (0, 100)
    assert spec.scale_for("fill") is None

def test_labels_and_theme_merge():
    spec = (chart(DF) + labs(title="Income", x="Age")
            + labs(y="Income (k$)") + theme(style="whitegrid")
            + theme(legend_position="bottom"))
    assert (spec.labels.title, spec.labels.x, spec.labels.y) == (
        "Income", "Age", "Income (k$)")
    assert spec.theme.style == "whitegrid"
    assert spec.theme.legend_position == "bottom"

def test_theme_invalid_legend_position():
    with pytest.raises(ValueError, match="Unsupported legend position 'middle'"):
        theme(legend_position="middle")

def test_specification_is_frozen():
    spec = chart(DF)
    with pytest.raises(AttributeError):
        spec.layers = ()

# tests for legend_entries() and layout()

def test_legend_entries_fill_channel():
    spec = chart(DF, aes(x="Race", fill="Gender")) + geom_bar()
    assert spec.legend_entries("fill") == ["Female", "Male"]
    assert spec.legend_entries("color") == []
    assert spec.legend_entries(None) == ["Female", "Male"]

def test_layout_panel_count_matches_facet():
    spec = chart(DF, aes("age", "income")) + geom_point() + facet_wrap("Race")
    assert spec.layout().n_panels == 3
