import pytest
import pandas as pd

from surveyviz import (aes, chart, geom_point, geom_smooth, geom_bar,
                       geom_histogram, geom_boxplot)
from surveyviz.grammar import Aes, Layer

DF = pd.DataFrame({
    "age": [21, 35, 52, 40, 28, 61],
    "income": [18, 40, 61, 52, 30, 70],
    "Gender": ["Male", "Female", "Female", "Male", "Female", "Male"],
    "Race": ["White", "Black", "Asian", "White", "Black", "White"],
})

# tests for aes()

def test_aes_positional_and_named_channels():
    mapping = aes("age", "income", color="Gender")
    assert dict(mapping) == {"x": "age", "y": "income", "color": "Gender"}

def test_aes_colour_alias():
    assert dict(aes(colour="Gender")) == {"color": "Gender"}

def test_aes_drops_none_values():
    assert dict(aes(x="age", y=None)) == {"x": "age"}

def test_aes_unknown_channel():
    with pytest.raises(ValueError, match="Unsupported aesthetic channel 'linetype'"):
        aes(linetype="Gender")

def test_aes_is_immutable():
    mapping = aes("age")
    with pytest.raises(TypeError):
        mapping["x"] = "income"

def test_aes_merge_other_wins():
    merged = aes("age", "income", color="Gender").merge(aes(color="Race"))
    assert merged["color"] == "Race"
    assert merged["x"] == "age"

def test_aes_repr():
    assert repr(aes("age", color="Gender")) == "aes(x='age', color='Gender')"

# tests for global vs local mappings

def test_global_color_is_inherited_by_every_layer():
    spec = (chart(DF, aes("age", "income", color="Gender"))
            + geom_point() + geom_smooth(method="lm"))
    layers = spec.resolve_layers()
    assert all(layer.mapping["color"] == "Gender" for layer in layers)
    assert spec.legend_entries() == ["Female", "Male"]

def test_local_color_applies_to_its_layer_only():
    spec = (chart(DF, aes("age", "income"))
            + geom_point(aes(color="Gender")) + geom_smooth(method="lm"))
    point, smooth = spec.resolve_layers()
    assert point.mapping["color"] == "Gender"
    assert "color" not in smooth.mapping
    assert smooth.group_channel is None

def test_local_color_overrides_global_for_that_layer():
    spec = (chart(DF, aes("age", "income", color="Gender"))
            + geom_point(aes(color="Race")) + geom_smooth(method="lm"))
    point, smooth = spec.resolve_layers()
    assert point.mapping["color"] == "Race"
    assert smooth.mapping["color"] == "Gender"
    assert spec.legend_entries() == ["Asian", "Black", "White", "Female", "Male"]

def test_literal_color_removes_channel_and_legend():
    spec = (chart(DF, aes("age", "income", color="Gender"))
            + geom_point(color="steelblue"))
    (layer,) = spec.resolve_layers()
    assert "color" not in layer.mapping
    assert layer.literals["color"] == "steelblue"
    assert spec.legend_entries() == []

def test_literal_settings_and_params_are_split():
    layer = geom_point(alpha=0.5, jitter=0.1)
    assert dict(layer.literals) == {"alpha": 0.5}
    assert dict(layer.params) == {"jitter": 0.1}

def test_inherit_aes_false_ignores_global_mapping():
    spec = (chart(DF, aes("age", "income", color="Gender"))
            + geom_point(aes("age", "income"), inherit_aes=False))
    (layer,) = spec.resolve_layers()
    assert "color" not in layer.mapping

def test_layers_do_not_see_each_other():
    first = geom_point(aes(color="Gender"))
    second = geom_point()
    global_mapping = aes("age", "income")
    assert "color" in first.resolve(global_mapping).mapping
    assert "color" not in second.resolve(global_mapping).mapping

# tests for layer constructors

@pytest.mark.parametrize("factory, kwargs", [
    (geom_bar, {"position": "sideways"}),
    (geom_smooth, {"method": "spline"}),
    (geom_smooth, {"degree": 0}),
    (geom_histogram, {"bins": -3}),
])
def test_layer_invalid_parameters(factory, kwargs):
    with pytest.raises(ValueError):
        factory(**kwargs)

@pytest.mark.parametrize("factory, kwargs, name", [
    (geom_smooth, {"degree": 0}, "degree"),
    (geom_smooth, {"dots": 1.5}, "dots"),
    (geom_histogram, {"bins": -3}, "bins"),
])
def test_layer_non_positive_integer_message(factory, kwargs, name):
    with pytest.raises(ValueError, match=f"'{name}' must be a positive integer."):
        factory(**kwargs)

def test_layer_unsupported_geom():
    with pytest.raises(ValueError, match="Unsupported geometry 'pie'"):
        Layer("pie")

@pytest.mark.parametrize("geom, channel", [
    ("bar", "fill"),
    ("boxplot", "fill"),
    ("point", "color"),
])
def test_group_channel_priority(geom, channel):
    layer = Layer(geom, mapping=Aes(x="Race", y="income", color="Gender", fill="Race"))
    assert layer.resolve({}).group_channel == channel

def test_boxplot_requires_y():
    with pytest.raises(ValueError, match="Geometry 'boxplot' requires the 'y' aesthetic."):
        chart(DF, aes(x="Gender")) + geom_boxplot()
