import pytest
import pandas as pd
import numpy as np

from matplotlib import pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure

from surveyviz import (aes, chart, render, geom_bar, geom_col, geom_point, geom_line,
                       geom_smooth, geom_histogram, geom_boxplot, geom_violin,
                       facet_wrap, facet_grid, labs, theme, xlim, scale_fill_manual)

SURVEY = pd.DataFrame({
    "age": [21, 35, 52, 40, 28, 61, 45, 33, 58, 26, 39, 49],
    "income": [18, 40, 61, 52, 30, 70, 55, 38, 66, 24, 47, 58],
    "Gender": ["Male", "Female"] * 6,
    "Race": ["White", "Black", "Asian", "White", "Black", "White",
             "Asian", "White", "Black", "Asian", "White", "Black"],
    "Smoker": ["yes", "no", "yes", "no", "no", "no",
               "no", "no", "yes", "no", "no", "no"],
})


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")


def legend_labels(fig: Figure) -> list:
    if not fig.legends:
        return []
    return [text.get_text() for text in fig.legends[0].get_texts()]

# API contract tests

def test_render_returns_visualization_result():
    spec = chart(SURVEY, aes("age", "income")) + geom_point()
    result = render(spec)
    assert isinstance(result.figure, Figure)
    assert isinstance(result.axes, Axes)
    assert result.engine == "matplotlib"
    assert (result.width, result.height) == (10, 6)
    assert result.extra_info == {"layers": 1, "legend_entries": [], "panels": 1}

def test_render_rejects_non_specification():
    with pytest.raises(TypeError, match="Expected a ChartSpec"):
        render(SURVEY)

def test_render_empty_data():
    empty = pd.DataFrame({"age": [], "income": []})
    spec = chart(empty, aes("age", "income")) + geom_point()
    with pytest.warns(UserWarning, match="Data for 'render' is empty"):
        result = render(spec, title="Nothing")
    assert len(result.axes.texts) == 1
    assert len(result.axes.collections) == 0
    assert result.axes.get_title() == "Nothing"
    assert result.extra_info["panels"] == 0

def test_render_saves_chart(tmp_path):
    spec = chart(SURVEY, aes("age", "income")) + geom_point()
    render(spec, directory=str(tmp_path))
    assert (tmp_path / "chart.png").exists()

def test_render_nan_policy_raise():
    data = SURVEY.assign(income=SURVEY["income"].astype(float))
    data.loc[0, "income"] = np.nan
    spec = chart(data, aes("age", "income")) + geom_point()
    with pytest.raises(ValueError, match="contains NaN values"):
        render(spec, nan_policy="raise")

def test_render_drops_missing_rows_per_layer():
    data = SURVEY.assign(income=SURVEY["income"].astype(float))
    data.loc[0, "income"] = np.nan
    spec = chart(data, aes("age", "income")) + geom_point()
    result = render(spec)
    assert len(result.axes.collections[0].get_offsets()) == len(SURVEY) - 1

# tests for global and local mappings

def test_global_color_shared_by_all_layers():
    spec = (chart(SURVEY, aes("age", "income", color="Gender"))
            + geom_point() + geom_smooth(method="lm"))
    result = render(spec)
    assert len(result.axes.collections) == 2
    assert len(result.axes.lines) == 2
    assert legend_labels(result.figure) == ["Female", "Male"]
    assert result.extra_info["legend_entries"] == ["Female", "Male"]

def test_local_color_only_splits_its_layer():
    spec = (chart(SURVEY, aes("age", "income"))
            + geom_point(aes(color="Gender")) + geom_smooth(method="lm"))
    result = render(spec)
    assert len(result.axes.collections) == 2
    assert len(result.axes.lines) == 1
    assert legend_labels(result.figure) == ["Female", "Male"]

def test_literal_color_produces_no_legend():
    spec = (chart(SURVEY, aes("age", "income", color="Gender"))
            + geom_point(color="black"))
    result = render(spec)
    assert result.figure.legends == []
    assert result.extra_info["legend_entries"] == []
    np.testing.assert_allclose(result.axes.collections[0].get_facecolor()[0][:3], [0, 0, 0])

# tests for geometries

@pytest.mark.parametrize("position", ["stack", "dodge", "fill"])
def test_grouped_bars(position):
    spec = chart(SURVEY, aes(x="Race", fill="Gender")) + geom_bar(position=position)
    result = render(spec)
    # 3 races x 2 genders, zero-height bars included
    assert len(result.axes.patches) == 6
    assert [t.get_text() for t in result.axes.get_xticklabels()] == ["Asian", "Black", "White"]
    assert result.axes.get_ylabel() == ("proportion" if position == "fill" else "count")
    assert legend_labels(result.figure) == ["Female", "Male"]

def test_bar_fill_scale_colors():
    spec = (chart(SURVEY, aes(x="Race", fill="Gender")) + geom_bar()
            + scale_fill_manual({"Female": "red", "Male": "blue"}))
    result = render(spec)
    first = result.axes.patches[0].get_facecolor()
    np.testing.assert_allclose(first[:3], [1, 0, 0])

def test_col_sums_y():
    spec = chart(SURVEY, aes(x="Gender", y="income")) + geom_col()
    result = render(spec)
    heights = [patch.get_height() for patch in result.axes.patches]
    assert heights == [
        float(SURVEY.loc[SURVEY["Gender"] == "Female", "income"].sum()),
        float(SURVEY.loc[SURVEY["Gender"] == "Male", "income"].sum()),
    ]

def test_histogram_stacked_groups():
    spec = chart(SURVEY, aes(x="age", fill="Gender")) + geom_histogram(bins=5)
    result = render(spec)
    assert len(result.axes.patches) == 10
    assert result.axes.get_ylabel() == "count"

def test_line_sorted_by_x():
    spec = chart(SURVEY, aes("age", "income")) + geom_line()
    result = render(spec)
    xdata = result.axes.lines[0].get_xdata()
    assert list(xdata) == sorted(SURVEY["age"])

@pytest.mark.parametrize("geom", [geom_boxplot, geom_violin])
def test_distributions_with_fill(geom):
    spec = chart(SURVEY, aes(x="Race", y="income", fill="Gender")) + geom()
    result = render(spec)
    assert legend_labels(result.figure) == ["Female", "Male"]
    assert result.axes.get_xlabel() == "Race"

# tests for the group, alpha and label channels

LINES = pd.DataFrame({"t": [1, 2, 3] * 2, "v": [1, 2, 3, 6, 5, 4], "id": ["a"] * 3 + ["b"] * 3})
MARKS = pd.DataFrame({"x": [1, 2, 3], "y": [1, 2, 3], "weight": [0, 5, 10],
                      "name": ["a", "b", "c"]})

def test_group_channel_draws_one_line_per_value():
    result = render(chart(LINES, aes("t", "v", group="id")) + geom_line())
    assert [list(line.get_ydata()) for line in result.axes.lines] == [[1, 2, 3], [6, 5, 4]]
    assert legend_labels(result.figure) == []

def test_group_channel_fits_one_smoother_per_value():
    result = render(chart(LINES, aes("t", "v", group="id")) + geom_smooth(method="lm"))
    assert len(result.axes.lines) == 2

def test_mapped_alpha_sets_point_opacity():
    result = render(chart(MARKS, aes("x", "y", alpha="weight")) + geom_point())
    np.testing.assert_allclose(result.axes.collections[0].get_alpha(), [0.1, 0.55, 1.0])

def test_mapped_alpha_on_lines_uses_mean_opacity():
    data = LINES.assign(w=[0, 0, 0, 10, 10, 10])
    result = render(chart(data, aes("t", "v", group="id", alpha="w")) + geom_line())
    assert [line.get_alpha() for line in result.axes.lines] == pytest.approx([0.1, 1.0])

def test_label_annotates_points():
    result = render(chart(MARKS, aes("x", "y", label="name")) + geom_point())
    assert [text.get_text() for text in result.axes.texts] == ["a", "b", "c"]

def test_literal_alpha_applies_to_boxplot():
    spec = chart(SURVEY, aes(x="Race", y="income")) + geom_boxplot(alpha=0.4)
    result = render(spec)
    assert result.axes.patches
    assert all(patch.get_alpha() == 0.4 for patch in result.axes.patches)

# tests for facets

def test_facet_wrap_panels_and_hidden_cells():
    spec = chart(SURVEY, aes("age", "income")) + geom_point() + facet_wrap("Race")
    result = render(spec)
    assert isinstance(result.axes, list)
    assert [ax.get_title() for ax in result.axes] == ["Asian", "Black", "White"]
    assert result.extra_info["panels"] == 3
    visible = [ax for ax in result.figure.axes if ax.get_visible()]
    assert len(visible) == 3
    assert len(result.figure.axes) == 4

def test_facet_wrap_subsets_rows_per_panel():
    spec = chart(SURVEY, aes("age", "income")) + geom_point() + facet_wrap("Race", ncol=3)
    result = render(spec)
    counts = [len(ax.collections[0].get_offsets()) for ax in result.axes]
    assert counts == SURVEY["Race"].value_counts().sort_index().tolist()

def test_facet_grid_keeps_empty_panels():
    spec = chart(SURVEY, aes("age", "income")) + geom_point() + facet_grid("Gender", "Smoker")
    result = render(spec)
    assert len(result.axes) == 4
    assert all(ax.get_visible() for ax in result.axes)
    # (Female, yes) has no respondents
    assert result.axes[1].get_title() == "Female, yes"
    assert len(result.axes[1].collections) == 0

def test_facets_share_axes_by_default():
    spec = chart(SURVEY, aes("age", "income")) + geom_point() + facet_wrap("Gender")
    result = render(spec)
    assert result.axes[0].get_xlim() == result.axes[1].get_xlim()
    result = render(spec, sharex=False, sharey=False)
    assert result.axes[0].get_xlim() != result.axes[1].get_xlim()

# tests for labels, themes and scales

def test_labels_and_caption():
    spec = (chart(SURVEY, aes("age", "income")) + geom_point()
            + labs(title="Income", subtitle="by age", x="Age (years)", caption="GSS 2024"))
    result = render(spec)
    assert result.figure.get_suptitle() == "Income\nby age"
    assert result.axes.get_xlabel() == "Age (years)"
    assert result.axes.get_ylabel() == "income"
    assert any(t.get_text() == "GSS 2024" for t in result.figure.texts)
    assert result.title == "Income"

def test_title_keyword_overrides_labels():
    spec = chart(SURVEY, aes("age", "income")) + geom_point() + labs(title="Income")
    assert render(spec, title="Other").figure.get_suptitle() == "Other"

def test_theme_legend_none_and_figsize():
    spec = (chart(SURVEY, aes("age", "income", color="Gender")) + geom_point()
            + theme(legend_position="none", figsize=(5, 4)))
    result = render(spec)
    assert result.figure.legends == []
    assert tuple(result.figure.get_size_inches()) == (5, 4)

def test_render_invalid_legend_position():
    spec = chart(SURVEY, aes("age", "income")) + geom_point()
    with pytest.raises(ValueError, match="Unsupported legend position"):
        render(spec, legend_position="middle")

def test_axis_limits():
    spec = chart(SURVEY, aes("age", "income")) + geom_point() + xlim(0, 100)
    assert render(spec).axes.get_xlim() == (0, 100)

def test_render_delegates_saving(mocker):
    save = mocker.patch("surveyviz.visualizations.static.save_plot")
    spec = chart(SURVEY, aes("age", "income")) + geom_point()
    result = render(spec, directory="figures/out.svg", verbose=True)
    save.assert_called_once_with(result.figure, directory="figures/out.svg",
                                 plot_name="chart", verbose=True)
