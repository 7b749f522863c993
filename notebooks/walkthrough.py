"""
Visualizing labeled survey data: a guided walkthrough.

Run as a script (``python notebooks/walkthrough.py [survey.sav]``) or cell
by cell in an editor that understands ``# %%`` markers. Without a path a
small synthetic survey is written to a temporary directory first.

Figures are written to ``walkthrough_output/`` next to the working
directory: PNG files for static charts and HTML files for interactive
ones.
"""

# %%
import sys
import tempfile
from pathlib import Path

import numpy as np
import pandas as pd
import pyreadstat

import surveyviz as sv

OUTPUT = Path("walkthrough_output")


def synthetic_survey(directory: Path, n: int = 300) -> Path:
    """Write a small SPSS file resembling a general social survey extract."""
    rng = np.random.default_rng(2024)
    age = rng.integers(18, 85, size=n)
    df = pd.DataFrame({
        "Gender": rng.choice([0, 1, np.nan], size=n, p=[0.48, 0.48, 0.04]),
        "Race": rng.choice([1, 2, 3, 4, 5], size=n, p=[0.6, 0.15, 0.1, 0.1, 0.05]),
        "age": age.astype(float),
        "income": (20 + 0.6 * age + rng.normal(0, 8, size=n)).round(1),
        "happy": rng.choice([1, 2, 3, 8], size=n, p=[0.3, 0.5, 0.17, 0.03]),
    })
    path = directory / "survey.sav"
    pyreadstat.write_sav(
        df,
        str(path),
        column_labels=["Respondent gender", "Race of respondent", "Age",
                       "Income (k$)", "General happiness"],
        variable_value_labels={
            "Gender": {0: "Male", 1: "Female"},
            "Race": {1: "White", 2: "Black", 3: "Asian"},
            "happy": {1: "Very happy", 2: "Pretty happy", 3: "Not too happy",
                      8: "Don't know"},
        },
    )
    return path


# %% [markdown]
# ## 1. Load the labeled file
# Codes stay numeric; labels travel alongside in the dataset object.

# %%
def load(path=None):
    if path is None:
        path = synthetic_survey(Path(tempfile.mkdtemp()))
    survey = sv.load_dataset(path)
    print(survey.describe().table)
    print(survey.labels_for("Gender"))
    return survey


# %% [markdown]
# ## 2. Recode codes into categories
# Unlisted codes fall back to "Other" (Race) or to missing (Gender);
# "Don't know" answers are declared missing explicitly.

# %%
def prepare(survey):
    table = sv.recode_columns(survey.data, [
        sv.Recoding("Gender", {0: "Male", 1: "Female"}, fallback=None),
        sv.Recoding("Race", survey.labels_for("Race")),
        sv.Recoding("happy", {1: "Very happy", 2: "Pretty happy", 3: "Not too happy"},
                    missing=[8], ordered=True),
    ], verbose=True)
    print(sv.frequency_table(table["Gender"]).table)
    print(sv.frequency_table(table["Race"], sort=True).table)
    print(sv.describe_numeric(table, columns=["age", "income"]).table)
    return table


# %% [markdown]
# ## 3. Bar charts
# Counts per category; the fill channel splits each bar by gender.

# %%
def bar_charts(table):
    base = sv.chart(table, sv.aes(x="Race"))
    sv.render(base + sv.geom_bar(fill="steelblue") + sv.labs(title="Respondents by race"),
              directory=OUTPUT / "bar_simple.png")
    stacked = (sv.chart(table, sv.aes(x="Race", fill="Gender"))
               + sv.geom_bar(position="dodge")
               + sv.labs(title="Race and gender", fill="Gender"))
    sv.render(stacked, directory=OUTPUT / "bar_dodge.png")
    return stacked


# %% [markdown]
# ## 4. Global versus local aesthetics
# A color bound in ``chart`` reaches every layer; a color bound inside one
# layer stays there; a literal color paints the layer and adds no legend.

# %%
def scatter_charts(table):
    global_color = (sv.chart(table, sv.aes("age", "income", color="Gender"))
                    + sv.geom_point(alpha=0.6)
                    + sv.geom_smooth(method="lm"))
    local_color = (sv.chart(table, sv.aes("age", "income"))
                   + sv.geom_point(sv.aes(color="Gender"), alpha=0.6)
                   + sv.geom_smooth(method="loess", color="black"))
    for name, spec in {"global": global_color, "local": local_color}.items():
        result = sv.render(spec + sv.labs(title=f"{name} color mapping"),
                           directory=OUTPUT / f"scatter_{name}.png")
        print(name, "legend:", result.extra_info["legend_entries"])
    return global_color


# %% [markdown]
# ## 5. Facets
# ``facet_wrap`` keeps only the combinations that occur; ``facet_grid``
# always draws the full matrix.

# %%
def facets(table, scatter):
    wrapped = scatter + sv.facet_wrap("Race", ncol=2) + sv.theme(style="whitegrid")
    grid = scatter + sv.facet_grid("happy", "Gender")
    for name, spec in {"wrap": wrapped, "grid": grid}.items():
        result = sv.render(spec, directory=OUTPUT / f"facet_{name}.png")
        print(name, "panels:", result.extra_info["panels"])
    return wrapped


# %% [markdown]
# ## 6. Interactive charts
# Converting keeps layers, colors and panels; layout tweaks come after.

# %%
def interactive(table, spec):
    result = sv.to_interactive(spec, width=900, height=650)
    print(sv.inspect_figure(result))
    moved = sv.update_layout(result, legend=sv.LegendPosition(x=0.5, y=-0.2,
                                                              xanchor="center",
                                                              orientation="h"))
    moved.figure.write_html(OUTPUT / "scatter_facets.html")
    box = sv.interactive_plot(table, "box", x="Race", y="income", color="Gender",
                              title="Income by race", directory=OUTPUT)
    violin = sv.interactive_plot(table, "violin", x="happy", y="age",
                                 directory=OUTPUT)
    return box, violin


# %%
def main(argv):
    OUTPUT.mkdir(exist_ok=True)
    survey = load(argv[1] if len(argv) > 1 else None)
    table = prepare(survey)
    bar_charts(table)
    scatter = scatter_charts(table)
    wrapped = facets(table, scatter)
    interactive(table, wrapped)


if __name__ == "__main__":
    main(sys.argv)
