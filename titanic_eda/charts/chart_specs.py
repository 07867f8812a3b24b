"""
chart_specs.py

Pure functions from analysis results to ChartSpec value objects.
A ChartSpec only describes a chart (title, labels, series); drawing it is
left to plotting.render_charts or any other renderer.
"""

import re

OUTCOME_COLORS = {"0": "red", "1": "green"}


class ChartSpec:
    """
    Description of one bar chart:
     - labels: x-axis categories
     - series: list of {"label": str, "values": [...], "color": str or None},
               each values list as long as labels
    """

    def __init__(self, title, labels, series, x_label="", y_label="", chart_type="bar", y_max=None):
        self.title = title
        self.labels = [str(label) for label in labels]
        self.series = series
        self.x_label = x_label
        self.y_label = y_label
        self.chart_type = chart_type
        self.y_max = y_max
        self.verify()

    def verify(self):
        if not self.series:
            raise ValueError(f"ChartSpec '{self.title}' has no series.")
        for s in self.series:
            if len(s["values"]) != len(self.labels):
                raise ValueError(
                    f"ChartSpec '{self.title}': series '{s['label']}' has {len(s['values'])} values "
                    f"for {len(self.labels)} labels."
                )

    @property
    def slug(self) -> str:
        return re.sub(r"[^a-z0-9]+", "_", self.title.lower()).strip("_")

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "chart_type": self.chart_type,
            "labels": list(self.labels),
            "series": [dict(s) for s in self.series],
            "x_label": self.x_label,
            "y_label": self.y_label,
            "y_max": self.y_max,
        }


def missing_chart(missing_report) -> ChartSpec:
    fields = list(missing_report)
    return ChartSpec(
        title="Missing Values",
        labels=fields,
        series=[{"label": "% Missing", "values": [missing_report[f]["percent"] for f in fields],
                 "color": "orange"}],
        x_label="Field",
        y_label="% Missing",
        y_max=100,
    )


def categorical_chart(field, counts) -> ChartSpec:
    """
    `counts` is one entry of report["categorical_counts_by_outcome"].
    """
    categories = list(counts)
    group_names = []
    for stats in counts.values():
        for g in stats.get("groups", {}):
            if g not in group_names:
                group_names.append(g)
    series = [
        {"label": f"Survived={g}",
         "values": [counts[c].get("groups", {}).get(g, 0) for c in categories],
         "color": OUTCOME_COLORS.get(g)}
        for g in group_names
    ]
    return ChartSpec(title=field, labels=categories, series=series, x_label=field, y_label="Count")


def histogram_chart(field, hist) -> ChartSpec:
    """
    `hist` is one entry of report["histogram_bins"].
    """
    labels = list(range(hist["bin_count"]))
    series = [
        {"label": f"Survived={g}", "values": list(info["counts"]), "color": OUTCOME_COLORS.get(g)}
        for g, info in hist["groups"].items()
    ]
    return ChartSpec(title=f"{field} distribution", labels=labels, series=series,
                     x_label="Bin", y_label="Count")


def correlation_chart(corrs) -> ChartSpec:
    fields = list(corrs)
    return ChartSpec(
        title="Correlation with Survived",
        labels=fields,
        series=[{"label": "Pearson r", "values": [corrs[f] for f in fields], "color": "steelblue"}],
        x_label="Field",
        y_label="r",
    )


def build_chart_specs(report) -> list:
    specs = [missing_chart(report["missing_report"])]
    for field, counts in report["categorical_counts_by_outcome"].items():
        specs.append(categorical_chart(field, counts))
    for field, hist in report["histogram_bins"].items():
        specs.append(histogram_chart(field, hist))
    specs.append(correlation_chart(report["correlations"]))
    return specs
