import json
import logging
import os

from titanic_eda._types import (
    NUMERIC_STAT_FIELDS, CATEGORICAL_STAT_FIELDS, CORRELATION_FIELDS, HISTOGRAM_FIELDS,
)
from titanic_eda.analysis.aggregation import (
    shape_summary, missing_report, grouped_numeric_stats, grouped_categorical_counts,
)
from titanic_eda.analysis.correlation import correlations, histogram_bins
from titanic_eda.analysis.ranking import key_finding
from titanic_eda.cleaning.imputation import clean_dataset
from titanic_eda.config import DEFAULT_BIN_COUNT
from titanic_eda.dataset.titanic_dataset import TitanicDataset, build_dataset
from titanic_eda.descriptor.descriptor import to_json_compatible

logger = logging.getLogger(__name__)


class Analyzer:
    """
    Runs one full analysis: build rows, clean them, compute every
    statistic on the cleaned dataset and pick the key finding.

    The missing-value report is taken on the raw rows (data quality) and
    again on the cleaned rows (should be all zeros for Age/Fare/Embarked).
    """

    def __init__(self, bin_count: int = DEFAULT_BIN_COUNT, show_progress: bool = False):
        """
        :param bin_count: number of equal-width bins for the Age/Fare histograms
        :param show_progress: show a tqdm bar while building rows
        """
        if bin_count <= 0:
            raise ValueError(f"[Analyzer] bin_count must be positive, got {bin_count}")
        self.bin_count = bin_count
        self.show_progress = show_progress
        self.raw_dataset = None
        self.cleaned_dataset = None

    def analyze(self, data) -> dict:
        """
        `data` is a TitanicDataset or an ordered sequence of records.
        """
        if isinstance(data, TitanicDataset):
            raw = data
        else:
            raw = build_dataset(data, show_progress=self.show_progress)
        logger.info(f"[Analyzer] Analysing {len(raw)} rows ({len(raw.rejected)} rejected).")

        cleaned = clean_dataset(raw)
        for idx, ok, reason in cleaned.verify_all():
            logger.warning(f"[Analyzer] (idx={idx}) {reason}")
        self.raw_dataset = raw
        self.cleaned_dataset = cleaned

        numeric = {f: grouped_numeric_stats(cleaned, f) for f in NUMERIC_STAT_FIELDS}
        categorical = {f: grouped_categorical_counts(cleaned, f) for f in CATEGORICAL_STAT_FIELDS}
        finding = key_finding(cleaned, categorical_counts=categorical, numeric_stats=numeric)
        logger.info(f"[Analyzer] Key finding => {finding.factor_name}")

        return {
            "shape_summary": shape_summary(raw),
            "missing_report": missing_report(raw),
            "missing_report_cleaned": missing_report(cleaned),
            "numeric_stats_by_outcome": {f: res.as_dict() for f, res in numeric.items()},
            "categorical_counts_by_outcome": {f: res.as_dict() for f, res in categorical.items()},
            "correlations": correlations(cleaned, CORRELATION_FIELDS),
            "histogram_bins": {f: histogram_bins(cleaned, f, bin_count=self.bin_count) for f in HISTOGRAM_FIELDS},
            "key_finding": finding.to_dict(),
            "rejected_rows": [err.to_dict() for err in raw.rejected],
        }

    def analyze_and_write_json(self, data, output_json=None) -> dict:
        """
        analyze(), then write the report to `output_json` when given.
        """
        report = self.analyze(data)
        if output_json:
            out_dir = os.path.dirname(output_json)
            if out_dir:
                os.makedirs(out_dir, exist_ok=True)
            with open(output_json, "w", encoding="utf-8") as f:
                json.dump(to_json_compatible(report), f, indent=2)
            logger.info(f"[Analyzer] Wrote analysis report to '{output_json}'")
        return report


def _fmt(value, spec=".2f"):
    if value is None:
        return "n/a"
    return format(value, spec)


def build_summary_table(report) -> str:
    """
    Readable ASCII summary of a report, for the CLI.
    """
    shape = report.get("shape_summary", {})
    lines = []
    lines.append("-----------------------------------------------------")
    lines.append(f"Rows    : {shape.get('row_count', 0)}")
    lines.append(f"Columns : {len(shape.get('column_names', []))}")
    lines.append(f"Rejected: {len(report.get('rejected_rows', []))}")

    lines.append("")
    lines.append("Missing values (before imputation):")
    for field, info in report.get("missing_report", {}).items():
        if info["count"]:
            lines.append(f"   {field:<12} {info['count']:>5}  ({info['percent']:.1f}%)")

    lines.append("")
    lines.append("Survival rate by category:")
    for field, cats in report.get("categorical_counts_by_outcome", {}).items():
        parts = [f"{cat}={_fmt(stats['survival_rate_percent'], '.1f')}%" for cat, stats in cats.items()
                 if stats["count"]]
        lines.append(f"   {field:<12} " + ", ".join(parts))

    lines.append("")
    lines.append("Mean by outcome (Survived=0 / Survived=1):")
    for field, groups in report.get("numeric_stats_by_outcome", {}).items():
        died = groups.get("0", {}).get("mean")
        lived = groups.get("1", {}).get("mean")
        lines.append(f"   {field:<12} {_fmt(died):>8} / {_fmt(lived):<8}")

    lines.append("")
    lines.append("Correlation with Survived:")
    for field, r in sorted(report.get("correlations", {}).items(), key=lambda kv: -abs(kv[1])):
        lines.append(f"   {field:<12} {r:+.3f}")

    finding = report.get("key_finding", {})
    lines.append("")
    lines.append(f"Key finding: {finding.get('factor_name')}")
    lines.append(f"   {finding.get('explanation')}")
    lines.append("-----------------------------------------------------")
    return "\n".join(lines)
