import argparse
import json
import logging
import os
import sys

from titanic_eda._types import RAW_FIELDS, DERIVED_FIELDS, NUMERIC_FIELDS, REQUIRED_FIELDS
from titanic_eda.analysis.aggregation import missing_report
from titanic_eda.analysis.analyzer import Analyzer, build_summary_table
from titanic_eda.config import DEFAULT_BIN_COUNT, DEFAULT_SAVEDIR, configure_logging
from titanic_eda.dataset.titanic_dataset import TitanicDataset
from titanic_eda.descriptor.descriptor import (
    export_processed_csv, export_summary_json, to_json_compatible,
)

logger = logging.getLogger("titanic_eda.run")

PROCESSED_CSV_NAME = "titanic_train_processed.csv"
SUMMARY_JSON_NAME = "titanic_train_summary.json"


########################################################
#   "do_analysis"
########################################################

def do_analysis(args):
    savedir = args.savedir or DEFAULT_SAVEDIR
    os.makedirs(savedir, exist_ok=True)
    eval_json_out = os.path.join(savedir, args.eval_json_out)

    ds = TitanicDataset.from_file(args.data, show_progress=args.progress)
    analyzer = Analyzer(bin_count=args.bins)
    report = analyzer.analyze_and_write_json(ds, output_json=eval_json_out)

    if args.plot:
        # matplotlib is only needed when charts are requested
        from titanic_eda.charts.chart_specs import build_chart_specs
        from titanic_eda.charts.plotting import render_charts
        paths = render_charts(build_chart_specs(report), os.path.join(savedir, "charts"))
        logger.info(f"[do_analysis] Rendered {len(paths)} charts.")

    if args.export_csv:
        export_processed_csv(analyzer.cleaned_dataset, os.path.join(savedir, PROCESSED_CSV_NAME))
    if args.export_json:
        export_summary_json(ds, os.path.join(savedir, SUMMARY_JSON_NAME), report=report)

    print("\n=== ANALYSIS SUMMARY ===\n")
    print(build_summary_table(report))
    return report


def do_missing(args):
    ds = TitanicDataset.from_file(args.data, show_progress=args.progress)
    report = missing_report(ds)
    print(json.dumps(to_json_compatible(report), indent=2))
    return report


def list_fields():
    print("Raw fields:")
    for name in RAW_FIELDS:
        tags = []
        if name in REQUIRED_FIELDS:
            tags.append("required")
        if name in NUMERIC_FIELDS:
            tags.append("numeric")
        print(f" - {name}" + (f" ({', '.join(tags)})" if tags else ""))
    print("Derived fields:")
    for name in DERIVED_FIELDS:
        print(f" - {name}")


########################################################
#   MAIN CLI
########################################################

def build_parser():
    parser = argparse.ArgumentParser(
        prog="titanic-eda",
        description="Exploratory survival statistics for the Titanic passenger dataset."
    )
    parser.add_argument("--log-level", default=None,
                        help="Logging level (DEBUG, INFO, WARNING...). Overrides TITANIC_EDA_LOG_LEVEL.")
    subparsers = parser.add_subparsers(dest="command", help="Top-level commands")

    subparsers.add_parser("fields", help="List the fixed dataset schema.")

    analyze_parser = subparsers.add_parser("analyze", help="Run the full analysis on a dataset file.")
    analyze_parser.add_argument("--data", required=True,
                                help="Path to a .csv / .tsv / .json Titanic file.")
    analyze_parser.add_argument("--savedir", default=None,
                                help="Directory for the report, charts and exports.")
    analyze_parser.add_argument("--eval-json-out", default="analysis_results.json",
                                help="File name of the JSON report inside --savedir.")
    analyze_parser.add_argument("--bins", type=int, default=DEFAULT_BIN_COUNT,
                                help="Number of histogram bins for Age/Fare.")
    analyze_parser.add_argument("--plot", action="store_true",
                                help="Render the charts as PNG files.")
    analyze_parser.add_argument("--export-csv", action="store_true",
                                help="Write the cleaned dataset as CSV.")
    analyze_parser.add_argument("--export-json", action="store_true",
                                help="Write a JSON summary (rows, columns, missing values).")
    analyze_parser.add_argument("--progress", action="store_true",
                                help="Show a progress bar while reading rows.")

    missing_parser = subparsers.add_parser("missing", help="Print the missing-value report only.")
    missing_parser.add_argument("--data", required=True,
                                help="Path to a .csv / .tsv / .json Titanic file.")
    missing_parser.add_argument("--progress", action="store_true",
                                help="Show a progress bar while reading rows.")
    return parser


def main_cli(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    logger.debug(f"[main_cli] Full arguments => {args}")

    try:
        if args.command == "fields":
            list_fields()
        elif args.command == "analyze":
            do_analysis(args)
        elif args.command == "missing":
            do_missing(args)
        else:
            parser.print_help()
            return 2
    except (ValueError, FileNotFoundError) as e:
        logger.error(f"[main_cli] {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main_cli())
