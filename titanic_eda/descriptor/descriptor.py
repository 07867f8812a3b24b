"""
descriptor.py: Turns datasets and analysis reports into plain data and
writes them out (processed CSV, JSON summary).
"""

import csv
import enum
import json
import logging
import os

import numpy as np

from titanic_eda._types import ALL_FIELDS, RAW_FIELDS

logger = logging.getLogger(__name__)


def to_json_compatible(obj):
    """
    Recursively convert an object into something json.dump accepts:
    enums become their value, numpy scalars become Python numbers,
    tuples become lists and dict keys become strings.
    """
    # 1) Check basic built-in types:
    if isinstance(obj, (bool, int, str, type(None))):
        return obj
    if isinstance(obj, float):
        # NaN is not valid JSON
        return None if np.isnan(obj) else obj

    # 2) Enums and numpy scalars
    if isinstance(obj, enum.Enum):
        return obj.value
    if isinstance(obj, np.generic):
        return to_json_compatible(obj.item())

    # 3) Check list/tuple/array
    if isinstance(obj, (list, tuple)):
        return [to_json_compatible(i) for i in obj]
    if isinstance(obj, np.ndarray):
        return [to_json_compatible(i) for i in obj.tolist()]

    # 4) Check dict
    if isinstance(obj, dict):
        return {str(k): to_json_compatible(v) for k, v in obj.items()}

    # 5) Objects that know how to describe themselves
    if hasattr(obj, "to_dict") and callable(obj.to_dict):
        return to_json_compatible(obj.to_dict())
    raise TypeError(f"[descriptor] Cannot serialise object of type {type(obj).__name__}")


def _ensure_parent(path: str):
    out_dir = os.path.dirname(path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)


def export_processed_csv(dataset, path: str) -> str:
    """
    Write every row of `dataset` to CSV. Derived columns are included
    once the dataset has been through feature derivation; missing
    values are written as empty cells.
    """
    columns = list(ALL_FIELDS) if dataset.derived else list(RAW_FIELDS)
    _ensure_parent(path)
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=columns)
        writer.writeheader()
        for row in dataset.samples:
            record = row.to_record()
            writer.writerow({c: ("" if record[c] is None else record[c]) for c in columns})
    logger.info(f"[descriptor] Wrote {len(dataset)} rows to '{path}'")
    return path


def export_summary_json(dataset, path: str, report=None) -> str:
    """
    Write {rows, columns} for `dataset`, plus the missing-value report
    and key finding when a report is given.
    """
    summary = {
        "rows": len(dataset),
        "columns": dataset.column_names,
    }
    if report is not None:
        summary["missing_report"] = report.get("missing_report")
        summary["key_finding"] = report.get("key_finding")
    _ensure_parent(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(to_json_compatible(summary), f, indent=2)
    logger.info(f"[descriptor] Wrote summary to '{path}'")
    return path
