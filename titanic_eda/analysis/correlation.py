"""
correlation.py

Pearson correlation of numeric fields against the outcome, and
equal-width histogram binning.
"""

import numpy as np
from scipy.stats import pearsonr

from titanic_eda._types import OUTCOME_FIELD, NUMERIC_FIELDS, CORRELATION_FIELDS
from titanic_eda.analysis.aggregation import check_field, group_values
from titanic_eda.errors import UnknownFieldError


def pearson(xs, ys) -> float:
    """
    Pearson r between two equally long sequences.
    Returns 0.0 (not NaN) when fewer than two pairs are given or either
    side has zero variance, so callers always get a number in [-1, 1].
    """
    x = np.asarray(xs, dtype=float)
    y = np.asarray(ys, dtype=float)
    if x.shape != y.shape:
        raise ValueError(f"[pearson] Length mismatch: {x.size} vs {y.size}")
    if x.size < 2:
        return 0.0
    if np.sum((x - x.mean()) ** 2) == 0 or np.sum((y - y.mean()) ** 2) == 0:
        return 0.0
    r = pearsonr(x, y)[0]
    if np.isnan(r):
        return 0.0
    return float(np.clip(r, -1.0, 1.0))


def correlate(dataset, field: str, outcome=OUTCOME_FIELD) -> float:
    """
    Correlation of `field` with `outcome` over rows where the field is present.
    """
    check_field(field)
    check_field(outcome)
    if field not in NUMERIC_FIELDS:
        raise UnknownFieldError(field, "not a numeric field")
    pairs = [(x, y) for x, y in zip(dataset.values(field), dataset.values(outcome))
             if x is not None and y is not None]
    if not pairs:
        return 0.0
    xs, ys = zip(*pairs)
    return pearson(xs, ys)


def correlations(dataset, fields=None, outcome=OUTCOME_FIELD) -> dict:
    fields = CORRELATION_FIELDS if fields is None else fields
    return {field: correlate(dataset, field, outcome=outcome) for field in fields}


def bin_values(values, bin_count: int) -> list:
    """
    Count values into `bin_count` equal-width bins spanning [min, max].
    The max value lands in the last bin; a zero-width range puts
    everything in bin 0.
    """
    if bin_count <= 0:
        raise ValueError(f"[bin_values] bin_count must be positive, got {bin_count}")
    arr = np.asarray([v for v in values if v is not None], dtype=float)
    bins = [0] * bin_count
    if arr.size == 0:
        return bins

    lo, hi = float(arr.min()), float(arr.max())
    step = (hi - lo) / bin_count
    if step == 0:
        bins[0] = int(arr.size)
        return bins

    idx = np.floor((arr - lo) / step).astype(int)
    idx = np.clip(idx, 0, bin_count - 1)
    for i in idx:
        bins[i] += 1
    return bins


def histogram_bins(dataset, field: str, bin_count: int = 10, group_by=OUTCOME_FIELD) -> dict:
    """
    Per group of `group_by`: the bin counts of `field` and the [min, max]
    range they cover. Each group is binned over its own range.
    """
    check_field(field)
    check_field(group_by)
    if field not in NUMERIC_FIELDS:
        raise UnknownFieldError(field, "not a numeric field")

    values = dataset.values(field)
    groups = dataset.values(group_by)
    out = {"bin_count": bin_count, "groups": {}}
    for group in group_values(dataset, group_by):
        in_group = [v for v, g in zip(values, groups) if g == group and v is not None]
        out["groups"][str(group)] = {
            "counts": bin_values(in_group, bin_count),
            "range": [min(in_group), max(in_group)] if in_group else None,
        }
    return out
