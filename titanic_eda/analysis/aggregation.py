"""
aggregation.py

Grouped statistics over a TitanicDataset:
 - missing_report: per-field missing count and percent
 - grouped_numeric_stats: count/mean/std/median/min/max per group
 - grouped_categorical_counts: per-category counts and survival rate
 - aggregate: single entry point dispatching on the field kind

None of these functions modify the dataset; missing values are
filtered out, and groups with no values report None instead of raising.
"""

import numpy as np

from titanic_eda._types import (
    OUTCOME_FIELD, NUMERIC_FIELDS, CATEGORICAL_FIELDS, FIELD_DOMAINS,
)
from titanic_eda.dataset.titanic_dataset import FIELD_ATTRS
from titanic_eda.errors import UnknownFieldError

NUMERIC = "numeric"
CATEGORICAL = "categorical"


class GroupKey:
    """
    A field name plus one of its values, e.g. Sex=male.
    GroupKey(None, None) stands for the whole dataset.
    """

    def __init__(self, field, value):
        self.field = field
        self.value = value

    def __eq__(self, other):
        if not isinstance(other, GroupKey):
            return NotImplemented
        return (self.field, self.value) == (other.field, other.value)

    def __hash__(self):
        return hash((self.field, self.value))

    def __repr__(self):
        return f"GroupKey({self.field!r}, {self.value!r})"

    def __str__(self):
        if self.field is None:
            return "all"
        return f"{self.field}={self.value}"


ALL_ROWS = GroupKey(None, None)


class AggregateResult(dict):
    """
    Mapping GroupKey -> stats dict, remembering what was aggregated.
    """

    def __init__(self, field, group_by, kind, data=None):
        super().__init__(data or {})
        self.field = field
        self.group_by = group_by
        self.kind = kind

    def get_value(self, value):
        """
        Stats for a raw group value, without building the GroupKey by hand.
        """
        key_field = self.field if self.kind == CATEGORICAL else self.group_by
        return self[GroupKey(key_field, value)]

    def as_dict(self) -> dict:
        """
        JSON-friendly view: {str(group value): stats}.
        """
        return {("all" if key.field is None else str(key.value)): stats for key, stats in self.items()}


def check_field(field: str):
    if field not in FIELD_ATTRS:
        raise UnknownFieldError(field)


def group_values(dataset, field: str) -> list:
    """
    Known domain values of a discrete field first, then any other
    observed values in sorted order.
    """
    domain = list(FIELD_DOMAINS.get(field, []))
    extra = {v for v in dataset.values(field) if v is not None and v not in domain}
    return domain + sorted(extra, key=lambda v: (str(type(v)), v))


def describe(values) -> dict:
    """
    count/mean/std/median/min/max for a list of numbers.
    std is the population standard deviation (divide by N).
    """
    arr = np.asarray([v for v in values if v is not None], dtype=float)
    if arr.size == 0:
        return {"count": 0, "mean": None, "std": None, "median": None, "min": None, "max": None}
    return {
        "count": int(arr.size),
        "mean": float(arr.mean()),
        "std": float(arr.std()),
        "median": float(np.median(arr)),
        "min": float(arr.min()),
        "max": float(arr.max()),
    }


def survival_rate(survived_count: int, total: int):
    if total == 0:
        return None
    return survived_count / total * 100


def shape_summary(dataset) -> dict:
    return {"row_count": len(dataset), "column_names": dataset.column_names}


def missing_report(dataset, fields=None) -> dict:
    """
    {field: {"count": n_missing, "percent": n_missing / rows * 100}}.
    Pass the raw dataset for data quality, the cleaned one to confirm
    that imputation left nothing missing.
    """
    fields = list(fields) if fields is not None else dataset.column_names
    total = len(dataset)
    report = {}
    for field in fields:
        check_field(field)
        count = sum(1 for v in dataset.values(field) if v is None)
        report[field] = {
            "count": count,
            "percent": (count / total * 100) if total else 0.0,
        }
    return report


def grouped_numeric_stats(dataset, field: str, group_by=OUTCOME_FIELD) -> AggregateResult:
    check_field(field)
    if field not in NUMERIC_FIELDS:
        raise UnknownFieldError(field, "not a numeric field")

    result = AggregateResult(field, group_by, NUMERIC)
    values = dataset.values(field)
    if group_by is None:
        result[ALL_ROWS] = describe(values)
        return result

    check_field(group_by)
    groups = dataset.values(group_by)
    for group in group_values(dataset, group_by):
        in_group = [v for v, g in zip(values, groups) if g == group]
        result[GroupKey(group_by, group)] = describe(in_group)
    return result


def grouped_categorical_counts(dataset, field: str, group_by=OUTCOME_FIELD) -> AggregateResult:
    check_field(field)
    if group_by is not None:
        check_field(group_by)

    result = AggregateResult(field, group_by, CATEGORICAL)
    values = dataset.values(field)
    outcomes = dataset.values(OUTCOME_FIELD)
    groups = dataset.values(group_by) if group_by is not None else None
    group_order = group_values(dataset, group_by) if group_by is not None else []

    for category in group_values(dataset, field):
        idxs = [i for i, v in enumerate(values) if v == category]
        total = len(idxs)
        survived_count = sum(1 for i in idxs if outcomes[i] == 1)
        stats = {
            "count": total,
            "survived_count": survived_count,
            "survival_rate_percent": survival_rate(survived_count, total),
        }
        if groups is not None:
            stats["groups"] = {
                str(g): sum(1 for i in idxs if groups[i] == g) for g in group_order
            }
        result[GroupKey(field, category)] = stats
    return result


def aggregate(dataset, field: str, group_by=None, kind=None) -> AggregateResult:
    """
    Aggregate `field`, optionally partitioned by `group_by`.
    kind defaults to 'categorical' for discrete fields, 'numeric' otherwise.
    """
    check_field(field)
    if group_by is not None:
        check_field(group_by)

    if kind is None:
        if field in CATEGORICAL_FIELDS or field not in NUMERIC_FIELDS:
            kind = CATEGORICAL
        else:
            kind = NUMERIC

    if kind == NUMERIC:
        return grouped_numeric_stats(dataset, field, group_by=group_by)
    if kind == CATEGORICAL:
        return grouped_categorical_counts(dataset, field, group_by=group_by)
    raise ValueError(f"[aggregate] Unknown aggregation kind '{kind}'; expected numeric or categorical.")
