"""
imputation.py

Cleaning stages for a TitanicDataset. Every stage takes a dataset and
returns a new one; rows are rebuilt with PassengerRow.replace().

Order used by clean_dataset():
  impute_age -> impute_fare -> impute_embarked -> derive_features
"""

import bisect
import logging

from titanic_eda._types import EmbarkedPort, TitleType

logger = logging.getLogger(__name__)

# Missing Embarked is always filled with Southampton. This is a fixed
# policy, not a mode computed from the data.
DEFAULT_EMBARKED = EmbarkedPort.SOUTHAMPTON

UNKNOWN_TITLE = "Unknown"

_KNOWN_TITLES = {t.value: t for t in TitleType if t is not TitleType.OTHER}


def median(values) -> float:
    """
    Median of a sequence of numbers; 0 for an empty sequence.
    """
    ordered = sorted(values)
    return _median_of_sorted(ordered)


def _median_of_sorted(ordered) -> float:
    n = len(ordered)
    if n == 0:
        return 0
    mid = n // 2
    if n % 2 == 1:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def _impute_with_running_median(dataset, attr: str, label: str):
    """
    Walk the rows in order and replace each missing value by the median
    of the values present in the dataset at that moment, previously
    imputed ones included. The sorted list is kept up to date with
    bisect instead of re-sorting the whole column per row.
    """
    present = sorted(getattr(row, attr) for row in dataset.samples if getattr(row, attr) is not None)
    filled = 0
    out = []
    for row in dataset.samples:
        if getattr(row, attr) is None:
            value = _median_of_sorted(present)
            bisect.insort(present, value)
            row = row.replace(**{attr: value})
            filled += 1
        out.append(row)
    logger.info(f"[Imputation] Filled {filled} missing {label} value(s).")
    return dataset.with_samples(out)


def impute_age(dataset):
    return _impute_with_running_median(dataset, "age", "Age")


def impute_fare(dataset):
    return _impute_with_running_median(dataset, "fare", "Fare")


def impute_embarked(dataset):
    filled = 0
    out = []
    for row in dataset.samples:
        if row.embarked is None:
            row = row.replace(embarked=DEFAULT_EMBARKED)
            filled += 1
        out.append(row)
    logger.info(f"[Imputation] Filled {filled} missing Embarked value(s) with '{DEFAULT_EMBARKED.value}'.")
    return dataset.with_samples(out)


def extract_raw_title(name) -> str:
    """
    'Braund, Mr. Owen Harris' -> 'Mr'. Returns 'Unknown' when the name has
    no ', <title>.' part.
    """
    if not name or "," not in name:
        return UNKNOWN_TITLE
    rest = name.split(",", 1)[1]
    if "." not in rest:
        return UNKNOWN_TITLE
    title = rest.split(".", 1)[0].strip()
    return title or UNKNOWN_TITLE


def canonical_title(raw_title: str) -> TitleType:
    return _KNOWN_TITLES.get(raw_title, TitleType.OTHER)


def family_size(sib_sp, parch) -> int:
    return (sib_sp or 0) + (parch or 0) + 1


def derive_features(dataset):
    """
    Title, FamilySize and IsAlone for every row. SibSp/Parch that are
    missing count as 0.
    """
    out = []
    for row in dataset.samples:
        sib_sp = row.sib_sp or 0
        parch = row.parch or 0
        size = family_size(sib_sp, parch)
        out.append(row.replace(
            sib_sp=sib_sp,
            parch=parch,
            title=canonical_title(extract_raw_title(row.name)),
            family_size=size,
            is_alone=int(size == 1),
        ))
    return dataset.with_samples(out, derived=True)


CLEANING_STAGES = [
    ("age", impute_age),
    ("fare", impute_fare),
    ("embarked", impute_embarked),
    ("features", derive_features),
]


def clean_dataset(dataset):
    """
    Run every cleaning stage in order and return the cleaned dataset.
    The input dataset is left untouched.
    """
    for stage_name, stage in CLEANING_STAGES:
        logger.debug(f"[Imputation] Running stage '{stage_name}'")
        dataset = stage(dataset)
    return dataset
