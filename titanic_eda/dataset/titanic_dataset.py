import csv
import json
import logging
import math
import os
from collections.abc import Mapping

from tqdm import tqdm

from titanic_eda._types import (
    SexType, EmbarkedPort, TitleType,
    RAW_FIELDS, DERIVED_FIELDS, ALL_FIELDS, FIELD_DOMAINS,
)
from titanic_eda.errors import EmptyDatasetError, MalformedRecordError, UnknownFieldError

logger = logging.getLogger(__name__)

# Schema column name -> attribute name on PassengerRow
FIELD_ATTRS = {
    "PassengerId": "passenger_id",
    "Survived": "survived",
    "Pclass": "pclass",
    "Name": "name",
    "Sex": "sex",
    "Age": "age",
    "SibSp": "sib_sp",
    "Parch": "parch",
    "Ticket": "ticket",
    "Fare": "fare",
    "Cabin": "cabin",
    "Embarked": "embarked",
    "Title": "title",
    "FamilySize": "family_size",
    "IsAlone": "is_alone",
}


def is_missing(value) -> bool:
    """
    Absent, None, blank string and NaN all mean 'missing'.
    """
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, float):
        return math.isnan(value)
    return False


def parse_float(value):
    if is_missing(value) or isinstance(value, bool):
        return None
    try:
        out = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(out) or math.isinf(out):
        return None
    return out


def parse_int(value):
    out = parse_float(value)
    if out is None or not out.is_integer():
        return None
    return int(out)


def parse_text(value):
    if is_missing(value):
        return None
    return str(value).strip()


def parse_sex(value):
    sex_str = str(value).strip().lower() if not is_missing(value) else ""
    if sex_str in ["male", "m"]:
        return SexType.MALE
    if sex_str in ["female", "f"]:
        return SexType.FEMALE
    return None


def parse_embarked(value):
    if is_missing(value):
        return None
    try:
        return EmbarkedPort(str(value).strip().upper())
    except ValueError:
        return None


class PassengerRow:
    """
    One passenger. Rows never change after construction; cleaning
    steps build a new row through replace().

    Basic constraints, enforced by row_from_record:
      - survived in [0,1]
      - pclass in [1,2,3]
      - sex in {male, female}
      - sib_sp, parch >= 0 when present
      - age, fare >= 0 when present
    """

    def __init__(self, survived, pclass, sex, name=None, age=None, sib_sp=None, parch=None,
                 fare=None, embarked=None, passenger_id=None, ticket=None, cabin=None,
                 title=None, family_size=None, is_alone=None):
        self.passenger_id = passenger_id
        self.survived = survived
        self.pclass = pclass
        self.name = name
        self.sex = sex
        self.age = age
        self.sib_sp = sib_sp
        self.parch = parch
        self.ticket = ticket
        self.fare = fare
        self.cabin = cabin
        self.embarked = embarked
        self.title = title
        self.family_size = family_size
        self.is_alone = is_alone
        object.__setattr__(self, "_frozen", True)

    def __setattr__(self, attr, value):
        if getattr(self, "_frozen", False):
            raise AttributeError(f"PassengerRow is read-only (tried to set '{attr}').")
        object.__setattr__(self, attr, value)

    def __eq__(self, other):
        if not isinstance(other, PassengerRow):
            return NotImplemented
        return self.to_record() == other.to_record()

    def __hash__(self):
        return hash(tuple(self.to_record().items()))

    def __repr__(self):
        return (f"PassengerRow(survived={self.survived}, pclass={self.pclass}, "
                f"sex={self.get('Sex')}, age={self.age}, name={self.name!r})")

    def replace(self, **changes):
        """
        Return a new row with the given attributes changed.
        """
        attrs = {attr: getattr(self, attr) for attr in FIELD_ATTRS.values()}
        unknown = set(changes) - set(attrs)
        if unknown:
            raise AttributeError(f"PassengerRow has no attribute(s) {sorted(unknown)}")
        attrs.update(changes)
        return PassengerRow(**attrs)

    def get(self, field: str):
        """
        Plain value of a schema field (enums unwrapped), None when missing.
        """
        if field not in FIELD_ATTRS:
            raise UnknownFieldError(field)
        value = getattr(self, FIELD_ATTRS[field])
        if isinstance(value, (SexType, EmbarkedPort, TitleType)):
            return value.value
        return value

    def to_record(self) -> dict:
        return {field: self.get(field) for field in ALL_FIELDS}


def row_from_record(record, idx: int) -> PassengerRow:
    """
    Turn one loosely-typed record into a PassengerRow, or raise
    MalformedRecordError when a required field is absent or invalid.
    """
    if not isinstance(record, Mapping):
        raise MalformedRecordError(idx, "*", f"expected a mapping, got {type(record).__name__}")

    survived = parse_int(record.get("Survived"))
    if survived not in FIELD_DOMAINS["Survived"]:
        raise MalformedRecordError(idx, "Survived", f"expected 0 or 1, got {record.get('Survived')!r}")

    pclass = parse_int(record.get("Pclass"))
    if pclass not in FIELD_DOMAINS["Pclass"]:
        raise MalformedRecordError(idx, "Pclass", f"expected 1, 2 or 3, got {record.get('Pclass')!r}")

    sex = parse_sex(record.get("Sex"))
    if sex is None:
        raise MalformedRecordError(idx, "Sex", f"expected male or female, got {record.get('Sex')!r}")

    counts = {}
    for field in ["SibSp", "Parch"]:
        val = parse_int(record.get(field))
        if val is not None and val < 0:
            raise MalformedRecordError(idx, field, f"expected a non-negative integer, got {val}")
        counts[field] = val

    reals = {}
    for field in ["Age", "Fare"]:
        val = parse_float(record.get(field))
        if val is not None and val < 0:
            logger.warning(f"[PassengerRow] (idx={idx}) {field}={val} is negative, treating as missing.")
            val = None
        reals[field] = val

    embarked_raw = record.get("Embarked")
    embarked = parse_embarked(embarked_raw)
    if embarked is None and not is_missing(embarked_raw):
        logger.warning(f"[PassengerRow] (idx={idx}) unknown Embarked={embarked_raw!r}, treating as missing.")

    return PassengerRow(
        passenger_id=parse_int(record.get("PassengerId")),
        survived=survived,
        pclass=pclass,
        name=parse_text(record.get("Name")),
        sex=sex,
        age=reals["Age"],
        sib_sp=counts["SibSp"],
        parch=counts["Parch"],
        ticket=parse_text(record.get("Ticket")),
        fare=reals["Fare"],
        cabin=parse_text(record.get("Cabin")),
        embarked=embarked,
    )


class TitanicDataset:
    """
    Ordered, read-only collection of PassengerRow objects.

    Loads Titanic data from:
      - JSON: a list of dicts keyed by the Kaggle column names
      - CSV/TSV: a header row with the same column names

    Records that cannot become a row are kept in `rejected` as
    MalformedRecordError objects (with their row index).
    """

    def __init__(self, samples=(), rejected=None, derived: bool = False):
        self.samples = tuple(samples)
        self.rejected = list(rejected or [])
        self.derived = derived

    def __len__(self):
        return len(self.samples)

    def __iter__(self):
        return iter(self.samples)

    @property
    def column_names(self) -> list:
        if self.derived:
            return list(RAW_FIELDS + DERIVED_FIELDS)
        return list(RAW_FIELDS)

    def with_samples(self, samples, derived=None):
        """
        New dataset with the same rejected list and replacement rows.
        """
        return TitanicDataset(
            samples,
            rejected=self.rejected,
            derived=self.derived if derived is None else derived,
        )

    def values(self, field: str) -> list:
        if field not in FIELD_ATTRS:
            raise UnknownFieldError(field)
        return [row.get(field) for row in self.samples]

    def verify_all(self) -> list:
        """
        Post-cleaning checks. Returns a list of (index, bool, reason),
        one entry per row that breaks an invariant.
        """
        results = []
        for idx, row in enumerate(self.samples):
            for field in ["Age", "Fare", "Embarked"]:
                if row.get(field) is None:
                    results.append((idx, False, f"{field} still missing after imputation."))
            if self.derived:
                if row.title not in list(TitleType):
                    results.append((idx, False, f"Title {row.title!r} outside the enumeration."))
                if row.family_size != row.sib_sp + row.parch + 1:
                    results.append((idx, False, "FamilySize != SibSp + Parch + 1."))
                if row.is_alone != int(row.family_size == 1):
                    results.append((idx, False, "IsAlone inconsistent with FamilySize."))
        return results

    @classmethod
    def from_records(cls, records, show_progress: bool = False):
        return build_dataset(records, show_progress=show_progress)

    @classmethod
    def from_file(cls, file: str, show_progress: bool = False):
        if file.endswith(".json"):
            records = cls._load_from_json(file)
        elif file.endswith(".csv") or file.endswith(".tsv"):
            records = cls._load_from_csv_tsv(file)
        else:
            raise ValueError(f"[TitanicDataset] Unsupported file format: {file}")
        ds = build_dataset(records, show_progress=show_progress)
        logger.info(f"[TitanicDataset] Loaded {len(ds.samples)} samples from '{file}' "
                    f"({len(ds.rejected)} rejected).")
        return ds

    @staticmethod
    def _load_from_json(filepath: str) -> list:
        if not os.path.isfile(filepath):
            raise FileNotFoundError(f"[TitanicDataset] JSON file not found: {filepath}")

        with open(filepath, "r", encoding="utf-8-sig") as f:
            data = json.load(f)
        if not isinstance(data, list):
            raise ValueError(f"[TitanicDataset] The JSON must be a list. Got {type(data)}")
        return data

    @staticmethod
    def _load_from_csv_tsv(filepath: str) -> list:
        if not os.path.isfile(filepath):
            raise FileNotFoundError(f"[TitanicDataset] CSV/TSV file not found: {filepath}")

        delimiter = "," if filepath.endswith(".csv") else "\t"
        with open(filepath, "r", encoding="utf-8-sig", newline="") as f:
            reader = csv.DictReader(f, delimiter=delimiter)
            return list(reader)


def build_dataset(records, show_progress: bool = False) -> TitanicDataset:
    """
    Build a TitanicDataset from an ordered sequence of records.
    Raises EmptyDatasetError when there is nothing to analyse.
    """
    records = list(records) if records is not None else []
    if not records:
        raise EmptyDatasetError("[TitanicDataset] No input records; statistics are undefined for zero rows.")

    samples = []
    rejected = []
    for idx, record in enumerate(tqdm(records, desc="Building rows", unit="row", disable=not show_progress)):
        try:
            samples.append(row_from_record(record, idx))
        except MalformedRecordError as e:
            logger.warning(f"[TitanicDataset] {e}")
            rejected.append(e)

    if not samples:
        raise EmptyDatasetError(
            f"[TitanicDataset] All {len(records)} records were rejected; nothing to analyse."
        )
    return TitanicDataset(samples, rejected=rejected)
