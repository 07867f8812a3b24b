"""
_types.py: Common enumerations and the fixed field schema
used across the dataset, cleaning and analysis modules.
"""

from enum import Enum


class SexType(Enum):
    MALE = "male"
    FEMALE = "female"


class EmbarkedPort(Enum):
    CHERBOURG = "C"
    QUEENSTOWN = "Q"
    SOUTHAMPTON = "S"


class TitleType(Enum):
    MR = "Mr"
    MISS = "Miss"
    MRS = "Mrs"
    MASTER = "Master"
    OTHER = "Other"


# Columns as they appear in the Kaggle train.csv, in source order
RAW_FIELDS = [
    "PassengerId", "Survived", "Pclass", "Name", "Sex", "Age",
    "SibSp", "Parch", "Ticket", "Fare", "Cabin", "Embarked",
]

# Computed during feature derivation, never read from input
DERIVED_FIELDS = ["Title", "FamilySize", "IsAlone"]

ALL_FIELDS = RAW_FIELDS + DERIVED_FIELDS

REQUIRED_FIELDS = ["Survived", "Pclass", "Sex"]

OUTCOME_FIELD = "Survived"

NUMERIC_FIELDS = [
    "PassengerId", "Survived", "Pclass", "Age", "SibSp", "Parch",
    "Fare", "FamilySize", "IsAlone",
]

CATEGORICAL_FIELDS = ["Survived", "Pclass", "Sex", "Embarked", "Title", "IsAlone"]

# Known values of the discrete fields, in display order
FIELD_DOMAINS = {
    "Survived": [0, 1],
    "Pclass": [1, 2, 3],
    "Sex": [SexType.MALE.value, SexType.FEMALE.value],
    "Embarked": [p.value for p in EmbarkedPort],
    "Title": [t.value for t in TitleType],
    "IsAlone": [0, 1],
}

# Fields summarised per outcome in an analysis run
NUMERIC_STAT_FIELDS = ["Age", "SibSp", "Parch", "Fare", "FamilySize"]
CATEGORICAL_STAT_FIELDS = ["Pclass", "Sex", "Embarked", "Title", "IsAlone"]
CORRELATION_FIELDS = ["Pclass", "Age", "SibSp", "Parch", "Fare", "FamilySize", "IsAlone"]
HISTOGRAM_FIELDS = ["Age", "Fare"]
