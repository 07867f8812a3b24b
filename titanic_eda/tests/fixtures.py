"""
Shared records for the unit tests.
"""

import os

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")
SAMPLE_CSV = os.path.join(DATA_DIR, "sample_train.csv")

# Four passengers: one missing Age, one missing Embarked
FOUR_PASSENGERS = [
    {"Survived": 1, "Pclass": 1, "Sex": "female", "Age": 29, "SibSp": 0, "Parch": 0,
     "Fare": 100, "Embarked": "C", "Name": "Smith, Mrs. Jane"},
    {"Survived": 0, "Pclass": 3, "Sex": "male", "Age": None, "SibSp": 1, "Parch": 0,
     "Fare": 10, "Embarked": "", "Name": "Doe, Mr. John"},
    {"Survived": 1, "Pclass": 1, "Sex": "female", "Age": 35, "SibSp": 0, "Parch": 0,
     "Fare": 80, "Embarked": "S", "Name": "Lee, Miss. Amy"},
    {"Survived": 0, "Pclass": 3, "Sex": "male", "Age": 22, "SibSp": 0, "Parch": 0,
     "Fare": 7, "Embarked": "Q", "Name": "Roe, Mr. Tim"},
]


def passenger(survived, pclass, sex, **extra):
    record = {"Survived": survived, "Pclass": pclass, "Sex": sex,
              "SibSp": 0, "Parch": 0, "Name": "Doe, Mr. John"}
    record.update(extra)
    return record
