"""
test_imputation.py: Tests for imputation and feature derivation.
"""

import unittest

from titanic_eda._types import EmbarkedPort, TitleType
from titanic_eda.analysis.aggregation import missing_report
from titanic_eda.cleaning.imputation import (
    median, impute_age, impute_fare, impute_embarked, derive_features, clean_dataset,
    extract_raw_title, canonical_title, family_size,
)
from titanic_eda.dataset.titanic_dataset import build_dataset
from titanic_eda.tests.fixtures import FOUR_PASSENGERS, passenger


class TestMedian(unittest.TestCase):
    def test_odd_length(self):
        self.assertEqual(median([7, 1, 3]), 3)

    def test_even_length(self):
        self.assertEqual(median([1, 2, 3, 4]), 2.5)

    def test_empty(self):
        self.assertEqual(median([]), 0)


class TestImputation(unittest.TestCase):
    def test_age_filled_with_median_of_present_ages(self):
        ds = impute_age(build_dataset(FOUR_PASSENGERS))
        self.assertEqual(ds.samples[1].age, 29)

    def test_running_median_matches_present_values(self):
        records = [passenger(0, 3, "male", Age=a) for a in [10, None, 20, None, 40, None]]
        ds = impute_age(build_dataset(records))
        self.assertEqual([r.age for r in ds], [10, 20, 20, 20, 40, 20])

    def test_even_count_running_median(self):
        records = [passenger(0, 3, "male", Age=a) for a in [10, None, 20, None]]
        ds = impute_age(build_dataset(records))
        self.assertEqual([r.age for r in ds], [10, 15, 20, 15])

    def test_all_ages_missing_uses_zero(self):
        ds = impute_age(build_dataset([passenger(0, 3, "male"), passenger(1, 1, "female")]))
        self.assertEqual([r.age for r in ds], [0, 0])

    def test_fare_filled(self):
        records = [passenger(0, 3, "male", Fare=f) for f in [7, None, 9]]
        ds = impute_fare(build_dataset(records))
        self.assertEqual(ds.samples[1].fare, 8)

    def test_embarked_filled_with_southampton(self):
        ds = impute_embarked(build_dataset(FOUR_PASSENGERS))
        self.assertEqual(ds.samples[1].embarked, EmbarkedPort.SOUTHAMPTON)
        self.assertEqual(ds.samples[0].embarked, EmbarkedPort.CHERBOURG)

    def test_input_dataset_untouched(self):
        raw = build_dataset(FOUR_PASSENGERS)
        cleaned = clean_dataset(raw)
        self.assertIsNone(raw.samples[1].age)
        self.assertIsNone(raw.samples[1].embarked)
        self.assertFalse(raw.derived)
        self.assertTrue(cleaned.derived)

    def test_nothing_missing_after_cleaning(self):
        cleaned = clean_dataset(build_dataset(FOUR_PASSENGERS))
        report = missing_report(cleaned, ["Age", "Fare", "Embarked", "SibSp", "Parch", "Title"])
        self.assertEqual(sum(info["count"] for info in report.values()), 0)
        self.assertEqual(cleaned.verify_all(), [])


class TestTitles(unittest.TestCase):
    def test_known_titles(self):
        self.assertEqual(extract_raw_title("Smith, Mrs. Jane"), "Mrs")
        self.assertEqual(canonical_title("Master"), TitleType.MASTER)

    def test_rare_titles_collapse_to_other(self):
        raw = extract_raw_title("Rothes, the Countess. of (Lucy Noel Martha Dyer-Edwards)")
        self.assertEqual(raw, "the Countess")
        self.assertEqual(canonical_title(raw), TitleType.OTHER)
        self.assertEqual(canonical_title(extract_raw_title("Uruchurtu, Don. Manuel E")), TitleType.OTHER)

    def test_unparseable_name(self):
        self.assertEqual(extract_raw_title("Plain Name"), "Unknown")
        self.assertEqual(extract_raw_title(None), "Unknown")
        self.assertEqual(extract_raw_title("Smith, Jane"), "Unknown")
        self.assertEqual(canonical_title("Unknown"), TitleType.OTHER)


class TestDerivedFeatures(unittest.TestCase):
    def test_family_size_and_is_alone(self):
        records = [
            passenger(0, 3, "male", SibSp=1, Parch=2),
            passenger(1, 1, "female"),
            passenger(1, 2, "female", SibSp=None, Parch=None),
        ]
        ds = derive_features(build_dataset(records))
        self.assertEqual([r.family_size for r in ds], [4, 1, 1])
        self.assertEqual([r.is_alone for r in ds], [0, 1, 1])
        self.assertEqual(ds.samples[2].sib_sp, 0)

    def test_family_size_helper(self):
        self.assertEqual(family_size(0, 0), 1)
        self.assertEqual(family_size(None, 3), 4)

    def test_titles_derived(self):
        ds = derive_features(build_dataset(FOUR_PASSENGERS))
        self.assertEqual([r.get("Title") for r in ds], ["Mrs", "Mr", "Miss", "Mr"])


if __name__ == "__main__":
    unittest.main()
