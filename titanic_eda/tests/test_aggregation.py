"""
test_aggregation.py: Tests for missing-value reports and grouped statistics.
"""

import unittest

from titanic_eda.analysis.aggregation import (
    GroupKey, AggregateResult, aggregate, missing_report, grouped_numeric_stats,
    grouped_categorical_counts, shape_summary, describe, NUMERIC, CATEGORICAL,
)
from titanic_eda.cleaning.imputation import clean_dataset
from titanic_eda.dataset.titanic_dataset import TitanicDataset, build_dataset
from titanic_eda.errors import UnknownFieldError
from titanic_eda.tests.fixtures import FOUR_PASSENGERS, SAMPLE_CSV, passenger


class TestMissingReport(unittest.TestCase):
    def test_raw_csv_report(self):
        ds = TitanicDataset.from_file(SAMPLE_CSV)
        report = missing_report(ds)
        self.assertEqual(list(report), ds.column_names)
        self.assertEqual(report["Age"]["count"], 1)
        self.assertAlmostEqual(report["Age"]["percent"], 100 / 12)
        self.assertEqual(report["Embarked"]["count"], 1)
        self.assertEqual(report["Cabin"]["count"], 8)
        self.assertEqual(report["Survived"]["count"], 0)

    def test_cleaned_report_has_no_missing_age_or_embarked(self):
        cleaned = clean_dataset(TitanicDataset.from_file(SAMPLE_CSV))
        report = missing_report(cleaned)
        self.assertEqual(report["Age"]["count"], 0)
        self.assertEqual(report["Embarked"]["count"], 0)
        self.assertEqual(report["Fare"]["count"], 0)
        self.assertIn("Title", report)

    def test_unknown_field(self):
        ds = build_dataset(FOUR_PASSENGERS)
        with self.assertRaises(UnknownFieldError):
            missing_report(ds, ["Age", "Deck"])

    def test_shape_summary(self):
        ds = build_dataset(FOUR_PASSENGERS)
        shape = shape_summary(ds)
        self.assertEqual(shape["row_count"], 4)
        self.assertEqual(shape["column_names"], ds.column_names)


class TestNumericStats(unittest.TestCase):
    def test_population_std(self):
        stats = describe([2, 4, 4, 4, 5, 5, 7, 9])
        self.assertEqual(stats["mean"], 5.0)
        self.assertEqual(stats["std"], 2.0)
        self.assertEqual(stats["median"], 4.5)
        self.assertEqual((stats["min"], stats["max"]), (2.0, 9.0))

    def test_grouped_by_outcome(self):
        ds = build_dataset(FOUR_PASSENGERS)
        result = grouped_numeric_stats(ds, "Age")
        died = result[GroupKey("Survived", 0)]
        lived = result[GroupKey("Survived", 1)]
        # the missing age is filtered out, not counted
        self.assertEqual(died["count"], 1)
        self.assertEqual(died["mean"], 22.0)
        self.assertEqual(lived["count"], 2)
        self.assertEqual(lived["mean"], 32.0)
        self.assertEqual(lived["std"], 3.0)

    def test_empty_group_is_undefined(self):
        ds = build_dataset([passenger(1, 1, "female", Age=30), passenger(1, 2, "male", Age=40)])
        died = grouped_numeric_stats(ds, "Age").get_value(0)
        self.assertEqual(died["count"], 0)
        self.assertIsNone(died["mean"])
        self.assertIsNone(died["std"])

    def test_without_group_by(self):
        ds = build_dataset(FOUR_PASSENGERS)
        result = grouped_numeric_stats(ds, "Fare", group_by=None)
        self.assertEqual(result.as_dict()["all"]["mean"], 49.25)

    def test_non_numeric_field(self):
        ds = build_dataset(FOUR_PASSENGERS)
        with self.assertRaises(UnknownFieldError):
            grouped_numeric_stats(ds, "Sex")


class TestCategoricalCounts(unittest.TestCase):
    def setUp(self):
        self.ds = clean_dataset(build_dataset(FOUR_PASSENGERS))

    def test_sex_survival_rate(self):
        result = grouped_categorical_counts(self.ds, "Sex")
        female = result.get_value("female")
        male = result.get_value("male")
        self.assertEqual((female["count"], female["survived_count"]), (2, 2))
        self.assertEqual(female["survival_rate_percent"], 100.0)
        self.assertEqual(male["survival_rate_percent"], 0.0)
        self.assertEqual(female["groups"], {"0": 0, "1": 2})

    def test_empty_category_rate_is_undefined(self):
        result = grouped_categorical_counts(self.ds, "Pclass")
        second = result.get_value(2)
        self.assertEqual(second["count"], 0)
        self.assertIsNone(second["survival_rate_percent"])

    def test_as_dict_keys(self):
        result = grouped_categorical_counts(self.ds, "Embarked")
        self.assertEqual(list(result.as_dict()), ["C", "Q", "S"])
        self.assertEqual(result.as_dict()["S"]["count"], 2)


class TestAggregate(unittest.TestCase):
    def test_kind_defaults(self):
        ds = clean_dataset(build_dataset(FOUR_PASSENGERS))
        self.assertEqual(aggregate(ds, "Sex").kind, CATEGORICAL)
        self.assertEqual(aggregate(ds, "Age", group_by="Survived").kind, NUMERIC)
        self.assertEqual(aggregate(ds, "Pclass", kind=NUMERIC).kind, NUMERIC)

    def test_unknown_field_or_kind(self):
        ds = build_dataset(FOUR_PASSENGERS)
        with self.assertRaises(UnknownFieldError):
            aggregate(ds, "Deck")
        with self.assertRaises(UnknownFieldError):
            aggregate(ds, "Age", group_by="Deck")
        with self.assertRaises(ValueError):
            aggregate(ds, "Age", kind="histogram")

    def test_deterministic_and_read_only(self):
        ds = clean_dataset(build_dataset(FOUR_PASSENGERS))
        before = [r.to_record() for r in ds]
        first = aggregate(ds, "Fare", group_by="Sex")
        second = aggregate(ds, "Fare", group_by="Sex")
        self.assertEqual(first, second)
        self.assertIsInstance(first, AggregateResult)
        self.assertEqual([r.to_record() for r in ds], before)

    def test_group_key(self):
        self.assertEqual(str(GroupKey("Sex", "male")), "Sex=male")
        self.assertEqual(GroupKey("Pclass", 1), GroupKey("Pclass", 1))
        self.assertNotEqual(GroupKey("Pclass", 1), GroupKey("Survived", 1))


if __name__ == "__main__":
    unittest.main()
