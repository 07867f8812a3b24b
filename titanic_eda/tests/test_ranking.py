"""
test_ranking.py: Key-finding rules and their priority order.
"""

import unittest

from titanic_eda.analysis import ranking
from titanic_eda.analysis.ranking import (
    key_finding, rank_factors, build_ranking_inputs, UNDETERMINED,
)
from titanic_eda.analysis.registry import ordered_rules, register_rule, get_rule
from titanic_eda.cleaning.imputation import clean_dataset
from titanic_eda.dataset.titanic_dataset import build_dataset
from titanic_eda.tests.fixtures import FOUR_PASSENGERS, passenger


class TestKeyFinding(unittest.TestCase):
    def test_gender_wins_tie_with_class(self):
        finding = key_finding(clean_dataset(build_dataset(FOUR_PASSENGERS)))
        self.assertEqual(finding.factor_name, "Gender")
        self.assertEqual(finding.score, 100.0)
        self.assertEqual(finding.scores["Passenger Class"], 100.0)
        self.assertAlmostEqual(finding.scores["Fare"], 40.75)
        self.assertIn("100.0% of female", finding.explanation)

    def test_passenger_class_wins(self):
        ds = build_dataset([
            passenger(1, 1, "male", Fare=10),
            passenger(0, 3, "male", Fare=10),
            passenger(1, 1, "female", Fare=10),
            passenger(0, 3, "female", Fare=10),
        ])
        finding = key_finding(ds)
        self.assertEqual(finding.factor_name, "Passenger Class")
        self.assertEqual(finding.scores["Gender"], 0.0)
        self.assertIn("class 3", finding.explanation)
        self.assertIn("class 1", finding.explanation)

    def test_fare_wins(self):
        ds = build_dataset([
            passenger(1, 1, "male", Fare=100),
            passenger(0, 1, "male", Fare=0),
            passenger(1, 1, "female", Fare=100),
            passenger(0, 1, "female", Fare=0),
        ])
        finding = key_finding(ds)
        self.assertEqual(finding.factor_name, "Fare")
        self.assertEqual(finding.score, 50.0)
        self.assertEqual(finding.scores["Passenger Class"], 0.0)

    def test_missing_sex_group_skips_gender(self):
        ds = build_dataset([
            passenger(1, 1, "female", Fare=50),
            passenger(0, 3, "female", Fare=10),
        ])
        finding = key_finding(ds)
        self.assertIsNone(finding.scores["Gender"])
        self.assertEqual(finding.factor_name, "Passenger Class")

    def test_undetermined(self):
        def no_score(inputs):
            return None
        no_score.factor_name = "Nothing"
        no_score.factor_explanation = ""
        finding = rank_factors({}, rules=[no_score])
        self.assertEqual(finding.factor_name, UNDETERMINED)
        self.assertIsNone(finding.score)

    def test_reuses_precomputed_counts(self):
        ds = clean_dataset(build_dataset(FOUR_PASSENGERS))
        inputs = build_ranking_inputs(ds)
        self.assertEqual(set(inputs), {"sex_counts", "class_counts", "fare_by_outcome", "fare_overall"})
        finding = key_finding(ds, categorical_counts={"Sex": inputs["sex_counts"]})
        self.assertEqual(finding.factor_name, "Gender")

    def test_to_dict(self):
        finding = key_finding(clean_dataset(build_dataset(FOUR_PASSENGERS)))
        out = finding.to_dict()
        self.assertEqual(set(out), {"factor_name", "explanation", "score", "scores"})


class TestRuleRegistry(unittest.TestCase):
    def test_priority_order(self):
        names = [rule.factor_name for rule in ordered_rules()]
        self.assertEqual(names, ["Gender", "Passenger Class", "Fare"])

    def test_duplicate_name(self):
        with self.assertRaises(ValueError):
            register_rule("Gender", lambda inputs: None)
        self.assertIs(get_rule("Gender"), ranking.score_gender)

    def test_unknown_rule(self):
        with self.assertRaises(ValueError):
            get_rule("Cabin")


if __name__ == "__main__":
    unittest.main()
