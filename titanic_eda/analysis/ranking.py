"""
ranking.py

Picks the single factor that appears to matter most for survival.

This is a fixed-priority heuristic, not a statistical ranking. Each rule
scores one candidate factor; rules are walked in priority order and a
candidate only takes the lead when its score is strictly greater than
the current leader's, so on a tie the earlier rule wins
(Gender, then Passenger Class, then Fare).
"""

import logging

from titanic_eda.analysis.aggregation import ALL_ROWS, grouped_categorical_counts, grouped_numeric_stats
from titanic_eda.analysis.decorators import factor_rule
from titanic_eda.analysis.registry import ordered_rules

logger = logging.getLogger(__name__)

# Fare impact is |mean(fare | survived) - mean(fare | all)| * 10, and is
# divided by 10 again when compared against the percentage-point gaps of
# the other rules.
FARE_IMPACT_SCALE = 10
FARE_COMPARISON_DIVISOR = 10

UNDETERMINED = "Undetermined"


class KeyFinding:
    def __init__(self, factor_name, explanation, score=None, scores=None):
        self.factor_name = factor_name
        self.explanation = explanation
        self.score = score
        self.scores = scores or {}

    def __repr__(self):
        return f"KeyFinding(factor_name={self.factor_name!r}, score={self.score!r})"

    def to_dict(self) -> dict:
        return {
            "factor_name": self.factor_name,
            "explanation": self.explanation,
            "score": self.score,
            "scores": dict(self.scores),
        }


def build_ranking_inputs(dataset, categorical_counts=None, numeric_stats=None) -> dict:
    """
    Collect the aggregates the rules need. Already computed results
    (keyed by field name) are reused instead of recomputed.
    """
    categorical_counts = categorical_counts or {}
    numeric_stats = numeric_stats or {}
    return {
        "sex_counts": categorical_counts.get("Sex") or grouped_categorical_counts(dataset, "Sex"),
        "class_counts": categorical_counts.get("Pclass") or grouped_categorical_counts(dataset, "Pclass"),
        "fare_by_outcome": numeric_stats.get("Fare") or grouped_numeric_stats(dataset, "Fare"),
        "fare_overall": grouped_numeric_stats(dataset, "Fare", group_by=None),
    }


@factor_rule(
    "Gender",
    priority=1,
    explanation=("Gender is the strongest survival factor: {female_rate:.1f}% of female passengers "
                 "survived versus {male_rate:.1f}% of male passengers."),
)
def score_gender(inputs):
    counts = inputs["sex_counts"]
    female_rate = counts.get_value("female")["survival_rate_percent"]
    male_rate = counts.get_value("male")["survival_rate_percent"]
    if female_rate is None or male_rate is None:
        return None
    return {"score": abs(female_rate - male_rate), "female_rate": female_rate, "male_rate": male_rate}


@factor_rule(
    "Passenger Class",
    priority=2,
    explanation=("Passenger class is the strongest survival factor: survival ranges from "
                 "{min_rate:.1f}% in class {min_class} to {max_rate:.1f}% in class {max_class}."),
)
def score_passenger_class(inputs):
    rates = {key.value: stats["survival_rate_percent"] for key, stats in inputs["class_counts"].items()
             if stats["survival_rate_percent"] is not None}
    if not rates:
        return None
    max_class = max(rates, key=lambda c: rates[c])
    min_class = min(rates, key=lambda c: rates[c])
    return {
        "score": rates[max_class] - rates[min_class],
        "max_class": max_class,
        "max_rate": rates[max_class],
        "min_class": min_class,
        "min_rate": rates[min_class],
    }


@factor_rule(
    "Fare",
    priority=3,
    explanation=("Fare is the strongest survival factor: survivors paid {survived_mean:.2f} on average "
                 "versus {overall_mean:.2f} across all passengers."),
)
def score_fare(inputs):
    survived_mean = inputs["fare_by_outcome"].get_value(1)["mean"]
    overall_mean = inputs["fare_overall"][ALL_ROWS]["mean"]
    if survived_mean is None or overall_mean is None:
        return None
    impact = abs(survived_mean - overall_mean) * FARE_IMPACT_SCALE
    return {
        "score": impact / FARE_COMPARISON_DIVISOR,
        "impact": impact,
        "survived_mean": survived_mean,
        "overall_mean": overall_mean,
    }


def rank_factors(inputs, rules=None) -> KeyFinding:
    """
    Walk the rules in priority order and return the winning factor.
    """
    rules = ordered_rules() if rules is None else rules
    leader = None
    leader_result = None
    scores = {}
    for rule in rules:
        result = rule(inputs)
        if result is None:
            logger.info(f"[rank_factors] {rule.factor_name}: score undefined, skipped.")
            scores[rule.factor_name] = None
            continue
        scores[rule.factor_name] = result["score"]
        logger.debug(f"[rank_factors] {rule.factor_name}: score={result['score']:.4f}")
        if leader_result is None or result["score"] > leader_result["score"]:
            leader, leader_result = rule, result

    if leader is None:
        return KeyFinding(UNDETERMINED, "Not enough data to compare survival factors.", scores=scores)

    explanation = leader.factor_explanation.format(**leader_result)
    return KeyFinding(leader.factor_name, explanation, score=leader_result["score"], scores=scores)


def key_finding(dataset, categorical_counts=None, numeric_stats=None) -> KeyFinding:
    return rank_factors(build_ranking_inputs(dataset, categorical_counts, numeric_stats))
