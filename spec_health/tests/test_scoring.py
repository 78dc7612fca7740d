# Path: spec_health/tests/test_scoring.py
"""
Unit tests for Balance calculation and verdict classification.

The verdict table is tried top to bottom; each test below names the
row it expects to win.
"""

import pytest

from spec_health.constants import VERDICTS
from spec_health.engine.scoring import (
    HealthScores,
    ScoreCalculator,
    VERDICT_TABLE,
    VerdictClassifier,
)


@pytest.fixture
def calculator():
    return ScoreCalculator()


@pytest.fixture
def classifier():
    return VerdictClassifier()


def _verdict(classifier, completeness, clarity, constraints, specificity, balance):
    scores = HealthScores(completeness, clarity, constraints, specificity, balance)
    return classifier.classify(scores).verdict


# ==============================================================================
# BALANCE
# ==============================================================================

def test_balance_of_equal_axes_is_one(calculator):
    assert calculator.calculate_balance([0.4, 0.4, 0.4, 0.4]) == pytest.approx(1.0)


def test_balance_of_zero_mean_is_zero(calculator):
    assert calculator.calculate_balance([0.0, 0.0, 0.0, 0.0]) == 0.0


def test_balance_is_clamped_at_zero(calculator):
    # sd 0.433 > mean 0.25
    assert calculator.calculate_balance([1.0, 0.0, 0.0, 0.0]) == 0.0


def test_balance_formula(calculator):
    assert calculator.calculate_balance([1.0, 1.0, 1.0, 0.5]) == pytest.approx(1 - 0.21650635 / 0.875)


def test_calculate_scores(calculator):
    scores = calculator.calculate_scores({
        'Completeness': 1.2,
        'Clarity': 0.75,
        'Constraints': 0.5,
    })

    assert scores.completeness == 1.0
    assert scores.specificity == 0.0
    assert 0.0 <= scores.balance <= 1.0


def test_health_scores_rounding():
    scores = HealthScores(0.55384615, 0.75, 0.68, 0.8, 0.86712)

    assert scores.to_dict() == {
        'Completeness': 0.55,
        'Clarity': 0.75,
        'Constraints': 0.68,
        'Specificity': 0.8,
        'Balance': 0.87,
    }
    assert scores.to_dict(decimals=3)['Completeness'] == 0.554


def test_weakest_axis_ties_go_to_axis_order():
    assert HealthScores(0.5, 0.5, 1.0, 1.0).weakest_axis() == 'Completeness'
    assert HealthScores(1.0, 0.3, 0.3, 1.0).weakest_axis() == 'Clarity'
    assert HealthScores(1.0, 1.0, 1.0, 0.2).weakest_axis() == 'Specificity'


# ==============================================================================
# VERDICT ROWS
# ==============================================================================

def test_ship_it(classifier):
    assert _verdict(classifier, 0.8, 0.8, 0.8, 0.8, 1.0) == 'SHIP_IT'


def test_almost_with_one_weak_axis(classifier):
    assert _verdict(classifier, 1.0, 1.0, 1.0, 0.6, 0.85) == 'ALMOST'


def test_draft(classifier):
    assert _verdict(classifier, 0.55, 0.75, 0.68, 0.8, 0.867) == 'DRAFT'


def test_vague(classifier):
    assert _verdict(classifier, 0.9, 0.1, 0.9, 0.9, 0.5) == 'VAGUE'


def test_unbounded(classifier):
    assert _verdict(classifier, 0.9, 0.9, 0.1, 0.9, 0.5) == 'UNBOUNDED'


def test_over_constrained(classifier):
    assert _verdict(classifier, 0.2, 0.9, 0.9, 0.2, 0.4) == 'OVER_CONSTRAINED'


def test_sketch_catch_all(classifier):
    assert _verdict(classifier, 0.0, 0.0, 0.0, 0.0, 0.0) == 'SKETCH'


def test_earlier_row_wins(classifier):
    # Satisfies both DRAFT (row 3) and VAGUE (row 4)
    classification = classifier.classify(HealthScores(0.8, 0.4, 0.8, 0.8, 0.7))

    assert classification.verdict == 'DRAFT'
    assert classification.row == 3


def test_thresholds_use_raw_scores(classifier):
    # 0.7499 would display as 0.75 but is below the SHIP_IT minimum
    assert _verdict(classifier, 0.7499, 1.0, 1.0, 1.0, 0.95) == 'ALMOST'


def test_classification_carries_description_and_factors(classifier):
    classification = classifier.classify(HealthScores(0.8, 0.8, 0.8, 0.8, 1.0))

    assert classification.row == 1
    assert classification.description
    assert classification.recommendation
    assert classification.factors['Balance'] == 1.0


def test_table_is_total(classifier):
    grid = [0.0, 0.3, 0.5, 0.7, 1.0]
    for completeness in grid:
        for clarity in grid:
            for constraints in grid:
                for balance in grid:
                    verdict = _verdict(classifier, completeness, clarity, constraints, 0.5, balance)
                    assert verdict in VERDICTS


def test_table_order():
    assert [verdict for _, verdict in VERDICT_TABLE] == VERDICTS


def test_custom_table_without_match_raises():
    classifier = VerdictClassifier(table=[(lambda scores: False, 'NEVER')])

    with pytest.raises(ValueError):
        classifier.classify(HealthScores())
