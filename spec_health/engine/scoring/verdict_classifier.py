# Path: spec_health/engine/scoring/verdict_classifier.py
"""
Verdict Classifier for Spec Health Module

Resolves HealthScores to a verdict with an ordered, total table:
rows are tried top to bottom and the first matching predicate wins.
The last row matches everything, so every input gets a verdict.

Row order matters: a document can satisfy several rows (e.g. DRAFT and
VAGUE) and the earlier row decides.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable

from ...constants import (
    LOG_PROCESS,
    VERDICT_SHIP_IT,
    VERDICT_ALMOST,
    VERDICT_DRAFT,
    VERDICT_VAGUE,
    VERDICT_UNBOUNDED,
    VERDICT_OVER_CONSTRAINED,
    VERDICT_SKETCH,
)
from .score_calculator import HealthScores
from .constants import (
    SHIP_IT_AXIS_MIN,
    SHIP_IT_BALANCE_MIN,
    ALMOST_AXIS_MIN,
    ALMOST_BALANCE_MIN,
    ALMOST_STRONG_AXIS,
    ALMOST_MAX_WEAK_AXES,
    DRAFT_BALANCE_MIN,
    DRAFT_AXIS_MIN,
    DRAFT_MIN_AXES,
    VAGUE_COMPLETENESS_MIN,
    VAGUE_CLARITY_BELOW,
    UNBOUNDED_COMPLETENESS_MIN,
    UNBOUNDED_CLARITY_MIN,
    UNBOUNDED_CONSTRAINTS_BELOW,
    OVER_CONSTRAINED_CONSTRAINTS_MIN,
    OVER_CONSTRAINED_COMPLETENESS_BELOW,
    VERDICT_DESCRIPTIONS,
    VERDICT_RECOMMENDATIONS,
)


# ==============================================================================
# PREDICATES
# ==============================================================================

def is_ship_it(scores: HealthScores) -> bool:
    return (
        all(value >= SHIP_IT_AXIS_MIN for value in scores.axes.values())
        and scores.balance >= SHIP_IT_BALANCE_MIN
    )


def is_almost(scores: HealthScores) -> bool:
    values = scores.axes.values()
    weak = sum(1 for value in values if value < ALMOST_STRONG_AXIS)
    return (
        all(value >= ALMOST_AXIS_MIN for value in values)
        and scores.balance >= ALMOST_BALANCE_MIN
        and weak <= ALMOST_MAX_WEAK_AXES
    )


def is_draft(scores: HealthScores) -> bool:
    passing = sum(1 for value in scores.axes.values() if value >= DRAFT_AXIS_MIN)
    return scores.balance >= DRAFT_BALANCE_MIN and passing >= DRAFT_MIN_AXES


def is_vague(scores: HealthScores) -> bool:
    return scores.completeness >= VAGUE_COMPLETENESS_MIN and scores.clarity < VAGUE_CLARITY_BELOW


def is_unbounded(scores: HealthScores) -> bool:
    return (
        scores.completeness >= UNBOUNDED_COMPLETENESS_MIN
        and scores.clarity >= UNBOUNDED_CLARITY_MIN
        and scores.constraints < UNBOUNDED_CONSTRAINTS_BELOW
    )


def is_over_constrained(scores: HealthScores) -> bool:
    return (
        scores.constraints >= OVER_CONSTRAINED_CONSTRAINTS_MIN
        and scores.completeness < OVER_CONSTRAINED_COMPLETENESS_BELOW
    )


def always(scores: HealthScores) -> bool:
    return True


# Ordered, first match wins; the final row is the catch-all
VERDICT_TABLE: list[tuple[Callable[[HealthScores], bool], str]] = [
    (is_ship_it, VERDICT_SHIP_IT),
    (is_almost, VERDICT_ALMOST),
    (is_draft, VERDICT_DRAFT),
    (is_vague, VERDICT_VAGUE),
    (is_unbounded, VERDICT_UNBOUNDED),
    (is_over_constrained, VERDICT_OVER_CONSTRAINED),
    (always, VERDICT_SKETCH),
]


@dataclass
class VerdictClassification:
    """
    Verdict result.

    Attributes:
        verdict: Verdict name (SHIP_IT ... SKETCH)
        description: Human-readable description
        recommendation: Recommended next step
        row: 1-based row of the verdict table that matched
        factors: Raw scores the verdict was computed from
    """
    verdict: str
    description: str
    recommendation: str
    row: int
    factors: dict = field(default_factory=dict)


class VerdictClassifier:
    """
    Classifies HealthScores into a verdict.

    Example:
        classifier = VerdictClassifier()
        classification = classifier.classify(scores)
        print(f"Verdict: {classification.verdict}")
    """

    def __init__(self, table=None):
        """
        Initialize verdict classifier.

        Args:
            table: Ordered (predicate, verdict) pairs (VERDICT_TABLE if None)
        """
        self.table = table if table is not None else VERDICT_TABLE
        self.logger = logging.getLogger('process.verdict_classifier')

    def classify(self, scores: HealthScores) -> VerdictClassification:
        """
        Resolve the verdict.

        Args:
            scores: HealthScores from ScoreCalculator

        Returns:
            VerdictClassification for the first matching row
        """
        for row, (predicate, verdict) in enumerate(self.table, start=1):
            if predicate(scores):
                self.logger.info(f"{LOG_PROCESS} Verdict {verdict} (row {row})")
                return VerdictClassification(
                    verdict=verdict,
                    description=VERDICT_DESCRIPTIONS.get(verdict, ''),
                    recommendation=VERDICT_RECOMMENDATIONS.get(verdict, ''),
                    row=row,
                    factors={**scores.axes, 'Balance': scores.balance},
                )

        # Only reachable with a custom table lacking a catch-all row
        raise ValueError('Verdict table has no matching row')


__all__ = [
    'VERDICT_TABLE',
    'VerdictClassification',
    'VerdictClassifier',
    'is_ship_it',
    'is_almost',
    'is_draft',
    'is_vague',
    'is_unbounded',
    'is_over_constrained',
]
