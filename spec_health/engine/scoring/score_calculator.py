# Path: spec_health/engine/scoring/score_calculator.py
"""
Score Calculator for Spec Health Module

Turns axis scores into HealthScores: the four axes plus Balance.

BALANCE:
    Balance = 1 - sqrt(population variance of the axes) / mean
clamped to [0, 1]; a zero mean gives Balance 0.
1.0 means all four axes are equal.
"""

import logging
import math
from dataclasses import dataclass

from ...constants import (
    AXES,
    AXIS_COMPLETENESS,
    AXIS_CLARITY,
    AXIS_CONSTRAINTS,
    AXIS_SPECIFICITY,
    LOG_PROCESS,
)
from .constants import SCORE_MIN, SCORE_MAX


@dataclass
class HealthScores:
    """
    Raw axis scores and Balance.

    Attributes:
        completeness: Completeness axis score (0-1)
        clarity: Clarity axis score (0-1)
        constraints: Constraints axis score (0-1)
        specificity: Specificity axis score (0-1)
        balance: Evenness of the four axes (0-1)
    """
    completeness: float = 0.0
    clarity: float = 0.0
    constraints: float = 0.0
    specificity: float = 0.0
    balance: float = 0.0

    @property
    def axes(self) -> dict[str, float]:
        """Axis name -> score, in axis order."""
        return {
            AXIS_COMPLETENESS: self.completeness,
            AXIS_CLARITY: self.clarity,
            AXIS_CONSTRAINTS: self.constraints,
            AXIS_SPECIFICITY: self.specificity,
        }

    def weakest_axis(self) -> str:
        """Lowest-scoring axis; ties go to the earlier axis."""
        axes = self.axes
        return min(AXES, key=lambda axis: (axes[axis], AXES.index(axis)))

    def to_dict(self, decimals: int = 2) -> dict:
        rounded = {axis: round(score, decimals) for axis, score in self.axes.items()}
        rounded['Balance'] = round(self.balance, decimals)
        return rounded


class ScoreCalculator:
    """
    Calculates HealthScores from axis scores.

    Example:
        calculator = ScoreCalculator()
        scores = calculator.calculate_scores(evaluation.axis_scores)
        print(f"Balance: {scores.balance:.2f}")
    """

    def __init__(self):
        """Initialize score calculator."""
        self.logger = logging.getLogger('process.score_calculator')

    def calculate_scores(self, axis_scores: dict[str, float]) -> HealthScores:
        """
        Build HealthScores.

        Args:
            axis_scores: Axis name -> mean sub-check score

        Returns:
            HealthScores with Balance
        """
        values = {axis: self._clamp(axis_scores.get(axis, 0.0)) for axis in AXES}
        scores = HealthScores(
            completeness=values[AXIS_COMPLETENESS],
            clarity=values[AXIS_CLARITY],
            constraints=values[AXIS_CONSTRAINTS],
            specificity=values[AXIS_SPECIFICITY],
            balance=self.calculate_balance(list(values.values())),
        )

        self.logger.info(f"{LOG_PROCESS} Balance: {scores.balance:.3f}")
        return scores

    def calculate_balance(self, values: list[float]) -> float:
        """
        1 - standard deviation / mean, clamped to [0, 1].

        Args:
            values: Axis scores

        Returns:
            Balance (0 when the mean is 0)
        """
        if not values:
            return SCORE_MIN
        mean = sum(values) / len(values)
        if mean <= 0:
            return SCORE_MIN
        deviation = math.sqrt(self._calculate_variance(values, mean))
        return self._clamp(1.0 - deviation / mean)

    def _calculate_variance(self, values: list[float], mean: float) -> float:
        """Population variance."""
        return sum((value - mean) ** 2 for value in values) / len(values)

    def _clamp(self, value: float) -> float:
        return max(SCORE_MIN, min(SCORE_MAX, value))


__all__ = ['HealthScores', 'ScoreCalculator']
