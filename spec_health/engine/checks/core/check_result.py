# Path: spec_health/engine/checks/core/check_result.py
"""
Sub-Check Result Data Structure

Provides the SubCheck dataclass every checker returns.
"""

from dataclasses import dataclass

from ....constants import SECTION_TITLES
from .constants import CHECK_SECTION, CHECK_DESCRIPTIONS


@dataclass
class SubCheck:
    """
    Result of a single sub-check.

    Attributes:
        id: Sub-check identifier (e.g. 'C1', 'N3')
        axis: Axis the sub-check belongs to
        score: Score in [0, 1]
        detail: Human-readable explanation of the score
    """
    id: str
    axis: str
    score: float
    detail: str = ''

    def __post_init__(self):
        self.score = min(1.0, max(0.0, float(self.score)))

    @property
    def passed(self) -> bool:
        return self.score >= 1.0

    @property
    def description(self) -> str:
        return CHECK_DESCRIPTIONS.get(self.id, self.id)

    @property
    def section_title(self) -> str:
        """Title of the section this sub-check is about ('Document' if none)."""
        key = CHECK_SECTION.get(self.id)
        return SECTION_TITLES.get(key, 'Document') if key else 'Document'

    def to_dict(self, decimals: int = 2) -> dict:
        return {
            'id': self.id,
            'axis': self.axis,
            'score': round(self.score, decimals),
            'description': self.description,
            'detail': self.detail,
        }


def ratio(numerator: int, denominator: int) -> float:
    """numerator / denominator, 0 when the denominator is 0."""
    if denominator <= 0:
        return 0.0
    return numerator / denominator


__all__ = ['SubCheck', 'ratio']
