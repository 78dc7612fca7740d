# Path: spec_health/engine/scoring/__init__.py
"""
Scoring Package

Axis scores -> Balance -> verdict.
"""

from .score_calculator import HealthScores, ScoreCalculator
from .verdict_classifier import VERDICT_TABLE, VerdictClassification, VerdictClassifier

__all__ = [
    'HealthScores',
    'ScoreCalculator',
    'VERDICT_TABLE',
    'VerdictClassification',
    'VerdictClassifier',
]
