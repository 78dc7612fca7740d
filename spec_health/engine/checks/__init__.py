# Path: spec_health/engine/checks/__init__.py
"""
Sub-Check Package (Pass 2)

19 sub-checks across Completeness, Clarity, Constraints and Specificity.
"""

from .check_evaluator import CheckEvaluator, EvaluationResult, actionable_findings
from .core.check_result import SubCheck

__all__ = [
    'CheckEvaluator',
    'EvaluationResult',
    'actionable_findings',
    'SubCheck',
]
