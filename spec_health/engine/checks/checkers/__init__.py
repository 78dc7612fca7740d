# Path: spec_health/engine/checks/checkers/__init__.py
"""
Axis Checkers

One checker per axis; each returns its sub-checks in id order.
"""

from .completeness_checker import CompletenessChecker
from .clarity_checker import ClarityChecker
from .constraints_checker import ConstraintsChecker
from .specificity_checker import SpecificityChecker

__all__ = [
    'CompletenessChecker',
    'ClarityChecker',
    'ConstraintsChecker',
    'SpecificityChecker',
]
