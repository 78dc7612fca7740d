# Path: spec_health/engine/scoring/constants.py
"""
Scoring Constants for Spec Health Module

Verdict thresholds, Balance bounds, and verdict descriptions and
recommendations.

Thresholds are compared against raw (unrounded) scores.
"""

from ...constants import (
    VERDICT_SHIP_IT,
    VERDICT_ALMOST,
    VERDICT_DRAFT,
    VERDICT_VAGUE,
    VERDICT_UNBOUNDED,
    VERDICT_OVER_CONSTRAINED,
    VERDICT_SKETCH,
)

# ==============================================================================
# SCORE BOUNDS
# ==============================================================================
SCORE_MIN = 0.0
SCORE_MAX = 1.0

# ==============================================================================
# VERDICT THRESHOLDS
# ==============================================================================

# SHIP_IT
SHIP_IT_AXIS_MIN = 0.75
SHIP_IT_BALANCE_MIN = 0.90

# ALMOST
ALMOST_AXIS_MIN = 0.50
ALMOST_BALANCE_MIN = 0.75
ALMOST_STRONG_AXIS = 0.75
ALMOST_MAX_WEAK_AXES = 1

# DRAFT
DRAFT_BALANCE_MIN = 0.60
DRAFT_AXIS_MIN = 0.50
DRAFT_MIN_AXES = 2

# VAGUE
VAGUE_COMPLETENESS_MIN = 0.70
VAGUE_CLARITY_BELOW = 0.50

# UNBOUNDED
UNBOUNDED_COMPLETENESS_MIN = 0.70
UNBOUNDED_CLARITY_MIN = 0.60
UNBOUNDED_CONSTRAINTS_BELOW = 0.40

# OVER_CONSTRAINED
OVER_CONSTRAINED_CONSTRAINTS_MIN = 0.80
OVER_CONSTRAINED_COMPLETENESS_BELOW = 0.50

# ==============================================================================
# VERDICT DESCRIPTIONS
# ==============================================================================

VERDICT_DESCRIPTIONS = {
    VERDICT_SHIP_IT: 'Strong on every axis and evenly balanced',
    VERDICT_ALMOST: 'Solid, with at most one axis below strong',
    VERDICT_DRAFT: 'Reasonably balanced but not yet strong',
    VERDICT_VAGUE: 'Mostly complete but unclear',
    VERDICT_UNBOUNDED: 'Complete and clear but barely constrained',
    VERDICT_OVER_CONSTRAINED: 'Heavily constrained but largely incomplete',
    VERDICT_SKETCH: 'An outline rather than a specification',
}

VERDICT_RECOMMENDATIONS = {
    VERDICT_SHIP_IT: 'Ready for implementation.',
    VERDICT_ALMOST: 'Address the weakest axis, then implement.',
    VERDICT_DRAFT: 'Work through the actionable findings before implementation.',
    VERDICT_VAGUE: 'Replace vague wording and resolve clarification markers.',
    VERDICT_UNBOUNDED: 'Add prohibitions, out-of-scope items and escalation rules.',
    VERDICT_OVER_CONSTRAINED: 'Fill in the missing sections the constraints refer to.',
    VERDICT_SKETCH: 'Continue the interview; most sections need content.',
}


__all__ = [
    'SCORE_MIN',
    'SCORE_MAX',
    'SHIP_IT_AXIS_MIN',
    'SHIP_IT_BALANCE_MIN',
    'ALMOST_AXIS_MIN',
    'ALMOST_BALANCE_MIN',
    'ALMOST_STRONG_AXIS',
    'ALMOST_MAX_WEAK_AXES',
    'DRAFT_BALANCE_MIN',
    'DRAFT_AXIS_MIN',
    'DRAFT_MIN_AXES',
    'VAGUE_COMPLETENESS_MIN',
    'VAGUE_CLARITY_BELOW',
    'UNBOUNDED_COMPLETENESS_MIN',
    'UNBOUNDED_CLARITY_MIN',
    'UNBOUNDED_CONSTRAINTS_BELOW',
    'OVER_CONSTRAINED_CONSTRAINTS_MIN',
    'OVER_CONSTRAINED_COMPLETENESS_BELOW',
    'VERDICT_DESCRIPTIONS',
    'VERDICT_RECOMMENDATIONS',
]
