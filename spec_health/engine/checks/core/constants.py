# Path: spec_health/engine/checks/core/constants.py
"""
Sub-Check Constants

Identifiers, axis membership, scoring factors and remediation guidance
for the 19 sub-checks.

Every sub-check is a count, presence test, ratio or pattern match.
The numeric factors below are the whole of the scoring policy.
"""

from ....constants import (
    AXIS_COMPLETENESS,
    AXIS_CLARITY,
    AXIS_CONSTRAINTS,
    AXIS_SPECIFICITY,
    SECTION_API_CONTRACT,
    SECTION_DATA_MODEL,
    SECTION_FILES,
    SECTION_REFERENCE_IMPLEMENTATION,
    SECTION_REQUIREMENTS,
    SECTION_DECISION_TREE,
    SECTION_PROHIBITIONS,
    SECTION_SCOPE,
    SECTION_ESCALATION,
    SECTION_ACCEPTANCE_CRITERIA,
    SECTION_DOMAIN_RULES,
    SECTION_OBSERVABILITY,
)

# ==============================================================================
# COMPLETENESS CHECKS
# ==============================================================================
CHECK_SECTIONS_FILLED = 'C1'
CHECK_DATA_MODEL_ENTITY = 'C2'
CHECK_API_CONTRACT = 'C3'
CHECK_FILE_PATHS = 'C4'
CHECK_REFERENCE_IMPLEMENTATION = 'C5'

COMPLETENESS_CHECKS = [
    CHECK_SECTIONS_FILLED,
    CHECK_DATA_MODEL_ENTITY,
    CHECK_API_CONTRACT,
    CHECK_FILE_PATHS,
    CHECK_REFERENCE_IMPLEMENTATION,
]

# ==============================================================================
# CLARITY CHECKS
# ==============================================================================
CHECK_WEASEL_PHRASES = 'L1'
CHECK_CLARIFICATION_MARKERS = 'L2'
CHECK_VAGUE_VERBS = 'L3'
CHECK_DECISION_CONDITIONS = 'L4'

CLARITY_CHECKS = [
    CHECK_WEASEL_PHRASES,
    CHECK_CLARIFICATION_MARKERS,
    CHECK_VAGUE_VERBS,
    CHECK_DECISION_CONDITIONS,
]

# ==============================================================================
# CONSTRAINTS CHECKS
# ==============================================================================
CHECK_PROHIBITION_COUNT = 'N1'
CHECK_PROHIBITION_RATIONALE = 'N2'
CHECK_PROHIBITION_TESTS = 'N3'
CHECK_OUT_OF_SCOPE = 'N4'
CHECK_ESCALATION = 'N5'

CONSTRAINTS_CHECKS = [
    CHECK_PROHIBITION_COUNT,
    CHECK_PROHIBITION_RATIONALE,
    CHECK_PROHIBITION_TESTS,
    CHECK_OUT_OF_SCOPE,
    CHECK_ESCALATION,
]

# ==============================================================================
# SPECIFICITY CHECKS
# ==============================================================================
CHECK_CONCRETE_CRITERIA = 'S1'
CHECK_DOMAIN_THRESHOLDS = 'S2'
CHECK_OBSERVABILITY = 'S3'
CHECK_ERROR_KINDS = 'S4'
CHECK_NUMERIC_LIMITS = 'S5'

SPECIFICITY_CHECKS = [
    CHECK_CONCRETE_CRITERIA,
    CHECK_DOMAIN_THRESHOLDS,
    CHECK_OBSERVABILITY,
    CHECK_ERROR_KINDS,
    CHECK_NUMERIC_LIMITS,
]

# ==============================================================================
# AXIS MEMBERSHIP
# ==============================================================================
AXIS_CHECKS = {
    AXIS_COMPLETENESS: COMPLETENESS_CHECKS,
    AXIS_CLARITY: CLARITY_CHECKS,
    AXIS_CONSTRAINTS: CONSTRAINTS_CHECKS,
    AXIS_SPECIFICITY: SPECIFICITY_CHECKS,
}

CHECK_ORDER = (
    COMPLETENESS_CHECKS
    + CLARITY_CHECKS
    + CONSTRAINTS_CHECKS
    + SPECIFICITY_CHECKS
)

CHECK_AXIS = {
    check_id: axis
    for axis, check_ids in AXIS_CHECKS.items()
    for check_id in check_ids
}

# Section each check is about (None: whole document)
CHECK_SECTION = {
    CHECK_SECTIONS_FILLED: None,
    CHECK_DATA_MODEL_ENTITY: SECTION_DATA_MODEL,
    CHECK_API_CONTRACT: SECTION_API_CONTRACT,
    CHECK_FILE_PATHS: SECTION_FILES,
    CHECK_REFERENCE_IMPLEMENTATION: SECTION_REFERENCE_IMPLEMENTATION,
    CHECK_WEASEL_PHRASES: None,
    CHECK_CLARIFICATION_MARKERS: None,
    CHECK_VAGUE_VERBS: SECTION_REQUIREMENTS,
    CHECK_DECISION_CONDITIONS: SECTION_DECISION_TREE,
    CHECK_PROHIBITION_COUNT: SECTION_PROHIBITIONS,
    CHECK_PROHIBITION_RATIONALE: SECTION_PROHIBITIONS,
    CHECK_PROHIBITION_TESTS: SECTION_ACCEPTANCE_CRITERIA,
    CHECK_OUT_OF_SCOPE: SECTION_SCOPE,
    CHECK_ESCALATION: SECTION_ESCALATION,
    CHECK_CONCRETE_CRITERIA: SECTION_ACCEPTANCE_CRITERIA,
    CHECK_DOMAIN_THRESHOLDS: SECTION_DOMAIN_RULES,
    CHECK_OBSERVABILITY: SECTION_OBSERVABILITY,
    CHECK_ERROR_KINDS: None,
    CHECK_NUMERIC_LIMITS: None,
}

CHECK_DESCRIPTIONS = {
    CHECK_SECTIONS_FILLED: 'Canonical sections present and non-empty',
    CHECK_DATA_MODEL_ENTITY: 'Data Model lists an entity with properties',
    CHECK_API_CONTRACT: 'API Contract names an endpoint or a justified N/A',
    CHECK_FILE_PATHS: 'Files section names a concrete path',
    CHECK_REFERENCE_IMPLEMENTATION: 'Reference Implementation is not a placeholder',
    CHECK_WEASEL_PHRASES: 'No weasel phrases',
    CHECK_CLARIFICATION_MARKERS: 'No open clarification markers',
    CHECK_VAGUE_VERBS: 'Requirements avoid vague verbs',
    CHECK_DECISION_CONDITIONS: 'Decision Tree has a real branch condition',
    CHECK_PROHIBITION_COUNT: 'At least five prohibitions',
    CHECK_PROHIBITION_RATIONALE: 'Prohibitions carry a rationale',
    CHECK_PROHIBITION_TESTS: 'Prohibitions have negative tests',
    CHECK_OUT_OF_SCOPE: 'Out of Scope lists at least two items',
    CHECK_ESCALATION: 'Escalation has Fail-if and Queue/Review-if entries',
    CHECK_CONCRETE_CRITERIA: 'Acceptance criteria use concrete values',
    CHECK_DOMAIN_THRESHOLDS: 'Domain rules carry numeric thresholds',
    CHECK_OBSERVABILITY: 'Observability names log levels and metrics',
    CHECK_ERROR_KINDS: 'Error handling names status codes or error kinds',
    CHECK_NUMERIC_LIMITS: 'Numeric thresholds, timeouts or limits are stated',
}

# Remediation advice for the actionable findings
CHECK_GUIDANCE = {
    CHECK_SECTIONS_FILLED: 'Fill in the missing sections',
    CHECK_DATA_MODEL_ENTITY: 'Describe at least one entity with its properties',
    CHECK_API_CONTRACT: "Add 'METHOD /path' endpoints, or 'N/A' with the reason",
    CHECK_FILE_PATHS: 'List the files to create or modify by path',
    CHECK_REFERENCE_IMPLEMENTATION: 'Point to a real reference implementation instead of a placeholder',
    CHECK_WEASEL_PHRASES: 'Replace weasel phrases with definite statements',
    CHECK_CLARIFICATION_MARKERS: 'Resolve the open clarification markers',
    CHECK_VAGUE_VERBS: "Replace 'handle/process/manage' with the concrete behaviour",
    CHECK_DECISION_CONDITIONS: "Replace 'it depends' with explicit branch conditions",
    CHECK_PROHIBITION_COUNT: 'Add prohibitions until there are at least five',
    CHECK_PROHIBITION_RATIONALE: "Give every prohibition a rationale ('— because ...')",
    CHECK_PROHIBITION_TESTS: 'Add a Negative acceptance criterion for every prohibition',
    CHECK_OUT_OF_SCOPE: 'List at least two Out of Scope items',
    CHECK_ESCALATION: "Add both a 'Fail if' and a 'Queue if'/'Review if' entry",
    CHECK_CONCRETE_CRITERIA: 'Use literal values, quoted strings or named statuses in acceptance criteria',
    CHECK_DOMAIN_THRESHOLDS: 'Give domain rules numeric thresholds',
    CHECK_OBSERVABILITY: 'Name log levels and metric identifiers',
    CHECK_ERROR_KINDS: 'Name the status codes or error kinds for failures',
    CHECK_NUMERIC_LIMITS: 'State numeric thresholds, timeouts or limits',
}

# ==============================================================================
# SCORING FACTORS
# ==============================================================================
SECTION_COUNT = 13
WEASEL_PENALTY = 0.1
MARKER_PENALTY = 0.15
PROHIBITION_TARGET = 5
OUT_OF_SCOPE_MINIMUM = 2
HALF_CREDIT = 0.5

# Vague decision tree condition
IT_DEPENDS = 'it depends'


__all__ = [
    'CHECK_SECTIONS_FILLED',
    'CHECK_DATA_MODEL_ENTITY',
    'CHECK_API_CONTRACT',
    'CHECK_FILE_PATHS',
    'CHECK_REFERENCE_IMPLEMENTATION',
    'COMPLETENESS_CHECKS',
    'CHECK_WEASEL_PHRASES',
    'CHECK_CLARIFICATION_MARKERS',
    'CHECK_VAGUE_VERBS',
    'CHECK_DECISION_CONDITIONS',
    'CLARITY_CHECKS',
    'CHECK_PROHIBITION_COUNT',
    'CHECK_PROHIBITION_RATIONALE',
    'CHECK_PROHIBITION_TESTS',
    'CHECK_OUT_OF_SCOPE',
    'CHECK_ESCALATION',
    'CONSTRAINTS_CHECKS',
    'CHECK_CONCRETE_CRITERIA',
    'CHECK_DOMAIN_THRESHOLDS',
    'CHECK_OBSERVABILITY',
    'CHECK_ERROR_KINDS',
    'CHECK_NUMERIC_LIMITS',
    'SPECIFICITY_CHECKS',
    'AXIS_CHECKS',
    'CHECK_ORDER',
    'CHECK_AXIS',
    'CHECK_SECTION',
    'CHECK_DESCRIPTIONS',
    'CHECK_GUIDANCE',
    'SECTION_COUNT',
    'WEASEL_PENALTY',
    'MARKER_PENALTY',
    'PROHIBITION_TARGET',
    'OUT_OF_SCOPE_MINIMUM',
    'HALF_CREDIT',
    'IT_DEPENDS',
]
