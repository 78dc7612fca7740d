# Path: spec_health/constants.py
"""
Spec Health Module Constants

Module-wide constants for the spec health check system.
Section names, axes, verdicts, severities and logging prefixes live here.
"""

# ==============================================================================
# CANONICAL SECTIONS
# ==============================================================================
SECTION_OVERVIEW = 'overview'
SECTION_SCOPE = 'scope'
SECTION_REFERENCE_IMPLEMENTATION = 'reference_implementation'
SECTION_CODEBASE_CONTEXT = 'codebase_context'
SECTION_REQUIREMENTS = 'requirements'
SECTION_PROHIBITIONS = 'prohibitions'
SECTION_DECISION_TREE = 'decision_tree'
SECTION_DOMAIN_RULES = 'domain_rules'
SECTION_ESCALATION = 'escalation'
SECTION_DATA_MODEL = 'data_model'
SECTION_API_CONTRACT = 'api_contract'
SECTION_ACCEPTANCE_CRITERIA = 'acceptance_criteria'
SECTION_FILES = 'files'
SECTION_OBSERVABILITY = 'observability'
SECTION_KEY_DECISIONS = 'key_decisions'
SECTION_OPEN_QUESTIONS = 'open_questions'

# Template order
CANONICAL_SECTIONS = [
    SECTION_OVERVIEW,
    SECTION_SCOPE,
    SECTION_REFERENCE_IMPLEMENTATION,
    SECTION_CODEBASE_CONTEXT,
    SECTION_REQUIREMENTS,
    SECTION_PROHIBITIONS,
    SECTION_DECISION_TREE,
    SECTION_DOMAIN_RULES,
    SECTION_ESCALATION,
    SECTION_DATA_MODEL,
    SECTION_API_CONTRACT,
    SECTION_ACCEPTANCE_CRITERIA,
    SECTION_FILES,
    SECTION_OBSERVABILITY,
    SECTION_KEY_DECISIONS,
    SECTION_OPEN_QUESTIONS,
]

# Only these 13 count toward completeness (C1)
COUNTED_SECTIONS = [
    SECTION_OVERVIEW,
    SECTION_SCOPE,
    SECTION_REFERENCE_IMPLEMENTATION,
    SECTION_REQUIREMENTS,
    SECTION_PROHIBITIONS,
    SECTION_DECISION_TREE,
    SECTION_DOMAIN_RULES,
    SECTION_ESCALATION,
    SECTION_DATA_MODEL,
    SECTION_API_CONTRACT,
    SECTION_ACCEPTANCE_CRITERIA,
    SECTION_FILES,
    SECTION_OBSERVABILITY,
]

SECTION_TITLES = {
    SECTION_OVERVIEW: 'Overview',
    SECTION_SCOPE: 'Scope',
    SECTION_REFERENCE_IMPLEMENTATION: 'Reference Implementation',
    SECTION_CODEBASE_CONTEXT: 'Codebase Context',
    SECTION_REQUIREMENTS: 'Requirements',
    SECTION_PROHIBITIONS: 'Prohibitions',
    SECTION_DECISION_TREE: 'Decision Tree',
    SECTION_DOMAIN_RULES: 'Domain Rules & Exceptions',
    SECTION_ESCALATION: 'Escalation & Guardrails',
    SECTION_DATA_MODEL: 'Data Model',
    SECTION_API_CONTRACT: 'API Contract',
    SECTION_ACCEPTANCE_CRITERIA: 'Acceptance Criteria',
    SECTION_FILES: 'Files to Create/Modify',
    SECTION_OBSERVABILITY: 'Observability',
    SECTION_KEY_DECISIONS: 'Key Decisions',
    SECTION_OPEN_QUESTIONS: 'Open Questions',
}

# Heading prefixes recognized for each section (normalized form).
# Longer aliases are tried first by the extractor.
SECTION_ALIASES = {
    SECTION_OVERVIEW: ['overview'],
    SECTION_SCOPE: ['scope', 'in scope', 'out of scope', 'out-of-scope', 'deferred'],
    SECTION_REFERENCE_IMPLEMENTATION: ['reference implementation'],
    SECTION_CODEBASE_CONTEXT: ['codebase context'],
    SECTION_REQUIREMENTS: ['requirements'],
    SECTION_PROHIBITIONS: ['prohibitions'],
    SECTION_DECISION_TREE: ['decision tree'],
    SECTION_DOMAIN_RULES: ['domain rules & exceptions', 'domain rules'],
    SECTION_ESCALATION: ['escalation & guardrails', 'escalation', 'guardrails'],
    SECTION_DATA_MODEL: ['data model'],
    SECTION_API_CONTRACT: ['api contract'],
    SECTION_ACCEPTANCE_CRITERIA: ['acceptance criteria'],
    SECTION_FILES: ['files to create/modify', 'files to create / modify', 'files to create', 'files'],
    SECTION_OBSERVABILITY: ['observability'],
    SECTION_KEY_DECISIONS: ['key decisions'],
    SECTION_OPEN_QUESTIONS: ['open questions'],
}

# Scope sub-headings that fold into the Scope section
SCOPE_SUBHEADING_ALIASES = ['in scope', 'out of scope', 'out-of-scope', 'deferred']

# ==============================================================================
# SCOPE PARTS
# ==============================================================================
SCOPE_IN = 'in'
SCOPE_OUT = 'out'
SCOPE_DEFERRED = 'deferred'

# ==============================================================================
# ACCEPTANCE CRITERIA CATEGORIES
# ==============================================================================
CATEGORY_HAPPY_PATH = 'Happy Path'
CATEGORY_NEGATIVE = 'Negative'
CATEGORY_EDGE_CASE = 'Edge Case'
CATEGORY_RESILIENCE = 'Resilience'

# ==============================================================================
# AXES
# ==============================================================================
AXIS_COMPLETENESS = 'Completeness'
AXIS_CLARITY = 'Clarity'
AXIS_CONSTRAINTS = 'Constraints'
AXIS_SPECIFICITY = 'Specificity'

# Also the tie-break order when picking the weakest axis
AXES = [
    AXIS_COMPLETENESS,
    AXIS_CLARITY,
    AXIS_CONSTRAINTS,
    AXIS_SPECIFICITY,
]

# ==============================================================================
# VERDICTS
# ==============================================================================
VERDICT_SHIP_IT = 'SHIP_IT'
VERDICT_ALMOST = 'ALMOST'
VERDICT_DRAFT = 'DRAFT'
VERDICT_VAGUE = 'VAGUE'
VERDICT_UNBOUNDED = 'UNBOUNDED'
VERDICT_OVER_CONSTRAINED = 'OVER_CONSTRAINED'
VERDICT_SKETCH = 'SKETCH'

VERDICTS = [
    VERDICT_SHIP_IT,
    VERDICT_ALMOST,
    VERDICT_DRAFT,
    VERDICT_VAGUE,
    VERDICT_UNBOUNDED,
    VERDICT_OVER_CONSTRAINED,
    VERDICT_SKETCH,
]

# Verdicts that trigger the single self-repair attempt
REPAIRABLE_VERDICTS = frozenset({VERDICT_SKETCH, VERDICT_VAGUE})

# Verdicts the CLI treats as passing
PASSING_VERDICTS = frozenset({VERDICT_SHIP_IT, VERDICT_ALMOST})

# ==============================================================================
# SEVERITY LEVELS
# ==============================================================================
SEVERITY_CRITICAL = 'critical'
SEVERITY_WARNING = 'warning'
SEVERITY_INFO = 'info'

# ==============================================================================
# IPO LOGGING PREFIXES
# ==============================================================================
LOG_INPUT = '[INPUT]'
LOG_PROCESS = '[PROCESS]'
LOG_OUTPUT = '[OUTPUT]'

# ==============================================================================
# CLARIFICATION MARKER
# ==============================================================================
CLARIFICATION_TAG = 'NEEDS CLARIFICATION'

# ==============================================================================
# FILE NAMES AND PATTERNS
# ==============================================================================
REPORT_FILE = 'report.json'
SUMMARY_FILE = 'summary.txt'
VOCABULARY_FILE = 'vocabulary.json'

DOCUMENT_EXTENSIONS = ['.md', '.markdown', '.txt']
DEFAULT_BATCH_PATTERN = '*.md'

MAX_FILE_SIZE_MB = 20
MAX_FILE_SIZE_BYTES = MAX_FILE_SIZE_MB * 1024 * 1024

# ==============================================================================
# CLI EXIT CODES
# ==============================================================================
EXIT_PASSED = 0
EXIT_FAILED = 1
EXIT_NO_DOCUMENT = 2


__all__ = [
    # Sections
    'SECTION_OVERVIEW',
    'SECTION_SCOPE',
    'SECTION_REFERENCE_IMPLEMENTATION',
    'SECTION_CODEBASE_CONTEXT',
    'SECTION_REQUIREMENTS',
    'SECTION_PROHIBITIONS',
    'SECTION_DECISION_TREE',
    'SECTION_DOMAIN_RULES',
    'SECTION_ESCALATION',
    'SECTION_DATA_MODEL',
    'SECTION_API_CONTRACT',
    'SECTION_ACCEPTANCE_CRITERIA',
    'SECTION_FILES',
    'SECTION_OBSERVABILITY',
    'SECTION_KEY_DECISIONS',
    'SECTION_OPEN_QUESTIONS',
    'CANONICAL_SECTIONS',
    'COUNTED_SECTIONS',
    'SECTION_TITLES',
    'SECTION_ALIASES',
    'SCOPE_SUBHEADING_ALIASES',

    # Scope parts
    'SCOPE_IN',
    'SCOPE_OUT',
    'SCOPE_DEFERRED',

    # Criteria categories
    'CATEGORY_HAPPY_PATH',
    'CATEGORY_NEGATIVE',
    'CATEGORY_EDGE_CASE',
    'CATEGORY_RESILIENCE',

    # Axes
    'AXIS_COMPLETENESS',
    'AXIS_CLARITY',
    'AXIS_CONSTRAINTS',
    'AXIS_SPECIFICITY',
    'AXES',

    # Verdicts
    'VERDICT_SHIP_IT',
    'VERDICT_ALMOST',
    'VERDICT_DRAFT',
    'VERDICT_VAGUE',
    'VERDICT_UNBOUNDED',
    'VERDICT_OVER_CONSTRAINED',
    'VERDICT_SKETCH',
    'VERDICTS',
    'REPAIRABLE_VERDICTS',
    'PASSING_VERDICTS',

    # Severity levels
    'SEVERITY_CRITICAL',
    'SEVERITY_WARNING',
    'SEVERITY_INFO',

    # IPO logging
    'LOG_INPUT',
    'LOG_PROCESS',
    'LOG_OUTPUT',

    # Markers
    'CLARIFICATION_TAG',

    # Files
    'REPORT_FILE',
    'SUMMARY_FILE',
    'VOCABULARY_FILE',
    'DOCUMENT_EXTENSIONS',
    'DEFAULT_BATCH_PATTERN',
    'MAX_FILE_SIZE_MB',
    'MAX_FILE_SIZE_BYTES',

    # Exit codes
    'EXIT_PASSED',
    'EXIT_FAILED',
    'EXIT_NO_DOCUMENT',
]
