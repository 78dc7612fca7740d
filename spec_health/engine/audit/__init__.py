# Path: spec_health/engine/audit/__init__.py
"""
Consistency Audit Package (Pass 1)
"""

from .consistency_auditor import (
    ConsistencyAuditor,
    AuditResult,
    AUDIT_RULES,
    RULE_PROHIBITION_UNTESTED,
    RULE_OUTCOME_UNTESTED,
    RULE_FILE_UNTRACED,
    RULE_CONTRADICTION,
    RULE_SCOPE_LEAKAGE,
    RULE_CONVENTION_MISSING,
)

__all__ = [
    'ConsistencyAuditor',
    'AuditResult',
    'AUDIT_RULES',
    'RULE_PROHIBITION_UNTESTED',
    'RULE_OUTCOME_UNTESTED',
    'RULE_FILE_UNTRACED',
    'RULE_CONTRADICTION',
    'RULE_SCOPE_LEAKAGE',
    'RULE_CONVENTION_MISSING',
]
