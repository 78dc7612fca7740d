# Path: spec_health/models/findings.py
"""
Finding Data Structure

A Finding is a non-blocking observation about a document: produced by
the consistency audit and by the actionable-findings derivation.
"""

from dataclasses import dataclass

from ..constants import SEVERITY_WARNING, SEVERITY_CRITICAL, SEVERITY_INFO


class NoDocumentError(Exception):
    """Raised when there is no document text to evaluate."""
    pass


@dataclass
class Finding:
    """
    A single observation about the document.

    Attributes:
        section: Section title the finding refers to
        message: Human-readable description
        severity: Severity level (critical, warning, info)
        rule: Rule that produced the finding (e.g. 'prohibition_without_negative_test', 'C1')
    """
    section: str
    message: str
    severity: str = SEVERITY_WARNING
    rule: str = ''

    def get_severity_label(self) -> str:
        """Get human-readable severity label."""
        if self.severity == SEVERITY_CRITICAL:
            return "CRITICAL"
        elif self.severity == SEVERITY_WARNING:
            return "WARNING"
        elif self.severity == SEVERITY_INFO:
            return "INFO"
        return self.severity.upper()

    def to_dict(self) -> dict:
        return {
            'section': self.section,
            'message': self.message,
            'severity': self.severity,
            'rule': self.rule,
        }


__all__ = ['Finding', 'NoDocumentError']
