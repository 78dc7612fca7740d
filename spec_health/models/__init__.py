# Path: spec_health/models/__init__.py
"""
Spec Health Models Package

Document model and findings shared by the extractor, auditor and checks.
"""

from .document import (
    Bullet,
    Section,
    Prohibition,
    Requirement,
    AcceptanceCriterion,
    DecisionTreeNode,
    DataEntity,
    Document,
)
from .findings import Finding, NoDocumentError

__all__ = [
    'Bullet',
    'Section',
    'Prohibition',
    'Requirement',
    'AcceptanceCriterion',
    'DecisionTreeNode',
    'DataEntity',
    'Document',
    'Finding',
    'NoDocumentError',
]
