# Path: spec_health/__init__.py
"""
Spec Health

Scores a structured specification document on four axes
(Completeness, Clarity, Constraints, Specificity), derives Balance and a
verdict, and applies at most one self-repair to weak documents.

Example:
    from spec_health import HealthCheckCoordinator

    report = HealthCheckCoordinator().evaluate(text, name='checkout')
    print(report.verdict)
"""

__version__ = '0.1.0'

from .core.config_loader import ConfigLoader
from .engine.coordinator import HealthCheckCoordinator, HealthReport
from .models.findings import Finding, NoDocumentError

__all__ = [
    '__version__',
    'ConfigLoader',
    'HealthCheckCoordinator',
    'HealthReport',
    'Finding',
    'NoDocumentError',
]
