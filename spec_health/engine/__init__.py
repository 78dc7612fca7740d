# Path: spec_health/engine/__init__.py
"""
Spec Health Engine Package

PROCESS layer: consistency audit, sub-checks, scoring and self-repair.
"""

from .coordinator import HealthCheckCoordinator, HealthReport

__all__ = ['HealthCheckCoordinator', 'HealthReport']
