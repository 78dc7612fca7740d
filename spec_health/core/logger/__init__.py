# Path: spec_health/core/logger/__init__.py
"""
Spec Health Logger Package

IPO-aware logging for the spec health module.
"""

from .ipo_logging import setup_ipo_logging

__all__ = [
    'setup_ipo_logging',
]
