# Path: spec_health/engine/checks/core/__init__.py
"""
Sub-Check Core

Result type, ratio helper and check constants.
"""

from .check_result import SubCheck, ratio

__all__ = ['SubCheck', 'ratio']
