# Path: spec_health/engine/repair/__init__.py
"""
Self-Repair Package
"""

from .self_repair import (
    SelfRepairController,
    RepairOutcome,
    ACTION_INSERT_STUBS,
    ACTION_MARK_WEASEL_PHRASES,
    ACTION_ADD_NEGATIVE_TESTS,
)

__all__ = [
    'SelfRepairController',
    'RepairOutcome',
    'ACTION_INSERT_STUBS',
    'ACTION_MARK_WEASEL_PHRASES',
    'ACTION_ADD_NEGATIVE_TESTS',
]
