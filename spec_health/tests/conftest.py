# Path: spec_health/tests/conftest.py
"""
Shared pytest fixtures for spec health tests.
"""

import pytest

from spec_health.core.config_loader import ConfigLoader
from spec_health.core.keyword_matcher import KeywordMatcher
from spec_health.core.vocabulary import load_vocabulary
from spec_health.engine.audit.consistency_auditor import ConsistencyAuditor
from spec_health.engine.checks.check_evaluator import CheckEvaluator
from spec_health.engine.coordinator import HealthCheckCoordinator
from spec_health.loaders.section_extractor import SectionExtractor


ENV_KEYS = [
    'SPEC_HEALTH_ENVIRONMENT',
    'SPEC_HEALTH_DEBUG',
    'SPEC_HEALTH_OUTPUT_DIR',
    'SPEC_HEALTH_LOG_DIR',
    'SPEC_HEALTH_LOG_LEVEL',
    'SPEC_HEALTH_ENABLE_SELF_REPAIR',
    'SPEC_HEALTH_MAX_ACTIONABLE_FINDINGS',
    'SPEC_HEALTH_VOCABULARY_PATH',
    'SPEC_HEALTH_REPORT_DECIMALS',
]


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Fresh configuration singleton without SPEC_HEALTH_* overrides."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


@pytest.fixture
def vocabulary():
    return load_vocabulary()


@pytest.fixture
def matcher(vocabulary):
    return KeywordMatcher(vocabulary)


@pytest.fixture
def extractor(vocabulary):
    return SectionExtractor(vocabulary)


@pytest.fixture
def auditor(vocabulary):
    return ConsistencyAuditor(vocabulary)


@pytest.fixture
def evaluator(vocabulary, auditor):
    return CheckEvaluator(vocabulary, auditor)


@pytest.fixture
def coordinator():
    return HealthCheckCoordinator()
