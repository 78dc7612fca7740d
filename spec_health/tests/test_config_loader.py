# Path: spec_health/tests/test_config_loader.py
"""
Tests for environment-driven configuration and vocabulary loading.
"""

from pathlib import Path

import pytest

from spec_health.core.config_loader import ConfigLoader, DEFAULT_VOCABULARY_PATH
from spec_health.core.keyword_matcher import stem
from spec_health.core.vocabulary import load_vocabulary


def test_defaults():
    config = ConfigLoader()

    assert config.get('output_dir') is None
    assert config.get('log_dir') is None
    assert config.get('log_level') == 'INFO'
    assert config.get('enable_self_repair') is True
    assert config.get('max_actionable_findings') == 3
    assert config.get('report_decimals') == 2
    assert config.get('vocabulary_path') == DEFAULT_VOCABULARY_PATH


def test_singleton():
    assert ConfigLoader() is ConfigLoader()


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv('SPEC_HEALTH_OUTPUT_DIR', str(tmp_path))
    monkeypatch.setenv('SPEC_HEALTH_ENABLE_SELF_REPAIR', 'no')
    monkeypatch.setenv('SPEC_HEALTH_MAX_ACTIONABLE_FINDINGS', ' 5 ')
    monkeypatch.setenv('SPEC_HEALTH_LOG_LEVEL', 'DEBUG')
    ConfigLoader.reset()

    config = ConfigLoader()

    assert config.get('output_dir') == Path(str(tmp_path))
    assert config.get('enable_self_repair') is False
    assert config.get('max_actionable_findings') == 5
    assert config['log_level'] == 'DEBUG'


def test_invalid_integer_falls_back_to_default(monkeypatch):
    monkeypatch.setenv('SPEC_HEALTH_MAX_ACTIONABLE_FINDINGS', 'three')
    ConfigLoader.reset()

    assert ConfigLoader().get('max_actionable_findings') == 3


def test_blank_path_is_unset(monkeypatch):
    monkeypatch.setenv('SPEC_HEALTH_OUTPUT_DIR', '   ')
    ConfigLoader.reset()

    assert ConfigLoader().get('output_dir') is None


def test_set_overrides_value():
    config = ConfigLoader()
    config.set('enable_self_repair', False)

    assert ConfigLoader().get('enable_self_repair') is False
    assert 'enable_self_repair' in config


# ==============================================================================
# VOCABULARY
# ==============================================================================

def test_vocabulary_is_loaded_once():
    assert load_vocabulary() is load_vocabulary(DEFAULT_VOCABULARY_PATH)


def test_vocabulary_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_vocabulary(tmp_path / 'missing.json')


def test_vocabulary_lists(vocabulary):
    assert 'handle' in vocabulary.vague_verbs
    assert 'POST' in vocabulary.http_methods
    assert vocabulary.weasel_pattern.search('Retry as needed.')
    assert not vocabulary.weasel_pattern.search('Retry as needed2')


def test_custom_vocabulary(tmp_path):
    path = tmp_path / 'vocabulary.json'
    path.write_text('{"weasel_phrases": ["roughly"], "vague_verbs": ["Deal"]}', encoding='utf-8')

    vocabulary = load_vocabulary(path)

    assert vocabulary.weasel_pattern.search('roughly ten')
    assert vocabulary.vague_verbs == frozenset({'deal'})
    assert not vocabulary.status_pattern.search('not found')


# ==============================================================================
# KEYWORD MATCHING
# ==============================================================================

def test_stem():
    assert stem('retries') == 'retry'
    assert stem('logging') == stem('logged') == stem('logs') == 'log'
    assert stem('stored') == stem('store')
    assert stem('tokens') == 'token'


def test_key_nouns(matcher):
    assert matcher.key_nouns('NEVER log access tokens') == frozenset({'acces', 'token'})
    assert matcher.key_nouns('must never do it') == frozenset()


def test_leading_verb(matcher):
    assert matcher.leading_verb('The system must never log tokens') == 'log'
    assert matcher.leading_verb("It shouldn't retry declined refunds") == 'retry'
    assert matcher.verbs_equal('logs', 'log')
