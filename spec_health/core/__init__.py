# Path: spec_health/core/__init__.py
"""
Spec Health Core Package

Configuration, vocabulary, keyword matching and logging shared by every layer.
"""

from .config_loader import ConfigLoader
from .keyword_matcher import KeywordMatcher, stem
from .vocabulary import Vocabulary, load_vocabulary

__all__ = [
    'ConfigLoader',
    'KeywordMatcher',
    'stem',
    'Vocabulary',
    'load_vocabulary',
]
