# Path: spec_health/loaders/__init__.py
"""
Spec Health Loaders Package

INPUT layer: reading documents and parsing them into the Document model.
"""

from .document_reader import DocumentReader
from .section_extractor import SectionExtractor, extract_conventions

__all__ = [
    'DocumentReader',
    'SectionExtractor',
    'extract_conventions',
]
