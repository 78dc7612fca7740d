# Path: spec_health/loaders/document_reader.py
"""
Document Reader for Spec Health Module

Reads specification documents and conventions files from disk.

RESPONSIBILITY: Turn a path into text. Decoding is UTF-8 with
replacement characters so a stray byte never aborts an evaluation.
Whether the text is a usable document is decided by the coordinator.
"""

import logging
from pathlib import Path
from typing import Optional

from ..constants import (
    LOG_INPUT,
    DOCUMENT_EXTENSIONS,
    DEFAULT_BATCH_PATTERN,
    MAX_FILE_SIZE_BYTES,
    MAX_FILE_SIZE_MB,
)


class DocumentReader:
    """
    Reads specification markdown files.

    Example:
        reader = DocumentReader()
        text = reader.read(Path('specs/checkout.md'))

        for path in reader.discover(Path('specs')):
            print(path.name)
    """

    def __init__(self):
        """Initialize document reader."""
        self.logger = logging.getLogger('input.document_reader')

    def read(self, path: Path) -> str:
        """
        Read a document as text.

        Args:
            path: Path to the document

        Returns:
            File content (may be empty)

        Raises:
            FileNotFoundError: If the path does not exist or is not a file
            ValueError: If the file exceeds the size limit
        """
        path = Path(path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Document not found: {path}")

        size = path.stat().st_size
        if size > MAX_FILE_SIZE_BYTES:
            raise ValueError(
                f"Document too large: {path} ({size} bytes, limit {MAX_FILE_SIZE_MB} MB)"
            )

        self.logger.info(f"{LOG_INPUT} Reading document: {path} ({size} bytes)")

        with open(path, 'r', encoding='utf-8', errors='replace') as f:
            return f.read()

    def read_optional(self, path: Optional[Path]) -> Optional[str]:
        """
        Read a supplementary text file (e.g. a conventions file).

        Args:
            path: Path or None

        Returns:
            Content, or None when no path was given
        """
        if path is None:
            return None
        return self.read(path)

    def discover(self, directory: Path, pattern: str = DEFAULT_BATCH_PATTERN) -> list[Path]:
        """
        Find documents in a directory.

        Args:
            directory: Directory to search (recursively)
            pattern: Glob pattern for file names

        Returns:
            Sorted list of document paths

        Raises:
            FileNotFoundError: If the directory does not exist
        """
        directory = Path(directory)
        if not directory.exists() or not directory.is_dir():
            raise FileNotFoundError(f"Directory not found: {directory}")

        paths = sorted(
            path for path in directory.rglob(pattern)
            if path.is_file() and path.suffix.lower() in DOCUMENT_EXTENSIONS
        )

        self.logger.info(f"{LOG_INPUT} Found {len(paths)} documents in {directory}")
        return paths


__all__ = ['DocumentReader']
