# Path: spec_health/core/logger/ipo_logging.py
"""
IPO-Aware Logging for Spec Health Module

Input-Process-Output separated logging for the health check.

This module sets up logging with separate files for:
- INPUT layer (document reader, section extractor)
- PROCESS layer (auditor, checks, scoring, self-repair)
- OUTPUT layer (report generator, summary exporter, CLI)
- Full activity (everything combined)
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


class IPOFilter(logging.Filter):
    """Filter logs by IPO layer prefix."""

    def __init__(self, layer: str):
        """
        Initialize filter for specific IPO layer.

        Args:
            layer: 'input', 'process', or 'output'
        """
        super().__init__()
        self.layer = layer

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter records by logger name prefix."""
        return record.name.startswith(self.layer)


def setup_ipo_logging(
    log_dir: Optional[Path] = None,
    log_level: str = 'INFO',
    console_output: bool = True,
    console: Optional[Console] = None
) -> None:
    """
    Set up IPO-aware logging for the spec health check.

    When a log directory is given, creates separate log files for:
    - input_activity.log (INPUT layer)
    - process_activity.log (PROCESS layer)
    - output_activity.log (OUTPUT layer)
    - full_activity.log (all activities combined)

    Args:
        log_dir: Directory for log files (None for console only)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        console_output: Whether to also output to console
        console: Rich console to log through (plain stderr stream if None)

    Example:
        setup_ipo_logging(
            log_dir=Path('/var/log/spec_health'),
            log_level='INFO',
            console_output=True
        )
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    # Get root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Clear any existing handlers
    root_logger.handlers.clear()

    # Standard format
    formatter = logging.Formatter(
        '[%(levelname)s] %(name)s - %(message)s'
    )

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        # Full activity log (everything)
        full_handler = logging.FileHandler(log_dir / 'full_activity.log', encoding='utf-8')
        full_handler.setLevel(logging.DEBUG)
        full_handler.setFormatter(formatter)
        root_logger.addHandler(full_handler)

        for layer in ('input', 'process', 'output'):
            layer_handler = logging.FileHandler(
                log_dir / f'{layer}_activity.log', encoding='utf-8'
            )
            layer_handler.setLevel(logging.DEBUG)
            layer_handler.setFormatter(formatter)
            layer_handler.addFilter(IPOFilter(layer))
            root_logger.addHandler(layer_handler)

    # Console output (optional)
    if console_output:
        if console is not None:
            console_handler = RichHandler(rich_tracebacks=True, console=console)
            console_handler.setFormatter(logging.Formatter('%(name)s - %(message)s'))
        else:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(formatter)
        console_handler.setLevel(level)
        root_logger.addHandler(console_handler)


__all__ = [
    'setup_ipo_logging',
]
