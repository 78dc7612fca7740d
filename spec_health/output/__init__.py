# Path: spec_health/output/__init__.py
"""
Spec Health Output Package

OUTPUT layer: JSON report and text summary writers.
"""

from .report_generator import ReportGenerator
from .summary_exporter import SummaryExporter

__all__ = ['ReportGenerator', 'SummaryExporter']
