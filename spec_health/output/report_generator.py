# Path: spec_health/output/report_generator.py
"""
Report Generator for Spec Health Module

Writes the health check report as JSON.
The report carries no timestamps so identical documents produce
identical files.
"""

import json
import logging
from pathlib import Path
from typing import Optional

from ..core.config_loader import ConfigLoader
from ..engine.coordinator import HealthReport
from ..constants import LOG_OUTPUT, REPORT_FILE


class ReportGenerator:
    """
    Creates the health check report JSON file.

    The report includes:
    - Verdict, description and recommendation
    - Axis scores and Balance
    - Every sub-check score with its detail
    - Actionable findings and audit findings
    - Self-repair outcome (and repaired text when a repair was applied)

    Example:
        generator = ReportGenerator()
        path = generator.generate_report(health_report)
        print(f"Report saved to: {path}")
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        """
        Initialize report generator.

        Args:
            config: Optional ConfigLoader instance
        """
        self.config = config if config else ConfigLoader()
        self.output_dir = self.config.get('output_dir')
        self.logger = logging.getLogger('output.report_generator')

    def generate_report(
        self,
        report: HealthReport,
        output_path: Optional[Path] = None
    ) -> Path:
        """
        Generate health check report JSON.

        Args:
            report: HealthReport from coordinator
            output_path: Optional custom output path

        Returns:
            Path to generated report file

        Raises:
            ValueError: If no output path is given and no output directory is configured
        """
        self.logger.info(f"{LOG_OUTPUT} Generating health report for {report.document_name}")

        if output_path is None:
            output_path = self._get_default_output_path(report)

        self._write_report(self.build_report(report), Path(output_path))

        self.logger.info(f"{LOG_OUTPUT} Report saved to: {output_path}")

        return Path(output_path)

    def build_report(self, report: HealthReport) -> dict:
        """Build report dictionary from a health report."""
        data = {'report_type': 'spec_health'}
        data.update(report.to_dict())
        data['summary'] = {
            'sub_checks': len(report.sub_checks),
            'sub_checks_passed': sum(1 for sub_check in report.sub_checks if sub_check.passed),
            'audit_findings': len(report.audit_findings),
            'weakest_axis': report.scores.weakest_axis(),
        }
        return data

    def _get_default_output_dir(self, report: HealthReport) -> Path:
        """Get default output directory for reports."""
        if not self.output_dir:
            raise ValueError("Output directory not configured")

        # output_dir/<document name>/
        report_dir = Path(self.output_dir) / report.document_name
        report_dir.mkdir(parents=True, exist_ok=True)

        return report_dir

    def _get_default_output_path(self, report: HealthReport) -> Path:
        """Get default output path for report file."""
        return self._get_default_output_dir(report) / REPORT_FILE

    def _write_report(self, data: dict, output_path: Path) -> None:
        """Write report to JSON file."""
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, default=str)


__all__ = ['ReportGenerator']
