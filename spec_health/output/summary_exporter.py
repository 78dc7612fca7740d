# Path: spec_health/output/summary_exporter.py
"""
Summary Exporter for Spec Health Module

Writes a plain-text summary of a health report for people who
do not want to read JSON.
"""

import logging
from pathlib import Path
from typing import Optional

from ..core.config_loader import ConfigLoader
from ..engine.coordinator import HealthReport
from ..constants import AXES, LOG_OUTPUT, SUMMARY_FILE


RULE_WIDTH = 72


class SummaryExporter:
    """
    Exports a human-readable summary.txt.

    Example:
        exporter = SummaryExporter()
        path = exporter.export(health_report)
    """

    def __init__(self, config: Optional[ConfigLoader] = None):
        self.config = config if config else ConfigLoader()
        self.output_dir = self.config.get('output_dir')
        self.logger = logging.getLogger('output.summary_exporter')

    def export(self, report: HealthReport, output_path: Optional[Path] = None) -> Path:
        """
        Write the summary file.

        Args:
            report: HealthReport from coordinator
            output_path: Optional custom output path

        Returns:
            Path to the summary file

        Raises:
            ValueError: If no output path is given and no output directory is configured
        """
        if output_path is None:
            if not self.output_dir:
                raise ValueError("Output directory not configured")
            output_path = Path(self.output_dir) / report.document_name / SUMMARY_FILE

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(self.render(report), encoding='utf-8')

        self.logger.info(f"{LOG_OUTPUT} Summary saved to: {output_path}")
        return output_path

    def render(self, report: HealthReport) -> str:
        """Summary text for a report."""
        lines = []
        lines.append("=" * RULE_WIDTH)
        lines.append(f"SPEC HEALTH: {report.document_name}")
        lines.append("=" * RULE_WIDTH)
        lines.append(f"Verdict: {report.verdict}")
        lines.append(f"  {report.classification.description}")
        lines.append(f"  Next step: {report.classification.recommendation}")
        lines.append("")

        lines.append("Scores:")
        axis_scores = report.axis_scores
        for axis in AXES:
            lines.append(f"  {axis:<14}{axis_scores[axis]:.{report.decimals}f}")
        lines.append(f"  {'Balance':<14}{report.balance:.{report.decimals}f}")
        lines.append("")

        lines.append("Sub-checks:")
        for sub_check in report.sub_checks:
            lines.append(
                f"  {sub_check.id:<4}{round(sub_check.score, report.decimals):.{report.decimals}f}  "
                f"{sub_check.description}: {sub_check.detail}"
            )
        lines.append("")

        if report.actionable_findings:
            lines.append("Actionable findings:")
            for number, finding in enumerate(report.actionable_findings, 1):
                lines.append(f"  {number}. [{finding.get_severity_label()}] {finding.section}: {finding.message}")
            lines.append("")

        if report.audit_findings:
            lines.append("Consistency audit:")
            for finding in report.audit_findings:
                lines.append(f"  [{finding.get_severity_label()}] {finding.section}: {finding.message}")
            lines.append("")

        repair = report.repair
        if repair.attempted:
            lines.append("Self-repair:")
            lines.append(f"  {repair.description}")
            for change in repair.changes:
                lines.append(f"  - {change}")
            if repair.applied:
                lines.append(f"  Verdict before repair: {repair.pre_repair_verdict}")
            lines.append("")

        lines.append("=" * RULE_WIDTH)
        return '\n'.join(lines) + '\n'


__all__ = ['SummaryExporter']
