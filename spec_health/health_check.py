#!/usr/bin/env python3
# Path: spec_health/health_check.py
"""
Spec Health CLI
===============

Command-line interface for scoring specification documents.

Exit codes:
    0 - verdict SHIP_IT or ALMOST
    1 - any other verdict, or a missing file
    2 - no document text to evaluate
"""

import sys
import json
import argparse
import logging
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn

from spec_health import __version__
from spec_health.constants import (
    AXES,
    DEFAULT_BATCH_PATTERN,
    EXIT_PASSED,
    EXIT_FAILED,
    EXIT_NO_DOCUMENT,
    LOG_OUTPUT,
    SEVERITY_CRITICAL,
    SEVERITY_WARNING,
)
from spec_health.core.config_loader import ConfigLoader
from spec_health.core.logger import setup_ipo_logging
from spec_health.engine.coordinator import HealthCheckCoordinator, HealthReport
from spec_health.loaders.document_reader import DocumentReader
from spec_health.models.findings import NoDocumentError
from spec_health.output.report_generator import ReportGenerator
from spec_health.output.summary_exporter import SummaryExporter


console = Console()

VERDICT_COLORS = {
    'SHIP_IT': 'green',
    'ALMOST': 'green',
    'DRAFT': 'yellow',
    'VAGUE': 'yellow',
    'UNBOUNDED': 'yellow',
    'OVER_CONSTRAINED': 'yellow',
    'SKETCH': 'red',
}

SEVERITY_STYLES = {
    SEVERITY_CRITICAL: 'red',
    SEVERITY_WARNING: 'yellow',
}


def setup_logging(config: ConfigLoader, verbose: bool = False) -> logging.Logger:
    """Setup IPO logging with console output through rich."""
    level = 'DEBUG' if verbose else config.get('log_level', 'INFO')

    setup_ipo_logging(
        log_dir=config.get('log_dir'),
        log_level=level if verbose else 'WARNING',
        console_output=True,
        console=console
    )
    if config.get('log_dir'):
        # File handlers keep the configured level even when the console is quiet
        logging.getLogger().setLevel(getattr(logging, level.upper(), logging.INFO))

    return logging.getLogger('output.cli')


def score_style(score: float) -> str:
    if score >= 0.9:
        return 'green'
    if score >= 0.6:
        return 'yellow'
    return 'red'


def display_report(report: HealthReport) -> None:
    """Display a health report with rich formatting."""

    color = VERDICT_COLORS.get(report.verdict, 'white')
    symbol = "✓" if report.passed else "✗"

    panel = Panel(
        f"[{color} bold]{symbol} {report.verdict}[/{color} bold]\n"
        f"Document: {report.document_name}\n"
        f"{report.classification.description}\n"
        f"Next step: {report.classification.recommendation}",
        title="Spec Health",
        border_style=color
    )
    console.print(panel)

    # Axis scores
    score_table = Table(title="Scores", show_header=True, header_style="bold")
    score_table.add_column("Axis", style="bold")
    score_table.add_column("Score", justify="right")

    axis_scores = report.axis_scores
    for axis in AXES:
        style = score_style(axis_scores[axis])
        score_table.add_row(axis, f"[{style}]{axis_scores[axis]:.2f}[/{style}]")
    score_table.add_row("Balance", f"{report.balance:.2f}")

    console.print(score_table)

    # Sub-checks
    check_table = Table(title="Sub-checks", show_header=True, header_style="bold cyan")
    check_table.add_column("ID", style="dim", width=4)
    check_table.add_column("Check", style="cyan")
    check_table.add_column("Score", justify="right")
    check_table.add_column("Detail", style="white")

    for sub_check in report.sub_checks:
        style = score_style(sub_check.score)
        detail = sub_check.detail
        check_table.add_row(
            sub_check.id,
            sub_check.description,
            f"[{style}]{sub_check.score:.2f}[/{style}]",
            detail[:80] + "..." if len(detail) > 80 else detail
        )

    console.print(check_table)

    # Actionable findings
    if report.actionable_findings:
        finding_table = Table(title="Actionable Findings", show_header=True, header_style="bold yellow")
        finding_table.add_column("#", style="dim", width=4)
        finding_table.add_column("Severity")
        finding_table.add_column("Section", style="cyan")
        finding_table.add_column("Message", style="white")

        for i, finding in enumerate(report.actionable_findings, 1):
            style = SEVERITY_STYLES.get(finding.severity, 'white')
            finding_table.add_row(
                str(i),
                f"[{style}]{finding.get_severity_label()}[/{style}]",
                finding.section,
                finding.message
            )

        console.print(finding_table)

    # Consistency audit
    if report.audit_findings:
        audit_table = Table(title="Consistency Audit", show_header=True, header_style="bold magenta")
        audit_table.add_column("Severity")
        audit_table.add_column("Section", style="cyan")
        audit_table.add_column("Message", style="white")

        for finding in report.audit_findings:
            style = SEVERITY_STYLES.get(finding.severity, 'white')
            audit_table.add_row(
                f"[{style}]{finding.get_severity_label()}[/{style}]",
                finding.section,
                finding.message[:100] + "..." if len(finding.message) > 100 else finding.message
            )

        console.print(audit_table)

    # Self-repair
    repair = report.repair
    if repair.attempted:
        lines = [repair.description]
        lines.extend(f"- {change}" for change in repair.changes)
        if repair.applied:
            lines.append(f"Verdict before repair: {repair.pre_repair_verdict}")
        console.print(Panel("\n".join(lines), title="Self-Repair", border_style="blue"))


def display_batch_summary(reports: dict[Path, HealthReport], errors: dict[Path, str]) -> None:
    """Display summary of a batch run."""

    total = len(reports) + len(errors)
    passed = sum(1 for r in reports.values() if r.passed)

    summary_table = Table(title="Batch Health Summary", show_header=True)
    summary_table.add_column("Metric", style="bold")
    summary_table.add_column("Count", justify="right")

    summary_table.add_row("Total Documents", str(total))
    summary_table.add_row("Passed", f"[green]{passed}[/green]")
    summary_table.add_row("Failed", f"[red]{total - passed}[/red]")
    summary_table.add_row(
        "Pass Rate",
        f"{(passed/total*100):.1f}%" if total > 0 else "N/A"
    )

    console.print(summary_table)

    detail_table = Table(title="Documents", show_header=True, header_style="bold cyan")
    detail_table.add_column("File", style="cyan")
    detail_table.add_column("Verdict")
    for axis in AXES:
        detail_table.add_column(axis, justify="right")
    detail_table.add_column("Balance", justify="right")

    for path, report in reports.items():
        color = VERDICT_COLORS.get(report.verdict, 'white')
        axis_scores = report.axis_scores
        detail_table.add_row(
            path.name,
            f"[{color}]{report.verdict}[/{color}]",
            *[f"{axis_scores[axis]:.2f}" for axis in AXES],
            f"{report.balance:.2f}"
        )
    for path, message in errors.items():
        detail_table.add_row(path.name, f"[red]{message}[/red]", *[''] * (len(AXES) + 1))

    console.print(detail_table)


def build_coordinator(config: ConfigLoader, no_repair: bool) -> HealthCheckCoordinator:
    return HealthCheckCoordinator(config, enable_self_repair=False if no_repair else None)


def check_single_file(
    file_path: Path,
    conventions_path: Optional[Path],
    no_repair: bool,
    report_path: Optional[Path],
    summary_path: Optional[Path],
    as_json: bool,
    verbose: bool
) -> int:
    """Score a single document."""

    config = ConfigLoader()
    logger = setup_logging(config, verbose)

    if not file_path.exists():
        console.print(f"[red]Error:[/red] File not found: {file_path}")
        return EXIT_FAILED

    if conventions_path and not conventions_path.exists():
        console.print(f"[red]Error:[/red] Conventions file not found: {conventions_path}")
        return EXIT_FAILED

    coordinator = build_coordinator(config, no_repair)

    try:
        report = coordinator.evaluate_file(file_path, conventions_path)
    except NoDocumentError as e:
        console.print(f"[red]Error:[/red] {e}")
        return EXIT_NO_DOCUMENT

    if as_json:
        console.print_json(json.dumps(report.to_dict(), default=str))
    else:
        console.print(f"\n[bold]Spec Health Check[/bold]")
        console.print(f"File: {file_path}")
        if conventions_path:
            console.print(f"Conventions: {conventions_path}")
        console.print()
        display_report(report)

    if report_path:
        path = ReportGenerator(config).generate_report(report, report_path)
        logger.info(f"{LOG_OUTPUT} Report written: {path}")
        if not as_json:
            console.print(f"\n[green]Report saved:[/green] {path}")

    if summary_path:
        path = SummaryExporter(config).export(report, summary_path)
        if not as_json:
            console.print(f"[green]Summary saved:[/green] {path}")

    return EXIT_PASSED if report.passed else EXIT_FAILED


def check_directory(
    directory: Path,
    pattern: str,
    conventions_path: Optional[Path],
    no_repair: bool,
    output_dir: Optional[Path],
    verbose: bool
) -> int:
    """Score all documents in a directory."""

    config = ConfigLoader()
    logger = setup_logging(config, verbose)

    if not directory.exists():
        console.print(f"[red]Error:[/red] Directory not found: {directory}")
        return EXIT_FAILED

    if conventions_path and not conventions_path.exists():
        console.print(f"[red]Error:[/red] Conventions file not found: {conventions_path}")
        return EXIT_FAILED

    documents = DocumentReader().discover(directory, pattern)

    if not documents:
        console.print(f"[yellow]Warning:[/yellow] No files matching '{pattern}' found in {directory}")
        return EXIT_PASSED

    console.print(f"\n[bold]Batch Spec Health Check[/bold]")
    console.print(f"Directory: {directory}")
    console.print(f"Pattern: {pattern}")
    console.print(f"Files found: {len(documents)}")
    console.print()

    coordinator = build_coordinator(config, no_repair)
    generator = ReportGenerator(config)
    exporter = SummaryExporter(config)
    if output_dir:
        generator.output_dir = exporter.output_dir = output_dir

    reports = {}
    errors = {}

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console
    ) as progress:
        task = progress.add_task("Processing documents...", total=len(documents))

        for document_path in documents:
            progress.update(task, description=f"Scoring {document_path.name}...")
            try:
                report = coordinator.evaluate_file(document_path, conventions_path)
            except NoDocumentError:
                logger.warning(f"{LOG_OUTPUT} No document text in {document_path}")
                errors[document_path] = 'NO DOCUMENT'
            else:
                reports[document_path] = report
                if output_dir:
                    generator.generate_report(report)
                    exporter.export(report)
            progress.advance(task)

    display_batch_summary(reports, errors)

    if output_dir:
        console.print(f"\n[green]Reports saved under:[/green] {output_dir}")

    if errors:
        return EXIT_NO_DOCUMENT
    return EXIT_PASSED if all(r.passed for r in reports.values()) else EXIT_FAILED


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""

    parser = argparse.ArgumentParser(
        description="Spec Health - Quality scoring for specification documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Score a single document
  spec-health check specs/checkout.md

  # Include the project conventions registry
  spec-health check specs/checkout.md --conventions CONVENTIONS.md

  # Write the JSON report and text summary
  spec-health check specs/checkout.md --report out/report.json --summary out/summary.txt

  # Score every document in a directory
  spec-health batch ./specs --pattern "*.md" --output-dir ./health
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'Spec Health {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    # Check command
    check_parser = subparsers.add_parser(
        'check',
        help='Score a single document'
    )
    check_parser.add_argument(
        'file',
        type=Path,
        help='Path to specification document'
    )
    check_parser.add_argument(
        '-c', '--conventions',
        type=Path,
        help='Path to conventions registry file'
    )
    check_parser.add_argument(
        '--no-repair',
        action='store_true',
        help='Disable the self-repair pass'
    )
    check_parser.add_argument(
        '-r', '--report',
        type=Path,
        help='Write JSON report to this path'
    )
    check_parser.add_argument(
        '-s', '--summary',
        type=Path,
        help='Write text summary to this path'
    )
    check_parser.add_argument(
        '--json',
        action='store_true',
        help='Print the report as JSON instead of tables'
    )
    check_parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    # Batch command
    batch_parser = subparsers.add_parser(
        'batch',
        help='Score every document in a directory'
    )
    batch_parser.add_argument(
        'directory',
        type=Path,
        help='Directory containing specification documents'
    )
    batch_parser.add_argument(
        '-p', '--pattern',
        default=DEFAULT_BATCH_PATTERN,
        help=f'File pattern to match (default: {DEFAULT_BATCH_PATTERN})'
    )
    batch_parser.add_argument(
        '-c', '--conventions',
        type=Path,
        help='Path to conventions registry file'
    )
    batch_parser.add_argument(
        '--no-repair',
        action='store_true',
        help='Disable the self-repair pass'
    )
    batch_parser.add_argument(
        '-o', '--output-dir',
        type=Path,
        help='Write report.json and summary.txt per document under this directory'
    )
    batch_parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging'
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return EXIT_PASSED

    try:
        if args.command == 'check':
            return check_single_file(
                file_path=args.file,
                conventions_path=args.conventions,
                no_repair=args.no_repair,
                report_path=args.report,
                summary_path=args.summary,
                as_json=args.json,
                verbose=args.verbose
            )

        elif args.command == 'batch':
            return check_directory(
                directory=args.directory,
                pattern=args.pattern,
                conventions_path=args.conventions,
                no_repair=args.no_repair,
                output_dir=args.output_dir,
                verbose=args.verbose
            )

    except KeyboardInterrupt:
        console.print("\n[yellow]Health check interrupted by user[/yellow]")
        return 130

    except (OSError, ValueError) as e:
        console.print(f"\n[red bold]Error:[/red bold] {str(e)}")
        if args.verbose:
            console.print_exception()
        return EXIT_FAILED

    return EXIT_PASSED


if __name__ == "__main__":
    sys.exit(main())
