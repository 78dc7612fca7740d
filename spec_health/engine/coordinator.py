# Path: spec_health/engine/coordinator.py
"""
Health Check Coordinator

Main orchestration for the spec health module.

Data flow for one evaluation:
    text -> SectionExtractor -> Document -> ConsistencyAuditor (Pass 1)
         -> CheckEvaluator (Pass 2) -> ScoreCalculator -> VerdictClassifier

If the verdict is SKETCH or VAGUE (and self-repair is enabled) the
SelfRepairController mutates the Document once; Pass 1, Pass 2 and
scoring then re-run exactly once and that verdict is final.

Each evaluation owns its Document. The coordinator keeps no state
between evaluations beyond its configuration and read-only vocabulary.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..constants import LOG_INPUT, LOG_PROCESS, LOG_OUTPUT, PASSING_VERDICTS
from ..core.config_loader import ConfigLoader
from ..core.vocabulary import Vocabulary, load_vocabulary
from ..loaders.document_reader import DocumentReader
from ..loaders.section_extractor import SectionExtractor
from ..models.document import Document
from ..models.findings import Finding, NoDocumentError
from .audit.consistency_auditor import ConsistencyAuditor, AuditResult
from .checks.check_evaluator import CheckEvaluator, EvaluationResult, actionable_findings
from .checks.core.check_result import SubCheck
from .repair.self_repair import SelfRepairController, RepairOutcome
from .scoring.score_calculator import ScoreCalculator, HealthScores
from .scoring.verdict_classifier import VerdictClassifier, VerdictClassification


@dataclass
class HealthReport:
    """
    Complete health check result for one document.

    Attributes:
        document_name: Document name (file stem or caller label)
        verdict: Final verdict
        scores: Final raw axis scores and Balance
        classification: Verdict description and recommendation
        sub_checks: Final sub-check scores, id order
        actionable_findings: Weakest sub-checks as remediation advice
        audit_findings: All Pass 1 findings of the final pass
        repair: Self-repair outcome
        pre_repair_scores: Scores before repair (only when a repair was applied)
        repaired_text: Document text after repair (only when a repair was applied)
        decimals: Decimal places used when serializing scores
    """
    document_name: str
    verdict: str
    scores: HealthScores
    classification: VerdictClassification
    sub_checks: list[SubCheck] = field(default_factory=list)
    actionable_findings: list[Finding] = field(default_factory=list)
    audit_findings: list[Finding] = field(default_factory=list)
    repair: RepairOutcome = field(default_factory=RepairOutcome)
    pre_repair_scores: Optional[HealthScores] = None
    repaired_text: Optional[str] = None
    decimals: int = 2

    @property
    def passed(self) -> bool:
        """SHIP_IT or ALMOST."""
        return self.verdict in PASSING_VERDICTS

    @property
    def axis_scores(self) -> dict[str, float]:
        """Axis scores rounded for display."""
        return {axis: round(value, self.decimals) for axis, value in self.scores.axes.items()}

    @property
    def balance(self) -> float:
        """Balance rounded for display."""
        return round(self.scores.balance, self.decimals)

    def sub_check(self, check_id: str) -> Optional[SubCheck]:
        for sub_check in self.sub_checks:
            if sub_check.id == check_id:
                return sub_check
        return None

    def to_dict(self) -> dict:
        """
        Serializable report.

        Deterministic: no timestamps, stable ordering. Two evaluations
        of the same text produce identical dictionaries.
        """
        return {
            'document': self.document_name,
            'verdict': self.verdict,
            'passed': self.passed,
            'description': self.classification.description,
            'recommendation': self.classification.recommendation,
            'scores': self.scores.to_dict(self.decimals),
            'sub_checks': [sub_check.to_dict(self.decimals) for sub_check in self.sub_checks],
            'actionable_findings': [finding.to_dict() for finding in self.actionable_findings],
            'audit_findings': [finding.to_dict() for finding in self.audit_findings],
            'repair': self.repair.to_dict(),
            'pre_repair_scores': (
                self.pre_repair_scores.to_dict(self.decimals) if self.pre_repair_scores else None
            ),
            'repaired_text': self.repaired_text,
        }


@dataclass
class _Pass:
    """Scores of one audit + check + scoring pass."""
    audit: AuditResult
    evaluation: EvaluationResult
    scores: HealthScores
    classification: VerdictClassification


class HealthCheckCoordinator:
    """
    Spec health workflow orchestrator.

    Coordinates:
    1. Extracting the Document
    2. Consistency audit (Pass 1)
    3. Sub-checks (Pass 2)
    4. Scoring and verdict
    5. At most one self-repair and one re-score

    Example:
        coordinator = HealthCheckCoordinator()

        report = coordinator.evaluate(text, name='checkout')
        print(report.verdict, report.axis_scores)

        report = coordinator.evaluate_file(Path('specs/checkout.md'))
    """

    def __init__(
        self,
        config: Optional[ConfigLoader] = None,
        vocabulary: Optional[Vocabulary] = None,
        enable_self_repair: Optional[bool] = None
    ):
        """
        Initialize health check coordinator.

        Args:
            config: Optional ConfigLoader instance
            vocabulary: Optional Vocabulary (loaded from configuration if None)
            enable_self_repair: Overrides the configured self-repair switch
        """
        self.config = config if config else ConfigLoader()
        self.logger = logging.getLogger('process.coordinator')

        self.vocabulary = vocabulary or load_vocabulary(self.config.get('vocabulary_path'))

        self.reader = DocumentReader()
        self.extractor = SectionExtractor(self.vocabulary)
        self.auditor = ConsistencyAuditor(self.vocabulary)
        self.evaluator = CheckEvaluator(self.vocabulary, self.auditor)
        self.score_calculator = ScoreCalculator()
        self.verdict_classifier = VerdictClassifier()
        self.repair_controller = SelfRepairController(self.extractor, self.auditor, self.vocabulary)

        if enable_self_repair is None:
            enable_self_repair = self.config.get('enable_self_repair', True)
        self.enable_self_repair = enable_self_repair
        self.max_actionable_findings = self.config.get('max_actionable_findings', 3)
        self.report_decimals = self.config.get('report_decimals', 2)

        self.logger.info(
            f"{LOG_PROCESS} Health check coordinator initialized "
            f"(self-repair {'on' if self.enable_self_repair else 'off'})"
        )

    def evaluate(
        self,
        text: Optional[str],
        name: str = 'document',
        conventions: Optional[str] = None
    ) -> HealthReport:
        """
        Evaluate one document.

        Args:
            text: Raw specification markdown
            name: Document name for the report
            conventions: Conventions registry text ("Don't use: X" lines)

        Returns:
            HealthReport

        Raises:
            NoDocumentError: If text is None, empty or whitespace only
        """
        if text is None or not text.strip():
            self.logger.error(f"{LOG_INPUT} No document text for '{name}'")
            raise NoDocumentError(f"No document text to evaluate: {name}")

        document = self.extractor.extract(text, name=name)
        first = self._run_pass(document, conventions)

        final = first
        repair = RepairOutcome(
            pre_repair_verdict=first.classification.verdict,
            final_verdict=first.classification.verdict,
        )
        pre_repair_scores = None
        repaired_text = None

        if self.enable_self_repair and self.repair_controller.should_repair(first.classification.verdict):
            repair = self.repair_controller.repair(
                document, first.scores, first.classification.verdict, conventions
            )
            if repair.applied:
                final = self._run_pass(document, conventions)
                repair.final_verdict = final.classification.verdict
                pre_repair_scores = first.scores
                repaired_text = document.render()
                self.logger.info(
                    f"{LOG_PROCESS} Re-scored after repair: "
                    f"{repair.pre_repair_verdict} -> {repair.final_verdict}"
                )

        report = HealthReport(
            document_name=name,
            verdict=final.classification.verdict,
            scores=final.scores,
            classification=final.classification,
            sub_checks=final.evaluation.sub_checks,
            actionable_findings=actionable_findings(
                final.evaluation.sub_checks, self.max_actionable_findings
            ),
            audit_findings=final.audit.findings,
            repair=repair,
            pre_repair_scores=pre_repair_scores,
            repaired_text=repaired_text,
            decimals=self.report_decimals,
        )

        self.logger.info(f"{LOG_OUTPUT} '{name}': verdict {report.verdict}")
        return report

    def evaluate_file(self, path: Path, conventions_path: Optional[Path] = None) -> HealthReport:
        """
        Read and evaluate a document file.

        Args:
            path: Document path
            conventions_path: Optional conventions registry file

        Returns:
            HealthReport named after the file stem

        Raises:
            FileNotFoundError: If a path does not exist
            NoDocumentError: If the file holds no text
        """
        path = Path(path)
        text = self.reader.read(path)
        conventions = self.reader.read_optional(conventions_path)
        return self.evaluate(text, name=path.stem, conventions=conventions)

    def extract(self, text: str, name: str = 'document') -> Document:
        """Parse text without scoring it."""
        return self.extractor.extract(text, name=name)

    def _run_pass(self, document: Document, conventions: Optional[str]) -> _Pass:
        audit = self.auditor.audit(document, conventions)
        evaluation = self.evaluator.evaluate(document)
        scores = self.score_calculator.calculate_scores(evaluation.axis_scores)
        classification = self.verdict_classifier.classify(scores)
        return _Pass(audit, evaluation, scores, classification)


__all__ = ['HealthCheckCoordinator', 'HealthReport']
