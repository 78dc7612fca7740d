# Path: spec_health/engine/checks/check_evaluator.py
"""
Check Evaluator (Pass 2)

Runs the 19 sub-checks and averages them into axis scores.

Every sub-check is a pure function of the Document: evaluation order
does not matter, nothing is cached between calls, and axis scores are
kept at full precision (rounding happens only in reports).
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ...constants import AXES, LOG_PROCESS, SEVERITY_CRITICAL, SEVERITY_WARNING
from ...core.keyword_matcher import KeywordMatcher
from ...core.vocabulary import Vocabulary, load_vocabulary
from ...models.document import Document
from ...models.findings import Finding
from ..audit.consistency_auditor import ConsistencyAuditor
from .checkers import (
    CompletenessChecker,
    ClarityChecker,
    ConstraintsChecker,
    SpecificityChecker,
)
from .core.check_result import SubCheck
from .core.constants import CHECK_AXIS, CHECK_ORDER, CHECK_GUIDANCE, HALF_CREDIT


@dataclass
class EvaluationResult:
    """
    Sub-check scores of one pass.

    Attributes:
        sub_checks: All 19 sub-checks in id order
        axis_scores: Axis -> mean of its sub-checks (full precision)
    """
    sub_checks: list[SubCheck] = field(default_factory=list)
    axis_scores: dict[str, float] = field(default_factory=dict)

    def get(self, check_id: str) -> Optional[SubCheck]:
        for sub_check in self.sub_checks:
            if sub_check.id == check_id:
                return sub_check
        return None

    def score(self, check_id: str) -> float:
        sub_check = self.get(check_id)
        return sub_check.score if sub_check else 0.0


class CheckEvaluator:
    """
    Evaluates all sub-checks for a document.

    Example:
        evaluator = CheckEvaluator()
        result = evaluator.evaluate(document)
        print(result.axis_scores['Clarity'])
    """

    def __init__(
        self,
        vocabulary: Optional[Vocabulary] = None,
        auditor: Optional[ConsistencyAuditor] = None
    ):
        """Initialize evaluator with one checker per axis."""
        self.logger = logging.getLogger('process.check_evaluator')
        self.vocabulary = vocabulary or load_vocabulary()
        self.matcher = KeywordMatcher(self.vocabulary)
        self.auditor = auditor or ConsistencyAuditor(self.vocabulary)

        self.completeness = CompletenessChecker(self.vocabulary)
        self.clarity = ClarityChecker(self.vocabulary, self.matcher)
        self.constraints = ConstraintsChecker(self.auditor)
        self.specificity = SpecificityChecker(self.vocabulary)

    def evaluate(self, document: Document) -> EvaluationResult:
        """
        Run every sub-check.

        Args:
            document: Parsed document

        Returns:
            EvaluationResult with sub-checks and axis scores
        """
        sub_checks = []
        sub_checks.extend(self.completeness.check_all(document))
        sub_checks.extend(self.clarity.check_all(document))
        sub_checks.extend(self.constraints.check_all(document))
        sub_checks.extend(self.specificity.check_all(document))
        sub_checks.sort(key=lambda sub_check: CHECK_ORDER.index(sub_check.id))

        result = EvaluationResult(
            sub_checks=sub_checks,
            axis_scores=self.axis_scores(sub_checks),
        )

        self.logger.info(
            f"{LOG_PROCESS} Evaluated '{document.name}': "
            + ', '.join(f"{axis}={result.axis_scores[axis]:.3f}" for axis in AXES)
        )
        for sub_check in sub_checks:
            self.logger.debug(f"{LOG_PROCESS} {sub_check.id} = {sub_check.score:.3f} ({sub_check.detail})")

        return result

    @staticmethod
    def axis_scores(sub_checks: list[SubCheck]) -> dict[str, float]:
        """Arithmetic mean of each axis' sub-checks."""
        scores = {}
        for axis in AXES:
            values = [sub_check.score for sub_check in sub_checks if CHECK_AXIS[sub_check.id] == axis]
            scores[axis] = sum(values) / len(values) if values else 0.0
        return scores


def actionable_findings(sub_checks: list[SubCheck], limit: int = 3) -> list[Finding]:
    """
    Turn the weakest sub-checks into remediation findings.

    Deficient sub-checks (score < 1) are ordered by score, then axis
    order, then id order; the first `limit` become findings.

    Args:
        sub_checks: Sub-checks of the final pass
        limit: Maximum number of findings

    Returns:
        Ordered list of findings naming the section to fix
    """
    deficient = [sub_check for sub_check in sub_checks if sub_check.score < 1.0]
    deficient.sort(key=lambda sub_check: (
        sub_check.score,
        AXES.index(sub_check.axis),
        CHECK_ORDER.index(sub_check.id),
    ))

    findings = []
    for sub_check in deficient[:max(0, limit)]:
        findings.append(Finding(
            section=sub_check.section_title,
            message=f"{CHECK_GUIDANCE[sub_check.id]} ({sub_check.id}: {sub_check.detail})",
            severity=SEVERITY_CRITICAL if sub_check.score < HALF_CREDIT else SEVERITY_WARNING,
            rule=sub_check.id,
        ))
    return findings


__all__ = ['CheckEvaluator', 'EvaluationResult', 'actionable_findings']
