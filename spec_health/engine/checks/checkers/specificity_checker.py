# Path: spec_health/engine/checks/checkers/specificity_checker.py
"""
Specificity Checker

S1-S5: literal values where a reader needs them. Concrete criteria,
numeric domain thresholds, named log levels and metrics, named failure
kinds and stated limits.
"""

import re

from ....constants import AXIS_SPECIFICITY, SECTION_OBSERVABILITY
from ....core.vocabulary import Vocabulary
from ....loaders.markdown_blocks import normalize_whitespace
from ....models.document import Document
from ..core.check_result import SubCheck, ratio
from ..core.constants import (
    CHECK_CONCRETE_CRITERIA,
    CHECK_DOMAIN_THRESHOLDS,
    CHECK_OBSERVABILITY,
    CHECK_ERROR_KINDS,
    CHECK_NUMERIC_LIMITS,
    HALF_CREDIT,
)


THRESHOLD_TOKEN_PATTERN = re.compile(r'\d|[<>≤≥]')

# 'checkout.latency_ms', 'http_requests_total'
METRIC_PATTERN = re.compile(r'\b[a-z][a-z0-9]+(?:[._][a-z0-9]+)+\b')

STATUS_CODE_PATTERN = re.compile(r'\b[45]\d\d\b')
ERROR_KIND_PATTERN = re.compile(r'\b[A-Z][A-Za-z0-9]*(?:Error|Exception)\b')
ERROR_CODE_PATTERN = re.compile(r'\b[A-Z][A-Z0-9]*_[A-Z0-9_]*[A-Z0-9]\b')


class SpecificityChecker:
    """
    Specificity axis sub-checks.

    Example:
        checker = SpecificityChecker(vocabulary)
        s3 = checker.check_observability(document)
    """

    def __init__(self, vocabulary: Vocabulary):
        self.vocabulary = vocabulary
        levels = '|'.join(re.escape(level) for level in sorted(vocabulary.log_levels))
        self._log_level_pattern = re.compile(rf'\b(?:{levels})\b', re.IGNORECASE)

    def check_all(self, document: Document) -> list[SubCheck]:
        return [
            self.check_concrete_criteria(document),
            self.check_domain_thresholds(document),
            self.check_observability(document),
            self.check_error_kinds(document),
            self.check_numeric_limits(document),
        ]

    def check_concrete_criteria(self, document: Document) -> SubCheck:
        """S1 = concrete criteria / criteria."""
        total = len(document.acceptance_criteria)
        concrete = sum(1 for criterion in document.acceptance_criteria if criterion.concrete)
        return SubCheck(
            CHECK_CONCRETE_CRITERIA, AXIS_SPECIFICITY,
            ratio(concrete, total),
            f"{concrete}/{total} acceptance criteria concrete",
        )

    def check_domain_thresholds(self, document: Document) -> SubCheck:
        """S2 = rows with a numeric/threshold token / rows; 0 without a table."""
        if not document.domain_rules_table:
            return SubCheck(CHECK_DOMAIN_THRESHOLDS, AXIS_SPECIFICITY, 0.0, 'no domain rules table')
        rows = document.domain_rule_rows
        numeric = sum(1 for row in rows if THRESHOLD_TOKEN_PATTERN.search(' '.join(row)))
        return SubCheck(
            CHECK_DOMAIN_THRESHOLDS, AXIS_SPECIFICITY,
            ratio(numeric, len(rows)),
            f"{numeric}/{len(rows)} domain rule rows with thresholds",
        )

    def check_observability(self, document: Document) -> SubCheck:
        """S3 = 0.5 for a log level + 0.5 for a metric identifier."""
        body = document.section(SECTION_OBSERVABILITY).body
        found = []
        if self._log_level_pattern.search(body):
            found.append('log level')
        if METRIC_PATTERN.search(body):
            found.append('metric')
        detail = f"names {' and '.join(found)}" if found else 'no log levels or metrics'
        return SubCheck(CHECK_OBSERVABILITY, AXIS_SPECIFICITY, HALF_CREDIT * len(found), detail)

    def check_error_kinds(self, document: Document) -> SubCheck:
        """S4: an error-handling line names a status code or error kind."""
        for line in document.render().splitlines():
            if not self.vocabulary.error_pattern.search(line):
                continue
            for pattern in (STATUS_CODE_PATTERN, ERROR_KIND_PATTERN, ERROR_CODE_PATTERN):
                match = pattern.search(line)
                if match:
                    return SubCheck(CHECK_ERROR_KINDS, AXIS_SPECIFICITY, 1.0, f"names '{match.group(0)}'")
        return SubCheck(CHECK_ERROR_KINDS, AXIS_SPECIFICITY, 0.0, 'no status codes or error kinds')

    def check_numeric_limits(self, document: Document) -> SubCheck:
        """S5: a numeric threshold, timeout or limit anywhere."""
        match = self.vocabulary.limit_pattern.search(normalize_whitespace(document.render()))
        if match:
            return SubCheck(CHECK_NUMERIC_LIMITS, AXIS_SPECIFICITY, 1.0, f"limit '{match.group(0).strip()}'")
        return SubCheck(CHECK_NUMERIC_LIMITS, AXIS_SPECIFICITY, 0.0, 'no numeric limits')


__all__ = ['SpecificityChecker']
