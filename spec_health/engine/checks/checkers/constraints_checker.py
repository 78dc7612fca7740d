# Path: spec_health/engine/checks/checkers/constraints_checker.py
"""
Constraints Checker

N1-N5: how well the document fences the implementation in.

N3 reuses the consistency auditor's prohibition matching so the
score and the Pass 1 findings can never disagree.
"""

import re

from ....constants import AXIS_CONSTRAINTS, SECTION_ESCALATION
from ....loaders.markdown_blocks import (
    is_table_row,
    is_table_separator,
    parse_bullet,
    split_table_row,
    strip_emphasis,
)
from ....models.document import Document
from ...audit.consistency_auditor import ConsistencyAuditor
from ..core.check_result import SubCheck, ratio
from ..core.constants import (
    CHECK_PROHIBITION_COUNT,
    CHECK_PROHIBITION_RATIONALE,
    CHECK_PROHIBITION_TESTS,
    CHECK_OUT_OF_SCOPE,
    CHECK_ESCALATION,
    PROHIBITION_TARGET,
    OUT_OF_SCOPE_MINIMUM,
    HALF_CREDIT,
)


FAIL_IF_PATTERN = re.compile(r'^fail\s+(?:if|when)\b', re.IGNORECASE)
QUEUE_IF_PATTERN = re.compile(
    r'^(?:queue|review)(?:\s+(?:if|when|for)\b|\s*:)',
    re.IGNORECASE,
)


class ConstraintsChecker:
    """
    Constraints axis sub-checks.

    Example:
        checker = ConstraintsChecker(auditor)
        n3 = checker.check_prohibition_tests(document)
    """

    def __init__(self, auditor: ConsistencyAuditor):
        self.auditor = auditor

    def check_all(self, document: Document) -> list[SubCheck]:
        return [
            self.check_prohibition_count(document),
            self.check_prohibition_rationale(document),
            self.check_prohibition_tests(document),
            self.check_out_of_scope(document),
            self.check_escalation(document),
        ]

    def check_prohibition_count(self, document: Document) -> SubCheck:
        """N1 = min(1, prohibitions / 5)."""
        count = len(document.prohibitions)
        return SubCheck(
            CHECK_PROHIBITION_COUNT, AXIS_CONSTRAINTS,
            min(1.0, count / PROHIBITION_TARGET),
            f"{count} prohibitions",
        )

    def check_prohibition_rationale(self, document: Document) -> SubCheck:
        """N2 = prohibitions with rationale / prohibitions."""
        total = len(document.prohibitions)
        with_rationale = sum(1 for prohibition in document.prohibitions if prohibition.has_rationale)
        return SubCheck(
            CHECK_PROHIBITION_RATIONALE, AXIS_CONSTRAINTS,
            ratio(with_rationale, total),
            f"{with_rationale}/{total} prohibitions with rationale",
        )

    def check_prohibition_tests(self, document: Document) -> SubCheck:
        """N3 = prohibitions matched to a negative test / prohibitions."""
        matches = self.auditor.prohibition_matches(document)
        matched = sum(1 for flag in matches if flag)
        return SubCheck(
            CHECK_PROHIBITION_TESTS, AXIS_CONSTRAINTS,
            ratio(matched, len(matches)),
            f"{matched}/{len(matches)} prohibitions with a negative test",
        )

    def check_out_of_scope(self, document: Document) -> SubCheck:
        """N4: at least two Out of Scope bullets."""
        count = len(document.out_of_scope_items())
        return SubCheck(
            CHECK_OUT_OF_SCOPE, AXIS_CONSTRAINTS,
            1.0 if count >= OUT_OF_SCOPE_MINIMUM else 0.0,
            f"{count} out-of-scope items",
        )

    def check_escalation(self, document: Document) -> SubCheck:
        """N5: 1 for both Fail-if and Queue/Review-if, 0.5 for one, 0 for neither."""
        entries = self.escalation_entries(document)
        has_fail = any(FAIL_IF_PATTERN.match(entry) for entry in entries)
        has_queue = any(QUEUE_IF_PATTERN.match(entry) for entry in entries)

        present = [name for name, flag in (('Fail if', has_fail), ('Queue/Review if', has_queue)) if flag]
        score = HALF_CREDIT * len(present)
        detail = f"entries: {', '.join(present)}" if present else 'no Fail if / Queue if entries'
        return SubCheck(CHECK_ESCALATION, AXIS_CONSTRAINTS, score, detail)

    @staticmethod
    def escalation_entries(document: Document) -> list[str]:
        """Line contents and table cells of the Escalation section, markup removed."""
        entries = []
        for line in document.section(SECTION_ESCALATION).lines:
            if is_table_row(line):
                cells = split_table_row(line)
                if not is_table_separator(cells):
                    entries.extend(strip_emphasis(cell) for cell in cells if cell)
                continue
            bullet = parse_bullet(line)
            text = bullet[1] if bullet else line.strip()
            text = strip_emphasis(text)
            if text:
                entries.append(text)
        return entries


__all__ = ['ConstraintsChecker']
