# Path: spec_health/engine/repair/self_repair.py
"""
Self-Repair Controller for Spec Health Module

One bounded remediation for weak documents (SKETCH or VAGUE).

The controller targets the lowest-scoring axis (ties: Completeness,
Clarity, Constraints, Specificity) and applies exactly one mutation:

- Completeness: insert a clarification stub into every missing or empty
  counted section. Each stub is a clarification marker, so it lowers L2;
  the outcome description states the cost.
- Clarity: replace each weasel phrase with a clarification marker naming
  its section. This raises L1 and lowers L2; the net effect is whatever
  the re-score says.
- Constraints: add a prohibition for every convention that lacks one,
  then a placeholder Negative criterion for every prohibition the audit
  leaves unmatched.
- Specificity: no automatic remediation.

The controller never re-scores and never runs twice; the coordinator
re-runs the audit, checks and scoring once after an applied repair.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ...constants import (
    AXIS_COMPLETENESS,
    AXIS_CLARITY,
    AXIS_CONSTRAINTS,
    AXIS_SPECIFICITY,
    CANONICAL_SECTIONS,
    CLARIFICATION_TAG,
    LOG_PROCESS,
    REPAIRABLE_VERDICTS,
    SECTION_TITLES,
    SECTION_PROHIBITIONS,
    SECTION_ACCEPTANCE_CRITERIA,
)
from ...core.vocabulary import Vocabulary, load_vocabulary
from ...loaders.markdown_blocks import CLARIFICATION_PATTERN
from ...loaders.section_extractor import SectionExtractor
from ...models.document import Document, Section
from ..audit.consistency_auditor import ConsistencyAuditor
from ..checks.core.constants import MARKER_PENALTY
from ..scoring.score_calculator import HealthScores


# ==============================================================================
# REPAIR ACTIONS
# ==============================================================================
ACTION_INSERT_STUBS = 'insert_section_stubs'
ACTION_MARK_WEASEL_PHRASES = 'mark_weasel_phrases'
ACTION_ADD_NEGATIVE_TESTS = 'add_prohibitions_and_negative_tests'

AXIS_ACTIONS = {
    AXIS_COMPLETENESS: ACTION_INSERT_STUBS,
    AXIS_CLARITY: ACTION_MARK_WEASEL_PHRASES,
    AXIS_CONSTRAINTS: ACTION_ADD_NEGATIVE_TESTS,
}

DEFAULT_HEADING_LEVEL = 2


@dataclass
class RepairOutcome:
    """
    What the self-repair pass did.

    Attributes:
        attempted: Verdict called for a repair and repair was enabled
        applied: The document was mutated
        target_axis: Axis the repair aimed at
        action: Remediation name
        description: Human-readable summary (or why nothing was done)
        pre_repair_verdict: Verdict before repair
        final_verdict: Verdict reported for the evaluation
        changes: One line per mutation
    """
    attempted: bool = False
    applied: bool = False
    target_axis: Optional[str] = None
    action: Optional[str] = None
    description: str = ''
    pre_repair_verdict: Optional[str] = None
    final_verdict: Optional[str] = None
    changes: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'attempted': self.attempted,
            'applied': self.applied,
            'target_axis': self.target_axis,
            'action': self.action,
            'description': self.description,
            'pre_repair_verdict': self.pre_repair_verdict,
            'final_verdict': self.final_verdict,
            'changes': list(self.changes),
        }


class SelfRepairController:
    """
    Applies at most one remediation to a Document.

    Example:
        controller = SelfRepairController(extractor, auditor)
        if controller.should_repair(verdict):
            outcome = controller.repair(document, scores, verdict)
            if outcome.applied:
                ...  # re-run audit, checks and scoring once
    """

    def __init__(
        self,
        extractor: Optional[SectionExtractor] = None,
        auditor: Optional[ConsistencyAuditor] = None,
        vocabulary: Optional[Vocabulary] = None
    ):
        """Initialize self-repair controller."""
        self.logger = logging.getLogger('process.self_repair')
        self.vocabulary = vocabulary or load_vocabulary()
        self.extractor = extractor or SectionExtractor(self.vocabulary)
        self.auditor = auditor or ConsistencyAuditor(self.vocabulary)

    @staticmethod
    def should_repair(verdict: str) -> bool:
        return verdict in REPAIRABLE_VERDICTS

    def repair(
        self,
        document: Document,
        scores: HealthScores,
        verdict: str,
        conventions_text: Optional[str] = None
    ) -> RepairOutcome:
        """
        Apply the remediation for the weakest axis.

        Args:
            document: Document to mutate (re-indexed after mutation)
            scores: Pre-repair scores
            verdict: Pre-repair verdict
            conventions_text: Extra conventions registry text

        Returns:
            RepairOutcome (final_verdict still the pre-repair verdict)
        """
        axis = scores.weakest_axis()
        outcome = RepairOutcome(
            attempted=True,
            target_axis=axis,
            action=AXIS_ACTIONS.get(axis),
            pre_repair_verdict=verdict,
            final_verdict=verdict,
        )

        markers_before = len(document.clarification_markers)
        if axis == AXIS_COMPLETENESS:
            changes = self.insert_section_stubs(document)
        elif axis == AXIS_CLARITY:
            changes = self.mark_weasel_phrases(document)
        elif axis == AXIS_CONSTRAINTS:
            changes = self.add_negative_tests(document, conventions_text)
        else:
            changes = []

        if not changes:
            if axis == AXIS_SPECIFICITY:
                outcome.description = 'No automatic remediation for Specificity'
            else:
                outcome.description = f"No viable remediation for {axis}"
            self.logger.info(f"{LOG_PROCESS} Self-repair skipped: {outcome.description}")
            return outcome

        self.extractor.index(document)
        outcome.applied = True
        outcome.changes = changes
        outcome.description = f"{axis}: {len(changes)} changes ({outcome.action})"
        added = len(document.clarification_markers) - markers_before
        if added > 0:
            outcome.description += (
                f"; added {added} clarification markers, each lowering L2 by {MARKER_PENALTY}"
            )
        self.logger.info(f"{LOG_PROCESS} Self-repair applied: {outcome.description}")
        return outcome

    # --------------------------------------------------------------------------
    # COMPLETENESS
    # --------------------------------------------------------------------------

    def insert_section_stubs(self, document: Document) -> list[str]:
        """Put a clarification marker into every missing or empty counted section."""
        changes = []
        for key in document.missing_counted_sections():
            title = SECTION_TITLES[key]
            stub = f"[{CLARIFICATION_TAG}: {title} not yet specified]"
            section = document.index.get(key)
            if section is not None and section.present:
                _append_lines(section, [stub])
                changes.append(f"Filled empty section '{title}' with a clarification stub")
            else:
                self._insert_section(document, key, [stub])
                changes.append(f"Inserted missing section '{title}' with a clarification stub")
        return changes

    # --------------------------------------------------------------------------
    # CLARITY
    # --------------------------------------------------------------------------

    def mark_weasel_phrases(self, document: Document) -> list[str]:
        """Replace weasel phrases (outside existing markers) with clarification markers."""
        changes = []
        for section in document.sections:
            title = section.title or 'Preamble'
            marker = f"[{CLARIFICATION_TAG}: vague wording in {title}]"
            replaced = 0
            for index, line in enumerate(section.lines):
                new_line, count = self._mark_line(line, marker)
                if count:
                    section.lines[index] = new_line
                    replaced += count
            if replaced:
                changes.append(f"Marked {replaced} weasel phrases in '{title}'")
        return changes

    def _mark_line(self, line: str, marker: str) -> tuple[str, int]:
        pattern = self.vocabulary.weasel_pattern
        pieces = []
        count = 0
        position = 0
        for existing in CLARIFICATION_PATTERN.finditer(line):
            text, replaced = pattern.subn(marker, line[position:existing.start()])
            pieces.append(text)
            pieces.append(existing.group(0))
            count += replaced
            position = existing.end()
        text, replaced = pattern.subn(marker, line[position:])
        pieces.append(text)
        count += replaced
        return ''.join(pieces), count

    # --------------------------------------------------------------------------
    # CONSTRAINTS
    # --------------------------------------------------------------------------

    def add_negative_tests(self, document: Document, conventions_text: Optional[str] = None) -> list[str]:
        """Add prohibitions for missing conventions, then negative tests for unmatched prohibitions."""
        changes = []

        missing = self.auditor.missing_conventions(document, conventions_text)
        if missing:
            lines = [
                f"- NEVER use {entry} — the project conventions say \"Don't use: {entry}\""
                for entry in missing
            ]
            self._append_to_section(document, SECTION_PROHIBITIONS, lines)
            self.extractor.index(document)
            changes.extend(f"Added prohibition for convention '{entry}'" for entry in missing)

        unmatched = self.auditor.unmatched_prohibitions(document)
        if unmatched:
            lines = []
            for prohibition in unmatched:
                reference = prohibition.test_ref or prohibition.identifier
                suffix = f" [covers {reference}]" if reference else ''
                lines.append(
                    f"- Negative: [placeholder] an attempt to {prohibition.action} is rejected{suffix}"
                )
            self._append_to_section(document, SECTION_ACCEPTANCE_CRITERIA, lines)
            changes.extend(
                f"Added placeholder negative test for '{prohibition.action}'" for prohibition in unmatched
            )

        return changes

    # --------------------------------------------------------------------------
    # SECTION EDITING
    # --------------------------------------------------------------------------

    def _append_to_section(self, document: Document, key: str, lines: list[str]) -> None:
        section = document.index.get(key)
        if section is not None and section.present:
            _append_lines(section, lines)
        else:
            self._insert_section(document, key, lines)

    def _insert_section(self, document: Document, key: str, lines: list[str]) -> Section:
        """Insert a new canonical section at its template position."""
        level = next(
            (section.level for section in document.sections if section.key is not None),
            DEFAULT_HEADING_LEVEL,
        )
        title = SECTION_TITLES[key]
        section = Section(
            key=key,
            title=title,
            level=level,
            heading=f"{'#' * level} {title}",
            lines=[''] + list(lines) + [''],
        )

        order = CANONICAL_SECTIONS.index(key)
        position = len(document.sections)
        for index, existing in enumerate(document.sections):
            if existing.key is not None and CANONICAL_SECTIONS.index(existing.key) > order:
                position = index
                break

        document.sections.insert(position, section)
        document.index[key] = section
        return section


def _append_lines(section: Section, lines: list[str]) -> None:
    """Append lines before the section's trailing blank lines."""
    position = len(section.lines)
    while position > 0 and not section.lines[position - 1].strip():
        position -= 1
    section.lines[position:position] = list(lines)


__all__ = [
    'SelfRepairController',
    'RepairOutcome',
    'ACTION_INSERT_STUBS',
    'ACTION_MARK_WEASEL_PHRASES',
    'ACTION_ADD_NEGATIVE_TESTS',
]
