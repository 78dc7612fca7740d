# Path: spec_health/engine/audit/consistency_auditor.py
"""
Consistency Auditor (Pass 1)

Cross-references sections of a Document for referential integrity.

RULES:
1. Every prohibition has a Negative acceptance criterion that shares key
   nouns with the prohibited action (or names its linked test).
2. Every decision tree leaf outcome is referenced by some criterion.
3. Every Files entry traces to a requirement or prohibition.
4. No requirement is the positive counterpart of a prohibition.
5. Only Out-of-Scope/Deferred bullets say "out of scope" or "deferred".
6. Every "Don't use: X" convention appears as a prohibition.

The auditor only reports. It never raises, never aborts, and never
changes the document.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from ...constants import (
    LOG_PROCESS,
    SECTION_TITLES,
    SECTION_PROHIBITIONS,
    SECTION_DECISION_TREE,
    SECTION_FILES,
    SECTION_REQUIREMENTS,
    SECTION_SCOPE,
    SECTION_CODEBASE_CONTEXT,
    CATEGORY_NEGATIVE,
    SEVERITY_CRITICAL,
    SEVERITY_WARNING,
    SEVERITY_INFO,
)
from ...core.keyword_matcher import KeywordMatcher
from ...core.vocabulary import Vocabulary, load_vocabulary
from ...loaders.markdown_blocks import (
    normalize_whitespace,
    remove_clarification_markers,
    split_identifier,
    strip_emphasis,
)
from ...loaders.section_extractor import extract_conventions
from ...models.document import Document, Prohibition
from ...models.findings import Finding


# ==============================================================================
# RULE NAMES
# ==============================================================================

RULE_PROHIBITION_UNTESTED = 'prohibition_without_negative_test'
RULE_OUTCOME_UNTESTED = 'decision_outcome_without_criterion'
RULE_FILE_UNTRACED = 'file_without_requirement'
RULE_CONTRADICTION = 'requirement_contradicts_prohibition'
RULE_SCOPE_LEAKAGE = 'scope_leakage'
RULE_CONVENTION_MISSING = 'convention_without_prohibition'

AUDIT_RULES = [
    RULE_PROHIBITION_UNTESTED,
    RULE_OUTCOME_UNTESTED,
    RULE_FILE_UNTRACED,
    RULE_CONTRADICTION,
    RULE_SCOPE_LEAKAGE,
    RULE_CONVENTION_MISSING,
]

# Share of the smaller object's key nouns two statements must have in common
CONTRADICTION_OVERLAP = 0.5

SCOPE_LEAKAGE_PATTERN = re.compile(r'\bout[\s-]+of[\s-]+scope\b|\bdeferred\b', re.IGNORECASE)


@dataclass
class AuditResult:
    """
    Outcome of Pass 1.

    Attributes:
        findings: Findings in rule order, document order within a rule
        prohibition_matches: One flag per prohibition, True when rule 1 matched it
        missing_conventions: Convention entries with no prohibition (rule 6)
    """
    findings: list[Finding] = field(default_factory=list)
    prohibition_matches: list[bool] = field(default_factory=list)
    missing_conventions: list[str] = field(default_factory=list)

    @property
    def matched_prohibitions(self) -> int:
        return sum(1 for matched in self.prohibition_matches if matched)

    def findings_for(self, rule: str) -> list[Finding]:
        return [finding for finding in self.findings if finding.rule == rule]


class ConsistencyAuditor:
    """
    Runs the six structural cross-checks.

    Example:
        auditor = ConsistencyAuditor()
        result = auditor.audit(document, conventions_text=rules_text)
        for finding in result.findings:
            print(finding.section, finding.message)
    """

    def __init__(self, vocabulary: Optional[Vocabulary] = None):
        """Initialize consistency auditor."""
        self.logger = logging.getLogger('process.consistency_auditor')
        self.vocabulary = vocabulary or load_vocabulary()
        self.matcher = KeywordMatcher(self.vocabulary)

    def audit(self, document: Document, conventions_text: Optional[str] = None) -> AuditResult:
        """
        Run every rule against the document.

        Args:
            document: Parsed document
            conventions_text: Extra conventions registry text

        Returns:
            AuditResult
        """
        result = AuditResult()

        result.prohibition_matches = self.prohibition_matches(document)
        result.findings.extend(self._check_prohibition_tests(document, result.prohibition_matches))
        result.findings.extend(self._check_decision_outcomes(document))
        result.findings.extend(self._check_file_traceability(document))
        result.findings.extend(self._check_contradictions(document))
        result.findings.extend(self._check_scope_leakage(document))

        result.missing_conventions = self.missing_conventions(document, conventions_text)
        result.findings.extend(self._convention_findings(result.missing_conventions))

        self.logger.info(
            f"{LOG_PROCESS} Audit of '{document.name}': {len(result.findings)} findings, "
            f"{result.matched_prohibitions}/{len(document.prohibitions)} prohibitions matched"
        )
        return result

    # --------------------------------------------------------------------------
    # RULE 1: PROHIBITION -> NEGATIVE TEST
    # --------------------------------------------------------------------------

    def prohibition_matches(self, document: Document) -> list[bool]:
        """One flag per prohibition: has a matching Negative criterion."""
        negatives = [
            criterion for criterion in document.acceptance_criteria
            if criterion.category == CATEGORY_NEGATIVE
        ]
        return [self._has_negative_test(prohibition, negatives) for prohibition in document.prohibitions]

    def unmatched_prohibitions(self, document: Document) -> list[Prohibition]:
        matches = self.prohibition_matches(document)
        return [p for p, matched in zip(document.prohibitions, matches) if not matched]

    def _has_negative_test(self, prohibition: Prohibition, negatives) -> bool:
        action_nouns = self.matcher.key_nouns(prohibition.action)
        for criterion in negatives:
            if prohibition.test_ref and _mentions(prohibition.test_ref, criterion.identifier, criterion.text):
                return True
            if prohibition.identifier and _mentions(prohibition.identifier, None, criterion.text):
                return True
            if action_nouns & self.matcher.key_nouns(criterion.text):
                return True
        return False

    def _check_prohibition_tests(self, document: Document, matches: list[bool]) -> list[Finding]:
        section = SECTION_TITLES[SECTION_PROHIBITIONS]
        return [
            Finding(
                section=section,
                message=(
                    f"Prohibition '{_label(prohibition.text)}' has no matching "
                    f"Negative acceptance criterion"
                ),
                severity=SEVERITY_WARNING,
                rule=RULE_PROHIBITION_UNTESTED,
            )
            for prohibition, matched in zip(document.prohibitions, matches)
            if not matched
        ]

    # --------------------------------------------------------------------------
    # RULE 2: DECISION OUTCOMES -> CRITERIA
    # --------------------------------------------------------------------------

    def _check_decision_outcomes(self, document: Document) -> list[Finding]:
        findings = []
        criteria_texts = [criterion.text for criterion in document.acceptance_criteria]
        seen = set()
        for leaf in document.decision_leaves():
            # A leaf that is only a clarification stub has no outcome yet
            label = normalize_whitespace(remove_clarification_markers(leaf.outcome_label))
            if not label or label.lower() in seen:
                continue
            seen.add(label.lower())
            if self._is_referenced(label, criteria_texts):
                continue
            findings.append(Finding(
                section=SECTION_TITLES[SECTION_DECISION_TREE],
                message=f"Decision outcome '{_label(label)}' is not covered by any acceptance criterion",
                severity=SEVERITY_WARNING,
                rule=RULE_OUTCOME_UNTESTED,
            ))
        return findings

    def _is_referenced(self, label: str, texts: list[str]) -> bool:
        nouns = self.matcher.key_nouns(label)
        lowered = normalize_whitespace(label.lower())
        for text in texts:
            if nouns and nouns & self.matcher.key_nouns(text):
                return True
            if lowered and lowered in normalize_whitespace(text.lower()):
                return True
        return False

    # --------------------------------------------------------------------------
    # RULE 3: FILES -> REQUIREMENTS/PROHIBITIONS
    # --------------------------------------------------------------------------

    def _check_file_traceability(self, document: Document) -> list[Finding]:
        identifiers = [
            item.identifier
            for item in list(document.requirements) + list(document.prohibitions)
            if item.identifier
        ]
        sources = [item.text for item in document.requirements] + [p.text for p in document.prohibitions]
        source_nouns = [self.matcher.key_nouns(text) for text in sources]

        findings = []
        for entry in document.file_entries:
            if any(_mentions(identifier, None, entry.text) for identifier in identifiers):
                continue
            entry_nouns = self.matcher.key_nouns(entry.text.replace('/', ' ').replace('_', ' '))
            if any(entry_nouns & nouns for nouns in source_nouns):
                continue
            findings.append(Finding(
                section=SECTION_TITLES[SECTION_FILES],
                message=f"File entry '{_label(entry.text)}' does not reference any requirement or prohibition",
                severity=SEVERITY_INFO,
                rule=RULE_FILE_UNTRACED,
            ))
        return findings

    # --------------------------------------------------------------------------
    # RULE 4: REQUIREMENT VS PROHIBITION POLARITY
    # --------------------------------------------------------------------------

    def _check_contradictions(self, document: Document) -> list[Finding]:
        findings = []
        for requirement in document.requirements:
            if requirement.negated or not requirement.leading_verb:
                continue
            body = strip_emphasis(split_identifier(requirement.text)[1])
            requirement_objects = self.matcher.object_nouns(body)
            for prohibition in document.prohibitions:
                if self.contradicts(requirement.leading_verb, requirement_objects, prohibition):
                    findings.append(Finding(
                        section=SECTION_TITLES[SECTION_REQUIREMENTS],
                        message=(
                            f"Requirement '{_label(requirement.text)}' contradicts prohibition "
                            f"'{_label(prohibition.text)}'"
                        ),
                        severity=SEVERITY_CRITICAL,
                        rule=RULE_CONTRADICTION,
                    ))
        return findings

    def contradicts(self, verb: str, objects: frozenset, prohibition: Prohibition) -> bool:
        """Same verb and at least half of the smaller object in common."""
        if not self.matcher.verbs_equal(verb, self.matcher.leading_verb(prohibition.action)):
            return False
        prohibited_objects = self.matcher.object_nouns(prohibition.action)
        smaller = min(len(objects), len(prohibited_objects))
        if smaller == 0:
            return False
        return len(objects & prohibited_objects) >= CONTRADICTION_OVERLAP * smaller

    # --------------------------------------------------------------------------
    # RULE 5: SCOPE LEAKAGE
    # --------------------------------------------------------------------------

    def _check_scope_leakage(self, document: Document) -> list[Finding]:
        in_scope = {id(bullet) for bullet in document.in_scope_items()}
        findings = []
        for section, bullet in document.all_bullets():
            if section.key == SECTION_SCOPE and id(bullet) not in in_scope:
                continue
            if not SCOPE_LEAKAGE_PATTERN.search(bullet.text):
                continue
            findings.append(Finding(
                section=section.title or 'Preamble',
                message=f"Bullet '{_label(bullet.text)}' mentions scope outside Out of Scope/Deferred",
                severity=SEVERITY_WARNING,
                rule=RULE_SCOPE_LEAKAGE,
            ))
        return findings

    # --------------------------------------------------------------------------
    # RULE 6: CONVENTIONS -> PROHIBITIONS
    # --------------------------------------------------------------------------

    def missing_conventions(self, document: Document, conventions_text: Optional[str] = None) -> list[str]:
        """Convention entries that no prohibition covers, in order."""
        entries = list(document.conventions)
        for entry in extract_conventions(conventions_text or ''):
            if entry not in entries:
                entries.append(entry)

        missing = []
        for entry in entries:
            if not any(self._covers(prohibition, entry) for prohibition in document.prohibitions):
                missing.append(entry)
        return missing

    def _covers(self, prohibition: Prohibition, entry: str) -> bool:
        if normalize_whitespace(entry.lower()) in normalize_whitespace(strip_emphasis(prohibition.text).lower()):
            return True
        entry_nouns = self.matcher.key_nouns(entry)
        return bool(entry_nouns) and entry_nouns <= self.matcher.key_nouns(prohibition.text)

    def _convention_findings(self, missing: list[str]) -> list[Finding]:
        return [
            Finding(
                section=SECTION_TITLES[SECTION_CODEBASE_CONTEXT],
                message=f"Convention \"Don't use: {entry}\" has no matching prohibition",
                severity=SEVERITY_WARNING,
                rule=RULE_CONVENTION_MISSING,
            )
            for entry in missing
        ]


def _mentions(reference: str, identifier: Optional[str], text: str) -> bool:
    """reference equals identifier or appears as a whole word in text."""
    if identifier and identifier.lower() == reference.lower():
        return True
    return bool(re.search(rf'(?<![\w-]){re.escape(reference)}(?![\w-])', text, re.IGNORECASE))


def _label(text: str, limit: int = 60) -> str:
    text = normalize_whitespace(text)
    return text if len(text) <= limit else text[:limit - 3] + '...'


__all__ = [
    'ConsistencyAuditor',
    'AuditResult',
    'AUDIT_RULES',
    'RULE_PROHIBITION_UNTESTED',
    'RULE_OUTCOME_UNTESTED',
    'RULE_FILE_UNTRACED',
    'RULE_CONTRADICTION',
    'RULE_SCOPE_LEAKAGE',
    'RULE_CONVENTION_MISSING',
]
