# Path: spec_health/tests/test_consistency_auditor.py
"""
Unit tests for the consistency auditor (Pass 1).

One test group per rule, plus the clean Scenario A run.
"""

from spec_health.constants import SEVERITY_CRITICAL, SEVERITY_INFO, SEVERITY_WARNING
from spec_health.engine.audit.consistency_auditor import (
    RULE_PROHIBITION_UNTESTED,
    RULE_OUTCOME_UNTESTED,
    RULE_FILE_UNTRACED,
    RULE_CONTRADICTION,
    RULE_SCOPE_LEAKAGE,
    RULE_CONVENTION_MISSING,
)
from spec_health.tests.fixtures import SCENARIO_A, SCENARIO_B, CONVENTIONS


def test_scenario_a_is_consistent(extractor, auditor):
    document = extractor.extract(SCENARIO_A)
    result = auditor.audit(document)

    assert result.findings == [], [f.message for f in result.findings]
    assert result.prohibition_matches == [True] * 6
    assert result.matched_prohibitions == 6


# ==============================================================================
# RULE 1: PROHIBITION -> NEGATIVE TEST
# ==============================================================================

def test_untested_prohibition_is_reported(extractor, auditor):
    document = extractor.extract(SCENARIO_B)
    result = auditor.audit(document)

    assert result.prohibition_matches == [True, False]
    findings = result.findings_for(RULE_PROHIBITION_UNTESTED)
    assert len(findings) == 1
    assert 'log full card numbers' in findings[0].message
    assert findings[0].severity == SEVERITY_WARNING
    assert findings[0].section == 'Prohibitions'


def test_prohibition_matched_by_shared_key_nouns(extractor, auditor):
    text = (
        "## Prohibitions\n"
        "- NEVER expose access tokens in URLs\n"
        "## Acceptance Criteria\n"
        "- Negative: a request with the token in the query string returns 400\n"
    )
    document = extractor.extract(text)

    assert auditor.prohibition_matches(document) == [True]


def test_happy_path_criterion_does_not_cover_prohibition(extractor, auditor):
    text = (
        "## Prohibitions\n"
        "- NEVER expose access tokens in URLs\n"
        "## Acceptance Criteria\n"
        "- A request with the token in the header returns 200\n"
    )
    document = extractor.extract(text)

    assert auditor.prohibition_matches(document) == [False]
    assert len(auditor.unmatched_prohibitions(document)) == 1


def test_prohibition_matched_by_identifier(extractor, auditor):
    text = (
        "## Prohibitions\n"
        "- P4: NEVER call the gateway synchronously\n"
        "## Acceptance Criteria\n"
        "- Negative: covers P4, the request returns 202 first\n"
    )
    document = extractor.extract(text)

    assert auditor.prohibition_matches(document) == [True]


# ==============================================================================
# RULE 2: DECISION OUTCOMES
# ==============================================================================

def test_uncovered_decision_outcome(extractor, auditor):
    text = (
        "## Decision Tree\n"
        "- If the basket is empty → show the onboarding banner\n"
        "## Acceptance Criteria\n"
        "- A refund of 10.00 returns 201\n"
    )
    document = extractor.extract(text)
    findings = auditor.audit(document).findings_for(RULE_OUTCOME_UNTESTED)

    assert len(findings) == 1
    assert 'show the onboarding banner' in findings[0].message


# ==============================================================================
# RULE 3: FILE TRACEABILITY
# ==============================================================================

def test_untraced_file_entry(extractor, auditor):
    text = (
        "## Requirements\n"
        "- FR-1: Create a refund record per request\n"
        "## Files to Create/Modify\n"
        "- `src/refunds.py` (FR-1)\n"
        "- `docs/changelog.md`\n"
    )
    document = extractor.extract(text)
    findings = auditor.audit(document).findings_for(RULE_FILE_UNTRACED)

    assert len(findings) == 1
    assert 'changelog' in findings[0].message
    assert findings[0].severity == SEVERITY_INFO


# ==============================================================================
# RULE 4: CONTRADICTIONS
# ==============================================================================

def test_requirement_contradicting_prohibition(extractor, auditor):
    text = (
        "## Requirements\n"
        "- The system must log full card numbers for audit\n"
        "## Prohibitions\n"
        "- NEVER log full card numbers — violates PCI scope\n"
    )
    document = extractor.extract(text)
    findings = auditor.audit(document).findings_for(RULE_CONTRADICTION)

    assert len(findings) == 1
    assert findings[0].severity == SEVERITY_CRITICAL


def test_negated_requirement_is_not_a_contradiction(extractor, auditor):
    text = (
        "## Requirements\n"
        "- The system must not log full card numbers\n"
        "## Prohibitions\n"
        "- NEVER log full card numbers — violates PCI scope\n"
    )
    document = extractor.extract(text)

    assert auditor.audit(document).findings_for(RULE_CONTRADICTION) == []


def test_same_verb_different_object_is_not_a_contradiction(extractor, auditor):
    text = (
        "## Requirements\n"
        "- The system must log refund decisions at INFO\n"
        "## Prohibitions\n"
        "- NEVER log full card numbers — violates PCI scope\n"
    )
    document = extractor.extract(text)

    assert auditor.audit(document).findings_for(RULE_CONTRADICTION) == []


# ==============================================================================
# RULE 5: SCOPE LEAKAGE
# ==============================================================================

def test_scope_leakage_outside_scope(extractor, auditor):
    text = (
        "## Scope\n"
        "Out of Scope:\n"
        "- Currency conversion is out of scope\n"
        "## Requirements\n"
        "- Create refunds; partial refunds are deferred\n"
    )
    document = extractor.extract(text)
    findings = auditor.audit(document).findings_for(RULE_SCOPE_LEAKAGE)

    assert len(findings) == 1
    assert findings[0].section == 'Requirements'


def test_scope_leakage_inside_in_scope_part(extractor, auditor):
    text = (
        "## Scope\n"
        "- Refunds, but chargebacks are out of scope\n"
    )
    document = extractor.extract(text)

    assert len(auditor.audit(document).findings_for(RULE_SCOPE_LEAKAGE)) == 1


# ==============================================================================
# RULE 6: CONVENTIONS
# ==============================================================================

def test_conventions_without_prohibition(extractor, auditor):
    text = (
        "## Prohibitions\n"
        "- NEVER use float for money — rounding errors\n"
    )
    document = extractor.extract(text)
    result = auditor.audit(document, conventions_text=CONVENTIONS)

    assert result.missing_conventions == ['moment.js']
    findings = result.findings_for(RULE_CONVENTION_MISSING)
    assert len(findings) == 1
    assert 'moment.js' in findings[0].message


def test_codebase_context_conventions_are_audited(extractor, auditor):
    text = (
        "## Codebase Context\n"
        "- Don't use: the legacy mailer\n"
    )
    document = extractor.extract(text)

    assert auditor.missing_conventions(document) == ['the legacy mailer']


def test_audit_never_mutates_document(extractor, auditor):
    document = extractor.extract(SCENARIO_B)
    before = document.render()

    auditor.audit(document, conventions_text=CONVENTIONS)

    assert document.render() == before
