# Path: spec_health/tests/test_check_evaluator.py
"""
Unit tests for the check evaluator (Pass 2) and the axis checkers.

Tests:
- Full documents: Scenario A all passing, Scenario B partial, no prohibitions
- Scores do not depend on checker or sub-check evaluation order
- Individual sub-check formulas and zero-denominator cases
- Actionable findings ordering
"""

import random

import pytest

from spec_health.constants import (
    AXES,
    SECTION_TITLES,
    SECTION_API_CONTRACT,
    SECTION_FILES,
    SECTION_DECISION_TREE,
    SEVERITY_CRITICAL,
)
from spec_health.engine.checks import CheckEvaluator
from spec_health.engine.checks.check_evaluator import actionable_findings
from spec_health.engine.checks.core.check_result import SubCheck, ratio
from spec_health.engine.checks.core.constants import CHECK_AXIS, CHECK_ORDER
from spec_health.tests.fixtures import SCENARIO_A, SCENARIO_B, SCENARIO_D, COMPLETENESS_GAP


def _scores(evaluator, extractor, text):
    result = evaluator.evaluate(extractor.extract(text))
    return {sub_check.id: sub_check.score for sub_check in result.sub_checks}


# ==============================================================================
# FULL DOCUMENTS
# ==============================================================================

def test_scenario_a_scores_every_check_one(extractor, evaluator):
    result = evaluator.evaluate(extractor.extract(SCENARIO_A))

    assert [sub_check.id for sub_check in result.sub_checks] == CHECK_ORDER
    assert all(CHECK_AXIS[sub_check.id] == sub_check.axis for sub_check in result.sub_checks)
    failing = {s.id: s.detail for s in result.sub_checks if s.score < 1.0}
    assert failing == {}
    assert result.axis_scores == {axis: 1.0 for axis in AXES}


def test_scenario_b_partial_scores(extractor, evaluator):
    scores = _scores(evaluator, extractor, SCENARIO_B)

    assert scores['C1'] == pytest.approx(10 / 13)
    assert scores['C3'] == 0.0
    assert scores['C4'] == 0.0
    assert scores['L4'] == 0.0
    assert scores['N1'] == pytest.approx(0.4)
    assert scores['N2'] == pytest.approx(0.5)
    assert scores['N3'] == pytest.approx(0.5)
    assert scores['N4'] == 1.0
    assert scores['N5'] == 1.0
    assert scores['S3'] == 0.0


def test_scenario_b_axis_scores(extractor, evaluator):
    result = evaluator.evaluate(extractor.extract(SCENARIO_B))

    assert result.axis_scores['Completeness'] == pytest.approx((10 / 13 + 2) / 5)
    assert result.axis_scores['Clarity'] == pytest.approx(0.75)
    assert result.axis_scores['Constraints'] == pytest.approx(0.68)
    assert result.axis_scores['Specificity'] == pytest.approx(0.8)


def test_no_prohibitions_scores_zero_not_error(extractor, evaluator):
    scores = _scores(evaluator, extractor, SCENARIO_D)

    assert scores['N1'] == 0.0
    assert scores['N2'] == 0.0
    assert scores['N3'] == 0.0
    assert scores['N4'] == 1.0
    assert scores['N5'] == 0.0


def test_evaluation_is_repeatable(extractor, evaluator):
    document = extractor.extract(SCENARIO_B)

    first = evaluator.evaluate(document)
    second = evaluator.evaluate(document)

    assert first.axis_scores == second.axis_scores
    assert [s.detail for s in first.sub_checks] == [s.detail for s in second.sub_checks]


# ==============================================================================
# ORDER INVARIANCE
# ==============================================================================

SUB_CHECK_METHODS = {
    'completeness': [
        'check_sections_filled',
        'check_data_model_entity',
        'check_api_contract',
        'check_file_paths',
        'check_reference_implementation',
    ],
    'clarity': [
        'check_weasel_phrases',
        'check_clarification_markers',
        'check_vague_verbs',
        'check_decision_conditions',
    ],
    'constraints': [
        'check_prohibition_count',
        'check_prohibition_rationale',
        'check_prohibition_tests',
        'check_out_of_scope',
        'check_escalation',
    ],
    'specificity': [
        'check_concrete_criteria',
        'check_domain_thresholds',
        'check_observability',
        'check_error_kinds',
        'check_numeric_limits',
    ],
}


@pytest.mark.parametrize('text', [SCENARIO_A, SCENARIO_B, COMPLETENESS_GAP])
def test_checker_order_does_not_change_scores(extractor, evaluator, text):
    document = extractor.extract(text)
    expected = {s.id: s.score for s in evaluator.evaluate(document).sub_checks}
    checkers = [evaluator.completeness, evaluator.clarity, evaluator.constraints, evaluator.specificity]

    for ordering in (list(reversed(checkers)), random.Random(7).sample(checkers, len(checkers))):
        scores = {}
        for checker in ordering:
            scores.update({s.id: s.score for s in checker.check_all(document)})
        assert scores == expected


@pytest.mark.parametrize('text', [SCENARIO_A, SCENARIO_B, COMPLETENESS_GAP])
def test_sub_check_order_does_not_change_scores(extractor, evaluator, text):
    document = extractor.extract(text)
    expected = {s.id: s.score for s in evaluator.evaluate(document).sub_checks}
    calls = [
        getattr(getattr(evaluator, axis), name)
        for axis, names in SUB_CHECK_METHODS.items()
        for name in names
    ]
    assert len(calls) == len(CHECK_ORDER)

    for seed in (1, 2, 3):
        shuffled = random.Random(seed).sample(calls, len(calls))
        scores = {s.id: s.score for s in (call(document) for call in reversed(shuffled))}
        assert scores == expected


# ==============================================================================
# INDIVIDUAL SUB-CHECKS
# ==============================================================================

def test_weasel_phrases_penalty(extractor, evaluator):
    text = "## Overview\nRetry as needed; callers might wait when possible.\n"
    scores = _scores(evaluator, extractor, text)

    assert scores['L1'] == pytest.approx(0.7)


def test_weasel_phrases_inside_markers_are_counted(extractor, evaluator):
    text = "## Overview\n- Retry payouts [NEEDS CLARIFICATION: might need a cap, etc.]\n"
    scores = _scores(evaluator, extractor, text)

    assert scores['L1'] == pytest.approx(0.8)
    assert scores['L2'] == pytest.approx(0.85)


def test_clarification_markers_penalty(extractor, evaluator):
    text = (
        "## Open Questions\n"
        "- [NEEDS CLARIFICATION: currency]\n"
        "- [NEEDS CLARIFICATION: retention]\n"
    )
    scores = _scores(evaluator, extractor, text)

    assert scores['L2'] == pytest.approx(0.7)
    assert scores['L1'] == 1.0


def test_vague_requirement_verb(extractor, evaluator):
    text = "## Requirements\n- The system must handle retries\n- Persist one row per order\n"
    result = evaluator.evaluate(extractor.extract(text))

    assert result.score('L3') == 0.0
    assert 'handle' in result.get('L3').detail


def test_vague_verbs_without_requirements(extractor, evaluator):
    scores = _scores(evaluator, extractor, "## Overview\nText.\n")

    assert scores['L3'] == 1.0


def test_spaced_hyphen_is_not_a_rationale(extractor, evaluator):
    text = (
        "## Prohibitions\n"
        "- NEVER store card numbers - ever\n"
        "- NEVER call the ledger API - use the queue\n"
    )
    scores = _scores(evaluator, extractor, text)

    assert scores['N2'] == 0.0


def test_rationale_after_em_dash_or_because(extractor, evaluator):
    text = (
        "## Prohibitions\n"
        "- NEVER store card numbers — PCI scope\n"
        "- NEVER call the ledger API because it is rate limited\n"
        "- NEVER retry declined refunds -- duplicates\n"
    )
    scores = _scores(evaluator, extractor, text)

    assert scores['N2'] == pytest.approx(2 / 3)


def test_escalation_half_credit(extractor, evaluator):
    text = "## Escalation & Guardrails\n- Fail if the ledger is unreachable.\n"
    scores = _scores(evaluator, extractor, text)

    assert scores['N5'] == 0.5


def test_observability_half_credit(extractor, evaluator):
    text = "## Observability\n- Log failures at ERROR.\n"
    scores = _scores(evaluator, extractor, text)

    assert scores['S3'] == 0.5


def test_api_contract_not_applicable_with_reason(extractor, evaluator):
    text = "## API Contract\nN/A — batch job with no external interface\n"
    scores = _scores(evaluator, extractor, text)

    assert scores['C3'] == 1.0


def test_api_contract_bare_not_applicable(extractor, evaluator):
    scores = _scores(evaluator, extractor, "## API Contract\nN/A\n")

    assert scores['C3'] == 0.0


def test_reference_implementation_placeholder(extractor, evaluator):
    text = "## Reference Implementation\nSee `src/{module}/handler.py`\n"
    scores = _scores(evaluator, extractor, text)

    assert scores['C5'] == 0.0


def test_domain_rules_without_table(extractor, evaluator):
    text = "## Domain Rules & Exceptions\n- Refunds expire after 180 days\n"
    scores = _scores(evaluator, extractor, text)

    assert scores['S2'] == 0.0


def test_empty_document_scores_without_error(extractor, evaluator):
    result = evaluator.evaluate(extractor.extract("## Overview\nOnly an overview.\n"))

    assert len(result.sub_checks) == 19
    assert all(0.0 <= s.score <= 1.0 for s in result.sub_checks)
    assert result.score('S1') == 0.0


def test_sub_check_score_is_clamped():
    assert SubCheck('C1', 'Completeness', 1.7).score == 1.0
    assert SubCheck('C1', 'Completeness', -0.2).score == 0.0


def test_ratio_zero_denominator():
    assert ratio(3, 0) == 0.0
    assert ratio(1, 4) == 0.25


# ==============================================================================
# ACTIONABLE FINDINGS
# ==============================================================================

def test_actionable_findings_order(extractor, evaluator):
    result = evaluator.evaluate(extractor.extract(SCENARIO_B))
    findings = actionable_findings(result.sub_checks, limit=3)

    assert [f.rule for f in findings] == ['C3', 'C4', 'L4']
    assert [f.section for f in findings] == [
        SECTION_TITLES[SECTION_API_CONTRACT],
        SECTION_TITLES[SECTION_FILES],
        SECTION_TITLES[SECTION_DECISION_TREE],
    ]
    assert all(f.severity == SEVERITY_CRITICAL for f in findings)


def test_actionable_findings_limit(extractor, evaluator):
    result = evaluator.evaluate(extractor.extract(SCENARIO_B))

    assert len(actionable_findings(result.sub_checks, limit=5)) == 5
    assert actionable_findings(result.sub_checks, limit=0) == []


def test_no_actionable_findings_when_all_pass(extractor, evaluator):
    result = evaluator.evaluate(extractor.extract(SCENARIO_A))

    assert actionable_findings(result.sub_checks) == []


def test_actionable_finding_severity_by_score():
    sub_checks = [
        SubCheck('N2', 'Constraints', 0.6, '3/5 prohibitions with rationale'),
        SubCheck('C1', 'Completeness', 0.6, '8/13 sections filled'),
        SubCheck('L1', 'Clarity', 0.2, '8 weasel phrases'),
    ]
    findings = actionable_findings(sub_checks)

    assert [f.rule for f in findings] == ['L1', 'C1', 'N2']
    assert findings[0].severity == 'critical'
    assert findings[1].severity == 'warning'
    assert '8/13 sections filled' in findings[1].message
