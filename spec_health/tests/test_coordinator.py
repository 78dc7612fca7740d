# Path: spec_health/tests/test_coordinator.py
"""
End-to-end tests for the health check coordinator.

Tests:
- Verdicts for the reference documents
- Self-repair runs at most once and re-scores once
- Configuration switches (self-repair, finding limit)
- Determinism and missing-document handling
"""

import pytest

from spec_health.core.config_loader import ConfigLoader
from spec_health.engine.coordinator import HealthCheckCoordinator
from spec_health.models.findings import NoDocumentError
from spec_health.tests.fixtures import (
    SCENARIO_A,
    SCENARIO_B,
    SCENARIO_D,
    COMPLETENESS_GAP,
    CLARITY_GAP,
    CONVENTIONS,
    WHITESPACE_ONLY,
)


# ==============================================================================
# VERDICTS
# ==============================================================================

def test_scenario_a_ships(coordinator):
    report = coordinator.evaluate(SCENARIO_A, name='refunds')

    assert report.verdict == 'SHIP_IT'
    assert report.passed
    assert report.audit_findings == []
    assert report.actionable_findings == []
    assert report.balance == 1.0
    assert not report.repair.attempted
    assert report.pre_repair_scores is None
    assert report.repaired_text is None


def test_scenario_b_is_draft(coordinator):
    report = coordinator.evaluate(SCENARIO_B, name='refunds')

    assert report.verdict == 'DRAFT'
    assert not report.passed
    assert report.axis_scores == {
        'Completeness': 0.55,
        'Clarity': 0.75,
        'Constraints': 0.68,
        'Specificity': 0.8,
    }
    assert report.balance == pytest.approx(0.87)
    assert [f.rule for f in report.actionable_findings] == ['C3', 'C4', 'L4']
    # DRAFT is not repairable
    assert not report.repair.attempted
    assert report.repair.final_verdict == 'DRAFT'


def test_scenario_b_audit_names_untested_prohibition(coordinator):
    report = coordinator.evaluate(SCENARIO_B)
    rules = [finding.rule for finding in report.audit_findings]

    assert 'prohibition_without_negative_test' in rules


def test_no_prohibitions_scores_constraints_low(coordinator):
    report = coordinator.evaluate(SCENARIO_D)

    assert report.sub_check('N1').score == 0.0
    assert report.sub_check('N2').score == 0.0
    assert report.sub_check('N3').score == 0.0


# ==============================================================================
# SELF-REPAIR
# ==============================================================================

def test_completeness_repair_is_rescored_once(coordinator):
    report = coordinator.evaluate(COMPLETENESS_GAP, name='gap')

    assert report.repair.applied
    assert report.repair.target_axis == 'Completeness'
    assert report.repair.pre_repair_verdict == 'SKETCH'
    assert report.repair.final_verdict == report.verdict == 'SKETCH'

    assert report.pre_repair_scores.completeness == pytest.approx((4 / 13) / 5)
    assert report.scores.completeness == pytest.approx(0.2)
    assert report.sub_check('C1').score == 1.0
    assert report.sub_check('L2').score == 0.0
    assert '## Reference Implementation' in report.repaired_text


def test_clarity_repair_can_change_verdict(coordinator):
    report = coordinator.evaluate(CLARITY_GAP, name='vague')

    assert report.repair.pre_repair_verdict == 'VAGUE'
    assert report.pre_repair_scores.clarity == 0.0
    assert report.repair.changes == ["Marked 10 weasel phrases in 'Overview'"]
    assert report.sub_check('L1').score == 1.0
    assert report.scores.clarity == pytest.approx(0.25)
    # (1, 0.25, 1, 1) balances at just above 0.60
    assert report.verdict == 'DRAFT'
    assert report.repair.final_verdict == 'DRAFT'


def test_repair_runs_at_most_once(coordinator, monkeypatch):
    calls = []
    original = coordinator.repair_controller.repair

    def spy(*args, **kwargs):
        calls.append(args[2])
        return original(*args, **kwargs)

    monkeypatch.setattr(coordinator.repair_controller, 'repair', spy)
    report = coordinator.evaluate(COMPLETENESS_GAP)

    # Still SKETCH after the re-score, but no second repair
    assert report.verdict == 'SKETCH'
    assert calls == ['SKETCH']


def test_final_audit_runs_after_repair(coordinator):
    report = coordinator.evaluate(COMPLETENESS_GAP, conventions=CONVENTIONS)
    rules = [finding.rule for finding in report.audit_findings]

    assert report.repair.applied
    assert rules.count('convention_without_prohibition') == 2
    # The inserted Decision Tree stub has no outcomes to cover
    assert 'decision_outcome_without_criterion' not in rules


def test_self_repair_disabled_by_config():
    config = ConfigLoader()
    config.set('enable_self_repair', False)
    coordinator = HealthCheckCoordinator(config)

    report = coordinator.evaluate(COMPLETENESS_GAP)

    assert report.verdict == 'SKETCH'
    assert not report.repair.attempted
    assert report.repaired_text is None


def test_self_repair_disabled_by_environment(monkeypatch):
    monkeypatch.setenv('SPEC_HEALTH_ENABLE_SELF_REPAIR', 'false')
    ConfigLoader.reset()

    report = HealthCheckCoordinator().evaluate(COMPLETENESS_GAP)

    assert not report.repair.attempted


def test_self_repair_disabled_for_one_coordinator():
    report = HealthCheckCoordinator(enable_self_repair=False).evaluate(COMPLETENESS_GAP)

    assert not report.repair.attempted
    assert ConfigLoader().get('enable_self_repair') is True
    assert HealthCheckCoordinator().evaluate(COMPLETENESS_GAP).repair.applied


def test_actionable_finding_limit_from_config():
    config = ConfigLoader()
    config.set('max_actionable_findings', 1)

    report = HealthCheckCoordinator(config).evaluate(SCENARIO_B)

    assert [f.rule for f in report.actionable_findings] == ['C3']


# ==============================================================================
# DETERMINISM AND INPUT HANDLING
# ==============================================================================

def test_reports_are_deterministic(coordinator):
    first = coordinator.evaluate(COMPLETENESS_GAP, name='gap').to_dict()
    second = coordinator.evaluate(COMPLETENESS_GAP, name='gap').to_dict()

    assert first == second


def test_to_dict_shape(coordinator):
    data = coordinator.evaluate(SCENARIO_B, name='refunds').to_dict()

    assert data['document'] == 'refunds'
    assert data['verdict'] == 'DRAFT'
    assert data['scores']['Balance'] == 0.87
    assert len(data['sub_checks']) == 19
    assert data['sub_checks'][0] == {
        'id': 'C1',
        'axis': 'Completeness',
        'score': 0.77,
        'description': 'Canonical sections present and non-empty',
        'detail': '10/13 sections filled; missing or empty: API Contract, Files to Create/Modify, Observability',
    }
    assert data['pre_repair_scores'] is None


@pytest.mark.parametrize('text', [None, '', WHITESPACE_ONLY])
def test_no_document(coordinator, text):
    with pytest.raises(NoDocumentError):
        coordinator.evaluate(text)


def test_evaluate_file(coordinator, tmp_path):
    spec_path = tmp_path / 'refunds.md'
    spec_path.write_text(SCENARIO_A, encoding='utf-8')

    report = coordinator.evaluate_file(spec_path)

    assert report.document_name == 'refunds'
    assert report.verdict == 'SHIP_IT'


def test_evaluate_file_with_conventions(coordinator, tmp_path):
    spec_path = tmp_path / 'refunds.md'
    spec_path.write_text(SCENARIO_A, encoding='utf-8')
    conventions_path = tmp_path / 'CONVENTIONS.md'
    conventions_path.write_text(CONVENTIONS, encoding='utf-8')

    report = coordinator.evaluate_file(spec_path, conventions_path)
    missing = [f for f in report.audit_findings if f.rule == 'convention_without_prohibition']

    assert len(missing) == 2


def test_evaluate_missing_file(coordinator, tmp_path):
    with pytest.raises(FileNotFoundError):
        coordinator.evaluate_file(tmp_path / 'absent.md')


def test_evaluate_empty_file(coordinator, tmp_path):
    spec_path = tmp_path / 'empty.md'
    spec_path.write_text('\n\n', encoding='utf-8')

    with pytest.raises(NoDocumentError):
        coordinator.evaluate_file(spec_path)
