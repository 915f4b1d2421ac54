# Tests for the risk calculator
import pytest

from app.services.scoring import DEFAULT_RISK_WEIGHTS, RiskLevel, ScoreKind, calculate_risk
from app.services.scoring.engines.risk import risk_level


def test_empty_document_uses_defaults():
    res = calculate_risk({})

    assert res.kind == ScoreKind.RISK
    # weighted average 38.0 / 13.8 on the 1-10 scale
    assert res.score == 28
    assert res.level == RiskLevel.MEDIUM.value
    assert "technicalRisk" not in res.factors
    assert res.factors["businessCritical"].raw_value == 5
    assert res.factors["historicalFailures"].raw_value == 1


def test_revenue_or_customer_changes_are_business_critical():
    res = calculate_risk({"changeReasons": {"customerImpact": True}})
    assert res.factors["businessCritical"].raw_value == 8


def test_explicit_business_risk_wins():
    res = calculate_risk({"changeReasons": {"revenueImprovement": True}, "businessRisk": 3})
    assert res.factors["businessCritical"].raw_value == 3


def test_technical_risk_counts_only_when_supplied():
    res = calculate_risk({"technicalRisk": 9})
    assert res.factors["technicalRisk"].weight == DEFAULT_RISK_WEIGHTS.technical_risk
    assert res.score > calculate_risk({}).score


@pytest.mark.parametrize("users, rating", [(0, 1), (5, 3), (10, 5), (120, 8), (5000, 10)])
def test_impact_scope_buckets(users, rating):
    assert calculate_risk({"impactedUsers": users}).factors["impactScope"].raw_value == rating


@pytest.mark.parametrize("deps, rating", [([], 1), (["a"], 3), (["a", "b"], 5), (["a", "b", "c", "d"], 8), (list("abcde"), 10)])
def test_dependency_count_buckets(deps, rating):
    assert calculate_risk({"dependencies": deps}).factors["dependencyCount"].raw_value == rating


def test_rollback_capability_is_inverse_scored():
    weak = calculate_risk({"rollbackCapability": 1})
    strong = calculate_risk({"rollbackCapability": 10})
    assert weak.factors["rollbackCapability"].effective_value == 10
    assert strong.factors["rollbackCapability"].effective_value == 1
    assert strong.score < weak.score


def test_worst_case_is_critical():
    doc = {
        "impactedUsers": 500,
        "businessRisk": 10,
        "complexity": 10,
        "testingCoverage": 1,
        "rollbackCapability": 1,
        "systemsAffected": ["a", "b", "c", "d", "e", "f"],
        "urgencyLevel": "critical",
        "dependencies": list("abcde"),
        "estimatedCost": "£50,000",
        "technicalRisk": 10,
    }
    res = calculate_risk(doc)
    assert res.score == 91
    assert res.level == RiskLevel.CRITICAL.value


def test_garbage_values_do_not_raise():
    doc = {"impactedUsers": "lots", "complexity": "very", "dependencies": "crm", "urgencyLevel": 42}
    res = calculate_risk(doc)
    assert 0 <= res.score <= 100
    assert res.factors["impactScope"].raw_value == 1


@pytest.mark.parametrize(
    "score, level",
    [(0, RiskLevel.LOW), (24.99, RiskLevel.LOW), (25, RiskLevel.MEDIUM), (49.9, RiskLevel.MEDIUM), (50, RiskLevel.HIGH), (75, RiskLevel.CRITICAL)],
)
def test_risk_level_thresholds(score, level):
    assert risk_level(score) == level
