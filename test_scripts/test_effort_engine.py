# Tests for the effort calculator
import pytest

from app.schemas.scoring_config import DEFAULT_EFFORT_CONFIGS, EffortConfig
from app.services.scoring import EffortLevel, ScoreKind, calculate_effort
from app.services.scoring.engines.effort import effort_level, rating_from_config


def test_empty_document_uses_defaults():
    res = calculate_effort({})

    assert res.kind == ScoreKind.EFFORT
    # weighted average 46.14 / 14.8 on the 1-10 scale
    assert res.score == 31
    assert res.level == EffortLevel.MEDIUM.value
    assert res.warnings == []
    assert res.factors["resourceRequirement"].raw_value == 1
    assert res.factors["testingCoverage"].effective_value == 6
    assert res.factors["systemsAffected"].effective_value == pytest.approx(2.8)


def test_same_input_same_result():
    doc = {"estimatedEffortHours": 120, "complexity": 7, "urgencyLevel": "high"}
    assert calculate_effort(doc) == calculate_effort(doc)


@pytest.mark.parametrize("field", ["rollbackCapability", "testingCoverage"])
def test_better_safety_nets_lower_effort(field):
    base = {"estimatedEffortHours": 200, "complexity": 6}
    weak = calculate_effort({**base, field: 2})
    strong = calculate_effort({**base, field: 9})

    assert strong.score < weak.score
    assert weak.factors[field].effective_value == 9
    assert strong.factors[field].effective_value == 2


def test_hours_are_rated_through_thresholds():
    res = calculate_effort({"estimatedEffortHours": "500 hours"})
    hours = res.factors["hoursEstimated"]
    assert hours.raw_value == 500
    assert hours.effective_value == pytest.approx(8.2)


def test_complexity_is_inferred_from_hours_when_missing():
    res = calculate_effort({"estimatedEffortHours": 100})
    assert res.factors["complexity"].effective_value == 5


def test_explicit_ratings_are_clamped():
    res = calculate_effort({"complexity": 15, "urgency": -3})
    assert res.factors["complexity"].effective_value == 10
    assert res.factors["urgency"].effective_value == 1


def test_urgency_level_maps_to_rating():
    assert calculate_effort({"urgencyLevel": "critical"}).factors["urgency"].effective_value == 10
    assert calculate_effort({"urgencyLevel": "low"}).factors["urgency"].effective_value == 3
    # unknown level falls back to the default rating
    assert calculate_effort({"urgencyLevel": "yesterday"}).factors["urgency"].effective_value == 5


def test_team_size_fills_resource_requirement():
    res = calculate_effort({"teamSize": 8})
    assert res.factors["resourceRequirement"].raw_value == 8


def test_systems_list_counts_when_no_explicit_count():
    res = calculate_effort({"systemsAffected": ["crm", "billing", "auth", "search", "mail", "erp"]})
    assert res.factors["systemsAffected"].raw_value == 6
    assert res.factors["systemsAffected"].effective_value == 10


def test_missing_config_skips_factor_with_warning():
    configs = {k: v for k, v in DEFAULT_EFFORT_CONFIGS.items() if k != "hoursEstimated"}
    res = calculate_effort({"estimatedEffortHours": 400}, configs=configs)
    assert "hoursEstimated" not in res.factors
    assert any("hoursEstimated" in w for w in res.warnings)


def test_config_without_thresholds_scales_linearly():
    cfg = EffortConfig(effort_type="hoursEstimated", value_for_100_points=1000)
    assert rating_from_config(500, cfg) == pytest.approx(5.5)
    assert rating_from_config(5000, cfg) == 10


def test_unusable_config_is_skipped():
    configs = dict(DEFAULT_EFFORT_CONFIGS)
    configs["costEstimated"] = EffortConfig(effort_type="costEstimated")
    res = calculate_effort({"estimatedCost": 1000}, configs=configs)
    assert "costEstimated" not in res.factors
    assert any("costEstimated" in w for w in res.warnings)


def test_maximum_effort_is_capped_at_100():
    doc = {
        "estimatedEffortHours": 5000,
        "estimatedCost": 10**6,
        "systemsAffectedCount": 12,
        "resourceRequirement": 10,
        "complexity": 10,
        "testingRequired": 10,
        "documentationRequired": 10,
        "urgency": 10,
        "testingCoverage": 1,
        "rollbackCapability": 1,
    }
    res = calculate_effort(doc)
    assert res.score == 100
    assert res.level == EffortLevel.VERY_HIGH.value


@pytest.mark.parametrize(
    "score, level",
    [(0, EffortLevel.LOW), (24.9, EffortLevel.LOW), (25, EffortLevel.MEDIUM), (50, EffortLevel.HIGH), (75, EffortLevel.VERY_HIGH)],
)
def test_effort_level_thresholds(score, level):
    assert effort_level(score) == level
