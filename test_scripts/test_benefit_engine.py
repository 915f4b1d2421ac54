# Tests for the benefit calculator
import pytest
from pydantic import ValidationError as PydanticValidationError

from app.schemas.scoring_config import DEFAULT_BENEFIT_CONFIGS, BenefitConfig
from app.schemas.wizard import WizardInput
from app.services.scoring import DEFAULT_BENEFIT_WEIGHTS, BenefitWeights, ScoreKind, calculate_benefit, get_engine
from app.services.scoring.engines.benefit import calculate_time_score, calculate_value_score


def test_revenue_only_scenario(revenue_wizard):
    res = calculate_benefit(revenue_wizard)

    assert res.kind == ScoreKind.BENEFIT
    assert res.score == pytest.approx(66.7)
    assert res.level is None
    assert res.warnings == []

    revenue = res.factors["revenueImprovement"]
    assert revenue.raw_value == 100000
    assert revenue.raw_timeline == 12
    assert revenue.explanation == "x"
    assert revenue.value_score == 100
    assert revenue.time_score == 40
    assert revenue.combined_score == 140
    assert revenue.weighted_score == pytest.approx(35)

    strategic = res.factors["strategicAlignment"]
    assert strategic.raw_value == 80
    assert strategic.value_score == 100
    assert strategic.weighted_score == pytest.approx(5)


def test_same_input_same_result(revenue_wizard):
    first = calculate_benefit(revenue_wizard)
    second = calculate_benefit(revenue_wizard)
    assert first == second


def test_selected_reason_without_details_is_ignored(revenue_wizard):
    with_orphan_reason = dict(revenue_wizard)
    with_orphan_reason["changeReasons"] = {"revenueImprovement": True, "costReduction": True}

    res = calculate_benefit(with_orphan_reason)

    assert res.score == calculate_benefit(revenue_wizard).score
    assert "costSavings" not in res.factors


def test_details_without_selected_reason_are_ignored(revenue_wizard):
    doc = dict(revenue_wizard)
    doc["costReductionDetails"] = {"expectedSavings": 50000, "savingsTimeline": 1}
    res = calculate_benefit(doc)
    assert "costSavings" not in res.factors
    assert res.score == pytest.approx(66.7)


def test_no_reasons_scores_standard_strategic_alignment_only():
    res = calculate_benefit({})
    assert list(res.factors) == ["strategicAlignment"]
    assert res.factors["strategicAlignment"].raw_value == 50
    # 100 value points, halved
    assert res.score == 50.0


def test_none_input_is_treated_as_empty_document():
    assert calculate_benefit(None).score == calculate_benefit({}).score


def test_customer_impact_uses_standard_alignment():
    doc = {
        "changeReasons": {"customerImpact": True},
        "customerImpactDetails": {"customersAffected": 50, "impactTimeline": 6, "impactDescription": "faster checkout"},
    }
    res = calculate_benefit(doc)

    customer = res.factors["customerImpact"]
    assert customer.value_score == 50
    assert customer.time_score == 82
    assert res.factors["strategicAlignment"].raw_value == 50
    # (132 * 0.15 + 100 * 0.05) / 0.20 / 2
    assert res.score == pytest.approx(62.0)


def test_zero_value_for_100_points_gives_zero_value_score(revenue_wizard):
    configs = dict(DEFAULT_BENEFIT_CONFIGS)
    configs["revenueImprovement"] = BenefitConfig(
        benefit_type="revenueImprovement", value_for_100_points=0, time_decay_per_month=5
    )
    res = calculate_benefit(revenue_wizard, configs=configs)
    assert res.factors["revenueImprovement"].value_score == 0
    assert res.factors["revenueImprovement"].time_score == 40


def test_missing_config_skips_factor_with_warning(revenue_wizard):
    configs = {k: v for k, v in DEFAULT_BENEFIT_CONFIGS.items() if k != "revenueImprovement"}

    res = calculate_benefit(revenue_wizard, configs=configs)

    assert "revenueImprovement" not in res.factors
    assert any("revenueImprovement" in w for w in res.warnings)
    assert res.score == 50.0


def test_missing_strategic_config_is_skipped(revenue_wizard):
    configs = {k: v for k, v in DEFAULT_BENEFIT_CONFIGS.items() if k != "strategicAlignment"}
    res = calculate_benefit(revenue_wizard, configs=configs)
    assert "strategicAlignment" not in res.factors
    assert res.score == 70.0  # 140 * 0.25 / 0.25 / 2


def test_empty_configs_score_zero(revenue_wizard):
    res = calculate_benefit(revenue_wizard, configs={})
    assert res.score == 0.0
    assert res.factors == {}
    assert len(res.warnings) == 2


def test_time_score_clamps_and_skips_decay():
    cfg = DEFAULT_BENEFIT_CONFIGS["revenueImprovement"]
    assert calculate_time_score(0, cfg) == 100
    assert calculate_time_score(30, cfg) == 0
    assert calculate_time_score(500, DEFAULT_BENEFIT_CONFIGS["strategicAlignment"]) == 100


def test_value_score_clamps():
    cfg = DEFAULT_BENEFIT_CONFIGS["costSavings"]
    assert calculate_value_score(25000, cfg) == 50
    assert calculate_value_score(10**9, cfg) == 100
    assert calculate_value_score(-10, cfg) == 0


def test_messy_values_are_parsed():
    doc = {
        "changeReasons": {"processImprovement": "true"},
        "processImprovementDetails": {
            "expectedEfficiency": "15%",
            "improvementTimeline": "6 months",
            "processDescription": "less manual triage",
        },
    }
    res = calculate_benefit(doc)
    process = res.factors["processImprovement"]
    assert process.raw_value == 15
    assert process.raw_timeline == 6
    assert process.value_score == pytest.approx(15)
    assert process.time_score == 88


def test_unparsable_timeline_defaults_to_twelve_months():
    doc = {
        "changeReasons": {"costReduction": True},
        "costReductionDetails": {"expectedSavings": "50000", "savingsTimeline": "soon"},
    }
    res = calculate_benefit(doc)
    assert res.factors["costSavings"].raw_timeline == 12
    assert res.factors["costSavings"].time_score == 52


def test_malformed_detail_block_is_treated_as_absent(revenue_wizard):
    doc = dict(revenue_wizard)
    doc["revenueDetails"] = "£100,000"
    res = calculate_benefit(doc)
    assert "revenueImprovement" not in res.factors


def test_custom_weights_change_the_result(revenue_wizard):
    weights = DEFAULT_BENEFIT_WEIGHTS.with_overrides(strategic_alignment=0.0)
    res = calculate_benefit(revenue_wizard, weights=weights)
    assert res.score == 70.0


def test_custom_weights_accept_factor_names(revenue_wizard):
    weights = DEFAULT_BENEFIT_WEIGHTS.with_overrides(strategicAlignment=0.0, internalQoL=0.3)
    assert weights.strategic_alignment == 0.0
    assert weights.internal_qol == 0.3
    assert weights.weight_for("revenueImprovement") == 0.25
    assert calculate_benefit(revenue_wizard, weights=weights).score == 70.0

    assert DEFAULT_BENEFIT_WEIGHTS.with_overrides(revenueImprovement=0.9).revenue_improvement == 0.9


def test_registry_builds_benefit_engine(revenue_wizard):
    engine = get_engine(ScoreKind.BENEFIT)
    assert engine.kind == ScoreKind.BENEFIT
    assert engine.compute(WizardInput.coerce(revenue_wizard)).score == pytest.approx(66.7)


def test_factors_document_uses_camel_case(revenue_wizard):
    doc = calculate_benefit(revenue_wizard).factors_document()
    assert doc["revenueImprovement"]["valueScore"] == 100
    assert doc["revenueImprovement"]["rawTimeline"] == 12
    assert "effectiveValue" not in doc["revenueImprovement"]


def test_weights_from_mapping_accepts_camel_and_snake_keys():
    weights = BenefitWeights.from_mapping({"internalQoL": 0.3, "cost_savings": 0.4})
    assert weights.weight_for("internalQoL") == 0.3
    assert weights.cost_savings == 0.4
    assert weights.revenue_improvement == DEFAULT_BENEFIT_WEIGHTS.revenue_improvement
    assert BenefitWeights.from_mapping(None) == DEFAULT_BENEFIT_WEIGHTS


def test_weights_reject_unknown_and_negative_values():
    with pytest.raises(PydanticValidationError):
        BenefitWeights.from_mapping({"bogus": 1})
    with pytest.raises(PydanticValidationError):
        DEFAULT_BENEFIT_WEIGHTS.with_overrides(cost_savings=-1)
