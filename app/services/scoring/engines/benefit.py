# change_cab_project/app/services/scoring/engines/benefit.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

from app.schemas.scoring_config import DEFAULT_BENEFIT_CONFIGS, BenefitConfig
from app.schemas.wizard import WizardInput
from app.services.scoring.interfaces import FactorBreakdown, ScoreKind, ScoreResult
from app.services.scoring.utils import clamp, parse_months, parse_number, round_half_up
from app.services.scoring.weights import DEFAULT_BENEFIT_WEIGHTS, BenefitWeights

logger = logging.getLogger("app.services.scoring.benefit")

DEFAULT_TIMELINE_MONTHS = 12
STRATEGIC_ALIGNMENT = "strategicAlignment"
STRATEGIC_RAW_VALUE = 80.0  # revenue or cost reduction selected
STANDARD_RAW_VALUE = 50.0


@dataclass(frozen=True)
class BenefitFactorSpec:
    """Where a benefit factor lives in the wizard document.

    name: factor / config / weight key (e.g. "costSavings")
    reason: attribute on ChangeReasons that selects the factor
    details: attribute on WizardInput holding the detail block
    value, timeline, explanation: attributes on the detail block
    """
    name: str
    reason: str
    details: str
    value: str
    timeline: str
    explanation: str


BENEFIT_FACTORS: List[BenefitFactorSpec] = [
    BenefitFactorSpec(
        name="revenueImprovement",
        reason="revenue_improvement",
        details="revenue_details",
        value="expected_revenue",
        timeline="revenue_timeline",
        explanation="revenue_description",
    ),
    BenefitFactorSpec(
        name="costSavings",
        reason="cost_reduction",
        details="cost_reduction_details",
        value="expected_savings",
        timeline="savings_timeline",
        explanation="savings_description",
    ),
    BenefitFactorSpec(
        name="customerImpact",
        reason="customer_impact",
        details="customer_impact_details",
        value="customers_affected",
        timeline="impact_timeline",
        explanation="impact_description",
    ),
    BenefitFactorSpec(
        name="processImprovement",
        reason="process_improvement",
        details="process_improvement_details",
        value="expected_efficiency",
        timeline="improvement_timeline",
        explanation="process_description",
    ),
    BenefitFactorSpec(
        name="internalQoL",
        reason="internal_qol",
        details="internal_qol_details",
        value="users_affected",
        timeline="qol_timeline",
        explanation="expected_improvements",
    ),
]


def calculate_value_score(raw_value: float, config: BenefitConfig) -> float:
    """raw_value / value_for_100_points * 100, clamped to [0, 100]. A zero config disables it."""
    if config.value_for_100_points == 0:
        return 0.0
    return clamp(raw_value / config.value_for_100_points * 100, 0.0, 100.0)


def calculate_time_score(timeline_months: int, config: BenefitConfig) -> float:
    """Start at 100 and lose time_decay_per_month points per month; no decay -> 100."""
    if config.time_decay_per_month == 0:
        return 100.0
    return clamp(100 - timeline_months * config.time_decay_per_month, 0.0, 100.0)


class BenefitScoringEngine:
    """Benefit scoring engine.

    Each selected benefit factor scores value (0-100) plus time (0-100), so the
    combined score is 0-200; the weighted average is halved back onto 0-100.
    Strategic alignment is always included and is value-scored only.
    """

    kind = ScoreKind.BENEFIT

    def __init__(
        self,
        weights: BenefitWeights = DEFAULT_BENEFIT_WEIGHTS,
        configs: Optional[Mapping[str, BenefitConfig]] = None,
    ):
        self.weights = weights
        self.configs = DEFAULT_BENEFIT_CONFIGS if configs is None else configs

    def compute(self, wizard_input: WizardInput) -> ScoreResult:
        reasons = wizard_input.change_reasons
        factors: Dict[str, FactorBreakdown] = {}
        warnings: List[str] = []
        total_score = 0.0
        total_weight = 0.0

        for factor_def in BENEFIT_FACTORS:
            if not getattr(reasons, factor_def.reason):
                continue
            details = getattr(wizard_input, factor_def.details)
            if details is None:
                continue
            config = self.configs.get(factor_def.name)
            if config is None:
                warnings.append(f"Benefit: no active config for {factor_def.name}; factor skipped.")
                continue

            weight = self.weights.weight_for(factor_def.name)
            raw_value = parse_number(getattr(details, factor_def.value))
            raw_timeline = parse_months(getattr(details, factor_def.timeline), DEFAULT_TIMELINE_MONTHS)
            value_score = calculate_value_score(raw_value, config)
            time_score = calculate_time_score(raw_timeline, config)
            combined_score = value_score + time_score
            weighted_score = combined_score * weight

            factors[factor_def.name] = FactorBreakdown(
                raw_value=raw_value,
                raw_timeline=raw_timeline,
                explanation=getattr(details, factor_def.explanation) or "",
                value_score=value_score,
                time_score=time_score,
                combined_score=combined_score,
                weight=weight,
                weighted_score=weighted_score,
            )
            total_score += weighted_score
            total_weight += weight

        strategic_config = self.configs.get(STRATEGIC_ALIGNMENT)
        if strategic_config is not None:
            is_strategic = reasons.revenue_improvement or reasons.cost_reduction
            raw_value = STRATEGIC_RAW_VALUE if is_strategic else STANDARD_RAW_VALUE
            weight = self.weights.weight_for(STRATEGIC_ALIGNMENT)
            value_score = calculate_value_score(raw_value, strategic_config)
            weighted_score = value_score * weight

            factors[STRATEGIC_ALIGNMENT] = FactorBreakdown(
                raw_value=raw_value,
                explanation="Aligns with revenue/cost objectives" if is_strategic else "Standard alignment",
                value_score=value_score,
                combined_score=value_score,
                weight=weight,
                weighted_score=weighted_score,
            )
            total_score += weighted_score
            total_weight += weight
        else:
            warnings.append(f"Benefit: no active config for {STRATEGIC_ALIGNMENT}; factor skipped.")

        # Combined scores are 0-200, so halve the weighted average
        normalized = total_score / total_weight / 2 if total_weight > 0 else 0.0
        score = clamp(round_half_up(normalized, 1), 0.0, 100.0)

        for warn in warnings:
            logger.debug("scoring.warning", extra={"kind": self.kind.value, "warning": warn})

        return ScoreResult(kind=self.kind, score=score, factors=factors, warnings=warnings)


def calculate_benefit(
    wizard_input: Union[WizardInput, Dict[str, Any], None],
    weights: BenefitWeights = DEFAULT_BENEFIT_WEIGHTS,
    configs: Optional[Mapping[str, BenefitConfig]] = None,
) -> ScoreResult:
    """Score the benefit of a change request from its wizard input."""
    return BenefitScoringEngine(weights=weights, configs=configs).compute(WizardInput.coerce(wizard_input))


__all__ = [
    "BenefitFactorSpec",
    "BENEFIT_FACTORS",
    "BenefitScoringEngine",
    "calculate_benefit",
    "calculate_value_score",
    "calculate_time_score",
]
