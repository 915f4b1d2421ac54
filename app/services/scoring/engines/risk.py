# change_cab_project/app/services/scoring/engines/risk.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Union

from app.schemas.wizard import WizardInput
from app.services.scoring.engines.effort import system_count, urgency_rating
from app.services.scoring.interfaces import FactorBreakdown, RiskLevel, ScoreKind, ScoreResult
from app.services.scoring.utils import (
    RATING_MAX,
    RATING_MIN,
    bucket_rating,
    clamp,
    inverse_rating,
    parse_number,
    parse_rating,
    round_half_up,
)
from app.services.scoring.weights import DEFAULT_RISK_WEIGHTS, RiskWeights

SCALE_FACTOR = 100 / RATING_MAX

# Quantity buckets: zero -> 1, then (exclusive upper bound -> rating)
_COUNT_BOUNDS = ([2, 3, 5], [3, 5, 8, 10])


def _bucketed(value: float, bounds: List[float], ratings: List[float]) -> float:
    if value <= 0:
        return RATING_MIN
    return bucket_rating(value, bounds, ratings)


def _impact_scope(w: WizardInput) -> float:
    return _bucketed(parse_number(w.impacted_users), [10, 50, 200], [3, 5, 8, 10])


def _financial_impact(w: WizardInput) -> float:
    return _bucketed(parse_number(w.estimated_cost), [1000, 5000, 20000], [3, 5, 8, 10])


def _complexity(w: WizardInput) -> float:
    rating = parse_rating(w.complexity, None)
    if rating is not None:
        return rating
    return _bucketed(parse_number(w.estimated_effort_hours), [8, 40, 160], [3, 5, 8, 10])


def _change_size(w: WizardInput) -> float:
    return _bucketed(system_count(w, default=0), *_COUNT_BOUNDS)


def _dependency_count(w: WizardInput) -> float:
    return _bucketed(len(w.dependencies or []), *_COUNT_BOUNDS)


def _business_critical(w: WizardInput) -> float:
    rating = parse_rating(w.business_risk, None)
    if rating is not None:
        return rating
    reasons = w.change_reasons
    return 8 if (reasons.revenue_improvement or reasons.customer_impact) else 5


@dataclass(frozen=True)
class RiskFactorSpec:
    """One risk factor: extract yields a raw 1-10 rating (None -> default, or skipped if no default)."""
    name: str
    extract: Callable[[WizardInput], Any]
    default: Optional[float] = None
    inverse: bool = False


RISK_FACTORS: List[RiskFactorSpec] = [
    RiskFactorSpec("impactScope", _impact_scope),
    RiskFactorSpec("businessCritical", _business_critical),
    RiskFactorSpec("complexity", _complexity),
    RiskFactorSpec("testingCoverage", lambda w: w.testing_coverage, default=5, inverse=True),
    RiskFactorSpec("rollbackCapability", lambda w: w.rollback_capability, default=5, inverse=True),
    RiskFactorSpec("changeSize", _change_size),
    RiskFactorSpec("timeWindow", urgency_rating, default=5),
    RiskFactorSpec("dependencyCount", _dependency_count),
    RiskFactorSpec("historicalFailures", lambda w: None, default=1),
    RiskFactorSpec("financialImpact", _financial_impact),
    RiskFactorSpec("technicalRisk", lambda w: w.technical_risk),
]


def risk_level(normalized_score: float) -> RiskLevel:
    if normalized_score < 25:
        return RiskLevel.LOW
    if normalized_score < 50:
        return RiskLevel.MEDIUM
    if normalized_score < 75:
        return RiskLevel.HIGH
    return RiskLevel.CRITICAL


class RiskScoringEngine:
    """Risk scoring engine.

    Weighted average of 1-10 factor ratings scaled by 10 onto 0-100, with a
    level at fixed thresholds (25 / 50 / 75). Testing coverage and rollback
    capability are inverse-scored. Technical risk only counts when supplied.
    """

    kind = ScoreKind.RISK

    def __init__(self, weights: RiskWeights = DEFAULT_RISK_WEIGHTS):
        self.weights = weights

    def compute(self, wizard_input: WizardInput) -> ScoreResult:
        factors: Dict[str, FactorBreakdown] = {}
        total_score = 0.0
        total_weight = 0.0

        for spec in RISK_FACTORS:
            rating = parse_rating(spec.extract(wizard_input), spec.default)
            if rating is None:
                continue
            effective_value = inverse_rating(rating) if spec.inverse else rating
            weight = self.weights.weight_for(spec.name)
            weighted_score = effective_value * weight

            factors[spec.name] = FactorBreakdown(
                raw_value=rating,
                effective_value=effective_value,
                weight=weight,
                weighted_score=weighted_score,
            )
            total_score += weighted_score
            total_weight += weight

        normalized = total_score / total_weight * SCALE_FACTOR if total_weight > 0 else 0.0
        score = clamp(round_half_up(normalized), 0.0, 100.0)

        return ScoreResult(kind=self.kind, score=score, level=risk_level(normalized).value, factors=factors)


def calculate_risk(
    wizard_input: Union[WizardInput, Dict[str, Any], None],
    weights: RiskWeights = DEFAULT_RISK_WEIGHTS,
) -> ScoreResult:
    """Score the risk of a change request from its wizard input."""
    return RiskScoringEngine(weights=weights).compute(WizardInput.coerce(wizard_input))


__all__ = [
    "RiskFactorSpec",
    "RISK_FACTORS",
    "RiskScoringEngine",
    "calculate_risk",
    "risk_level",
]
