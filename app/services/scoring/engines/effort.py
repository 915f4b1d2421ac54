# change_cab_project/app/services/scoring/engines/effort.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from app.schemas.scoring_config import DEFAULT_EFFORT_CONFIGS, EffortConfig
from app.schemas.wizard import UrgencyLevel, WizardInput
from app.services.scoring.interfaces import EffortLevel, FactorBreakdown, ScoreKind, ScoreResult
from app.services.scoring.utils import (
    RATING_MAX,
    RATING_MIN,
    bucket_rating,
    clamp,
    inverse_rating,
    parse_number,
    parse_rating,
    round_half_up,
    threshold_rating,
)
from app.services.scoring.weights import DEFAULT_EFFORT_WEIGHTS, EffortWeights

logger = logging.getLogger("app.services.scoring.effort")

# Weighted average of 1-10 ratings -> 0-100
SCALE_FACTOR = 100 / RATING_MAX

URGENCY_LEVEL_RATINGS: Dict[UrgencyLevel, float] = {
    UrgencyLevel.LOW: 3,
    UrgencyLevel.MEDIUM: 5,
    UrgencyLevel.HIGH: 8,
    UrgencyLevel.CRITICAL: 10,
}


def system_count(wizard_input: WizardInput, default: int) -> int:
    """Explicit count first, then the length of the systems list."""
    if wizard_input.systems_affected_count is not None:
        return max(0, wizard_input.systems_affected_count)
    if wizard_input.systems_affected is not None:
        return len(wizard_input.systems_affected)
    return default


def urgency_rating(wizard_input: WizardInput) -> Optional[float]:
    """Explicit 1-10 urgency, else derived from the urgency level, else None."""
    rating = parse_rating(wizard_input.urgency, None)
    if rating is not None:
        return rating
    if wizard_input.urgency_level is not None:
        return URGENCY_LEVEL_RATINGS[wizard_input.urgency_level]
    return None


def _complexity(w: WizardInput) -> Optional[float]:
    rating = parse_rating(w.complexity, None)
    if rating is not None:
        return rating
    # Infer from hours: <8h=1, <40h=3, <160h=5, <400h=7, >=400h=10
    hours = parse_number(w.estimated_effort_hours)
    return bucket_rating(hours, [8, 40, 160, 400], [1, 3, 5, 7, 10])


def _resource_requirement(w: WizardInput) -> Any:
    return w.resource_requirement if w.resource_requirement is not None else w.team_size


@dataclass(frozen=True)
class EffortFactorSpec:
    """One effort factor.

    extract returns the raw value from the wizard input. Factors with a
    config_key hold a raw quantity converted to a rating through EffortConfig;
    the rest already are 1-10 ratings (default applies when absent).
    inverse marks factors where a higher rating means less effort.
    """
    name: str
    extract: Callable[[WizardInput], Any]
    default: Optional[float] = None
    config_key: Optional[str] = None
    inverse: bool = False


EFFORT_FACTORS: List[EffortFactorSpec] = [
    EffortFactorSpec("hoursEstimated", lambda w: parse_number(w.estimated_effort_hours), config_key="hoursEstimated"),
    EffortFactorSpec("costEstimated", lambda w: parse_number(w.estimated_cost), config_key="costEstimated"),
    EffortFactorSpec("systemsAffected", lambda w: system_count(w, default=1), config_key="systemsAffected"),
    EffortFactorSpec("resourceRequirement", _resource_requirement, default=1),
    EffortFactorSpec("complexity", _complexity, default=5),
    EffortFactorSpec("testingRequired", lambda w: w.testing_required, default=5),
    EffortFactorSpec("documentationRequired", lambda w: w.documentation_required, default=5),
    EffortFactorSpec("urgency", urgency_rating, default=5),
    EffortFactorSpec("testingCoverage", lambda w: w.testing_coverage, default=5, inverse=True),
    EffortFactorSpec("rollbackCapability", lambda w: w.rollback_capability, default=5, inverse=True),
]


def rating_from_config(raw_value: float, config: EffortConfig) -> Optional[float]:
    """Convert a raw quantity to a 1-10 rating; None when the config cannot rate it."""
    if config.thresholds:
        return threshold_rating(raw_value, sorted(config.thresholds))
    if config.value_for_100_points > 0:
        return clamp(RATING_MIN + (RATING_MAX - RATING_MIN) * raw_value / config.value_for_100_points, RATING_MIN, RATING_MAX)
    return None


def effort_level(normalized_score: float) -> EffortLevel:
    if normalized_score < 25:
        return EffortLevel.LOW
    if normalized_score < 50:
        return EffortLevel.MEDIUM
    if normalized_score < 75:
        return EffortLevel.HIGH
    return EffortLevel.VERY_HIGH


class EffortScoringEngine:
    """Effort scoring engine.

    Weighted average of 1-10 factor ratings scaled by 10 onto 0-100.
    Testing coverage and rollback capability are inverse-scored
    ((10 + 1) - rating) so better coverage/rollback lowers the effort.
    """

    kind = ScoreKind.EFFORT

    def __init__(
        self,
        weights: EffortWeights = DEFAULT_EFFORT_WEIGHTS,
        configs: Optional[Mapping[str, EffortConfig]] = None,
    ):
        self.weights = weights
        self.configs = DEFAULT_EFFORT_CONFIGS if configs is None else configs

    def compute(self, wizard_input: WizardInput) -> ScoreResult:
        factors: Dict[str, FactorBreakdown] = {}
        warnings: List[str] = []
        total_score = 0.0
        total_weight = 0.0

        for spec in EFFORT_FACTORS:
            raw = spec.extract(wizard_input)
            if spec.config_key is not None:
                config = self.configs.get(spec.config_key)
                if config is None:
                    warnings.append(f"Effort: no active config for {spec.config_key}; factor skipped.")
                    continue
                raw_value = max(0.0, float(raw))
                rating = rating_from_config(raw_value, config)
                if rating is None:
                    warnings.append(f"Effort: config for {spec.config_key} has no thresholds or scale; factor skipped.")
                    continue
            else:
                rating = parse_rating(raw, spec.default)
                if rating is None:
                    continue
                raw_value = rating

            effective_value = inverse_rating(rating) if spec.inverse else rating
            weight = self.weights.weight_for(spec.name)
            weighted_score = effective_value * weight

            factors[spec.name] = FactorBreakdown(
                raw_value=raw_value,
                effective_value=effective_value,
                weight=weight,
                weighted_score=weighted_score,
            )
            total_score += weighted_score
            total_weight += weight

        normalized = total_score / total_weight * SCALE_FACTOR if total_weight > 0 else 0.0
        score = clamp(round_half_up(normalized), 0.0, 100.0)

        for warn in warnings:
            logger.debug("scoring.warning", extra={"kind": self.kind.value, "warning": warn})

        return ScoreResult(
            kind=self.kind,
            score=score,
            level=effort_level(normalized).value,
            factors=factors,
            warnings=warnings,
        )


def calculate_effort(
    wizard_input: Union[WizardInput, Dict[str, Any], None],
    weights: EffortWeights = DEFAULT_EFFORT_WEIGHTS,
    configs: Optional[Mapping[str, EffortConfig]] = None,
) -> ScoreResult:
    """Score the effort of a change request from its wizard input."""
    return EffortScoringEngine(weights=weights, configs=configs).compute(WizardInput.coerce(wizard_input))


__all__ = [
    "EffortFactorSpec",
    "EFFORT_FACTORS",
    "EffortScoringEngine",
    "calculate_effort",
    "rating_from_config",
    "effort_level",
    "system_count",
    "urgency_rating",
]
