# change_cab_project/app/services/scoring/registry.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Mapping, Optional

from app.schemas.scoring_config import BenefitConfig, EffortConfig
from app.services.scoring.engines import BenefitScoringEngine, EffortScoringEngine, RiskScoringEngine
from app.services.scoring.interfaces import ScoreKind, ScoringEngine
from app.services.scoring.weights import (
    DEFAULT_BENEFIT_WEIGHTS,
    DEFAULT_EFFORT_WEIGHTS,
    DEFAULT_RISK_WEIGHTS,
    FactorWeights,
)


@dataclass(frozen=True)
class ScoreKindInfo:
    name: ScoreKind
    label: str
    description: str
    factors: List[str]
    default_weights: FactorWeights
    uses_configs: bool
    build: Callable[..., ScoringEngine]


SCORE_KINDS: Dict[ScoreKind, ScoreKindInfo] = {
    ScoreKind.BENEFIT: ScoreKindInfo(
        name=ScoreKind.BENEFIT,
        label="Benefit",
        description="Value + time-decay per selected benefit reason, weighted and halved onto 0-100",
        factors=["revenueImprovement", "costSavings", "customerImpact", "processImprovement", "internalQoL", "strategicAlignment"],
        default_weights=DEFAULT_BENEFIT_WEIGHTS,
        uses_configs=True,
        build=BenefitScoringEngine,
    ),
    ScoreKind.EFFORT: ScoreKindInfo(
        name=ScoreKind.EFFORT,
        label="Effort",
        description="Weighted average of 1-10 effort ratings x 10 (coverage and rollback inverse-scored)",
        factors=[
            "hoursEstimated", "costEstimated", "systemsAffected", "resourceRequirement", "complexity",
            "testingRequired", "documentationRequired", "urgency", "testingCoverage", "rollbackCapability",
        ],
        default_weights=DEFAULT_EFFORT_WEIGHTS,
        uses_configs=True,
        build=EffortScoringEngine,
    ),
    ScoreKind.RISK: ScoreKindInfo(
        name=ScoreKind.RISK,
        label="Risk",
        description="Weighted average of 1-10 risk ratings x 10 with low/medium/high/critical level",
        factors=[
            "impactScope", "businessCritical", "complexity", "testingCoverage", "rollbackCapability", "changeSize",
            "timeWindow", "dependencyCount", "historicalFailures", "financialImpact", "technicalRisk",
        ],
        default_weights=DEFAULT_RISK_WEIGHTS,
        uses_configs=False,
        build=RiskScoringEngine,
    ),
}


def get_engine(
    kind: ScoreKind,
    weights: Optional[FactorWeights] = None,
    configs: Optional[Mapping[str, BenefitConfig | EffortConfig]] = None,
) -> ScoringEngine:
    """Build the calculator for a score kind with the given weights and configs."""
    info = SCORE_KINDS.get(kind)
    if not info:
        raise ValueError(f"Unknown score kind: {kind}")
    if weights is not None and not isinstance(weights, type(info.default_weights)):
        raise ValueError(f"{info.label} engine expects {type(info.default_weights).__name__}, got {type(weights).__name__}")
    kwargs = {"weights": weights or info.default_weights}
    if info.uses_configs:
        kwargs["configs"] = configs
    return info.build(**kwargs)


__all__ = [
    "ScoreKindInfo",
    "SCORE_KINDS",
    "get_engine",
]
