from .interfaces import (
    ScoreKind,
    RiskLevel,
    EffortLevel,
    FactorBreakdown,
    ScoreResult,
    ScoringEngine,
)
from .weights import (
    BenefitWeights,
    EffortWeights,
    RiskWeights,
    DEFAULT_BENEFIT_WEIGHTS,
    DEFAULT_EFFORT_WEIGHTS,
    DEFAULT_RISK_WEIGHTS,
)
from .engines import (
    calculate_benefit,
    calculate_effort,
    calculate_risk,
)
from .registry import (
    ScoreKindInfo,
    SCORE_KINDS,
    get_engine,
)

__all__ = [
    "ScoreKind",
    "RiskLevel",
    "EffortLevel",
    "FactorBreakdown",
    "ScoreResult",
    "ScoringEngine",
    "BenefitWeights",
    "EffortWeights",
    "RiskWeights",
    "DEFAULT_BENEFIT_WEIGHTS",
    "DEFAULT_EFFORT_WEIGHTS",
    "DEFAULT_RISK_WEIGHTS",
    "calculate_benefit",
    "calculate_effort",
    "calculate_risk",
    "ScoreKindInfo",
    "SCORE_KINDS",
    "get_engine",
]
