# change_cab_project/app/services/scoring/engines/__init__.py

from .benefit import BenefitScoringEngine, calculate_benefit
from .effort import EffortScoringEngine, calculate_effort
from .risk import RiskScoringEngine, calculate_risk

__all__ = [
    "BenefitScoringEngine",
    "EffortScoringEngine",
    "RiskScoringEngine",
    "calculate_benefit",
    "calculate_effort",
    "calculate_risk",
]
