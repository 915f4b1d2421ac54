# change_cab_project/app/services/scoring/interfaces.py

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Optional, Protocol

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.schemas.wizard import WizardInput


class ScoreKind(str, Enum):
    """The three independent scores kept on a change request."""
    BENEFIT = "benefit"
    EFFORT = "effort"
    RISK = "risk"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class EffortLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very_high"


class FactorBreakdown(BaseModel):
    """Per-factor audit record.

    Benefit factors fill raw_value/raw_timeline/value_score/time_score/combined_score;
    rating factors (effort, risk) fill raw_value/effective_value. Every factor
    carries the weight applied and the resulting weighted_score.
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    raw_value: Optional[float] = None
    raw_timeline: Optional[int] = None
    explanation: Optional[str] = None
    value_score: Optional[float] = None
    time_score: Optional[float] = None
    combined_score: Optional[float] = None
    effective_value: Optional[float] = None
    weight: float
    weighted_score: float


class ScoreResult(BaseModel):
    """Result returned by a calculator.

    score: normalized 0-100 score
    level: discrete classification (effort and risk only)
    factors: breakdown of every factor that contributed, keyed by factor name
    warnings: non-fatal computation notes (e.g. factor skipped for missing config)
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    kind: ScoreKind
    score: float = Field(..., ge=0, le=100)
    level: Optional[str] = None
    factors: Dict[str, FactorBreakdown] = Field(default_factory=dict)
    warnings: List[str] = Field(default_factory=list)

    def factors_document(self) -> Dict[str, dict]:
        """Factors as the JSON-shaped document persisted next to the score."""
        return {
            name: factor.model_dump(by_alias=True, exclude_none=True)
            for name, factor in self.factors.items()
        }


class ScoringEngine(Protocol):
    """Protocol that all calculators satisfy."""

    kind: ScoreKind

    def compute(self, wizard_input: WizardInput) -> ScoreResult:  # pragma: no cover - interface only
        ...


__all__ = [
    "ScoreKind",
    "RiskLevel",
    "EffortLevel",
    "FactorBreakdown",
    "ScoreResult",
    "ScoringEngine",
]
