# change_cab_project/app/services/scoring_service.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
import logging
from typing import Any, Dict, Optional, Union

from app.schemas.wizard import WizardInput
from app.services.scoring import (
    DEFAULT_BENEFIT_WEIGHTS,
    DEFAULT_EFFORT_WEIGHTS,
    DEFAULT_RISK_WEIGHTS,
    BenefitWeights,
    EffortWeights,
    RiskWeights,
    ScoreKind,
    ScoreResult,
    get_engine,
)
from app.services.scoring_config_service import ScoringConfigSource, StaticConfigSource

logger = logging.getLogger("app.services.scoring")


@dataclass
class ChangeScores:
    """The three scores of one change request, computed together."""

    benefit: ScoreResult
    effort: ScoreResult
    risk: ScoreResult
    calculated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def results(self) -> Dict[ScoreKind, ScoreResult]:
        return {ScoreKind.BENEFIT: self.benefit, ScoreKind.EFFORT: self.effort, ScoreKind.RISK: self.risk}

    def to_update(self) -> Dict[str, Any]:
        """Partial ChangeRequest update holding all score columns."""
        ts = self.calculated_at
        return {
            "benefit_score": self.benefit.score,
            "benefit_factors": self.benefit.factors_document(),
            "benefit_calculated_at": ts,
            "effort_score": self.effort.score,
            "effort_level": self.effort.level,
            "effort_factors": self.effort.factors_document(),
            "effort_calculated_at": ts,
            "risk_score": self.risk.score,
            "risk_level": self.risk.level,
            "risk_factors": self.risk.factors_document(),
            "risk_calculated_at": ts,
        }


class ChangeScoringService:
    """Runs the benefit, effort and risk calculators on one wizard input.

    Configs come from the config source at call time so an updated config
    row applies to the next scoring run. Nothing is persisted here; callers
    write ChangeScores.to_update() through the change store.
    """

    def __init__(
        self,
        config_source: Optional[ScoringConfigSource] = None,
        benefit_weights: BenefitWeights = DEFAULT_BENEFIT_WEIGHTS,
        effort_weights: EffortWeights = DEFAULT_EFFORT_WEIGHTS,
        risk_weights: RiskWeights = DEFAULT_RISK_WEIGHTS,
    ):
        self.config_source = config_source or StaticConfigSource()
        self.benefit_weights = benefit_weights
        self.effort_weights = effort_weights
        self.risk_weights = risk_weights

    def score(self, wizard_input: Union[WizardInput, Dict[str, Any], None]) -> ChangeScores:
        w = WizardInput.coerce(wizard_input)
        benefit_configs = self.config_source.get_active_benefit_configs()
        effort_configs = self.config_source.get_active_effort_configs()

        scores = ChangeScores(
            benefit=get_engine(ScoreKind.BENEFIT, self.benefit_weights, benefit_configs).compute(w),
            effort=get_engine(ScoreKind.EFFORT, self.effort_weights, effort_configs).compute(w),
            risk=get_engine(ScoreKind.RISK, self.risk_weights).compute(w),
        )

        for kind, result in scores.results().items():
            for warn in result.warnings:
                logger.warning("scoring.warning", extra={"kind": kind.value, "warning": warn})

        logger.debug(
            "scoring.computed",
            extra={
                "benefit_score": scores.benefit.score,
                "effort_score": scores.effort.score,
                "risk_score": scores.risk.score,
            },
        )
        return scores


__all__ = ["ChangeScores", "ChangeScoringService"]
