# change_cab_project/app/services/scoring_config_service.py

from __future__ import annotations

import logging
from typing import Dict, Optional, Protocol

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.config import settings
from app.db.models.scoring import BenefitScoringConfig, EffortScoringConfig
from app.schemas.scoring_config import (
    DEFAULT_BENEFIT_CONFIGS,
    DEFAULT_EFFORT_CONFIGS,
    BenefitConfig,
    EffortConfig,
)
from app.services.errors import ConfigurationError

logger = logging.getLogger("app.services.scoring_config")


class ScoringConfigSource(Protocol):
    """Read-only access to the active scoring configuration."""

    def get_active_benefit_configs(self) -> Dict[str, BenefitConfig]:  # pragma: no cover - interface only
        ...

    def get_active_effort_configs(self) -> Dict[str, EffortConfig]:  # pragma: no cover - interface only
        ...


class StaticConfigSource:
    """Config source backed by in-memory mappings (defaults unless given)."""

    def __init__(
        self,
        benefit_configs: Optional[Dict[str, BenefitConfig]] = None,
        effort_configs: Optional[Dict[str, EffortConfig]] = None,
    ):
        self.benefit_configs = dict(DEFAULT_BENEFIT_CONFIGS if benefit_configs is None else benefit_configs)
        self.effort_configs = dict(DEFAULT_EFFORT_CONFIGS if effort_configs is None else effort_configs)

    def get_active_benefit_configs(self) -> Dict[str, BenefitConfig]:
        return dict(self.benefit_configs)

    def get_active_effort_configs(self) -> Dict[str, EffortConfig]:
        return dict(self.effort_configs)


class ScoringConfigService:
    """Loads active scoring configs from the DB and seeds the defaults.

    When no active rows exist the defaults are returned if
    SCORING_CONFIG_FALLBACK_TO_DEFAULTS is on; otherwise ConfigurationError.
    """

    def __init__(self, db: Session, fallback_to_defaults: Optional[bool] = None):
        self.db = db
        if fallback_to_defaults is None:
            fallback_to_defaults = settings.SCORING_CONFIG_FALLBACK_TO_DEFAULTS
        self.fallback_to_defaults = fallback_to_defaults

    def get_active_benefit_configs(self) -> Dict[str, BenefitConfig]:
        rows = self.db.execute(
            select(BenefitScoringConfig).where(BenefitScoringConfig.is_active.is_(True))
        ).scalars().all()
        if not rows:
            return self._fallback("benefit", DEFAULT_BENEFIT_CONFIGS)
        return {row.benefit_type: BenefitConfig.model_validate(row) for row in rows}

    def get_active_effort_configs(self) -> Dict[str, EffortConfig]:
        rows = self.db.execute(
            select(EffortScoringConfig).where(EffortScoringConfig.is_active.is_(True))
        ).scalars().all()
        if not rows:
            return self._fallback("effort", DEFAULT_EFFORT_CONFIGS)
        configs: Dict[str, EffortConfig] = {}
        for row in rows:
            configs[row.effort_type] = EffortConfig(
                effort_type=row.effort_type,
                display_name=row.display_name,
                value_for_100_points=row.value_for_100_points or 0.0,
                value_unit=row.value_unit or "",
                thresholds=list(row.thresholds or []),
                description=row.description,
            )
        return configs

    def _fallback(self, kind: str, defaults: Dict) -> Dict:
        if not self.fallback_to_defaults:
            raise ConfigurationError(f"No active {kind} scoring configs and fallback to defaults is disabled")
        logger.warning("scoring_config.fallback_to_defaults", extra={"kind": kind})
        return dict(defaults)

    def seed_default_configs(self, commit: bool = True) -> int:
        """Insert default config rows that are missing. Existing rows are left as they are.

        Returns the number of rows inserted.
        """
        existing_benefit = set(self.db.execute(select(BenefitScoringConfig.benefit_type)).scalars().all())
        existing_effort = set(self.db.execute(select(EffortScoringConfig.effort_type)).scalars().all())

        inserted = 0
        for key, cfg in DEFAULT_BENEFIT_CONFIGS.items():
            if key in existing_benefit:
                continue
            self.db.add(
                BenefitScoringConfig(
                    benefit_type=cfg.benefit_type,
                    display_name=cfg.display_name or key,
                    value_for_100_points=cfg.value_for_100_points,
                    value_unit=cfg.value_unit,
                    time_decay_per_month=cfg.time_decay_per_month,
                    is_active=True,
                    description=cfg.description,
                )
            )
            inserted += 1

        for key, cfg in DEFAULT_EFFORT_CONFIGS.items():
            if key in existing_effort:
                continue
            self.db.add(
                EffortScoringConfig(
                    effort_type=cfg.effort_type,
                    display_name=cfg.display_name or key,
                    value_for_100_points=cfg.value_for_100_points,
                    value_unit=cfg.value_unit,
                    thresholds=list(cfg.thresholds),
                    is_active=True,
                    description=cfg.description,
                )
            )
            inserted += 1

        if commit:
            self.db.commit()
        else:
            self.db.flush()
        logger.info("scoring_config.seeded", extra={"count": inserted})
        return inserted


__all__ = [
    "ScoringConfigSource",
    "StaticConfigSource",
    "ScoringConfigService",
]
