# change_cab_project/app/services/scoring/weights.py

"""
Factor weights for the three calculators.

Weights are immutable value objects passed explicitly into each calculation.
They need not sum to 1: every calculator divides by the sum of the weights it
actually applied, so skipped factors never require renormalization.
"""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

W = TypeVar("W", bound="FactorWeights")


class FactorWeights(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True, extra="forbid")

    def weight_for(self, factor: str) -> float:
        """Weight by factor name (camelCase, as used in breakdowns) or field name."""
        for name, info in type(self).model_fields.items():
            if factor in (name, info.alias):
                return getattr(self, name)
        raise KeyError(f"Unknown factor: {factor}")

    def with_overrides(self: W, **overrides: float) -> W:
        """Copy with some weights replaced (validated). Keys may be factor names or field names."""
        by_alias = {info.alias: name for name, info in type(self).model_fields.items() if info.alias}
        data = self.model_dump()
        for key, value in overrides.items():
            data[by_alias.get(key, key)] = value
        return type(self).model_validate(data)

    @classmethod
    def from_mapping(cls: type[W], mapping: Mapping[str, Any] | None) -> W:
        """Defaults overlaid with a caller mapping (camelCase or snake_case keys)."""
        return cls.model_validate(dict(mapping or {}))


class BenefitWeights(FactorWeights):
    revenue_improvement: float = Field(0.25, ge=0)
    cost_savings: float = Field(0.20, ge=0)
    customer_impact: float = Field(0.15, ge=0)
    process_improvement: float = Field(0.10, ge=0)
    internal_qol: float = Field(0.10, ge=0, alias="internalQoL")
    strategic_alignment: float = Field(0.05, ge=0)


class EffortWeights(FactorWeights):
    hours_estimated: float = Field(2.0, ge=0)
    cost_estimated: float = Field(1.8, ge=0)
    resource_requirement: float = Field(1.5, ge=0)
    complexity: float = Field(1.6, ge=0)
    systems_affected: float = Field(1.3, ge=0)
    testing_required: float = Field(1.2, ge=0)
    documentation_required: float = Field(1.0, ge=0)
    urgency: float = Field(1.8, ge=0)
    testing_coverage: float = Field(1.2, ge=0)
    rollback_capability: float = Field(1.4, ge=0)


class RiskWeights(FactorWeights):
    impact_scope: float = Field(1.5, ge=0)
    business_critical: float = Field(1.8, ge=0)
    complexity: float = Field(1.3, ge=0)
    testing_coverage: float = Field(1.2, ge=0)
    rollback_capability: float = Field(1.4, ge=0)
    change_size: float = Field(1.1, ge=0)
    time_window: float = Field(1.0, ge=0)
    dependency_count: float = Field(1.2, ge=0)
    historical_failures: float = Field(1.6, ge=0)
    financial_impact: float = Field(1.7, ge=0)
    technical_risk: float = Field(1.5, ge=0)


DEFAULT_BENEFIT_WEIGHTS = BenefitWeights()
DEFAULT_EFFORT_WEIGHTS = EffortWeights()
DEFAULT_RISK_WEIGHTS = RiskWeights()


__all__ = [
    "FactorWeights",
    "BenefitWeights",
    "EffortWeights",
    "RiskWeights",
    "DEFAULT_BENEFIT_WEIGHTS",
    "DEFAULT_EFFORT_WEIGHTS",
    "DEFAULT_RISK_WEIGHTS",
]
