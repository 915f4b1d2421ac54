# change_cab_project/app/schemas/wizard.py

"""
Wizard input document submitted with a change request.

The stored document is camelCase JSON produced by the request wizard; field
aliases below match it exactly. Unknown keys are kept so a document can be
loaded, merged and written back without losing anything.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, List, Mapping, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator


def _scalar_or_none(v: Any) -> Any:
    # Lists, dicts and other structures cannot be read as a number
    return v if isinstance(v, (int, float, str)) else None


def _text_or_none(v: Any) -> Optional[str]:
    if v is None or isinstance(v, str):
        return v
    return str(v)


RawNumber = Annotated[Optional[Union[int, float, str]], BeforeValidator(_scalar_or_none)]
Text = Annotated[Optional[str], BeforeValidator(_text_or_none)]


class UrgencyLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class _WizardModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class ChangeReasons(_WizardModel):
    revenue_improvement: bool = Field(False, alias="revenueImprovement")
    cost_reduction: bool = Field(False, alias="costReduction")
    customer_impact: bool = Field(False, alias="customerImpact")
    process_improvement: bool = Field(False, alias="processImprovement")
    internal_qol: bool = Field(False, alias="internalQoL")
    risk_reduction: bool = Field(False, alias="riskReduction")

    @field_validator("*", mode="before")
    @classmethod
    def _to_flag(cls, v: Any) -> bool:
        if isinstance(v, str):
            return v.strip().lower() in {"true", "yes", "y", "1", "on"}
        return bool(v)


class RevenueDetails(_WizardModel):
    expected_revenue: Optional[RawNumber] = Field(None, alias="expectedRevenue")
    revenue_timeline: Optional[RawNumber] = Field(None, alias="revenueTimeline")
    revenue_description: Text = Field(None, alias="revenueDescription")


class CostReductionDetails(_WizardModel):
    expected_savings: Optional[RawNumber] = Field(None, alias="expectedSavings")
    savings_timeline: Optional[RawNumber] = Field(None, alias="savingsTimeline")
    savings_description: Text = Field(None, alias="savingsDescription")


class CustomerImpactDetails(_WizardModel):
    customers_affected: Optional[RawNumber] = Field(None, alias="customersAffected")
    impact_timeline: Optional[RawNumber] = Field(None, alias="impactTimeline")
    impact_description: Text = Field(None, alias="impactDescription")


class ProcessImprovementDetails(_WizardModel):
    expected_efficiency: Optional[RawNumber] = Field(None, alias="expectedEfficiency")
    improvement_timeline: Optional[RawNumber] = Field(None, alias="improvementTimeline")
    process_description: Text = Field(None, alias="processDescription")


class InternalQoLDetails(_WizardModel):
    users_affected: Optional[RawNumber] = Field(None, alias="usersAffected")
    qol_timeline: Optional[RawNumber] = Field(None, alias="qolTimeline")
    expected_improvements: Text = Field(None, alias="expectedImprovements")


_DETAIL_BLOCK_ALIASES = (
    "revenueDetails",
    "costReductionDetails",
    "customerImpactDetails",
    "processImprovementDetails",
    "internalQoLDetails",
)


class WizardInput(_WizardModel):
    change_reasons: ChangeReasons = Field(default_factory=ChangeReasons, alias="changeReasons")

    # Per-reason detail blocks
    revenue_details: Optional[RevenueDetails] = Field(None, alias="revenueDetails")
    cost_reduction_details: Optional[CostReductionDetails] = Field(None, alias="costReductionDetails")
    customer_impact_details: Optional[CustomerImpactDetails] = Field(None, alias="customerImpactDetails")
    process_improvement_details: Optional[ProcessImprovementDetails] = Field(None, alias="processImprovementDetails")
    internal_qol_details: Optional[InternalQoLDetails] = Field(None, alias="internalQoLDetails")

    # Impact
    impacted_users: Optional[RawNumber] = Field(None, alias="impactedUsers")
    systems_affected: Optional[List[str]] = Field(None, alias="systemsAffected")
    systems_affected_count: Optional[int] = Field(None, alias="systemsAffectedCount")
    estimated_effort_hours: Optional[RawNumber] = Field(None, alias="estimatedEffortHours")
    estimated_cost: Optional[RawNumber] = Field(None, alias="estimatedCost")
    departments: Optional[List[str]] = None
    dependencies: Optional[List[str]] = None
    urgency_level: Optional[UrgencyLevel] = Field(None, alias="urgencyLevel")

    # Ratings (1-10)
    resource_requirement: Optional[RawNumber] = Field(None, alias="resourceRequirement")
    team_size: Optional[RawNumber] = Field(None, alias="teamSize")  # legacy name for resourceRequirement
    complexity: Optional[RawNumber] = None
    testing_required: Optional[RawNumber] = Field(None, alias="testingRequired")
    documentation_required: Optional[RawNumber] = Field(None, alias="documentationRequired")
    urgency: Optional[RawNumber] = None
    testing_coverage: Optional[RawNumber] = Field(None, alias="testingCoverage")
    rollback_capability: Optional[RawNumber] = Field(None, alias="rollbackCapability")
    technical_risk: Optional[RawNumber] = Field(None, alias="technicalRisk")
    business_risk: Optional[RawNumber] = Field(None, alias="businessRisk")
    strategic_alignment: Optional[RawNumber] = Field(None, alias="strategicAlignment")

    @model_validator(mode="before")
    @classmethod
    def _drop_malformed_blocks(cls, data: Any) -> Any:
        # Calculators must not fail on a bad document; a detail block that is not
        # a mapping is treated as absent.
        if not isinstance(data, dict):
            return data
        cleaned = dict(data)
        for key in _DETAIL_BLOCK_ALIASES + ("changeReasons",):
            if key in cleaned and cleaned[key] is not None and not isinstance(cleaned[key], (dict, BaseModel)):
                cleaned.pop(key)
        for key in ("systemsAffected", "departments", "dependencies"):
            if key in cleaned and cleaned[key] is not None and not isinstance(cleaned[key], list):
                cleaned.pop(key)
        if cleaned.get("changeReasons", ...) is None:
            cleaned.pop("changeReasons")
        return cleaned

    @field_validator("urgency_level", mode="before")
    @classmethod
    def _unknown_urgency_is_none(cls, v: Any) -> Any:
        if v is None or isinstance(v, UrgencyLevel):
            return v
        s = str(v).strip().lower()
        return s if s in {u.value for u in UrgencyLevel} else None

    @field_validator("systems_affected", "departments", "dependencies", mode="before")
    @classmethod
    def _stringify_items(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [str(item) for item in v if item is not None]
        return v

    @field_validator("systems_affected_count", mode="before")
    @classmethod
    def _count_or_none(cls, v: Any) -> Any:
        try:
            return None if v is None else int(float(v))
        except (TypeError, ValueError):
            return None

    @classmethod
    def coerce(cls, data: Union["WizardInput", dict, None]) -> "WizardInput":
        """Accept a model instance, a stored JSON document or None."""
        if isinstance(data, WizardInput):
            return data
        if not isinstance(data, Mapping):
            data = {}
        return cls.model_validate(dict(data))

    def to_document(self) -> dict:
        """Serialize back to the stored camelCase document (only fields that were set)."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


__all__ = [
    "UrgencyLevel",
    "ChangeReasons",
    "RevenueDetails",
    "CostReductionDetails",
    "CustomerImpactDetails",
    "ProcessImprovementDetails",
    "InternalQoLDetails",
    "WizardInput",
]
