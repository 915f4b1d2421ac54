# change_cab_project/app/schemas/cab_assessment.py

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class BenefitFactorAssessment(BaseModel):
    """CAB-revised value for one benefit factor."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    raw_value: Optional[Union[float, str]] = Field(None, alias="rawValue")
    raw_timeline: Optional[Union[int, str]] = Field(None, alias="rawTimeline")
    explanation: Optional[str] = None


class CabAssessment(BaseModel):
    """Values revised by a CAB reviewer before the request is scored.

    Every field is optional; a field left unset keeps the requester's value.
    Numeric overrides must be numbers (a non-numeric rating fails validation).
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    # Benefit factors
    revenue_improvement: Optional[BenefitFactorAssessment] = Field(None, alias="revenueImprovement")
    cost_savings: Optional[BenefitFactorAssessment] = Field(None, alias="costSavings")
    customer_impact: Optional[BenefitFactorAssessment] = Field(None, alias="customerImpact")
    process_improvement: Optional[BenefitFactorAssessment] = Field(None, alias="processImprovement")
    internal_qol: Optional[BenefitFactorAssessment] = Field(None, alias="internalQoL")

    # Effort factors
    hours_estimated: Optional[float] = Field(None, alias="hoursEstimated", ge=0)
    cost_estimated: Optional[float] = Field(None, alias="costEstimated", ge=0)
    resource_requirement: Optional[float] = Field(None, alias="resourceRequirement", ge=1, le=10)
    complexity: Optional[float] = Field(None, ge=1, le=10)
    systems_affected: Optional[int] = Field(None, alias="systemsAffected", ge=0)
    testing_required: Optional[float] = Field(None, alias="testingRequired", ge=1, le=10)
    documentation_required: Optional[float] = Field(None, alias="documentationRequired", ge=1, le=10)
    urgency: Optional[float] = Field(None, ge=1, le=10)

    # Impact
    impacted_users: Optional[int] = Field(None, alias="impactedUsers", ge=0)
    systems_affected_list: Optional[List[str]] = Field(None, alias="systemsAffectedList")
    dependencies: Optional[List[str]] = None

    # Risk factors
    technical_risk: Optional[float] = Field(None, alias="technicalRisk", ge=1, le=10)
    business_risk: Optional[float] = Field(None, alias="businessRisk", ge=1, le=10)
    rollback_capability: Optional[float] = Field(None, alias="rollbackCapability", ge=1, le=10)
    testing_coverage: Optional[float] = Field(None, alias="testingCoverage", ge=1, le=10)

    # Strategic
    strategic_alignment: Optional[float] = Field(None, alias="strategicAlignment", ge=1, le=10)

    cab_comments: Optional[str] = Field(None, alias="cabComments")


__all__ = ["BenefitFactorAssessment", "CabAssessment"]
