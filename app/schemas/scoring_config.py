# change_cab_project/app/schemas/scoring_config.py

from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class BenefitConfig(BaseModel):
    """Scoring parameters for one benefit factor.

    value_for_100_points: raw value that earns a full 100 value points (0 disables value scoring)
    time_decay_per_month: points subtracted from the time score per month of timeline
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    benefit_type: str
    display_name: Optional[str] = None
    value_for_100_points: float = Field(..., ge=0)
    value_unit: str = ""
    time_decay_per_month: float = Field(0.0, ge=0)
    description: Optional[str] = None


class EffortConfig(BaseModel):
    """Converts a raw effort quantity (hours, cost, system count) into a 1-10 rating.

    When thresholds are present the rating is bucketed; otherwise the quantity
    is scaled linearly against value_for_100_points.
    """
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    effort_type: str
    display_name: Optional[str] = None
    value_for_100_points: float = Field(0.0, ge=0)
    value_unit: str = ""
    thresholds: List[float] = Field(default_factory=list)
    description: Optional[str] = None


DEFAULT_BENEFIT_CONFIGS: Dict[str, BenefitConfig] = {
    "revenueImprovement": BenefitConfig(
        benefit_type="revenueImprovement",
        display_name="Revenue Improvement",
        value_for_100_points=100000,
        value_unit="GBP",
        time_decay_per_month=5,
    ),
    "costSavings": BenefitConfig(
        benefit_type="costSavings",
        display_name="Cost Savings",
        value_for_100_points=50000,
        value_unit="GBP",
        time_decay_per_month=4,
    ),
    "customerImpact": BenefitConfig(
        benefit_type="customerImpact",
        display_name="Customer Impact",
        value_for_100_points=100,
        value_unit="customers",
        time_decay_per_month=3,
    ),
    "processImprovement": BenefitConfig(
        benefit_type="processImprovement",
        display_name="Process Improvement",
        value_for_100_points=100,
        value_unit="percentage",
        time_decay_per_month=2,
    ),
    "internalQoL": BenefitConfig(
        benefit_type="internalQoL",
        display_name="Internal Quality of Life",
        value_for_100_points=100,
        value_unit="employees",
        time_decay_per_month=2,
    ),
    "strategicAlignment": BenefitConfig(
        benefit_type="strategicAlignment",
        display_name="Strategic Alignment",
        value_for_100_points=10,
        value_unit="scale",
        time_decay_per_month=0,
    ),
}


DEFAULT_EFFORT_CONFIGS: Dict[str, EffortConfig] = {
    "hoursEstimated": EffortConfig(
        effort_type="hoursEstimated",
        display_name="Hours Estimated",
        value_for_100_points=1000,
        value_unit="hours",
        thresholds=[0, 40, 160, 400, 1000],
    ),
    "costEstimated": EffortConfig(
        effort_type="costEstimated",
        display_name="Cost Estimated",
        value_for_100_points=50000,
        value_unit="GBP",
        thresholds=[0, 1000, 5000, 20000, 50000],
    ),
    "systemsAffected": EffortConfig(
        effort_type="systemsAffected",
        display_name="Systems Affected",
        value_for_100_points=5,
        value_unit="systems",
        thresholds=[0, 1, 2, 4, 5],
    ),
}


__all__ = [
    "BenefitConfig",
    "EffortConfig",
    "DEFAULT_BENEFIT_CONFIGS",
    "DEFAULT_EFFORT_CONFIGS",
]
