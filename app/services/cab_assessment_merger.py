# change_cab_project/app/services/cab_assessment_merger.py

"""
Merge a CAB reviewer's revised values into the requester's wizard input.

The merged document is what gets scored on approval. Rules:
- The original is never mutated; the result starts as a shallow copy.
- A benefit factor present in the assessment selects its change reason and
  replaces the matching detail block (assessment field names differ from the
  wizard's, see BENEFIT_FIELD_MAP).
- A scalar present in the assessment overwrites its wizard field; a scalar
  left unset never clears an existing value.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple, Type, Union

from pydantic import BaseModel

from app.schemas.cab_assessment import CabAssessment
from app.schemas.wizard import (
    CostReductionDetails,
    CustomerImpactDetails,
    InternalQoLDetails,
    ProcessImprovementDetails,
    RevenueDetails,
    WizardInput,
)

# assessment attr -> (reason attr, details attr, details model, (value, timeline, explanation) attrs)
BENEFIT_FIELD_MAP: Dict[str, Tuple[str, str, Type[BaseModel], Tuple[str, str, str]]] = {
    "revenue_improvement": (
        "revenue_improvement",
        "revenue_details",
        RevenueDetails,
        ("expected_revenue", "revenue_timeline", "revenue_description"),
    ),
    "cost_savings": (
        "cost_reduction",
        "cost_reduction_details",
        CostReductionDetails,
        ("expected_savings", "savings_timeline", "savings_description"),
    ),
    "customer_impact": (
        "customer_impact",
        "customer_impact_details",
        CustomerImpactDetails,
        ("customers_affected", "impact_timeline", "impact_description"),
    ),
    "process_improvement": (
        "process_improvement",
        "process_improvement_details",
        ProcessImprovementDetails,
        ("expected_efficiency", "improvement_timeline", "process_description"),
    ),
    "internal_qol": (
        "internal_qol",
        "internal_qol_details",
        InternalQoLDetails,
        ("users_affected", "qol_timeline", "expected_improvements"),
    ),
}

# assessment attr -> wizard attr
SCALAR_FIELD_MAP: Dict[str, str] = {
    "hours_estimated": "estimated_effort_hours",
    "cost_estimated": "estimated_cost",
    "resource_requirement": "resource_requirement",
    "complexity": "complexity",
    "systems_affected": "systems_affected_count",
    "testing_required": "testing_required",
    "documentation_required": "documentation_required",
    "urgency": "urgency",
    "impacted_users": "impacted_users",
    "dependencies": "dependencies",
    "strategic_alignment": "strategic_alignment",
    "technical_risk": "technical_risk",
    "business_risk": "business_risk",
    "rollback_capability": "rollback_capability",
    "testing_coverage": "testing_coverage",
}


def _as_assessment(cab_assessment: Union[CabAssessment, Dict[str, Any], None]) -> CabAssessment:
    if isinstance(cab_assessment, CabAssessment):
        return cab_assessment
    return CabAssessment.model_validate(cab_assessment or {})


def _clean_number(value: Any) -> Any:
    # 1200.0 -> 1200 so merged documents read like the wizard's own
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def merge_assessment(
    original_wizard_input: Union[WizardInput, Dict[str, Any], None],
    cab_assessment: Union[CabAssessment, Dict[str, Any], None],
) -> WizardInput:
    """Return the wizard input with the CAB assessment applied.

    Raises pydantic.ValidationError when a dict assessment holds invalid values.
    """
    original = WizardInput.coerce(original_wizard_input)
    assessment = _as_assessment(cab_assessment)
    supplied = assessment.model_fields_set

    updates: Dict[str, Any] = {}
    reason_updates: Dict[str, bool] = {}

    for field, (reason, details_attr, details_model, attrs) in BENEFIT_FIELD_MAP.items():
        factor = getattr(assessment, field)
        if field not in supplied or factor is None:
            continue
        value_attr, timeline_attr, explanation_attr = attrs
        reason_updates[reason] = True
        updates[details_attr] = details_model(
            **{
                value_attr: _clean_number(factor.raw_value),
                timeline_attr: factor.raw_timeline,
                explanation_attr: factor.explanation,
            }
        )

    for field, wizard_attr in SCALAR_FIELD_MAP.items():
        value = getattr(assessment, field)
        if field not in supplied or value is None:
            continue
        updates[wizard_attr] = _clean_number(value) if not isinstance(value, list) else list(value)

    systems: Optional[list] = assessment.systems_affected_list
    if "systems_affected_list" in supplied and systems is not None:
        updates["systems_affected"] = list(systems)
        updates["systems_affected_count"] = len(systems)

    if reason_updates:
        # Copy the reasons block rather than mutating the one shared with the original
        updates["change_reasons"] = original.change_reasons.model_copy(update=reason_updates)

    if not updates:
        return original.model_copy()
    return original.model_copy(update=updates)


__all__ = ["BENEFIT_FIELD_MAP", "SCALAR_FIELD_MAP", "merge_assessment"]
