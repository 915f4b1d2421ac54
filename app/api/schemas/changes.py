# change_cab_project/app/api/schemas/changes.py

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChangeCreateRequest(_CamelModel):
    title: str = Field(..., min_length=1)
    requester_id: str = Field(..., min_length=1)
    description: Optional[str] = None
    priority: Literal["low", "medium", "high", "critical"] = "medium"
    wizard_data: Dict[str, Any] = Field(default_factory=dict)
    as_draft: bool = False


class CabDecisionRequest(_CamelModel):
    # checked by ChangeRequestWorkflow.decide_cab_review
    decision: str
    reviewer_id: str = ""
    cab_assessment: Optional[Dict[str, Any]] = None
    comments: Optional[str] = None


class ScheduleRequest(_CamelModel):
    scheduled_start: datetime
    scheduled_end: datetime
    scheduling_data: Optional[Dict[str, Any]] = None


class CancelRequest(_CamelModel):
    user_id: str = Field(..., min_length=1)
    reason: Optional[str] = None


class FailRequest(_CamelModel):
    reason: Optional[str] = None


class ScoreResponse(_CamelModel):
    kind: Literal["benefit", "effort", "risk"]
    score: float
    level: Optional[str] = None
    factors: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
    warnings: List[str] = Field(default_factory=list)
