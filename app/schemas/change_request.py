from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class ChangeStatus(str, Enum):
    DRAFT = "draft"
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    APPROVED = "approved"
    REJECTED = "rejected"
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"


TERMINAL_STATUSES = frozenset(
    {ChangeStatus.COMPLETED, ChangeStatus.REJECTED, ChangeStatus.CANCELLED, ChangeStatus.FAILED}
)


class CabDecision(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


class ChangePriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ChangeCommentRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    text: str
    is_internal: bool
    created_at: datetime


class ChangeReviewVoteRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    reviewer_id: str
    vote: str
    comments: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ChangeRequestRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    request_number: str
    title: str
    description: Optional[str] = None
    requester_id: str
    status: str
    priority: str

    wizard_data: Optional[Dict[str, Any]] = None
    scheduling_data: Optional[Dict[str, Any]] = None

    submitted_at: Optional[datetime] = None
    scheduled_start: Optional[datetime] = None
    scheduled_end: Optional[datetime] = None
    actual_start: Optional[datetime] = None
    actual_end: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    risk_score: Optional[float] = None
    risk_level: Optional[str] = None
    risk_factors: Optional[Dict[str, Any]] = None
    risk_calculated_at: Optional[datetime] = None

    effort_score: Optional[float] = None
    effort_level: Optional[str] = None
    effort_factors: Optional[Dict[str, Any]] = None
    effort_calculated_at: Optional[datetime] = None

    benefit_score: Optional[float] = None
    benefit_factors: Optional[Dict[str, Any]] = None
    benefit_calculated_at: Optional[datetime] = None

    review_votes: List[ChangeReviewVoteRead] = []
    comments: List[ChangeCommentRead] = []
