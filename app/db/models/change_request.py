from datetime import datetime, timezone
from sqlalchemy import (
    Column,
    DateTime,
    Float,
    Integer,
    String,
    Text,
    JSON,
)
from sqlalchemy.orm import relationship

from app.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ChangeRequest(Base):
    __tablename__ = "change_requests"

    id = Column(Integer, primary_key=True, index=True)

    # A. Identity & requester
    request_number = Column(String(50), unique=True, index=True, nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    requester_id = Column(String(100), nullable=False, index=True)

    # B. Lifecycle & workflow
    status = Column(String(50), nullable=False, default="submitted", index=True)
    priority = Column(String(20), nullable=False, default="medium")
    submitted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
    # Operation that last updated this row (e.g. "cab.decision", "workflow.schedule")
    updated_source = Column(String(50), nullable=True)

    # C. Documents
    wizard_data = Column(JSON, nullable=True)  # WizardInput document (camelCase)
    scheduling_data = Column(JSON, nullable=True)

    # D. Scheduling
    scheduled_start = Column(DateTime(timezone=True), nullable=True)
    scheduled_end = Column(DateTime(timezone=True), nullable=True)
    actual_start = Column(DateTime(timezone=True), nullable=True)
    actual_end = Column(DateTime(timezone=True), nullable=True)

    # E. Scores (one independent group per kind)
    risk_score = Column(Float, nullable=True)
    risk_level = Column(String(20), nullable=True)
    risk_factors = Column(JSON, nullable=True)
    risk_calculated_at = Column(DateTime(timezone=True), nullable=True)

    effort_score = Column(Float, nullable=True)
    effort_level = Column(String(20), nullable=True)
    effort_factors = Column(JSON, nullable=True)
    effort_calculated_at = Column(DateTime(timezone=True), nullable=True)

    benefit_score = Column(Float, nullable=True)
    benefit_factors = Column(JSON, nullable=True)
    benefit_calculated_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    review_votes = relationship("ChangeReviewVote", back_populates="change_request", order_by="ChangeReviewVote.id")
    comments = relationship("ChangeComment", back_populates="change_request", order_by="ChangeComment.id")
    score_snapshots = relationship("ChangeScoreSnapshot", back_populates="change_request", order_by="ChangeScoreSnapshot.id")
