from datetime import datetime, timezone
from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, JSON, UniqueConstraint
from sqlalchemy.orm import relationship
from app.db.base import Base


class ChangeReviewVote(Base):
    """
    CAB vote on a change request. One row per (change, reviewer): a repeat vote
    overwrites the previous one.
    """

    __tablename__ = "change_review_votes"
    __table_args__ = (UniqueConstraint("change_id", "reviewer_id", name="uq_review_vote_change_reviewer"),)

    id = Column(Integer, primary_key=True, index=True)
    change_id = Column(Integer, ForeignKey("change_requests.id"), nullable=False, index=True)
    reviewer_id = Column(String(100), nullable=False)

    vote = Column(String(20), nullable=False)  # "approve" / "reject"
    comments = Column(Text, nullable=True)
    review_data_json = Column(JSON, nullable=True)  # CAB assessment + requester's original wizard input

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    change_request = relationship("ChangeRequest", back_populates="review_votes")


class ChangeComment(Base):
    """
    Comment on a change request; internal comments are hidden from the requester.
    """

    __tablename__ = "change_comments"

    id = Column(Integer, primary_key=True, index=True)
    change_id = Column(Integer, ForeignKey("change_requests.id"), nullable=False, index=True)
    user_id = Column(String(100), nullable=False)
    text = Column(Text, nullable=False)
    is_internal = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    change_request = relationship("ChangeRequest", back_populates="comments")
