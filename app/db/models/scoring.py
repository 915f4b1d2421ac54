from datetime import datetime, timezone
from sqlalchemy import Boolean, Column, DateTime, Float, ForeignKey, Integer, String, Text, JSON
from sqlalchemy.orm import relationship
from app.db.base import Base


class BenefitScoringConfig(Base):
    """
    Benefit factor scoring parameters; only rows with is_active=True are used.
    """

    __tablename__ = "benefit_scoring_config"

    id = Column(Integer, primary_key=True, index=True)
    benefit_type = Column(String(50), unique=True, index=True, nullable=False)  # e.g. "revenueImprovement"
    display_name = Column(String(100), nullable=False)
    value_for_100_points = Column(Float, nullable=False)
    value_unit = Column(String(30), nullable=False, default="")
    time_decay_per_month = Column(Float, nullable=False, default=0.0)
    is_active = Column(Boolean, nullable=False, default=True)
    description = Column(Text, nullable=True)

    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))


class EffortScoringConfig(Base):
    """
    Effort quantity -> rating parameters; thresholds is a JSON list of floats.
    """

    __tablename__ = "effort_scoring_config"

    id = Column(Integer, primary_key=True, index=True)
    effort_type = Column(String(50), unique=True, index=True, nullable=False)  # e.g. "hoursEstimated"
    display_name = Column(String(100), nullable=False)
    value_for_100_points = Column(Float, nullable=False, default=0.0)
    value_unit = Column(String(30), nullable=False, default="")
    thresholds = Column(JSON, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    description = Column(Text, nullable=True)

    updated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))


class ChangeScoreSnapshot(Base):
    """
    Optional scoring history table (per kind / per calculation).
    """

    __tablename__ = "change_score_snapshots"

    id = Column(Integer, primary_key=True, index=True)
    change_id = Column(Integer, ForeignKey("change_requests.id"), nullable=False, index=True)

    kind = Column(String(20), nullable=False)  # "benefit" / "effort" / "risk"
    score = Column(Float, nullable=False)
    level = Column(String(20), nullable=True)

    inputs_json = Column(JSON, nullable=True)  # wizard input that was scored
    factors_json = Column(JSON, nullable=True)  # per-factor breakdown
    warnings_json = Column(JSON, nullable=True)
    source = Column(String(50), nullable=True)  # operation that triggered scoring

    calculated_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    change_request = relationship("ChangeRequest", back_populates="score_snapshots")
