# change_cab_project/app/services/change_store.py

"""
Persistence collaborator for the change workflow.

ChangeStore is the interface the workflow depends on; SqlChangeStore
implements it on a SQLAlchemy session. Store methods only flush: the
workflow groups them inside unit_of_work(), which commits once or rolls
everything back.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional, Protocol

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.config import settings
from app.db.models.change_request import ChangeRequest
from app.db.models.review import ChangeComment, ChangeReviewVote
from app.db.models.scoring import ChangeScoreSnapshot
from app.schemas.change_request import TERMINAL_STATUSES
from app.services.errors import InvalidStateError, NotFoundError
from app.services.scoring.interfaces import ScoreResult

logger = logging.getLogger("app.services.change_store")

# Columns a terminal request keeps for audit
PROTECTED_FIELDS = frozenset(
    {
        "wizard_data",
        "risk_score", "risk_level", "risk_factors", "risk_calculated_at",
        "effort_score", "effort_level", "effort_factors", "effort_calculated_at",
        "benefit_score", "benefit_factors", "benefit_calculated_at",
    }
)

UPDATABLE_FIELDS = PROTECTED_FIELDS | {
    "title",
    "description",
    "status",
    "priority",
    "scheduling_data",
    "submitted_at",
    "scheduled_start",
    "scheduled_end",
    "actual_start",
    "actual_end",
    "updated_source",
}


class ChangeStore(Protocol):
    """Operations the workflow needs from persistence."""

    def unit_of_work(self) -> Any:  # pragma: no cover - interface only
        ...

    def find_change_by_id(self, change_id: int) -> Optional[ChangeRequest]:  # pragma: no cover
        ...

    def create_change_request(self, **fields: Any) -> ChangeRequest:  # pragma: no cover
        ...

    def save_change_request(self, change_id: int, partial_update: Dict[str, Any]) -> ChangeRequest:  # pragma: no cover
        ...

    def append_review_vote(
        self,
        change_id: int,
        reviewer_id: str,
        vote: str,
        comments: Optional[str],
        review_data: Optional[Dict[str, Any]],
    ) -> ChangeReviewVote:  # pragma: no cover
        ...

    def append_comment(self, change_id: int, user_id: str, text: str, is_internal: bool) -> ChangeComment:  # pragma: no cover
        ...

    def record_score_snapshot(
        self,
        change_id: int,
        result: ScoreResult,
        inputs: Optional[Dict[str, Any]],
        source: Optional[str],
        calculated_at: datetime,
    ) -> Optional[ChangeScoreSnapshot]:  # pragma: no cover
        ...


class SqlChangeStore:
    """SQLAlchemy implementation of ChangeStore."""

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def unit_of_work(self) -> Iterator[Session]:
        """Commit everything done inside the block once, or roll it all back."""
        try:
            yield self.db
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def find_change_by_id(self, change_id: int) -> Optional[ChangeRequest]:
        return self.db.get(ChangeRequest, change_id)

    def _get_or_raise(self, change_id: int) -> ChangeRequest:
        change = self.find_change_by_id(change_id)
        if change is None:
            raise NotFoundError("ChangeRequest", change_id)
        return change

    def _next_request_number(self) -> str:
        year = datetime.now(timezone.utc).year
        prefix = f"{settings.REQUEST_NUMBER_PREFIX}-{year}-"
        count = self.db.execute(
            select(func.count(ChangeRequest.id)).where(ChangeRequest.request_number.like(f"{prefix}%"))
        ).scalar_one()
        return f"{prefix}{count + 1:04d}"

    def create_change_request(self, **fields: Any) -> ChangeRequest:
        change = ChangeRequest(request_number=self._next_request_number(), **fields)
        self.db.add(change)
        self.db.flush()
        logger.debug(
            "change_store.created",
            extra={"change_id": change.id, "request_number": change.request_number},
        )
        return change

    def save_change_request(self, change_id: int, partial_update: Dict[str, Any]) -> ChangeRequest:
        """Apply a partial update. Terminal requests keep their wizard data and scores."""
        change = self._get_or_raise(change_id)

        unknown = set(partial_update) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown change request fields: {', '.join(sorted(unknown))}")

        if change.status in TERMINAL_STATUSES and PROTECTED_FIELDS & set(partial_update):
            raise InvalidStateError(change_id, change.status, "overwrite scores or wizard data of")

        for key, value in partial_update.items():
            setattr(change, key, value)
        self.db.flush()
        return change

    def append_review_vote(
        self,
        change_id: int,
        reviewer_id: str,
        vote: str,
        comments: Optional[str],
        review_data: Optional[Dict[str, Any]],
    ) -> ChangeReviewVote:
        """Record a reviewer's vote; a repeat vote by the same reviewer replaces the earlier one."""
        existing = self.db.execute(
            select(ChangeReviewVote).where(
                ChangeReviewVote.change_id == change_id,
                ChangeReviewVote.reviewer_id == reviewer_id,
            )
        ).scalar_one_or_none()

        if existing is not None:
            existing.vote = vote
            existing.comments = comments
            existing.review_data_json = review_data
            row = existing
        else:
            row = ChangeReviewVote(
                change_id=change_id,
                reviewer_id=reviewer_id,
                vote=vote,
                comments=comments,
                review_data_json=review_data,
            )
            self.db.add(row)
        self.db.flush()
        return row

    def append_comment(self, change_id: int, user_id: str, text: str, is_internal: bool) -> ChangeComment:
        row = ChangeComment(change_id=change_id, user_id=user_id, text=text, is_internal=is_internal)
        self.db.add(row)
        self.db.flush()
        return row

    def record_score_snapshot(
        self,
        change_id: int,
        result: ScoreResult,
        inputs: Optional[Dict[str, Any]],
        source: Optional[str],
        calculated_at: datetime,
    ) -> Optional[ChangeScoreSnapshot]:
        """Write a history row when SCORING_ENABLE_HISTORY is on."""
        if not settings.SCORING_ENABLE_HISTORY:
            return None
        row = ChangeScoreSnapshot(
            change_id=change_id,
            kind=result.kind.value,
            score=result.score,
            level=result.level,
            inputs_json=inputs,
            factors_json=result.factors_document(),
            warnings_json=list(result.warnings),
            source=source,
            calculated_at=calculated_at,
        )
        self.db.add(row)
        self.db.flush()
        return row


__all__ = [
    "PROTECTED_FIELDS",
    "ChangeStore",
    "SqlChangeStore",
]
