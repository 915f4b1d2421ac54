# change_cab_project/app/services/change_workflow.py

"""
Change request lifecycle and the CAB decision.

    draft -> submitted -> under_review -> approved | rejected
    submitted -> approved | rejected
    approved -> scheduled -> in_progress -> completed | failed
    any non-terminal -> cancelled

Every transition goes through ALLOWED_TRANSITIONS. The CAB decision records
the reviewer's vote, and on approval merges the CAB assessment into the
wizard input and rescores it, all inside a single unit of work.
"""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Any, Dict, FrozenSet, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from app.config import settings
from app.db.models.change_request import ChangeRequest
from app.schemas.cab_assessment import CabAssessment
from app.schemas.change_request import TERMINAL_STATUSES, CabDecision, ChangePriority, ChangeStatus
from app.schemas.wizard import WizardInput
from app.services.cab_assessment_merger import merge_assessment
from app.services.change_store import ChangeStore
from app.services.errors import InvalidStateError, NotFoundError, ValidationError
from app.services.scoring_config_service import ScoringConfigSource
from app.services.scoring_service import ChangeScores, ChangeScoringService
from app.utils.provenance import Provenance, token

logger = logging.getLogger("app.services.change_workflow")


ALLOWED_TRANSITIONS: Dict[ChangeStatus, FrozenSet[ChangeStatus]] = {
    ChangeStatus.DRAFT: frozenset({ChangeStatus.SUBMITTED, ChangeStatus.CANCELLED}),
    ChangeStatus.SUBMITTED: frozenset(
        {ChangeStatus.UNDER_REVIEW, ChangeStatus.APPROVED, ChangeStatus.REJECTED, ChangeStatus.CANCELLED}
    ),
    ChangeStatus.UNDER_REVIEW: frozenset({ChangeStatus.APPROVED, ChangeStatus.REJECTED, ChangeStatus.CANCELLED}),
    ChangeStatus.APPROVED: frozenset({ChangeStatus.SCHEDULED, ChangeStatus.CANCELLED}),
    ChangeStatus.SCHEDULED: frozenset({ChangeStatus.IN_PROGRESS, ChangeStatus.CANCELLED}),
    ChangeStatus.IN_PROGRESS: frozenset({ChangeStatus.COMPLETED, ChangeStatus.FAILED, ChangeStatus.CANCELLED}),
    ChangeStatus.COMPLETED: frozenset(),
    ChangeStatus.REJECTED: frozenset(),
    ChangeStatus.CANCELLED: frozenset(),
    ChangeStatus.FAILED: frozenset(),
}

REVIEW_ELIGIBLE_STATUSES = frozenset({ChangeStatus.SUBMITTED, ChangeStatus.UNDER_REVIEW})


def can_transition(from_status: Union[str, ChangeStatus], to_status: Union[str, ChangeStatus]) -> bool:
    try:
        current = ChangeStatus(from_status)
        target = ChangeStatus(to_status)
    except ValueError:
        return False
    return target in ALLOWED_TRANSITIONS[current]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _validation_message(exc: PydanticValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts)


class ChangeRequestWorkflow:
    """Drives change requests through their lifecycle.

    The store owns persistence and transactions; the config source supplies the
    active scoring configs read at decision time.
    """

    def __init__(
        self,
        store: ChangeStore,
        config_source: Optional[ScoringConfigSource] = None,
        scoring_service: Optional[ChangeScoringService] = None,
    ):
        self.store = store
        self.scoring = scoring_service or ChangeScoringService(config_source)

    # ---------- helpers ----------

    def _load(self, change_id: int) -> ChangeRequest:
        change = self.store.find_change_by_id(change_id)
        if change is None:
            raise NotFoundError("ChangeRequest", change_id)
        return change

    def _require_transition(self, change: ChangeRequest, target: ChangeStatus, operation: str) -> ChangeStatus:
        current = change.status
        if not can_transition(current, target):
            raise InvalidStateError(change.id, current, operation)
        return ChangeStatus(current)

    def _transition(
        self,
        change_id: int,
        target: ChangeStatus,
        operation: str,
        prov: Provenance,
        extra_update: Optional[Dict[str, Any]] = None,
    ) -> ChangeRequest:
        with self.store.unit_of_work():
            change = self._load(change_id)
            previous = self._require_transition(change, target, operation)
            update: Dict[str, Any] = {"status": target.value, "updated_source": token(prov)}
            if extra_update:
                update.update(extra_update)
            change = self.store.save_change_request(change_id, update)

        logger.info(
            "workflow.transition",
            extra={"change_id": change_id, "from_status": previous.value, "to_status": target.value},
        )
        return change

    def _persist_scores(self, change_id: int, scores: ChangeScores, inputs: Dict[str, Any], prov: Provenance) -> None:
        for result in scores.results().values():
            self.store.record_score_snapshot(change_id, result, inputs, token(prov), scores.calculated_at)

    # ---------- submission ----------

    def submit_change_request(
        self,
        title: str,
        requester_id: str,
        wizard_input: Union[WizardInput, Dict[str, Any], None] = None,
        description: Optional[str] = None,
        priority: Union[str, ChangePriority] = ChangePriority.MEDIUM,
        as_draft: bool = False,
    ) -> ChangeRequest:
        """Create a change request, submitted unless as_draft is set."""
        if not title or not title.strip():
            raise ValidationError("title is required", field="title")
        if not requester_id:
            raise ValidationError("requester_id is required", field="requester_id")
        try:
            priority_value = ChangePriority(priority).value
        except ValueError:
            raise ValidationError(f"Unknown priority: {priority}", field="priority") from None
        try:
            document = WizardInput.coerce(wizard_input).to_document()
        except PydanticValidationError as exc:
            raise ValidationError(_validation_message(exc), field="wizard_input") from exc

        status = ChangeStatus.DRAFT if as_draft else ChangeStatus.SUBMITTED
        with self.store.unit_of_work():
            change = self.store.create_change_request(
                title=title.strip(),
                description=description,
                requester_id=requester_id,
                status=status.value,
                priority=priority_value,
                wizard_data=document,
                submitted_at=None if as_draft else _utcnow(),
                updated_source=token(Provenance.WORKFLOW_CREATE),
            )

        logger.info(
            "workflow.created",
            extra={"change_id": change.id, "request_number": change.request_number, "to_status": status.value},
        )
        return change

    def submit(self, change_id: int) -> ChangeRequest:
        return self._transition(
            change_id,
            ChangeStatus.SUBMITTED,
            "submit",
            Provenance.WORKFLOW_SUBMIT,
            {"submitted_at": _utcnow()},
        )

    def begin_review(self, change_id: int) -> ChangeRequest:
        return self._transition(change_id, ChangeStatus.UNDER_REVIEW, "begin review of", Provenance.WORKFLOW_BEGIN_REVIEW)

    # ---------- CAB decision ----------

    def decide_cab_review(
        self,
        change_id: int,
        decision: Union[str, CabDecision],
        cab_assessment: Union[CabAssessment, Mapping[str, Any], None],
        comments: Optional[str],
        reviewer_id: str,
    ) -> ChangeRequest:
        """Record a CAB reviewer's decision.

        approve merges the assessment into the wizard input, rescores it and
        moves the request to approved. reject moves it to rejected and leaves
        wizard data and scores untouched. The vote, optional comment, scores
        and status change commit together or not at all.

        Raises ValidationError, NotFoundError or InvalidStateError.
        """
        try:
            decision = CabDecision(decision)
        except ValueError:
            raise ValidationError(f"Unknown CAB decision: {decision}", field="decision") from None
        if not reviewer_id or not str(reviewer_id).strip():
            raise ValidationError("reviewer_id is required", field="reviewer_id")
        if cab_assessment is not None and not isinstance(cab_assessment, (CabAssessment, Mapping)):
            raise ValidationError("cab_assessment must be an object", field="cab_assessment")
        try:
            assessment = (
                cab_assessment
                if isinstance(cab_assessment, CabAssessment)
                else CabAssessment.model_validate(dict(cab_assessment or {}))
            )
        except PydanticValidationError as exc:
            raise ValidationError(_validation_message(exc), field="cab_assessment") from exc

        target = ChangeStatus.APPROVED if decision == CabDecision.APPROVE else ChangeStatus.REJECTED
        comment_text = (comments or "").strip()

        with self.store.unit_of_work():
            change = self._load(change_id)
            if change.status not in REVIEW_ELIGIBLE_STATUSES:
                raise InvalidStateError(change_id, change.status, decision.value)
            previous = self._require_transition(change, target, decision.value)
            original_document = dict(change.wizard_data or {})

            self.store.append_review_vote(
                change_id,
                reviewer_id,
                decision.value,
                comment_text or (settings.CAB_DEFAULT_REJECT_COMMENT if decision == CabDecision.REJECT else None),
                {
                    "cabAssessment": assessment.model_dump(mode="json", by_alias=True, exclude_unset=True),
                    "originalWizardInput": original_document,
                },
            )

            if decision == CabDecision.APPROVE:
                merged = merge_assessment(original_document, assessment)
                merged_document = merged.to_document()
                scores = self.scoring.score(merged)
                update = {
                    "status": target.value,
                    "wizard_data": merged_document,
                    "updated_source": token(Provenance.CAB_APPROVE),
                }
                update.update(scores.to_update())
                change = self.store.save_change_request(change_id, update)
                self._persist_scores(change_id, scores, merged_document, Provenance.CAB_APPROVE)
            else:
                change = self.store.save_change_request(
                    change_id,
                    {"status": target.value, "updated_source": token(Provenance.CAB_REJECT)},
                )

            if comment_text:
                self.store.append_comment(change_id, reviewer_id, comment_text, False)

        logger.info(
            "cab.decision.recorded",
            extra={
                "change_id": change_id,
                "reviewer_id": reviewer_id,
                "decision": decision.value,
                "from_status": previous.value,
                "to_status": target.value,
            },
        )
        return change

    # ---------- delivery ----------

    def schedule(
        self,
        change_id: int,
        scheduled_start: datetime,
        scheduled_end: datetime,
        scheduling_data: Optional[Dict[str, Any]] = None,
    ) -> ChangeRequest:
        if scheduled_start is None or scheduled_end is None:
            raise ValidationError("scheduled_start and scheduled_end are required", field="scheduled_start")
        if scheduled_end < scheduled_start:
            raise ValidationError("scheduled_end must not be before scheduled_start", field="scheduled_end")
        update: Dict[str, Any] = {"scheduled_start": scheduled_start, "scheduled_end": scheduled_end}
        if scheduling_data is not None:
            update["scheduling_data"] = dict(scheduling_data)
        return self._transition(change_id, ChangeStatus.SCHEDULED, "schedule", Provenance.WORKFLOW_SCHEDULE, update)

    def start(self, change_id: int) -> ChangeRequest:
        return self._transition(
            change_id,
            ChangeStatus.IN_PROGRESS,
            "start",
            Provenance.WORKFLOW_START,
            {"actual_start": _utcnow()},
        )

    def complete(self, change_id: int) -> ChangeRequest:
        return self._transition(
            change_id,
            ChangeStatus.COMPLETED,
            "complete",
            Provenance.WORKFLOW_COMPLETE,
            {"actual_end": _utcnow()},
        )

    def fail(self, change_id: int, reason: Optional[str] = None, user_id: str = "system") -> ChangeRequest:
        with self.store.unit_of_work():
            change = self._load(change_id)
            previous = self._require_transition(change, ChangeStatus.FAILED, "fail")
            change = self.store.save_change_request(
                change_id,
                {
                    "status": ChangeStatus.FAILED.value,
                    "actual_end": _utcnow(),
                    "updated_source": token(Provenance.WORKFLOW_FAIL),
                },
            )
            if reason and reason.strip():
                self.store.append_comment(change_id, user_id, f"Failure: {reason.strip()}", True)

        logger.warning(
            "workflow.failed",
            extra={"change_id": change_id, "from_status": previous.value, "reason": reason},
        )
        return change

    def cancel(self, change_id: int, user_id: str, reason: Optional[str] = None) -> ChangeRequest:
        with self.store.unit_of_work():
            change = self._load(change_id)
            previous = self._require_transition(change, ChangeStatus.CANCELLED, "cancel")
            change = self.store.save_change_request(
                change_id,
                {"status": ChangeStatus.CANCELLED.value, "updated_source": token(Provenance.WORKFLOW_CANCEL)},
            )
            if reason and reason.strip():
                self.store.append_comment(change_id, user_id, f"Cancelled: {reason.strip()}", False)

        logger.info(
            "workflow.transition",
            extra={"change_id": change_id, "from_status": previous.value, "to_status": ChangeStatus.CANCELLED.value},
        )
        return change

    # ---------- scoring ----------

    def rescore(self, change_id: int) -> ChangeRequest:
        """Recompute all three scores from the current wizard data; status is unchanged."""
        with self.store.unit_of_work():
            change = self._load(change_id)
            if change.status in TERMINAL_STATUSES:
                raise InvalidStateError(change_id, change.status, "rescore")
            document = dict(change.wizard_data or {})
            scores = self.scoring.score(document)
            update = {"updated_source": token(Provenance.SCORING_RESCORE)}
            update.update(scores.to_update())
            change = self.store.save_change_request(change_id, update)
            self._persist_scores(change_id, scores, document, Provenance.SCORING_RESCORE)

        logger.info(
            "scoring.rescored",
            extra={"change_id": change_id, "score": scores.benefit.score},
        )
        return change


__all__ = [
    "ALLOWED_TRANSITIONS",
    "REVIEW_ELIGIBLE_STATUSES",
    "ChangeRequestWorkflow",
    "can_transition",
]
