# change_cab_project/app/api/routes/changes.py

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_workflow, require_shared_secret
from app.api.errors import to_http_exception
from app.api.schemas.changes import (
    CabDecisionRequest,
    CancelRequest,
    ChangeCreateRequest,
    FailRequest,
    ScheduleRequest,
)
from app.db.models.change_request import ChangeRequest
from app.schemas.change_request import ChangeRequestRead
from app.services.change_workflow import ChangeRequestWorkflow
from app.services.errors import ChangeflowError


router = APIRouter(prefix="/changes", tags=["changes"], dependencies=[Depends(require_shared_secret)])


def _read(change: ChangeRequest) -> ChangeRequestRead:
    return ChangeRequestRead.model_validate(change)


@router.post("", response_model=ChangeRequestRead, status_code=201)
def create_change(req: ChangeCreateRequest, workflow: ChangeRequestWorkflow = Depends(get_workflow)) -> ChangeRequestRead:
    try:
        change = workflow.submit_change_request(
            title=req.title,
            requester_id=req.requester_id,
            wizard_input=req.wizard_data,
            description=req.description,
            priority=req.priority,
            as_draft=req.as_draft,
        )
    except ChangeflowError as e:
        raise to_http_exception(e) from e
    return _read(change)


@router.get("/{change_id}", response_model=ChangeRequestRead)
def get_change(change_id: int, db: Session = Depends(get_db)) -> ChangeRequestRead:
    change = db.get(ChangeRequest, change_id)
    if change is None:
        raise HTTPException(status_code=404, detail=f"ChangeRequest with ID {change_id} not found")
    return _read(change)


@router.post("/{change_id}/cab-decision", response_model=ChangeRequestRead)
def cab_decision(
    change_id: int,
    req: CabDecisionRequest,
    workflow: ChangeRequestWorkflow = Depends(get_workflow),
) -> ChangeRequestRead:
    """
    Record a CAB approve/reject decision. Approval rescores the request with the merged assessment.
    """
    try:
        change = workflow.decide_cab_review(
            change_id,
            req.decision,
            req.cab_assessment,
            req.comments,
            req.reviewer_id,
        )
    except ChangeflowError as e:
        raise to_http_exception(e) from e
    return _read(change)


@router.post("/{change_id}/submit", response_model=ChangeRequestRead)
def submit_change(change_id: int, workflow: ChangeRequestWorkflow = Depends(get_workflow)) -> ChangeRequestRead:
    try:
        return _read(workflow.submit(change_id))
    except ChangeflowError as e:
        raise to_http_exception(e) from e


@router.post("/{change_id}/review", response_model=ChangeRequestRead)
def begin_review(change_id: int, workflow: ChangeRequestWorkflow = Depends(get_workflow)) -> ChangeRequestRead:
    try:
        return _read(workflow.begin_review(change_id))
    except ChangeflowError as e:
        raise to_http_exception(e) from e


@router.post("/{change_id}/schedule", response_model=ChangeRequestRead)
def schedule_change(
    change_id: int,
    req: ScheduleRequest,
    workflow: ChangeRequestWorkflow = Depends(get_workflow),
) -> ChangeRequestRead:
    try:
        return _read(workflow.schedule(change_id, req.scheduled_start, req.scheduled_end, req.scheduling_data))
    except ChangeflowError as e:
        raise to_http_exception(e) from e


@router.post("/{change_id}/start", response_model=ChangeRequestRead)
def start_change(change_id: int, workflow: ChangeRequestWorkflow = Depends(get_workflow)) -> ChangeRequestRead:
    try:
        return _read(workflow.start(change_id))
    except ChangeflowError as e:
        raise to_http_exception(e) from e


@router.post("/{change_id}/complete", response_model=ChangeRequestRead)
def complete_change(change_id: int, workflow: ChangeRequestWorkflow = Depends(get_workflow)) -> ChangeRequestRead:
    try:
        return _read(workflow.complete(change_id))
    except ChangeflowError as e:
        raise to_http_exception(e) from e


@router.post("/{change_id}/fail", response_model=ChangeRequestRead)
def fail_change(
    change_id: int,
    req: FailRequest,
    workflow: ChangeRequestWorkflow = Depends(get_workflow),
) -> ChangeRequestRead:
    try:
        return _read(workflow.fail(change_id, req.reason))
    except ChangeflowError as e:
        raise to_http_exception(e) from e


@router.post("/{change_id}/cancel", response_model=ChangeRequestRead)
def cancel_change(
    change_id: int,
    req: CancelRequest,
    workflow: ChangeRequestWorkflow = Depends(get_workflow),
) -> ChangeRequestRead:
    try:
        return _read(workflow.cancel(change_id, req.user_id, req.reason))
    except ChangeflowError as e:
        raise to_http_exception(e) from e


@router.post("/{change_id}/rescore", response_model=ChangeRequestRead)
def rescore_change(change_id: int, workflow: ChangeRequestWorkflow = Depends(get_workflow)) -> ChangeRequestRead:
    try:
        return _read(workflow.rescore(change_id))
    except ChangeflowError as e:
        raise to_http_exception(e) from e
