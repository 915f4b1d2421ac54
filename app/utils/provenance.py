# change_cab_project/app/utils/provenance.py
from __future__ import annotations

from enum import Enum
from typing import Optional


class Provenance(str, Enum):
    """Canonical provenance tokens for change request writes and score snapshots."""

    # Submission
    WORKFLOW_CREATE = "workflow.create"
    WORKFLOW_SUBMIT = "workflow.submit"

    # CAB review
    WORKFLOW_BEGIN_REVIEW = "workflow.begin_review"
    CAB_APPROVE = "cab.approve"
    CAB_REJECT = "cab.reject"

    # Delivery
    WORKFLOW_SCHEDULE = "workflow.schedule"
    WORKFLOW_START = "workflow.start"
    WORKFLOW_COMPLETE = "workflow.complete"
    WORKFLOW_FAIL = "workflow.fail"
    WORKFLOW_CANCEL = "workflow.cancel"

    # Scoring outside a CAB decision
    SCORING_RESCORE = "scoring.rescore"


def token(prov: Provenance, run_id: Optional[str] = None) -> str:
    """Render a provenance token, optionally appending a run identifier."""

    return prov.value if not run_id else f"{prov.value}#{run_id}"


__all__ = ["Provenance", "token"]
