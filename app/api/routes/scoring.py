# change_cab_project/app/api/routes/scoring.py

from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.api.deps import get_db, require_shared_secret
from app.api.errors import to_http_exception
from app.api.schemas.changes import ScoreResponse
from app.schemas.wizard import WizardInput
from app.services.errors import ChangeflowError
from app.services.scoring import ScoreKind, ScoreResult, get_engine
from app.services.scoring_config_service import ScoringConfigService


router = APIRouter(prefix="/scoring", tags=["scoring"], dependencies=[Depends(require_shared_secret)])


def _to_response(result: ScoreResult) -> ScoreResponse:
    return ScoreResponse(
        kind=result.kind.value,
        score=result.score,
        level=result.level,
        factors=result.factors_document(),
        warnings=list(result.warnings),
    )


@router.post("/{kind}", response_model=ScoreResponse)
def score_wizard(kind: str, wizard_data: Dict[str, Any], db: Session = Depends(get_db)) -> ScoreResponse:
    """
    Score a wizard document without persisting anything (benefit / effort / risk).
    """
    try:
        score_kind = ScoreKind(kind)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown score kind: {kind}") from None

    configs_service = ScoringConfigService(db)
    try:
        if score_kind == ScoreKind.BENEFIT:
            engine = get_engine(score_kind, configs=configs_service.get_active_benefit_configs())
        elif score_kind == ScoreKind.EFFORT:
            engine = get_engine(score_kind, configs=configs_service.get_active_effort_configs())
        else:
            engine = get_engine(score_kind)
    except ChangeflowError as e:
        raise to_http_exception(e) from e

    return _to_response(engine.compute(WizardInput.coerce(wizard_data)))
