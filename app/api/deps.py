from __future__ import annotations

from typing import Generator

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from app.config import settings
from app.db.session import SessionLocal
from app.services.change_store import SqlChangeStore
from app.services.change_workflow import ChangeRequestWorkflow
from app.services.scoring_config_service import ScoringConfigService


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_workflow(db: Session = Depends(get_db)) -> ChangeRequestWorkflow:
    return ChangeRequestWorkflow(store=SqlChangeStore(db), config_source=ScoringConfigService(db))


def require_shared_secret(x_changeflow_secret: str | None = Header(default=None)) -> None:
    """
    Shared secret header from the intake / CAB front end.
    Header name: X-CHANGEFLOW-SECRET
    """
    expected = settings.CHANGEFLOW_API_SECRET
    if not expected:
        # If secret isn't configured, fail closed.
        raise HTTPException(status_code=500, detail="CHANGEFLOW_API_SECRET is not configured")

    if not x_changeflow_secret or x_changeflow_secret != expected:
        raise HTTPException(status_code=401, detail="Unauthorized")
