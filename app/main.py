# change_cab_project/app/main.py

from __future__ import annotations

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI

from app.config import setup_json_logging, settings
from app.api.routes.changes import router as changes_router
from app.api.routes.scoring import router as scoring_router
from app.db.schema_ensure import ensure_schema
from app.db.session import engine


def create_app(create_schema: bool = True) -> FastAPI:
    setup_json_logging(log_level=getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO))

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        # Tables are created when the server starts, never on import
        if create_schema:
            ensure_schema(engine)
        yield

    app = FastAPI(
        title="CHANGE CAB - Prioritization API",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.include_router(changes_router)
    app.include_router(scoring_router)

    @app.get("/health")
    def health():
        return {"ok": True}

    return app


app = create_app()
