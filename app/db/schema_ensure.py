# change_cab_project/app/db/schema_ensure.py

from __future__ import annotations

import logging

from sqlalchemy.engine import Engine

from app.db.base import Base

logger = logging.getLogger("app.db.schema_ensure")


def ensure_schema(engine: Engine) -> None:
    """Create any missing tables from the ORM metadata.

    Safe to call multiple times; existing tables are left untouched.
    """
    Base.metadata.create_all(bind=engine)
    logger.info("schema.ensured", extra={"count": len(Base.metadata.tables)})


__all__ = ["ensure_schema"]
