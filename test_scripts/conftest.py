# Test bootstrap: in-memory database and a known API secret
from __future__ import annotations

import logging
import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("CHANGEFLOW_API_SECRET", "test-secret")

import pytest  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.db.base import Base  # noqa: E402
from app.services.change_store import SqlChangeStore  # noqa: E402
from app.services.change_workflow import ChangeRequestWorkflow  # noqa: E402
from app.services.scoring_config_service import StaticConfigSource  # noqa: E402

logger = logging.getLogger(__name__)


@pytest.fixture()
def db_engine():
    # One shared connection so every session (and TestClient threads) sees the same in-memory DB
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        future=True,
    )
    Base.metadata.create_all(bind=engine)
    logger.info("test-bootstrap: schema ensured")
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, autoflush=False, autocommit=False, future=True)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def store(db):
    return SqlChangeStore(db)


@pytest.fixture()
def workflow(store):
    return ChangeRequestWorkflow(store=store, config_source=StaticConfigSource())


@pytest.fixture()
def revenue_wizard():
    return {
        "changeReasons": {"revenueImprovement": True},
        "revenueDetails": {
            "expectedRevenue": "£100,000",
            "revenueTimeline": "12",
            "revenueDescription": "x",
        },
    }
