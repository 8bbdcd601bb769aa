"""Shared test fixtures."""

import random

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event as sa_event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from src.config import settings
from src.core.activity.catalog import ActivityCatalog
from src.core.event_bus import EventBus
from src.db.database import get_db
from src.db.models import Base
from src.main import app


def make_test_engine():
    """In-memory SQLite shared by every connection, FK enforced."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @sa_event.listens_for(engine, "connect")
    def _set_fk(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    return engine


@pytest.fixture()
def db_session() -> Session:
    """Raw database session for direct DB assertions."""
    engine = make_test_engine()
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


@pytest.fixture(scope="session")
def catalog() -> ActivityCatalog:
    """Bundled activities.json (read-only across tests)."""
    loaded = ActivityCatalog()
    loaded.load_from_json(settings.ACTIVITY_CATALOG_PATH)
    return loaded


@pytest.fixture()
def client(catalog: ActivityCatalog) -> TestClient:
    """FastAPI TestClient wired to an in-memory SQLite database.

    Lifespan is not run; app.state is populated here instead.
    """
    engine = make_test_engine()
    test_session = sessionmaker(bind=engine, autocommit=False, autoflush=False)

    def _override_get_db():
        db = test_session()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.state.event_bus = EventBus()
    app.state.activity_catalog = catalog
    app.state.rng = random.Random(7)
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.pop(get_db, None)
        engine.dispose()
