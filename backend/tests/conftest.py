"""
conftest.py for backend/tests/

Replaces the MySQL-backed store with one over an in-memory SQLite database,
so the API tests run without a database server or environment variables.

Run from the project root:
    pytest -v
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, text
from sqlalchemy.pool import StaticPool

from api.dependencies import get_store
from api.main import app
from db.store import EventStore


CREATE_EVENTS_SQL = """
    CREATE TABLE events (
        event_id           INTEGER PRIMARY KEY AUTOINCREMENT,
        event_name         VARCHAR(255) NOT NULL,
        sport              VARCHAR(100) NOT NULL,
        event_date         DATE NOT NULL,
        winner_player_name VARCHAR(255)
    )
"""


def _sqlite_engine():
    # StaticPool: one connection shared by every checkout, like production
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture()
def store():
    engine = _sqlite_engine()
    with engine.begin() as conn:
        conn.execute(text(CREATE_EVENTS_SQL))
    yield EventStore(engine)
    engine.dispose()


@pytest.fixture()
def broken_store():
    """A store whose database has no events table: every statement fails."""
    engine = _sqlite_engine()
    yield EventStore(engine)
    engine.dispose()


@pytest.fixture()
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def broken_client(broken_store):
    app.dependency_overrides[get_store] = lambda: broken_store
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def rows(store):
    """Return a callable that reads the table directly, bypassing the API."""
    def _rows():
        with store.engine.connect() as conn:
            result = conn.execute(text("SELECT * FROM events ORDER BY event_id"))
            return [dict(r) for r in result.mappings().all()]
    return _rows
