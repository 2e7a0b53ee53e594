"""
Shared pytest fixtures.

Uses a SQLite database file so no Postgres is required for tests. Every
test gets its own X-User-Id, so rows from other tests never leak into
assertions. The clock is frozen and can be moved by the test.
"""
import uuid
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from fakes import FrozenClock
from journal.db.base import Base, get_db
from journal.main import app
from journal.routers.deps import get_clock

SQLITE_URL = "sqlite:///./test_journal.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Wednesday of ISO week 2026-W04
DEFAULT_NOW = datetime(2026, 1, 21, 12, 0, tzinfo=timezone.utc)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def clock():
    return FrozenClock(DEFAULT_NOW)


@pytest.fixture()
def user_headers():
    return {"X-User-Id": f"test|{uuid.uuid4().hex}"}


@pytest.fixture()
def client(db, clock):
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
