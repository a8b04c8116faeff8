"""
Shared pytest fixtures.

Uses a SQLite database file so no Postgres is required for tests.
"""
import os

SQLITE_URL = "sqlite:///./test_moodlog.db"
os.environ.setdefault("DATABASE_URL", SQLITE_URL)

from datetime import datetime, timedelta, timezone  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, delete  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from moodlog.db.base import Base, get_db  # noqa: E402
from moodlog.main import app  # noqa: E402
from moodlog.models.mood_entry import MoodEntry  # noqa: E402

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def clean_entries():
    """Every test starts from an empty log."""
    db = TestingSessionLocal()
    try:
        db.execute(delete(MoodEntry))
        db.commit()
    finally:
        db.close()
    yield


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def ago(**kwargs) -> datetime:
    return datetime.now(tz=timezone.utc) - timedelta(**kwargs)
