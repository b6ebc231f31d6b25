# tests/conftest.py

import os

# Settings are read at import time, so the environment has to be in place
# before anything from `app` is imported.
os.environ.setdefault("ENV", "local")
os.environ.setdefault("DATABASE_URL_LOCAL", "sqlite://")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("INTERNAL_API_KEY", "test-internal-key")
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api import deps
from app.main import app
from app.models import Base

# --- Test Database Setup ---
# One in-memory SQLite database shared by the test and the app's worker thread.
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Fixed "now" for every test that goes through the API.
FROZEN_NOW = datetime(2025, 1, 20, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def now() -> datetime:
    return FROZEN_NOW


@pytest.fixture(scope="function")
def client(db, now):
    """
    TestClient wired to the in-memory database and the frozen clock.
    Authentication is real: tests send tokens from tests.utils.auth.
    """

    def override_get_db():
        yield db

    app.dependency_overrides[deps.get_db] = override_get_db
    app.dependency_overrides[deps.get_clock] = lambda: (lambda: now)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
