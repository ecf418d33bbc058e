"""Pytest configuration and fixtures for Lexinote tests.

Test isolation strategy:
- Every test gets a fresh in-memory SQLite database (schema from Base.metadata)
- The app's get_db dependency and the auth middleware share one session factory
- Outbound HTTP is mocked with respx; no live network calls
"""

import os
import sys
from collections.abc import Generator
from pathlib import Path

# Add repo root to sys.path for importing top-level packages (e.g., apps)
_repo_root = Path(__file__).parent.parent.parent
if str(_repo_root) not in sys.path:
    sys.path.insert(0, str(_repo_root))

# Settings are read from the environment; pin the ones tests depend on
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite://")
os.environ["LEXINOTE_ENV"] = "test"
os.environ["PASSWORD_HASH_ROUNDS"] = "4"
for _name in (
    "GOOGLE_CLIENT_ID",
    "GOOGLE_CLIENT_SECRET",
    "GOOGLE_REDIRECT_URI",
    "DEEPSEEK_API_KEY",
    "GEMINI_API_KEY",
):
    os.environ.pop(_name, None)

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from lexinote.app import add_request_id_middleware, create_app
from lexinote.config import clear_settings_cache
from lexinote.db.models import Base
from lexinote.db.session import create_session_factory, get_db


@pytest.fixture
def engine() -> Generator[Engine, None, None]:
    """Create a fresh in-memory database for one test."""
    engine = create_engine(
        "sqlite+pysqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return create_session_factory(engine)


@pytest.fixture
def db_session(session_factory: sessionmaker[Session]) -> Generator[Session, None, None]:
    """Provide a database session on the test database."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(session_factory: sessionmaker[Session]) -> FastAPI:
    """Provide the full app (auth + request-id middleware) bound to the test database."""
    app = create_app(session_factory=session_factory)
    add_request_id_middleware(app)

    def override_get_db() -> Generator[Session, None, None]:
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """Provide a FastAPI test client. Runs the app lifespan."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def public_client() -> Generator[TestClient, None, None]:
    """Provide a test client without auth middleware or database.

    Suitable for public endpoints and envelope/handler behavior.
    """
    app = create_app(skip_auth_middleware=True)
    add_request_id_middleware(app)
    with TestClient(app) as client:
        yield client


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Reset the settings cache before each test."""
    clear_settings_cache()
    yield
    clear_settings_cache()
