"""
Pytest configuration and fixtures

The suite runs against an in-memory SQLite database built from the Alembic
migrations. Every row written during a test is deleted afterwards.
"""
import pytest
import sys
import os
from datetime import datetime
from pathlib import Path

# Add the parent directory to the path so we can import from services
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Must be set before anything imports core.config
os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-at-least-32-chars")
os.environ.setdefault("LOG_FORMAT", "text")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient

from core.database import Base, SessionLocal, engine, get_db
from models import ExerciseLibrary, User
from services.completion_client import get_completion_client
from fixtures.auth_fixtures import auth_headers_for
from fixtures.coach_fixtures import FakeCompletionClient


@pytest.fixture(scope="session", autouse=True)
def _ensure_db_schema_is_at_head():
    """Build the schema by running the Alembic migrations, not create_all."""
    from alembic import command
    from alembic.config import Config

    api_root = Path(__file__).resolve().parents[1]
    cfg = Config(str(api_root / "alembic.ini"))
    cfg.set_main_option("script_location", str(api_root / "alembic"))
    cfg.attributes["skip_logging_config"] = True

    with engine.begin() as connection:
        cfg.attributes["connection"] = connection
        command.upgrade(cfg, "head")


@pytest.fixture(scope="function")
def db_session():
    """A session whose data is wiped once the test finishes."""
    session = SessionLocal()
    yield session
    session.rollback()
    for table in reversed(Base.metadata.sorted_tables):
        session.execute(table.delete())
    session.commit()
    session.close()


@pytest.fixture
def app(db_session):
    from main import app as fastapi_app

    def _override_get_db():
        yield db_session

    fastapi_app.dependency_overrides[get_db] = _override_get_db
    yield fastapi_app
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def fake_completion(app):
    """Replace the Gemini client; tests set .reply or .error before calling."""
    fake = FakeCompletionClient()
    app.dependency_overrides[get_completion_client] = lambda: fake
    return fake


@pytest.fixture
def test_user(db_session):
    user = User(
        display_name="Test Lifter",
        current_level="Intermediate",
        streak=4,
        created_at=datetime(2024, 3, 15, 9, 0, 0),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def other_user(db_session):
    user = User(display_name="Someone Else", streak=0)
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(test_user):
    return auth_headers_for(test_user)


@pytest.fixture
def exercise_library(db_session):
    """A small library covering push, pull and legs."""
    entries = [
        ExerciseLibrary(slug="push-up", name="Push-Up", category="push", difficulty="beginner"),
        ExerciseLibrary(slug="pike-push-up", name="Pike Push-Up", category="push", difficulty="intermediate"),
        ExerciseLibrary(slug="pull-up-assisted", name="Assisted Pull-Up", category="pull", difficulty="beginner"),
        ExerciseLibrary(slug="australian-row", name="Australian Row", category="pull", difficulty="beginner"),
        ExerciseLibrary(slug="bodyweight-squat", name="Bodyweight Squat", category="legs", difficulty="beginner"),
    ]
    db_session.add_all(entries)
    db_session.commit()
    return {e.slug: e for e in entries}
