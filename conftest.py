import os

# In-memory database and local-only services before the application is imported
os.environ["SQLALCHEMY_DATABASE_URI"] = "sqlite://"
os.environ["OPENAI_API_KEY"] = ""
os.environ["REMINDER_DISMISSAL_BACKEND"] = "database"
os.environ["REMINDER_TIMEZONE"] = "UTC"

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from trackii import crud, schemas
from trackii.api import deps
from trackii.core import security
from trackii.db.base import Base
from trackii.db.session import SessionLocal, engine
from trackii.main import app
import trackii.models  # noqa: F401

API = "/api/v1"
FIXED_NOW = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def now():
    return FIXED_NOW


@pytest.fixture
def frozen_now(now):
    """Pin the request clock used by the reminder endpoints."""
    app.dependency_overrides[deps.get_now] = lambda: now
    yield now
    app.dependency_overrides.pop(deps.get_now, None)


def make_user(db, email="parent@example.com", password="secret123"):
    return crud.user.create(
        db, obj_in=schemas.UserCreate(email=email, password=password, full_name="Test Parent")
    )


def auth_headers_for(user) -> dict:
    return {"Authorization": f"Bearer {security.create_access_token(user.id)}"}


@pytest.fixture
def user(db):
    return make_user(db)


@pytest.fixture
def auth_headers(user):
    return auth_headers_for(user)


@pytest.fixture
def profile(db, user):
    return crud.profile.create_with_owner(
        db, obj_in=schemas.ProfileCreate(name="Mia", type="child"), user_id=user.id
    )
