"""Shared fixtures: an in-memory database, the app built on it, and account factories."""
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ.setdefault("ENVIRONMENT", "development")

import pytest
from fastapi.testclient import TestClient

from halal_gains.core.config import get_settings
from halal_gains.core.security import create_access_token, get_password_hash
from halal_gains.db.base import Base
from halal_gains.db.session import create_db_engine, create_session_factory
from halal_gains.main import create_app
from halal_gains.models.profile import ClientProfile, CoachProfile
from halal_gains.models.user import User

get_settings.cache_clear()

PASSWORD = "password123"
PASSWORD_HASH = get_password_hash(PASSWORD)


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(engine):
    return create_app(engine=engine)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(db):
    def _make_user(email: str, full_name: str | None = None) -> User:
        user = User(email=email, full_name=full_name, hashed_password=PASSWORD_HASH)
        db.add(user)
        db.commit()
        return user

    return _make_user


@pytest.fixture
def make_coach(db, make_user):
    def _make_coach(name: str = "Coach Yusuf", **fields) -> CoachProfile:
        slug = name.lower().replace(" ", ".")
        user = make_user(f"{slug}@example.com", name)
        coach = CoachProfile(user_id=user.id, full_name=name, **fields)
        db.add(coach)
        db.commit()
        return coach

    return _make_coach


@pytest.fixture
def make_client(db, make_user):
    def _make_client(name: str = "Amina Khan", coach: CoachProfile | None = None, **fields) -> ClientProfile:
        slug = name.lower().replace(" ", ".")
        user = make_user(f"{slug}@example.com", name)
        profile = ClientProfile(
            user_id=user.id,
            full_name=name,
            coach_id=coach.id if coach else None,
            **fields,
        )
        db.add(profile)
        db.commit()
        return profile

    return _make_client


def auth_headers(user_id: int) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture
def headers_for():
    return auth_headers
