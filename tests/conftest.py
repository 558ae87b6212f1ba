"""
Pytest configuration and shared fixtures for all tests
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from social.api.auth.utils import create_access_token
from social.api.friends.events import FriendshipEvents
from social.api.friends.service import FriendshipService
from social.api.friends.store import RelationshipStore
from social.api.profile.models import Profile
from social.database.database import Base, get_db, get_session_factory
from social.main import app

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def tables():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def other_db():
    """A second caller's session on the same database."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def make_profile(db):
    def _make_profile(username, **kwargs):
        profile = Profile(username=username, full_name=username.title(), **kwargs)
        db.add(profile)
        db.commit()
        db.refresh(profile)
        return profile
    return _make_profile


@pytest.fixture
def alice(make_profile):
    return make_profile("alice")


@pytest.fixture
def bob(make_profile):
    return make_profile("bob")


@pytest.fixture
def service(db):
    """Service whose side effects run inline, in their own sessions."""
    return FriendshipService(RelationshipStore(db), FriendshipEvents(TestingSessionLocal))


@pytest.fixture
def client():
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: TestingSessionLocal
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    def _auth_headers(profile):
        token = create_access_token({"sub": profile.id})
        return {"Authorization": f"Bearer {token}"}
    return _auth_headers


@pytest.fixture
def fetch_profile():
    """Reads a profile through a fresh session, after side effects have run."""
    def _fetch_profile(user_id):
        session = TestingSessionLocal()
        try:
            return session.query(Profile).filter(Profile.id == user_id).first()
        finally:
            session.close()
    return _fetch_profile
