"""
Shared fixtures: in-memory SQLite database, a TestClient wired to it, and
users for two recruiter tenants.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.db.base import Base
from app.db.session import get_db
from app.db.models.user import User, UserRole, OAuthProvider
from app.core.auth_dependency import Actor
from app.core.security import hash_password, create_access_token
from app.services import email_service

TEST_PASSWORD = "testpass123"

# Setup in-memory SQLite database for testing
TEST_DATABASE_URL = "sqlite:///:memory:"
test_engine = create_engine(
    TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def override_get_db():
    """Override get_db dependency for testing."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


class FakeTransport:
    """Collects messages instead of talking to an SMTP server."""

    def __init__(self):
        self.sent = []
        self.fail = False

    def send(self, message):
        if self.fail:
            raise OSError("SMTP unavailable")
        self.sent.append(message)


@pytest.fixture(scope="function", autouse=True)
def setup_db():
    """Create and drop tables for each test."""
    Base.metadata.create_all(bind=test_engine)
    yield
    Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(autouse=True)
def outbox(monkeypatch):
    transport = FakeTransport()
    monkeypatch.setattr(email_service, "get_transport", lambda: transport)
    return transport


@pytest.fixture
def db_session():
    """Provide a database session for tests."""
    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    return TestClient(app)


def make_user(db, email, role=UserRole.CANDIDATE.value, name="Test User", password=TEST_PASSWORD, **fields):
    user = User(
        name=name,
        email=email,
        role=role,
        password_hash=hash_password(password) if password else None,
        **fields,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def actor_for(user) -> Actor:
    return Actor(id=user.id, role=user.role, tenant_key=user.tenant_key, user=user)


def auth_headers(user) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.id, user.role)}"}


@pytest.fixture
def recruiter(db_session):
    return make_user(db_session, "r1@co1.com", role=UserRole.RECRUITER.value, name="Rita Recruiter", recruiter_company="Co1")


@pytest.fixture
def other_recruiter(db_session):
    return make_user(db_session, "r2@co2.com", role=UserRole.RECRUITER.value, name="Otto Recruiter", recruiter_company="Co2")


@pytest.fixture
def candidate(db_session):
    """Self-registered candidate with no company."""
    return make_user(db_session, "alice@example.com", name="Alice")


@pytest.fixture
def co1_candidate(db_session):
    return make_user(
        db_session, "kim@example.com", name="Kim", password=None,
        oauth_provider=OAuthProvider.RECRUITER_CREATED.value, company="Co1", recruiter_company="Co1",
    )


@pytest.fixture
def co2_candidate(db_session):
    return make_user(
        db_session, "kai@example.com", name="Kim", password=None,
        oauth_provider=OAuthProvider.RECRUITER_CREATED.value, company="Co2", recruiter_company="Co2",
    )
