"""
Tests for Google sign-in with the token verifier patched out.
"""
import pytest

from app.core import config
from app.db.models.user import User
from app.services import google_auth


@pytest.fixture
def google_claims(monkeypatch):
    claims = {
        "sub": "g-123",
        "email": "Gina@Example.com",
        "email_verified": True,
        "name": "Gina",
        "picture": "https://example.com/gina.png",
    }

    def fake_verify(token, request, audience):
        if token != "good-token" or audience != "client-id":
            raise ValueError("Wrong token")
        return claims

    monkeypatch.setattr(config, "GOOGLE_CLIENT_ID", "client-id")
    monkeypatch.setattr(google_auth.google_id_token, "verify_oauth2_token", fake_verify)
    return claims


def test_google_login_creates_candidate(client, db_session, google_claims):
    response = client.post("/api/auth/google", json={"id_token": "good-token"})

    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "Google login successful!"
    assert data["user"]["email"] == "gina@example.com"
    assert data["user"]["role"] == "candidate"

    user = db_session.query(User).filter(User.email == "gina@example.com").one()
    assert user.oauth_provider == "google"
    assert user.oauth_id == "g-123"
    assert user.password_hash is None


def test_google_login_reuses_existing_account(client, db_session, candidate, google_claims):
    google_claims["email"] = candidate.email
    response = client.post("/api/auth/google", json={"id_token": "good-token"})

    assert response.status_code == 200
    assert response.json()["user"]["id"] == candidate.id
    assert db_session.query(User).count() == 1


def test_google_login_rejects_bad_token(client, google_claims):
    response = client.post("/api/auth/google", json={"id_token": "forged"})
    assert response.status_code == 401


def test_google_login_requires_verified_email(client, google_claims):
    google_claims["email_verified"] = False
    response = client.post("/api/auth/google", json={"id_token": "good-token"})
    assert response.status_code == 401


def test_google_login_not_configured(client, monkeypatch):
    monkeypatch.setattr(config, "GOOGLE_CLIENT_ID", None)
    response = client.post("/api/auth/google", json={"id_token": "good-token"})
    assert response.status_code == 500
