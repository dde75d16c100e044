"""
Tests for the authenticated user's own profile, password and account.
"""
from app.core.security import verify_password
from app.db.models.application import Application
from app.db.models.user import User

from conftest import TEST_PASSWORD, auth_headers


def test_get_profile(client, recruiter):
    response = client.get("/api/auth/profile", headers=auth_headers(recruiter))

    assert response.status_code == 200
    data = response.json()
    assert data["email"] == recruiter.email
    assert data["recruiter_company"] == "Co1"
    assert "password_hash" not in data
    assert "reset_password_token" not in data


def test_update_profile_partial(client, db_session, candidate):
    candidate.location = "Berlin"
    db_session.commit()

    response = client.put(
        "/api/auth/profile",
        json={"striving_for": "Senior role"},
        headers=auth_headers(candidate),
    )
    assert response.status_code == 200
    data = response.json()
    assert data["striving_for"] == "Senior role"
    assert data["location"] == "Berlin"
    assert data["name"] == "Alice"


def test_update_profile_null_clears_field(client, db_session, candidate):
    candidate.location = "Berlin"
    db_session.commit()

    response = client.put("/api/auth/profile", json={"location": None}, headers=auth_headers(candidate))
    assert response.status_code == 200
    assert response.json()["location"] is None


def test_candidate_cannot_set_recruiter_company(client, db_session, candidate):
    response = client.put(
        "/api/auth/profile",
        json={"recruiter_company": "Co1", "location": "Paris"},
        headers=auth_headers(candidate),
    )
    assert response.status_code == 200

    db_session.expire_all()
    stored = db_session.get(User, candidate.id)
    assert stored.recruiter_company is None
    assert stored.location == "Paris"


def test_recruiter_renames_company(client, recruiter):
    response = client.put(
        "/api/auth/profile",
        json={"recruiter_company": "  Co1 Holdings "},
        headers=auth_headers(recruiter),
    )
    assert response.status_code == 200
    assert response.json()["recruiter_company"] == "Co1 Holdings"


def test_recruiter_cannot_blank_company(client, recruiter):
    response = client.put("/api/auth/profile", json={"recruiter_company": " "}, headers=auth_headers(recruiter))
    assert response.status_code == 400
    assert response.json()["detail"] == "Company is required for recruiters."


def test_update_profile_email_taken(client, candidate, recruiter):
    response = client.put("/api/auth/profile", json={"email": recruiter.email}, headers=auth_headers(candidate))
    assert response.status_code == 409


def test_change_password(client, db_session, candidate):
    response = client.put(
        "/api/auth/password",
        json={"current_password": TEST_PASSWORD, "new_password": "changed789"},
        headers=auth_headers(candidate),
    )
    assert response.status_code == 200

    db_session.expire_all()
    assert verify_password("changed789", db_session.get(User, candidate.id).password_hash)


def test_change_password_wrong_current(client, candidate):
    response = client.put(
        "/api/auth/password",
        json={"current_password": "nottheone", "new_password": "changed789"},
        headers=auth_headers(candidate),
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "Current password is incorrect."


def test_change_password_passwordless_account(client, co1_candidate):
    response = client.put(
        "/api/auth/password",
        json={"current_password": "anything", "new_password": "changed789"},
        headers=auth_headers(co1_candidate),
    )
    assert response.status_code == 400


def test_delete_account_removes_applications(client, db_session, candidate, co1_candidate):
    db_session.add_all([
        Application(candidate_id=candidate.id, company="Acme", role="Eng"),
        Application(candidate_id=candidate.id, company="Globex", role="PM"),
        Application(candidate_id=co1_candidate.id, company="Acme", role="Eng"),
    ])
    db_session.commit()
    headers = auth_headers(candidate)

    response = client.delete("/api/auth/profile", headers=headers)
    assert response.status_code == 200

    db_session.expire_all()
    assert db_session.get(User, candidate.id) is None
    assert db_session.query(Application).count() == 1
    assert client.get("/api/auth/profile", headers=headers).status_code == 401


def test_provisioned_candidate_sees_recruiter_entered_profile(client, db_session, co1_candidate):
    co1_candidate.wished_salary = "90k"
    co1_candidate.candidate_notes = "Strong SQL"
    db_session.commit()

    response = client.get("/api/auth/profile", headers=auth_headers(co1_candidate))

    assert response.status_code == 200
    data = response.json()
    assert data["wished_salary"] == "90k"
    assert data["candidate_notes"] == "Strong SQL"
    assert data["company"] == "Co1"
    assert "early_start_date" in data
