"""
Tests for the feedback and health endpoints.
"""
from conftest import auth_headers


def test_feedback_is_mailed(client, candidate, outbox):
    response = client.post(
        "/api/feedback",
        json={"message": "Great tracker", "subject": "Kudos", "rating": 4},
        headers=auth_headers(candidate),
    )

    assert response.status_code == 202
    assert response.json()["message"] == "Thank you for your feedback!"
    message = outbox.sent[0]
    assert message["Subject"] == "[Feedback] Kudos"
    assert candidate.email in message.get_body(preferencelist=("plain",)).get_content()


def test_feedback_accepted_when_mail_fails(client, candidate, outbox):
    outbox.fail = True
    response = client.post("/api/feedback", json={"message": "Hello"}, headers=auth_headers(candidate))
    assert response.status_code == 202


def test_feedback_rating_out_of_range(client, candidate):
    response = client.post(
        "/api/feedback",
        json={"message": "Hello", "rating": 6},
        headers=auth_headers(candidate),
    )
    assert response.status_code == 400


def test_feedback_requires_authentication(client):
    assert client.post("/api/feedback", json={"message": "Hello"}).status_code == 401


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] == "connected"


def test_feedback_subject_must_be_single_line(client, candidate, outbox):
    response = client.post(
        "/api/feedback",
        json={"message": "Hello", "subject": "Hello\r\nBcc: victim@example.com"},
        headers=auth_headers(candidate),
    )
    assert response.status_code == 400
    assert "single line" in response.json()["detail"]
    assert outbox.sent == []
