"""
Tests for the SMTP transport and the mail senders.
"""
import smtplib
import threading
from unittest.mock import MagicMock

import pytest

from app.services import email_service
from app.services.email_service import SmtpTransport

# captured at import, before the autouse outbox fixture patches it
REAL_GET_TRANSPORT = email_service.get_transport


@pytest.fixture
def real_transport(monkeypatch):
    """Undo the outbox patch so get_transport builds the shared SmtpTransport."""
    monkeypatch.setattr(email_service, "get_transport", REAL_GET_TRANSPORT)
    monkeypatch.setattr(email_service, "_transport", None)


def test_senders_render_messages(outbox):
    email_service.send_welcome_email("alice@example.com", "Alice <script>")
    email_service.send_password_reset_email("alice@example.com", "tok123", None)

    welcome, reset = outbox.sent
    assert welcome["Subject"] == "Welcome to WorkCompass!"
    assert "&lt;script&gt;" in welcome.get_body(preferencelist=("html",)).get_content()
    assert "token=tok123" in reset.get_body(preferencelist=("plain",)).get_content()
    assert "Hi there" in reset.get_body(preferencelist=("plain",)).get_content()


def test_feedback_goes_to_team_mailbox(outbox, monkeypatch):
    monkeypatch.setattr(email_service.config, "FEEDBACK_EMAIL", "team@workcompass.test")
    result = email_service.send_feedback_email("Alice", "alice@example.com", "Love it", rating=5)

    assert result.success
    message = outbox.sent[0]
    assert message["To"] == "team@workcompass.test"
    assert message["Subject"] == "[Feedback] WorkCompass feedback"
    assert "Rating: 5/5" in message.get_body(preferencelist=("plain",)).get_content()


def test_send_failure_is_reported_not_raised(outbox):
    outbox.fail = True
    result = email_service.send_welcome_email("alice@example.com", "Alice")
    assert result.success is False
    assert "SMTP unavailable" in result.error


def test_transport_is_shared(real_transport):
    assert email_service.get_transport() is email_service.get_transport()


def test_transport_created_once_across_threads(real_transport):
    seen = []
    threads = [threading.Thread(target=lambda: seen.append(email_service.get_transport())) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len({id(t) for t in seen}) == 1


def test_transport_built_from_config(real_transport, monkeypatch):
    monkeypatch.setattr(email_service.config, "SMTP_HOST", "mail.other.test")
    first = email_service.get_transport()
    monkeypatch.setattr(email_service, "_transport", None)

    second = email_service.get_transport()
    assert first.host == "mail.other.test"
    assert second is not first


def test_smtp_transport_starttls_and_login(monkeypatch):
    server = MagicMock()
    server.__enter__.return_value = server
    server.has_extn.return_value = True
    smtp_cls = MagicMock(return_value=server)
    monkeypatch.setattr(smtplib, "SMTP", smtp_cls)

    transport = SmtpTransport("smtp.test", 587, secure=False, user="mailer", password="secret")
    transport.send("message")

    smtp_cls.assert_called_once_with("smtp.test", 587, timeout=30)
    server.starttls.assert_called_once()
    server.login.assert_called_once_with("mailer", "secret")
    server.send_message.assert_called_once_with("message")


def test_smtp_transport_ssl_without_credentials(monkeypatch):
    server = MagicMock()
    server.__enter__.return_value = server
    smtp_ssl_cls = MagicMock(return_value=server)
    monkeypatch.setattr(smtplib, "SMTP_SSL", smtp_ssl_cls)

    SmtpTransport("smtp.test", 465, secure=True, user=None, password=None).send("message")

    smtp_ssl_cls.assert_called_once_with("smtp.test", 465, timeout=30)
    server.starttls.assert_not_called()
    server.login.assert_not_called()


def test_header_injection_is_reported_not_raised(outbox):
    result = email_service.send_feedback_email(
        "Alice", "alice@example.com", "hi", subject="Hello\nBcc: victim@example.com"
    )
    assert result.success is False
    assert outbox.sent == []
