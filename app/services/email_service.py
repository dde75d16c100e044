"""
Outbound email over SMTP.

The transport is built from config on first use and shared for the life of
the process. Callers run these functions as background tasks, so none of
the public senders raise: they log and return an EmailResult.
"""
import logging
import smtplib
import threading
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import formataddr, make_msgid
from html import escape
from typing import Optional

from app.core import config

logger = logging.getLogger(__name__)

BRAND = "WorkCompass"


@dataclass
class EmailResult:
    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


class SmtpTransport:
    """Connection settings for one SMTP relay; opens a connection per message."""

    def __init__(self, host: str, port: int, secure: bool, user: Optional[str], password: Optional[str]):
        self.host = host
        self.port = port
        self.secure = secure
        self.user = user
        self.password = password

    def send(self, message: EmailMessage) -> None:
        smtp_cls = smtplib.SMTP_SSL if self.secure else smtplib.SMTP
        with smtp_cls(self.host, self.port, timeout=30) as server:
            if not self.secure:
                server.ehlo()
                if server.has_extn("starttls"):
                    server.starttls()
                    server.ehlo()
            if self.user:
                server.login(self.user, self.password or "")
            server.send_message(message)

    def __repr__(self):
        return f"<SmtpTransport(host='{self.host}', port={self.port}, secure={self.secure})>"


_transport: Optional[SmtpTransport] = None
_transport_lock = threading.Lock()


def get_transport() -> SmtpTransport:
    """Process-wide transport, created once under a lock."""
    global _transport
    if _transport is None:
        with _transport_lock:
            if _transport is None:
                _transport = SmtpTransport(
                    host=config.SMTP_HOST,
                    port=config.SMTP_PORT,
                    secure=config.SMTP_SECURE,
                    user=config.SMTP_USER,
                    password=config.SMTP_PASS,
                )
                logger.info(f"SMTP transport initialized: {_transport!r}, user_set={bool(config.SMTP_USER)}")
    return _transport


def send_email(to: str, subject: str, html: str, text: Optional[str] = None) -> EmailResult:
    """
    Build and send one multipart message. Header values with line breaks
    are refused by EmailMessage and reported as a failed result.
    """
    try:
        message = EmailMessage()
        message["From"] = formataddr((BRAND, config.EMAIL_FROM))
        message["To"] = to
        message["Subject"] = subject
        message["Message-ID"] = make_msgid(domain=config.EMAIL_FROM.split("@")[-1])
        message.set_content(text or subject)
        message.add_alternative(html, subtype="html")

        get_transport().send(message)
    except (smtplib.SMTPException, OSError, ValueError) as e:
        return EmailResult(success=False, error=str(e))

    return EmailResult(success=True, message_id=message["Message-ID"])


def _layout(heading: str, body_html: str) -> str:
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; padding: 20px;">'
        f'<h1 style="color: #2563eb; margin: 0;">{BRAND}</h1>'
        f'<h2 style="color: #1f2937;">{heading}</h2>'
        f"{body_html}"
        "</div>"
    )


def send_welcome_email(email: str, user_name: str) -> EmailResult:
    dashboard_url = f"{config.FRONTEND_URL}/dashboard"
    html = _layout(
        f"Hi {escape(user_name)}!",
        "<p>Welcome to WorkCompass. Track all your job applications in one place "
        "and follow their status from applied to offer.</p>"
        f'<p><a href="{dashboard_url}">Get Started</a></p>',
    )
    text = f"Hi {user_name},\n\nWelcome to WorkCompass!\n\nGet started: {dashboard_url}\n"

    result = send_email(email, "Welcome to WorkCompass!", html, text)
    if result.success:
        logger.info(f"Welcome email sent: message_id={result.message_id}")
    else:
        # not critical
        logger.warning(f"Welcome email failed: {result.error}")
    return result


def send_password_reset_email(email: str, reset_token: str, user_name: Optional[str]) -> EmailResult:
    reset_url = f"{config.FRONTEND_URL}/?reset=true&token={reset_token}"
    greeting = escape(user_name or "there")
    html = _layout(
        "Password Reset Request",
        f"<p>Hi {greeting},</p>"
        "<p>We received a request to reset your WorkCompass password.</p>"
        f'<p><a href="{reset_url}">Reset Password</a></p>'
        "<p>This link will expire in 1 hour.</p>"
        "<p>If you didn't request this, you can safely ignore this email.</p>",
    )
    text = (
        f"Hi {user_name or 'there'},\n\n"
        f"Reset your WorkCompass password: {reset_url}\n\n"
        "This link will expire in 1 hour. If you didn't request this, ignore this email.\n"
    )

    result = send_email(email, "Reset Your WorkCompass Password", html, text)
    if result.success:
        logger.info(f"Password reset email sent: message_id={result.message_id}")
    else:
        logger.error(f"Password reset email failed: {result.error}")
    return result


def send_feedback_email(
    from_name: str,
    from_email: str,
    message: str,
    subject: Optional[str] = None,
    rating: Optional[int] = None,
) -> EmailResult:
    rating_line = f"<p>Rating: {rating}/5</p>" if rating else ""
    html = _layout(
        "New feedback",
        f"<p>From: {escape(from_name)} &lt;{escape(from_email)}&gt;</p>"
        f"{rating_line}"
        f'<p style="white-space: pre-wrap;">{escape(message)}</p>',
    )
    text = f"From: {from_name} <{from_email}>\n" + (f"Rating: {rating}/5\n" if rating else "") + f"\n{message}\n"

    result = send_email(config.FEEDBACK_EMAIL, f"[Feedback] {subject or 'WorkCompass feedback'}", html, text)
    if result.success:
        logger.info(f"Feedback email sent: message_id={result.message_id}")
    else:
        logger.error(f"Feedback email failed: {result.error}")
    return result
