"""
Account flows: signup, password login, Google sign-in and password reset.
"""
import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from jose import JWTError
from sqlalchemy.orm import Session

from app.core import config
from app.core.errors import Conflict, Unauthenticated, ValidationError
from app.core.security import (
    create_access_token,
    create_reset_token,
    decode_token,
    hash_password,
    verify_password,
    PASSWORD_RESET_PURPOSE,
)
from app.db.models.user import User, UserRole, OAuthProvider
from app.schemas.auth import SignupRequest
from app.services.candidate_service import email_taken
from app.services.google_auth import verify_google_token
from app.services.record_store import RecordStore

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials."
INVALID_RESET_TOKEN = "Invalid or expired reset token"


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def issue_session_token(user: User) -> str:
    return create_access_token(user.id, user.role)


def signup(db: Session, data: SignupRequest) -> User:
    is_recruiter = data.role == UserRole.RECRUITER.value
    company = (data.recruiter_company or "").strip()
    if is_recruiter and not company:
        raise ValidationError("Company is required for recruiters.")

    if email_taken(db, data.email):
        raise Conflict("User already exists.")

    user = RecordStore(db).create(
        User,
        name=data.name,
        email=data.email,
        password_hash=hash_password(data.password),
        role=data.role,
        recruiter_company=company if is_recruiter else None,
    )
    logger.info(f"User signed up: user_id={user.id}, role={user.role}")
    return user


def login(db: Session, email: str, password: str) -> User:
    """
    Password login. Unknown email, wrong password and passwordless accounts
    all get the same answer.
    """
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.password_hash):
        logger.info("Login failed")
        raise Unauthenticated(INVALID_CREDENTIALS)
    logger.info(f"Login succeeded: user_id={user.id}")
    return user


def google_login(db: Session, token: str) -> User:
    """
    Sign in with a Google ID token. An unknown email becomes a new candidate;
    recruiters sign up through the regular form to name their company.
    """
    claims = verify_google_token(token)
    email = claims["email"].strip().lower()

    user = db.query(User).filter(User.email == email).first()
    if user:
        return user

    user = RecordStore(db).create(
        User,
        name=claims.get("name") or claims.get("given_name") or "User",
        email=email,
        role=UserRole.CANDIDATE,
        oauth_provider=OAuthProvider.GOOGLE,
        oauth_id=claims.get("sub"),
        avatar_url=claims.get("picture"),
    )
    logger.info(f"User created from Google sign-in: user_id={user.id}")
    return user


def request_password_reset(db: Session, email: str) -> Optional[Tuple[User, str]]:
    """
    Issue and store a reset token if the email belongs to an account.

    Returns (user, token) or None. The caller answers the same way in both
    cases.
    """
    user = db.query(User).filter(User.email == email).first()
    if not user:
        logger.info("Password reset requested for unknown email")
        return None

    token = create_reset_token(user.id)
    user.reset_password_token = token
    user.reset_password_expires = datetime.now(timezone.utc) + timedelta(minutes=config.RESET_TOKEN_EXPIRE_MINUTES)
    db.commit()
    logger.info(f"Password reset token issued: user_id={user.id}")
    return user, token


def reset_password(db: Session, token: str, new_password: str) -> User:
    """
    Set a new password from a reset token.

    The token must be a signed password-reset token, equal to the one stored
    on the user, and not past the stored expiry. It is cleared on success so
    it works once. Claiming a recruiter-created account this way removes the
    provisioning marker.
    """
    try:
        payload = decode_token(token, purpose=PASSWORD_RESET_PURPOSE)
    except JWTError:
        raise ValidationError(INVALID_RESET_TOKEN)

    user = db.get(User, payload["sub"])
    if (
        user is None
        or not user.reset_password_token
        or not hmac.compare_digest(user.reset_password_token, token)
        or user.reset_password_expires is None
        or _as_utc(user.reset_password_expires) <= datetime.now(timezone.utc)
    ):
        raise ValidationError(INVALID_RESET_TOKEN)

    user.password_hash = hash_password(new_password)
    user.reset_password_token = None
    user.reset_password_expires = None
    if user.oauth_provider == OAuthProvider.RECRUITER_CREATED.value:
        user.oauth_provider = None
    db.commit()
    logger.info(f"Password reset completed: user_id={user.id}")
    return user
