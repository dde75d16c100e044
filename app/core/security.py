import logging
import secrets
import bcrypt
from passlib.context import CryptContext
from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import jwt, JWTError
from app.core.config import (
    SECRET_KEY,
    ALGORITHM,
    ACCESS_TOKEN_EXPIRE_DAYS,
    RESET_TOKEN_EXPIRE_MINUTES,
)

logger = logging.getLogger(__name__)

SESSION_PURPOSE = "session"
PASSWORD_RESET_PURPOSE = "password-reset"

BCRYPT_MAX_BYTES = 72

# passlib stays around to verify hashes it produced; new hashes go through bcrypt directly
try:
    pwd_context = CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
    )
    logger.debug("Password context initialized")
except Exception as e:
    logger.warning(f"Failed to initialize passlib context: {e}, using bcrypt directly")
    pwd_context = None


def _password_bytes(password: str) -> bytes:
    """
    Encode a password for bcrypt, cutting it at the 72-byte limit without
    splitting a multi-byte character.
    """
    password_bytes = password.encode("utf-8")
    if len(password_bytes) <= BCRYPT_MAX_BYTES:
        return password_bytes
    logger.warning("Password exceeds 72 bytes, truncating before hashing (validation should have caught this)")
    return password_bytes[:BCRYPT_MAX_BYTES].decode("utf-8", errors="ignore").encode("utf-8")


def hash_password(password: str) -> str:
    """
    Hash a password using bcrypt.

    Args:
        password: Plain text password (max 72 bytes in UTF-8)

    Returns:
        Hashed password string (bcrypt format compatible with passlib)

    Raises:
        ValueError: If password cannot be hashed
    """
    try:
        return bcrypt.hashpw(_password_bytes(password), bcrypt.gensalt()).decode("utf-8")
    except Exception as e:
        logger.error(f"Password hashing failed: {e}", exc_info=True)
        raise ValueError("Invalid password") from e


def verify_password(password: str, hashed: Optional[str]) -> bool:
    """
    Verify a password against its hash.

    Accounts without a password (Google or recruiter-provisioned) never match.
    """
    if not password or not hashed:
        return False
    try:
        try:
            return bcrypt.checkpw(_password_bytes(password), hashed.encode("utf-8"))
        except (ValueError, TypeError):
            if pwd_context:
                return pwd_context.verify(password, hashed)
            return False
    except Exception as e:
        logger.error(f"Password verification failed: {e}", exc_info=True)
        return False


def _encode(claims: dict, expires_delta: timedelta) -> str:
    to_encode = claims.copy()
    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def create_access_token(subject_id: int, role: str, expires_delta: Optional[timedelta] = None) -> str:
    """Session token, valid for ACCESS_TOKEN_EXPIRE_DAYS unless overridden."""
    return _encode(
        {"sub": str(subject_id), "role": role, "purpose": SESSION_PURPOSE},
        expires_delta or timedelta(days=ACCESS_TOKEN_EXPIRE_DAYS),
    )


def create_reset_token(subject_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """
    Password-reset token, valid for RESET_TOKEN_EXPIRE_MINUTES unless overridden.

    The jti makes every issued token distinct so the stored copy identifies
    exactly one request.
    """
    return _encode(
        {"sub": str(subject_id), "purpose": PASSWORD_RESET_PURPOSE, "jti": secrets.token_hex(8)},
        expires_delta or timedelta(minutes=RESET_TOKEN_EXPIRE_MINUTES),
    )


def decode_token(token: str, purpose: str) -> dict:
    """
    Decode a token and check its purpose tag.

    Returns the payload with "sub" converted back to an int.
    Raises JWTError if the token is malformed, expired, for another purpose,
    or carries no usable subject.
    """
    payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    if payload.get("purpose") != purpose:
        raise JWTError("Token purpose mismatch")
    try:
        payload["sub"] = int(payload["sub"])
    except (KeyError, TypeError, ValueError):
        raise JWTError("Token has no valid subject")
    return payload
