"""
Google sign-in: verification of ID tokens issued to the frontend.
"""
import logging

from google.auth.transport import requests as google_requests
from google.oauth2 import id_token as google_id_token

from app.core import config
from app.core.errors import Unauthenticated, Unexpected

logger = logging.getLogger(__name__)


def verify_google_token(token: str) -> dict:
    """
    Verify a Google ID token against GOOGLE_CLIENT_ID and return its claims.

    Raises:
        Unexpected: GOOGLE_CLIENT_ID is not configured
        Unauthenticated: the token is invalid, expired, for another audience,
            or carries no verified email
    """
    if not config.GOOGLE_CLIENT_ID:
        logger.error("Google auth error: Missing GOOGLE_CLIENT_ID env var")
        raise Unexpected("Google auth not configured. Missing GOOGLE_CLIENT_ID.")

    try:
        claims = google_id_token.verify_oauth2_token(
            token, google_requests.Request(), config.GOOGLE_CLIENT_ID
        )
    except ValueError as e:
        logger.warning(f"Google token rejected: {e}")
        raise Unauthenticated("Google authentication failed.")

    if not claims.get("email") or claims.get("email_verified") is False:
        raise Unauthenticated("Google account has no verified email.")
    return claims
