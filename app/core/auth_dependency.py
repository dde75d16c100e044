from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from sqlalchemy.orm import Session

from app.core.errors import Unauthenticated
from app.core.security import decode_token, SESSION_PURPOSE
from app.db.session import get_db
from app.db.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Actor:
    """The authenticated identity behind a request."""
    id: int
    role: str
    tenant_key: Optional[str]
    user: User

    @property
    def is_recruiter(self) -> bool:
        return self.user.is_recruiter


def authenticate(db: Session, token: Optional[str]) -> Actor:
    """
    Resolve a bearer token to an Actor.

    Raises Unauthenticated when the token is missing, malformed, expired,
    not a session token, or its subject no longer exists.
    """
    if not token:
        raise Unauthenticated("No token provided, authorization denied.")

    try:
        payload = decode_token(token, purpose=SESSION_PURPOSE)
    except JWTError:
        raise Unauthenticated("Token is not valid.")

    user = db.get(User, payload["sub"])
    if user is None:
        raise Unauthenticated("User not found.")

    return Actor(id=user.id, role=user.role, tenant_key=user.tenant_key, user=user)


def get_current_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Actor:
    """Authenticated Actor from the Authorization header."""
    token = credentials.credentials if credentials else None
    return authenticate(db, token)
