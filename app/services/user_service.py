"""
Self-service profile management for the authenticated user.
"""
import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from app.core.errors import Conflict, ValidationError
from app.core.security import hash_password, verify_password
from app.db.models.user import User
from app.services.candidate_service import email_taken
from app.services.record_store import RecordStore

logger = logging.getLogger(__name__)


def update_profile(db: Session, actor, patch: Dict[str, Any]) -> User:
    """
    Partial profile update.

    recruiter_company is the recruiter's tenant key: only recruiters may set
    it and they may not clear it. Candidates' tenant is managed by their
    recruiter, so the field is dropped for them.
    """
    if "recruiter_company" in patch:
        if not actor.is_recruiter:
            patch.pop("recruiter_company")
        elif not (patch["recruiter_company"] or "").strip():
            raise ValidationError("Company is required for recruiters.")
        else:
            patch["recruiter_company"] = patch["recruiter_company"].strip()

    email = patch.get("email")
    if email and email != actor.user.email and email_taken(db, email, exclude_id=actor.id):
        raise Conflict("Email already exists.")

    user = RecordStore(db).update(User, actor.id, patch, not_found="User not found.")
    logger.info(f"Profile updated: user_id={actor.id}, fields={sorted(patch)}")
    return user


def change_password(db: Session, actor, current_password: str, new_password: str) -> None:
    user = actor.user
    if not verify_password(current_password, user.password_hash):
        raise ValidationError("Current password is incorrect.")

    user.password_hash = hash_password(new_password)
    db.commit()
    logger.info(f"Password changed: user_id={user.id}")


def delete_account(db: Session, actor) -> int:
    """Delete the caller and, in the same transaction, their applications."""
    return RecordStore(db).delete_user(actor.id)
