"""
Recruiter-side candidate management.

Recruiters provision passwordless candidate accounts inside their own
company and manage only those candidates. A provisioned candidate claims
the account later through the password reset flow.
"""
import logging
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.core.access_policy import candidate_filter
from app.core.errors import Conflict, Forbidden, ValidationError
from app.core.tenancy import resolve_tenant
from app.db.models.user import User, UserRole, OAuthProvider
from app.schemas.user import CandidateCreate
from app.services.record_store import RecordStore

logger = logging.getLogger(__name__)

PROFILE_FIELDS = (
    "wished_salary",
    "early_start_date",
    "candidate_notes",
    "job_title",
    "experience",
    "skills",
    "location",
)


def email_taken(db: Session, email: str, exclude_id: int = None) -> bool:
    """Emails are unique across all users, not per company."""
    query = db.query(User.id).filter(User.email == email)
    if exclude_id is not None:
        query = query.filter(User.id != exclude_id)
    return query.first() is not None


def provision_candidate(db: Session, actor, profile: CandidateCreate) -> User:
    """
    Create a candidate account on behalf of a recruiter.

    The candidate is stamped with the recruiter's company on both tenant
    columns, has no password and is marked recruiter-created.
    """
    if not actor.is_recruiter:
        raise Forbidden("Only recruiters can create candidates.")
    tenant = resolve_tenant(actor)

    name = (profile.name or "").strip()
    email = profile.email
    if not name or not email:
        raise ValidationError("Name and email are required.")

    if email_taken(db, email):
        raise Conflict("User already exists.")

    fields = {key: getattr(profile, key) for key in PROFILE_FIELDS}
    candidate = RecordStore(db).create(
        User,
        name=name,
        email=email,
        role=UserRole.CANDIDATE,
        password_hash=None,
        oauth_provider=OAuthProvider.RECRUITER_CREATED,
        company=tenant,
        recruiter_company=tenant,
        **fields,
    )
    logger.info(f"Candidate provisioned: candidate_id={candidate.id}, recruiter_id={actor.id}")
    return candidate


def list_candidates(db: Session, actor) -> List[User]:
    return RecordStore(db).find(User, candidate_filter(actor), order_by=User.created_at.desc())


def update_candidate(db: Session, actor, candidate_id: int, patch: Dict[str, Any]) -> User:
    scope = candidate_filter(actor)
    store = RecordStore(db)
    candidate = store.get(User, candidate_id, scope, not_found="Candidate not found.")

    email = patch.get("email")
    if email and email != candidate.email and email_taken(db, email, exclude_id=candidate.id):
        raise Conflict("Email already exists.")

    updated = store.update(User, candidate_id, patch, scope, not_found="Candidate not found.")
    logger.info(f"Candidate updated: candidate_id={candidate_id}, recruiter_id={actor.id}, fields={sorted(patch)}")
    return updated


def delete_candidate(db: Session, actor, candidate_id: int) -> int:
    removed = RecordStore(db).delete_user(candidate_id, candidate_filter(actor), not_found="Candidate not found.")
    logger.info(f"Candidate deleted: candidate_id={candidate_id}, recruiter_id={actor.id}")
    return removed
