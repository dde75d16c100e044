"""
Access policy: which records an actor may see or change.

Each function returns a SQLAlchemy filter clause to hand to the record store,
or raises. There is no "no filter" outcome: a candidate is always pinned to
their own id and a recruiter is always pinned to their company.

Outward signals:
- listing another tenant's applications by candidate id -> Forbidden
- looking up a single out-of-scope record by id -> NotFound (the record
  store raises it when id and filter do not match jointly), so a
  recruiter cannot probe which ids exist in other companies
"""
import logging
from typing import Optional

from sqlalchemy import and_, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from app.core.errors import Forbidden
from app.core.tenancy import resolve_tenant
from app.db.models.user import User, UserRole
from app.db.models.application import Application

logger = logging.getLogger(__name__)


def tenant_candidates(tenant: str) -> ColumnElement:
    """Candidates partitioned into a company."""
    return and_(User.role == UserRole.CANDIDATE.value, User.company == tenant)


def candidate_filter(actor) -> ColumnElement:
    """
    Filter over users for recruiter candidate management.

    Only recruiters manage candidate records; they see the candidates of
    their own company and nobody else.
    """
    if not actor.is_recruiter:
        raise Forbidden("Only recruiters can manage candidates.")
    return tenant_candidates(resolve_tenant(actor))


def application_filter(
    db: Session,
    actor,
    requested_candidate_id: Optional[int] = None,
) -> ColumnElement:
    """
    Filter over applications for the given actor.

    - candidate: own applications only; any requested id is ignored
    - recruiter + candidate id: that candidate's applications, if the
      candidate is in the recruiter's company, else Forbidden
    - recruiter without id: applications of every candidate in the company
    """
    if not actor.is_recruiter:
        return Application.candidate_id == actor.id

    tenant = resolve_tenant(actor)

    if requested_candidate_id is not None:
        candidate_id = db.execute(
            select(User.id).where(User.id == requested_candidate_id, tenant_candidates(tenant))
        ).scalar_one_or_none()
        if candidate_id is None:
            logger.warning(
                f"Recruiter denied applications outside tenant: "
                f"user_id={actor.id}, candidate_id={requested_candidate_id}"
            )
            raise Forbidden("You do not have access to this candidate's applications.")
        return Application.candidate_id == candidate_id

    return Application.candidate_id.in_(select(User.id).where(tenant_candidates(tenant)))
