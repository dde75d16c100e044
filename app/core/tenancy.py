"""
Tenant resolution for recruiter requests.
"""
import logging

from app.core.errors import Forbidden, NoTenant

logger = logging.getLogger(__name__)


def resolve_tenant(actor) -> str:
    """
    Return the company that scopes everything a recruiter can see.

    A recruiter without a company is a configuration error and is refused
    rather than served unfiltered. Candidates have no tenant to resolve.
    """
    if not actor.is_recruiter:
        raise Forbidden("Only recruiters belong to a company tenant.")

    tenant = (actor.tenant_key or "").strip()
    if not tenant:
        logger.warning(f"Recruiter has no company: user_id={actor.id}")
        raise NoTenant()
    return actor.tenant_key
