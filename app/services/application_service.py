"""
Job application CRUD, scoped by the access policy.

Reads, updates and deletes all go through the same application filter, so
an application a caller cannot list is also one they cannot change.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session, joinedload

from app.core.access_policy import application_filter
from app.core.errors import ValidationError
from app.db.models.user import User
from app.db.models.application import Application
from app.schemas.application import ApplicationCreate
from app.services.record_store import RecordStore

logger = logging.getLogger(__name__)


def create_application(db: Session, actor, data: ApplicationCreate) -> Application:
    """
    Candidates always create for themselves; a candidate_id they send is
    ignored. Recruiters must name a candidate from their own company.
    """
    if actor.is_recruiter:
        if data.candidate_id is None:
            raise ValidationError("candidate_id is required when creating as a recruiter.")
        application_filter(db, actor, data.candidate_id)
        candidate_id = data.candidate_id
    else:
        candidate_id = actor.id

    owner = db.get(User, candidate_id)
    fields = data.model_dump(exclude={"candidate_id"}, exclude_none=True)

    application = RecordStore(db).create(
        Application,
        candidate_id=candidate_id,
        recruiter_company=owner.company if owner else None,
        **fields,
    )
    logger.info(
        f"Application created: application_id={application.id}, "
        f"candidate_id={candidate_id}, actor_id={actor.id}"
    )
    return application


def list_applications(db: Session, actor, candidate_id: Optional[int] = None) -> List[Application]:
    scope = application_filter(db, actor, candidate_id)
    return (
        db.query(Application)
        .options(joinedload(Application.candidate))
        .filter(scope)
        .order_by(Application.date.desc())
        .all()
    )


def update_application(db: Session, actor, application_id: int, patch: Dict[str, Any]) -> Application:
    patch.pop("candidate_id", None)
    application = RecordStore(db).update(
        Application,
        application_id,
        patch,
        application_filter(db, actor),
        not_found="Application not found.",
    )
    logger.info(f"Application updated: application_id={application_id}, actor_id={actor.id}, fields={sorted(patch)}")
    return application


def delete_application(db: Session, actor, application_id: int) -> None:
    RecordStore(db).delete(
        Application,
        application_id,
        application_filter(db, actor),
        not_found="Application not found.",
    )
    logger.info(f"Application deleted: application_id={application_id}, actor_id={actor.id}")
