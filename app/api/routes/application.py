import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.core.auth_dependency import Actor, get_current_actor
from app.core.errors import Unexpected
from app.db.session import get_db
from app.schemas.application import ApplicationCreate, ApplicationResponse, ApplicationUpdate
from app.schemas.auth import MessageResponse
from app.services import application_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/applications", tags=["Applications"])


# ✅ CREATE JOB APPLICATION
@router.post("", status_code=status.HTTP_201_CREATED, response_model=ApplicationResponse)
def create_application(
    payload: ApplicationCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        application = application_service.create_application(db, actor, payload)
        return ApplicationResponse.model_validate(application)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create application: {e}", exc_info=True)
        raise Unexpected("Server error while creating application.")


# ✅ LIST APPLICATIONS (own, or a recruiter's company / one candidate)
@router.get("", response_model=List[ApplicationResponse])
def list_applications(
    candidate_id: Optional[int] = Query(None, description="Recruiters: restrict to one candidate"),
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    applications = application_service.list_applications(db, actor, candidate_id)
    return [ApplicationResponse.model_validate(a) for a in applications]


# ✅ UPDATE
@router.put("/{application_id}", response_model=ApplicationResponse)
def update_application(
    application_id: int,
    payload: ApplicationUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        application = application_service.update_application(
            db, actor, application_id, payload.model_dump(exclude_unset=True)
        )
        return ApplicationResponse.model_validate(application)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update application {application_id}: {e}", exc_info=True)
        raise Unexpected("Server error while updating application.")


# ✅ DELETE
@router.delete("/{application_id}", response_model=MessageResponse)
def delete_application(
    application_id: int,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    application_service.delete_application(db, actor, application_id)
    return MessageResponse(message="Application deleted successfully.")
