"""
Recruiter-only candidate management.

All endpoints are scoped to the recruiter's company. A candidate id from
another company answers exactly like an id that does not exist.
"""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.auth_dependency import Actor, get_current_actor
from app.core.errors import Unexpected
from app.db.session import get_db
from app.schemas.auth import MessageResponse
from app.schemas.user import CandidateCreate, CandidateResponse, CandidateUpdate
from app.services import candidate_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth/candidates", tags=["Candidates"])


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CandidateResponse)
def create_candidate(
    payload: CandidateCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """
    Provision a passwordless candidate in the recruiter's company.
    """
    try:
        candidate = candidate_service.provision_candidate(db, actor, payload)
        return CandidateResponse.model_validate(candidate)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create candidate: {e}", exc_info=True)
        raise Unexpected("Server error creating candidate.")


@router.get("", response_model=List[CandidateResponse])
def list_candidates(
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    candidates = candidate_service.list_candidates(db, actor)
    return [CandidateResponse.model_validate(c) for c in candidates]


@router.put("/{candidate_id}", response_model=CandidateResponse)
def update_candidate(
    candidate_id: int,
    payload: CandidateUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    try:
        candidate = candidate_service.update_candidate(
            db, actor, candidate_id, payload.model_dump(exclude_unset=True)
        )
        return CandidateResponse.model_validate(candidate)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update candidate {candidate_id}: {e}", exc_info=True)
        raise Unexpected("Server error updating candidate.")


@router.delete("/{candidate_id}", response_model=MessageResponse)
def delete_candidate(
    candidate_id: int,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    candidate_service.delete_candidate(db, actor, candidate_id)
    return MessageResponse(message="Candidate deleted successfully.")
