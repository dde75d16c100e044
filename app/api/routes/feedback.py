"""
User feedback, forwarded to the team mailbox.
"""
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, status

from app.core.auth_dependency import Actor, get_current_actor
from app.schemas.auth import MessageResponse
from app.schemas.feedback import FeedbackRequest
from app.services.email_service import send_feedback_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/feedback", tags=["Feedback"])


@router.post("", status_code=status.HTTP_202_ACCEPTED, response_model=MessageResponse)
def submit_feedback(
    payload: FeedbackRequest,
    background_tasks: BackgroundTasks,
    actor: Actor = Depends(get_current_actor),
):
    background_tasks.add_task(
        send_feedback_email,
        actor.user.name,
        actor.user.email,
        payload.message,
        payload.subject,
        payload.rating,
    )
    logger.info(f"Feedback queued: user_id={actor.id}")
    return MessageResponse(message="Thank you for your feedback!")
