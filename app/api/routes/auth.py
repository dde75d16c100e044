"""
Authentication and profile endpoints.
"""
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.core.auth_dependency import Actor, get_current_actor
from app.core.errors import Unexpected
from app.db.session import get_db
from app.schemas.auth import (
    AuthResponse,
    ChangePasswordRequest,
    ForgotPasswordRequest,
    GoogleAuthRequest,
    LoginRequest,
    MessageResponse,
    ResetPasswordRequest,
    SignupRequest,
    UserSummary,
)
from app.schemas.user import ProfileResponse, ProfileUpdate
from app.services import auth_service, user_service
from app.services.email_service import send_password_reset_email, send_welcome_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])

PASSWORD_RESET_SENT = "If an account with that email exists, a password reset link has been sent."


def _auth_response(message: str, user) -> AuthResponse:
    return AuthResponse(
        message=message,
        token=auth_service.issue_session_token(user),
        user=UserSummary.model_validate(user),
    )


# ✅ SIGNUP
@router.post("/signup", status_code=status.HTTP_201_CREATED, response_model=AuthResponse)
def signup(
    payload: SignupRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    try:
        user = auth_service.signup(db, payload)
    except HTTPException:
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Signup failed: {e}", exc_info=True)
        raise Unexpected("Server error during signup.")

    background_tasks.add_task(send_welcome_email, user.email, user.name)
    return _auth_response("User registered successfully!", user)


# ✅ LOGIN
@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    user = auth_service.login(db, payload.email, payload.password)
    return _auth_response("Login successful!", user)


# ✅ GOOGLE SIGN-IN
@router.post("/google", response_model=AuthResponse)
def google_auth(payload: GoogleAuthRequest, db: Session = Depends(get_db)):
    user = auth_service.google_login(db, payload.id_token)
    return _auth_response("Google login successful!", user)


# ✅ PASSWORD RESET
@router.post("/forgot-password", response_model=MessageResponse)
def forgot_password(
    payload: ForgotPasswordRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
):
    """
    Start a password reset.

    The answer is the same whether or not the email is registered and
    whether or not the mail goes out.
    """
    issued = auth_service.request_password_reset(db, payload.email)
    if issued:
        user, token = issued
        background_tasks.add_task(send_password_reset_email, user.email, token, user.name)
    return MessageResponse(message=PASSWORD_RESET_SENT)


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(payload: ResetPasswordRequest, db: Session = Depends(get_db)):
    auth_service.reset_password(db, payload.token, payload.new_password)
    return MessageResponse(message="Password has been reset successfully.")


# ✅ PROFILE
@router.get("/profile", response_model=ProfileResponse)
def get_profile(actor: Actor = Depends(get_current_actor)):
    return ProfileResponse.model_validate(actor.user)


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    payload: ProfileUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    user = user_service.update_profile(db, actor, payload.model_dump(exclude_unset=True))
    return ProfileResponse.model_validate(user)


@router.put("/password", response_model=MessageResponse)
def change_password(
    payload: ChangePasswordRequest,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    user_service.change_password(db, actor, payload.current_password, payload.new_password)
    return MessageResponse(message="Password changed successfully.")


@router.delete("/profile", response_model=MessageResponse)
def delete_account(
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    user_service.delete_account(db, actor)
    return MessageResponse(message="Account deleted successfully.")
