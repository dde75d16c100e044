"""
Pydantic schemas for authentication endpoints.
"""
from typing import Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from app.db.models.user import UserRole

PASSWORD_MIN_LENGTH = 6
PASSWORD_MAX_BYTES = 72


def normalize_email(v):
    """Emails are identity keys: compared trimmed and lowercased."""
    if isinstance(v, str):
        return v.strip().lower()
    return v


def check_password_length(v: str) -> str:
    if len(v) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be {PASSWORD_MAX_BYTES} characters or fewer")
    return v


class SignupRequest(BaseModel):
    """Request schema for user signup."""
    name: str = Field(..., min_length=1, max_length=200, description="User's full name")
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., description="Password (6 characters to 72 bytes)")
    role: UserRole = Field(default=UserRole.CANDIDATE, description="candidate or recruiter")
    recruiter_company: Optional[str] = Field(default=None, description="Required for recruiters")

    @field_validator("email", mode="before")
    @classmethod
    def lowercase_email(cls, v):
        return normalize_email(v)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Name is required")
        return v

    @field_validator("password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        return check_password_length(v)

    class Config:
        use_enum_values = True
        json_schema_extra = {
            "example": {
                "name": "Jane Doe",
                "email": "jane.doe@example.com",
                "password": "SecurePass123",
                "role": "recruiter",
                "recruiter_company": "Acme"
            }
        }


class LoginRequest(BaseModel):
    """Request schema for user login."""
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(..., min_length=1, description="User's password")

    @field_validator("email", mode="before")
    @classmethod
    def lowercase_email(cls, v):
        return normalize_email(v)


class GoogleAuthRequest(BaseModel):
    id_token: str = Field(..., min_length=1, description="Google ID token from the client")


class ForgotPasswordRequest(BaseModel):
    email: EmailStr

    @field_validator("email", mode="before")
    @classmethod
    def lowercase_email(cls, v):
        return normalize_email(v)


class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1)
    new_password: str

    @field_validator("new_password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        return check_password_length(v)


class ChangePasswordRequest(BaseModel):
    current_password: str = Field(..., min_length=1)
    new_password: str

    @field_validator("new_password")
    @classmethod
    def validate_password_length(cls, v: str) -> str:
        return check_password_length(v)


class UserSummary(BaseModel):
    id: int
    name: str
    email: str
    role: str
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True


class AuthResponse(BaseModel):
    """Returned by signup, login and Google sign-in."""
    message: str
    token: str
    user: UserSummary


class MessageResponse(BaseModel):
    message: str
