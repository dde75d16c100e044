"""
Pydantic schemas for profile and recruiter-managed candidate endpoints.

Update schemas are partial: a field left out of the request body is not
touched, a field sent as null is cleared.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field, field_validator

from app.schemas.auth import normalize_email


class ProfileResponse(BaseModel):
    """The authenticated user's own record, without credentials."""
    id: int
    name: str
    email: str
    role: str
    oauth_provider: Optional[str] = None
    avatar_url: Optional[str] = None
    recruiter_company: Optional[str] = None
    company: Optional[str] = None
    job_title: Optional[str] = None
    experience: Optional[str] = None
    skills: Optional[str] = None
    location: Optional[str] = None
    striving_for: Optional[str] = None
    wished_salary: Optional[str] = None
    early_start_date: Optional[datetime] = None
    candidate_notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    recruiter_company: Optional[str] = None
    location: Optional[str] = None
    striving_for: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def lowercase_email(cls, v):
        return normalize_email(v)


class CandidateCreate(BaseModel):
    """
    Recruiter-provisioned candidate.

    name and email are checked by the provisioning service so that the
    error reads the same whether the field is missing or blank.
    """
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    wished_salary: Optional[str] = None
    early_start_date: Optional[datetime] = None
    candidate_notes: Optional[str] = None
    job_title: Optional[str] = None
    experience: Optional[str] = None
    skills: Optional[str] = None
    location: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def lowercase_email(cls, v):
        return normalize_email(v) or None

    class Config:
        json_schema_extra = {
            "example": {
                "name": "Sam Candidate",
                "email": "sam@example.com",
                "job_title": "Backend Engineer",
                "skills": "python, sql",
                "wished_salary": "90k",
                "early_start_date": "2026-01-01T00:00:00Z"
            }
        }


class CandidateUpdate(BaseModel):
    """Tenant keys are not part of this schema; a candidate stays in its company."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    wished_salary: Optional[str] = None
    early_start_date: Optional[datetime] = None
    candidate_notes: Optional[str] = None
    job_title: Optional[str] = None
    experience: Optional[str] = None
    skills: Optional[str] = None
    location: Optional[str] = None

    @field_validator("email", mode="before")
    @classmethod
    def lowercase_email(cls, v):
        return normalize_email(v)


class CandidateResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str
    company: Optional[str] = None
    wished_salary: Optional[str] = None
    early_start_date: Optional[datetime] = None
    candidate_notes: Optional[str] = None
    job_title: Optional[str] = None
    experience: Optional[str] = None
    skills: Optional[str] = None
    location: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
