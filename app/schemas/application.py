"""
Pydantic schemas for application endpoints.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field

from app.db.models.application import ApplicationStatus, InterviewType


class ApplicationBase(BaseModel):
    company: str = Field(..., min_length=1, description="Company applied to")
    role: str = Field(..., min_length=1, description="Role title")
    status: ApplicationStatus = Field(default=ApplicationStatus.APPLIED)
    date: Optional[datetime] = Field(None, description="Defaults to now")
    notes: Optional[str] = None
    interview_time: Optional[str] = None
    interview_date: Optional[datetime] = None
    interview_location: Optional[str] = None
    interview_type: Optional[InterviewType] = None
    interview_notes: Optional[str] = None


class ApplicationCreate(ApplicationBase):
    """candidate_id is required for recruiters and ignored for candidates."""
    candidate_id: Optional[int] = None

    class Config:
        use_enum_values = True
        json_schema_extra = {
            "example": {
                "company": "Acme",
                "role": "Backend Engineer",
                "status": "Applied",
                "notes": "Referred by Dana"
            }
        }


class ApplicationUpdate(BaseModel):
    """Partial update. The owning candidate cannot be changed."""
    company: Optional[str] = Field(None, min_length=1)
    role: Optional[str] = Field(None, min_length=1)
    status: Optional[ApplicationStatus] = None
    date: Optional[datetime] = None
    notes: Optional[str] = None
    interview_time: Optional[str] = None
    interview_date: Optional[datetime] = None
    interview_location: Optional[str] = None
    interview_type: Optional[InterviewType] = None
    interview_notes: Optional[str] = None

    class Config:
        use_enum_values = True


class CandidateRef(BaseModel):
    id: int
    name: str
    email: str
    role: str

    class Config:
        from_attributes = True


class ApplicationResponse(ApplicationBase):
    id: int
    candidate_id: int
    recruiter_company: Optional[str] = None
    candidate: Optional[CandidateRef] = None

    class Config:
        from_attributes = True
