"""
Application model: one job application owned by one candidate.
"""
import enum
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base


class ApplicationStatus(str, enum.Enum):
    APPLIED = "Applied"
    INTERVIEW = "Interview"
    OFFER = "Offer"
    REJECTED = "Rejected"


class InterviewType(str, enum.Enum):
    VIDEO = "video"
    PHONE = "phone"
    IN_PERSON = "in-person"


def _utcnow():
    return datetime.now(timezone.utc)


class Application(Base):
    __tablename__ = "applications"

    id = Column(Integer, primary_key=True, index=True)
    candidate_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    company = Column(String, nullable=False)
    role = Column(String, nullable=False)
    status = Column(String, nullable=False, default=ApplicationStatus.APPLIED.value)
    date = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    notes = Column(Text, nullable=True)

    # Interview
    interview_time = Column(String, nullable=True)
    interview_date = Column(DateTime(timezone=True), nullable=True)
    interview_location = Column(String, nullable=True)
    interview_type = Column(String, nullable=True)
    interview_notes = Column(Text, nullable=True)

    # Tenant stamp, copied from the candidate at creation
    recruiter_company = Column(String, nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    candidate = relationship("User", back_populates="applications")

    __table_args__ = (
        Index("idx_candidate_date", "candidate_id", "date"),
    )

    def __repr__(self):
        return f"<Application(id={self.id}, candidate_id={self.candidate_id}, status='{self.status}')>"
