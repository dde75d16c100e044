"""
User model: login identity plus candidate/recruiter profile.
"""
import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.db.base import Base


class UserRole(str, enum.Enum):
    CANDIDATE = "candidate"
    RECRUITER = "recruiter"


class OAuthProvider(str, enum.Enum):
    """Markers for accounts that have no password of their own."""
    GOOGLE = "google"
    RECRUITER_CREATED = "recruiter-created"


class User(Base):
    """
    A candidate or a recruiter.

    Tenant keys: recruiters carry their company in recruiter_company;
    candidates are partitioned by company. Recruiter-provisioned candidates
    get both set to the recruiter's company.
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=True)
    role = Column(String, nullable=False, default=UserRole.CANDIDATE.value, index=True)

    # External identity
    oauth_provider = Column(String, nullable=True)
    oauth_id = Column(String, nullable=True)
    avatar_url = Column(String, nullable=True)

    # Tenant keys
    recruiter_company = Column(String, nullable=True, index=True)
    company = Column(String, nullable=True, index=True)

    # Profile
    job_title = Column(String, nullable=True)
    experience = Column(String, nullable=True)
    skills = Column(String, nullable=True)
    location = Column(String, nullable=True)
    wished_salary = Column(String, nullable=True)
    early_start_date = Column(DateTime(timezone=True), nullable=True)
    candidate_notes = Column(Text, nullable=True)
    striving_for = Column(String, nullable=True)

    # Password reset
    reset_password_token = Column(String, nullable=True)
    reset_password_expires = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    applications = relationship(
        "Application",
        back_populates="candidate",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (
        Index("idx_role_company", "role", "company"),
    )

    @property
    def is_recruiter(self) -> bool:
        return self.role == UserRole.RECRUITER.value

    @property
    def tenant_key(self):
        return self.recruiter_company if self.is_recruiter else self.company

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role='{self.role}')>"
