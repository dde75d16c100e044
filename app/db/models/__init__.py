"""
Database models module.

Importing this package registers every model with Base.metadata before
table creation or migrations.
"""
from app.db.models.user import User, UserRole, OAuthProvider
from app.db.models.application import Application, ApplicationStatus, InterviewType

__all__ = [
    "User",
    "UserRole",
    "OAuthProvider",
    "Application",
    "ApplicationStatus",
    "InterviewType",
]
