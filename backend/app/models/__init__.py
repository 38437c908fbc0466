"""Database models"""

from backend.app.models.base import TimestampMixin
from backend.app.models.user import User, UserRole
from backend.app.models.job import (
    Job, JobApplication, JobCategory, BudgetType, JobDuration,
    ExperienceLevel, JobStatus, ApplicationStatus
)

__all__ = [
    "TimestampMixin",
    "User",
    "UserRole",
    "Job",
    "JobApplication",
    "JobCategory",
    "BudgetType",
    "JobDuration",
    "ExperienceLevel",
    "JobStatus",
    "ApplicationStatus",
]
