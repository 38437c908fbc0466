"""Job posting and application models"""

from typing import Optional

from sqlalchemy import (
    Column, String, Text, Float, Boolean, JSON, Uuid, DateTime, ForeignKey,
    UniqueConstraint, Enum as SQLEnum
)
from sqlalchemy.orm import relationship, attribute_keyed_dict
from backend.app.core.database import Base
from backend.app.models.base import TimestampMixin, utcnow
import uuid
import enum


def _values(enum_cls):
    return [member.value for member in enum_cls]


class JobCategory(str, enum.Enum):
    """Closed set of job categories"""
    WEB_DEVELOPMENT = "Web Development"
    MOBILE_DEVELOPMENT = "Mobile Development"
    DESIGN = "Design"
    WRITING = "Writing"
    MARKETING = "Marketing"
    DATA_SCIENCE = "Data Science"
    OTHER = "Other"


class BudgetType(str, enum.Enum):
    """How the budget amount is paid"""
    FIXED = "fixed"
    HOURLY = "hourly"


class JobDuration(str, enum.Enum):
    """Expected job duration"""
    LESS_THAN_1_WEEK = "less than 1 week"
    ONE_TO_TWO_WEEKS = "1-2 weeks"
    TWO_TO_FOUR_WEEKS = "2-4 weeks"
    ONE_TO_THREE_MONTHS = "1-3 months"
    THREE_TO_SIX_MONTHS = "3-6 months"
    MORE_THAN_6_MONTHS = "more than 6 months"


class ExperienceLevel(str, enum.Enum):
    """Experience level enumeration"""
    ENTRY = "entry"
    INTERMEDIATE = "intermediate"
    EXPERT = "expert"


class JobStatus(str, enum.Enum):
    """Job status enumeration"""
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ApplicationStatus(str, enum.Enum):
    """Application status enumeration"""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class Job(Base, TimestampMixin):
    """Job posting owned by a client"""
    
    __tablename__ = "jobs"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    title = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False)
    category = Column(SQLEnum(JobCategory, name="job_category", values_callable=_values), nullable=False, index=True)
    skills = Column(JSON, nullable=False, default=list)
    budget_type = Column(SQLEnum(BudgetType, name="budget_type", values_callable=_values), nullable=False)
    budget_amount = Column(Float, nullable=False, index=True)
    budget_min = Column(Float, nullable=True)
    budget_max = Column(Float, nullable=True)
    duration = Column(SQLEnum(JobDuration, name="job_duration", values_callable=_values), nullable=True)
    experience = Column(SQLEnum(ExperienceLevel, name="experience_level", values_callable=_values), nullable=False)
    status = Column(
        SQLEnum(JobStatus, name="job_status", values_callable=_values),
        nullable=False,
        default=JobStatus.OPEN,
        index=True
    )
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    deadline = Column(DateTime(timezone=True), nullable=True)
    client_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    hired_freelancer_id = Column(Uuid, ForeignKey("users.id"), nullable=True)
    
    # Relationships
    client = relationship("User", foreign_keys=[client_id])
    hired_freelancer = relationship("User", foreign_keys=[hired_freelancer_id])
    applications = relationship(
        "JobApplication",
        back_populates="job",
        collection_class=attribute_keyed_dict("id"),
        cascade="all, delete-orphan",
        order_by="JobApplication.applied_at"
    )
    
    def application_for(self, freelancer_id) -> Optional["JobApplication"]:
        """The application submitted by ``freelancer_id``, if any"""
        for application in self.applications.values():
            if application.freelancer_id == freelancer_id:
                return application
        return None
    
    @property
    def budget(self) -> dict:
        return {
            "type": self.budget_type,
            "amount": self.budget_amount,
            "min_amount": self.budget_min,
            "max_amount": self.budget_max,
        }
    
    def __repr__(self):
        return f"<Job(id={self.id}, title={self.title}, status={self.status})>"


class JobApplication(Base):
    """A freelancer's bid on a job; lives and dies with its job"""
    
    __tablename__ = "job_applications"
    
    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    job_id = Column(Uuid, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True)
    freelancer_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    proposal = Column(Text, nullable=False)
    bid_amount = Column(Float, nullable=False)
    estimated_duration = Column(String(255), nullable=False)
    applied_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    status = Column(
        SQLEnum(ApplicationStatus, name="application_status", values_callable=_values),
        nullable=False,
        default=ApplicationStatus.PENDING
    )
    
    # Relationships
    job = relationship("Job", back_populates="applications")
    freelancer = relationship("User")
    
    # One application per freelancer per job
    __table_args__ = (
        UniqueConstraint("job_id", "freelancer_id", name="uq_job_application_freelancer"),
    )
    
    def __repr__(self):
        return f"<JobApplication(id={self.id}, job_id={self.job_id}, status={self.status})>"
