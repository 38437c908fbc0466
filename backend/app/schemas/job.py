"""Job schemas for API requests and responses"""

from typing import List, Optional
from datetime import datetime
from uuid import UUID
from pydantic import Field, field_validator, model_validator

from backend.app.models.job import (
    JobCategory, BudgetType, JobDuration, ExperienceLevel, JobStatus, ApplicationStatus
)
from backend.app.schemas.common import CamelModel, PaginationMeta
from backend.app.schemas.user import UserSummary, ApplicantSummary, Profile


def _clean_title(v: str) -> str:
    v = v.strip()
    if len(v) < 5:
        raise ValueError('Title must be at least 5 characters')
    return v


def _clean_description(v: str) -> str:
    v = v.strip()
    if len(v) < 20:
        raise ValueError('Description must be at least 20 characters')
    return v


def _clean_skills(v: List[str]) -> List[str]:
    return [skill.strip() for skill in v if skill.strip()]


class Budget(CamelModel):
    """Job budget"""
    type: BudgetType
    amount: float = Field(..., ge=0, allow_inf_nan=False)
    min_amount: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    max_amount: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    
    @model_validator(mode='after')
    def validate_range(self):
        if (self.min_amount is not None and self.max_amount is not None
                and self.min_amount > self.max_amount):
            raise ValueError('Budget minimum cannot be greater than maximum')
        return self


class JobCreateRequest(CamelModel):
    """Request schema for creating a job"""
    title: str
    description: str
    category: JobCategory
    skills: List[str] = Field(default_factory=list)
    budget: Budget
    duration: Optional[JobDuration] = None
    experience: ExperienceLevel
    deadline: Optional[datetime] = None
    
    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return _clean_title(v)
    
    @field_validator('description')
    @classmethod
    def validate_description(cls, v):
        return _clean_description(v)
    
    @field_validator('skills')
    @classmethod
    def validate_skills(cls, v):
        return _clean_skills(v)


class JobUpdateRequest(CamelModel):
    """Request schema for updating a job; only provided fields change"""
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[JobCategory] = None
    skills: Optional[List[str]] = None
    budget: Optional[Budget] = None
    duration: Optional[JobDuration] = None
    experience: Optional[ExperienceLevel] = None
    status: Optional[JobStatus] = None
    deadline: Optional[datetime] = None
    
    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return _clean_title(v) if v is not None else v
    
    @field_validator('description')
    @classmethod
    def validate_description(cls, v):
        return _clean_description(v) if v is not None else v
    
    @field_validator('skills')
    @classmethod
    def validate_skills(cls, v):
        return _clean_skills(v) if v is not None else v


class AdminJobUpdateRequest(CamelModel):
    """Moderation update; omitted fields stay unchanged"""
    status: Optional[JobStatus] = None
    is_active: Optional[bool] = None


class ApplicationResponse(CamelModel):
    """An application embedded in a job"""
    id: UUID
    freelancer: ApplicantSummary
    proposal: str
    bid_amount: float
    estimated_duration: str
    applied_at: datetime
    status: ApplicationStatus
    
    @classmethod
    def from_application(cls, application):
        """Create ApplicationResponse from JobApplication model"""
        freelancer = application.freelancer
        return cls(
            id=application.id,
            freelancer=ApplicantSummary(
                id=freelancer.id,
                name=freelancer.name,
                profile=Profile(**freelancer.profile)
            ),
            proposal=application.proposal,
            bid_amount=application.bid_amount,
            estimated_duration=application.estimated_duration,
            applied_at=application.applied_at,
            status=application.status
        )


class JobResponse(CamelModel):
    """Response schema for job details"""
    id: UUID
    title: str
    description: str
    category: JobCategory
    skills: List[str]
    budget: Budget
    duration: Optional[JobDuration]
    experience: ExperienceLevel
    status: JobStatus
    is_active: bool
    client: UserSummary
    hired_freelancer: Optional[UUID]
    deadline: Optional[datetime]
    created_at: datetime
    application_count: int
    applications: Optional[List[ApplicationResponse]] = None
    
    @classmethod
    def from_job(cls, job, include_applications: bool = True, include_client_email: bool = True):
        """Create JobResponse from Job model"""
        applications = list(job.applications.values())
        return cls(
            id=job.id,
            title=job.title,
            description=job.description,
            category=job.category,
            skills=list(job.skills or []),
            budget=Budget(**job.budget),
            duration=job.duration,
            experience=job.experience,
            status=job.status,
            is_active=job.is_active,
            client=UserSummary(
                id=job.client.id,
                name=job.client.name,
                email=job.client.email if include_client_email else None
            ),
            hired_freelancer=job.hired_freelancer_id,
            deadline=job.deadline,
            created_at=job.created_at,
            application_count=len(applications),
            applications=(
                [ApplicationResponse.from_application(a) for a in applications]
                if include_applications else None
            )
        )


class JobListResponse(CamelModel):
    """Response schema for job listing with pagination"""
    items: List[JobResponse]
    pagination: PaginationMeta

