"""Application schemas"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID
from pydantic import Field, field_validator
import enum

from backend.app.models.job import ApplicationStatus, JobCategory, JobStatus
from backend.app.schemas.common import CamelModel
from backend.app.schemas.job import Budget, ApplicationResponse


class ApplicationDecision(str, enum.Enum):
    """Decisions a client can take on an application"""
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class ApplicationCreateRequest(CamelModel):
    """Request schema for applying to a job"""
    proposal: str
    bid_amount: float = Field(..., allow_inf_nan=False)
    estimated_duration: str
    
    @field_validator('proposal')
    @classmethod
    def validate_proposal(cls, v):
        v = v.strip()
        if len(v) < 50:
            raise ValueError('Proposal must be at least 50 characters')
        return v
    
    @field_validator('bid_amount')
    @classmethod
    def validate_bid_amount(cls, v):
        if v < 0:
            raise ValueError('Bid amount cannot be negative')
        return v
    
    @field_validator('estimated_duration')
    @classmethod
    def validate_estimated_duration(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('Estimated duration is required')
        return v


class ApplicationDecisionRequest(CamelModel):
    """Accept or reject an application"""
    status: ApplicationDecision


class OwnApplication(CamelModel):
    """The caller's own application, without the applicant identity"""
    id: UUID
    proposal: str
    bid_amount: float
    estimated_duration: str
    applied_at: datetime
    status: ApplicationStatus


class MyApplicationResponse(CamelModel):
    """Job summary plus the caller's application on it"""
    job_id: UUID
    job_title: str
    job_category: JobCategory
    job_budget: Budget
    job_status: JobStatus
    client_name: Optional[str]
    application: OwnApplication
    
    @classmethod
    def from_job(cls, job, application):
        """Create MyApplicationResponse from a job and one of its applications"""
        return cls(
            job_id=job.id,
            job_title=job.title,
            job_category=job.category,
            job_budget=Budget(**job.budget),
            job_status=job.status,
            client_name=job.client.name if job.client else None,
            application=OwnApplication(
                id=application.id,
                proposal=application.proposal,
                bid_amount=application.bid_amount,
                estimated_duration=application.estimated_duration,
                applied_at=application.applied_at,
                status=application.status
            )
        )


class JobApplicationsResponse(CamelModel):
    """One of the caller's jobs with every application on it"""
    id: UUID
    title: str
    category: JobCategory
    budget: Budget
    status: JobStatus
    created_at: datetime
    applications: List[ApplicationResponse]
    
    @classmethod
    def from_job(cls, job):
        """Create JobApplicationsResponse from Job model"""
        return cls(
            id=job.id,
            title=job.title,
            category=job.category,
            budget=Budget(**job.budget),
            status=job.status,
            created_at=job.created_at,
            applications=[ApplicationResponse.from_application(a) for a in job.applications.values()]
        )
