"""Job management API endpoints"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from backend.app.api.deps import get_job_service
from backend.app.core.security import require_client_or_admin, require_freelancer
from backend.app.models.user import User
from backend.app.models.job import JobStatus, JobCategory, ExperienceLevel
from backend.app.services.job_service import JobService
from backend.app.schemas.common import MessageResponse
from backend.app.schemas.job import (
    JobCreateRequest, JobUpdateRequest, JobResponse, JobListResponse
)
from backend.app.schemas.application import (
    ApplicationCreateRequest, ApplicationDecisionRequest
)
from backend.app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("", response_model=JobListResponse)
async def list_jobs(
    page: int = Query(1, ge=1, description="Page number (1-based)"),
    limit: int = Query(10, ge=1, le=100, description="Page size"),
    category: Optional[JobCategory] = Query(None, description="Job category"),
    experience: Optional[ExperienceLevel] = Query(None, description="Required experience level"),
    budget_min: Optional[float] = Query(None, alias="budgetMin", ge=0, description="Minimum budget amount"),
    budget_max: Optional[float] = Query(None, alias="budgetMax", ge=0, description="Maximum budget amount"),
    search: Optional[str] = Query(None, description="Text search over title, description and skills"),
    job_status: JobStatus = Query(JobStatus.OPEN, alias="status", description="Job status filter"),
    job_service: JobService = Depends(get_job_service)
):
    """
    Search and list active jobs, newest first
    
    Public endpoint. Inactive jobs are never returned; `status` defaults
    to `open`.
    """
    jobs, pagination = await job_service.list_jobs(
        category=category,
        experience=experience,
        budget_min=budget_min,
        budget_max=budget_max,
        search=search,
        status=job_status,
        page=page,
        limit=limit
    )
    
    return JobListResponse(
        items=[
            JobResponse.from_job(job, include_applications=False, include_client_email=False)
            for job in jobs
        ],
        pagination=pagination
    )


@router.get("/{job_id}", response_model=JobResponse)
async def get_job_details(
    job_id: UUID,
    job_service: JobService = Depends(get_job_service)
):
    """Get one job with its client and every applicant resolved"""
    job = await job_service.get_job(job_id)
    return JobResponse.from_job(job)


@router.post("", response_model=JobResponse, status_code=status.HTTP_201_CREATED)
async def create_job(
    job_data: JobCreateRequest,
    current_user: User = Depends(require_client_or_admin),
    job_service: JobService = Depends(get_job_service)
):
    """
    Create a new job posting
    
    **Requirements:**
    - User must have client or admin role
    
    **Validation:**
    - Title: at least 5 characters
    - Description: at least 20 characters
    - Category, experience and budget type: closed sets
    - Budget amount: numeric
    """
    logger.info(f"Job creation request from user {current_user.id}: {job_data.title}")
    
    job = await job_service.create_job(
        caller=current_user,
        title=job_data.title,
        description=job_data.description,
        category=job_data.category,
        budget=job_data.budget.model_dump(),
        experience=job_data.experience,
        skills=job_data.skills,
        duration=job_data.duration,
        deadline=job_data.deadline
    )
    return JobResponse.from_job(job)


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(
    job_id: UUID,
    job_updates: JobUpdateRequest,
    current_user: User = Depends(require_client_or_admin),
    job_service: JobService = Depends(get_job_service)
):
    """
    Update job details
    
    Only the job's client or an admin may update it. Only provided fields
    are changed.
    """
    logger.info(f"Job update request from user {current_user.id} for job {job_id}")
    
    job = await job_service.update_job(
        job_id,
        current_user,
        job_updates.model_dump(exclude_unset=True)
    )
    return JobResponse.from_job(job)


@router.delete("/{job_id}", response_model=MessageResponse)
async def delete_job(
    job_id: UUID,
    current_user: User = Depends(require_client_or_admin),
    job_service: JobService = Depends(get_job_service)
):
    """Delete a job; only its client or an admin may do so"""
    logger.info(f"Job deletion request from user {current_user.id} for job {job_id}")
    
    await job_service.delete_job(job_id, current_user)
    return MessageResponse(message="Job deleted successfully")


@router.post("/{job_id}/apply", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def apply_to_job(
    job_id: UUID,
    application_data: ApplicationCreateRequest,
    current_user: User = Depends(require_freelancer),
    job_service: JobService = Depends(get_job_service)
):
    """
    Apply to an open job
    
    **Validation:**
    - Proposal: at least 50 characters
    - Bid amount: numeric
    - Estimated duration: required
    - One application per freelancer per job
    """
    await job_service.apply_to_job(
        job_id,
        current_user,
        proposal=application_data.proposal,
        bid_amount=application_data.bid_amount,
        estimated_duration=application_data.estimated_duration
    )
    return MessageResponse(message="Application submitted successfully")


@router.put("/{job_id}/applications/{application_id}", response_model=MessageResponse)
async def decide_application(
    job_id: UUID,
    application_id: UUID,
    decision: ApplicationDecisionRequest,
    current_user: User = Depends(require_client_or_admin),
    job_service: JobService = Depends(get_job_service)
):
    """
    Accept or reject an application
    
    Accepting moves the job to `in-progress` and records the hired
    freelancer.
    """
    await job_service.decide_application(
        job_id,
        application_id,
        decision.status.value,
        current_user
    )
    return MessageResponse(message=f"Application {decision.status.value} successfully")
