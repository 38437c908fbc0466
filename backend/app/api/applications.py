"""Application listing and withdrawal endpoints"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends

from backend.app.api.deps import get_job_service
from backend.app.core.security import require_client, require_freelancer
from backend.app.models.user import User
from backend.app.services.job_service import JobService
from backend.app.schemas.common import MessageResponse
from backend.app.schemas.application import MyApplicationResponse, JobApplicationsResponse

router = APIRouter()


@router.get("/my-applications", response_model=List[MyApplicationResponse])
async def list_my_applications(
    current_user: User = Depends(require_freelancer),
    job_service: JobService = Depends(get_job_service)
):
    """Every job the caller applied to, with the caller's application"""
    pairs = await job_service.list_my_applications(current_user)
    return [MyApplicationResponse.from_job(job, application) for job, application in pairs]


@router.get("/my-jobs-applications", response_model=List[JobApplicationsResponse])
async def list_applications_for_my_jobs(
    current_user: User = Depends(require_client),
    job_service: JobService = Depends(get_job_service)
):
    """The caller's jobs with all applications and applicant profiles"""
    jobs = await job_service.list_applications_for_my_jobs(current_user)
    return [JobApplicationsResponse.from_job(job) for job in jobs]


@router.delete("/withdraw/{job_id}", response_model=MessageResponse)
async def withdraw_application(
    job_id: UUID,
    current_user: User = Depends(require_freelancer),
    job_service: JobService = Depends(get_job_service)
):
    """Withdraw the caller's application from a job"""
    await job_service.withdraw_application(job_id, current_user)
    return MessageResponse(message="Application withdrawn successfully")
