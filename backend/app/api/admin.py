"""Admin moderation API endpoints; every route requires the admin role"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from backend.app.api.deps import get_admin_service
from backend.app.core.security import require_admin
from backend.app.models.user import UserRole
from backend.app.models.job import JobStatus, JobCategory
from backend.app.services.admin_service import AdminService
from backend.app.schemas.admin import DashboardStatsResponse
from backend.app.schemas.common import MessageResponse
from backend.app.schemas.job import JobResponse, JobListResponse, AdminJobUpdateRequest
from backend.app.schemas.user import (
    UserResponse, UserListResponse, AdminUserUpdateRequest, user_response
)
from backend.app.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/dashboard", response_model=DashboardStatsResponse)
async def dashboard(admin_service: AdminService = Depends(get_admin_service)):
    """User and job totals plus per-role and per-category counts"""
    return DashboardStatsResponse(**await admin_service.dashboard_stats())


@router.get("/users", response_model=UserListResponse)
async def list_users(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    role: Optional[UserRole] = Query(None),
    search: Optional[str] = Query(None, description="Case-insensitive match on name or email"),
    admin_service: AdminService = Depends(get_admin_service)
):
    """List users, newest first"""
    users, pagination = await admin_service.list_users(role=role, search=search, page=page, limit=limit)
    return UserListResponse(
        items=[user_response(user) for user in users],
        pagination=pagination
    )


@router.put("/users/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    updates: AdminUserUpdateRequest,
    admin_service: AdminService = Depends(get_admin_service)
):
    """Change a user's role and/or verification flag"""
    user = await admin_service.update_user(user_id, updates.model_dump(exclude_unset=True))
    return user_response(user)


@router.delete("/users/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: UUID,
    admin_service: AdminService = Depends(get_admin_service)
):
    """Delete a user together with the jobs they own"""
    await admin_service.delete_user(user_id)
    return MessageResponse(message="User deleted successfully")


@router.get("/jobs", response_model=JobListResponse)
async def list_jobs(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    job_status: Optional[JobStatus] = Query(None, alias="status"),
    category: Optional[JobCategory] = Query(None),
    admin_service: AdminService = Depends(get_admin_service)
):
    """List jobs of every owner, including inactive ones"""
    jobs, pagination = await admin_service.list_jobs(
        status=job_status, category=category, page=page, limit=limit
    )
    return JobListResponse(
        items=[JobResponse.from_job(job, include_applications=False) for job in jobs],
        pagination=pagination
    )


@router.put("/jobs/{job_id}", response_model=JobResponse)
async def update_job_status(
    job_id: UUID,
    updates: AdminJobUpdateRequest,
    admin_service: AdminService = Depends(get_admin_service)
):
    """Change a job's status and/or active flag"""
    job = await admin_service.update_job_status(job_id, updates.model_dump(exclude_unset=True))
    return JobResponse.from_job(job)


@router.delete("/jobs/{job_id}", response_model=MessageResponse)
async def delete_job(
    job_id: UUID,
    admin_service: AdminService = Depends(get_admin_service)
):
    """Delete any job"""
    await admin_service.delete_job(job_id)
    return MessageResponse(message="Job deleted successfully")
