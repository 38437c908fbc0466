"""Per-request service construction"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import get_db
from backend.app.repositories.job_repository import JobRepository
from backend.app.repositories.user_repository import UserRepository
from backend.app.services.job_service import JobService
from backend.app.services.admin_service import AdminService


async def get_job_service(db: AsyncSession = Depends(get_db)) -> JobService:
    """Dependency to get job service"""
    return JobService(JobRepository(db))


async def get_admin_service(db: AsyncSession = Depends(get_db)) -> AdminService:
    """Dependency to get admin service"""
    return AdminService(UserRepository(db), JobRepository(db))
