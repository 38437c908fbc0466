"""Admin moderation and dashboard rollups"""

from typing import List, Optional, Dict, Any, Tuple
from uuid import UUID

from backend.app.repositories.job_repository import JobRepository
from backend.app.repositories.user_repository import UserRepository
from backend.app.models.job import Job, JobStatus, JobCategory
from backend.app.models.user import User, UserRole
from backend.app.core.pagination import PageRequest, build_pagination
from backend.app.core.logging import get_logger
from backend.app.core.exceptions import NotFoundException

logger = get_logger(__name__)


class AdminService:
    """Service behind the admin-only API; callers are already role-gated"""
    
    def __init__(self, user_repository: UserRepository, job_repository: JobRepository):
        self.user_repo = user_repository
        self.job_repo = job_repository
    
    async def dashboard_stats(self) -> Dict[str, Any]:
        """Totals and group counts for the dashboard"""
        return {
            'total_users': await self.user_repo.count(),
            'total_jobs': await self.job_repo.count(),
            'active_jobs': await self.job_repo.count(status=JobStatus.OPEN, is_active=True),
            'completed_jobs': await self.job_repo.count(status=JobStatus.COMPLETED),
            'users_by_role': await self.user_repo.count_by_role(),
            'jobs_by_category': await self.job_repo.count_by_category(),
        }
    
    async def list_users(
        self,
        role: Optional[UserRole] = None,
        search: Optional[str] = None,
        page=1,
        limit=None
    ) -> Tuple[List[User], Dict[str, Any]]:
        """Paginated users, newest first, with role and name/email filters"""
        page_request = PageRequest.build(page, limit)
        users, total = await self.user_repo.search(
            role=role,
            search=search.strip() if search and search.strip() else None,
            skip=page_request.skip,
            limit=page_request.limit
        )
        return users, build_pagination(page_request.page, page_request.limit, total)
    
    async def list_jobs(
        self,
        status: Optional[JobStatus] = None,
        category: Optional[JobCategory] = None,
        page=1,
        limit=None
    ) -> Tuple[List[Job], Dict[str, Any]]:
        """Paginated jobs of every owner, active or not"""
        page_request = PageRequest.build(page, limit)
        jobs, total = await self.job_repo.search(
            status=status,
            category=category,
            skip=page_request.skip,
            limit=page_request.limit
        )
        return jobs, build_pagination(page_request.page, page_request.limit, total)
    
    async def update_user(self, user_id: UUID, updates: Dict[str, Any]) -> User:
        """
        Change a user's role and/or verification flag
        
        Raises:
            NotFoundException: If user not found
        """
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundException("User not found")
        
        updates = {k: v for k, v in updates.items() if v is not None}
        if not updates:
            return user
        
        return await self.user_repo.update(user, updates)
    
    async def delete_user(self, user_id: UUID) -> int:
        """
        Delete a user and every job they own
        
        Applications the user submitted elsewhere are removed and any
        hired-freelancer reference to them is cleared.
        
        Returns:
            Number of jobs deleted with the user
        
        Raises:
            NotFoundException: If user not found
        """
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundException("User not found")
        
        deleted_jobs = await self.job_repo.purge_user(user.id)
        await self.user_repo.delete(user)
        logger.info(f"Admin deleted user {user_id} and {deleted_jobs} jobs")
        return deleted_jobs
    
    async def update_job_status(self, job_id: UUID, updates: Dict[str, Any]) -> Job:
        """
        Change a job's status and/or active flag
        
        Raises:
            NotFoundException: If job not found
        """
        job = await self.job_repo.get_by_id(job_id)
        if not job:
            raise NotFoundException("Job not found")
        
        updates = {k: v for k, v in updates.items() if v is not None}
        if not updates:
            return job
        
        return await self.job_repo.update(job, updates)
    
    async def delete_job(self, job_id: UUID) -> None:
        """
        Delete any job
        
        Raises:
            NotFoundException: If job not found
        """
        job = await self.job_repo.get_by_id(job_id)
        if not job:
            raise NotFoundException("Job not found")
        
        await self.job_repo.delete(job)
