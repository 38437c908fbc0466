"""Job repository for database operations"""

from typing import List, Optional, Dict, Any, Tuple
from uuid import UUID, uuid4
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, or_, func, cast, String
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from backend.app.models.job import (
    Job, JobApplication, JobStatus, JobCategory, ExperienceLevel
)
from backend.app.repositories.filters import LIKE_ESCAPE, contains_pattern, search_terms
from backend.app.core.logging import get_logger

logger = get_logger(__name__)


def _full_job_options():
    return (
        selectinload(Job.client),
        selectinload(Job.applications).selectinload(JobApplication.freelancer),
    )


class JobRepository:
    """Repository for job-related database operations"""
    
    def __init__(self, db: AsyncSession):
        """
        Initialize job repository
        
        Args:
            db: Database session
        """
        self.db = db
    
    async def create(self, job_data: Dict[str, Any]) -> Job:
        """
        Create a new job
        
        Args:
            job_data: Job column values
        
        Returns:
            Created job with client and applications loaded
        """
        job = Job(**job_data)
        self.db.add(job)
        await self.db.commit()
        
        logger.info(f"Created job: {job.id}")
        return await self.get_by_id(job.id)
    
    async def get_by_id(self, job_id: UUID) -> Optional[Job]:
        """
        Get job by ID with client and applicants loaded
        
        Args:
            job_id: Job UUID
        
        Returns:
            Job if found, None otherwise
        """
        stmt = (
            select(Job)
            .where(Job.id == job_id)
            .options(*_full_job_options())
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()
    
    async def search(
        self,
        category: Optional[JobCategory] = None,
        experience: Optional[ExperienceLevel] = None,
        budget_min: Optional[float] = None,
        budget_max: Optional[float] = None,
        query: Optional[str] = None,
        status: Optional[JobStatus] = None,
        is_active: Optional[bool] = None,
        client_id: Optional[UUID] = None,
        skip: int = 0,
        limit: int = 10
    ) -> Tuple[List[Job], int]:
        """
        Search jobs with various filters, newest first
        
        Args:
            category: Job category
            experience: Required experience level
            budget_min: Budget amount lower bound (inclusive)
            budget_max: Budget amount upper bound (inclusive)
            query: Free text; a job matches when any word appears in its
                title, description or skills
            status: Job status filter
            is_active: Active flag filter
            client_id: Owning client filter
            skip: Pagination offset
            limit: Page size
        
        Returns:
            Page of matching jobs and the total number of matches
        """
        conditions = []
        
        if is_active is not None:
            conditions.append(Job.is_active == is_active)
        
        if status:
            conditions.append(Job.status == status)
        
        if category:
            conditions.append(Job.category == category)
        
        if experience:
            conditions.append(Job.experience == experience)
        
        if budget_min is not None:
            conditions.append(Job.budget_amount >= budget_min)
        
        if budget_max is not None:
            conditions.append(Job.budget_amount <= budget_max)
        
        if client_id:
            conditions.append(Job.client_id == client_id)
        
        # Any word of the query may match title, description or a skill
        word_matches = []
        for word in search_terms(query or ""):
            pattern = contains_pattern(word)
            word_matches.extend([
                Job.title.ilike(pattern, escape=LIKE_ESCAPE),
                Job.description.ilike(pattern, escape=LIKE_ESCAPE),
                cast(Job.skills, String).ilike(pattern, escape=LIKE_ESCAPE),
            ])
        if word_matches:
            conditions.append(or_(*word_matches))
        
        stmt = (
            select(Job)
            .where(*conditions)
            .options(*_full_job_options())
            .order_by(Job.created_at.desc())
            .offset(skip)
            .limit(limit)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        jobs = list(result.scalars().all())
        
        total = await self.db.scalar(select(func.count(Job.id)).where(*conditions))
        return jobs, total or 0
    
    async def save(self, job: Job) -> Job:
        """
        Commit pending changes on a loaded job and reload it
        
        Args:
            job: Job modified in this session
        
        Returns:
            Reloaded job
        """
        job_id = job.id
        await self.db.commit()
        return await self.get_by_id(job_id)
    
    async def update(self, job: Job, updates: Dict[str, Any]) -> Job:
        """
        Apply field updates to a job
        
        Args:
            job: Loaded job
            updates: Column values to set
        
        Returns:
            Updated job
        """
        for field, value in updates.items():
            setattr(job, field, value)
        updated_job = await self.save(job)
        logger.info(f"Updated job: {updated_job.id} fields={sorted(updates)}")
        return updated_job
    
    async def delete(self, job: Job) -> None:
        """
        Delete job together with its applications
        
        Args:
            job: Loaded job
        """
        job_id = job.id
        await self.db.delete(job)
        await self.db.commit()
        logger.info(f"Deleted job: {job_id}")
    
    async def add_application(self, job: Job, application_data: Dict[str, Any]) -> Optional[JobApplication]:
        """
        Append an application to a job
        
        Args:
            job: Loaded job
            application_data: Application column values
        
        Returns:
            The stored application, or None when the freelancer already
            has an application on this job (unique constraint)
        """
        job_id = job.id
        application = JobApplication(id=uuid4(), **application_data)
        job.applications[application.id] = application
        
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(f"Duplicate application rejected by constraint on job {job_id}")
            return None
        
        logger.info(f"Added application {application.id} to job {job_id}")
        return application
    
    async def remove_application(self, job: Job, application_id: UUID) -> Job:
        """
        Remove an application from a job by its key
        
        Args:
            job: Loaded job
            application_id: Application UUID
        
        Returns:
            Reloaded job
        """
        del job.applications[application_id]
        saved_job = await self.save(job)
        logger.info(f"Removed application {application_id} from job {saved_job.id}")
        return saved_job
    
    async def get_jobs_applied_by(self, freelancer_id: UUID) -> List[Job]:
        """
        Get jobs the freelancer has an application on, newest first
        
        Args:
            freelancer_id: Freelancer user ID
        
        Returns:
            List of jobs
        """
        applied = select(JobApplication.job_id).where(JobApplication.freelancer_id == freelancer_id)
        stmt = (
            select(Job)
            .where(Job.id.in_(applied))
            .options(*_full_job_options())
            .order_by(Job.created_at.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
    
    async def get_jobs_by_client(self, client_id: UUID) -> List[Job]:
        """
        Get all jobs owned by a client, newest first
        
        Args:
            client_id: Client user ID
        
        Returns:
            List of jobs
        """
        stmt = (
            select(Job)
            .where(Job.client_id == client_id)
            .options(*_full_job_options())
            .order_by(Job.created_at.desc())
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        return list(result.scalars().all())
    
    async def count(
        self,
        status: Optional[JobStatus] = None,
        is_active: Optional[bool] = None
    ) -> int:
        """
        Count jobs with optional filtering
        
        Args:
            status: Filter by job status
            is_active: Filter by active flag
        
        Returns:
            Number of matching jobs
        """
        stmt = select(func.count(Job.id))
        
        if status:
            stmt = stmt.where(Job.status == status)
        
        if is_active is not None:
            stmt = stmt.where(Job.is_active == is_active)
        
        return await self.db.scalar(stmt) or 0
    
    async def count_by_category(self) -> Dict[str, int]:
        """Number of jobs per category"""
        result = await self.db.execute(
            select(Job.category, func.count(Job.id)).group_by(Job.category)
        )
        return {category.value: count for category, count in result.all()}
    
    async def purge_user(self, user_id: UUID) -> int:
        """
        Remove every job-side trace of a user ahead of deleting the account
        
        Deletes the user's own jobs (and their applications), the
        applications the user submitted elsewhere, and clears the hired
        freelancer reference where it points at the user. Does not commit.
        
        Args:
            user_id: User being deleted
        
        Returns:
            Number of jobs deleted
        """
        owned_jobs = select(Job.id).where(Job.client_id == user_id)
        
        await self.db.execute(
            delete(JobApplication).where(
                or_(
                    JobApplication.job_id.in_(owned_jobs),
                    JobApplication.freelancer_id == user_id
                )
            )
        )
        await self.db.execute(
            update(Job).where(Job.hired_freelancer_id == user_id).values(hired_freelancer_id=None)
        )
        result = await self.db.execute(delete(Job).where(Job.client_id == user_id))
        
        logger.info(f"Purged {result.rowcount} jobs of user {user_id}")
        return result.rowcount
