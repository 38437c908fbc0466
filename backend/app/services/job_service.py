"""Job workflow: postings, applications and the hiring transition"""

from datetime import datetime
from typing import List, Optional, Dict, Any, Tuple
from uuid import UUID

from backend.app.repositories.job_repository import JobRepository
from backend.app.models.job import (
    Job, JobApplication, JobStatus, JobCategory, ExperienceLevel, ApplicationStatus
)
from backend.app.models.user import User, UserRole
from backend.app.models.base import utcnow
from backend.app.core.config import settings
from backend.app.core.pagination import PageRequest, build_pagination
from backend.app.core.logging import get_logger
from backend.app.core.exceptions import (
    ValidationException, NotFoundException, AuthorizationException
)

logger = get_logger(__name__)

NULLABLE_FIELDS = {"duration", "deadline"}


def budget_columns(budget: Dict[str, Any]) -> Dict[str, Any]:
    """Map a budget mapping onto the job's budget columns"""
    return {
        'budget_type': budget['type'],
        'budget_amount': budget['amount'],
        'budget_min': budget.get('min_amount'),
        'budget_max': budget.get('max_amount'),
    }


class JobService:
    """Service for job-related business logic"""
    
    def __init__(self, job_repository: JobRepository):
        """
        Initialize job service
        
        Args:
            job_repository: Job repository
        """
        self.job_repo = job_repository
    
    async def list_jobs(
        self,
        category: Optional[JobCategory] = None,
        experience: Optional[ExperienceLevel] = None,
        budget_min: Optional[float] = None,
        budget_max: Optional[float] = None,
        search: Optional[str] = None,
        status: Optional[JobStatus] = JobStatus.OPEN,
        page=1,
        limit=None
    ) -> Tuple[List[Job], Dict[str, Any]]:
        """
        Public job listing; only active jobs, newest first
        
        Args:
            category: Job category filter
            experience: Experience level filter
            budget_min: Minimum budget amount
            budget_max: Maximum budget amount
            search: Free text over title, description and skills
            status: Job status filter (defaults to open)
            page: 1-based page number
            limit: Page size
        
        Returns:
            Page of jobs and its pagination metadata
        """
        page_request = PageRequest.build(page, limit)
        search = search.strip() if search else None
        
        jobs, total = await self.job_repo.search(
            category=category,
            experience=experience,
            budget_min=budget_min,
            budget_max=budget_max,
            query=search or None,
            status=status or JobStatus.OPEN,
            is_active=True,
            skip=page_request.skip,
            limit=page_request.limit
        )
        
        return jobs, build_pagination(page_request.page, page_request.limit, total)
    
    async def get_job(self, job_id: UUID) -> Job:
        """
        Get job by ID
        
        Args:
            job_id: Job UUID
        
        Returns:
            Job with client and applicants loaded
        
        Raises:
            NotFoundException: If job not found
        """
        job = await self.job_repo.get_by_id(job_id)
        if not job:
            raise NotFoundException("Job not found")
        
        return job
    
    async def create_job(
        self,
        caller: User,
        title: str,
        description: str,
        category: JobCategory,
        budget: Dict[str, Any],
        experience: ExperienceLevel,
        skills: Optional[List[str]] = None,
        duration=None,
        deadline: Optional[datetime] = None
    ) -> Job:
        """
        Create a job owned by the caller
        
        New jobs are always open and active, whatever the caller sent.
        
        Returns:
            Created job
        """
        logger.info(f"Creating job '{title}' for client {caller.id}")
        
        job_data = {
            'title': title,
            'description': description,
            'category': category,
            'skills': list(skills or []),
            'duration': duration,
            'experience': experience,
            'deadline': deadline,
            'client_id': caller.id,
            'status': JobStatus.OPEN,
            'is_active': True,
            'created_at': utcnow(),
            **budget_columns(budget),
        }
        
        job = await self.job_repo.create(job_data)
        logger.info(f"Successfully created job: {job.id}")
        return job
    
    async def update_job(self, job_id: UUID, caller: User, updates: Dict[str, Any]) -> Job:
        """
        Update a job owned by the caller (or any job for admins)
        
        Args:
            job_id: Job UUID
            caller: Authenticated user
            updates: Validated fields to change; ``budget`` is a mapping
        
        Returns:
            Updated job
        
        Raises:
            NotFoundException: If job not found
            AuthorizationException: If caller is neither owner nor admin
        """
        job = await self.get_job(job_id)
        self._ensure_can_manage(job, caller)
        
        # Only duration and deadline may be cleared
        updates = {
            field: value for field, value in updates.items()
            if value is not None or field in NULLABLE_FIELDS
        }
        if updates.get('budget') is not None:
            updates.update(budget_columns(updates.pop('budget')))
        else:
            updates.pop('budget', None)
        
        if not updates:
            return job
        
        return await self.job_repo.update(job, updates)
    
    async def delete_job(self, job_id: UUID, caller: User) -> None:
        """
        Delete a job owned by the caller (or any job for admins)
        
        Raises:
            NotFoundException: If job not found
            AuthorizationException: If caller is neither owner nor admin
        """
        job = await self.get_job(job_id)
        self._ensure_can_manage(job, caller)
        
        await self.job_repo.delete(job)
        logger.info(f"Job {job_id} deleted by {caller.id}")
    
    async def apply_to_job(
        self,
        job_id: UUID,
        caller: User,
        proposal: str,
        bid_amount: float,
        estimated_duration: str
    ) -> JobApplication:
        """
        Submit the caller's application to an open job
        
        Raises:
            NotFoundException: If job not found
            ValidationException: If the job is not open or the caller
                already applied
        """
        job = await self.get_job(job_id)
        
        if job.status != JobStatus.OPEN:
            raise ValidationException("Job is not open for applications")
        
        if job.application_for(caller.id) is not None:
            raise ValidationException("You have already applied for this job")
        
        application = await self.job_repo.add_application(job, {
            'freelancer_id': caller.id,
            'proposal': proposal,
            'bid_amount': bid_amount,
            'estimated_duration': estimated_duration,
            'applied_at': utcnow(),
            'status': ApplicationStatus.PENDING,
        })
        
        # A concurrent apply won the insert
        if application is None:
            raise ValidationException("You have already applied for this job")
        
        logger.info(f"Freelancer {caller.id} applied to job {job_id}")
        return application
    
    async def decide_application(
        self,
        job_id: UUID,
        application_id: UUID,
        decision: ApplicationStatus,
        caller: User
    ) -> Job:
        """
        Accept or reject an application
        
        Accepting moves the job to in-progress and records the hired
        freelancer. Other applications are left as they are unless
        ``AUTO_REJECT_ON_HIRE`` is enabled, in which case the remaining
        pending ones are rejected.
        
        Raises:
            ValidationException: If decision is not accepted/rejected
            NotFoundException: If job or application not found
            AuthorizationException: If caller is neither owner nor admin
        """
        try:
            decision = ApplicationStatus(decision)
        except ValueError:
            decision = None
        if decision not in (ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED):
            raise ValidationException(
                "Invalid status",
                errors=[{"field": "status", "message": "Status must be accepted or rejected"}]
            )
        
        job = await self.get_job(job_id)
        self._ensure_can_manage(job, caller)
        
        application = job.applications.get(application_id)
        if application is None:
            raise NotFoundException("Application not found")
        
        application.status = decision
        
        if decision == ApplicationStatus.ACCEPTED:
            job.status = JobStatus.IN_PROGRESS
            job.hired_freelancer_id = application.freelancer_id
            
            if settings.AUTO_REJECT_ON_HIRE:
                for other in job.applications.values():
                    if other.id != application_id and other.status == ApplicationStatus.PENDING:
                        other.status = ApplicationStatus.REJECTED
        
        saved_job = await self.job_repo.save(job)
        logger.info(f"Application {application_id} on job {job_id} {decision.value} by {caller.id}")
        return saved_job
    
    async def withdraw_application(self, job_id: UUID, caller: User) -> None:
        """
        Remove the caller's application from a job
        
        Raises:
            NotFoundException: If job or caller's application not found
        """
        job = await self.get_job(job_id)
        
        application = job.application_for(caller.id)
        if application is None:
            raise NotFoundException("Application not found")
        
        await self.job_repo.remove_application(job, application.id)
        logger.info(f"Freelancer {caller.id} withdrew from job {job_id}")
    
    async def list_my_applications(self, caller: User) -> List[Tuple[Job, JobApplication]]:
        """
        Jobs the caller applied to, each paired with the caller's application
        
        Returns:
            List of (job, application) pairs, newest job first
        """
        jobs = await self.job_repo.get_jobs_applied_by(caller.id)
        pairs = [(job, job.application_for(caller.id)) for job in jobs]
        return [(job, application) for job, application in pairs if application is not None]
    
    async def list_applications_for_my_jobs(self, caller: User) -> List[Job]:
        """
        The caller's jobs with every application and applicant loaded
        
        Returns:
            List of jobs, newest first
        """
        return await self.job_repo.get_jobs_by_client(caller.id)
    
    def _ensure_can_manage(self, job: Job, caller: User) -> None:
        if job.client_id != caller.id and caller.role != UserRole.ADMIN:
            logger.warning(f"User {caller.id} refused management of job {job.id}")
            raise AuthorizationException("Not authorized")
