"""Data access layer"""

from backend.app.repositories.user_repository import UserRepository
from backend.app.repositories.job_repository import JobRepository

__all__ = ['UserRepository', 'JobRepository']
