"""Business logic services"""

from backend.app.services.auth_service import AuthService, auth_service
from backend.app.services.job_service import JobService
from backend.app.services.admin_service import AdminService

__all__ = ['AuthService', 'auth_service', 'JobService', 'AdminService']
