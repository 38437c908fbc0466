"""Admin dashboard schemas"""

from typing import Dict

from backend.app.schemas.common import CamelModel


class DashboardStatsResponse(CamelModel):
    """Read-side rollups for the admin dashboard"""
    total_users: int
    total_jobs: int
    active_jobs: int
    completed_jobs: int
    users_by_role: Dict[str, int]
    jobs_by_category: Dict[str, int]
