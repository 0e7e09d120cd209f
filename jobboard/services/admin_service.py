"""
Admin Service - moderation over every job and application.

Same operations as the recruiter path but gated on the admin role alone;
ownership is not consulted.
"""

from typing import List, Optional

from jobboard.core.permissions import SessionContext, require_role
from jobboard.schemas.schemas import UserRole
from jobboard.services.application_service import ApplicationService
from jobboard.services.job_service import JobService, parse_job_status

ADMINS_ONLY = "Admin privileges required"


class AdminService:

    def __init__(self):
        self.jobs = JobService()
        self.applications = ApplicationService()

    def list_jobs(self, caller: Optional[SessionContext]) -> List[dict]:
        require_role(caller, UserRole.admin, ADMINS_ONLY)
        return self.jobs._find_with_recruiter({})

    def set_job_status(self, caller: Optional[SessionContext], job_id: str, status) -> dict:
        require_role(caller, UserRole.admin, ADMINS_ONLY)
        status = parse_job_status(status)
        return self.jobs._update_one(job_id, {}, {"status": status.value}, "Job not found")

    def delete_job(self, caller: Optional[SessionContext], job_id: str) -> int:
        require_role(caller, UserRole.admin, ADMINS_ONLY)
        return self.jobs._delete_one(job_id, {}, "Job not found")

    def list_applications(self, caller: Optional[SessionContext]) -> List[dict]:
        require_role(caller, UserRole.admin, ADMINS_ONLY)
        return self.applications.list_all()
