"""
Schemas module - Request/Response schemas for API endpoints.
"""

from jobboard.schemas.schemas import UserRole, JobStatus, ApplicationStatus

__all__ = ["UserRole", "JobStatus", "ApplicationStatus"]
