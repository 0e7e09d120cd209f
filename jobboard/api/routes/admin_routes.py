"""
Admin Routes (admin role only)

GET /admin/jobs - All jobs
PATCH /admin/jobs/{job_id}/status - Force job status
DELETE /admin/jobs/{job_id} - Force delete job and its applications
GET /admin/applications - All applications, with placeholders for missing references
"""

from fastapi import APIRouter, Depends
from typing import List

from jobboard.core.auth import get_current_admin
from jobboard.core.permissions import SessionContext
from jobboard.services.admin_service import AdminService
from jobboard.schemas.schemas import (
    JobResponse, JobStatusUpdate, AdminApplicationResponse, MessageResponse
)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.get("/jobs", response_model=List[JobResponse])
async def list_all_jobs(admin: SessionContext = Depends(get_current_admin)):
    return AdminService().list_jobs(admin)


@router.patch("/jobs/{job_id}/status", response_model=JobResponse)
async def force_job_status(job_id: str, update: JobStatusUpdate, admin: SessionContext = Depends(get_current_admin)):
    return AdminService().set_job_status(admin, job_id, update.status)


@router.delete("/jobs/{job_id}", response_model=MessageResponse)
async def force_delete_job(job_id: str, admin: SessionContext = Depends(get_current_admin)):
    """Delete any job. Cascades to applications."""
    AdminService().delete_job(admin, job_id)
    return MessageResponse(message="Successfully deleted")


@router.get("/applications", response_model=List[AdminApplicationResponse])
async def list_all_applications(admin: SessionContext = Depends(get_current_admin)):
    """
    Every application. Deleted jobs and users show as placeholders
    ("Job Deleted", "Unknown User", "Unknown Recruiter").
    """
    return AdminService().list_applications(admin)
