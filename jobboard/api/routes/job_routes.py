"""
Job Routes

GET /jobs - List jobs (own jobs for recruiters, active jobs for everyone else)
POST /jobs - Create job posting (recruiter only)
PUT /jobs/{job_id} - Update job (owning recruiter only)
PATCH /jobs/{job_id}/status - Open/close job (owning recruiter only)
DELETE /jobs/{job_id} - Delete job and its applications (owning recruiter only)
"""

from fastapi import APIRouter, Depends
from typing import List, Optional

from jobboard.core.auth import get_optional_user, role_required
from jobboard.core.permissions import SessionContext
from jobboard.services.job_service import JobService, RECRUITERS_ONLY
from jobboard.schemas.schemas import (
    JobCreate, JobUpdate, JobStatusUpdate, JobResponse, MessageResponse, UserRole
)

router = APIRouter(prefix="/jobs", tags=["Jobs"])

get_current_recruiter = role_required(UserRole.recruiter, RECRUITERS_ONLY)


@router.get("", response_model=List[JobResponse])
async def list_jobs(user: Optional[SessionContext] = Depends(get_optional_user)):
    """List job postings, newest first. Login is optional."""
    return JobService().list_jobs(user)


@router.post("", response_model=JobResponse, status_code=201)
async def create_job(job: JobCreate, recruiter: SessionContext = Depends(get_current_recruiter)):
    """Create a new job posting. Only recruiters can create jobs."""
    return JobService().create_job(recruiter, job)


@router.put("/{job_id}", response_model=JobResponse)
async def update_job(job_id: str, update: JobUpdate, recruiter: SessionContext = Depends(get_current_recruiter)):
    """Update a job posting. Only the owning recruiter can update."""
    return JobService().update_job(recruiter, job_id, update)


@router.patch("/{job_id}/status", response_model=JobResponse)
async def update_job_status(job_id: str, update: JobStatusUpdate, recruiter: SessionContext = Depends(get_current_recruiter)):
    return JobService().set_status(recruiter, job_id, update.status)


@router.delete("/{job_id}", response_model=MessageResponse)
async def delete_job(job_id: str, recruiter: SessionContext = Depends(get_current_recruiter)):
    """Delete a job posting. Cascades to applications."""
    JobService().delete_job(recruiter, job_id)
    return MessageResponse(message="Successfully deleted")
