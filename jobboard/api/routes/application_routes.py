"""
Application Routes

POST /applications - Apply to a job (jobseeker only)
GET /applications/received - Applications to my jobs (recruiter only)
GET /applications/sent - My applications (jobseeker only)
PATCH /applications/{id}/status - Accept/reject (addressed recruiter only)
DELETE /applications/{id} - Withdraw a pending application (applicant only)
"""

from fastapi import APIRouter, Depends
from typing import List

from jobboard.core.auth import role_required
from jobboard.core.permissions import SessionContext
from jobboard.services.application_service import ApplicationService
from jobboard.schemas.schemas import (
    ApplicationCreate, ApplicationStatusUpdate, ApplicationResponse,
    ReceivedApplicationResponse, SentApplicationResponse, MessageResponse, UserRole
)

router = APIRouter(prefix="/applications", tags=["Applications"])


@router.post("", response_model=ApplicationResponse, status_code=201)
async def submit_application(
    application: ApplicationCreate,
    jobseeker: SessionContext = Depends(role_required(UserRole.jobseeker, "Only job seekers can submit applications"))
):
    """Apply to a job. Cannot apply twice to the same job."""
    return ApplicationService().submit(jobseeker, application.job_id, application.cover_letter)


@router.get("/received", response_model=List[ReceivedApplicationResponse])
async def received_applications(
    recruiter: SessionContext = Depends(role_required(UserRole.recruiter, "Only recruiters can view received applications"))
):
    return ApplicationService().list_received(recruiter)


@router.get("/sent", response_model=List[SentApplicationResponse])
async def sent_applications(
    jobseeker: SessionContext = Depends(role_required(UserRole.jobseeker, "Only job seekers can view sent applications"))
):
    return ApplicationService().list_sent(jobseeker)


@router.patch("/{application_id}/status", response_model=ApplicationResponse)
async def update_application_status(
    application_id: str,
    update: ApplicationStatusUpdate,
    recruiter: SessionContext = Depends(role_required(UserRole.recruiter, "Only recruiters can update application status"))
):
    """Update status of an application addressed to the caller."""
    return ApplicationService().set_status(recruiter, application_id, update.status)


@router.delete("/{application_id}", response_model=MessageResponse)
async def withdraw_application(
    application_id: str,
    jobseeker: SessionContext = Depends(role_required(UserRole.jobseeker, "Only job seekers can withdraw applications"))
):
    """Withdraw an application. Only while it is still pending."""
    ApplicationService().withdraw(jobseeker, application_id)
    return MessageResponse(message="Application withdrawn successfully")
