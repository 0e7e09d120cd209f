"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.

Wire format follows the frontend's expectations: camelCase keys and
"_id" for document identifiers. Both aliases and field names are accepted
on input.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Union
from datetime import datetime
from enum import Enum


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    recruiter = "recruiter"
    jobseeker = "jobseeker"
    admin = "admin"


class JobStatus(str, Enum):
    active = "active"
    closed = "closed"


class ApplicationStatus(str, Enum):
    pending = "pending"
    accepted = "accepted"
    rejected = "rejected"


class APIModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================
# USER SCHEMAS
# ============================================================

class RegisterRequest(APIModel):
    username: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)
    # Checked against UserRole by AccountService.register ("Invalid role type")
    role: str

class LoginRequest(APIModel):
    username: str
    password: str
    # Any value other than the account's role is a "Role mismatch"; empty means not given
    role: Optional[str] = None

class UserPublic(APIModel):
    username: str
    email: str
    role: UserRole

class AuthResponse(APIModel):
    message: str
    user: UserPublic

class CurrentUserResponse(APIModel):
    id: str = Field(..., alias="_id")
    username: str
    email: str
    role: UserRole

class ProfileResponse(APIModel):
    username: str
    email: str
    role: UserRole
    created_at: Optional[datetime] = None

class AccountResponse(APIModel):
    id: str = Field(..., alias="_id")
    username: str
    email: str
    role: UserRole
    created_at: Optional[datetime] = None

class UserSummary(APIModel):
    """Populated user reference; id is absent on placeholders."""
    id: Optional[str] = Field(None, alias="_id")
    username: str
    email: str


# ============================================================
# JOB SCHEMAS
# ============================================================

class SalaryRange(APIModel):
    min: Union[int, float]
    max: Union[int, float]

class JobCreate(APIModel):
    title: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    salary: SalaryRange
    description: str = Field(..., min_length=1)
    requirements: List[str] = []
    status: JobStatus = JobStatus.active

class JobUpdate(APIModel):
    title: Optional[str] = Field(None, min_length=1)
    company: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    salary: Optional[SalaryRange] = None
    description: Optional[str] = Field(None, min_length=1)
    requirements: Optional[List[str]] = None
    status: Optional[JobStatus] = None

class JobStatusUpdate(APIModel):
    status: JobStatus

class JobResponse(APIModel):
    id: str = Field(..., alias="_id")
    title: str
    company: str
    location: str
    salary: SalaryRange
    description: str
    requirements: List[str] = []
    status: JobStatus
    recruiter: Union[UserSummary, str, None] = None
    created_at: datetime
    updated_at: datetime

class JobSummary(APIModel):
    """Job reference as shown to admins; id is absent on placeholders."""
    id: Optional[str] = Field(None, alias="_id")
    title: str
    company: str


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(APIModel):
    job_id: str
    cover_letter: str = ""

class ApplicationStatusUpdate(APIModel):
    status: ApplicationStatus

class ApplicationBase(APIModel):
    id: str = Field(..., alias="_id")
    cover_letter: str = ""
    status: ApplicationStatus
    created_at: datetime
    updated_at: datetime

class ApplicationResponse(ApplicationBase):
    job: str
    applicant: str
    recruiter: str

class ReceivedApplicationResponse(ApplicationBase):
    job: Optional[JobResponse] = None
    applicant: Optional[UserSummary] = None
    recruiter: str

class SentApplicationResponse(ApplicationBase):
    job: Optional[JobResponse] = None
    applicant: str
    recruiter: Optional[UserSummary] = None

class AdminApplicationResponse(ApplicationBase):
    job: JobSummary
    applicant: UserSummary
    recruiter: UserSummary


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(APIModel):
    message: str

class ErrorResponse(APIModel):
    error: str
