"""
Application Service - the application ledger.

An application links a jobseeker, a job and the job's recruiter. The
recruiter is copied from the job at submission and never re-derived, so
attribution stays frozen even if the job document changes later.

Lifecycle: pending -> accepted | rejected (set by the recruiter);
withdrawn (deleted) by the applicant while still pending.
"""

import logging
from typing import List, Optional
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from jobboard.core.errors import ConflictError, NotFoundError, ValidationError
from jobboard.core.permissions import SessionContext, owner_filter, require_role
from jobboard.db.mongodb import get_collection, COLLECTIONS
from jobboard.schemas.schemas import ApplicationStatus, UserRole
from jobboard.services.mongo_service import (
    PUBLIC_USER_FIELDS, populate, serialize_doc, serialize_docs, to_object_id, utcnow
)

logger = logging.getLogger(__name__)

NEWEST_FIRST = [("created_at", DESCENDING), ("_id", DESCENDING)]

# Shown to admins in place of references that no longer resolve
MISSING_JOB = {"title": "Job Deleted", "company": "Company Unavailable"}
MISSING_APPLICANT = {"username": "Unknown User", "email": "Email Unavailable"}
MISSING_RECRUITER = {"username": "Unknown Recruiter", "email": "Email Unavailable"}


class ApplicationService:

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["applications"])
        self.jobs: Collection = get_collection(COLLECTIONS["jobs"])
        self.users: Collection = get_collection(COLLECTIONS["users"])

    def submit(self, caller: Optional[SessionContext], job_id: str, cover_letter: str = "") -> dict:
        """
        Apply to a job. Jobseekers only, once per job.

        The job's status is not checked; closed jobs still accept
        submissions.
        """
        require_role(caller, UserRole.jobseeker, "Only job seekers can submit applications")

        job_oid = to_object_id(job_id)
        job = self.jobs.find_one({"_id": job_oid}) if job_oid else None
        if not job:
            raise NotFoundError("Job not found")

        if self.collection.find_one({"job": job_oid, "applicant": caller.oid}):
            raise ConflictError("You have already applied for this position")

        now = utcnow()
        doc = {
            "job": job_oid,
            "applicant": caller.oid,
            "recruiter": job["recruiter"],
            "cover_letter": cover_letter or "",
            "status": ApplicationStatus.pending.value,
            "created_at": now,
            "updated_at": now
        }
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError:
            # Concurrent submit slipped past the check above
            raise ConflictError("You have already applied for this position")

        logger.info(f"Application {doc['_id']} submitted by {caller.username} for job {job_id}")
        return serialize_doc(doc)

    def list_received(self, caller: Optional[SessionContext]) -> List[dict]:
        """Applications addressed to the calling recruiter, newest first."""
        require_role(caller, UserRole.recruiter, "Only recruiters can view received applications")

        docs = list(self.collection.find(owner_filter(caller, "recruiter")).sort(NEWEST_FIRST))
        populate(docs, "job", self.jobs)
        populate(docs, "applicant", self.users, PUBLIC_USER_FIELDS)
        return serialize_docs(docs)

    def list_sent(self, caller: Optional[SessionContext]) -> List[dict]:
        """Applications submitted by the calling jobseeker, newest first."""
        require_role(caller, UserRole.jobseeker, "Only job seekers can view sent applications")

        docs = list(self.collection.find(owner_filter(caller, "applicant")).sort(NEWEST_FIRST))
        populate(docs, "job", self.jobs)
        populate(docs, "recruiter", self.users, PUBLIC_USER_FIELDS)
        return serialize_docs(docs)

    def set_status(self, caller: Optional[SessionContext], application_id: str, status) -> dict:
        """Accept, reject or reset an application addressed to the caller."""
        require_role(caller, UserRole.recruiter, "Only recruiters can update application status")
        try:
            status = ApplicationStatus(status)
        except ValueError:
            raise ValidationError("Invalid status value")

        oid = to_object_id(application_id)
        doc = None
        if oid is not None:
            doc = self.collection.find_one_and_update(
                {"_id": oid, **owner_filter(caller, "recruiter")},
                {"$set": {"status": status.value, "updated_at": utcnow()}},
                return_document=ReturnDocument.AFTER
            )
        if not doc:
            raise NotFoundError("Application not found or no permission to modify")

        logger.info(f"Application {application_id} set to '{status.value}' by {caller.username}")
        return serialize_doc(doc)

    def withdraw(self, caller: Optional[SessionContext], application_id: str) -> None:
        """Delete the caller's own application while it is still pending."""
        require_role(caller, UserRole.jobseeker, "Only job seekers can withdraw applications")

        oid = to_object_id(application_id)
        doc = None
        if oid is not None:
            doc = self.collection.find_one_and_delete({
                "_id": oid,
                **owner_filter(caller, "applicant"),
                "status": ApplicationStatus.pending.value
            })
        if not doc:
            raise NotFoundError("Application not found or cannot be deleted")

        logger.info(f"Application {application_id} withdrawn by {caller.username}")

    def delete_for_job(self, job_id) -> int:
        """Cascade step of job deletion; returns how many were removed."""
        result = self.collection.delete_many({"job": to_object_id(job_id)})
        return result.deleted_count

    def list_all(self) -> List[dict]:
        """
        Every application with references expanded, newest first.

        Missing job/applicant/recruiter documents are replaced with the
        MISSING_* placeholders instead of failing. Caller must already be
        authorized (see AdminService).
        """
        docs = list(self.collection.find().sort(NEWEST_FIRST))
        populate(docs, "job", self.jobs, {"title": 1, "company": 1})
        populate(docs, "applicant", self.users, PUBLIC_USER_FIELDS)
        populate(docs, "recruiter", self.users, PUBLIC_USER_FIELDS)
        for doc in docs:
            doc["job"] = doc["job"] or dict(MISSING_JOB)
            doc["applicant"] = doc["applicant"] or dict(MISSING_APPLICANT)
            doc["recruiter"] = doc["recruiter"] or dict(MISSING_RECRUITER)
        return serialize_docs(docs)
