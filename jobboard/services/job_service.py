"""
Job Service - the job catalog.

Postings belong to the recruiter who created them. Mutations go through a
single lookup scoped to the owner, so "does not exist" and "not yours"
are indistinguishable to the caller.

Deleting a job also deletes its applications. The two deletes are
separate writes; if the process dies in between, the applications are
left pointing at a missing job. Readers tolerate that (null job for
recruiters/jobseekers, placeholder for admins).
"""

import logging
from typing import List, Optional
from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection

from jobboard.core.errors import NotFoundError, ValidationError
from jobboard.core.permissions import SessionContext, has_role, owner_filter, require_role
from jobboard.db.mongodb import get_collection, COLLECTIONS
from jobboard.schemas.schemas import JobCreate, JobStatus, JobUpdate, UserRole
from jobboard.services.application_service import ApplicationService
from jobboard.services.mongo_service import (
    PUBLIC_USER_FIELDS, populate, serialize_doc, serialize_docs, to_object_id, utcnow
)

logger = logging.getLogger(__name__)

NEWEST_FIRST = [("created_at", DESCENDING), ("_id", DESCENDING)]

RECRUITERS_ONLY = "Only recruiters can perform this operation"


def parse_job_status(status) -> JobStatus:
    try:
        return JobStatus(status)
    except ValueError:
        raise ValidationError("Invalid status value")


class JobService:

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["jobs"])
        self.users: Collection = get_collection(COLLECTIONS["users"])

    # ------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------

    def list_jobs(self, caller: Optional[SessionContext]) -> List[dict]:
        """
        Recruiters see their own postings in any status; everyone else,
        logged in or not, sees active postings only.
        """
        if has_role(caller, UserRole.recruiter):
            query = owner_filter(caller, "recruiter")
        else:
            query = {"status": JobStatus.active.value}
        return self._find_with_recruiter(query)

    def _find_with_recruiter(self, query: dict) -> List[dict]:
        docs = list(self.collection.find(query).sort(NEWEST_FIRST))
        populate(docs, "recruiter", self.users, PUBLIC_USER_FIELDS)
        return serialize_docs(docs)

    # ------------------------------------------------------------
    # Recruiter mutations
    # ------------------------------------------------------------

    def create_job(self, caller: Optional[SessionContext], data: JobCreate) -> dict:
        require_role(caller, UserRole.recruiter, RECRUITERS_ONLY)

        now = utcnow()
        doc = data.model_dump(by_alias=False)
        doc["status"] = data.status.value
        doc.update({
            "recruiter": caller.oid,
            "created_at": now,
            "updated_at": now
        })
        self.collection.insert_one(doc)

        logger.info(f"Job {doc['_id']} '{data.title}' created by {caller.username}")
        return serialize_doc(doc)

    def update_job(self, caller: Optional[SessionContext], job_id: str, data: JobUpdate) -> dict:
        """Replace the supplied fields of a posting the caller owns."""
        require_role(caller, UserRole.recruiter, RECRUITERS_ONLY)

        changes = data.model_dump(by_alias=False, exclude_unset=True, exclude_none=True)
        if "status" in changes:
            changes["status"] = data.status.value
        doc = self._update_one(
            job_id, owner_filter(caller, "recruiter"), changes,
            "Job not found or no permission to modify"
        )
        logger.info(f"Job {job_id} updated by {caller.username}: {sorted(changes)}")
        return doc

    def set_status(self, caller: Optional[SessionContext], job_id: str, status) -> dict:
        require_role(caller, UserRole.recruiter, RECRUITERS_ONLY)
        status = parse_job_status(status)

        doc = self._update_one(
            job_id, owner_filter(caller, "recruiter"), {"status": status.value},
            "Job not found or no permission to modify"
        )
        logger.info(f"Job {job_id} set to '{status.value}' by {caller.username}")
        return doc

    def delete_job(self, caller: Optional[SessionContext], job_id: str) -> int:
        """Delete an owned posting and its applications."""
        require_role(caller, UserRole.recruiter, RECRUITERS_ONLY)
        return self._delete_one(
            job_id, owner_filter(caller, "recruiter"),
            "Job not found or no permission to delete"
        )

    # ------------------------------------------------------------
    # Shared by the recruiter path and the admin console
    # ------------------------------------------------------------

    def _update_one(self, job_id: str, scope: dict, changes: dict, not_found: str) -> dict:
        oid = to_object_id(job_id)
        doc = None
        if oid is not None:
            changes = dict(changes, updated_at=utcnow())
            doc = self.collection.find_one_and_update(
                {"_id": oid, **scope},
                {"$set": changes},
                return_document=ReturnDocument.AFTER
            )
        if not doc:
            raise NotFoundError(not_found)
        return serialize_doc(doc)

    def _delete_one(self, job_id: str, scope: dict, not_found: str) -> int:
        oid = to_object_id(job_id)
        doc = None
        if oid is not None:
            doc = self.collection.find_one_and_delete({"_id": oid, **scope})
        if not doc:
            raise NotFoundError(not_found)

        # Second write; not atomic with the first
        removed = ApplicationService().delete_for_job(oid)
        logger.info(f"Job {job_id} deleted, {removed} application(s) removed")
        return removed
