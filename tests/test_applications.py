"""Tests for the application ledger."""

import pytest
from pymongo.errors import DuplicateKeyError


def apply(client, job_id, cover_letter="hi"):
    return client.post("/applications", json={"jobId": job_id, "coverLetter": cover_letter})


def test_submit_copies_recruiter_and_starts_pending(recruiter, jobseeker, create_job):
    job = create_job()
    resp = apply(jobseeker, job["_id"])

    assert resp.status_code == 201
    app_ = resp.json()
    assert app_["status"] == "pending"
    assert app_["job"] == job["_id"]
    assert app_["recruiter"] == job["recruiter"]
    assert app_["applicant"] == jobseeker.get("/users/current").json()["_id"]
    assert app_["coverLetter"] == "hi"


def test_submit_to_closed_job_is_allowed(jobseeker, create_job):
    job = create_job(status="closed")
    assert apply(jobseeker, job["_id"]).status_code == 201


def test_submit_unknown_job(jobseeker):
    for job_id in ("5f0c2b1e9d3e4a0012345678", "garbage"):
        resp = apply(jobseeker, job_id)
        assert resp.status_code == 404
        assert resp.json() == {"error": "Job not found"}


def test_submit_requires_jobseeker(recruiter, client, create_job):
    job = create_job()
    resp = apply(recruiter, job["_id"])
    assert resp.status_code == 403
    assert resp.json() == {"error": "Only job seekers can submit applications"}
    assert apply(client, job["_id"]).status_code == 401


def test_duplicate_submit_conflicts(jobseeker, create_job, mongo_db):
    job = create_job()
    assert apply(jobseeker, job["_id"]).status_code == 201

    resp = apply(jobseeker, job["_id"])
    assert resp.status_code == 400
    assert resp.json() == {"error": "You have already applied for this position"}
    assert mongo_db.applications.count_documents({}) == 1


def test_unique_index_blocks_racing_duplicate(jobseeker, create_job, mongo_db):
    job = create_job()
    apply(jobseeker, job["_id"])
    existing = mongo_db.applications.find_one({})
    existing.pop("_id")

    with pytest.raises(DuplicateKeyError):
        mongo_db.applications.insert_one(existing)


def test_two_jobseekers_can_apply_to_same_job(jobseeker, other_jobseeker, create_job):
    job = create_job()
    assert apply(jobseeker, job["_id"]).status_code == 201
    assert apply(other_jobseeker, job["_id"]).status_code == 201


def test_recruiter_workflow(recruiter, jobseeker, create_job):
    job = create_job(title="Cook", salary={"min": 3000, "max": 5000})
    application_id = apply(jobseeker, job["_id"], "hi").json()["_id"]

    received = recruiter.get("/applications/received")
    assert received.status_code == 200
    entries = received.json()
    assert len(entries) == 1
    assert entries[0]["applicant"]["username"] == "alice"
    assert entries[0]["status"] == "pending"
    assert entries[0]["job"]["title"] == "Cook"

    resp = recruiter.patch(f"/applications/{application_id}/status", json={"status": "accepted"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "accepted"

    sent = jobseeker.get("/applications/sent").json()
    assert len(sent) == 1
    assert sent[0]["status"] == "accepted"
    assert sent[0]["recruiter"]["username"] == "rita"
    assert sent[0]["job"]["_id"] == job["_id"]


def test_received_only_shows_own(recruiter, other_recruiter, jobseeker, create_job):
    mine = create_job()
    theirs = create_job(as_client=other_recruiter)
    apply(jobseeker, mine["_id"])
    apply(jobseeker, theirs["_id"])

    assert len(recruiter.get("/applications/received").json()) == 1
    assert len(other_recruiter.get("/applications/received").json()) == 1


def test_sent_newest_first(jobseeker, create_job):
    first = create_job(title="A")
    second = create_job(title="B")
    apply(jobseeker, first["_id"])
    apply(jobseeker, second["_id"])

    sent = jobseeker.get("/applications/sent").json()
    assert [a["job"]["title"] for a in sent] == ["B", "A"]


def test_list_endpoints_are_role_scoped(recruiter, jobseeker):
    assert jobseeker.get("/applications/received").status_code == 403
    assert recruiter.get("/applications/sent").status_code == 403


def test_set_status_by_other_recruiter_is_not_found(other_recruiter, jobseeker, create_job):
    job = create_job()
    application_id = apply(jobseeker, job["_id"]).json()["_id"]

    resp = other_recruiter.patch(f"/applications/{application_id}/status", json={"status": "rejected"})
    assert resp.status_code == 404
    assert resp.json() == {"error": "Application not found or no permission to modify"}


def test_set_status_invalid_value(recruiter, jobseeker, create_job):
    job = create_job()
    application_id = apply(jobseeker, job["_id"]).json()["_id"]

    resp = recruiter.patch(f"/applications/{application_id}/status", json={"status": "hired"})
    assert resp.status_code == 400


def test_withdraw_pending(jobseeker, create_job, mongo_db):
    job = create_job()
    application_id = apply(jobseeker, job["_id"]).json()["_id"]

    resp = jobseeker.delete(f"/applications/{application_id}")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Application withdrawn successfully"}
    assert mongo_db.applications.count_documents({}) == 0

    # Can apply again after withdrawing
    assert apply(jobseeker, job["_id"]).status_code == 201


@pytest.mark.parametrize("decision", ["accepted", "rejected"])
def test_withdraw_after_decision_is_not_found(recruiter, jobseeker, create_job, decision):
    job = create_job()
    application_id = apply(jobseeker, job["_id"]).json()["_id"]
    recruiter.patch(f"/applications/{application_id}/status", json={"status": decision})

    resp = jobseeker.delete(f"/applications/{application_id}")
    assert resp.status_code == 404
    assert resp.json() == {"error": "Application not found or cannot be deleted"}


def test_withdraw_someone_elses_application(jobseeker, other_jobseeker, create_job):
    job = create_job()
    application_id = apply(jobseeker, job["_id"]).json()["_id"]

    assert other_jobseeker.delete(f"/applications/{application_id}").status_code == 404
    assert len(jobseeker.get("/applications/sent").json()) == 1


def test_withdraw_requires_jobseeker(recruiter, jobseeker, create_job):
    job = create_job()
    application_id = apply(jobseeker, job["_id"]).json()["_id"]
    assert recruiter.delete(f"/applications/{application_id}").status_code == 403


def test_orphaned_application_shows_null_job(recruiter, jobseeker, create_job, mongo_db):
    job = create_job()
    apply(jobseeker, job["_id"])
    # Simulate a crash between the two cascade writes
    mongo_db.jobs.delete_many({})

    received = recruiter.get("/applications/received").json()
    assert len(received) == 1
    assert received[0]["job"] is None
    assert jobseeker.get("/applications/sent").json()[0]["job"] is None
