"""Shared fixtures: an in-memory MongoDB and per-user HTTP clients."""

import os

# Settings are read once and cached; set test values before importing the app
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-key")
os.environ.setdefault("MONGODB_DB", "job_board_test")

import mongomock
import pytest
from fastapi.testclient import TestClient

from jobboard.db import mongodb
from jobboard.main import app


@pytest.fixture(autouse=True)
def mongo_db(monkeypatch):
    """Fresh mongomock database for every test, with the real indexes."""
    monkeypatch.setattr(mongodb, "_client", mongomock.MongoClient())
    monkeypatch.setattr(mongodb, "_db", None)
    mongodb.init_mongo_indexes()
    yield mongodb.get_mongo_db()


@pytest.fixture
def client():
    """Anonymous client."""
    return TestClient(app)


@pytest.fixture
def make_client():
    """
    Factory: register an account, log it in, return a client holding the
    session cookie. Each client has its own cookie jar.
    """
    def _make(username: str, role: str, password: str = "secret123", email: str = None):
        c = TestClient(app)
        resp = c.post("/users/register", json={
            "username": username,
            "email": email or f"{username}@jobs.io",
            "password": password,
            "role": role
        })
        assert resp.status_code == 201, resp.text
        resp = c.post("/users/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.text
        return c
    return _make


@pytest.fixture
def recruiter(make_client):
    return make_client("rita", "recruiter")


@pytest.fixture
def other_recruiter(make_client):
    return make_client("oscar", "recruiter")


@pytest.fixture
def jobseeker(make_client):
    return make_client("alice", "jobseeker")


@pytest.fixture
def other_jobseeker(make_client):
    return make_client("bob", "jobseeker")


@pytest.fixture
def admin(make_client):
    return make_client("root", "admin")


def job_payload(**overrides):
    payload = {
        "title": "Cook",
        "company": "Diner Co",
        "location": "Berlin",
        "salary": {"min": 3000, "max": 5000},
        "description": "Cook things",
        "requirements": ["HACCP"]
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def create_job(recruiter):
    """Create a job as `recruiter` (or another client) and return its JSON."""
    def _create(as_client=None, **overrides):
        resp = (as_client or recruiter).post("/jobs", json=job_payload(**overrides))
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _create
