"""
MongoDB Connection Utility

MongoDB stores every record of the job board:
- users: accounts (username, email, role, bcrypt hash)
- jobs: postings owned by a recruiter
- applications: a jobseeker's application to a job
- sessions: server-side login sessions referenced by the cookie token

References between collections are plain ObjectIds resolved at read time.
"""
import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from jobboard.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the job board database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a specific collection (see COLLECTIONS)."""
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning(f"MongoDB connection failed: {e}")
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
    "jobs": "jobs",
    "applications": "applications",
    "sessions": "sessions"
}


def init_mongo_indexes():
    """
    Create indexes for uniqueness and query performance.
    Call this once during app startup.
    """
    db = get_mongo_db()

    # Account identity is unique on both username and email
    db[COLLECTIONS["users"]].create_index("username", unique=True)
    db[COLLECTIONS["users"]].create_index("email", unique=True)

    # Recruiter dashboards and the public listing
    db[COLLECTIONS["jobs"]].create_index([("recruiter", ASCENDING), ("created_at", DESCENDING)])
    db[COLLECTIONS["jobs"]].create_index([("status", ASCENDING), ("created_at", DESCENDING)])

    # One application per (job, applicant); closes the double-submit race
    db[COLLECTIONS["applications"]].create_index([
        ("job", ASCENDING),
        ("applicant", ASCENDING)
    ], unique=True)
    db[COLLECTIONS["applications"]].create_index("recruiter")
    db[COLLECTIONS["applications"]].create_index("applicant")

    # Expired sessions are reaped by MongoDB's TTL monitor
    db[COLLECTIONS["sessions"]].create_index("expires_at", expireAfterSeconds=0)

    logger.info("MongoDB indexes created successfully")
