"""
Session Service - server-side login sessions.

The cookie token only names a session; the session record decides whether
the caller is still logged in. Logout deletes the record, which invalidates
the token immediately even though it has not expired.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional
from pymongo.collection import Collection

from jobboard.core.config import get_settings
from jobboard.db.mongodb import get_collection, COLLECTIONS
from jobboard.services.mongo_service import to_object_id

logger = logging.getLogger(__name__)


class SessionService:

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["sessions"])
        self.lifetime = timedelta(minutes=get_settings().jwt_expire_minutes)

    def create(self, account_id: str, role: str) -> str:
        """Open a session for the account; returns the session id."""
        now = datetime.utcnow()
        result = self.collection.insert_one({
            "account_id": to_object_id(account_id),
            "role": role,
            "created_at": now,
            "expires_at": now + self.lifetime
        })
        return str(result.inserted_id)

    def get_active(self, session_id: str) -> Optional[dict]:
        """Session record if it exists and has not expired."""
        oid = to_object_id(session_id)
        if oid is None:
            return None
        # TTL reaping is lazy, so check expiry here as well
        return self.collection.find_one({
            "_id": oid,
            "expires_at": {"$gt": datetime.utcnow()}
        })

    def revoke(self, session_id: str) -> bool:
        oid = to_object_id(session_id)
        if oid is None:
            return False
        result = self.collection.delete_one({"_id": oid})
        return result.deleted_count > 0
