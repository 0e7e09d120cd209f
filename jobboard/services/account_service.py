"""
Account Service - the account directory.

Accounts are created by self-registration and never updated or deleted.
The role is fixed at registration.
"""

import logging
from typing import List, Optional
from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from jobboard.core.auth import hash_password, verify_password
from jobboard.core.errors import AuthError, ConflictError, ValidationError
from jobboard.core.permissions import SessionContext, require_role
from jobboard.db.mongodb import get_collection, COLLECTIONS
from jobboard.schemas.schemas import UserRole
from jobboard.services.mongo_service import serialize_doc, serialize_docs, to_object_id, utcnow

logger = logging.getLogger(__name__)


def public_profile(account: dict) -> dict:
    """The fields any response may carry; never the password hash."""
    return {
        "username": account["username"],
        "email": account["email"],
        "role": account["role"]
    }


class AccountService:

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["users"])

    def register(self, username: str, email: str, password: str, role) -> dict:
        """
        Create an account and return its public profile.

        Raises:
            ValidationError: role is not recruiter/jobseeker/admin
            ConflictError: email or username already taken
        """
        try:
            role = UserRole(role)
        except ValueError:
            raise ValidationError("Invalid role type")

        if self.collection.find_one({"email": email}):
            raise ConflictError("Email already registered")
        if self.collection.find_one({"username": username}):
            raise ConflictError("A user with the given username is already registered")

        doc = {
            "username": username,
            "email": email,
            "role": role.value,
            "password_hash": hash_password(password),
            "created_at": utcnow()
        }
        try:
            self.collection.insert_one(doc)
        except DuplicateKeyError as e:
            # Lost a race against a concurrent registration
            key_pattern = (e.details or {}).get("keyPattern") or {}
            if "email" in key_pattern:
                raise ConflictError("Email already registered")
            raise ConflictError("A user with the given username is already registered")

        logger.info(f"Registered {role.value} account '{username}'")
        return public_profile(doc)

    def authenticate(self, username: str, password: str, expected_role=None) -> dict:
        """
        Check credentials; returns the serialized account.

        Raises:
            AuthError: unknown user, wrong password, or role mismatch
        """
        account = self.collection.find_one({"username": username})
        if not account or not verify_password(password, account["password_hash"]):
            logger.warning(f"Failed login for '{username}'")
            raise AuthError("Invalid username or password")

        if expected_role and account["role"] != expected_role:
            logger.warning(f"Role mismatch on login for '{username}'")
            raise AuthError("Role mismatch")

        return serialize_doc(account)

    def get_by_id(self, account_id: str) -> Optional[dict]:
        oid = to_object_id(account_id)
        if oid is None:
            return None
        return serialize_doc(self.collection.find_one({"_id": oid}, {"password_hash": 0}))

    def list_accounts(self, caller: Optional[SessionContext]) -> List[dict]:
        """All accounts' public fields. Admin only."""
        require_role(caller, UserRole.admin, "Insufficient permissions")
        cursor = self.collection.find(
            {},
            {"username": 1, "email": 1, "role": 1, "created_at": 1}
        ).sort("created_at", 1)
        return serialize_docs(cursor)
