"""
Access control - caller context and authorization predicates.

Every service operation receives the resolved caller (or None) explicitly
and runs these checks before touching the database. A failed check raises
before any write happens.
"""

from dataclasses import dataclass
from typing import Optional

from bson import ObjectId

from jobboard.core.errors import AuthError, AuthzError
from jobboard.schemas.schemas import UserRole


@dataclass(frozen=True)
class SessionContext:
    """Authenticated caller, resolved once per request."""
    account_id: str
    role: UserRole
    session_id: str
    username: str
    email: str

    @property
    def oid(self) -> ObjectId:
        return ObjectId(self.account_id)


def is_authenticated(caller: Optional[SessionContext]) -> bool:
    return caller is not None


def has_role(caller: Optional[SessionContext], role: UserRole) -> bool:
    return caller is not None and caller.role == role


def require_authenticated(caller: Optional[SessionContext]) -> SessionContext:
    if not is_authenticated(caller):
        raise AuthError("Please login first")
    return caller


def require_role(caller: Optional[SessionContext], role: UserRole, message: str) -> SessionContext:
    require_authenticated(caller)
    if not has_role(caller, role):
        raise AuthzError(message)
    return caller


def owner_filter(caller: SessionContext, field: str) -> dict:
    """
    Query fragment restricting a lookup to documents the caller owns.

    Merged into the id lookup so a missing document and someone else's
    document are the same empty result.
    """
    return {field: caller.oid}
