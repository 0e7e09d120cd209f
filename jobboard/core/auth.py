"""
Authentication Utility - JWT, session cookie and password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification (the token names a server-side session)
- FastAPI dependencies that resolve the caller for each request
"""

from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends, Request, Response
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from jobboard.core.config import get_settings
from jobboard.core.permissions import SessionContext, require_authenticated, require_role
from jobboard.db.mongodb import get_collection, COLLECTIONS
from jobboard.schemas.schemas import UserRole
from jobboard.services.mongo_service import to_object_id
from jobboard.services.session_service import SessionService

settings = get_settings()

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.bcrypt_rounds)

# Bearer token extractor, for clients that do not keep cookies
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def start_session(response: Response, account: dict) -> str:
    """Open a server-side session for the account and set the cookie."""
    session_id = SessionService().create(account["id"], account["role"])
    token = create_access_token(data={
        "sub": account["id"],
        "role": account["role"],
        "sid": session_id
    })
    set_session_cookie(response, token)
    return session_id


def set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(
        key=settings.session_cookie_name,
        httponly=True,
        secure=settings.cookie_secure,
        samesite=settings.cookie_samesite
    )


async def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> Optional[SessionContext]:
    """
    FastAPI dependency - resolve the caller, or None when not logged in.

    The cookie wins over an Authorization header. A token is only honoured
    while its session record exists and the account still exists.
    """
    token = request.cookies.get(settings.session_cookie_name)
    if not token and credentials:
        token = credentials.credentials
    if not token:
        return None

    payload = decode_token(token)
    if not payload or not payload.get("sub") or not payload.get("sid"):
        return None

    session = SessionService().get_active(payload["sid"])
    if not session or str(session["account_id"]) != payload["sub"]:
        return None

    account = get_collection(COLLECTIONS["users"]).find_one(
        {"_id": to_object_id(payload["sub"])},
        {"password_hash": 0}
    )
    if not account:
        return None

    return SessionContext(
        account_id=str(account["_id"]),
        role=UserRole(account["role"]),
        session_id=payload["sid"],
        username=account["username"],
        email=account["email"]
    )


async def get_current_user(user: Optional[SessionContext] = Depends(get_optional_user)) -> SessionContext:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @router.get("/protected")
        async def route(user: SessionContext = Depends(get_current_user)):
            return user
    """
    return require_authenticated(user)


def role_required(role: UserRole, message: str):
    """
    Dependency factory - Require a role before the request body is looked at.

    Usage:
        @router.post("", dependencies=[Depends(role_required(UserRole.recruiter, "Recruiters only"))])
    """
    async def dependency(user: Optional[SessionContext] = Depends(get_optional_user)) -> SessionContext:
        return require_role(user, role, message)
    return dependency


get_current_admin = role_required(UserRole.admin, "Admin privileges required")
