"""
User Routes

POST /users/register - Register new account
POST /users/login - Login, sets the session cookie
GET /users/logout - End the session
GET /users/current - Current session's user (401 if none)
GET /users/profile - Current user's profile
GET /users/list - All accounts (admin only)
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Response

from jobboard.core.auth import clear_session_cookie, get_current_user, get_optional_user, start_session
from jobboard.core.errors import AuthError
from jobboard.core.permissions import SessionContext
from jobboard.services.account_service import AccountService, public_profile
from jobboard.services.session_service import SessionService
from jobboard.schemas.schemas import (
    RegisterRequest, LoginRequest, AuthResponse, CurrentUserResponse,
    ProfileResponse, AccountResponse, MessageResponse
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(request: RegisterRequest):
    """
    Register a new account.

    Registration does not log in; call /users/login afterwards.
    """
    user = AccountService().register(request.username, request.email, request.password, request.role)
    return AuthResponse(message="Registration successful", user=user)


@router.post("/login", response_model=AuthResponse)
async def login(request: LoginRequest, response: Response):
    """
    Login and receive the session cookie.

    If `role` is given it must match the account's role.
    """
    account = AccountService().authenticate(request.username, request.password, request.role)
    start_session(response, account)
    logger.info(f"{account['username']} logged in as {account['role']}")
    return AuthResponse(message="Login successful", user=public_profile(account))


@router.get("/logout", response_model=MessageResponse)
async def logout(response: Response, user: SessionContext = Depends(get_current_user)):
    SessionService().revoke(user.session_id)
    clear_session_cookie(response)
    logger.info(f"{user.username} logged out")
    return MessageResponse(message="Logout successful")


@router.get("/current", response_model=CurrentUserResponse)
async def current(user: Optional[SessionContext] = Depends(get_optional_user)):
    if user is None:
        raise AuthError("Not authenticated")
    return CurrentUserResponse(id=user.account_id, username=user.username, email=user.email, role=user.role)


@router.get("/profile", response_model=ProfileResponse)
async def profile(user: SessionContext = Depends(get_current_user)):
    account = AccountService().get_by_id(user.account_id)
    return ProfileResponse(**account)


@router.get("/list", response_model=List[AccountResponse])
async def list_users(user: SessionContext = Depends(get_current_user)):
    """All accounts, without credentials. Admins only."""
    return AccountService().list_accounts(user)
