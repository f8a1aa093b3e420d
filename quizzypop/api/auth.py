"""
Authentication API endpoints
"""
from fastapi import APIRouter, Depends, Response
import logging

from quizzypop.api.deps import get_auth_service, get_current_user, limit_credential_requests
from quizzypop.schemas.auth import (
    CurrentUser,
    LoginRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserRead,
)
from quizzypop.services.auth_service import AuthService

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger(__name__)


@router.post(
    "/register",
    response_model=UserRead,
    status_code=201,
    dependencies=[Depends(limit_credential_requests)]
)
async def register(
    payload: RegisterRequest,
    response: Response,
    auth: AuthService = Depends(get_auth_service)
):
    """
    Create a user account

    - 409 if the email is already registered
    - Role defaults to student
    """
    user = auth.register(payload)
    response.headers["Location"] = f"/api/auth/register?id={user.id}"
    return user


@router.post("/login", response_model=TokenResponse, dependencies=[Depends(limit_credential_requests)])
async def login(payload: LoginRequest, auth: AuthService = Depends(get_auth_service)):
    """Exchange email and password for an access token and a refresh token"""
    return auth.login(payload.email, payload.password)


@router.post("/refresh", response_model=TokenResponse, dependencies=[Depends(limit_credential_requests)])
async def refresh(payload: RefreshRequest, auth: AuthService = Depends(get_auth_service)):
    """
    Rotate a refresh token

    The presented token is revoked and a new access/refresh pair is issued.
    Unknown, revoked or expired tokens get 401.
    """
    return auth.refresh(payload.refresh_token)


@router.post("/logout", status_code=204)
async def logout(
    payload: RefreshRequest,
    user: CurrentUser = Depends(get_current_user),
    auth: AuthService = Depends(get_auth_service)
):
    """Revoke one of the caller's refresh tokens"""
    auth.logout(payload.refresh_token, user.id)
    return Response(status_code=204)


@router.get("/me", response_model=CurrentUser)
async def me(user: CurrentUser = Depends(get_current_user)):
    """Identity claims of the authenticated caller"""
    return user
