# src/vouchboard/api/v1/endpoints/auth.py
"""Authentication endpoints for the Vouchboard API."""

from __future__ import annotations

from fastapi import APIRouter, status

from vouchboard.api.v1.dependencies import CurrentUserDep, SessionDep
from vouchboard.core.security import create_access_token
from vouchboard.models import User
from vouchboard.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserPrivate
from vouchboard.services import user_service

router = APIRouter(prefix="/auth", tags=["authentication"])


def _auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        access_token=create_access_token(user.id),
        token_type="bearer",
        user=UserPrivate.model_validate(user),
    )


@router.post(
    "/register",
    summary="Register a new account",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
)
async def register_user(payload: RegisterRequest, db: SessionDep) -> AuthResponse:
    """Create an account and return an access token for it."""
    user = user_service.register_user(db, payload)
    return _auth_response(user)


@router.post(
    "/login",
    summary="Authenticate with email and password",
    response_model=AuthResponse,
)
async def login_user(payload: LoginRequest, db: SessionDep) -> AuthResponse:
    """Exchange valid credentials for an access token."""
    user = user_service.authenticate(db, payload.email, payload.password)
    return _auth_response(user)


@router.get("/me", summary="Return the authenticated account", response_model=UserPrivate)
async def read_me(current_user: CurrentUserDep) -> User:
    """Return the account the bearer token belongs to."""
    return current_user
