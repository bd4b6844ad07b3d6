# src/inkwell/api/v1/endpoints/auth.py
"""Authentication endpoints for the Inkwell API."""

from __future__ import annotations

from fastapi import APIRouter, status

from inkwell.api.v1.dependencies import CurrentUserDep, RoleConfigDep, SessionDep
from inkwell.core.security import create_access_token
from inkwell.schemas.user import LoginRequest, LoginResponse, RegisterRequest, UserResponse
from inkwell.services import user_service

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account with the most basic role",
)
async def register(
    payload: RegisterRequest,
    db: SessionDep,
    role_config: RoleConfigDep,
) -> UserResponse:
    """Register a new account; a verification event is emitted after commit."""
    user = user_service.register_user(db, payload, role_config)
    return UserResponse.model_validate(user)


@router.post("/login", response_model=LoginResponse, summary="Exchange credentials for a token")
async def login(payload: LoginRequest, db: SessionDep) -> LoginResponse:
    """Return a bearer token for valid credentials."""
    user = user_service.authenticate(db, payload.email, payload.password)
    return LoginResponse(access_token=create_access_token(user.id))


@router.get("/me", response_model=UserResponse)
async def me(current_user: CurrentUserDep) -> UserResponse:
    """Return the authenticated user with role and permission names."""
    return UserResponse.model_validate(current_user)
