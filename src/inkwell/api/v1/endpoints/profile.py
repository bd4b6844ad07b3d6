# src/inkwell/api/v1/endpoints/profile.py
"""Endpoints for the caller's own account."""

from fastapi import APIRouter

from inkwell.api.v1.dependencies import OptionalUserDep, SessionDep
from inkwell.schemas.user import ProfileUpdate, UserResponse
from inkwell.services import user_service

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("", response_model=UserResponse)
async def read_profile(actor: OptionalUserDep) -> UserResponse:
    return UserResponse.model_validate(user_service.current_profile(actor))


@router.put("", response_model=UserResponse)
async def update_profile(
    payload: ProfileUpdate,
    db: SessionDep,
    actor: OptionalUserDep,
) -> UserResponse:
    """Update name or email; a new email must be verified again."""
    user = user_service.update_profile(db, actor, payload)
    return UserResponse.model_validate(user)
