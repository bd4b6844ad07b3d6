# src/inkwell/api/v1/endpoints/users.py
"""User management endpoints."""

from fastapi import APIRouter, Query, Response, status

from inkwell.api.v1.dependencies import OptionalUserDep, SessionDep
from inkwell.models import User
from inkwell.schemas.user import UserResponse, UserUpdate
from inkwell.services import user_service
from inkwell.services.authorization import authorize

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=list[UserResponse])
async def list_users(
    db: SessionDep,
    actor: OptionalUserDep,
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=100),
) -> list[UserResponse]:
    """List users; requires ``users-read``."""
    authorize(actor, "read", User)
    users = user_service.get_users(db, skip=skip, limit=limit)
    return [UserResponse.model_validate(user) for user in users]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, db: SessionDep, actor: OptionalUserDep) -> UserResponse:
    """Get a single user; requires ``users-read``."""
    authorize(actor, "read", User)
    return UserResponse.model_validate(user_service.get_user(db, user_id))


@router.put("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: int,
    payload: UserUpdate,
    db: SessionDep,
    actor: OptionalUserDep,
) -> UserResponse:
    """Update a user; a new ``role_id`` must be below the caller's own role."""
    user = user_service.update_user(db, actor, user_id, payload)
    return UserResponse.model_validate(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: int, db: SessionDep, actor: OptionalUserDep) -> Response:
    """Revoke a user's roles and delete the account."""
    user_service.delete_user(db, actor, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
