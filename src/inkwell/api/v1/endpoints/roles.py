# src/inkwell/api/v1/endpoints/roles.py
"""Role listing endpoint."""

from fastapi import APIRouter
from sqlalchemy import select

from inkwell.api.v1.dependencies import OptionalUserDep, SessionDep
from inkwell.models import Role
from inkwell.schemas.role import RoleResponse
from inkwell.services.authorization import authorize

router = APIRouter(prefix="/roles", tags=["roles"])


@router.get("/", response_model=list[RoleResponse])
async def list_roles(db: SessionDep, actor: OptionalUserDep) -> list[RoleResponse]:
    """List roles from most to least privileged; requires ``roles-read``."""
    authorize(actor, "read", Role)
    roles = db.scalars(select(Role).order_by(Role.hierarchy, Role.id)).all()
    return [RoleResponse.model_validate(role) for role in roles]
