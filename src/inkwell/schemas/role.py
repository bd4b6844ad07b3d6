# src/inkwell/schemas/role.py
"""Role-related Pydantic schemas."""

from pydantic import BaseModel, ConfigDict


class RoleResponse(BaseModel):
    """Schema for role information returned by the API."""

    id: int
    name: str
    display_name: str | None
    hierarchy: int
    permission_names: list[str]

    model_config = ConfigDict(from_attributes=True)
