# src/inkwell/schemas/user.py
"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from .role import RoleResponse


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    name: str = Field(..., min_length=1, max_length=191)
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=191)


class LoginRequest(BaseModel):
    """Credentials exchanged for a bearer token."""

    email: EmailStr
    password: str


class LoginResponse(BaseModel):
    """Bearer token issued on login."""

    access_token: str
    token_type: str = "bearer"


class UserUpdate(BaseModel):
    """Partial update applied by a user manager."""

    name: str | None = Field(None, min_length=1, max_length=191)
    email: EmailStr | None = None
    role_id: int | None = Field(None, description="Identifier of the role to assign")


class ProfileUpdate(BaseModel):
    """Partial update of the caller's own account."""

    name: str | None = Field(None, min_length=1, max_length=191)
    email: EmailStr | None = None


class UserResponse(BaseModel):
    """Schema for user information returned by the API."""

    id: int
    name: str
    email: str
    email_verified_at: datetime | None
    created_at: datetime
    role: RoleResponse | None
    permissions: list[str]

    @model_validator(mode="before")
    @classmethod
    def _collect_permissions(cls, data: object) -> object:
        if isinstance(data, dict):
            return data
        return {
            "id": data.id,
            "name": data.name,
            "email": data.email,
            "email_verified_at": data.email_verified_at,
            "created_at": data.created_at,
            "role": data.role,
            "permissions": data.permission_names(),
        }

    model_config = ConfigDict(from_attributes=True)
