# src/inkwell/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .post import PaginationMeta, PostCreate, PostPageResponse, PostResponse, PostUpdate
from .role import RoleResponse
from .tag import TagResponse
from .user import (
    LoginRequest,
    LoginResponse,
    ProfileUpdate,
    RegisterRequest,
    UserResponse,
    UserUpdate,
)

__all__ = [
    "PaginationMeta", "PostCreate", "PostPageResponse", "PostResponse", "PostUpdate",
    "RoleResponse",
    "TagResponse",
    "LoginRequest", "LoginResponse", "ProfileUpdate", "RegisterRequest",
    "UserResponse", "UserUpdate",
]
