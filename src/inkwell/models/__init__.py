# src/inkwell/models/__init__.py
"""SQLAlchemy models for the Inkwell application."""

from .post import Post, Tag, post_tag
from .role import Permission, Role, RoleUser, permission_role
from .user import User

__all__ = [
    "Post", "Tag", "post_tag",
    "Permission", "Role", "RoleUser", "permission_role",
    "User",
]
