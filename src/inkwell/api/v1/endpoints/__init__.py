# src/inkwell/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .auth import router as auth_router
from .posts import router as posts_router
from .profile import router as profile_router
from .roles import router as roles_router
from .tags import router as tags_router
from .users import router as users_router

__all__ = [
    "auth_router",
    "posts_router",
    "profile_router",
    "roles_router",
    "tags_router",
    "users_router",
]
