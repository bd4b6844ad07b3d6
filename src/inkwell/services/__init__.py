# src/inkwell/services/__init__.py
"""Business logic services for the Inkwell application."""

from .post_query import PostIndexParams, PostPage, PostQueryFilter
from .role_hierarchy import RoleHierarchyGuard

__all__ = [
    "PostIndexParams",
    "PostPage",
    "PostQueryFilter",
    "RoleHierarchyGuard",
]
