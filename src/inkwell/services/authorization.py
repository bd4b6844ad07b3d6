# src/inkwell/services/authorization.py
"""Capability checks for actors against resources.

A capability is a permission named ``<module>-<action>``. The module is
derived from the resource's model class, so ``can(user, "create", Post)`` looks
for ``posts-create``. Post instances additionally allow their owner to update
and delete them.
"""

from __future__ import annotations

from typing import Literal

from inkwell.core.errors import Forbidden, Unauthenticated
from inkwell.core.roles import permission_name
from inkwell.models import Post, Role, User

Action = Literal["create", "read", "update", "delete"]

RESOURCE_MODULES: dict[type, str] = {
    Post: "posts",
    User: "users",
    Role: "roles",
}

OWNER_ACTIONS: frozenset[str] = frozenset({"update", "delete"})


def _module_for(resource: object) -> str:
    model = resource if isinstance(resource, type) else type(resource)
    try:
        return RESOURCE_MODULES[model]
    except KeyError as err:
        raise ValueError(f"No capability module registered for {model.__name__}") from err


def can(actor: User | None, action: Action, resource: object) -> bool:
    """Return True if ``actor`` may perform ``action`` on ``resource``.

    Args:
        actor: Authenticated user, or None for anonymous callers.
        action: One of create, read, update, delete.
        resource: A model class (``Post``) or instance (``post``).
    """
    if actor is None:
        return False
    if isinstance(resource, Post) and action in OWNER_ACTIONS and resource.user_id == actor.id:
        return True
    return actor.has_permission(permission_name(_module_for(resource), action))


def can_module(actor: User | None, module: str, action: Action) -> bool:
    """Capability check for modules without a model, such as ``profile``."""
    if actor is None:
        return False
    return actor.has_permission(permission_name(module, action))


def require_actor(actor: User | None) -> User:
    """Return ``actor`` or raise ``Unauthenticated``."""
    if actor is None:
        raise Unauthenticated()
    return actor


def authorize(actor: User | None, action: Action, resource: object) -> User:
    """Raise unless ``actor`` may perform ``action`` on ``resource``.

    Raises:
        Unauthenticated: If there is no actor.
        Forbidden: If the actor lacks the capability.
    """
    user = require_actor(actor)
    if not can(user, action, resource):
        raise Forbidden()
    return user


def authorize_module(actor: User | None, module: str, action: Action) -> User:
    user = require_actor(actor)
    if not can_module(user, module, action):
        raise Forbidden()
    return user
