"""CRUD-style helpers for managing users."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.orm import Session

from inkwell.core import security
from inkwell.core.errors import Forbidden, NotFound, Unauthenticated, ValidationFailed
from inkwell.core.roles import RoleSeedConfig
from inkwell.models import Role, User
from inkwell.schemas.user import ProfileUpdate, RegisterRequest, UserUpdate
from inkwell.services.authorization import authorize, authorize_module
from inkwell.services.role_hierarchy import RoleHierarchyGuard

logger = logging.getLogger(__name__)

__all__ = [
    "authenticate",
    "current_profile",
    "get_user",
    "get_users",
    "register_user",
    "update_user",
    "update_profile",
    "delete_user",
]


def _ensure_unique_email(db: Session, email: str, exclude_id: int | None = None) -> None:
    stmt = select(User.id).where(User.email == email)
    if exclude_id is not None:
        stmt = stmt.where(User.id != exclude_id)
    if db.scalar(stmt) is not None:
        raise ValidationFailed("email", "The email has already been taken.")


def get_user(db: Session, user_id: int) -> User:
    """Return a single user by primary key.

    Raises:
        NotFound: If no user has ``user_id``.
    """
    user = db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


def get_users(db: Session, skip: int = 0, limit: int = 100) -> Sequence[User]:
    """Return users with simple offset-based pagination."""
    return db.scalars(select(User).order_by(User.id).offset(skip).limit(limit)).all()


def register_user(db: Session, data: RegisterRequest, config: RoleSeedConfig) -> User:
    """Create an account holding the most basic configured role."""
    _ensure_unique_email(db, data.email)
    role = db.scalar(select(Role).where(Role.name == config.most_basic_role))
    if role is None:
        raise NotFound(f"Role {config.most_basic_role} has not been seeded")

    user = User(
        name=data.name,
        email=data.email,
        password_hash=security.hash_password(data.password),
    )
    user.sync_roles([role])
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s with role %s", user.id, role.name)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """Return the user owning ``email`` if ``password`` matches.

    Raises:
        Unauthenticated: If the credentials are wrong.
    """
    user = db.scalar(select(User).where(User.email == email))
    if user is None or not security.verify_password(user.password_hash, password):
        raise Unauthenticated("Invalid credentials")
    return user


def update_user(db: Session, actor: User | None, user_id: int, data: UserUpdate) -> User:
    """Apply a manager's partial update to another user.

    A new role is checked against the actor's own role with
    ``RoleHierarchyGuard`` before it replaces the target's assignments.
    """
    manager = authorize(actor, "update", User)
    db_user = get_user(db, user_id)

    role: Role | None = None
    if data.role_id is not None:
        actor_role = manager.role
        if actor_role is None:
            raise Forbidden()
        role = RoleHierarchyGuard(actor_role).validate(db, "role_id", data.role_id)

    if data.email is not None:
        _ensure_unique_email(db, data.email, exclude_id=db_user.id)
        db_user.email = data.email
    if data.name is not None:
        db_user.name = data.name
    if role is not None:
        db_user.sync_roles([role])
        logger.info("User %s assigned role %s to user %s", manager.id, role.name, db_user.id)

    db.commit()
    db.refresh(db_user)
    return db_user


def update_profile(db: Session, actor: User | None, data: ProfileUpdate) -> User:
    """Update the caller's own name or email."""
    user = authorize_module(actor, "profile", "update")
    if data.email is not None:
        _ensure_unique_email(db, data.email, exclude_id=user.id)
        user.email = data.email
    if data.name is not None:
        user.name = data.name
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, actor: User | None, user_id: int) -> User:
    """Revoke all role assignments, then remove the user."""
    manager = authorize(actor, "delete", User)
    db_user = get_user(db, user_id)

    db_user.sync_roles([])
    db.flush()
    db.delete(db_user)
    db.commit()
    logger.info("User %s deleted by user %s", user_id, manager.id)
    return db_user


def current_profile(actor: User | None) -> User:
    """Return the caller, requiring the profile read capability."""
    return authorize_module(actor, "profile", "read")
