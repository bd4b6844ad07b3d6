# src/inkwell/services/role_seeder.py
"""Seed roles and permissions from a ``RoleSeedConfig``."""
from __future__ import annotations

import logging

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from inkwell.core.roles import RoleSeedConfig
from inkwell.models import Permission, Role, RoleUser, permission_role

logger = logging.getLogger(__name__)


def truncate_role_tables(db: Session) -> None:
    """Remove every role, permission and assignment."""
    db.execute(delete(RoleUser))
    db.execute(delete(permission_role))
    db.execute(delete(Role))
    db.execute(delete(Permission))
    db.flush()


def seed_roles(db: Session, config: RoleSeedConfig, *, truncate: bool | None = None) -> list[Role]:
    """Create or update the configured roles and permissions.

    Existing rows are matched by name, so running the seeder twice is a no-op.
    With ``truncate`` (defaulting to ``config.truncate_tables``) all role
    tables are emptied first, which also revokes every role assignment.

    Returns:
        The seeded roles ordered by hierarchy.
    """
    if truncate is None:
        truncate = config.truncate_tables
    if truncate:
        truncate_role_tables(db)

    permissions = {p.name: p for p in db.scalars(select(Permission))}
    for seed in config.permissions:
        permission = permissions.get(seed.name)
        if permission is None:
            permission = Permission(name=seed.name, display_name=seed.display_name)
            db.add(permission)
            permissions[seed.name] = permission

    roles = {r.name: r for r in db.scalars(select(Role))}
    seeded: list[Role] = []
    for seed in config.roles:
        role = roles.get(seed.name)
        if role is None:
            role = Role(name=seed.name)
            db.add(role)
        role.display_name = seed.display_name
        role.hierarchy = seed.hierarchy
        role.permissions = [permissions[name] for name in seed.permission_names]
        seeded.append(role)
        logger.info(
            "Seeded role %s (hierarchy %d) with %d permissions",
            seed.name,
            seed.hierarchy,
            len(seed.permissions),
        )

    db.commit()
    return seeded
