"""Role and permission seed configuration.

The configuration is built once at startup and passed by reference to the
seeder and to registration. It is immutable: roles and permissions are kept
in tuples of frozen dataclasses.

Roles are listed from most to least privileged; a role's hierarchy value is
its position in the structure, so the first role has hierarchy 0.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType

DEFAULT_PERMISSIONS_MAP: Mapping[str, str] = MappingProxyType(
    {
        "c": "create",
        "r": "read",
        "u": "update",
        "d": "delete",
    }
)

MOST_BASIC_ROLE_NAME = "user"

DEFAULT_ROLES_STRUCTURE: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "superadmin": {
            "users": "c,r,u,d",
            "posts": "c,r,u,d",
            "roles": "c,r,u,d",
            "quotations": "r,d",
            "profile": "r,u",
        },
        "admin": {
            "users": "c,r,u,d",
            "posts": "c,r,u,d",
            "roles": "r",
            "quotations": "r,d",
            "profile": "r,u",
        },
        "editor": {
            "posts": "c,r,u,d",
            "profile": "r,u",
        },
        MOST_BASIC_ROLE_NAME: {
            "profile": "r,u",
        },
    }
)


def permission_name(module: str, action: str) -> str:
    """Return the canonical permission name, e.g. ``posts-create``."""
    return f"{module}-{action}"


@dataclass(frozen=True)
class PermissionSeed:
    """A single permission granted on a module."""

    module: str
    action: str

    @property
    def name(self) -> str:
        return permission_name(self.module, self.action)

    @property
    def display_name(self) -> str:
        return f"{self.action.title()} {self.module.title()}"


@dataclass(frozen=True)
class RoleSeed:
    """A role with its hierarchy rank and granted permissions."""

    name: str
    hierarchy: int
    permissions: tuple[PermissionSeed, ...]

    @property
    def display_name(self) -> str:
        return self.name.replace("_", " ").title()

    @property
    def permission_names(self) -> tuple[str, ...]:
        return tuple(p.name for p in self.permissions)


@dataclass(frozen=True)
class RoleSeedConfig:
    """Complete role structure used to seed the database."""

    roles: tuple[RoleSeed, ...]
    most_basic_role: str = MOST_BASIC_ROLE_NAME
    truncate_tables: bool = True

    @classmethod
    def from_structure(
        cls,
        structure: Mapping[str, Mapping[str, str]],
        permissions_map: Mapping[str, str] = DEFAULT_PERMISSIONS_MAP,
        *,
        most_basic_role: str = MOST_BASIC_ROLE_NAME,
        truncate_tables: bool = True,
    ) -> RoleSeedConfig:
        """Build a config from ``{role: {module: "c,r,u,d"}}`` mappings.

        Raises:
            ValueError: If an abbreviation is not in ``permissions_map`` or the
                most basic role is not part of the structure.
        """
        roles: list[RoleSeed] = []
        for hierarchy, (role_name, modules) in enumerate(structure.items()):
            permissions: list[PermissionSeed] = []
            for module, abbreviations in modules.items():
                for abbreviation in abbreviations.split(","):
                    abbreviation = abbreviation.strip()
                    if not abbreviation:
                        continue
                    if abbreviation not in permissions_map:
                        raise ValueError(
                            f"Unknown permission abbreviation {abbreviation!r} for {role_name}"
                        )
                    permissions.append(PermissionSeed(module, permissions_map[abbreviation]))
            roles.append(RoleSeed(role_name, hierarchy, tuple(permissions)))

        if most_basic_role not in {role.name for role in roles}:
            raise ValueError(f"Most basic role {most_basic_role!r} is not defined")

        return cls(
            roles=tuple(roles),
            most_basic_role=most_basic_role,
            truncate_tables=truncate_tables,
        )

    @property
    def permissions(self) -> tuple[PermissionSeed, ...]:
        """Return every distinct permission across roles, in first-seen order."""
        seen: dict[str, PermissionSeed] = {}
        for role in self.roles:
            for permission in role.permissions:
                seen.setdefault(permission.name, permission)
        return tuple(seen.values())

    def get(self, name: str) -> RoleSeed | None:
        for role in self.roles:
            if role.name == name:
                return role
        return None


def load_role_config(path: str | Path | None = None) -> RoleSeedConfig:
    """Load the role configuration.

    Without ``path`` the built-in structure is used. Otherwise the file must be
    a JSON object with a ``roles_structure`` mapping and optional
    ``permissions_map``, ``most_basic_role`` and ``truncate_tables`` keys.
    """
    if path is None:
        return RoleSeedConfig.from_structure(DEFAULT_ROLES_STRUCTURE)

    raw = json.loads(Path(path).read_text(encoding="utf-8"))
    return RoleSeedConfig.from_structure(
        raw["roles_structure"],
        raw.get("permissions_map", DEFAULT_PERMISSIONS_MAP),
        most_basic_role=raw.get("most_basic_role", MOST_BASIC_ROLE_NAME),
        truncate_tables=raw.get("truncate_tables", True),
    )


__all__ = [
    "DEFAULT_PERMISSIONS_MAP",
    "DEFAULT_ROLES_STRUCTURE",
    "MOST_BASIC_ROLE_NAME",
    "PermissionSeed",
    "RoleSeed",
    "RoleSeedConfig",
    "load_role_config",
    "permission_name",
]
