# src/inkwell/services/role_hierarchy.py
"""Guard against assigning roles outside an actor's authority.

Hierarchy values are inverted: 0 is the most privileged role. An actor may
assign a role only when it is strictly less privileged than their own. Two
exemptions apply on top of that comparison:

* re-assigning the actor's own role is always allowed;
* an actor at hierarchy 0 may assign any role.
"""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from inkwell.core.errors import NotFound, ValidationFailed
from inkwell.models import Role

logger = logging.getLogger(__name__)

TOP_HIERARCHY = 0


class RoleHierarchyGuard:
    """Validate a target role against the acting user's role."""

    def __init__(self, actor_role: Role) -> None:
        self.actor_role = actor_role

    def is_self_assignment(self, target: Role) -> bool:
        return target.id == self.actor_role.id

    def is_top_of_hierarchy(self) -> bool:
        return self.actor_role.hierarchy == TOP_HIERARCHY

    def is_less_privileged(self, target: Role) -> bool:
        return target.hierarchy > self.actor_role.hierarchy

    def check(self, target: Role) -> bool:
        """Return True if the actor may assign ``target``."""
        if self.is_self_assignment(target):
            return True
        if self.is_top_of_hierarchy():
            return True
        if self.is_less_privileged(target):
            return True
        return False

    def validate(self, db: Session, attribute: str, value: int | str) -> Role:
        """Resolve ``value`` to a role and check it.

        Args:
            db: Database session used to resolve the role.
            attribute: Name of the input field, used in the error message.
            value: Role identifier supplied by the client.

        Returns:
            The resolved target role.

        Raises:
            NotFound: If ``value`` does not identify an existing role.
            ValidationFailed: If the role is outside the actor's authority.
        """
        try:
            role_id = int(value)
        except (TypeError, ValueError) as err:
            raise NotFound("Role not found") from err

        target = db.get(Role, role_id)
        if target is None:
            raise NotFound("Role not found")

        if not self.check(target):
            logger.info(
                "Rejected assignment of role %s (hierarchy %d) by role %s (hierarchy %d)",
                target.name,
                target.hierarchy,
                self.actor_role.name,
                self.actor_role.hierarchy,
            )
            raise ValidationFailed(
                attribute,
                f"The {attribute} have a higher hierarchy than the allowed.",
            )
        return target
