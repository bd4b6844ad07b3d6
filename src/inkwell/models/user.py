# src/inkwell/models/user.py
"""SQLAlchemy model for registered users."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String, event, inspect
from sqlalchemy.orm import Mapped, Session, mapped_column, relationship

from inkwell.db.session import Base
from inkwell.db.time import utcnow
from inkwell.events import REGISTERED, user_events

from .role import Role, RoleUser

if TYPE_CHECKING:
    from .post import Post


class User(Base):
    """Account able to author posts and hold roles."""

    __tablename__ = "user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(191), nullable=False)
    email: Mapped[str] = mapped_column(String(191), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    email_verified_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
    )

    role_assignments: Mapped[list[RoleUser]] = relationship(
        "RoleUser",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by=RoleUser.id,
        lazy="selectin",
    )
    posts: Mapped[list[Post]] = relationship(
        "Post",
        back_populates="owner",
        cascade="all, delete-orphan",
    )

    @property
    def roles(self) -> list[Role]:
        return [assignment.role for assignment in self.role_assignments]

    @property
    def role(self) -> Role | None:
        """Return the effective role: the first role assignment."""
        assignments = self.role_assignments
        return assignments[0].role if assignments else None

    @property
    def has_verified_email(self) -> bool:
        return self.email_verified_at is not None

    def permission_names(self) -> list[str]:
        """Return every permission granted through the user's roles."""
        names = {name for role in self.roles for name in role.permission_names}
        return sorted(names)

    def has_permission(self, name: str) -> bool:
        return any(name in role.permission_names for role in self.roles)

    def sync_roles(self, roles: list[Role]) -> None:
        """Replace all role assignments with ``roles``, in order."""
        self.role_assignments.clear()
        for role in roles:
            self.role_assignments.append(RoleUser(role=role))


_QUEUED_USERS = "inkwell.queued_registered"
_PENDING_REGISTERED = "inkwell.pending_registered"


@dataclass(frozen=True)
class RegisteredUser:
    """Snapshot of a user handed to ``registered`` handlers after commit."""

    id: int
    name: str
    email: str


@event.listens_for(Session, "before_flush")
def _track_email_changes(session: Session, flush_context, instances) -> None:
    """Clear verification when the email changes and queue ``registered`` events."""
    queued: list[User] = session.info.setdefault(_QUEUED_USERS, [])
    for obj in list(session.new) + list(session.dirty):
        if not isinstance(obj, User):
            continue
        is_new = obj in session.new
        if not is_new and not session.is_modified(obj, include_collections=False):
            continue
        email_changed = not is_new and inspect(obj).attrs.email.history.has_changes()
        if email_changed:
            obj.email_verified_at = None
        if (email_changed or not obj.has_verified_email) and obj not in queued:
            queued.append(obj)


@event.listens_for(Session, "after_flush_postexec")
def _snapshot_registered(session: Session, flush_context) -> None:
    # Handlers run after commit, when attributes may be expired.
    queued: list[User] = session.info.pop(_QUEUED_USERS, [])
    pending: list[RegisteredUser] = session.info.setdefault(_PENDING_REGISTERED, [])
    for user in queued:
        snapshot = RegisteredUser(id=user.id, name=user.name, email=user.email)
        if snapshot not in pending:
            pending.append(snapshot)


@event.listens_for(Session, "after_commit")
def _emit_registered(session: Session) -> None:
    pending: list[RegisteredUser] = session.info.pop(_PENDING_REGISTERED, [])
    for snapshot in pending:
        user_events.emit(REGISTERED, snapshot)


@event.listens_for(Session, "after_rollback")
def _discard_registered(session: Session) -> None:
    session.info.pop(_QUEUED_USERS, None)
    session.info.pop(_PENDING_REGISTERED, None)
