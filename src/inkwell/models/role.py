# src/inkwell/models/role.py
"""SQLAlchemy models for roles, permissions and their assignments."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inkwell.db.session import Base

if TYPE_CHECKING:
    from .user import User

permission_role = Table(
    "permission_role",
    Base.metadata,
    Column("permission_id", ForeignKey("permission.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", ForeignKey("role.id", ondelete="CASCADE"), primary_key=True),
)


class RoleUser(Base):
    """Assignment of a role to a user.

    Kept as a mapped class rather than a plain table so that assignments have
    a stable insertion order; the first one is the user's effective role.
    """

    __tablename__ = "role_user"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    role_id: Mapped[int] = mapped_column(ForeignKey("role.id", ondelete="CASCADE"), nullable=False)
    user_id: Mapped[int] = mapped_column(ForeignKey("user.id", ondelete="CASCADE"), nullable=False)

    role: Mapped[Role] = relationship("Role", lazy="joined")
    user: Mapped[User] = relationship("User", back_populates="role_assignments")


class Permission(Base):
    """Named capability on a module, e.g. ``posts-create``."""

    __tablename__ = "permission"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(191), unique=True, nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(191), nullable=True)


class Role(Base):
    """Role with a hierarchy rank; 0 is the most privileged."""

    __tablename__ = "role"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(191), unique=True, nullable=False)
    display_name: Mapped[str | None] = mapped_column(String(191), nullable=True)
    hierarchy: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    permissions: Mapped[list[Permission]] = relationship(
        "Permission",
        secondary=permission_role,
        order_by="Permission.name",
        lazy="selectin",
    )

    @property
    def permission_names(self) -> list[str]:
        return [permission.name for permission in self.permissions]
