# src/inkwell/models/post.py
"""SQLAlchemy models for posts and their tags."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from inkwell.db.session import Base
from inkwell.db.time import utcnow

if TYPE_CHECKING:
    from .user import User

post_tag = Table(
    "post_tag",
    Base.metadata,
    Column("post_id", ForeignKey("post.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", ForeignKey("tag.id", ondelete="CASCADE"), primary_key=True),
)


class Tag(Base):
    """Free-form label attached to posts, unique by name."""

    __tablename__ = "tag"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(191), unique=True, nullable=False)


class Post(Base):
    """Blog-style article owned by a user.

    ``visible`` decides whether the post shows up in public listings at all;
    ``private`` restricts it to the private channel (authenticated readers).
    The two flags are independent.
    """

    __tablename__ = "post"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(190), nullable=False)
    description: Mapped[str] = mapped_column(String(300), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # Relative asset path; the public URL is built from ASSET_BASE_URL.
    banner: Mapped[str | None] = mapped_column(String(191), nullable=True)
    visible: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utcnow,
        onupdate=utcnow,
    )

    owner: Mapped[User] = relationship("User", back_populates="posts")
    tags: Mapped[list[Tag]] = relationship(
        "Tag",
        secondary=post_tag,
        order_by=Tag.name,
    )

    @property
    def tag_names(self) -> list[str]:
        return [tag.name for tag in self.tags]
