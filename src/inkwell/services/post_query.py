# src/inkwell/services/post_query.py
"""Filtered, paginated post listings.

A listing starts from one of two base predicates:

* ``mine``: the caller's own posts, regardless of visibility or privacy;
* otherwise visible posts, either only private ones (``p``) or only public ones.

The optional filters are then applied in a fixed order:

* ``q``: case-insensitive substring of title OR content;
* ``t``: comma separated tag names, the post needs at least one of them;
* ``e``: comma separated regular expression terms; a post is dropped if its
  title OR its content matches any term, so both fields must independently
  fail to match for the post to be kept.

Results are ordered newest first and paginated with a fixed page size.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass

from sqlalchemy import Select, and_, func, or_, select
from sqlalchemy.orm import Session, selectinload

from inkwell.core.errors import ValidationFailed
from inkwell.models import Post, Tag, User
from inkwell.services.authorization import authorize, require_actor

logger = logging.getLogger(__name__)

POSTS_PER_PAGE = 15


@dataclass(frozen=True)
class PostIndexParams:
    """Raw listing query parameters, as received from the client."""

    mine: str | None = None
    p: str | None = None
    q: str | None = None
    t: str | None = None
    e: str | None = None
    page: int = 1


@dataclass(frozen=True)
class PostPage:
    """One page of posts plus offset pagination metadata."""

    items: list[Post]
    current_page: int
    per_page: int
    total: int

    @property
    def last_page(self) -> int:
        return max(1, math.ceil(self.total / self.per_page))


def filled(value: str | None) -> str | None:
    """Return the stripped value, or None when it is absent or blank."""
    if value is None:
        return None
    value = value.strip()
    return value or None


def split_terms(value: str) -> list[str]:
    """Split a comma separated list, dropping empty elements."""
    return [part.strip() for part in value.split(",") if part.strip()]


def exclusion_pattern(terms: list[str]) -> str:
    """Join exclusion terms into one case-insensitive alternation.

    Raises:
        ValidationFailed: If the resulting expression does not compile.
    """
    pattern = "(?i)" + "|".join(terms)
    try:
        re.compile(pattern)
    except re.error as err:
        raise ValidationFailed("e", f"The e field is not a valid expression: {err}") from err
    return pattern


class PostQueryFilter:
    """Build the set of posts visible to a caller under given parameters."""

    def __init__(self, db: Session, per_page: int = POSTS_PER_PAGE) -> None:
        self.db = db
        self.per_page = per_page

    def index(self, params: PostIndexParams, actor: User | None) -> PostPage:
        """Return a page of posts for ``actor``.

        Raises:
            Unauthenticated: ``mine`` or ``p`` requested without an actor.
            Forbidden: ``mine`` requested by an actor who cannot create posts.
            ValidationFailed: ``e`` is not a valid regular expression.
        """
        if filled(params.mine):
            user = authorize(actor, "create", Post)
            stmt = select(Post).where(Post.user_id == user.id)
            return self.execute_index_query(params, stmt)

        stmt = select(Post).where(Post.visible.is_(True))
        private = False
        if filled(params.p):
            require_actor(actor)
            private = True
        stmt = stmt.where(Post.private.is_(private))
        return self.execute_index_query(params, stmt)

    def apply_filters(self, params: PostIndexParams, stmt: Select) -> Select:
        """Add the search, tag and exclusion predicates to ``stmt``."""
        q = filled(params.q)
        if q:
            stmt = stmt.where(
                or_(
                    Post.title.icontains(q, autoescape=True),
                    Post.content.icontains(q, autoescape=True),
                )
            )

        t = filled(params.t)
        if t:
            tags = split_terms(t)
            if tags:
                stmt = stmt.where(Post.tags.any(Tag.name.in_(tags)))

        e = filled(params.e)
        if e:
            terms = split_terms(e)
            if terms:
                pattern = exclusion_pattern(terms)
                stmt = stmt.where(
                    and_(
                        ~Post.title.regexp_match(pattern),
                        ~Post.content.regexp_match(pattern),
                    )
                )
        return stmt

    def execute_index_query(self, params: PostIndexParams, stmt: Select) -> PostPage:
        stmt = self.apply_filters(params, stmt)
        page = max(1, params.page)

        total = self.db.scalar(select(func.count()).select_from(stmt.subquery())) or 0
        items = self.db.scalars(
            stmt.order_by(Post.created_at.desc(), Post.id.desc())
            .options(selectinload(Post.owner), selectinload(Post.tags))
            .offset((page - 1) * self.per_page)
            .limit(self.per_page)
        ).all()
        logger.debug("Post listing page %d: %d of %d", page, len(items), total)
        return PostPage(
            items=list(items),
            current_page=page,
            per_page=self.per_page,
            total=int(total),
        )
