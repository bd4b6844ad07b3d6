# src/inkwell/services/post_service.py
"""Post lifecycle: create, read, update and delete."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from inkwell.core.errors import NotFound, ValidationFailed
from inkwell.core.settings import settings
from inkwell.models import Post, Tag, User
from inkwell.schemas.post import BANNER_MAX_LENGTH, PostCreate, PostUpdate
from inkwell.services.authorization import authorize, can, require_actor

logger = logging.getLogger(__name__)


def find_or_create_tags(db: Session, names: list[str]) -> list[Tag]:
    """Return tags for ``names`` in first-seen order, creating missing ones.

    Names are stripped; blanks and duplicates are ignored.
    """
    wanted: list[str] = []
    for name in names:
        name = name.strip()
        if name and name not in wanted:
            wanted.append(name)
    if not wanted:
        return []

    existing = {tag.name: tag for tag in db.scalars(select(Tag).where(Tag.name.in_(wanted)))}
    tags: list[Tag] = []
    for name in wanted:
        tag = existing.get(name)
        if tag is None:
            tag = Tag(name=name)
            db.add(tag)
        tags.append(tag)
    return tags


def attach_tags(db: Session, post: Post, names: list[str]) -> None:
    """Add tags to ``post`` without removing existing ones."""
    current = {tag.name for tag in post.tags}
    for tag in find_or_create_tags(db, names):
        if tag.name not in current:
            post.tags.append(tag)
            current.add(tag.name)


def sync_tags(db: Session, post: Post, names: list[str]) -> None:
    """Replace the tags of ``post`` with exactly ``names``."""
    post.tags = find_or_create_tags(db, names)


def get_post(db: Session, post_id: int) -> Post:
    """Return a post with owner and tags loaded.

    Raises:
        NotFound: If no post has ``post_id``.
    """
    post = db.scalars(
        select(Post)
        .where(Post.id == post_id)
        .options(selectinload(Post.owner), selectinload(Post.tags))
    ).first()
    if post is None:
        raise NotFound("Post not found")
    return post


def create_post(db: Session, actor: User | None, data: PostCreate) -> Post:
    """Create a post owned by ``actor``.

    Raises:
        Unauthenticated: If there is no actor.
        Forbidden: If the actor cannot create posts.
    """
    user = authorize(actor, "create", Post)

    post = Post(
        title=data.title,
        description=data.description,
        content=data.content,
        banner=data.banner or None,
        visible=True if data.visible is None else data.visible,
        private=data.private or False,
        owner=user,
    )
    db.add(post)
    if data.tags:
        attach_tags(db, post, data.tags)
    db.commit()
    db.refresh(post)
    logger.info("Post %s created by user %s", post.id, user.id)
    return post


def show_post(db: Session, actor: User | None, post_id: int) -> Post:
    """Return a post subject to read checks.

    A post that is not visible can only be read by someone allowed to update
    it; everyone else gets ``NotFound``. A private post requires a caller.
    """
    post = get_post(db, post_id)
    if not post.visible and not can(actor, "update", post):
        raise NotFound("Post not found")
    if post.private:
        require_actor(actor)
    return post


def edit_post(db: Session, actor: User | None, post_id: int) -> Post:
    """Return a post for editing, requiring the update capability."""
    post = get_post(db, post_id)
    authorize(actor, "update", post)
    return post


def update_post(db: Session, actor: User | None, post_id: int, data: PostUpdate) -> Post:
    """Replace the editable fields of a post.

    ``visible`` and ``private`` keep their values when omitted. The banner is
    only replaced by a non-empty value that differs from the post's current
    public banner URL, which clients send back unchanged. Tags are
    synchronized when the list holds at least one non-blank name.

    Raises:
        ValidationFailed: If a replacement banner is longer than the stored
            path allows.
    """
    post = get_post(db, post_id)
    user = authorize(actor, "update", post)

    banner = None
    if data.banner and data.banner != settings.asset_url(post.banner):
        if len(data.banner) > BANNER_MAX_LENGTH:
            raise ValidationFailed(
                "banner",
                f"The banner may not be greater than {BANNER_MAX_LENGTH} characters.",
            )
        banner = data.banner

    post.title = data.title
    post.content = data.content
    post.description = data.description
    if data.visible is not None:
        post.visible = data.visible
    if data.private is not None:
        post.private = data.private
    if banner is not None:
        post.banner = banner
    tag_names = [name for name in data.tags or [] if name.strip()]
    if tag_names:
        sync_tags(db, post, tag_names)

    db.commit()
    db.refresh(post)
    logger.info("Post %s updated by user %s", post.id, user.id)
    return post


def delete_post(db: Session, actor: User | None, post_id: int) -> None:
    """Remove a post permanently."""
    post = get_post(db, post_id)
    user = authorize(actor, "delete", post)
    db.delete(post)
    db.commit()
    logger.info("Post %s deleted by user %s", post_id, user.id)
