# tests/test_database.py
"""Tests for engine configuration."""

from sqlalchemy import delete, func, select

from inkwell.db import session as db_session_module
from inkwell.models import Post, post_tag


def test_application_engine_enforces_foreign_keys():
    with db_session_module.engine.connect() as connection:
        assert connection.exec_driver_sql("PRAGMA foreign_keys").scalar() == 1


def test_deleting_post_rows_cascades_to_tag_links(db_session, editor, make_post):
    post = make_post(editor, tags=["dogs", "cats"])
    post_id = post.id
    db_session.expunge(post)

    db_session.execute(delete(Post).where(Post.id == post_id))

    links = db_session.scalar(
        select(func.count()).select_from(post_tag).where(post_tag.c.post_id == post_id)
    )
    assert links == 0
