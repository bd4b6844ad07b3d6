# tests/conftest.py
from __future__ import annotations

import os
from collections.abc import Callable, Generator, Iterator
from datetime import datetime, timedelta
from itertools import count

import pytest

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ASSET_BASE_URL", "http://test/storage")

from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from inkwell.core.roles import RoleSeedConfig, load_role_config
from inkwell.core.security import create_access_token, hash_password
from inkwell.db.session import Base, configure_engine
from inkwell.db.session import get_db as app_get_session
from inkwell.db.time import utcnow
from inkwell.main import app as fastapi_app
from inkwell.models import Post, Role, User
from inkwell.services.post_service import find_or_create_tags
from inkwell.services.role_seeder import seed_roles

TEST_DB_URL = "sqlite://"
TEST_PASSWORD = "correct horse battery"

_USER_COUNTER = count(1)
_POST_CLOCK = count(1)
_EPOCH = datetime(2024, 1, 1, 12, 0, 0)


@pytest.fixture(scope="session")
def engine() -> Generator[Engine, None, None]:
    engine = configure_engine(
        create_engine(
            TEST_DB_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    )
    Base.metadata.create_all(bind=engine)
    try:
        yield engine
    finally:
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture()
def db_session(engine: Engine) -> Iterator[Session]:
    connection = engine.connect()
    transaction = connection.begin()
    SessionLocal = sessionmaker(
        bind=connection,
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
    )
    session = SessionLocal()
    session.begin_nested()

    @event.listens_for(session, "after_transaction_end")
    def restart_savepoint(sess: Session, trans) -> None:  # pragma: no cover - SQLAlchemy internals
        if trans.nested and not getattr(trans._parent, "nested", False):
            session.begin_nested()

    try:
        yield session
    finally:
        event.remove(session, "after_transaction_end", restart_savepoint)
        session.close()

        if transaction.is_active:
            transaction.rollback()
        connection.close()

        # Ensure each test sees a clean database even if commits occurred.
        with engine.begin() as cleanup_conn:
            for table in reversed(Base.metadata.sorted_tables):
                cleanup_conn.execute(table.delete())


@pytest.fixture(scope="session")
def app() -> FastAPI:
    return fastapi_app


@pytest.fixture(autouse=True)
def override_session_dependency(app: FastAPI, db_session: Session) -> Iterator[None]:
    def _get_session_override() -> Generator[Session, None, None]:
        yield db_session

    app.dependency_overrides[app_get_session] = _get_session_override
    try:
        yield
    finally:
        app.dependency_overrides.pop(app_get_session, None)


@pytest.fixture()
def client(app: FastAPI) -> Iterator[TestClient]:
    with TestClient(app, base_url="http://test") as test_client:
        yield test_client


@pytest.fixture(scope="session")
def role_config() -> RoleSeedConfig:
    """Return the built-in role structure."""
    return load_role_config()


@pytest.fixture(scope="session")
def password_hash() -> str:
    """Hash the shared test password once; Argon2 is deliberately slow."""
    return hash_password(TEST_PASSWORD)


@pytest.fixture()
def roles(db_session: Session, role_config: RoleSeedConfig) -> dict[str, Role]:
    """Seed the default roles and return them by name."""
    seeded = seed_roles(db_session, role_config, truncate=False)
    return {role.name: role for role in seeded}


@pytest.fixture()
def make_user(
    db_session: Session,
    roles: dict[str, Role],
    password_hash: str,
) -> Callable[..., User]:
    """Return a factory creating verified users holding a named role."""

    def _make_user(role_name: str | None = "editor", name: str | None = None, **fields) -> User:
        number = next(_USER_COUNTER)
        user = User(
            name=name or f"User {number}",
            email=fields.pop("email", f"user{number}@example.com"),
            password_hash=password_hash,
            email_verified_at=fields.pop("email_verified_at", utcnow()),
            **fields,
        )
        if role_name is not None:
            user.sync_roles([roles[role_name]])
        db_session.add(user)
        db_session.flush()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def make_post(db_session: Session) -> Callable[..., Post]:
    """Return a factory creating posts with strictly increasing creation times."""

    def _make_post(
        owner: User,
        title: str = "A post title",
        content: str = "Some post content",
        *,
        tags: list[str] | None = None,
        **fields,
    ) -> Post:
        post = Post(
            title=title,
            description=fields.pop("description", "A short description"),
            content=content,
            owner=owner,
            created_at=fields.pop("created_at", _EPOCH + timedelta(minutes=next(_POST_CLOCK))),
            **fields,
        )
        db_session.add(post)
        if tags:
            post.tags = find_or_create_tags(db_session, tags)
        db_session.flush()
        db_session.refresh(post)
        return post

    return _make_post


@pytest.fixture()
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Return a helper building bearer headers for a user."""

    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers


@pytest.fixture()
def editor(make_user: Callable[..., User]) -> User:
    return make_user("editor", name="Edith Editor")


@pytest.fixture()
def other_editor(make_user: Callable[..., User]) -> User:
    return make_user("editor", name="Otto Editor")


@pytest.fixture()
def reader(make_user: Callable[..., User]) -> User:
    """A user holding only the most basic role."""
    return make_user("user", name="Rita Reader")


@pytest.fixture()
def admin(make_user: Callable[..., User]) -> User:
    return make_user("admin", name="Ada Admin")


@pytest.fixture()
def superadmin(make_user: Callable[..., User]) -> User:
    return make_user("superadmin", name="Sam Superadmin")
