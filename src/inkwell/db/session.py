"""Engine, session factory and request-scoped sessions."""

from __future__ import annotations

from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from inkwell.core.settings import settings


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


# Model modules must be imported so that create_all sees every table.
import inkwell.models  # noqa: E402,F401


def enable_sqlite_foreign_keys(dbapi_connection, _) -> None:
    """Turn on foreign key enforcement, which SQLite leaves off per connection.

    Without it ``ondelete="CASCADE"`` on the association tables is ignored.
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def configure_engine(engine: Engine) -> Engine:
    """Attach the connection hooks Inkwell needs for ``engine``'s backend."""
    if engine.url.get_backend_name() == "sqlite":
        event.listen(engine, "connect", enable_sqlite_foreign_keys)
    return engine


engine = configure_engine(
    create_engine(
        settings.database_url,
        pool_pre_ping=True,
        echo=settings.sql_debug,
    )
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session for dependency injection."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_tables() -> None:
    """Create missing tables; used by ``inkwell-seed-roles --create-tables``."""
    Base.metadata.create_all(bind=engine)
