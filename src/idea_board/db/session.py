"""Engine, session factory and declarative base."""

from __future__ import annotations

from collections.abc import Generator
from datetime import UTC, datetime

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from idea_board.core.settings import settings


class Base(DeclarativeBase):
    """Base class of every ORM model in the board."""


def utcnow() -> datetime:
    """Timezone-aware UTC now, used for column defaults."""
    return datetime.now(UTC)


# Registers every table on Base.metadata before create_all or Alembic look at it.
import idea_board.models  # noqa: E402,F401


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """Make SQLite honour ON DELETE CASCADE like the production database."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record) -> None:  # pragma: no cover - driver hook
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# Request threads share SQLite connections.
engine = create_engine(
    settings.database_url,
    connect_args={"check_same_thread": False} if settings.uses_sqlite else {},
    pool_pre_ping=True,
    echo=settings.sql_debug,
)
enable_sqlite_foreign_keys(engine)
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False)


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session; closed once the response is sent."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
