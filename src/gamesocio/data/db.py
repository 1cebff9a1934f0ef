"""Engine and session management for the GameSocio database (DB_URL, SQLite by default)."""

from __future__ import annotations

import os
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy import event as sa_event
from sqlalchemy.engine import URL, Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Base(DeclarativeBase):
    """Declarative base shared by the GameSocio tables."""


_engine = None
_SessionLocal: sessionmaker[Session] | None = None


def get_database_url() -> str:
    """Return DB_URL, or the project-root gamesocio.db SQLite file."""
    env_url = os.getenv("DB_URL")
    if env_url:
        return env_url

    project_root = Path(__file__).resolve().parents[3]
    db_path = project_root / "gamesocio.db"
    return URL.create("sqlite", database=str(db_path)).render_as_string(hide_password=False)


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def _get_engine() -> Engine:
    global _engine
    if _engine is None:
        database_url = get_database_url()
        _engine = create_engine(database_url, echo=False, future=True)
        if _engine.dialect.name == "sqlite":
            sa_event.listen(_engine, "connect", _enable_sqlite_foreign_keys)
        _ensure_tables_created()
    return _engine


def _ensure_tables_created() -> None:
    # Models register their tables on Base when imported.
    from gamesocio.data.models import (  # noqa: F401
        event,
        game_idea,
        media_post,
        orphaned_object,
        portfolio_item,
        profile,
        project,
    )

    Base.metadata.create_all(bind=_engine)


def _get_session_factory() -> sessionmaker[Session]:
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            bind=_get_engine(),
            autoflush=False,
            expire_on_commit=False,
        )
    return _SessionLocal


def init_db() -> None:
    """Create the engine and tables now instead of on first access."""
    _get_engine()


def reset_db() -> None:
    """Dispose the cached engine so the next access re-reads DB_URL."""
    global _engine, _SessionLocal
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionLocal = None


@contextmanager
def get_session() -> Iterator[Session]:
    """Yield a session that commits on success and rolls back on error."""
    session = _get_session_factory()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def generate_uuid() -> str:
    """Return a new primary key for content tables."""
    return str(uuid.uuid4())
