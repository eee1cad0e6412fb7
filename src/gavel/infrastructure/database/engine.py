"""Database engine setup for SQLite with WAL mode.

SQLite is the record store: WAL mode so readers never block the single
writer, foreign keys on, and ``check_same_thread`` off because the HTTP
server hands pooled connections to worker threads.

SQLAlchemy Core (not ORM) is used: every engine operation is one read and
at most one conditional write, so an identity map buys nothing.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from gavel.infrastructure.database.schema import metadata


def create_db_engine(db_path: Path, *, echo: bool = False) -> Engine:
    """Create a SQLite engine with WAL mode and foreign keys enabled."""
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=echo,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA busy_timeout=5000")
        cursor.close()

    return engine


def init_database(db_path: Path, *, echo: bool = False) -> Engine:
    """Initialize the gavel database at *db_path*.

    Creates the parent directory and all tables from
    :data:`schema.metadata`. Idempotent: safe to call on an existing
    database.

    Returns the engine ready for use.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(db_path, echo=echo)
    metadata.create_all(engine)
    return engine
