"""Alembic migration infrastructure for gavel.

Provides programmatic Alembic configuration; no alembic.ini needed.
The migration scripts live alongside this module.
"""

from __future__ import annotations

from pathlib import Path

from alembic.config import Config


def build_config(db_url: str) -> Config:
    """Build an Alembic Config pointing at our migration scripts."""
    cfg = Config()
    cfg.set_main_option("script_location", str(Path(__file__).parent))
    cfg.set_main_option("sqlalchemy.url", db_url)
    return cfg


def stamp_head(db_path: Path) -> None:
    """Stamp a database as at the current head revision.

    Called by ``gavel init`` so databases created from ``metadata`` start
    at the correct Alembic version without running migrations.
    """
    from alembic import command

    command.stamp(build_config(f"sqlite:///{db_path}"), "head")


def current_revision(db_path: Path) -> str | None:
    """Return the revision a database is stamped at, or None if unstamped."""
    from alembic.runtime.migration import MigrationContext
    from sqlalchemy import create_engine

    engine = create_engine(f"sqlite:///{db_path}")
    try:
        with engine.connect() as conn:
            return MigrationContext.configure(conn).get_current_revision()
    finally:
        engine.dispose()
