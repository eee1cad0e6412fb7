"""Alembic environment for gavel.

SQLite cannot ALTER most column properties in place, so both modes run
with ``render_as_batch=True`` (copy-and-move table rebuilds).
"""

from __future__ import annotations

from alembic import context
from sqlalchemy import engine_from_config, pool

from gavel.infrastructure.database.schema import metadata

config = context.config


def run_migrations_offline() -> None:
    """Emit migration SQL to stdout instead of touching a database."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=metadata,
        literal_binds=True,
        render_as_batch=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Apply migrations over a dedicated, unpooled connection."""
    section = config.get_section(config.config_ini_section) or {}
    connectable = engine_from_config(section, prefix="sqlalchemy.", poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=metadata,
            render_as_batch=True,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
