"""Credential Store: persistence for :class:`User`."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from sqlalchemy import insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError

from gavel.domain.ids import new_record_id
from gavel.domain.instants import format_instant
from gavel.domain.users import User
from gavel.infrastructure.database.schema import users
from gavel.infrastructure.errors import storage_errors


def _row_to_user(row: Any) -> User:
    return User(id=row.id, username=row.username, password_digest=row.password_digest)


class UserRepository:
    """Encapsulates SQL for the ``users`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def find_by_username(self, username: str) -> User | None:
        """Find a user by exact username."""
        stmt = select(users).where(users.c.username == username)
        with storage_errors("user lookup"), self._engine.connect() as conn:
            row = conn.execute(stmt).first()
        return _row_to_user(row) if row is not None else None

    def get(self, user_id: str) -> User | None:
        """Find a user by ID."""
        stmt = select(users).where(users.c.id == user_id)
        with storage_errors("user lookup"), self._engine.connect() as conn:
            row = conn.execute(stmt).first()
        return _row_to_user(row) if row is not None else None

    def create(self, username: str, password_digest: str) -> User | None:
        """Insert a new user.

        Returns None if *username* is already taken. Callers are expected to
        check with :meth:`find_by_username` first; the UNIQUE constraint is
        the backstop for two signups racing on the same name.
        """
        user = User(id=new_record_id(), username=username, password_digest=password_digest)
        stmt = insert(users).values(
            id=user.id,
            username=user.username,
            password_digest=user.password_digest,
            created_at=format_instant(datetime.now(UTC)),
        )
        with storage_errors("user insert"):
            try:
                with self._engine.begin() as conn:
                    conn.execute(stmt)
            except IntegrityError:
                return None
        return user
