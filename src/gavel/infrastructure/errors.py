"""Infrastructure-level exceptions."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError


class StorageError(Exception):
    """The record store failed (connection, locking, corrupt data, ...).

    Raised by repositories in place of driver exceptions so the service
    layer never depends on SQLAlchemy's exception hierarchy. The original
    exception is chained as ``__cause__``.
    """


@contextmanager
def storage_errors(action: str) -> Iterator[None]:
    """Re-raise any SQLAlchemy failure inside the block as :class:`StorageError`."""
    try:
        yield
    except SQLAlchemyError as exc:
        msg = f"Storage failure during {action}"
        raise StorageError(msg) from exc
