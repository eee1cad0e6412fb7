"""BaseService: abstract foundation for all gavel services.

Every service receives a :class:`Store` at construction time and gets the
repositories and capabilities it needs from it. Services are cheap: the
HTTP layer builds fresh ones per request.
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Concatenate, ParamSpec, TypeVar

import structlog

from gavel.infrastructure.errors import StorageError
from gavel.services.result import ErrorCode, ServiceResult

if TYPE_CHECKING:
    from gavel.infrastructure.store import Store

log = structlog.get_logger(__name__)

STORAGE_FAILURE_MESSAGE = "Server error"


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class AuctionService(BaseService):
            def view_auction(self, auction_id: str) -> ServiceResult:
                item = self._store.auctions.get(auction_id)
                ...
    """

    def __init__(self, store: Store, *, clock: Callable[[], datetime] | None = None) -> None:
        self._store = store
        self._clock = clock or _utc_now

    def _now(self) -> datetime:
        return self._clock()


def _utc_now() -> datetime:
    return datetime.now(UTC)


_S = TypeVar("_S", bound=BaseService)
_P = ParamSpec("_P")


def storage_guarded(
    op: str,
) -> Callable[
    [Callable[Concatenate[_S, _P], ServiceResult]],
    Callable[Concatenate[_S, _P], ServiceResult],
]:
    """Turn a :class:`StorageError` escaping a service method into a result.

    The failure is logged with its traceback; the caller only ever sees the
    opaque ``STORAGE_ERROR`` message, never driver details.
    """

    def decorator(
        func: Callable[Concatenate[_S, _P], ServiceResult],
    ) -> Callable[Concatenate[_S, _P], ServiceResult]:
        @functools.wraps(func)
        def wrapper(self: _S, *args: _P.args, **kwargs: _P.kwargs) -> ServiceResult:
            try:
                return func(self, *args, **kwargs)
            except StorageError:
                log.exception("storage.failed", op=op)
                return ServiceResult.failure(op, ErrorCode.STORAGE_ERROR, STORAGE_FAILURE_MESSAGE)

        return wrapper

    return decorator

