"""ServiceResult and ServiceError: the universal service contract.

INVARIANT: All service-layer methods return ServiceResult.
The HTTP API and the CLI both consume this type; domain failures (bid too
low, auction closed, ...) are values here, never exceptions.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ErrorCode(StrEnum):
    """Every failure a service can report."""

    NOT_FOUND = "NOT_FOUND"
    INVALID_INPUT = "INVALID_INPUT"
    CONFLICT = "CONFLICT"
    AUTH_MISSING = "AUTH_MISSING"
    AUTH_INVALID = "AUTH_INVALID"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    AUCTION_CLOSED = "AUCTION_CLOSED"
    BID_TOO_LOW = "BID_TOO_LOW"
    STORAGE_ERROR = "STORAGE_ERROR"


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Universal return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"place_bid"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
        meta: Optional metadata (timing, retries, etc.).
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def failure(
        cls,
        op: str,
        code: ErrorCode,
        message: str,
        **detail: Any,
    ) -> ServiceResult:
        """Shorthand for an ``ok=False`` result."""
        return cls(
            ok=False,
            op=op,
            error=ServiceError(code=code, message=message, detail=detail),
        )

    @property
    def code(self) -> str | None:
        """The error code, or None on success."""
        return self.error.code if self.error is not None else None
