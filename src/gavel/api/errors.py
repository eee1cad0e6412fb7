"""Mapping from service error codes to HTTP responses."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from gavel.services.base import STORAGE_FAILURE_MESSAGE
from gavel.services.result import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)

STATUS_BY_CODE: dict[str, int] = {
    ErrorCode.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.AUTH_MISSING: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTH_INVALID: status.HTTP_403_FORBIDDEN,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.AUCTION_CLOSED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.BID_TOO_LOW: status.HTTP_400_BAD_REQUEST,
    ErrorCode.STORAGE_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class ApiError(Exception):
    """Raised by endpoints and dependencies to short-circuit with a failed result."""

    def __init__(self, result: ServiceResult) -> None:
        super().__init__(result.error.message if result.error else result.op)
        self.result = result


def raise_for_failure(result: ServiceResult) -> ServiceResult:
    """Return *result* unchanged if ok, otherwise raise :class:`ApiError`."""
    if not result.ok:
        raise ApiError(result)
    return result


def error_body(result: ServiceResult) -> dict[str, Any]:
    """``{message, code, ...detail}`` for a failed result."""
    if result.error is None:
        return {"message": STORAGE_FAILURE_MESSAGE, "code": ErrorCode.STORAGE_ERROR}
    if result.error.code == ErrorCode.STORAGE_ERROR:
        return {"message": STORAGE_FAILURE_MESSAGE, "code": ErrorCode.STORAGE_ERROR}
    return {**result.error.detail, "message": result.error.message, "code": result.error.code}


def status_for(result: ServiceResult) -> int:
    code = result.error.code if result.error else ErrorCode.STORAGE_ERROR
    return STATUS_BY_CODE.get(code, status.HTTP_500_INTERNAL_SERVER_ERROR)


async def _api_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, ApiError)
    return JSONResponse(status_code=status_for(exc.result), content=error_body(exc.result))


async def _validation_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, RequestValidationError)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "message": "Malformed request body",
            "code": ErrorCode.INVALID_INPUT,
            "errors": [str(err.get("msg", err)) for err in exc.errors()],
        },
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error on %s %s",
        request.method,
        request.url.path,
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": STORAGE_FAILURE_MESSAGE, "code": ErrorCode.STORAGE_ERROR},
    )


def add_error_handlers(app: FastAPI) -> None:
    """Install the ApiError, validation, and catch-all handlers on *app*."""
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)
