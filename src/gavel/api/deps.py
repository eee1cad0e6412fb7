"""FastAPI dependencies: the shared Store, the authenticated caller, and
request bodies for authenticated routes.

FastAPI parses declared body parameters before it resolves dependencies,
so a malformed body would be reported ahead of a missing token. Routes
behind :func:`require_identity` therefore take their body through
:func:`auction_body` / :func:`bid_body`, which only read the request once
the caller is known.
"""

from __future__ import annotations

import json
from typing import Any, TypeVar

from fastapi import Depends, Header, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from gavel.api.errors import raise_for_failure
from gavel.api.schemas import AuctionBody, BidBody
from gavel.domain.users import Identity
from gavel.infrastructure.store import Store
from gavel.services.identity import IdentityGate

_B = TypeVar("_B", bound=BaseModel)


def get_store(request: Request) -> Store:
    """The process-wide Store created by :func:`gavel.api.app.create_app`."""
    store: Store = request.app.state.store
    return store


def require_identity(
    authorization: str | None = Header(default=None),
    store: Store = Depends(get_store),
) -> Identity:
    """Resolve the ``Authorization`` header or short-circuit with 401/403."""
    result = raise_for_failure(IdentityGate(store).authenticate(authorization))
    return Identity.model_validate(result.data)


async def _read_body(request: Request, model: type[_B]) -> _B:
    """Decode the JSON body into *model*, raising the same error FastAPI would."""
    raw = await request.body()
    payload: Any = {}
    if raw:
        try:
            payload = json.loads(raw)
        except ValueError as exc:
            raise RequestValidationError(
                [{"type": "json_invalid", "loc": ("body",), "msg": "JSON decode error"}]
            ) from exc
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc


async def auction_body(
    request: Request,
    _identity: Identity = Depends(require_identity),
) -> AuctionBody:
    return await _read_body(request, AuctionBody)


async def bid_body(
    request: Request,
    _identity: Identity = Depends(require_identity),
) -> BidBody:
    return await _read_body(request, BidBody)
