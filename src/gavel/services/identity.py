"""IdentityGate: resolve a presented bearer credential to a caller identity.

Stateless: verification is delegated to the Store's token codec. Two
distinct failures, which the boundary maps to different responses:

- ``AUTH_MISSING``: nothing was presented.
- ``AUTH_INVALID``: something was presented but did not verify (bad
  signature, malformed, expired, or missing the identity claims).

Both ``Bearer <token>`` and a raw token are accepted.
"""

from __future__ import annotations

from gavel.domain.users import Identity
from gavel.infrastructure.tokens import TokenError
from gavel.services.base import BaseService
from gavel.services.result import ErrorCode, ServiceResult

_BEARER_PREFIX = "bearer "


def extract_token(credential: str | None) -> str | None:
    """Strip an optional ``Bearer`` scheme. Blank input yields None.

    Examples:
        >>> extract_token("Bearer abc.def")
        'abc.def'
        >>> extract_token("abc.def")
        'abc.def'
        >>> extract_token("  ") is None
        True
    """
    if credential is None:
        return None
    value = credential.strip()
    if value.lower().startswith(_BEARER_PREFIX):
        value = value[len(_BEARER_PREFIX) :].strip()
    elif value.lower() == "bearer":
        value = ""
    return value or None


class IdentityGate(BaseService):
    """Validates bearer credentials for protected operations."""

    def authenticate(self, credential: str | None) -> ServiceResult:
        """Resolve *credential* (an Authorization header value) to an identity.

        On success ``data`` holds ``{"user_id", "username"}``.
        """
        op = "authenticate"
        token = extract_token(credential)
        if token is None:
            return ServiceResult.failure(op, ErrorCode.AUTH_MISSING, "Unauthorized")

        try:
            claims = self._store.tokens.verify(token)
        except TokenError:
            return ServiceResult.failure(op, ErrorCode.AUTH_INVALID, "Invalid token")

        user_id = claims.get("userId")
        username = claims.get("username")
        if not isinstance(user_id, str) or not isinstance(username, str) or not username:
            return ServiceResult.failure(op, ErrorCode.AUTH_INVALID, "Invalid token")

        identity = Identity(user_id=user_id, username=username)
        return ServiceResult(ok=True, op=op, data=identity.model_dump())
