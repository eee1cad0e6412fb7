"""Bearer token capability backed by python-jose (signed JWTs)."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt


class TokenError(Exception):
    """A token could not be verified: bad signature, malformed, or expired."""


class TokenCodec:
    """``issue(claims, ttl) -> token`` and ``verify(token) -> claims``.

    Tokens are HMAC-signed JWTs carrying the caller's claims plus ``iat``
    and ``exp``. Verification rejects expired tokens.
    """

    def __init__(self, secret_key: str, algorithm: str = "HS256") -> None:
        self._secret_key = secret_key
        self._algorithm = algorithm

    def issue(
        self,
        claims: dict[str, Any],
        ttl: timedelta,
        *,
        now: datetime | None = None,
    ) -> str:
        """Sign *claims* into a token valid for *ttl* from *now*."""
        issued_at = now or datetime.now(UTC)
        payload = {
            **claims,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        """Decode and verify *token*, returning its claims.

        Raises:
            TokenError: For any signature, format, or expiry failure.
        """
        try:
            claims: dict[str, Any] = jwt.decode(
                token, self._secret_key, algorithms=[self._algorithm]
            )
        except JWTError as exc:
            raise TokenError(str(exc)) from exc
        return claims
