"""AccountService: signup and signin."""

from __future__ import annotations

from typing import Any

import structlog

from gavel.domain.users import normalize_username, validate_credentials
from gavel.services.base import BaseService, storage_guarded
from gavel.services.result import ErrorCode, ServiceResult
from gavel.services.telemetry import traced

log = structlog.get_logger(__name__)

_INVALID_CREDENTIALS = "Invalid credentials"


class AccountService(BaseService):
    """Registers users and exchanges credentials for bearer tokens."""

    @traced
    @storage_guarded("signup")
    def signup(self, username: Any, password: Any) -> ServiceResult:
        """Register a new user.

        The username is checked before insert; the store's UNIQUE constraint
        catches the case where two signups race past that check.
        """
        op = "signup"
        vr = validate_credentials(username, password)
        if not vr.valid:
            return ServiceResult.failure(op, ErrorCode.INVALID_INPUT, "All fields required")

        name = normalize_username(username)
        if self._store.users.find_by_username(name) is not None:
            return ServiceResult.failure(
                op, ErrorCode.CONFLICT, "Username already exists", username=name
            )

        digest = self._store.passwords.hash(password)
        user = self._store.users.create(name, digest)
        if user is None:
            return ServiceResult.failure(
                op, ErrorCode.CONFLICT, "Username already exists", username=name
            )

        log.info("user.registered", user_id=user.id, username=user.username)
        return ServiceResult(ok=True, op=op, data={"user": user.to_public()})

    @traced
    @storage_guarded("signin")
    def signin(self, username: Any, password: Any) -> ServiceResult:
        """Verify credentials and issue a token with ``{userId, username}`` claims.

        Unknown users and wrong passwords get the same answer.
        """
        op = "signin"
        vr = validate_credentials(username, password)
        if not vr.valid:
            return ServiceResult.failure(op, ErrorCode.INVALID_INPUT, "All fields required")

        user = self._store.users.find_by_username(normalize_username(username))
        if user is None or not self._store.passwords.verify(password, user.password_digest):
            log.info("user.signin_failed", username=normalize_username(username))
            return ServiceResult.failure(op, ErrorCode.INVALID_CREDENTIALS, _INVALID_CREDENTIALS)

        auth = self._store.settings.auth
        token = self._store.tokens.issue(
            {"userId": user.id, "username": user.username},
            auth.token_ttl,
            now=self._now(),
        )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "token": token,
                "user": user.to_public(),
                "expires_in": auth.token_ttl_seconds,
            },
        )
