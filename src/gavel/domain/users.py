"""User and caller-identity models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from gavel.domain.validation import ValidationResult, is_blank


class User(BaseModel):
    """A registered account. Never updated or deleted once created."""

    model_config = {"frozen": True}

    id: str
    username: str
    password_digest: str

    def to_public(self) -> dict[str, Any]:
        """Fields safe to return to callers (never the digest)."""
        return {"id": self.id, "username": self.username}


class Identity(BaseModel):
    """Resolved caller identity, built from verified token claims."""

    model_config = {"frozen": True}

    user_id: str
    username: str


def normalize_username(username: str) -> str:
    """Usernames are stored with surrounding whitespace stripped."""
    return username.strip()


def validate_credentials(username: Any, password: Any) -> ValidationResult:
    """Both fields are required and non-empty."""
    errors: list[str] = []
    if is_blank(username):
        errors.append("username is required")
    if not isinstance(password, str) or password == "":
        errors.append("password is required")
    return ValidationResult(valid=not errors, errors=errors)
