"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``gavel.toml`` only contains
overrides. A development server needs no config file at all; production
should at least set ``[auth] secret_key``.
"""

from __future__ import annotations

from datetime import timedelta
from pathlib import Path

from pydantic import BaseModel, Field

DEV_SECRET_KEY = "dev_secret_key"


class DatabaseConfig(BaseModel):
    """[database] section."""

    model_config = {"frozen": True}

    path: Path | None = None  # default: {data_root}/.gavel/gavel.db
    echo: bool = False


class AuthConfig(BaseModel):
    """[auth] section."""

    model_config = {"frozen": True}

    secret_key: str = DEV_SECRET_KEY
    algorithm: str = "HS256"
    token_ttl_seconds: int = Field(default=3600, gt=0)
    bcrypt_rounds: int = Field(default=10, ge=4, le=31)

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(seconds=self.token_ttl_seconds)

    @property
    def uses_dev_secret(self) -> bool:
        return self.secret_key == DEV_SECRET_KEY


class ServerConfig(BaseModel):
    """[server] section."""

    model_config = {"frozen": True}

    host: str = "127.0.0.1"
    port: int = 5001
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])


class BiddingConfig(BaseModel):
    """[bidding] section."""

    model_config = {"frozen": True}

    max_retries: int = Field(default=3, ge=0)


class SweepConfig(BaseModel):
    """[sweep] section: optional background closing of expired auctions."""

    model_config = {"frozen": True}

    enabled: bool = False
    interval_seconds: float = Field(default=60.0, gt=0)
