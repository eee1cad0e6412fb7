"""Store: the single dependency injected into every service.

Owns the database engine, the two repositories, and the security
capabilities (password hashing, token signing), all built from one
:class:`GavelSettings`. Constructed once per process: by ``create_app``
for the HTTP server and lazily by the CLI context for commands.

The Store holds no record state of its own. Every repository call reads
or writes the database directly.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gavel.infrastructure.database.engine import init_database
from gavel.infrastructure.passwords import PasswordHasher
from gavel.infrastructure.repositories.auctions import AuctionRepository
from gavel.infrastructure.repositories.users import UserRepository
from gavel.infrastructure.tokens import TokenCodec

if TYPE_CHECKING:
    from pathlib import Path

    from sqlalchemy.engine import Engine

    from gavel.config.settings import GavelSettings

logger = logging.getLogger(__name__)


class Store:
    """Repository and capability holder for one gavel database."""

    def __init__(self, settings: GavelSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(settings.db_path, echo=settings.database.echo)
        self._auctions = AuctionRepository(self._engine)
        self._users = UserRepository(self._engine)
        self._passwords = PasswordHasher(rounds=settings.auth.bcrypt_rounds)
        self._tokens = TokenCodec(settings.auth.secret_key, settings.auth.algorithm)
        if settings.auth.uses_dev_secret:
            logger.warning("Using the built-in development secret key; set GAVEL_AUTH__SECRET_KEY")

    @property
    def db_path(self) -> Path:
        return self._settings.db_path

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for direct access when needed)."""
        return self._engine

    @property
    def settings(self) -> GavelSettings:
        return self._settings

    @property
    def auctions(self) -> AuctionRepository:
        return self._auctions

    @property
    def users(self) -> UserRepository:
        return self._users

    @property
    def passwords(self) -> PasswordHasher:
        return self._passwords

    @property
    def tokens(self) -> TokenCodec:
        return self._tokens

    def close(self) -> None:
        """Dispose of pooled connections."""
        self._engine.dispose()
