"""SetupService: create and stamp a gavel database.

Static: it runs before any Store exists, so it takes settings rather than
a Store.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from gavel.infrastructure.database.engine import init_database
from gavel.infrastructure.database.migrations import current_revision, stamp_head
from gavel.infrastructure.errors import StorageError, storage_errors
from gavel.services.base import STORAGE_FAILURE_MESSAGE
from gavel.services.result import ErrorCode, ServiceResult
from gavel.services.telemetry import traced

if TYPE_CHECKING:
    from gavel.config.settings import GavelSettings

log = structlog.get_logger(__name__)


class SetupService:
    """Database bootstrap for ``gavel init``."""

    @staticmethod
    @traced
    def init_store(settings: GavelSettings) -> ServiceResult:
        """Create the tables (idempotent) and stamp the Alembic head.

        A database that is already stamped keeps its revision; ``created``
        reports whether the file was new.
        """
        op = "init"
        db_path = settings.db_path
        existed = db_path.exists()
        try:
            with storage_errors("database init"):
                init_database(db_path, echo=settings.database.echo).dispose()
                revision = current_revision(db_path)
                if revision is None:
                    stamp_head(db_path)
                    revision = current_revision(db_path)
        except StorageError:
            log.exception("init.failed", db_path=str(db_path))
            return ServiceResult.failure(op, ErrorCode.STORAGE_ERROR, STORAGE_FAILURE_MESSAGE)

        warnings: list[str] = []
        if settings.auth.uses_dev_secret:
            warnings.append("auth.secret_key is the development default; set it before serving")

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "db_path": str(db_path),
                "revision": revision,
                "created": not existed,
            },
            warnings=warnings,
        )
