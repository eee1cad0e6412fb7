"""FastAPI application factory.

``create_app`` builds one Store from the given settings and stores it on
``app.state``; every request shares it. With ``[sweep] enabled = true`` the
lifespan also runs a periodic sweep that closes expired auctions using
the same evaluation the request path uses.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gavel import __version__
from gavel.api.endpoints import router
from gavel.api.errors import add_error_handlers
from gavel.config.settings import GavelSettings
from gavel.infrastructure.store import Store
from gavel.services.auction import AuctionService

if TYPE_CHECKING:
    from gavel.config.models import SweepConfig

logger = logging.getLogger(__name__)


async def _sweep_forever(store: Store, config: SweepConfig) -> None:
    """Close expired auctions every ``interval_seconds`` until cancelled."""
    while True:
        try:
            result = await asyncio.to_thread(AuctionService(store).sweep_expired)
        except Exception:
            logger.exception("Background sweep crashed; retrying next interval")
        else:
            if not result.ok:
                logger.warning("Background sweep failed (%s)", result.code)
        await asyncio.sleep(config.interval_seconds)


def create_app(
    settings: GavelSettings | None = None,
    *,
    store: Store | None = None,
) -> FastAPI:
    """Build the gavel HTTP app.

    Args:
        settings: Resolved settings; discovered from env/TOML when omitted.
        store: Pre-built Store (tests share one with direct service calls).
            Created from *settings* when omitted.
    """
    if settings is None:
        settings = store.settings if store is not None else GavelSettings.from_cli()
    owns_store = store is None
    app_store = store if store is not None else Store(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        sweeper: asyncio.Task[None] | None = None
        if settings.sweep.enabled:
            sweeper = asyncio.create_task(_sweep_forever(app_store, settings.sweep))
            logger.info("Background sweep every %ss", settings.sweep.interval_seconds)
        try:
            yield
        finally:
            if sweeper is not None:
                sweeper.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await sweeper
            if owns_store:
                app_store.close()

    app = FastAPI(title="gavel", version=__version__, lifespan=lifespan)
    app.state.store = app_store
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.server.cors_origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
    add_error_handlers(app)
    app.include_router(router)
    return app


def app_factory() -> FastAPI:
    """Zero-argument factory for ``uvicorn --factory gavel.api.app:app_factory``."""
    settings = GavelSettings.from_cli()
    from gavel.config.logging import configure_logging

    configure_logging(verbose=settings.verbose, log_json=settings.log_json, base_level=logging.INFO)
    return create_app(settings)
