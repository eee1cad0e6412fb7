"""serve: run the HTTP API under uvicorn."""

from __future__ import annotations

import logging
import os
from typing import TYPE_CHECKING

import click

from gavel.config.discovery import CONFIG_ENV_VAR

if TYPE_CHECKING:
    from gavel.commands._context import AppContext

logger = logging.getLogger(__name__)


@click.command(
    epilog="""\b
Binds to [server] host/port (default 127.0.0.1:5001) unless overridden:
  gavel serve --host 0.0.0.0 --port 8080
  gavel serve --reload""",
)
@click.option("--host", default=None, help="Bind address (default: [server] host).")
@click.option("--port", default=None, type=int, help="Listen port (default: [server] port).")
@click.option("--reload", is_flag=True, help="Restart the server when source files change.")
@click.pass_obj
def serve(app: AppContext, host: str | None, port: int | None, reload: bool) -> None:
    """Start the HTTP API server."""
    import uvicorn

    from gavel.config.logging import configure_logging

    settings = app.settings
    bind_host = host or settings.server.host
    bind_port = port or settings.server.port
    configure_logging(
        verbose=settings.verbose,
        log_json=settings.log_json,
        base_level=logging.INFO,
    )
    logger.info("Serving gavel on http://%s:%s", bind_host, bind_port)

    if reload:
        # The reloader re-imports the app in a child process, so it needs an
        # import string; the child rediscovers settings from this config file.
        if settings.config_path is not None:
            os.environ[CONFIG_ENV_VAR] = str(settings.config_path)
        uvicorn.run(
            "gavel.api.app:app_factory",
            factory=True,
            host=bind_host,
            port=bind_port,
            reload=True,
            log_config=None,
        )
        return

    from gavel.api.app import create_app

    uvicorn.run(create_app(settings), host=bind_host, port=bind_port, log_config=None)
