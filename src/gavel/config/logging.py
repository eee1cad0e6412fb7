"""structlog configuration for gavel.

Two output modes, both to stderr:
- Human (default): colored console renderer when stderr is a TTY
- JSON (--log-json): one JSON object per line, for log shippers

stdlib loggers (``logging.getLogger(__name__)``) and structlog loggers go
through the same processor chain, so both come out in the same format.
"""

from __future__ import annotations

import logging
import sys

import structlog

_NOISY_LOGGERS = ("alembic", "uvicorn.access", "sqlalchemy.engine")


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    base_level: int = logging.WARNING,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Enable DEBUG-level output for ``gavel.*`` loggers.
        log_json: Use JSON renderer instead of console renderer.
        base_level: Level for ``gavel.*`` when not verbose. The CLI keeps
            WARNING; ``gavel serve`` passes INFO so request outcomes show.
    """
    gavel_level = logging.DEBUG if verbose else base_level

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
        shared_processors.append(structlog.processors.format_exc_info)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("gavel").setLevel(gavel_level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
