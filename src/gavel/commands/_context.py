"""AppContext: shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Provides lazy Store initialization and centralized
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gavel.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from gavel.config.settings import GavelSettings
    from gavel.infrastructure.store import Store
    from gavel.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    Subcommands access it via ``@click.pass_obj``.  The store is lazily
    initialized on first use so ``--help`` and ``--version`` never
    trigger database access.
    """

    def __init__(self, settings: GavelSettings) -> None:
        self.settings = settings
        self._store: Store | None = None

        # Configure structured logging
        from gavel.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        # Enable telemetry context var when verbose
        if settings.verbose:
            from gavel.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def store(self) -> Store:
        """The store instance (created lazily on first access)."""
        if self._store is None:
            from gavel.infrastructure.store import Store

            self._store = Store(self.settings)
        return self._store

    def close(self) -> None:
        """Release the store's connections, if one was opened."""
        if self._store is not None:
            self._store.close()
            self._store = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
