"""Command: database initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gavel.services.setup import SetupService

if TYPE_CHECKING:
    from gavel.commands._context import AppContext


@click.command("init")
@click.pass_obj
def init_cmd(app: AppContext) -> None:
    """Create the database and stamp its migration revision."""
    app.emit(SetupService.init_store(app.settings))
