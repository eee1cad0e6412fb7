"""Subcommand modules for gavel.

Provides register_commands() which uses deferred imports to keep
``gavel --help`` fast (FastAPI and uvicorn load only for ``serve``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    2 groups (have subcommands) + 3 standalone commands.
    """
    # --- Groups ---
    from gavel.commands.auction import auction
    from gavel.commands.user import user

    cli.add_command(user)
    cli.add_command(auction)

    # --- Standalone commands ---
    from gavel.commands.bid import bid
    from gavel.commands.init_cmd import init_cmd
    from gavel.commands.serve import serve

    cli.add_command(init_cmd)
    cli.add_command(bid)
    cli.add_command(serve)
