"""Command group: account registration and sign-in."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gavel.services.account import AccountService

if TYPE_CHECKING:
    from gavel.commands._context import AppContext


@click.group()
@click.pass_obj
def user(app: AppContext) -> None:
    """Register accounts and issue bearer tokens."""


@user.command()
@click.option("--username", prompt=True, help="Account name (unique).")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Account password (prompted when omitted).",
)
@click.pass_obj
def signup(app: AppContext, username: str, password: str) -> None:
    """Register a new account."""
    app.emit(AccountService(app.store).signup(username, password))


@user.command(
    epilog="""\b
The token is what 'gavel bid' and the HTTP API expect:
  export GAVEL_TOKEN=$(gavel -q user signin --username alice)
  gavel bid 65f1c0de0123456789abcdef 150""",
)
@click.option("--username", prompt=True, help="Account name.")
@click.option("--password", prompt=True, hide_input=True, help="Account password.")
@click.pass_obj
def signin(app: AppContext, username: str, password: str) -> None:
    """Verify credentials and print a bearer token."""
    app.emit(AccountService(app.store).signin(username, password))
