"""Command: place a bid as the account a bearer token names."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from gavel.services.auction import AuctionService
from gavel.services.identity import IdentityGate

if TYPE_CHECKING:
    from gavel.commands._context import AppContext


@click.command(
    epilog="""\b
Examples:
  gavel bid 65f1c0de0123456789abcdef 150 --token "$GAVEL_TOKEN"
  GAVEL_TOKEN=... gavel bid 65f1c0de0123456789abcdef 175.50""",
)
@click.argument("auction_id")
@click.argument("amount", type=float)
@click.option(
    "--token",
    envvar="GAVEL_TOKEN",
    default=None,
    help="Bearer token from 'gavel user signin' (or $GAVEL_TOKEN).",
)
@click.pass_obj
def bid(app: AppContext, auction_id: str, amount: float, token: str | None) -> None:
    """Bid AMOUNT on AUCTION_ID; must beat the current bid."""
    identity = IdentityGate(app.store).authenticate(token)
    if not identity.ok:
        app.emit(identity)
    result = AuctionService(app.store).place_bid(
        auction_id,
        bidder=identity.data["username"],
        amount=amount,
    )
    app.emit(result)
