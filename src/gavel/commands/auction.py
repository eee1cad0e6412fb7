"""Command group: create, list, inspect, and sweep auctions."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import click

from gavel.services.auction import AuctionService

if TYPE_CHECKING:
    from gavel.commands._context import AppContext


@click.group(
    epilog="""\b
Examples:
  gavel auction create --name Chair --description Oak --starting-bid 20 --closes-in 3600
  gavel auction list
  gavel auction show 65f1c0de0123456789abcdef
  gavel auction sweep""",
)
@click.pass_obj
def auction(app: AppContext) -> None:
    """Create, list, and inspect auctions."""


@auction.command(
    epilog="""\b
Examples:
  gavel auction create --name Lamp --description "Brass desk lamp" \\
      --starting-bid 100 --closing-time 2030-01-01T00:00:00Z
  gavel --json auction create --name Chair --description Oak \\
      --starting-bid 20 --closes-in 3600""",
)
@click.option("--name", "item_name", required=True, help="Item name.")
@click.option("--description", required=True, help="Item description.")
@click.option("--starting-bid", type=float, required=True, help="Opening price (>= 0).")
@click.option("--closing-time", default=None, help="ISO-8601 instant bidding ends.")
@click.option(
    "--closes-in",
    type=click.IntRange(min=0),
    default=None,
    help="Seconds from now until bidding ends (instead of --closing-time).",
)
@click.pass_obj
def create(
    app: AppContext,
    item_name: str,
    description: str,
    starting_bid: float,
    closing_time: str | None,
    closes_in: int | None,
) -> None:
    """Open a new auction."""
    if (closing_time is None) == (closes_in is None):
        raise click.UsageError("Pass exactly one of --closing-time or --closes-in.")
    closing: str | datetime | None = closing_time
    if closes_in is not None:
        closing = datetime.now(UTC) + timedelta(seconds=closes_in)
    app.emit(AuctionService(app.store).create_auction(item_name, description, starting_bid, closing))


@auction.command("list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List every auction, newest first (stored state, no expiry check)."""
    app.emit(AuctionService(app.store).list_auctions())


@auction.command()
@click.argument("auction_id")
@click.pass_obj
def show(app: AppContext, auction_id: str) -> None:
    """Show one auction, closing it first if its time has passed."""
    app.emit(AuctionService(app.store).view_auction(auction_id))


@auction.command()
@click.pass_obj
def sweep(app: AppContext) -> None:
    """Persist the close of every expired auction still stored as open."""
    app.emit(AuctionService(app.store).sweep_expired())
