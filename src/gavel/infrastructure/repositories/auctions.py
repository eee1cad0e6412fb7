"""Auction Record Store: persistence for :class:`AuctionItem`.

Every method opens its own short connection; nothing is cached across
calls, so each lifecycle operation re-reads the store.

Writes are conditional. :meth:`AuctionRepository.mark_closed` only flips
an open row, and :meth:`AuctionRepository.compare_and_set_bid` only lands
when the stored bid still equals the value the caller evaluated against.
Both return whether a row changed so the service can re-read and retry.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import insert, select, update
from sqlalchemy.engine import Engine

from gavel.domain.auction import AuctionItem
from gavel.domain.instants import format_instant, parse_instant
from gavel.infrastructure.database.schema import auctions
from gavel.infrastructure.errors import storage_errors


def _row_to_item(row: Any) -> AuctionItem:
    return AuctionItem(
        id=row.id,
        item_name=row.item_name,
        description=row.description,
        starting_bid=float(row.starting_bid),
        current_bid=float(row.current_bid),
        highest_bidder=row.highest_bidder,
        closing_time=parse_instant(row.closing_time),
        is_closed=bool(row.is_closed),
        created_at=parse_instant(row.created_at),
    )


class AuctionRepository:
    """Encapsulates SQL for the ``auctions`` table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get(self, auction_id: str) -> AuctionItem | None:
        """Find one auction by ID."""
        stmt = select(auctions).where(auctions.c.id == auction_id)
        with storage_errors("auction lookup"), self._engine.connect() as conn:
            row = conn.execute(stmt).first()
        return _row_to_item(row) if row is not None else None

    def list_all(self) -> list[AuctionItem]:
        """All auctions, newest first."""
        stmt = select(auctions).order_by(auctions.c.created_at.desc(), auctions.c.id.desc())
        with storage_errors("auction listing"), self._engine.connect() as conn:
            rows = conn.execute(stmt).fetchall()
        return [_row_to_item(row) for row in rows]

    def list_open(self) -> list[AuctionItem]:
        """Auctions whose stored flag still says open (sweep candidates)."""
        stmt = (
            select(auctions)
            .where(auctions.c.is_closed == 0)
            .order_by(auctions.c.closing_time)
        )
        with storage_errors("open auction listing"), self._engine.connect() as conn:
            rows = conn.execute(stmt).fetchall()
        return [_row_to_item(row) for row in rows]

    def insert(self, item: AuctionItem) -> None:
        """Persist a newly created auction."""
        stmt = insert(auctions).values(
            id=item.id,
            item_name=item.item_name,
            description=item.description,
            starting_bid=item.starting_bid,
            current_bid=item.current_bid,
            highest_bidder=item.highest_bidder,
            closing_time=format_instant(item.closing_time),
            is_closed=int(item.is_closed),
            created_at=format_instant(item.created_at),
        )
        with storage_errors("auction insert"), self._engine.begin() as conn:
            conn.execute(stmt)

    def mark_closed(self, auction_id: str) -> bool:
        """Flip ``is_closed`` to 1. Returns False if it was already closed."""
        stmt = (
            update(auctions)
            .where(auctions.c.id == auction_id, auctions.c.is_closed == 0)
            .values(is_closed=1)
        )
        with storage_errors("auction close"), self._engine.begin() as conn:
            return conn.execute(stmt).rowcount > 0

    def compare_and_set_bid(
        self,
        auction_id: str,
        *,
        expected_bid: float,
        amount: float,
        bidder: str,
    ) -> bool:
        """Record a new leading bid if nobody changed the row meanwhile.

        The update only applies while the auction is open and its stored
        ``current_bid`` still equals *expected_bid*. Returns False when
        another writer got there first.
        """
        stmt = (
            update(auctions)
            .where(
                auctions.c.id == auction_id,
                auctions.c.is_closed == 0,
                auctions.c.current_bid == expected_bid,
            )
            .values(current_bid=amount, highest_bidder=bidder)
        )
        with storage_errors("bid update"), self._engine.begin() as conn:
            return conn.execute(stmt).rowcount > 0
