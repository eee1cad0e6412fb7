"""AuctionService: the auction lifecycle engine.

Every operation re-reads the record from the store, runs the pure rules in
:mod:`gavel.domain.lifecycle`, and persists whatever those rules say
changed:

- ``view_auction``  LOAD → EVALUATE → (CLOSE if dirty) → RESPOND
- ``place_bid``     VALIDATE → LOAD → DECIDE → (CLOSE | COMPARE-AND-SET) → RESPOND

Viewing an expired auction that is still stored as open is a write: the
close is discovered on read and persisted immediately.

Bids are written with a conditional update keyed on the bid the rules were
evaluated against. If another writer changed the row first, the engine
re-reads and re-decides, so no bid at or below the recorded highest bid is
ever accepted.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

import structlog

from gavel.domain import lifecycle
from gavel.domain.auction import AuctionItem, validate_bid_amount, validate_new_auction
from gavel.domain.ids import new_record_id, validate_id
from gavel.domain.instants import parse_instant
from gavel.domain.lifecycle import BidOutcome
from gavel.services.base import BaseService, storage_guarded
from gavel.services.result import ErrorCode, ServiceResult
from gavel.services.telemetry import annotate, traced

log = structlog.get_logger(__name__)


class AuctionService(BaseService):
    """Creates, lists, views, closes, and bids on auctions."""

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @traced
    @storage_guarded("create_auction")
    def create_auction(
        self,
        item_name: Any,
        description: Any,
        starting_bid: Any,
        closing_time: Any,
    ) -> ServiceResult:
        """Create a new open auction with no bids."""
        op = "create_auction"
        vr = validate_new_auction(item_name, description, starting_bid, closing_time)
        if not vr.valid:
            return ServiceResult.failure(
                op, ErrorCode.INVALID_INPUT, "; ".join(vr.errors), errors=vr.errors
            )

        now = self._now()
        item = AuctionItem(
            id=new_record_id(now.timestamp()),
            item_name=item_name.strip(),
            description=description.strip(),
            starting_bid=float(starting_bid),
            current_bid=float(starting_bid),
            highest_bidder=None,
            closing_time=parse_instant(closing_time),
            is_closed=False,
            created_at=now,
        )
        self._store.auctions.insert(item)
        log.info("auction.created", auction_id=item.id, closing_time=item.closing_time.isoformat())

        warnings: list[str] = []
        if lifecycle.evaluate(item, now).closed:
            warnings.append("closingTime is already in the past; the auction closes on first access")

        return ServiceResult(
            ok=True,
            op=op,
            data={"auction": item.to_wire()},
            warnings=warnings,
        )

    @traced
    @storage_guarded("list_auctions")
    def list_auctions(self) -> ServiceResult:
        """Every stored auction, newest first, exactly as stored."""
        items = self._store.auctions.list_all()
        return ServiceResult(
            ok=True,
            op="list_auctions",
            data={"items": [item.to_wire() for item in items], "count": len(items)},
        )

    @traced
    @storage_guarded("view_auction")
    def view_auction(self, auction_id: str) -> ServiceResult:
        """Return one auction, persisting a pending close first."""
        op = "view_auction"
        item = self._load(auction_id)
        if item is None:
            return _not_found(op, auction_id)

        item = self._settle(item, self._now())
        return ServiceResult(ok=True, op=op, data={"auction": item.to_wire()})

    @traced
    @storage_guarded("place_bid")
    def place_bid(self, auction_id: str, *, bidder: str, amount: Any) -> ServiceResult:
        """Run the bid rules against the stored auction and record the outcome."""
        op = "place_bid"

        # ── VALIDATE ─────────────────────────────────────────
        vr = validate_bid_amount(amount)
        if not vr.valid:
            return ServiceResult.failure(
                op, ErrorCode.INVALID_INPUT, "; ".join(vr.errors), errors=vr.errors
            )
        amount = float(amount)

        max_retries = self._store.settings.bidding.max_retries
        for attempt in range(max_retries + 1):
            # ── LOAD ─────────────────────────────────────────
            item = self._load(auction_id)
            if item is None:
                return _not_found(op, auction_id)

            # ── DECIDE ───────────────────────────────────────
            now = self._now()
            decision = lifecycle.decide_bid(item, amount, now)

            if decision.outcome is BidOutcome.CLOSED:
                if decision.evaluation.dirty:
                    self._store.auctions.mark_closed(item.id)
                    log.info("auction.closed", auction_id=item.id, trigger="bid")
                log.debug("bid.rejected", auction_id=item.id, reason="closed")
                return ServiceResult.failure(
                    op,
                    ErrorCode.AUCTION_CLOSED,
                    "Auction closed",
                    winner=decision.winner,
                    currentBid=decision.current_bid,
                )

            if decision.outcome is BidOutcome.TOO_LOW:
                log.debug("bid.rejected", auction_id=item.id, reason="too_low", amount=amount)
                return ServiceResult.failure(
                    op,
                    ErrorCode.BID_TOO_LOW,
                    "Bid too low",
                    currentBid=decision.current_bid,
                )

            # ── COMPARE-AND-SET ──────────────────────────────
            updated = lifecycle.accept_bid(item, bidder, amount)
            if self._store.auctions.compare_and_set_bid(
                item.id,
                expected_bid=item.current_bid,
                amount=amount,
                bidder=bidder,
            ):
                annotate("attempts", attempt + 1)
                log.info("bid.accepted", auction_id=item.id, bidder=bidder, amount=amount)
                return ServiceResult(
                    ok=True,
                    op=op,
                    data={"item": updated.to_wire()},
                    meta={"attempts": attempt + 1} if attempt else None,
                )

            log.debug("bid.contended", auction_id=item.id, attempt=attempt + 1)

        return ServiceResult.failure(
            op,
            ErrorCode.CONFLICT,
            "Auction was updated concurrently; retry the bid",
            attempts=max_retries + 1,
        )

    @traced
    @storage_guarded("sweep_expired")
    def sweep_expired(self) -> ServiceResult:
        """Persist the close of every expired auction still stored as open.

        Uses the same evaluation as reads and bids, so it only ever does
        what the next access would have done anyway. Safe to run repeatedly
        and alongside request handling.
        """
        now = self._now()
        closed: list[str] = []
        for item in self._store.auctions.list_open():
            if lifecycle.evaluate(item, now).dirty and self._store.auctions.mark_closed(item.id):
                closed.append(item.id)
        if closed:
            log.info("auction.swept", closed=len(closed))
        return ServiceResult(
            ok=True,
            op="sweep_expired",
            data={"closed": closed, "count": len(closed)},
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _load(self, auction_id: str) -> AuctionItem | None:
        if not validate_id(auction_id):
            return None
        return self._store.auctions.get(auction_id)

    def _settle(self, item: AuctionItem, now: datetime) -> AuctionItem:
        """Persist a dirty close and return the record as it now stands."""
        if lifecycle.evaluate(item, now).dirty:
            self._store.auctions.mark_closed(item.id)
            log.info("auction.closed", auction_id=item.id, trigger="view")
            return lifecycle.close(item)
        return item


def _not_found(op: str, auction_id: str) -> ServiceResult:
    return ServiceResult.failure(
        op,
        ErrorCode.NOT_FOUND,
        f"No auction found with ID: {auction_id}",
        id=auction_id,
    )
