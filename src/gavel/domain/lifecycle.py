"""Auction lifecycle: the open/closed state machine and the bid rules.

Two machine states. ``open -> closed`` fires the first time any operation
observes ``now >= closing_time`` while the stored flag still reads open.
There is no timer: expiry is discovered lazily on the next read or bid.
``closed`` is terminal.

Everything in this module is pure. Callers pass ``now`` explicitly and are
responsible for persisting whatever the returned value marks as dirty.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from typing import TYPE_CHECKING

from gavel.domain.instants import ensure_utc

if TYPE_CHECKING:
    from gavel.domain.auction import AuctionItem


class AuctionState(StrEnum):
    """Effective machine state of an auction."""

    OPEN = "open"
    CLOSED = "closed"


class BidOutcome(StrEnum):
    """Result of running the bid rules against one auction."""

    ACCEPTED = "accepted"
    TOO_LOW = "too_low"
    CLOSED = "closed"


AUCTION_TRANSITIONS: dict[str, list[str]] = {
    "open": ["closed"],
    "closed": [],
}


def is_valid_transition(
    current: str,
    target: str,
    transitions: dict[str, list[str]],
) -> bool:
    """Check if transitioning from *current* to *target* is allowed."""
    return target in transitions.get(current, [])


@dataclass(frozen=True)
class Evaluation:
    """Effective state of an auction at a given instant.

    ``dirty`` is True when the stored record still says open but the
    closing time has passed, i.e. the caller must write ``is_closed=True``.
    """

    state: AuctionState
    dirty: bool

    @property
    def closed(self) -> bool:
        return self.state is AuctionState.CLOSED


@dataclass(frozen=True)
class BidDecision:
    """What the bid rules decided, plus the numbers the caller reports back."""

    outcome: BidOutcome
    evaluation: Evaluation
    current_bid: float
    winner: str | None


def evaluate(item: AuctionItem, now: datetime) -> Evaluation:
    """Compute the effective state of *item* at *now*.

    Deterministic and side-effect free.
    """
    if item.is_closed:
        return Evaluation(state=AuctionState.CLOSED, dirty=False)
    if ensure_utc(now) >= ensure_utc(item.closing_time):
        return Evaluation(state=AuctionState.CLOSED, dirty=True)
    return Evaluation(state=AuctionState.OPEN, dirty=False)


def decide_bid(item: AuctionItem, amount: float, now: datetime) -> BidDecision:
    """Apply the bid rules, in order.

    1. Closed (stored or just expired): rejected regardless of amount.
    2. ``amount <= current_bid``: too low. Ties never advance the leader.
    3. Otherwise accepted.
    """
    evaluation = evaluate(item, now)
    if evaluation.closed:
        outcome = BidOutcome.CLOSED
    elif amount <= item.current_bid:
        outcome = BidOutcome.TOO_LOW
    else:
        outcome = BidOutcome.ACCEPTED
    return BidDecision(
        outcome=outcome,
        evaluation=evaluation,
        current_bid=item.current_bid,
        winner=item.highest_bidder,
    )


def close(item: AuctionItem) -> AuctionItem:
    """Return a copy of *item* in the closed state."""
    if item.is_closed:
        return item
    return item.model_copy(update={"is_closed": True})


def accept_bid(item: AuctionItem, bidder: str, amount: float) -> AuctionItem:
    """Return a copy of *item* with *bidder* leading at *amount*.

    Raises:
        ValueError: If *amount* does not strictly exceed the current bid, or
            the auction is already closed.
    """
    if item.is_closed:
        msg = f"Auction {item.id} is closed"
        raise ValueError(msg)
    if amount <= item.current_bid:
        msg = f"Bid {amount} does not exceed current bid {item.current_bid}"
        raise ValueError(msg)
    return item.model_copy(update={"current_bid": amount, "highest_bidder": bidder})
