"""Auction record model and input rules.

:class:`AuctionItem` is the in-memory working copy of one stored auction.
It is frozen: the lifecycle engine derives new copies with
:meth:`AuctionItem.model_copy` and the service layer persists them.

Wire format (HTTP and ``--json``) uses camelCase field names.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from gavel.domain.instants import parse_instant
from gavel.domain.validation import ValidationResult, is_blank, is_number


class AuctionItem(BaseModel):
    """One auction and its bidding state.

    Invariants:
        - ``current_bid >= starting_bid``
        - ``is_closed`` never goes back to False
        - ``highest_bidder`` is None until the first accepted bid
        - ``closing_time`` never changes after creation
    """

    model_config = {
        "frozen": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }

    id: str
    item_name: str
    description: str
    starting_bid: float
    current_bid: float
    highest_bidder: str | None = None
    closing_time: datetime
    is_closed: bool = False
    created_at: datetime

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


def validate_new_auction(
    item_name: Any,
    description: Any,
    starting_bid: Any,
    closing_time: Any,
) -> ValidationResult:
    """Check the four creation fields.

    All four are required. ``starting_bid`` must be a finite number >= 0 and
    ``closing_time`` an ISO-8601 instant. A closing time in the past is
    allowed; such an auction closes on first access.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if is_blank(item_name):
        errors.append("itemName is required")
    if is_blank(description):
        errors.append("description is required")

    if starting_bid is None:
        errors.append("startingBid is required")
    elif not is_number(starting_bid):
        errors.append("startingBid must be a number")
    elif starting_bid < 0:
        errors.append("startingBid must be >= 0")

    if closing_time is None or closing_time == "":
        errors.append("closingTime is required")
    else:
        try:
            parse_instant(closing_time)
        except (TypeError, ValueError, OverflowError):
            errors.append("closingTime must be an ISO-8601 timestamp")

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)


def validate_bid_amount(amount: Any) -> ValidationResult:
    """A bid must be a positive, finite number."""
    if amount is None:
        return ValidationResult(valid=False, errors=["bid is required"])
    if not is_number(amount):
        return ValidationResult(valid=False, errors=["bid must be a number"])
    if amount <= 0:
        return ValidationResult(valid=False, errors=["bid must be positive"])
    return ValidationResult(valid=True)
