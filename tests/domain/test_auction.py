"""Tests for the auction model and creation/bid input rules."""

from datetime import UTC, datetime

import pytest

from gavel.domain.auction import AuctionItem, validate_bid_amount, validate_new_auction


class TestAuctionItem:
    def test_wire_format_is_camel_case(self) -> None:
        item = AuctionItem(
            id="65f1c0de0123456789abcdef",
            item_name="Lamp",
            description="Brass",
            starting_bid=100,
            current_bid=100,
            closing_time=datetime(2030, 1, 1, tzinfo=UTC),
            created_at=datetime(2029, 1, 1, tzinfo=UTC),
        )
        wire = item.to_wire()
        assert set(wire) == {
            "id",
            "itemName",
            "description",
            "startingBid",
            "currentBid",
            "highestBidder",
            "closingTime",
            "isClosed",
            "createdAt",
        }
        assert wire["highestBidder"] is None
        assert wire["isClosed"] is False
        assert wire["closingTime"].startswith("2030-01-01T00:00:00")

    def test_frozen(self) -> None:
        item = AuctionItem(
            id="65f1c0de0123456789abcdef",
            item_name="Lamp",
            description="Brass",
            starting_bid=1,
            current_bid=1,
            closing_time=datetime(2030, 1, 1, tzinfo=UTC),
            created_at=datetime(2029, 1, 1, tzinfo=UTC),
        )
        with pytest.raises(Exception):
            item.current_bid = 5  # type: ignore[misc]


class TestValidateNewAuction:
    def test_valid(self) -> None:
        vr = validate_new_auction("Lamp", "Brass", 100, "2030-01-01T00:00:00Z")
        assert vr.valid
        assert vr.errors == []

    def test_zero_starting_bid_allowed(self) -> None:
        assert validate_new_auction("Lamp", "Brass", 0, "2030-01-01T00:00:00Z").valid

    def test_past_closing_time_allowed(self) -> None:
        assert validate_new_auction("Lamp", "Brass", 1, "2000-01-01T00:00:00Z").valid

    def test_all_missing(self) -> None:
        vr = validate_new_auction(None, None, None, None)
        assert not vr.valid
        assert vr.errors == [
            "itemName is required",
            "description is required",
            "startingBid is required",
            "closingTime is required",
        ]

    def test_blank_strings_are_missing(self) -> None:
        vr = validate_new_auction("   ", "", 1, "2030-01-01T00:00:00Z")
        assert "itemName is required" in vr.errors
        assert "description is required" in vr.errors

    @pytest.mark.parametrize("bid", ["100", True, float("nan"), float("inf"), 10**400])
    def test_starting_bid_must_be_number(self, bid: object) -> None:
        vr = validate_new_auction("Lamp", "Brass", bid, "2030-01-01T00:00:00Z")
        assert vr.errors == ["startingBid must be a number"]

    def test_negative_starting_bid(self) -> None:
        vr = validate_new_auction("Lamp", "Brass", -1, "2030-01-01T00:00:00Z")
        assert vr.errors == ["startingBid must be >= 0"]

    @pytest.mark.parametrize(
        "closing",
        [
            "tomorrow",
            "2030-13-01",
            12345,
            "9999-12-31T23:59:59-01:00",
            "0001-01-01T00:00:00+01:00",
        ],
    )
    def test_bad_closing_time(self, closing: object) -> None:
        vr = validate_new_auction("Lamp", "Brass", 1, closing)
        assert vr.errors == ["closingTime must be an ISO-8601 timestamp"]


class TestValidateBidAmount:
    def test_valid(self) -> None:
        assert validate_bid_amount(0.01).valid

    def test_missing(self) -> None:
        assert validate_bid_amount(None).errors == ["bid is required"]

    @pytest.mark.parametrize("amount", ["150", False, float("nan"), 10**400, -(10**400)])
    def test_not_a_number(self, amount: object) -> None:
        assert validate_bid_amount(amount).errors == ["bid must be a number"]

    @pytest.mark.parametrize("amount", [0, -5])
    def test_not_positive(self, amount: float) -> None:
        assert validate_bid_amount(amount).errors == ["bid must be positive"]
