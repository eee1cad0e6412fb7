"""Tests for @traced service spans."""

from __future__ import annotations

import pytest

from gavel.infrastructure.store import Store
from gavel.services.auction import AuctionService
from gavel.services.telemetry import (
    annotate,
    enable_telemetry,
    telemetry_enabled,
    traced,
)
from tests.conftest import FrozenClock, open_auction


class TestTraced:
    def test_disabled_by_default(self, store: Store) -> None:
        assert not telemetry_enabled()
        assert AuctionService(store).list_auctions().meta is None

    def test_enabled_attaches_span(self, store: Store) -> None:
        enable_telemetry()
        result = AuctionService(store).list_auctions()
        span = result.meta["telemetry"]
        assert span["name"] == "AuctionService.list_auctions"
        assert span["duration_ms"] >= 0

    def test_annotations_recorded(self, store: Store, clock: FrozenClock) -> None:
        auction_id = open_auction(store, clock=clock)["id"]
        enable_telemetry()
        result = AuctionService(store, clock=clock).place_bid(auction_id, bidder="b", amount=150)
        assert result.meta["telemetry"]["annotations"] == {"attempts": 1}

    def test_nested_spans_attach_to_outermost(self) -> None:
        from gavel.services.result import ServiceResult

        @traced
        def inner() -> ServiceResult:
            annotate("step", "inner")
            return ServiceResult(ok=True, op="inner")

        @traced
        def outer() -> ServiceResult:
            assert inner().meta is None
            return ServiceResult(ok=True, op="outer")

        enable_telemetry()
        span = outer().meta["telemetry"]
        assert [child["name"] for child in span["children"]] == [inner.__qualname__]
        assert span["children"][0]["annotations"] == {"step": "inner"}

    def test_annotate_without_span_is_noop(self) -> None:
        annotate("ignored", 1)
