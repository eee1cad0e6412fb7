"""Tests for the ServiceResult contract."""

import pytest

from gavel.services.result import ErrorCode, ServiceError, ServiceResult


class TestServiceResult:
    def test_success_defaults(self) -> None:
        result = ServiceResult(ok=True, op="list_auctions")
        assert result.data == {}
        assert result.warnings == []
        assert result.error is None
        assert result.code is None

    def test_failure_shorthand(self) -> None:
        result = ServiceResult.failure(
            "place_bid", ErrorCode.BID_TOO_LOW, "Bid too low", currentBid=5
        )
        assert not result.ok
        assert result.code == "BID_TOO_LOW"
        assert result.error == ServiceError(
            code="BID_TOO_LOW", message="Bid too low", detail={"currentBid": 5}
        )

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="x")
        with pytest.raises(Exception):
            result.ok = False  # type: ignore[misc]

    def test_json_dump(self) -> None:
        result = ServiceResult.failure("view_auction", ErrorCode.NOT_FOUND, "missing")
        assert '"code":"NOT_FOUND"' in result.model_dump_json()
