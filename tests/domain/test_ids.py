"""Tests for record ID generation."""

from gavel.domain.ids import ID_PATTERN, new_record_id, validate_id


class TestRecordIds:
    def test_shape(self) -> None:
        assert ID_PATTERN.match(new_record_id())

    def test_timestamp_prefix(self) -> None:
        assert new_record_id(0x65F1C0DE).startswith("65f1c0de")

    def test_unique(self) -> None:
        assert len({new_record_id(1_700_000_000) for _ in range(200)}) == 200

    def test_validate(self) -> None:
        assert validate_id("65f1c0de0123456789abcdef")
        assert not validate_id("65F1C0DE0123456789ABCDEF")
        assert not validate_id("65f1c0de")
        assert not validate_id("not-an-id-at-all-nope!!!")
