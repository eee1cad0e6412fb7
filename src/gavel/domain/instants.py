"""Instant parsing and storage formatting.

All instants inside gavel are timezone-aware UTC datetimes. Naive inputs
are interpreted as UTC. The storage format is fixed-width so that lexical
order of the stored text equals chronological order.
"""

from __future__ import annotations

from datetime import UTC, datetime

STORAGE_FORMAT = "%Y-%m-%dT%H:%M:%S.%f+00:00"


def ensure_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes and convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_instant(value: str | datetime) -> datetime:
    """Parse an ISO-8601 string (or pass through a datetime) as aware UTC.

    Accepts the trailing ``Z`` form browsers send from ``Date.toISOString()``.

    Raises:
        ValueError: If *value* is not a datetime or a parseable ISO-8601 string.
        OverflowError: If the instant falls outside the representable UTC range.
    """
    if isinstance(value, datetime):
        return ensure_utc(value)
    if not isinstance(value, str) or not value.strip():
        msg = f"Not an ISO-8601 instant: {value!r}"
        raise ValueError(msg)
    return ensure_utc(datetime.fromisoformat(value.strip()))


def format_instant(value: datetime) -> str:
    """Render *value* in the fixed-width storage format.

    Examples:
        >>> format_instant(datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC))
        '2026-01-02T03:04:05.000000+00:00'
    """
    return ensure_utc(value).strftime(STORAGE_FORMAT)
