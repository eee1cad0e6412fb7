"""Record ID generation and validation.

IDs are 24 lowercase hex characters, the shape document stores hand out:
an 8-hex-digit big-endian seconds timestamp followed by 16 random hex
digits. The timestamp prefix makes IDs roughly creation-ordered.

INVARIANT: IDs are permanent. Once generated, an ID never changes.
"""

from __future__ import annotations

import re
import secrets
import time

ID_PATTERN = re.compile(r"^[0-9a-f]{24}$")


def new_record_id(now: float | None = None) -> str:
    """Generate a fresh record ID, optionally pinned to *now* (epoch seconds)."""
    seconds = int(time.time() if now is None else now) & 0xFFFFFFFF
    return f"{seconds:08x}{secrets.token_hex(8)}"


def validate_id(record_id: str) -> bool:
    """Check whether *record_id* has the record-ID shape."""
    return ID_PATTERN.match(record_id) is not None
