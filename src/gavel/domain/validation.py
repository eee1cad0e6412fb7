"""Validation result type and shared field checks."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ValidationResult:
    """Result of an input validation check."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def is_number(value: Any) -> bool:
    """True for finite ints and floats. Booleans are not numbers here.

    Integers too large to convert to a float are not numbers either.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def is_blank(value: Any) -> bool:
    """True when *value* is missing, not a string, or only whitespace."""
    return not isinstance(value, str) or not value.strip()
