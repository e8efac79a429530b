from __future__ import annotations

from typing import Any

from backend.core.errors import InvalidIdentifier


def validate_identifier(value: Any) -> int:
    # bool is an int subclass; True must not pass as user 1
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidIdentifier(f"Invalid user identifier: {value!r}")
    return value


def canonicalize(x: Any, y: Any) -> tuple[int, int]:
    """Order two distinct user ids ascending, the key of every symmetric relation."""
    low = validate_identifier(x)
    high = validate_identifier(y)
    if low == high:
        raise InvalidIdentifier("A user cannot be paired with themself.")
    return (low, high) if low < high else (high, low)
