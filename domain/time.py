"""
Domain time utilities (pure).

Centralized timestamp validation and epoch-millisecond conversion.

The browser records the form render time as epoch milliseconds; everything
inside the domain works with timezone-aware UTC datetimes.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

Clock = Callable[[], datetime]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def require_utc_timestamp(name: str, value: datetime) -> None:
    """
    Enforces that timestamps are UTC.

    Invariants:
    - Timestamps must be timezone-aware.
    - Timestamps must have UTC offset 0.
    """

    if value.tzinfo is None or value.utcoffset() is None:
        raise ValueError(f"{name} must be timezone-aware (UTC)")
    if value.utcoffset() != timedelta(0):
        raise ValueError(f"{name} must be a UTC timestamp (offset 0)")


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def from_epoch_ms(value: int) -> datetime:
    """Convert epoch milliseconds (as sent by the browser) to a UTC datetime."""

    return _EPOCH + timedelta(milliseconds=value)


def to_epoch_ms(value: datetime) -> int:
    """Convert a UTC datetime to whole epoch milliseconds."""

    require_utc_timestamp("value", value)
    return (value - _EPOCH) // timedelta(milliseconds=1)
