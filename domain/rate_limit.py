"""
Domain: Per-IP rate limit record.

Rules implemented here:
- A record is expired once now > window_reset_at.
- An expired (or missing) record is replaced by a fresh one with count = 1.
- Once count reaches the limit, further attempts are denied without touching
  the record, so hammering the endpoint cannot push the window forward.

This module is pure: no storage, no clock. All timestamps are passed explicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from .time import require_utc_timestamp  # type: ignore[import-untyped]


@dataclass(frozen=True, slots=True)
class RateLimitRecord:
    count: int
    window_reset_at: datetime

    def __post_init__(self) -> None:
        require_utc_timestamp("window_reset_at", self.window_reset_at)
        if self.count < 1:
            raise ValueError("count must be >= 1")

    @staticmethod
    def start(now: datetime, window: timedelta) -> "RateLimitRecord":
        """Open a new window beginning at `now` with a single attempt counted."""

        require_utc_timestamp("now", now)
        return RateLimitRecord(count=1, window_reset_at=now + window)

    def is_expired(self, now: datetime) -> bool:
        return now > self.window_reset_at

    def incremented(self) -> "RateLimitRecord":
        return RateLimitRecord(count=self.count + 1, window_reset_at=self.window_reset_at)


@dataclass(frozen=True, slots=True)
class RateLimitDecision:
    """
    Outcome of a single rate limit evaluation.

    `record` is the value to persist, or None when nothing must change
    (the attempt was denied).
    """

    allowed: bool
    record: RateLimitRecord | None


def evaluate_attempt(
    existing: RateLimitRecord | None,
    now: datetime,
    *,
    max_attempts: int,
    window: timedelta,
) -> RateLimitDecision:
    """
    Decide whether one more attempt is allowed given the stored record.

    Pure transition function; the caller is responsible for making the
    read, this call, and the write atomic.
    """

    if existing is None or existing.is_expired(now):
        return RateLimitDecision(allowed=True, record=RateLimitRecord.start(now, window))

    if existing.count >= max_attempts:
        return RateLimitDecision(allowed=False, record=None)

    return RateLimitDecision(allowed=True, record=existing.incremented())


__all__ = [
    "RateLimitDecision",
    "RateLimitRecord",
    "evaluate_attempt",
]
