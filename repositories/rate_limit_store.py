"""
Rate limit store (persistence).

Defines the key-value interface the rate limiter depends on, plus the
in-process implementation used by default. A networked implementation lives
in repositories/rate_limit_repository.py; the limiter never sees which one
it was given.

This module enforces no rate limit rules; see domain/rate_limit.py.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional, Protocol

from domain.rate_limit import RateLimitRecord
from domain.time import require_utc_timestamp


class RateLimitStore(Protocol):
    def get(self, ip_address: str) -> Optional[RateLimitRecord]:
        ...

    def set(self, ip_address: str, record: RateLimitRecord) -> None:
        ...

    def delete_expired(self, now: datetime) -> int:
        """Remove every record whose window has passed; return how many were removed."""
        ...


class InMemoryRateLimitStore:
    """
    Process-local store backed by a dict.

    Not synchronised on its own: the rate limiter serialises access.
    """

    def __init__(self) -> None:
        self._records: Dict[str, RateLimitRecord] = {}

    def get(self, ip_address: str) -> Optional[RateLimitRecord]:
        return self._records.get(ip_address)

    def set(self, ip_address: str, record: RateLimitRecord) -> None:
        self._records[ip_address] = record

    def delete_expired(self, now: datetime) -> int:
        require_utc_timestamp("now", now)
        expired = [ip for ip, record in self._records.items() if record.is_expired(now)]
        for ip in expired:
            del self._records[ip]
        return len(expired)

    def __len__(self) -> int:
        return len(self._records)


__all__ = ["InMemoryRateLimitStore", "RateLimitStore"]
