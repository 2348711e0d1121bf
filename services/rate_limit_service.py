"""
Rate limiting service for contact form submissions.

Allows at most `policy.rate_limit_max` submissions per IP within a fixed
window. The storage backend is injected; this service only needs the
RateLimitStore interface.

Requests are served from a thread pool, so the read-check-write sequence runs
under a lock. The cleanup sweep takes the same lock only while it removes
expired records. With a shared (Supabase) store the lock serialises this
process only.
"""

from __future__ import annotations

import logging
from threading import Lock
from typing import Optional

from domain.policy import DEFAULT_POLICY, SpamPolicy
from domain.rate_limit import evaluate_attempt
from domain.time import Clock, utc_now
from repositories.rate_limit_store import RateLimitStore

logger = logging.getLogger(__name__)


class RateLimiter:
    def __init__(
        self,
        store: RateLimitStore,
        policy: SpamPolicy = DEFAULT_POLICY,
        clock: Optional[Clock] = None,
    ) -> None:
        self.store = store
        self.policy = policy
        self._clock = clock or utc_now
        self._lock = Lock()

    def check_rate_limit(self, ip_address: str) -> bool:
        """
        Record one submission attempt for `ip_address`.

        Returns:
            True if the attempt is allowed, False if the IP is over its limit.
            A denied attempt leaves the stored record untouched.
        """

        with self._lock:
            now = self._clock()
            decision = evaluate_attempt(
                self.store.get(ip_address),
                now,
                max_attempts=self.policy.rate_limit_max,
                window=self.policy.rate_limit_window,
            )
            if decision.record is not None:
                self.store.set(ip_address, decision.record)

        if not decision.allowed:
            logger.warning("Contact rate limit exceeded: ip=%s", ip_address)
        return decision.allowed

    def cleanup(self) -> int:
        """Remove expired records. Safe to run any number of times."""

        with self._lock:
            removed = self.store.delete_expired(self._clock())
        logger.info("Rate limit cleanup removed %d expired record(s)", removed)
        return removed


__all__ = ["RateLimiter"]
