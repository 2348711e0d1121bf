"""
Issued math challenge store (persistence).

Holds the expected answer server-side between the form render and the
submission. Challenges are single-use: consuming one removes it, whether the
submitted answer turns out to be right or wrong.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from threading import Lock
from typing import Dict, Optional
from uuid import uuid4

from domain.challenge import MathChallenge
from domain.time import require_utc_timestamp


@dataclass(frozen=True, slots=True)
class IssuedChallenge:
    challenge_id: str
    challenge: MathChallenge
    issued_at: datetime
    expires_at: datetime


class InMemoryChallengeStore:
    def __init__(self, ttl: timedelta = timedelta(minutes=30)) -> None:
        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")
        self._ttl = ttl
        self._issued: Dict[str, IssuedChallenge] = {}
        self._lock = Lock()

    def issue(self, challenge: MathChallenge, now: datetime) -> IssuedChallenge:
        require_utc_timestamp("now", now)
        issued = IssuedChallenge(
            challenge_id=uuid4().hex,
            challenge=challenge,
            issued_at=now,
            expires_at=now + self._ttl,
        )
        with self._lock:
            self._issued[issued.challenge_id] = issued
        return issued

    def consume(self, challenge_id: str, now: datetime) -> Optional[MathChallenge]:
        """Remove and return the challenge, or None if unknown or expired."""

        with self._lock:
            issued = self._issued.pop(challenge_id, None)
        if issued is None or now > issued.expires_at:
            return None
        return issued.challenge

    def delete_expired(self, now: datetime) -> int:
        with self._lock:
            expired = [cid for cid, issued in self._issued.items() if now > issued.expires_at]
            for cid in expired:
                del self._issued[cid]
        return len(expired)

    def __len__(self) -> int:
        return len(self._issued)


__all__ = ["InMemoryChallengeStore", "IssuedChallenge"]
