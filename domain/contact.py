"""
Domain: Accepted contact submission.

Contract excerpts implemented here:
- A ContactSubmission is only created for submissions that passed the rate
  limit, the math challenge, and the spam checks.
- created_at is a UTC timestamp and is authoritative.
- The spam score the submission received is stored with it so staff can
  review borderline messages.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from uuid import UUID

from .time import require_utc_timestamp  # type: ignore[import-untyped]


@dataclass(frozen=True, slots=True)
class ContactSubmission:
    """Pure domain entity for a stored contact form message."""

    submission_id: UUID
    name: str
    email: str
    nursery_location: str
    message: str
    created_at: datetime
    spam_score: int = 0
    phone: Optional[str] = None
    ip_address: Optional[str] = None

    def __post_init__(self) -> None:
        require_utc_timestamp("created_at", self.created_at)
        if not self.name.strip():
            raise ValueError("name must not be empty")
        if not self.email.strip():
            raise ValueError("email must not be empty")
        if not 0 <= self.spam_score <= 100:
            raise ValueError("spam_score must be within 0..100")
