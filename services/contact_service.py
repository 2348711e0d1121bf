"""
Contact service for accepting nursery contact form submissions.

Handles:
- Issuing a fresh math challenge per form render
- Per-IP rate limiting (checked first; a limited IP is rejected regardless of content)
- Verifying the math answer against the server-held challenge
- Spam evaluation (honeypot, timing, content)
- Persisting accepted submissions

Rejections are ordinary outcomes reported through ContactSubmissionResult;
only storage failures raise.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from domain.challenge import generate_math_challenge
from domain.contact import ContactSubmission
from domain.spam import ContactSubmissionCandidate, SpamCheckResult
from domain.time import Clock, from_epoch_ms, utc_now
from repositories.challenge_store import InMemoryChallengeStore, IssuedChallenge
from repositories.contact_repository import ContactSubmissionStore
from services.rate_limit_service import RateLimiter
from services.spam_detection_service import SpamDetector

logger = logging.getLogger(__name__)


class SubmissionStatus(str, Enum):
    ACCEPTED = "accepted"
    RATE_LIMITED = "rate_limited"
    CHALLENGE_FAILED = "challenge_failed"
    SPAM = "spam"


@dataclass(frozen=True, slots=True)
class ContactSubmissionRequest:
    """
    A contact form post as the HTTP layer received it.

    form_start_time is epoch milliseconds recorded by the browser when the
    form was rendered.
    """
    name: str
    email: str
    nursery_location: str
    message: str
    math_answer: Optional[int]
    challenge_id: str
    form_start_time: int
    phone: Optional[str] = None
    website: Optional[str] = None
    ip_address: str = "unknown"


@dataclass(frozen=True, slots=True)
class ContactSubmissionResult:
    """
    Result of a submission attempt.

    submission is set only when status is ACCEPTED; verdict is set once the
    spam checks have run.
    """
    status: SubmissionStatus
    submission: Optional[ContactSubmission] = None
    verdict: Optional[SpamCheckResult] = None

    @property
    def accepted(self) -> bool:
        return self.status is SubmissionStatus.ACCEPTED


class ContactService:
    def __init__(
        self,
        rate_limiter: RateLimiter,
        spam_detector: SpamDetector,
        challenge_store: InMemoryChallengeStore,
        contact_store: ContactSubmissionStore,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.rate_limiter = rate_limiter
        self.spam_detector = spam_detector
        self.challenge_store = challenge_store
        self.contact_store = contact_store
        self._clock = clock or utc_now
        self._rng = rng

    def issue_challenge(self) -> IssuedChallenge:
        """Generate and remember a new challenge for one form render."""

        return self.challenge_store.issue(generate_math_challenge(self._rng), self._clock())

    def submit(self, request: ContactSubmissionRequest) -> ContactSubmissionResult:
        if not self.rate_limiter.check_rate_limit(request.ip_address):
            return ContactSubmissionResult(status=SubmissionStatus.RATE_LIMITED)

        now = self._clock()
        challenge = self.challenge_store.consume(request.challenge_id, now)
        if challenge is None or not challenge.is_correct(request.math_answer):
            logger.warning(
                "Contact math challenge failed: ip=%s challenge_known=%s",
                request.ip_address,
                challenge is not None,
            )
            return ContactSubmissionResult(status=SubmissionStatus.CHALLENGE_FAILED)

        candidate = ContactSubmissionCandidate(
            name=request.name,
            email=request.email,
            message=request.message,
            form_started_at=from_epoch_ms(request.form_start_time),
            nursery_location=request.nursery_location,
            phone=request.phone,
            website=request.website,
            math_answer=request.math_answer,
            ip_address=request.ip_address,
        )
        verdict = self.spam_detector.check_spam(candidate)
        if verdict.is_spam:
            return ContactSubmissionResult(status=SubmissionStatus.SPAM, verdict=verdict)

        submission = ContactSubmission(
            submission_id=uuid4(),
            name=request.name.strip(),
            email=request.email.strip(),
            phone=request.phone or None,
            nursery_location=request.nursery_location,
            message=request.message,
            ip_address=request.ip_address,
            spam_score=verdict.score,
            created_at=now,
        )
        try:
            self.contact_store.create_contact_submission(submission)
        except Exception:
            logger.error("Failed to store contact submission from ip=%s", request.ip_address, exc_info=True)
            raise

        logger.info("Contact submission accepted: id=%s location=%s", submission.submission_id, submission.nursery_location)
        return ContactSubmissionResult(status=SubmissionStatus.ACCEPTED, submission=submission, verdict=verdict)

    def list_submissions(self, limit: int = 100) -> List[ContactSubmission]:
        return self.contact_store.list_contact_submissions(limit=limit)


__all__ = [
    "ContactService",
    "ContactSubmissionRequest",
    "ContactSubmissionResult",
    "SubmissionStatus",
]
