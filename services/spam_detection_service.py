"""
Spam detection service for contact form submissions.

Runs the domain checks in a fixed order against the current time:
1. Honeypot
2. Timing
3. Content

The first check that reports spam wins. If none does, the timing and content
scores are summed and the spam threshold is applied again to the sum, so two
moderate signals can reject a submission that each would have let through.

Rate limiting is not part of this score; see services/rate_limit_service.py.
"""

from __future__ import annotations

import logging
from typing import Optional

from domain.policy import DEFAULT_POLICY, SpamPolicy
from domain.spam import (
    ContactSubmissionCandidate,
    SpamCheckResult,
    check_content,
    check_honeypot,
    check_timing,
)
from domain.time import Clock, utc_now

logger = logging.getLogger(__name__)


class SpamDetector:
    def __init__(self, policy: SpamPolicy = DEFAULT_POLICY, clock: Optional[Clock] = None) -> None:
        self.policy = policy
        self._clock = clock or utc_now

    def check_honeypot(self, candidate: ContactSubmissionCandidate) -> SpamCheckResult:
        return check_honeypot(candidate.website, self.policy)

    def check_timing(self, candidate: ContactSubmissionCandidate) -> SpamCheckResult:
        return check_timing(candidate.form_started_at, self._clock(), self.policy)

    def check_content(self, candidate: ContactSubmissionCandidate) -> SpamCheckResult:
        return check_content(candidate.message, candidate.name, candidate.email, self.policy)

    def combine(self, timing: SpamCheckResult, content: SpamCheckResult) -> SpamCheckResult:
        """Apply the threshold to the summed scores of checks that individually passed."""

        total = timing.score + content.score
        return SpamCheckResult(
            is_spam=total >= self.policy.spam_threshold,
            score=min(total, self.policy.max_score),
            reason=content.reason,
        )

    def check_spam(self, candidate: ContactSubmissionCandidate) -> SpamCheckResult:
        """
        Evaluate a submission.

        Returns:
            SpamCheckResult with the verdict, a 0..100 score, and the triggered reasons
        """

        honeypot = self.check_honeypot(candidate)
        if honeypot.is_spam:
            return self._flagged(candidate, honeypot)

        timing = self.check_timing(candidate)
        if timing.is_spam:
            return self._flagged(candidate, timing)

        content = self.check_content(candidate)
        if content.is_spam:
            return self._flagged(candidate, content)

        result = self.combine(timing, content)
        if result.is_spam:
            return self._flagged(candidate, result)
        return result

    def _flagged(self, candidate: ContactSubmissionCandidate, result: SpamCheckResult) -> SpamCheckResult:
        logger.warning(
            "Contact submission flagged as spam: ip=%s score=%d reason=%s",
            candidate.ip_address or "unknown",
            result.score,
            result.reason or "combined score",
        )
        return result


__all__ = ["SpamDetector"]
