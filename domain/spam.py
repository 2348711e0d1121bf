"""
Domain: Contact submission spam checks.

Rules implemented here:
- Honeypot: a filled hidden field is an immediate, maximum-confidence verdict.
- Timing: submissions faster than the minimum fill time or slower than the
  maximum fill time are spam.
- Content: independent signals add to a suspicion score; every signal that
  fires is reported, and the verdict is spam once the score reaches the
  threshold. The reported score is clamped to the policy maximum.

Checks are total functions: empty or malformed strings contribute nothing and
never raise. All timestamps are passed explicitly; no implicit 'now' is used.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from .policy import DEFAULT_POLICY, SpamPolicy  # type: ignore[import-untyped]
from .time import require_utc_timestamp  # type: ignore[import-untyped]

URL_PATTERN = re.compile(r"https?://\S+", re.IGNORECASE)
PHONE_PATTERN = re.compile(r"\+?[1-9]\d{3,14}")
UPPERCASE_PATTERN = re.compile(r"[A-Z]")

HONEYPOT_REASON = "Honeypot field filled"
TOO_FAST_REASON = "Form submitted too quickly"
TOO_SLOW_REASON = "Form submission took too long"


@dataclass(frozen=True, slots=True)
class SpamCheckResult:
    """
    Verdict of a single check, or of the whole pipeline.

    reason is a comma-joined list of triggered rules; empty when nothing fired.
    """

    is_spam: bool
    score: int
    reason: str = ""

    @staticmethod
    def clean() -> "SpamCheckResult":
        return SpamCheckResult(is_spam=False, score=0)


@dataclass(frozen=True, slots=True)
class ContactSubmissionCandidate:
    """A contact form submission as received, before it is accepted or rejected."""

    name: str
    email: str
    message: str
    form_started_at: datetime
    nursery_location: str = ""
    phone: Optional[str] = None
    website: Optional[str] = None
    math_answer: Optional[int] = None
    ip_address: Optional[str] = None

    def __post_init__(self) -> None:
        require_utc_timestamp("form_started_at", self.form_started_at)


def check_honeypot(website: Optional[str], policy: SpamPolicy = DEFAULT_POLICY) -> SpamCheckResult:
    if website:
        return SpamCheckResult(is_spam=True, score=policy.honeypot_score, reason=HONEYPOT_REASON)
    return SpamCheckResult.clean()


def check_timing(
    form_started_at: datetime,
    now: datetime,
    policy: SpamPolicy = DEFAULT_POLICY,
) -> SpamCheckResult:
    """
    Compare how long the form was open against the allowed fill window.

    Boundaries are exclusive: exactly min_fill_time or max_fill_time passes.
    """

    require_utc_timestamp("now", now)
    elapsed = now - form_started_at

    if elapsed < policy.min_fill_time:
        return SpamCheckResult(is_spam=True, score=policy.too_fast_score, reason=TOO_FAST_REASON)
    if elapsed > policy.max_fill_time:
        return SpamCheckResult(is_spam=True, score=policy.too_slow_score, reason=TOO_SLOW_REASON)
    return SpamCheckResult.clean()


def matched_keywords(*texts: str, policy: SpamPolicy = DEFAULT_POLICY) -> List[str]:
    """Distinct spam keywords found in any of `texts` (case-insensitive substring match)."""

    lowered = [text.lower() for text in texts]
    return [
        keyword
        for keyword in policy.spam_keywords
        if any(keyword in text for text in lowered)
    ]


def _is_repetitive(message: str, policy: SpamPolicy) -> bool:
    words = message.split()
    if len(words) <= policy.min_words_for_repetition:
        return False
    unique_words = {word.lower() for word in words}
    return len(unique_words) / len(words) < policy.min_unique_word_ratio


def _is_suspicious_email(email: str, policy: SpamPolicy) -> bool:
    local_part = email.split("@", 1)[0]
    return "+" in local_part or len(local_part) < policy.min_email_local_part


def _is_shouting(message: str, policy: SpamPolicy) -> bool:
    if len(message) <= policy.min_length_for_caps:
        return False
    caps_ratio = len(UPPERCASE_PATTERN.findall(message)) / len(message)
    return caps_ratio > policy.max_caps_ratio


def check_content(
    message: str,
    name: str,
    email: str,
    policy: SpamPolicy = DEFAULT_POLICY,
) -> SpamCheckResult:
    """
    Score message content against the spam heuristics.

    A keyword found in both name and message counts once.
    """

    score = 0
    reasons: List[str] = []

    keywords = matched_keywords(message, name, policy=policy)
    if keywords:
        score += len(keywords) * policy.keyword_weight
        reasons.append(f"Contains {len(keywords)} spam keyword(s)")

    urls = URL_PATTERN.findall(message)
    if len(urls) > policy.max_urls:
        score += len(urls) * policy.url_weight
        reasons.append(f"Contains {len(urls)} URLs")

    phones = PHONE_PATTERN.findall(message)
    if len(phones) > policy.max_phone_numbers:
        score += len(phones) * policy.phone_weight
        reasons.append(f"Contains {len(phones)} phone numbers")

    if _is_repetitive(message, policy):
        score += policy.repetition_score
        reasons.append("Highly repetitive text")

    if _is_suspicious_email(email, policy):
        score += policy.suspicious_email_score
        reasons.append("Suspicious email pattern")

    if _is_shouting(message, policy):
        score += policy.caps_score
        reasons.append("Excessive capital letters")

    return SpamCheckResult(
        is_spam=score >= policy.spam_threshold,
        score=min(score, policy.max_score),
        reason=", ".join(reasons),
    )


__all__ = [
    "ContactSubmissionCandidate",
    "SpamCheckResult",
    "check_content",
    "check_honeypot",
    "check_timing",
    "matched_keywords",
]
