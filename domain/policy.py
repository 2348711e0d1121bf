"""
Domain: Anti-spam policy constants.

Every threshold and weight the spam checks use lives here so operators can
tune them without a code change (see services/config.py for the environment
overrides). Defaults reflect the behaviour the contact form has always had.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Tuple

DEFAULT_SPAM_KEYWORDS: Tuple[str, ...] = (
    "bitcoin", "crypto", "investment", "loan", "credit", "casino", "gambling",
    "viagra", "pharmacy", "escort", "dating", "hookup", "adult", "porn",
    "make money", "work from home", "get rich", "free money", "click here",
    "limited time", "act now", "congratulations", "winner", "lottery",
)


@dataclass(frozen=True, slots=True)
class SpamPolicy:
    # Timing window for a human filling in the form
    min_fill_time: timedelta = timedelta(seconds=3)
    max_fill_time: timedelta = timedelta(minutes=30)
    too_fast_score: int = 90
    too_slow_score: int = 70

    honeypot_score: int = 100
    spam_threshold: int = 50
    max_score: int = 100

    # Content heuristics
    spam_keywords: Tuple[str, ...] = field(default=DEFAULT_SPAM_KEYWORDS)
    keyword_weight: int = 20
    max_urls: int = 2
    url_weight: int = 15
    max_phone_numbers: int = 1
    phone_weight: int = 10
    min_unique_word_ratio: float = 0.3
    min_words_for_repetition: int = 10
    repetition_score: int = 30
    min_email_local_part: int = 3
    suspicious_email_score: int = 15
    max_caps_ratio: float = 0.7
    min_length_for_caps: int = 20
    caps_score: int = 25

    # Rate limiting
    rate_limit_max: int = 5
    rate_limit_window: timedelta = timedelta(hours=1)
    cleanup_interval: timedelta = timedelta(hours=1)

    def __post_init__(self) -> None:
        if self.min_fill_time >= self.max_fill_time:
            raise ValueError("min_fill_time must be shorter than max_fill_time")
        if self.rate_limit_max < 1:
            raise ValueError("rate_limit_max must be >= 1")
        if self.rate_limit_window <= timedelta(0):
            raise ValueError("rate_limit_window must be positive")
        if self.cleanup_interval <= timedelta(0):
            raise ValueError("cleanup_interval must be positive")
        if not 0 < self.spam_threshold <= self.max_score:
            raise ValueError("spam_threshold must be within (0, max_score]")


DEFAULT_POLICY = SpamPolicy()

__all__ = ["DEFAULT_POLICY", "DEFAULT_SPAM_KEYWORDS", "SpamPolicy"]
