"""
Tests for `domain/spam.py`.

Covers the individual checks:
- Honeypot
- Timing boundaries
- Each content heuristic, reason reporting, and score clamping
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from domain.policy import DEFAULT_POLICY
from domain.spam import check_content, check_honeypot, check_timing, matched_keywords

NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
CLEAN_MESSAGE = "Hello, do you have any places for a two year old from September?"
EMAIL = "jane.parent@example.com"


# ----------------------------------------------------------------------------
# Honeypot
# ----------------------------------------------------------------------------

@pytest.mark.parametrize("website", [None, ""])
def test_honeypot_empty_is_clean(website) -> None:
    result = check_honeypot(website)
    assert result.is_spam is False
    assert result.score == 0
    assert result.reason == ""


def test_honeypot_filled_is_spam() -> None:
    result = check_honeypot("http://spam.example")
    assert result.is_spam is True
    assert result.score == 100
    assert result.reason == "Honeypot field filled"


# ----------------------------------------------------------------------------
# Timing
# ----------------------------------------------------------------------------

@pytest.mark.parametrize(
    "elapsed, is_spam, score, reason",
    [
        (timedelta(0), True, 90, "Form submitted too quickly"),
        (timedelta(milliseconds=2999), True, 90, "Form submitted too quickly"),
        (timedelta(seconds=3), False, 0, ""),
        (timedelta(minutes=5), False, 0, ""),
        (timedelta(minutes=30), False, 0, ""),
        (timedelta(minutes=30, milliseconds=1), True, 70, "Form submission took too long"),
        (timedelta(days=2), True, 70, "Form submission took too long"),
    ],
)
def test_timing_window(elapsed, is_spam, score, reason) -> None:
    result = check_timing(NOW - elapsed, NOW)
    assert (result.is_spam, result.score, result.reason) == (is_spam, score, reason)


def test_timing_in_the_future_counts_as_too_fast() -> None:
    result = check_timing(NOW + timedelta(minutes=1), NOW)
    assert result.is_spam is True
    assert result.score == 90


def test_timing_uses_policy() -> None:
    policy = replace(DEFAULT_POLICY, min_fill_time=timedelta(seconds=10))
    assert check_timing(NOW - timedelta(seconds=5), NOW, policy).is_spam is True
    assert check_timing(NOW - timedelta(seconds=5), NOW).is_spam is False


# ----------------------------------------------------------------------------
# Content
# ----------------------------------------------------------------------------

def test_clean_message_scores_zero() -> None:
    result = check_content(CLEAN_MESSAGE, "Jane Parent", EMAIL)
    assert result.is_spam is False
    assert result.score == 0
    assert result.reason == ""


def test_two_keywords_stay_below_threshold() -> None:
    result = check_content("I heard about bitcoin and the lottery at the nursery.", "Jane Parent", EMAIL)
    assert result.score == 40
    assert result.is_spam is False
    assert result.reason == "Contains 2 spam keyword(s)"


def test_three_keywords_cross_threshold() -> None:
    result = check_content("Bitcoin casino lottery for the parents", "Jane Parent", EMAIL)
    assert result.score == 60
    assert result.is_spam is True


def test_keyword_in_name_and_message_counts_once() -> None:
    result = check_content("bitcoin winner", "Bitcoin Winner", EMAIL)
    assert result.score == 40
    assert matched_keywords("bitcoin winner", "Bitcoin Winner") == ["bitcoin", "winner"]


def test_keyword_matching_is_substring_and_case_insensitive() -> None:
    assert matched_keywords("Please CLICK HERE now") == ["click here"]
    assert matched_keywords("Cryptocurrency") == ["crypto"]


def test_urls_only_count_above_two() -> None:
    two = check_content("see http://a.example and https://b.example", "Jane Parent", EMAIL)
    assert two.score == 0

    three = check_content(
        "see http://a.example https://b.example http://c.example", "Jane Parent", EMAIL
    )
    assert three.score == 45
    assert three.reason == "Contains 3 URLs"
    assert three.is_spam is False

    four = check_content(
        "http://a.example http://b.example http://c.example http://d.example", "Jane Parent", EMAIL
    )
    assert four.score == 60
    assert four.is_spam is True


def test_phone_numbers_only_count_above_one() -> None:
    one = check_content("Please call me on +447700900123", "Jane Parent", EMAIL)
    assert one.score == 0

    two = check_content("Call +447700900123 or +447700900456", "Jane Parent", EMAIL)
    assert two.score == 20
    assert two.reason == "Contains 2 phone numbers"


def test_repetitive_text() -> None:
    message = " ".join(["buy"] * 12)
    result = check_content(message, "Jane Parent", EMAIL)
    assert result.score == 30
    assert result.reason == "Highly repetitive text"


def test_repetition_needs_more_than_ten_words() -> None:
    message = " ".join(["buy"] * 10)
    assert check_content(message, "Jane Parent", EMAIL).score == 0


@pytest.mark.parametrize("email", ["jo@example.com", "jane+nursery@example.com", "@example.com"])
def test_suspicious_email(email) -> None:
    result = check_content(CLEAN_MESSAGE, "Jane Parent", email)
    assert result.score == 15
    assert result.reason == "Suspicious email pattern"


def test_plus_outside_local_part_is_not_suspicious() -> None:
    assert check_content(CLEAN_MESSAGE, "Jane Parent", "jane.parent@ex+ample.com").score == 0


def test_excessive_capitals() -> None:
    result = check_content("PLEASE CALL ME BACK ABOUT PLACES", "Jane Parent", EMAIL)
    assert result.score == 25
    assert result.reason == "Excessive capital letters"


def test_short_shouting_is_ignored() -> None:
    assert check_content("HELLO THERE", "Jane Parent", EMAIL).score == 0


def test_all_triggered_reasons_are_reported() -> None:
    message = " ".join(["WIN BITCOIN"] * 8)
    result = check_content(message, "Jane Parent", "jo@example.com")
    # keyword 20 + repetition 30 + email 15 + capitals 25
    assert result.score == 90
    assert result.is_spam is True
    assert result.reason == (
        "Contains 1 spam keyword(s), Highly repetitive text, "
        "Suspicious email pattern, Excessive capital letters"
    )


def test_score_is_clamped_to_100() -> None:
    message = "bitcoin crypto casino viagra lottery winner"
    result = check_content(message, "Jane Parent", EMAIL)
    assert result.score == 100
    assert result.is_spam is True


def test_empty_inputs_never_raise() -> None:
    result = check_content("", "", EMAIL)
    assert result.score == 0
    assert result.is_spam is False

    assert check_content("   ", "", "").reason == "Suspicious email pattern"
