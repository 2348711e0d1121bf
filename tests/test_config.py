"""
Tests for `services/config.py`.
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from domain.policy import DEFAULT_POLICY
from services.config import load_policy, load_settings


def test_defaults_when_nothing_is_set() -> None:
    assert load_policy({}) == DEFAULT_POLICY

    settings = load_settings({})
    assert settings.policy == DEFAULT_POLICY
    assert settings.rate_limit_backend == "memory"
    assert settings.contact_storage_backend == "memory"
    assert settings.challenge_ttl == timedelta(minutes=30)
    assert settings.trust_forwarded_for is True


def test_default_policy_values() -> None:
    assert DEFAULT_POLICY.min_fill_time == timedelta(milliseconds=3000)
    assert DEFAULT_POLICY.max_fill_time == timedelta(minutes=30)
    assert DEFAULT_POLICY.rate_limit_max == 5
    assert DEFAULT_POLICY.rate_limit_window == timedelta(milliseconds=3_600_000)
    assert DEFAULT_POLICY.cleanup_interval == timedelta(hours=1)
    assert DEFAULT_POLICY.spam_threshold == 50
    assert len(DEFAULT_POLICY.spam_keywords) == 24


def test_environment_overrides() -> None:
    policy = load_policy(
        {
            "ANTISPAM_MIN_FILL_MS": "5000",
            "ANTISPAM_MAX_FILL_MS": "600000",
            "ANTISPAM_SPAM_THRESHOLD": "60",
            "ANTISPAM_RATE_LIMIT_MAX": "10",
            "ANTISPAM_RATE_LIMIT_WINDOW_MS": "60000",
            "ANTISPAM_CLEANUP_INTERVAL_MS": "120000",
        }
    )
    assert policy.min_fill_time == timedelta(seconds=5)
    assert policy.max_fill_time == timedelta(minutes=10)
    assert policy.spam_threshold == 60
    assert policy.rate_limit_max == 10
    assert policy.rate_limit_window == timedelta(minutes=1)
    assert policy.cleanup_interval == timedelta(minutes=2)
    # untouched values keep their defaults
    assert policy.keyword_weight == DEFAULT_POLICY.keyword_weight


def test_blank_values_are_ignored() -> None:
    assert load_policy({"ANTISPAM_RATE_LIMIT_MAX": "  "}) == DEFAULT_POLICY


@pytest.mark.parametrize("value", ["abc", "0", "-5", "1.5"])
def test_invalid_numbers_raise(value) -> None:
    with pytest.raises(ValueError):
        load_policy({"ANTISPAM_RATE_LIMIT_MAX": value})


def test_inconsistent_fill_window_raises() -> None:
    with pytest.raises(ValueError):
        load_policy({"ANTISPAM_MIN_FILL_MS": "3600000"})


def test_backend_selection() -> None:
    settings = load_settings({"RATE_LIMIT_BACKEND": "Supabase", "CHALLENGE_TTL_MS": "60000"})
    assert settings.rate_limit_backend == "supabase"
    assert settings.challenge_ttl == timedelta(minutes=1)

    with pytest.raises(ValueError):
        load_settings({"CONTACT_STORAGE_BACKEND": "redis"})


@pytest.mark.parametrize(
    "value, expected",
    [("false", False), ("0", False), ("No", False), ("true", True), ("1", True), ("  ", True)],
)
def test_trust_forwarded_for(value, expected) -> None:
    assert load_settings({"TRUST_FORWARDED_FOR": value}).trust_forwarded_for is expected


def test_invalid_trust_forwarded_for_raises() -> None:
    with pytest.raises(ValueError):
        load_settings({"TRUST_FORWARDED_FOR": "sometimes"})
