"""
Tests for the in-memory challenge and contact stores and the time helpers.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from domain.challenge import ChallengeOperator, MathChallenge
from domain.contact import ContactSubmission
from domain.time import from_epoch_ms, to_epoch_ms
from repositories.challenge_store import InMemoryChallengeStore
from repositories.contact_repository import InMemoryContactStore

NOW = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
CHALLENGE = MathChallenge(left=4, operator=ChallengeOperator.ADD, right=5)


def test_challenge_is_single_use() -> None:
    store = InMemoryChallengeStore()
    issued = store.issue(CHALLENGE, NOW)

    assert issued.expires_at == NOW + timedelta(minutes=30)
    assert store.consume(issued.challenge_id, NOW) == CHALLENGE
    assert store.consume(issued.challenge_id, NOW) is None


def test_expired_challenge_is_not_returned() -> None:
    store = InMemoryChallengeStore(ttl=timedelta(minutes=1))
    issued = store.issue(CHALLENGE, NOW)

    assert store.consume(issued.challenge_id, NOW + timedelta(minutes=1, seconds=1)) is None
    assert len(store) == 0


def test_challenge_delete_expired() -> None:
    store = InMemoryChallengeStore(ttl=timedelta(minutes=1))
    store.issue(CHALLENGE, NOW)
    store.issue(CHALLENGE, NOW + timedelta(minutes=5))

    assert store.delete_expired(NOW + timedelta(minutes=2)) == 1
    assert store.delete_expired(NOW + timedelta(minutes=2)) == 0
    assert len(store) == 1


def _submission(created_at: datetime, **overrides) -> ContactSubmission:
    fields = dict(
        submission_id=uuid4(),
        name="Jane Parent",
        email="jane.parent@example.com",
        nursery_location="Riverside",
        message="Hello",
        created_at=created_at,
    )
    fields.update(overrides)
    return ContactSubmission(**fields)


def test_contact_store_lists_newest_first_with_limit() -> None:
    store = InMemoryContactStore()
    older = _submission(NOW)
    newer = _submission(NOW + timedelta(minutes=5))
    store.create_contact_submission(older)
    store.create_contact_submission(newer)

    assert store.list_contact_submissions() == [newer, older]
    assert store.list_contact_submissions(limit=1) == [newer]


def test_contact_store_rejects_duplicate_ids() -> None:
    store = InMemoryContactStore()
    submission = _submission(NOW)
    store.create_contact_submission(submission)
    with pytest.raises(ValueError):
        store.create_contact_submission(submission)


@pytest.mark.parametrize(
    "overrides",
    [
        {"name": "  "},
        {"email": ""},
        {"spam_score": 101},
        {"created_at": datetime(2026, 1, 1)},
    ],
)
def test_contact_submission_validation(overrides) -> None:
    created_at = overrides.pop("created_at", NOW)
    with pytest.raises(ValueError):
        _submission(created_at, **overrides)


def test_epoch_ms_round_trip() -> None:
    assert to_epoch_ms(NOW) == 1767268800000
    assert from_epoch_ms(1767268800000) == NOW
    assert from_epoch_ms(1767268800123) - NOW == timedelta(milliseconds=123)
