"""
Contact submission repository (persistence).

Stores accepted contact form messages. Two implementations share the
ContactSubmissionStore interface:
- InMemoryContactStore for local development and tests
- SupabaseContactStore backed by the `contact_submissions` table

No spam rules live here; only submissions that already passed every check
reach this layer.
"""

from __future__ import annotations

from threading import Lock
from typing import Any, List, Mapping, Protocol
from uuid import UUID

from domain.contact import ContactSubmission
from repositories.client import get_supabase
from repositories.rows import parse_utc_datetime, raise_on_error, to_iso_utc

# Supabase table name for contact submissions.
# Keep this aligned with your database schema.
_CONTACT_TABLE: str = "contact_submissions"


class ContactSubmissionStore(Protocol):
    def create_contact_submission(self, submission: ContactSubmission) -> None:
        ...

    def list_contact_submissions(self, limit: int = 100) -> List[ContactSubmission]:
        """Newest first."""
        ...


def _submission_to_row(submission: ContactSubmission) -> dict[str, Any]:
    return {
        "submission_id": str(submission.submission_id),
        "name": submission.name,
        "email": submission.email,
        "phone": submission.phone,
        "nursery_location": submission.nursery_location,
        "message": submission.message,
        "ip_address": submission.ip_address,
        "spam_score": submission.spam_score,
        "created_at_utc": to_iso_utc(submission.created_at, name="created_at"),
    }


def _row_to_submission(row: Mapping[str, Any]) -> ContactSubmission:
    return ContactSubmission(
        submission_id=UUID(str(row["submission_id"])),
        name=str(row["name"]),
        email=str(row["email"]),
        phone=row.get("phone"),
        nursery_location=str(row.get("nursery_location") or ""),
        message=str(row["message"]),
        ip_address=row.get("ip_address"),
        spam_score=int(row.get("spam_score") or 0),
        created_at=parse_utc_datetime(row["created_at_utc"]),
    )


class InMemoryContactStore:
    def __init__(self) -> None:
        self._submissions: List[ContactSubmission] = []
        self._lock = Lock()

    def create_contact_submission(self, submission: ContactSubmission) -> None:
        with self._lock:
            if any(s.submission_id == submission.submission_id for s in self._submissions):
                raise ValueError("ContactSubmission already exists for submission_id")
            self._submissions.append(submission)

    def list_contact_submissions(self, limit: int = 100) -> List[ContactSubmission]:
        with self._lock:
            ordered = sorted(self._submissions, key=lambda s: s.created_at, reverse=True)
        return ordered[:limit]


class SupabaseContactStore:
    def __init__(self, client: Any = None) -> None:
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = get_supabase()
        return self._client

    def create_contact_submission(self, submission: ContactSubmission) -> None:
        response = self.client.table(_CONTACT_TABLE).insert(_submission_to_row(submission)).execute()
        error = getattr(response, "error", None)
        if error:
            code = getattr(error, "code", None)
            if str(code) == "23505":
                raise ValueError("ContactSubmission already exists for submission_id") from None
            raise RuntimeError(f"Failed to create contact submission: {error}")

    def list_contact_submissions(self, limit: int = 100) -> List[ContactSubmission]:
        response = (
            self.client.table(_CONTACT_TABLE)
            .select("*")
            .order("created_at_utc", desc=True)
            .limit(limit)
            .execute()
        )
        raise_on_error(response, "fetch contact submissions")

        rows = getattr(response, "data", None) or []
        return [_row_to_submission(row) for row in rows]


__all__ = [
    "ContactSubmissionStore",
    "InMemoryContactStore",
    "SupabaseContactStore",
]
