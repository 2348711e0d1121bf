"""
Rate limit repository (Supabase persistence).

Shares rate limit windows across server instances by storing one row per IP
in the `contact_rate_limits` table. Implements the RateLimitStore interface.

Table columns:
- ip_address (primary key)
- count
- window_reset_at_utc
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional

from domain.rate_limit import RateLimitRecord
from repositories.client import get_supabase
from repositories.rows import parse_utc_datetime, raise_on_error, to_iso_utc

# Supabase table name for rate limit records.
# Keep this aligned with your database schema.
_RATE_LIMIT_TABLE: str = "contact_rate_limits"


def _row_to_record(row: Mapping[str, Any]) -> RateLimitRecord:
    return RateLimitRecord(
        count=int(row["count"]),
        window_reset_at=parse_utc_datetime(row["window_reset_at_utc"]),
    )


class SupabaseRateLimitStore:
    def __init__(self, client: Any = None) -> None:
        self._client = client

    @property
    def client(self) -> Any:
        if self._client is None:
            self._client = get_supabase()
        return self._client

    def get(self, ip_address: str) -> Optional[RateLimitRecord]:
        response = (
            self.client.table(_RATE_LIMIT_TABLE)
            .select("*")
            .eq("ip_address", ip_address)
            .limit(1)
            .execute()
        )
        raise_on_error(response, "fetch rate limit record")

        rows = getattr(response, "data", None) or []
        if not rows:
            return None
        return _row_to_record(rows[0])

    def set(self, ip_address: str, record: RateLimitRecord) -> None:
        payload: dict[str, Any] = {
            "ip_address": ip_address,
            "count": record.count,
            "window_reset_at_utc": to_iso_utc(record.window_reset_at, name="window_reset_at"),
        }
        response = self.client.table(_RATE_LIMIT_TABLE).upsert(payload).execute()
        raise_on_error(response, "store rate limit record")

    def delete_expired(self, now: datetime) -> int:
        response = (
            self.client.table(_RATE_LIMIT_TABLE)
            .delete()
            .lt("window_reset_at_utc", to_iso_utc(now, name="now"))
            .execute()
        )
        raise_on_error(response, "delete expired rate limit records")

        deleted_rows = getattr(response, "data", None) or []
        return len(deleted_rows)


__all__ = ["SupabaseRateLimitStore"]
