"""
Application wiring.

Builds the anti-spam components once per process from the environment and
hands them to routes through FastAPI dependencies. Tests replace
`get_contact_service` via `app.dependency_overrides`.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache

from fastapi import Request

from domain.time import utc_now
from repositories.challenge_store import InMemoryChallengeStore
from repositories.contact_repository import (
    ContactSubmissionStore,
    InMemoryContactStore,
    SupabaseContactStore,
)
from repositories.rate_limit_repository import SupabaseRateLimitStore
from repositories.rate_limit_store import InMemoryRateLimitStore, RateLimitStore
from services.cleanup_task import CleanupTask
from services.config import Settings, load_settings
from services.contact_service import ContactService
from services.rate_limit_service import RateLimiter
from services.spam_detection_service import SpamDetector


@dataclass
class Container:
    settings: Settings
    contact_service: ContactService
    cleanup_task: CleanupTask


def build_container(settings: Settings) -> Container:
    rate_limit_store: RateLimitStore
    if settings.rate_limit_backend == "supabase":
        rate_limit_store = SupabaseRateLimitStore()
    else:
        rate_limit_store = InMemoryRateLimitStore()

    contact_store: ContactSubmissionStore
    if settings.contact_storage_backend == "supabase":
        contact_store = SupabaseContactStore()
    else:
        contact_store = InMemoryContactStore()

    rate_limiter = RateLimiter(rate_limit_store, settings.policy)
    challenge_store = InMemoryChallengeStore(ttl=settings.challenge_ttl)

    contact_service = ContactService(
        rate_limiter=rate_limiter,
        spam_detector=SpamDetector(settings.policy),
        challenge_store=challenge_store,
        contact_store=contact_store,
    )
    cleanup_task = CleanupTask(
        sweeps={
            "rate_limits": rate_limiter.cleanup,
            "challenges": lambda: challenge_store.delete_expired(utc_now()),
        },
        interval=settings.policy.cleanup_interval,
    )
    return Container(settings=settings, contact_service=contact_service, cleanup_task=cleanup_task)


@lru_cache(maxsize=1)
def get_container() -> Container:
    return build_container(load_settings())


def get_contact_service() -> ContactService:
    return get_container().contact_service


def resolve_client_ip(request: Request, trust_forwarded_for: bool) -> str:
    """Client IP for rate limiting.

    X-Forwarded-For is client-controlled unless a reverse proxy in front of the
    app overwrites it. Only enable `trust_forwarded_for` behind such a proxy;
    otherwise the socket peer address is used.
    """

    if trust_forwarded_for:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def get_client_ip(request: Request) -> str:
    return resolve_client_ip(request, get_container().settings.trust_forwarded_for)


__all__ = [
    "Container",
    "build_container",
    "get_client_ip",
    "get_contact_service",
    "get_container",
    "resolve_client_ip",
]
