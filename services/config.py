"""
Service configuration.

Reads the anti-spam policy and backend selection from environment variables
(optionally from the project's .env file). Unset variables keep the policy
defaults; malformed values raise ValueError at startup rather than silently
falling back.

Environment variables:
- RATE_LIMIT_BACKEND: "memory" (default) or "supabase"
- CONTACT_STORAGE_BACKEND: "memory" (default) or "supabase"
- ANTISPAM_MIN_FILL_MS, ANTISPAM_MAX_FILL_MS
- ANTISPAM_SPAM_THRESHOLD
- ANTISPAM_RATE_LIMIT_MAX, ANTISPAM_RATE_LIMIT_WINDOW_MS
- ANTISPAM_CLEANUP_INTERVAL_MS
- CHALLENGE_TTL_MS
- TRUST_FORWARDED_FOR: "true" (default) or "false"; only true behind a proxy
  that overwrites X-Forwarded-For
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from datetime import timedelta
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv

from domain.policy import DEFAULT_POLICY, SpamPolicy

env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

_BACKENDS = ("memory", "supabase")
_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")
DEFAULT_CHALLENGE_TTL = timedelta(minutes=30)

# env var -> (policy field, converter)
_POLICY_OVERRIDES = {
    "ANTISPAM_MIN_FILL_MS": ("min_fill_time", "ms"),
    "ANTISPAM_MAX_FILL_MS": ("max_fill_time", "ms"),
    "ANTISPAM_SPAM_THRESHOLD": ("spam_threshold", "int"),
    "ANTISPAM_RATE_LIMIT_MAX": ("rate_limit_max", "int"),
    "ANTISPAM_RATE_LIMIT_WINDOW_MS": ("rate_limit_window", "ms"),
    "ANTISPAM_CLEANUP_INTERVAL_MS": ("cleanup_interval", "ms"),
}


def _positive_int(name: str, raw: str) -> int:
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


def _backend(name: str, raw: Optional[str]) -> str:
    value = (raw or "memory").strip().lower()
    if value not in _BACKENDS:
        raise ValueError(f"{name} must be one of {_BACKENDS}, got {raw!r}")
    return value


def _flag(name: str, raw: Optional[str], default: bool) -> bool:
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be true or false, got {raw!r}")


def load_policy(environ: Optional[Mapping[str, str]] = None) -> SpamPolicy:
    """Build a SpamPolicy from the defaults plus any environment overrides."""

    env = os.environ if environ is None else environ
    overrides: Dict[str, Any] = {}

    for var, (field_name, kind) in _POLICY_OVERRIDES.items():
        raw = env.get(var)
        if raw is None or not raw.strip():
            continue
        value = _positive_int(var, raw)
        overrides[field_name] = timedelta(milliseconds=value) if kind == "ms" else value

    return replace(DEFAULT_POLICY, **overrides)


@dataclass(frozen=True, slots=True)
class Settings:
    policy: SpamPolicy = field(default=DEFAULT_POLICY)
    rate_limit_backend: str = "memory"
    contact_storage_backend: str = "memory"
    challenge_ttl: timedelta = DEFAULT_CHALLENGE_TTL
    trust_forwarded_for: bool = True


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ

    challenge_ttl = DEFAULT_CHALLENGE_TTL
    raw_ttl = env.get("CHALLENGE_TTL_MS")
    if raw_ttl and raw_ttl.strip():
        challenge_ttl = timedelta(milliseconds=_positive_int("CHALLENGE_TTL_MS", raw_ttl))

    return Settings(
        policy=load_policy(env),
        rate_limit_backend=_backend("RATE_LIMIT_BACKEND", env.get("RATE_LIMIT_BACKEND")),
        contact_storage_backend=_backend("CONTACT_STORAGE_BACKEND", env.get("CONTACT_STORAGE_BACKEND")),
        challenge_ttl=challenge_ttl,
        trust_forwarded_for=_flag("TRUST_FORWARDED_FOR", env.get("TRUST_FORWARDED_FOR"), True),
    )


__all__ = ["Settings", "load_policy", "load_settings"]
