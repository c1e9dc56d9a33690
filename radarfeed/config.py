"""Runtime settings, read from the environment.

A ``.env`` file in the working directory is honoured via python-dotenv.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

DEFAULT_BASE_URL = "https://www.flightradar24.com"

_TRUTHY = {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    return float(raw) if raw else default


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    return int(raw) if raw else default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    """Connection and concurrency settings for a feed session."""

    base_url: str = DEFAULT_BASE_URL
    timeout: float = 15.0
    # Edge hosts of this provider routinely present self-signed or
    # mismatched certificates, so verification is off unless asked for.
    verify_tls: bool = False
    user_agent: str = "radarfeed/0.1"
    probe_timeout: float = 2.0
    probe_concurrency: int = 8
    detail_concurrency: int = 4
    default_host: str | None = None
    default_zone: str | None = None
    extra_headers: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from ``RADARFEED_*`` environment variables."""
        load_dotenv()
        return cls(
            base_url=os.environ.get("RADARFEED_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            timeout=_env_float("RADARFEED_TIMEOUT", 15.0),
            verify_tls=_env_bool("RADARFEED_VERIFY_TLS", False),
            user_agent=os.environ.get("RADARFEED_USER_AGENT", "radarfeed/0.1"),
            probe_timeout=_env_float("RADARFEED_PROBE_TIMEOUT", 2.0),
            probe_concurrency=_env_int("RADARFEED_PROBE_CONCURRENCY", 8),
            detail_concurrency=_env_int("RADARFEED_DETAIL_CONCURRENCY", 4),
            default_host=os.environ.get("RADARFEED_HOST") or None,
            default_zone=os.environ.get("RADARFEED_ZONE") or None,
        )
