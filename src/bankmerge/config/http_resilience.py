"""HTTP client settings for the feed downloads and the canonical registry fetch.

Both endpoints are public, static documents (CSV, PDF and JSON) published by the
Central Bank, Nuclea and GitHub. Feeds are cached for a few hours so repeated runs
during the same day do not hammer the publishers; the registry is never cached.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Final, Literal

import httpx

from bankmerge import __version__

from .env import env_int

FEED_CACHE_TTL_SECONDS: Final[int] = 6 * 60 * 60
DEFAULT_READ_TIMEOUT_SECONDS: Final[int] = 120
DEFAULT_RETRIES: Final[int] = 4
USER_AGENT: Final[str] = f"bankmerge/{__version__}"


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    total: int = DEFAULT_RETRIES
    backoff_factor: float = 0.5
    max_backoff_wait: float = 60.0
    respect_retry_after_header: bool = True
    allowed_methods: frozenset[str] = field(default_factory=lambda: frozenset({"GET", "HEAD"}))
    # publishers sit behind CDNs that answer 520-524 when the origin is slow
    status_forcelist: frozenset[int] = field(
        default_factory=lambda: frozenset({408, 429, 500, 502, 503, 504, 520, 522, 524})
    )
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )
    backoff_jitter: float = 1.0


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class CacheConfig:
    enabled: bool = True
    backend: Literal["sqlite", "memory"] = "sqlite"
    sqlite_path: str | None = None
    default_ttl_seconds: float | None = FEED_CACHE_TTL_SECONDS
    refresh_ttl_on_access: bool = False


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    connect_timeout_seconds: float = 10.0
    read_timeout_seconds: float = DEFAULT_READ_TIMEOUT_SECONDS
    follow_redirects: bool = True
    user_agent: str = USER_AGENT
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    cache: CacheConfig | None = field(default_factory=CacheConfig)

    def timeout(self) -> httpx.Timeout:
        return httpx.Timeout(self.read_timeout_seconds, connect=self.connect_timeout_seconds)

    def headers(self) -> dict[str, str]:
        return {"User-Agent": self.user_agent}


def _retry_policy() -> RetryPolicy:
    return RetryPolicy(total=env_int("BANKMERGE_HTTP_RETRIES", DEFAULT_RETRIES))


def _read_timeout() -> int:
    return env_int("BANKMERGE_HTTP_TIMEOUT", DEFAULT_READ_TIMEOUT_SECONDS)


def feed_resilience_config() -> ResilienceConfig:
    """Settings shared by every feed download: rate limited and cached."""

    return ResilienceConfig(
        name="feeds",
        read_timeout_seconds=_read_timeout(),
        retry=_retry_policy(),
        ratelimit=RateLimit(max_calls=4, per_seconds=1.0),
        cache=CacheConfig(),
    )


def registry_resilience_config() -> ResilienceConfig:
    """Settings for the canonical registry, which must never come from the cache."""

    return ResilienceConfig(
        name="base-registry",
        read_timeout_seconds=_read_timeout(),
        retry=_retry_policy(),
        cache=None,
    )
