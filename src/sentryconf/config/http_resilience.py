"""Settings for the retrying, rate-limited HTTP client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Mapping

    type ResponseHook = Callable[[httpx.Response], Awaitable[None]]

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})
TRANSIENT_ERRORS: tuple[type[httpx.HTTPError], ...] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Backoff settings handed to ``httpx_retries``.

    Only the two verbs of the integration API are retried. An update replaces
    the whole configuration document, so sending it twice is harmless.
    """

    attempts: int = 4
    backoff_factor: float = 0.5
    backoff_jitter: float = 1.0
    max_backoff_wait: float = 60.0
    honour_retry_after: bool = True
    methods: frozenset[str] = frozenset({"GET", "POST"})
    status_codes: frozenset[int] = RETRYABLE_STATUS_CODES
    exceptions: tuple[type[httpx.HTTPError], ...] = TRANSIENT_ERRORS


@dataclass(slots=True, frozen=True)
class RateLimit:
    """At most ``max_calls`` requests in any ``per_seconds`` window."""

    max_calls: int
    per_seconds: float

    @classmethod
    def per_second(cls, calls: float) -> RateLimit:
        return cls(max_calls=1, per_seconds=1.0 / calls)


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    default_headers: Mapping[str, str] | None = None
    response_hooks: tuple[ResponseHook, ...] = ()
