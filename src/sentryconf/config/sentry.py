"""Sentry API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from sentryconf import __version__

from .env import optional_env_var, optional_float_env_var, require_env_vars
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

DEFAULT_SENTRY_BASE_URL = "https://sentry.io/api/"
DEFAULT_SENTRY_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class SentryConfig:
    """Holds Sentry API credentials and HTTP client settings."""

    auth_token: str
    resilience: ResilienceConfig

    @property
    def base_url(self) -> str:
        return self.resilience.base_url or DEFAULT_SENTRY_BASE_URL


def build_sentry_resilience(
    *,
    auth_token: str,
    base_url: str = DEFAULT_SENTRY_BASE_URL,
    timeout_seconds: float = DEFAULT_SENTRY_TIMEOUT_SECONDS,
    calls_per_second: float | None = None,
    retry: RetryPolicy | None = None,
) -> ResilienceConfig:
    # httpx resolves relative paths against the base URL only with a trailing slash.
    normalized_base = base_url if base_url.endswith("/") else f"{base_url}/"
    return ResilienceConfig(
        name="sentry",
        base_url=normalized_base,
        timeout_seconds=timeout_seconds,
        retry=retry or RetryPolicy(),
        ratelimit=RateLimit.per_second(calls_per_second) if calls_per_second else None,
        default_headers={
            "Authorization": f"Bearer {auth_token}",
            "Accept": "application/json",
            "User-Agent": f"sentryconf/{__version__}",
        },
    )


def get_sentry_config() -> SentryConfig:
    values = require_env_vars(("SENTRY_AUTH_TOKEN",))
    auth_token = values["SENTRY_AUTH_TOKEN"]
    timeout = optional_float_env_var("SENTRY_TIMEOUT_SECONDS", DEFAULT_SENTRY_TIMEOUT_SECONDS)
    return SentryConfig(
        auth_token=auth_token,
        resilience=build_sentry_resilience(
            auth_token=auth_token,
            base_url=optional_env_var("SENTRY_BASE_URL", DEFAULT_SENTRY_BASE_URL),
            timeout_seconds=timeout or DEFAULT_SENTRY_TIMEOUT_SECONDS,
            calls_per_second=optional_float_env_var("SENTRY_RATE_LIMIT_PER_SECOND"),
        ),
    )
