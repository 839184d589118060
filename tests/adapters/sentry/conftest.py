"""Shared fixtures for Sentry adapter tests."""

from __future__ import annotations

import pytest

from sentryconf.config import RetryPolicy, SentryConfig, build_sentry_resilience
from tests.support.sentry_http import BASE_URL


@pytest.fixture
def sentry_config() -> SentryConfig:
    """Sentry settings pointing at ``BASE_URL`` with immediate retries."""

    return SentryConfig(
        auth_token="test-token",
        resilience=build_sentry_resilience(
            auth_token="test-token",
            base_url=BASE_URL,
            retry=RetryPolicy(attempts=2, backoff_factor=0.0, backoff_jitter=0.0),
        ),
    )
