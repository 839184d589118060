"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var, optional_float_env_var, require_env_vars
from .errors import ConfigurationError, InvalidConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .sentry import (
    DEFAULT_SENTRY_BASE_URL,
    SentryConfig,
    build_sentry_resilience,
    get_sentry_config,
)

__all__ = [
    "DEFAULT_SENTRY_BASE_URL",
    "ConfigurationError",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SentryConfig",
    "build_sentry_resilience",
    "configure_logging",
    "get_sentry_config",
    "optional_env_var",
    "optional_float_env_var",
    "require_env_vars",
]
