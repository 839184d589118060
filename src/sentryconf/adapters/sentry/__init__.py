"""Sentry adapter for the organization integration API."""

from __future__ import annotations

from .client import SentryAPIError, SentryClient
from .schema import IntegrationProviderPayload, OrganizationIntegrationPayload
from .translator import parse_integration

__all__ = [
    "IntegrationProviderPayload",
    "OrganizationIntegrationPayload",
    "SentryAPIError",
    "SentryClient",
    "parse_integration",
]
