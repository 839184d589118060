"""Domain layer: types, errors, ports and the reconciliation core."""

from __future__ import annotations

from .errors import (
    ConversionError,
    MalformedIDError,
    MatchError,
    NotFoundError,
    NotUniqueError,
    PaginationError,
    ReconciliationError,
    RemoteError,
)
from .ports import IntegrationClient
from .types import (
    ConfigDocument,
    ConfigValue,
    IntegrationIdentity,
    IntegrationPage,
    RemoteIntegration,
)

__all__ = [
    "ConfigDocument",
    "ConfigValue",
    "ConversionError",
    "IntegrationClient",
    "IntegrationIdentity",
    "IntegrationPage",
    "MalformedIDError",
    "MatchError",
    "NotFoundError",
    "NotUniqueError",
    "PaginationError",
    "ReconciliationError",
    "RemoteError",
    "RemoteIntegration",
]
