"""Domain types shared by the reconciliation core and its adapters."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

type ConfigValue = str | Mapping[str, str]
type ConfigDocument = Mapping[str, ConfigValue]


@dataclass(frozen=True, slots=True)
class IntegrationIdentity:
    """Caller-supplied lookup key for one organization integration configuration.

    ``is_fragment`` marks the desired document as partial: it is merged into the
    remote document instead of replacing it.
    """

    organization: str
    provider_key: str
    name: str
    is_fragment: bool = False


@dataclass(frozen=True, slots=True)
class RemoteIntegration:
    """An organization integration as reported by the remote service."""

    id: str
    provider_key: str
    name: str
    config_data: ConfigDocument = field(default_factory=dict[str, "ConfigValue"])


@dataclass(frozen=True, slots=True)
class IntegrationPage:
    """One page of the integration listing."""

    items: Sequence[RemoteIntegration]
    next_cursor: str = ""

    @property
    def is_last(self) -> bool:
        return not self.next_cursor


__all__ = [
    "ConfigDocument",
    "ConfigValue",
    "IntegrationIdentity",
    "IntegrationPage",
    "RemoteIntegration",
]
