"""Ports implemented by remote integration adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .types import ConfigDocument, IntegrationPage, RemoteIntegration


@runtime_checkable
class IntegrationClient(Protocol):
    """Access to the remote organization integration API.

    Implementations raise :class:`sentryconf.domain.errors.RemoteError` for any
    transport or API failure.
    """

    def list_integrations(
        self,
        organization: str,
        provider_key: str,
        cursor: str = "",
    ) -> IntegrationPage:
        ...

    def update_config(
        self,
        organization: str,
        integration_id: str,
        document: ConfigDocument,
    ) -> RemoteIntegration | None:
        """Replace the configuration document of ``integration_id``.

        Returns the stored integration when the service echoes it back, else
        ``None``; callers then read the listing to see the stored document.
        """
        ...


__all__ = ["IntegrationClient"]
