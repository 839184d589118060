"""Translate Sentry payloads into domain integrations."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sentryconf.domain.types import RemoteIntegration

from .schema import OrganizationIntegrationPayload

if TYPE_CHECKING:
    from sentryconf.domain.types import ConfigDocument


def parse_integration(
    payload: OrganizationIntegrationPayload | dict[str, object],
) -> RemoteIntegration:
    model = (
        payload
        if isinstance(payload, OrganizationIntegrationPayload)
        else OrganizationIntegrationPayload.model_validate(payload)
    )
    config_data: ConfigDocument = dict(model.config_data)  # pyright: ignore[reportAssignmentType]
    return RemoteIntegration(
        id=model.id,
        provider_key=model.provider.key,
        name=model.name,
        config_data=config_data,
    )
