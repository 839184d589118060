"""Application orchestration entry points."""

from __future__ import annotations

from contextlib import contextmanager
from logging import getLogger
from typing import TYPE_CHECKING, Any

from sentryconf.adapters.sentry import SentryClient
from sentryconf.config import get_sentry_config
from sentryconf.domain.reconciliation import (
    DocumentState,
    DocumentStateCodec,
    MappingState,
    MappingStateCodec,
    Reconciler,
)

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sentryconf.config import SentryConfig
    from sentryconf.domain.ports import IntegrationClient

type HostState = DocumentState | MappingState

log = getLogger(__name__)


@contextmanager
def open_client(
    client: IntegrationClient | None = None,
    *,
    config: SentryConfig | None = None,
) -> Iterator[IntegrationClient]:
    """Yield ``client`` as-is, or a Sentry client built from the environment."""

    if client is not None:
        yield client
        return
    with SentryClient(config=config or get_sentry_config()) as sentry:
        yield sentry


def build_reconciler(client: IntegrationClient, state: HostState) -> Reconciler[Any, Any]:
    if isinstance(state, DocumentState):
        return Reconciler(client=client, codec=DocumentStateCodec())
    return Reconciler(client=client, codec=MappingStateCodec())


def read_configuration[S: HostState](
    state: S,
    *,
    client: IntegrationClient | None = None,
) -> S:
    """Refresh ``state`` from the remote configuration it identifies."""

    with open_client(client) as active_client:
        return build_reconciler(active_client, state).read(state)


def apply_configuration[S: HostState](
    state: S,
    *,
    client: IntegrationClient | None = None,
) -> S:
    """Write the configuration declared by ``state`` and return the new state."""

    log.info(
        "Applying %s configuration %r in %s",
        state.provider_key,
        state.name,
        state.organization,
    )
    with open_client(client) as active_client:
        return build_reconciler(active_client, state).apply(state)


def delete_configuration(
    state: HostState,
    *,
    client: IntegrationClient | None = None,
) -> None:
    """Empty the remote configuration identified by ``state``."""

    log.info(
        "Clearing %s configuration %r in %s",
        state.provider_key,
        state.name,
        state.organization,
    )
    with open_client(client) as active_client:
        build_reconciler(active_client, state).delete(state)
