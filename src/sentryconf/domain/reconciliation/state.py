"""Host state shapes and the codecs that translate them for the reconciler.

Two shapes are supported:

``DocumentState``
    structured fields, the configuration stored as a serialized JSON document
    and the state id equal to the remote integration id.
``MappingState``
    the configuration stored as a typed mapping and the state id holding the
    composite ``organization/provider_key/internal_id`` identifier.

The reconciler only talks to a :class:`StateCodec`, so both shapes share the
same lookup, merge and update logic.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from logging import getLogger
from typing import TYPE_CHECKING, ClassVar, Protocol

from sentryconf.domain.types import IntegrationIdentity

from .documents import as_document, dump_document, load_document, project_fragment
from .identifiers import decode_composite_id, encode_composite_id

if TYPE_CHECKING:
    from sentryconf.domain.types import ConfigDocument, ConfigValue

log = getLogger(__name__)


class StateCodec[S, D](Protocol):
    """Boundary adapter between a host state shape ``S`` and the reconciler.

    ``D`` is the external representation of a configuration document in ``S``.
    """

    refresh_after_write: ClassVar[bool]

    def decode_identity(self, state: S) -> tuple[IntegrationIdentity, str | None]:
        """Return the identity and the integration id the caller already holds."""
        ...

    def encode_identity(self, identity: IntegrationIdentity, integration_id: str) -> str:
        """Return the state id to persist for ``integration_id``."""
        ...

    def decode_document(self, state: S) -> ConfigDocument: ...

    def encode_document(self, document: ConfigDocument, *, state: S) -> D: ...

    def fill(
        self,
        state: S,
        *,
        state_id: str,
        identity: IntegrationIdentity,
        integration_id: str,
        config: D | None = None,
    ) -> S:
        """Return ``state`` refreshed with the given values.

        ``config=None`` keeps the configuration already held by ``state``.
        """
        ...


@dataclass(frozen=True, slots=True, kw_only=True)
class DocumentState:
    organization: str
    provider_key: str
    name: str
    config_data: str
    is_fragment: bool = False
    id: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class MappingState:
    organization: str
    provider_key: str
    name: str
    config: Mapping[str, ConfigValue] = field(default_factory=dict[str, "ConfigValue"])
    id: str | None = None
    internal_id: str | None = None


class DocumentStateCodec:
    """Codec for :class:`DocumentState`.

    Writes keep the document the caller declared; for fragments a read only
    projects the keys the fragment manages.
    """

    refresh_after_write: ClassVar[bool] = False

    def decode_identity(self, state: DocumentState) -> tuple[IntegrationIdentity, str | None]:
        identity = IntegrationIdentity(
            organization=state.organization,
            provider_key=state.provider_key,
            name=state.name,
            is_fragment=state.is_fragment,
        )
        return identity, state.id or None

    def encode_identity(self, identity: IntegrationIdentity, integration_id: str) -> str:
        del identity
        return integration_id

    def decode_document(self, state: DocumentState) -> ConfigDocument:
        return load_document(state.config_data)

    def encode_document(self, document: ConfigDocument, *, state: DocumentState) -> str:
        if state.is_fragment:
            document = project_fragment(document, self.decode_document(state))
        return dump_document(document)

    def fill(
        self,
        state: DocumentState,
        *,
        state_id: str,
        identity: IntegrationIdentity,
        integration_id: str,
        config: str | None = None,
    ) -> DocumentState:
        del integration_id
        return replace(
            state,
            id=state_id,
            organization=identity.organization,
            provider_key=identity.provider_key,
            name=identity.name,
            config_data=state.config_data if config is None else config,
        )


class MappingStateCodec:
    """Codec for :class:`MappingState`; every write is followed by a fresh read."""

    refresh_after_write: ClassVar[bool] = True

    def decode_identity(self, state: MappingState) -> tuple[IntegrationIdentity, str | None]:
        identity = IntegrationIdentity(
            organization=state.organization,
            provider_key=state.provider_key,
            name=state.name,
        )
        if not state.id:
            return identity, None

        stored = decode_composite_id(state.id)
        if (stored.organization, stored.provider_key) != (
            identity.organization,
            identity.provider_key,
        ):
            log.debug(
                "Stored id %s no longer matches %s/%s; resolving by name",
                state.id,
                identity.organization,
                identity.provider_key,
            )
            return identity, None
        return identity, stored.internal_id

    def encode_identity(self, identity: IntegrationIdentity, integration_id: str) -> str:
        return encode_composite_id(identity.organization, identity.provider_key, integration_id)

    def decode_document(self, state: MappingState) -> ConfigDocument:
        return as_document(state.config)

    def encode_document(
        self, document: ConfigDocument, *, state: MappingState
    ) -> dict[str, ConfigValue]:
        del state
        return as_document(document)

    def fill(
        self,
        state: MappingState,
        *,
        state_id: str,
        identity: IntegrationIdentity,
        integration_id: str,
        config: Mapping[str, ConfigValue] | None = None,
    ) -> MappingState:
        return replace(
            state,
            id=state_id,
            internal_id=integration_id,
            organization=identity.organization,
            provider_key=identity.provider_key,
            name=identity.name,
            config=state.config if config is None else config,
        )


__all__ = [
    "DocumentState",
    "DocumentStateCodec",
    "MappingState",
    "MappingStateCodec",
    "StateCodec",
]
