"""Reconciler for organization integration configurations.

Every invocation runs the same chain::

    Idle -> Listing -> Matched -> Projecting | Updating -> Done

and stops at the first failure. Listing raises ``RemoteError``, matching
raises ``NotFoundError``/``NotUniqueError``, projecting raises
``ConversionError`` and updating raises ``RemoteError``. Nothing is kept
between invocations.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from .documents import merge_fragment
from .match import match_by_name
from .paginate import fetch_all

if TYPE_CHECKING:
    from sentryconf.domain.ports import IntegrationClient
    from sentryconf.domain.types import ConfigDocument, IntegrationIdentity, RemoteIntegration

    from .state import StateCodec

log = getLogger(__name__)


class Phase(StrEnum):
    IDLE = "idle"
    LISTING = "listing"
    MATCHED = "matched"
    PROJECTING = "projecting"
    UPDATING = "updating"
    DONE = "done"


@dataclass(slots=True)
class Reconciler[S, D]:
    """Read, apply and delete one integration configuration per call."""

    client: IntegrationClient
    codec: StateCodec[S, D]

    def read(self, state: S) -> S:
        """Project the remote configuration matching ``state`` into a new state."""

        identity, _ = self.codec.decode_identity(state)
        log.debug(
            "Reading integration configuration: organization=%s, provider_key=%s, name=%s",
            identity.organization,
            identity.provider_key,
            identity.name,
        )
        return self._project(state, identity, self.lookup(identity))

    def apply(self, state: S) -> S:
        """Write the configuration declared by ``state`` (create and update).

        Fragments are merged into the current remote document first; otherwise
        the declared document replaces it.
        """

        identity, integration_id = self.codec.decode_identity(state)
        desired = self.codec.decode_document(state)
        log.debug(
            "Applying integration configuration: organization=%s, provider_key=%s, name=%s",
            identity.organization,
            identity.provider_key,
            identity.name,
        )

        document: ConfigDocument = desired
        if identity.is_fragment or integration_id is None:
            current = self.lookup(identity)
            integration_id = current.id
            if identity.is_fragment:
                document = merge_fragment(current.config_data, desired)

        echoed = self._update(identity, integration_id, document)

        written = self.codec.fill(
            state,
            state_id=self.codec.encode_identity(identity, integration_id),
            identity=identity,
            integration_id=integration_id,
        )
        if self.codec.refresh_after_write:
            # An echoed integration already holds the stored document.
            if echoed is not None and echoed.id == integration_id:
                return self._project(written, identity, echoed)
            return self.read(written)
        self._transition(identity, Phase.DONE)
        return written

    def delete(self, state: S) -> None:
        """Overwrite the remote configuration with an empty document.

        The remote service has no delete for configurations; emptying the
        document is the removal.
        """

        identity, integration_id = self.codec.decode_identity(state)
        log.debug(
            "Deleting integration configuration: organization=%s, provider_key=%s, name=%s",
            identity.organization,
            identity.provider_key,
            identity.name,
        )
        if integration_id is None:
            integration_id = self.lookup(identity).id
        self._update(identity, integration_id, {})
        self._transition(identity, Phase.DONE)

    def lookup(self, identity: IntegrationIdentity) -> RemoteIntegration:
        """Return the single remote integration for ``identity``."""

        self._transition(identity, Phase.LISTING)
        items = fetch_all(self.client, identity.organization, identity.provider_key)
        match = match_by_name(items, identity.name)
        self._transition(identity, Phase.MATCHED)
        return match

    def _project(self, state: S, identity: IntegrationIdentity, match: RemoteIntegration) -> S:
        self._transition(identity, Phase.PROJECTING)
        config = self.codec.encode_document(match.config_data, state=state)
        projected = self.codec.fill(
            state,
            state_id=self.codec.encode_identity(identity, match.id),
            identity=identity,
            integration_id=match.id,
            config=config,
        )
        self._transition(identity, Phase.DONE)
        return projected

    def _update(
        self,
        identity: IntegrationIdentity,
        integration_id: str,
        document: ConfigDocument,
    ) -> RemoteIntegration | None:
        self._transition(identity, Phase.UPDATING)
        echoed = self.client.update_config(identity.organization, integration_id, document)
        log.info(
            "Updated configuration of integration %s in %s (%s keys)",
            integration_id,
            identity.organization,
            len(document),
        )
        return echoed

    @staticmethod
    def _transition(identity: IntegrationIdentity, phase: Phase) -> None:
        log.debug(
            "%s/%s/%s -> %s",
            identity.organization,
            identity.provider_key,
            identity.name,
            phase,
        )


__all__ = ["Phase", "Reconciler"]
