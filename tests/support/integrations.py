"""Reusable fakes and helpers for integration-configuration tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sentryconf.domain.errors import RemoteError
from sentryconf.domain.types import IntegrationPage, RemoteIntegration

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from sentryconf.domain.types import ConfigDocument


def make_integration(
    name: str,
    *,
    integration_id: str | None = None,
    provider_key: str = "slack",
    config: Mapping[str, object] | None = None,
) -> RemoteIntegration:
    return RemoteIntegration(
        id=integration_id or f"id-{name}",
        provider_key=provider_key,
        name=name,
        config_data=dict(config or {}),  # pyright: ignore[reportArgumentType]
    )


@dataclass(slots=True)
class ListCall:
    organization: str
    provider_key: str
    cursor: str


@dataclass(slots=True)
class UpdateCall:
    organization: str
    integration_id: str
    document: dict[str, object]


@dataclass(slots=True)
class FakeIntegrationClient:
    """In-memory integration API serving pages keyed by the cursor that requests them.

    ``pages`` maps a cursor to ``(items, next_cursor)``; the first page lives under
    the empty cursor. Cursors listed in ``failing_cursors`` raise ``RemoteError``. With
    ``echo_updates`` an update returns the stored integration, as Sentry does.
    """

    pages: dict[str, tuple[Sequence[RemoteIntegration], str]] = field(default_factory=dict)
    failing_cursors: set[str] = field(default_factory=set[str])
    fail_updates: bool = False
    echo_updates: bool = False
    list_calls: list[ListCall] = field(default_factory=list[ListCall])
    update_calls: list[UpdateCall] = field(default_factory=list[UpdateCall])

    @classmethod
    def from_pages(cls, *pages: Sequence[RemoteIntegration]) -> FakeIntegrationClient:
        """Chain ``pages`` with cursors ``c2``, ``c3`` ... and an empty final cursor."""

        chained: dict[str, tuple[Sequence[RemoteIntegration], str]] = {}
        for index, items in enumerate(pages):
            cursor = "" if index == 0 else f"c{index + 1}"
            next_cursor = f"c{index + 2}" if index + 1 < len(pages) else ""
            chained[cursor] = (items, next_cursor)
        return cls(pages=chained)

    def list_integrations(
        self,
        organization: str,
        provider_key: str,
        cursor: str = "",
    ) -> IntegrationPage:
        self.list_calls.append(ListCall(organization, provider_key, cursor))
        if cursor in self.failing_cursors:
            raise RemoteError(f"listing failed at cursor {cursor!r}", status_code=502)
        items, next_cursor = self.pages.get(cursor, ((), ""))
        return IntegrationPage(items=list(items), next_cursor=next_cursor)

    def update_config(
        self,
        organization: str,
        integration_id: str,
        document: ConfigDocument,
    ) -> RemoteIntegration | None:
        self.update_calls.append(UpdateCall(organization, integration_id, dict(document)))
        if self.fail_updates:
            raise RemoteError("update rejected", status_code=400)
        stored = self._store(integration_id, document)
        return stored if self.echo_updates else None

    def _store(self, integration_id: str, document: ConfigDocument) -> RemoteIntegration | None:
        stored: RemoteIntegration | None = None
        for cursor, (items, next_cursor) in list(self.pages.items()):
            replaced = [
                RemoteIntegration(
                    id=item.id,
                    provider_key=item.provider_key,
                    name=item.name,
                    config_data=dict(document),
                )
                if item.id == integration_id
                else item
                for item in items
            ]
            self.pages[cursor] = (replaced, next_cursor)
            stored = next((item for item in replaced if item.id == integration_id), stored)
        return stored
