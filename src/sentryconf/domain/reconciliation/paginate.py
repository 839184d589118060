"""Cursor-driven traversal of the integration listing."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from sentryconf.domain.errors import PaginationError

if TYPE_CHECKING:
    from sentryconf.domain.ports import IntegrationClient
    from sentryconf.domain.types import RemoteIntegration

log = getLogger(__name__)


def fetch_all(
    client: IntegrationClient,
    organization: str,
    provider_key: str,
) -> list[RemoteIntegration]:
    """Return every integration listed for ``provider_key``, in page order.

    Errors from the client propagate unchanged and drop whatever was collected
    from earlier pages. A cursor that comes back after it was already requested
    raises :class:`PaginationError`.
    """

    items: list[RemoteIntegration] = []
    requested: set[str] = set()
    cursor = ""
    pages = 0

    while True:
        page = client.list_integrations(organization, provider_key, cursor)
        pages += 1
        items.extend(page.items)

        if page.is_last:
            break
        requested.add(cursor)
        if page.next_cursor in requested:
            raise PaginationError(page.next_cursor)
        cursor = page.next_cursor

    log.debug(
        "Listed %s integrations for %s/%s across %s pages",
        len(items),
        organization,
        provider_key,
        pages,
    )
    return items
