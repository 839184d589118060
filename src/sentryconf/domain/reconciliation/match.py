"""Resolve the single integration a configuration is declared for."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sentryconf.domain.errors import NotFoundError, NotUniqueError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sentryconf.domain.types import RemoteIntegration


def match_by_name(items: Iterable[RemoteIntegration], name: str) -> RemoteIntegration:
    """Return the only item named exactly ``name``.

    Names are compared as-is (case-sensitive, no normalization). The provider
    key filter has already been applied by the listing.
    """

    matches = [item for item in items if item.name == name]
    if not matches:
        raise NotFoundError(name)
    if len(matches) > 1:
        raise NotUniqueError(name, count=len(matches))
    return matches[0]
