"""Errors raised by the reconciliation core."""

from __future__ import annotations


class ReconciliationError(RuntimeError):
    """Base class for every failure surfaced by a reconciliation invocation."""


class RemoteError(ReconciliationError):
    """Raised when listing or updating integrations fails at the remote service."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class PaginationError(RemoteError):
    """Raised when the listing hands back a cursor that was already requested."""

    def __init__(self, cursor: str) -> None:
        super().__init__(f"Pagination cursor {cursor!r} was returned twice; aborting traversal")
        self.cursor = cursor


class MatchError(ReconciliationError):
    """Raised when the listing does not contain exactly one integration for a name."""

    def __init__(self, message: str, *, name: str) -> None:
        super().__init__(message)
        self.name = name


class NotFoundError(MatchError):
    def __init__(self, name: str) -> None:
        super().__init__(
            f"No matching organization integration configuration found with name {name!r}",
            name=name,
        )


class NotUniqueError(MatchError):
    def __init__(self, name: str, *, count: int) -> None:
        super().__init__(
            f"Found {count} matching organization integration configurations "
            f"with name {name!r}",
            name=name,
        )
        self.count = count


class ConversionError(ReconciliationError):
    """Raised when a configuration document cannot be (de)serialized."""


class MalformedIDError(ReconciliationError, ValueError):
    """Raised when a composite identifier cannot be encoded or decoded."""


__all__ = [
    "ConversionError",
    "MalformedIDError",
    "MatchError",
    "NotFoundError",
    "NotUniqueError",
    "PaginationError",
    "ReconciliationError",
    "RemoteError",
]
