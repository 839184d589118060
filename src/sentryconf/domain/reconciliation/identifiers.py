"""Composite identifiers for hosts that persist a single id string.

The identifier is ``organization/provider_key/internal_id``. Organization
slugs, provider keys and integration ids never contain ``/``, and encoding
refuses parts that do, so a decoded identifier always yields the parts that
were encoded.
"""

from __future__ import annotations

from typing import Final, NamedTuple

from sentryconf.domain.errors import MalformedIDError

COMPOSITE_ID_SEPARATOR: Final[str] = "/"
_PART_COUNT: Final[int] = 3


class CompositeId(NamedTuple):
    organization: str
    provider_key: str
    internal_id: str


def encode_composite_id(organization: str, provider_key: str, internal_id: str) -> str:
    parts = CompositeId(organization, provider_key, internal_id)
    for field_name, value in zip(CompositeId._fields, parts, strict=True):
        if not value:
            raise MalformedIDError(f"Cannot build composite id: {field_name} is empty")
        if COMPOSITE_ID_SEPARATOR in value:
            raise MalformedIDError(
                f"Cannot build composite id: {field_name} {value!r} "
                f"contains {COMPOSITE_ID_SEPARATOR!r}"
            )
    return COMPOSITE_ID_SEPARATOR.join(parts)


def decode_composite_id(value: str) -> CompositeId:
    parts = value.split(COMPOSITE_ID_SEPARATOR)
    if len(parts) != _PART_COUNT or not all(parts):
        raise MalformedIDError(
            f"Malformed composite id {value!r}: expected "
            "organization/provider_key/internal_id"
        )
    return CompositeId(*parts)


__all__ = [
    "COMPOSITE_ID_SEPARATOR",
    "CompositeId",
    "decode_composite_id",
    "encode_composite_id",
]
