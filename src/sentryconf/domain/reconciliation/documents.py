"""Configuration document helpers: JSON (de)serialization and fragment merging."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import TYPE_CHECKING

from sentryconf.domain.errors import ConversionError

if TYPE_CHECKING:
    from sentryconf.domain.types import ConfigDocument, ConfigValue


def load_document(text: str) -> dict[str, ConfigValue]:
    """Parse a serialized configuration document into a mapping."""

    try:
        payload = json.loads(text)
    except (TypeError, json.JSONDecodeError) as exc:
        raise ConversionError(f"Failed to convert configuration from JSON: {exc}") from exc
    return as_document(payload)


def dump_document(document: ConfigDocument) -> str:
    """Serialize ``document`` with sorted keys and compact separators."""

    try:
        return json.dumps(document, sort_keys=True, separators=(",", ":"))
    except (TypeError, ValueError) as exc:
        raise ConversionError(f"Failed to convert configuration to JSON: {exc}") from exc


def as_document(payload: object) -> dict[str, ConfigValue]:
    """Return ``payload`` as a plain configuration mapping.

    Only the outer shape is checked: a mapping keyed by strings. Values are
    passed through untouched.
    """

    if not isinstance(payload, Mapping):
        raise ConversionError(
            f"Configuration must be a JSON object, got {type(payload).__name__}"
        )
    document: dict[str, ConfigValue] = {}
    for key, value in payload.items():  # pyright: ignore[reportUnknownVariableType]
        if not isinstance(key, str):
            raise ConversionError(f"Configuration keys must be strings, got {key!r}")
        document[key] = value
    return document


def merge_fragment(current: ConfigDocument, fragment: ConfigDocument) -> dict[str, ConfigValue]:
    """Shallow merge: keys of ``fragment`` overwrite ``current``, the rest is kept."""

    merged = dict(current)
    merged.update(fragment)
    return merged


def project_fragment(
    document: ConfigDocument,
    keys: Mapping[str, object],
) -> dict[str, ConfigValue]:
    """Restrict ``document`` to the keys a fragment manages."""

    return {key: value for key, value in document.items() if key in keys}


__all__ = [
    "as_document",
    "dump_document",
    "load_document",
    "merge_fragment",
    "project_fragment",
]
