"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import InvalidConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Return the given environment variables or raise if any are missing/blank."""

    missing: list[str] = []
    values: dict[str, str] = {}
    for name in names:
        value = _read(name)
        if value is None:
            missing.append(name)
            continue
        values[name] = value

    if missing:
        missing_list = ", ".join(sorted(missing))
        raise MissingConfigurationError(f"Missing configuration for: {missing_list}")

    return values


def optional_env_var(name: str, default: str) -> str:
    value = _read(name)
    return default if value is None else value


def optional_float_env_var(name: str, default: float | None = None) -> float | None:
    """Parse a positive float, treating a blank or unset variable as ``default``."""

    value = _read(name)
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError:
        raise InvalidConfigurationError(name, value, "a number") from None
    if parsed <= 0:
        raise InvalidConfigurationError(name, value, "a positive number")
    return parsed


def _read(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()
