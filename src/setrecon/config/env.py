"""Environment variable loaders for configuration."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import ConfigurationError

if TYPE_CHECKING:
    from collections.abc import Sequence


def optional_env_var(name: str) -> str | None:
    """Return a stripped environment variable, treating blank values as unset."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def env_choice(name: str, choices: Sequence[str], *, default: str) -> str:
    value = optional_env_var(name)
    if value is None:
        return default
    normalized = value.lower()
    if normalized not in choices:
        allowed = ", ".join(choices)
        raise ConfigurationError(f"Invalid value for {name}: {value!r} (expected one of {allowed})")
    return normalized


def env_number(name: str, *, default: float, minimum: float = 0) -> float:
    value = optional_env_var(name)
    if value is None:
        return default
    try:
        number = float(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid number for {name}: {value!r}") from exc
    if number < minimum:
        raise ConfigurationError(f"{name} must be >= {minimum}, got {number}")
    return number
