"""Shared logging helpers for setrecon."""

from __future__ import annotations

import logging

from .env import optional_env_var
from .errors import ConfigurationError

LOG_LEVEL_ENV = "SETRECON_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Configure the root logger for the ``setrecon`` CLI.

    The CLI passes ``logging.DEBUG`` for ``--verbose`` and otherwise the level
    resolved by ``get_log_level`` from ``SETRECON_LOG_LEVEL``. Records go to
    stderr so a JSON report printed to stdout stays parseable. Later calls are
    no-ops unless ``force=True``.
    """

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        datefmt="%H:%M:%S",
        force=force,
    )


def get_log_level(default: int = logging.INFO) -> int:
    """Resolve ``SETRECON_LOG_LEVEL`` (a level name or number) to a logging level."""

    value = optional_env_var(LOG_LEVEL_ENV)
    if value is None:
        return default
    if value.isdigit():
        return int(value)
    level = logging.getLevelNamesMapping().get(value.upper())
    if level is None:
        raise ConfigurationError(f"Invalid value for {LOG_LEVEL_ENV}: {value!r}")
    return level
