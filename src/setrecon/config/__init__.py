"""Application configuration helpers."""

from __future__ import annotations

from .env import optional_env_var
from .errors import ConfigurationError
from .http import HttpConfig, RetryPolicy, get_http_config
from .logging import configure_logging, get_log_level
from .reconcile import get_reconciliation_options

__all__ = [
    "ConfigurationError",
    "HttpConfig",
    "RetryPolicy",
    "configure_logging",
    "get_http_config",
    "get_log_level",
    "get_reconciliation_options",
    "optional_env_var",
]
