"""Configuration for fetching record collections over HTTP."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx

from .env import env_number, optional_env_var

TIMEOUT_ENV = "SETRECON_HTTP_TIMEOUT"
RETRIES_ENV = "SETRECON_HTTP_RETRIES"
TOKEN_ENV = "SETRECON_HTTP_TOKEN"

_DEFAULT_TIMEOUT_SECONDS = 30.0
_DEFAULT_RETRIES = 4


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    total: int = _DEFAULT_RETRIES
    backoff_factor: float = 0.5
    max_backoff_wait: float = 60.0
    respect_retry_after_header: bool = True
    status_forcelist: frozenset[int] = field(
        default_factory=lambda: frozenset({429, 500, 502, 503, 504})
    )
    retry_on_exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )


@dataclass(slots=True, frozen=True)
class HttpConfig:
    timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    bearer_token: str | None = field(default=None, repr=False)

    @classmethod
    def from_environment(cls) -> HttpConfig:
        return cls(
            timeout_seconds=env_number(TIMEOUT_ENV, default=_DEFAULT_TIMEOUT_SECONDS),
            retry=RetryPolicy(total=int(env_number(RETRIES_ENV, default=_DEFAULT_RETRIES))),
            bearer_token=optional_env_var(TOKEN_ENV),
        )

    def default_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.bearer_token:
            headers["Authorization"] = f"Bearer {self.bearer_token}"
        return headers


def get_http_config() -> HttpConfig:
    return HttpConfig.from_environment()
