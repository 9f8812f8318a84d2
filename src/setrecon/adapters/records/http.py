"""HTTP reader for record collections served as JSON, including Graph-style paging."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger

import httpx
from httpx_retries import Retry, RetryTransport

from setrecon.config import HttpConfig, RetryPolicy, get_http_config

from .source import RawRecord, RecordSourceError, next_link, records_from_payload

log = getLogger(__name__)

ClientFactory = Callable[[HttpConfig], httpx.Client]


def _build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        respect_retry_after_header=policy.respect_retry_after_header,
        allowed_methods=("GET",),
        status_forcelist=tuple(policy.status_forcelist),
        retry_on_exceptions=policy.retry_on_exceptions,
    )


def default_client_factory(config: HttpConfig) -> httpx.Client:
    return httpx.Client(
        transport=RetryTransport(retry=_build_retry(config.retry)),
        timeout=config.timeout_seconds,
        headers=config.default_headers(),
        follow_redirects=True,
    )


def fetch_records(
    url: str,
    *,
    config: HttpConfig | None = None,
    client_factory: ClientFactory | None = None,
) -> list[RawRecord]:
    """GET ``url`` and every ``@odata.nextLink`` page after it.

    Paging links must stay on the host of ``url`` so the bearer token is never
    sent elsewhere.
    """

    effective_config = config or get_http_config()
    factory = client_factory or default_client_factory

    records: list[RawRecord] = []
    origin = _host_of(url)
    seen: set[str] = set()
    page_url: str | None = url
    with factory(effective_config) as client:
        while page_url is not None:
            if page_url in seen:
                raise RecordSourceError("paging link repeats an earlier page", location=page_url)
            seen.add(page_url)
            payload = _get_json(client, page_url)
            page = records_from_payload(payload, location=page_url)
            records.extend(page)
            log.debug("Fetched %s record(s) from %s", len(page), page_url)
            page_url = next_link(payload)
            if page_url is not None and _host_of(page_url) != origin:
                raise RecordSourceError(
                    f"paging link points to another host ({_host_of(page_url) or '(none)'})",
                    location=url,
                )

    log.info("Fetched %s record(s) in %s page(s) from %s", len(records), len(seen), url)
    return records


def _host_of(url: str) -> str:
    return httpx.URL(url).host.lower()


def _get_json(client: httpx.Client, url: str) -> object:
    try:
        response = client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise RecordSourceError(
            f"HTTP {exc.response.status_code} {exc.response.reason_phrase}", location=url
        ) from exc
    except httpx.HTTPError as exc:
        raise RecordSourceError(f"request failed: {exc}", location=url) from exc
    try:
        return response.json()
    except ValueError as exc:
        raise RecordSourceError(f"invalid JSON response: {exc}", location=url) from exc
