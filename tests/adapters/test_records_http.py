from __future__ import annotations

import httpx
import pytest

from setrecon.adapters.records import (
    ClientFactory,
    RecordSourceError,
    fetch_records,
    load_records,
)
from setrecon.config import HttpConfig

BASE_URL = "https://graph.example.test/v1.0/groups/123/members"


def _factory(handler: httpx.MockTransport) -> ClientFactory:
    def build(config: HttpConfig) -> httpx.Client:
        return httpx.Client(
            transport=handler,
            timeout=config.timeout_seconds,
            headers=config.default_headers(),
        )

    return build


def test_fetch_records_follows_next_links() -> None:
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        if "skiptoken" in str(request.url):
            return httpx.Response(200, json={"value": [{"id": "2"}]})
        return httpx.Response(
            200,
            json={"value": [{"id": "1"}], "@odata.nextLink": f"{BASE_URL}?$skiptoken=abc"},
        )

    records = fetch_records(
        BASE_URL,
        config=HttpConfig(),
        client_factory=_factory(httpx.MockTransport(handler)),
    )

    assert records == [{"id": "1"}, {"id": "2"}]
    assert len(requested) == 2


def test_fetch_records_sends_bearer_token() -> None:
    seen_headers: list[str | None] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen_headers.append(request.headers.get("Authorization"))
        return httpx.Response(200, json=[])

    load_records(
        BASE_URL,
        http=HttpConfig(bearer_token="secret"),
        client_factory=_factory(httpx.MockTransport(handler)),
    )

    assert seen_headers == ["Bearer secret"]


def test_fetch_records_wraps_http_errors() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"error": {"code": "Authorization_RequestDenied"}})

    with pytest.raises(RecordSourceError, match="HTTP 403"):
        fetch_records(
            BASE_URL,
            config=HttpConfig(),
            client_factory=_factory(httpx.MockTransport(handler)),
        )


def test_fetch_records_rejects_non_json_response() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>login</html>")

    with pytest.raises(RecordSourceError, match="invalid JSON response"):
        fetch_records(
            BASE_URL,
            config=HttpConfig(),
            client_factory=_factory(httpx.MockTransport(handler)),
        )


def test_fetch_records_stops_on_repeating_next_link() -> None:
    def handler(_request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"value": [], "@odata.nextLink": BASE_URL})

    with pytest.raises(RecordSourceError, match="repeats"):
        fetch_records(
            BASE_URL,
            config=HttpConfig(),
            client_factory=_factory(httpx.MockTransport(handler)),
        )


def test_fetch_records_refuses_next_link_on_another_host() -> None:
    requested: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(
            200,
            json={"value": [{"id": "1"}], "@odata.nextLink": "https://evil.example.test/page2"},
        )

    with pytest.raises(RecordSourceError, match="another host"):
        fetch_records(
            BASE_URL,
            config=HttpConfig(bearer_token="secret"),
            client_factory=_factory(httpx.MockTransport(handler)),
        )

    assert requested == [BASE_URL]


def test_fetch_records_reads_http_config_from_environment(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    seen_headers: list[str | None] = []
    monkeypatch.setenv("SETRECON_HTTP_TOKEN", "from-env")

    def handler(request: httpx.Request) -> httpx.Response:
        seen_headers.append(request.headers.get("Authorization"))
        return httpx.Response(200, json={"value": []})

    fetch_records(BASE_URL, client_factory=_factory(httpx.MockTransport(handler)))

    assert seen_headers == ["Bearer from-env"]
