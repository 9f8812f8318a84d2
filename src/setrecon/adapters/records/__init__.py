"""Loaders turning files and URLs into raw record collections."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from .files import read_records_file
from .http import ClientFactory, default_client_factory, fetch_records
from .source import RawRecord, RecordSourceError, records_from_payload

if TYPE_CHECKING:
    from setrecon.config import HttpConfig

_HTTP_SCHEMES = ("http://", "https://")


def load_records(
    location: str | Path,
    *,
    http: HttpConfig | None = None,
    client_factory: ClientFactory | None = None,
) -> list[RawRecord]:
    """Load records from a local file or an http(s) URL."""

    if isinstance(location, str) and location.lower().startswith(_HTTP_SCHEMES):
        return fetch_records(location, config=http, client_factory=client_factory)
    return read_records_file(Path(location))


__all__ = [
    "ClientFactory",
    "RawRecord",
    "RecordSourceError",
    "default_client_factory",
    "fetch_records",
    "load_records",
    "read_records_file",
    "records_from_payload",
]
