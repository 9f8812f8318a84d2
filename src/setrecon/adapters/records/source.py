"""Shared payload handling for record sources."""

from __future__ import annotations

from collections.abc import Mapping
from typing import cast

type RawRecord = dict[str, object]

GRAPH_VALUE_KEY = "value"
GRAPH_NEXT_LINK_KEY = "@odata.nextLink"


class RecordSourceError(RuntimeError):
    """Raised when a record collection cannot be read or is malformed."""

    def __init__(self, message: str, *, location: str) -> None:
        super().__init__(f"{location}: {message}")
        self.location = location


def records_from_payload(payload: object, *, location: str) -> list[RawRecord]:
    """Extract the record list from a decoded JSON payload.

    Accepts a bare array of objects or a Graph-style envelope holding the array
    under ``value``.
    """

    items: object = payload
    if isinstance(payload, Mapping):
        envelope = cast(Mapping[str, object], payload)
        if GRAPH_VALUE_KEY not in envelope:
            raise RecordSourceError(
                f"expected a JSON array or an object with a {GRAPH_VALUE_KEY!r} array",
                location=location,
            )
        items = envelope[GRAPH_VALUE_KEY]
    if not isinstance(items, list):
        raise RecordSourceError("record payload is not a JSON array", location=location)

    records: list[RawRecord] = []
    for index, item in enumerate(cast(list[object], items)):
        if not isinstance(item, Mapping):
            raise RecordSourceError(
                f"item {index} is {type(item).__name__}, expected an object",
                location=location,
            )
        records.append(dict(cast(Mapping[str, object], item)))
    return records


def next_link(payload: object) -> str | None:
    if not isinstance(payload, Mapping):
        return None
    link = cast(Mapping[str, object], payload).get(GRAPH_NEXT_LINK_KEY)
    return link if isinstance(link, str) and link else None
