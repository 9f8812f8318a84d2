"""Readers for record collections stored in local files."""

from __future__ import annotations

import csv
import io
import json
from logging import getLogger
from pathlib import Path
from typing import TYPE_CHECKING

from .source import RecordSourceError, records_from_payload

if TYPE_CHECKING:
    from collections.abc import Callable

    from .source import RawRecord

log = getLogger(__name__)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise RecordSourceError(f"cannot read file ({exc.strerror})", location=str(path)) from exc


def read_json(path: Path) -> list[RawRecord]:
    try:
        payload = json.loads(_read_text(path))
    except json.JSONDecodeError as exc:
        raise RecordSourceError(f"invalid JSON: {exc}", location=str(path)) from exc
    return records_from_payload(payload, location=str(path))


def read_json_lines(path: Path) -> list[RawRecord]:
    items: list[object] = []
    for line_number, line in enumerate(_read_text(path).splitlines(), start=1):
        if not line.strip():
            continue
        try:
            items.append(json.loads(line))
        except json.JSONDecodeError as exc:
            raise RecordSourceError(
                f"invalid JSON on line {line_number}: {exc}", location=str(path)
            ) from exc
    return records_from_payload(items, location=str(path))


def read_csv(path: Path) -> list[RawRecord]:
    reader = csv.DictReader(io.StringIO(_read_text(path), newline=""))
    if not reader.fieldnames:
        raise RecordSourceError("CSV file has no header row", location=str(path))
    return [dict(row) for row in reader]


_READERS: dict[str, Callable[[Path], list[RawRecord]]] = {
    ".json": read_json,
    ".jsonl": read_json_lines,
    ".ndjson": read_json_lines,
    ".csv": read_csv,
}


def read_records_file(path: Path) -> list[RawRecord]:
    """Read a JSON, JSON-lines or CSV file into a list of records."""

    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        supported = ", ".join(sorted(_READERS))
        raise RecordSourceError(
            f"unsupported file type {path.suffix or '(none)'!r} (supported: {supported})",
            location=str(path),
        )
    records = reader(path)
    log.debug("Read %s record(s) from %s", len(records), path)
    return records
