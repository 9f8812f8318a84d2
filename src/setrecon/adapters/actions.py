"""Batched action sinks usable as ``add_action``/``remove_action``."""

from __future__ import annotations

import json
from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

log = getLogger(__name__)


@dataclass(slots=True)
class JsonLinesWriter:
    """Write the whole batch to ``path`` as JSON lines, replacing earlier content."""

    path: Path

    def __call__(self, records: Sequence[object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            for record in records:
                handle.write(json.dumps(record, default=str, ensure_ascii=False))
                handle.write("\n")
        log.info("Wrote %s record(s) to %s", len(records), self.path)


@dataclass(slots=True)
class LoggingAction:
    """Log the size of a batch without touching any system."""

    label: str

    def __call__(self, records: Sequence[object]) -> None:
        log.info("%s: %s record(s)", self.label, len(records))
