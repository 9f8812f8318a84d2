"""Keying stage: turn a projected collection into a key → record mapping."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING

from .errors import KeyCollisionError
from .issues import IssueKind, IssueLog, ReconciliationIssue
from .policy import CollisionPolicy

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from .contracts import KeyedCollection, KeySelector
    from .issues import Side

log = logging.getLogger(__name__)


def normalize_key(value: object) -> str | None:
    """Trim and case-fold ``value``; ``None`` and blank values have no key."""

    if value is None:
        return None
    normalized = str(value).strip().casefold()
    return normalized or None


def read_field(record: object, name: str) -> object:
    """Look ``name`` up as a mapping item or, failing that, an attribute."""

    if isinstance(record, Mapping):
        return record.get(name)  # pyright: ignore[reportUnknownMemberType]
    return getattr(record, name, None)


def key_function[P](key: KeySelector[P]) -> Callable[[P], str | None]:
    """Return a callable producing the normalized key of a record."""

    if isinstance(key, str):
        field_name = key
        return lambda record: normalize_key(read_field(record, field_name))
    selector = key
    return lambda record: normalize_key(selector(record))


def build_keyed_collection[P](
    records: Iterable[P] | None,
    key: KeySelector[P],
    *,
    on_collision: CollisionPolicy = CollisionPolicy.REPORT,
    side: Side | None = None,
    issues: IssueLog | None = None,
) -> KeyedCollection[P]:
    """Index ``records`` by their normalized key.

    Records without a usable key are reported and excluded. When two records
    normalize to the same key the first one is kept; the later one is reported
    and dropped, or ``KeyCollisionError`` is raised under
    ``CollisionPolicy.RAISE``.
    """

    keyed: KeyedCollection[P] = {}
    if records is None:
        return keyed

    key_of = key_function(key)
    issue_log = issues if issues is not None else IssueLog()
    key_label = key if isinstance(key, str) else getattr(key, "__name__", "key selector")
    for index, record in enumerate(records):
        record_key = key_of(record)
        if record_key is None:
            issue_log.report(
                ReconciliationIssue(
                    kind=IssueKind.MISSING_KEY,
                    message=f"record has no value for {key_label!r}",
                    index=index,
                    side=side,
                    record=record,
                )
            )
            continue
        if record_key in keyed:
            if on_collision is CollisionPolicy.RAISE:
                raise KeyCollisionError(record_key, index=index, side=side)
            issue_log.report(
                ReconciliationIssue(
                    kind=IssueKind.KEY_COLLISION,
                    message=f"duplicate key {record_key!r}, keeping the first record",
                    index=index,
                    side=side,
                    key=record_key,
                    record=record,
                )
            )
            continue
        keyed[record_key] = record

    log.debug("Keyed %s record(s) for side=%s", len(keyed), side)
    return keyed
