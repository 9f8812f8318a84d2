"""Translate job side definitions into engine projections."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, cast

from setrecon.domain.reconciliation import Projection, normalize_key

if TYPE_CHECKING:
    from collections.abc import Callable

    from setrecon.adapters.records import RawRecord

    from .schema import ScalarValue, SideSpec


class MissingFieldError(LookupError):
    """Raised by a field mapper when a mapped raw field is absent."""


_MISSING = object()


def resolve_path(record: object, path: str) -> object:
    """Follow a dotted ``path`` through nested mappings/attributes."""

    current: object = record
    for part in path.split("."):
        if isinstance(current, Mapping):
            mapping = cast(Mapping[str, object], current)
            if part not in mapping:
                return _MISSING
            current = mapping[part]
        elif current is None:
            return _MISSING
        else:
            current = getattr(current, part, _MISSING)
            if current is _MISSING:
                return _MISSING
    return current


def field_mapper(fields: Mapping[str, str]) -> Callable[[RawRecord], RawRecord]:
    """Build a mapper copying raw fields into a new record under projected names.

    A mapped field that is absent raises ``MissingFieldError``; a present field
    holding ``None`` is copied as ``None``.
    """

    def _map(record: RawRecord) -> RawRecord:
        projected: RawRecord = {}
        for name, path in fields.items():
            value = resolve_path(record, path)
            if value is _MISSING:
                raise MissingFieldError(f"record has no field {path!r}")
            projected[name] = value
        return projected

    return _map


def where_predicate(
    where: Mapping[str, ScalarValue | list[ScalarValue]],
) -> Callable[[RawRecord], bool] | None:
    """Build a predicate requiring every field to equal one of its accepted values.

    Comparison is trimmed and case-insensitive. An empty ``where`` yields no
    predicate at all.
    """

    if not where:
        return None

    accepted: dict[str, frozenset[str | None]] = {}
    for path, values in where.items():
        options = values if isinstance(values, list) else [values]
        accepted[path] = frozenset(normalize_key(_scalar_text(option)) for option in options)

    def _matches(record: RawRecord) -> bool:
        for path, options in accepted.items():
            value = resolve_path(record, path)
            if value is _MISSING or normalize_key(_scalar_text(value)) not in options:
                return False
        return True

    return _matches


def _scalar_text(value: object) -> object:
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


def _as_record(record: RawRecord) -> RawRecord:
    return dict(record)


def build_projection(side: SideSpec) -> Projection[RawRecord, RawRecord]:
    mapper = field_mapper(side.fields) if side.fields is not None else _as_record
    return Projection(mapper=mapper, predicate=where_predicate(side.where))
