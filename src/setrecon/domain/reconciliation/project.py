"""Projection stage: filter and map a raw collection into keyable records."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .errors import ProjectionError
from .issues import IssueKind, IssueLog, ReconciliationIssue
from .policy import ProjectionErrorPolicy

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .contracts import RecordMapper, RecordPredicate
    from .issues import Side

log = logging.getLogger(__name__)


def _accept_all(_record: object) -> bool:
    return True


def _identity[T](record: T) -> T:
    return record


@dataclass(frozen=True, slots=True)
class Projection[R, P]:
    """Filter + mapper pair applied to one side of a reconciliation."""

    mapper: RecordMapper[R, P]
    predicate: RecordPredicate[R] | None = None

    @classmethod
    def identity(cls) -> Projection[R, R]:
        return Projection(mapper=_identity)

    def apply(
        self,
        records: Iterable[R] | None,
        *,
        on_error: ProjectionErrorPolicy = ProjectionErrorPolicy.ABORT,
        side: Side | None = None,
        issues: IssueLog | None = None,
    ) -> list[P]:
        return select_projected(
            records,
            self.mapper,
            predicate=self.predicate,
            on_error=on_error,
            side=side,
            issues=issues,
        )


def select_projected[R, P](
    records: Iterable[R] | None,
    mapper: RecordMapper[R, P],
    *,
    predicate: RecordPredicate[R] | None = None,
    on_error: ProjectionErrorPolicy = ProjectionErrorPolicy.ABORT,
    side: Side | None = None,
    issues: IssueLog | None = None,
) -> list[P]:
    """Return ``mapper(record)`` for every record accepted by ``predicate``.

    Input order is preserved. ``None`` input yields an empty list. A predicate
    or mapper that raises either aborts the whole projection with
    ``ProjectionError`` or, under ``ProjectionErrorPolicy.SKIP``, is reported to
    ``issues`` and the record is left out.
    """

    if records is None:
        return []

    accept = predicate or _accept_all
    issue_log = issues if issues is not None else IssueLog()
    projected: list[P] = []
    for index, record in enumerate(records):
        try:
            if not accept(record):
                continue
            projected.append(mapper(record))
        except Exception as exc:
            message = f"projection failed: {type(exc).__name__}: {exc}"
            if on_error is ProjectionErrorPolicy.ABORT:
                where = f"{side} " if side is not None else ""
                raise ProjectionError(
                    f"Aborting {where}projection at position {index}: {message}",
                    index=index,
                    side=side,
                ) from exc
            issue_log.report(
                ReconciliationIssue(
                    kind=IssueKind.PROJECTION_ERROR,
                    message=message,
                    index=index,
                    side=side,
                    record=record,
                    error=exc,
                )
            )

    log.debug("Projected %s record(s) for side=%s", len(projected), side)
    return projected
