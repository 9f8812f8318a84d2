"""Structured reporting for records dropped during projection and keying.

Stages never print. Anything they drop or refuse is appended to an
``IssueLog`` which is returned to the caller alongside the result, and each
issue is logged once at WARNING level when it is recorded.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

log = logging.getLogger(__name__)


class Side(StrEnum):
    """Which half of a reconciliation a record came from."""

    SOURCE = "source"
    TARGET = "target"


class IssueKind(StrEnum):
    PROJECTION_ERROR = "projection_error"
    KEY_COLLISION = "key_collision"
    MISSING_KEY = "missing_key"


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationIssue:
    """One reported problem with a single record."""

    kind: IssueKind
    message: str
    index: int
    side: Side | None = None
    key: str | None = None
    record: object = None
    error: BaseException | None = None

    def describe(self) -> str:
        where = f"{self.side} " if self.side is not None else ""
        return f"{self.kind} at {where}position {self.index}: {self.message}"


@dataclass(slots=True)
class IssueLog:
    """Ordered collection of issues reported during one reconciliation run."""

    issues: list[ReconciliationIssue] = field(default_factory=list["ReconciliationIssue"])

    def __iter__(self) -> Iterator[ReconciliationIssue]:
        return iter(self.issues)

    def __len__(self) -> int:
        return len(self.issues)

    def __bool__(self) -> bool:
        return bool(self.issues)

    def report(self, issue: ReconciliationIssue) -> None:
        self.issues.append(issue)
        log.warning("%s", issue.describe())

    def of_kind(self, kind: IssueKind) -> tuple[ReconciliationIssue, ...]:
        return tuple(issue for issue in self.issues if issue.kind is kind)

    def for_side(self, side: Side) -> tuple[ReconciliationIssue, ...]:
        return tuple(issue for issue in self.issues if issue.side is side)
