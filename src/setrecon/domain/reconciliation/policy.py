"""Error policies for the projection and keying stages."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ProjectionErrorPolicy(StrEnum):
    """What to do when a filter or mapper raises for one record."""

    ABORT = "abort"
    SKIP = "skip"


class CollisionPolicy(StrEnum):
    """What to do when two records of one collection normalize to the same key."""

    REPORT = "report"
    RAISE = "raise"


@dataclass(frozen=True, slots=True, kw_only=True)
class ReconciliationOptions:
    on_projection_error: ProjectionErrorPolicy = ProjectionErrorPolicy.ABORT
    on_collision: CollisionPolicy = CollisionPolicy.REPORT
