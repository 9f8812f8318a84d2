"""Exceptions raised by the reconciliation engine."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .issues import Side


class ReconciliationError(RuntimeError):
    """Base class for errors raised by the reconciliation engine."""


class ProjectionError(ReconciliationError):
    """Raised when a filter or mapper fails and the projection is aborted."""

    def __init__(self, message: str, *, index: int, side: Side | None = None) -> None:
        super().__init__(message)
        self.index = index
        self.side = side


class KeyCollisionError(ReconciliationError):
    """Raised when two records share a key and collisions are configured as fatal."""

    def __init__(self, key: str, *, index: int, side: Side | None = None) -> None:
        where = f" in {side} collection" if side is not None else ""
        super().__init__(f"Duplicate key {key!r}{where} at position {index}")
        self.key = key
        self.index = index
        self.side = side
