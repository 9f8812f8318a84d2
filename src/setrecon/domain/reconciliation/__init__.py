"""Declarative set reconciliation.

Flow for one run:
1) project each side (filter, then map) into keyable records
2) index each side by its normalized key, reporting collisions and missing keys
3) compute adds (source only) and removes (target only)
4) dispatch each non-empty list to its action exactly once
"""

from __future__ import annotations

from .delta import Delta, compute_delta
from .engine import ReconciliationEngine, ReconciliationResult, invoke_declarative_reconciliation
from .errors import KeyCollisionError, ProjectionError, ReconciliationError
from .issues import IssueKind, IssueLog, ReconciliationIssue, Side
from .keys import build_keyed_collection, key_function, normalize_key, read_field
from .policy import CollisionPolicy, ProjectionErrorPolicy, ReconciliationOptions
from .project import Projection, select_projected

__all__ = [
    "CollisionPolicy",
    "Delta",
    "IssueKind",
    "IssueLog",
    "KeyCollisionError",
    "Projection",
    "ProjectionError",
    "ProjectionErrorPolicy",
    "ReconciliationEngine",
    "ReconciliationError",
    "ReconciliationIssue",
    "ReconciliationOptions",
    "ReconciliationResult",
    "Side",
    "build_keyed_collection",
    "compute_delta",
    "invoke_declarative_reconciliation",
    "key_function",
    "normalize_key",
    "read_field",
    "select_projected",
]
