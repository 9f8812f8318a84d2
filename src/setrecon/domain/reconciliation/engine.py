"""Orchestrator for declarative set reconciliation.

A run projects and keys both sides, computes the delta and hands the changed
records to the caller's actions. Each action is called at most once per run,
with the full list, so callers can issue one bulk request instead of one per
record. The engine performs no I/O of its own.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .delta import Delta, compute_delta
from .issues import IssueLog, Side
from .keys import build_keyed_collection
from .policy import ReconciliationOptions
from .project import Projection

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .contracts import DeltaAction, KeyedCollection, KeySelector

log = logging.getLogger(__name__)


@dataclass(slots=True, kw_only=True)
class ReconciliationResult[P]:
    """Outcome of one reconciliation run."""

    delta: Delta[P]
    issues: IssueLog = field(default_factory=IssueLog)
    add_invoked: bool = False
    remove_invoked: bool = False


def _keyed_side[R, P](
    records: Iterable[R] | None,
    projection: Projection[R, P],
    key: KeySelector[P],
    *,
    side: Side,
    options: ReconciliationOptions,
    issues: IssueLog,
) -> KeyedCollection[P]:
    projected = projection.apply(
        records,
        on_error=options.on_projection_error,
        side=side,
        issues=issues,
    )
    return build_keyed_collection(
        projected,
        key,
        on_collision=options.on_collision,
        side=side,
        issues=issues,
    )


def invoke_declarative_reconciliation[R, T, P](
    *,
    source: Iterable[R] | None,
    target: Iterable[T] | None,
    key: KeySelector[P],
    add_action: DeltaAction[P],
    remove_action: DeltaAction[P],
    source_projection: Projection[R, P] | None = None,
    target_projection: Projection[T, P] | None = None,
    options: ReconciliationOptions | None = None,
    issues: IssueLog | None = None,
) -> ReconciliationResult[P]:
    """Bring ``target`` in line with ``source`` through the given actions.

    ``add_action`` receives every projected source record missing from the
    target, ``remove_action`` every projected target record missing from the
    source. Adds are dispatched before removes, and an action is skipped when
    its list is empty. The remove action still runs when the add action raises.
    Exceptions raised by the actions propagate unchanged.
    """

    effective_options = options or ReconciliationOptions()
    issue_log = issues if issues is not None else IssueLog()

    source_keyed = _keyed_side(
        source,
        source_projection or Projection.identity(),
        key,
        side=Side.SOURCE,
        options=effective_options,
        issues=issue_log,
    )
    target_keyed = _keyed_side(
        target,
        target_projection or Projection.identity(),
        key,
        side=Side.TARGET,
        options=effective_options,
        issues=issue_log,
    )
    delta = compute_delta(source_keyed, target_keyed)
    log.info(
        "Reconciliation delta: source=%s, target=%s, adds=%s, removes=%s, issues=%s",
        len(source_keyed),
        len(target_keyed),
        len(delta.adds_by_key),
        len(delta.removes_by_key),
        len(issue_log),
    )

    result = ReconciliationResult(delta=delta, issues=issue_log)
    try:
        if delta.adds_by_key:
            result.add_invoked = True
            add_action(delta.adds)
    finally:
        # a failed add does not cancel the removes; its exception still propagates
        if delta.removes_by_key:
            result.remove_invoked = True
            remove_action(delta.removes)
    return result


@dataclass(slots=True, kw_only=True)
class ReconciliationEngine[P]:
    """Key, actions and policies bundled for repeated reconciliation runs."""

    key: KeySelector[P]
    add_action: DeltaAction[P]
    remove_action: DeltaAction[P]
    options: ReconciliationOptions = field(default_factory=ReconciliationOptions)

    def reconcile[R, T](
        self,
        source: Iterable[R] | None,
        target: Iterable[T] | None,
        *,
        source_projection: Projection[R, P] | None = None,
        target_projection: Projection[T, P] | None = None,
        issues: IssueLog | None = None,
    ) -> ReconciliationResult[P]:
        return invoke_declarative_reconciliation(
            source=source,
            target=target,
            key=self.key,
            add_action=self.add_action,
            remove_action=self.remove_action,
            source_projection=source_projection,
            target_projection=target_projection,
            options=self.options,
            issues=issues,
        )
