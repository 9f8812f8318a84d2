"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from logging import getLogger
from typing import TYPE_CHECKING

from setrecon.adapters.actions import LoggingAction
from setrecon.adapters.job import build_projection
from setrecon.adapters.records import RawRecord, load_records
from setrecon.config import get_reconciliation_options
from setrecon.domain.reconciliation import invoke_declarative_reconciliation

if TYPE_CHECKING:
    from setrecon.adapters.job import JobSpec
    from setrecon.domain.reconciliation import (
        ReconciliationOptions,
        ReconciliationResult,
    )
    from setrecon.domain.reconciliation.contracts import DeltaAction

RecordLoader = Callable[[str], Sequence[RawRecord]]


log = getLogger(__name__)


def run_job(
    job: JobSpec,
    *,
    loader: RecordLoader = load_records,
    add_action: DeltaAction[RawRecord] | None = None,
    remove_action: DeltaAction[RawRecord] | None = None,
    options: ReconciliationOptions | None = None,
) -> ReconciliationResult[RawRecord]:
    """Load both sides of ``job`` and reconcile them through the given actions."""

    effective_options = options or get_reconciliation_options()
    log.info(
        "Starting job %r: source=%s, target=%s, key=%s",
        job.name,
        job.source.location,
        job.target.location,
        job.key,
    )

    source_records = loader(job.source.location)
    target_records = loader(job.target.location)

    result = invoke_declarative_reconciliation(
        source=source_records,
        target=target_records,
        key=job.key,
        add_action=add_action or LoggingAction(f"{job.name} adds"),
        remove_action=remove_action or LoggingAction(f"{job.name} removes"),
        source_projection=build_projection(job.source),
        target_projection=build_projection(job.target),
        options=effective_options,
    )

    log.info(
        f"Finished job {job.name!r}: adds={len(result.delta.adds_by_key)}, "
        f"removes={len(result.delta.removes_by_key)}, issues={len(result.issues)}"
    )
    return result


def build_report(job: JobSpec, result: ReconciliationResult[RawRecord]) -> dict[str, object]:
    """Summarise a job run as a JSON-serialisable mapping."""

    return {
        "job": job.name,
        "key": job.key,
        "adds": [
            {"key": key, "record": record} for key, record in result.delta.adds_by_key.items()
        ],
        "removes": [
            {"key": key, "record": record} for key, record in result.delta.removes_by_key.items()
        ],
        "issues": [
            {
                "kind": issue.kind.value,
                "side": issue.side.value if issue.side is not None else None,
                "index": issue.index,
                "key": issue.key,
                "message": issue.message,
            }
            for issue in result.issues
        ],
    }
