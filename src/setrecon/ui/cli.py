from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from setrecon.adapters.actions import JsonLinesWriter, LoggingAction
from setrecon.adapters.job import JobDefinitionError, load_job
from setrecon.app import build_report, run_job
from setrecon.config import (
    ConfigurationError,
    configure_logging,
    get_log_level,
    get_reconciliation_options,
)
from setrecon.domain.reconciliation import (
    CollisionPolicy,
    ProjectionErrorPolicy,
    ReconciliationOptions,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

    from setrecon.adapters.job import JobSpec

log = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile a target collection against a source")
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    validate = subparsers.add_parser("validate", help="Check a job file without loading records")
    validate.add_argument("job", type=Path, help="Path to the TOML job file")

    plan = subparsers.add_parser("plan", help="Compute adds and removes for a job")
    plan.add_argument("job", type=Path, help="Path to the TOML job file")
    plan.add_argument(
        "--adds-out",
        type=Path,
        help="Write records to add as JSON lines to this file",
    )
    plan.add_argument(
        "--removes-out",
        type=Path,
        help="Write records to remove as JSON lines to this file",
    )
    plan.add_argument(
        "--report",
        type=Path,
        help="Write the JSON report to this file instead of stdout",
    )
    plan.add_argument(
        "--on-projection-error",
        choices=[policy.value for policy in ProjectionErrorPolicy],
        help="Abort or skip when a record cannot be projected (defaults to config)",
    )
    plan.add_argument(
        "--on-key-collision",
        choices=[policy.value for policy in CollisionPolicy],
        help="Report or raise on duplicate keys (defaults to config)",
    )

    return parser.parse_args(list(argv))


def _resolve_options(args: argparse.Namespace) -> ReconciliationOptions:
    defaults = get_reconciliation_options()
    return ReconciliationOptions(
        on_projection_error=(
            ProjectionErrorPolicy(args.on_projection_error)
            if args.on_projection_error
            else defaults.on_projection_error
        ),
        on_collision=(
            CollisionPolicy(args.on_key_collision)
            if args.on_key_collision
            else defaults.on_collision
        ),
    )


def _plan(job: JobSpec, args: argparse.Namespace, options: ReconciliationOptions) -> None:
    add_action = (
        JsonLinesWriter(args.adds_out) if args.adds_out else LoggingAction(f"{job.name} adds")
    )
    remove_action = (
        JsonLinesWriter(args.removes_out)
        if args.removes_out
        else LoggingAction(f"{job.name} removes")
    )
    result = run_job(job, add_action=add_action, remove_action=remove_action, options=options)

    rendered = json.dumps(build_report(job, result), default=str, indent=2, ensure_ascii=False)
    if args.report:
        args.report.parent.mkdir(parents=True, exist_ok=True)
        args.report.write_text(rendered + "\n", encoding="utf-8")
        log.info("Report written to %s", args.report)
    else:
        sys.stdout.write(rendered + "\n")


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    try:
        parsed_args = _parse_args(args_list)
        level = logging.DEBUG if parsed_args.verbose else get_log_level()
        configure_logging(level=level)
        job = load_job(parsed_args.job)
        options = _resolve_options(parsed_args) if parsed_args.command == "plan" else None
    except (ConfigurationError, JobDefinitionError):
        configure_logging()
        log.exception("CLI validation error")
        sys.exit(2)

    try:
        if parsed_args.command == "validate":
            log.info("Job %r is valid (key=%s)", job.name, job.key)
        elif parsed_args.command == "plan" and options is not None:
            _plan(job, parsed_args, options)
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
