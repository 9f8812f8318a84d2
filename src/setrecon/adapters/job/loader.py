"""Load and validate TOML job definitions."""

from __future__ import annotations

import tomllib
from logging import getLogger
from pathlib import Path

from pydantic import ValidationError

from .schema import JobSpec, SideSpec

log = getLogger(__name__)

_URL_PREFIXES = ("http://", "https://")


class JobDefinitionError(ValueError):
    """Raised when a job file is missing, unparsable or fails validation."""

    def __init__(self, message: str, *, path: Path) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path


def _format_validation_error(exc: ValidationError) -> str:
    problems = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "(job)"
        problems.append(f"{location}: {error['msg']}")
    return "; ".join(problems)


def _anchored(side: SideSpec, base_dir: Path) -> SideSpec:
    if side.location.lower().startswith(_URL_PREFIXES):
        return side
    location = Path(side.location).expanduser()
    if not location.is_absolute():
        location = base_dir / location
    return side.model_copy(update={"location": str(location)})


def parse_job(data: dict[str, object], *, path: Path) -> JobSpec:
    """Validate decoded job data; relative file locations resolve against ``path``'s folder."""

    try:
        job = JobSpec.model_validate(data)
    except ValidationError as exc:
        raise JobDefinitionError(_format_validation_error(exc), path=path) from exc
    base_dir = path.parent
    return job.model_copy(
        update={
            "source": _anchored(job.source, base_dir),
            "target": _anchored(job.target, base_dir),
        }
    )


def load_job(path: str | Path) -> JobSpec:
    job_path = Path(path)
    try:
        with job_path.open("rb") as handle:
            data = tomllib.load(handle)
    except OSError as exc:
        raise JobDefinitionError(f"cannot read job file ({exc.strerror})", path=job_path) from exc
    except tomllib.TOMLDecodeError as exc:
        raise JobDefinitionError(f"invalid TOML: {exc}", path=job_path) from exc

    job = parse_job(data, path=job_path)
    log.debug("Loaded job %r from %s", job.name, job_path)
    return job
