"""Declarative job files describing one source/target reconciliation."""

from __future__ import annotations

from .loader import JobDefinitionError, load_job, parse_job
from .schema import JobSpec, SideSpec
from .translator import MissingFieldError, build_projection, field_mapper, where_predicate

__all__ = [
    "JobDefinitionError",
    "JobSpec",
    "MissingFieldError",
    "SideSpec",
    "build_projection",
    "field_mapper",
    "load_job",
    "parse_job",
    "where_predicate",
]
