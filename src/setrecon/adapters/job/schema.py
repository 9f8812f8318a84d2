"""Pydantic models describing a TOML reconciliation job."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

type ScalarValue = str | int | float | bool


def _strip_required(value: str) -> str:
    stripped = value.strip()
    if not stripped:
        raise ValueError("must not be blank")
    return stripped


class JobBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class SideSpec(JobBaseModel):
    """Where one side's records come from and how they are projected."""

    location: str
    fields: dict[str, str] | None = None
    where: dict[str, ScalarValue | list[ScalarValue]] = Field(default_factory=dict)

    _check_location = field_validator("location")(_strip_required)

    @field_validator("fields")
    @classmethod
    def _check_fields(cls, value: dict[str, str] | None) -> dict[str, str] | None:
        if value is None:
            return None
        if not value:
            raise ValueError("fields must map at least one projected field")
        return {_strip_required(name): _strip_required(path) for name, path in value.items()}


class JobSpec(JobBaseModel):
    """A declarative reconciliation between a source and a target collection."""

    name: str
    key: str
    source: SideSpec
    target: SideSpec

    _check_name = field_validator("name")(_strip_required)
    _check_key = field_validator("key")(_strip_required)

    @model_validator(mode="after")
    def _key_is_projected(self) -> JobSpec:
        for side_name, side in (("source", self.source), ("target", self.target)):
            if side.fields is not None and self.key not in side.fields:
                raise ValueError(f"key {self.key!r} is not one of the {side_name} fields")
        return self
