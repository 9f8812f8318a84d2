from __future__ import annotations

from pathlib import Path

import pytest

from setrecon.adapters.job import (
    JobDefinitionError,
    MissingFieldError,
    build_projection,
    field_mapper,
    load_job,
    parse_job,
    where_predicate,
)

JOB_TOML = """
name = "helpdesk-members"
key = "upn"

[source]
location = "hr.csv"
fields = { upn = "UserPrincipalName", name = "DisplayName" }
where = { Department = ["Helpdesk", "Service Desk"] }

[target]
location = "https://graph.example.test/v1.0/groups/1/members"
fields = { upn = "userPrincipalName", name = "displayName" }
"""


def test_load_job_resolves_relative_locations(tmp_path: Path) -> None:
    path = tmp_path / "jobs" / "helpdesk.toml"
    path.parent.mkdir()
    path.write_text(JOB_TOML, encoding="utf-8")

    job = load_job(path)

    assert job.name == "helpdesk-members"
    assert job.key == "upn"
    assert job.source.location == str(tmp_path / "jobs" / "hr.csv")
    assert job.target.location == "https://graph.example.test/v1.0/groups/1/members"
    assert job.source.where == {"Department": ["Helpdesk", "Service Desk"]}


def test_load_job_reports_invalid_toml(tmp_path: Path) -> None:
    path = tmp_path / "broken.toml"
    path.write_text("name = ", encoding="utf-8")

    with pytest.raises(JobDefinitionError, match="invalid TOML"):
        load_job(path)


def test_load_job_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(JobDefinitionError, match="cannot read job file"):
        load_job(tmp_path / "missing.toml")


def test_parse_job_requires_key_in_projected_fields() -> None:
    data: dict[str, object] = {
        "name": "contacts",
        "key": "mail",
        "source": {"location": "a.json", "fields": {"upn": "UserPrincipalName"}},
        "target": {"location": "b.json"},
    }

    with pytest.raises(JobDefinitionError, match="key 'mail' is not one of the source fields"):
        parse_job(data, path=Path("job.toml"))


def test_parse_job_rejects_unknown_settings() -> None:
    data: dict[str, object] = {
        "name": "contacts",
        "key": "mail",
        "source": {"location": "a.json", "filter": "Enabled"},
        "target": {"location": "b.json"},
    }

    with pytest.raises(JobDefinitionError, match=r"source\.filter"):
        parse_job(data, path=Path("job.toml"))


def test_parse_job_rejects_blank_key() -> None:
    data: dict[str, object] = {
        "name": "contacts",
        "key": "  ",
        "source": {"location": "a.json"},
        "target": {"location": "b.json"},
    }

    with pytest.raises(JobDefinitionError, match="key"):
        parse_job(data, path=Path("job.toml"))


def test_field_mapper_copies_nested_fields() -> None:
    mapper = field_mapper({"mail": "contact.mail", "name": "displayName"})

    projected = mapper({"displayName": "Ann", "contact": {"mail": "ann@x"}})

    assert projected == {"mail": "ann@x", "name": "Ann"}


def test_field_mapper_raises_for_absent_fields() -> None:
    mapper = field_mapper({"mail": "contact.mail"})

    with pytest.raises(MissingFieldError):
        mapper({"contact": None})


def test_where_predicate_matches_case_insensitively() -> None:
    predicate = where_predicate({"Department": ["Helpdesk", "Service Desk"], "Enabled": True})

    assert predicate is not None
    assert predicate({"Department": " helpdesk", "Enabled": "TRUE"})
    assert not predicate({"Department": "Finance", "Enabled": "True"})
    assert not predicate({"Department": "Helpdesk"})


def test_where_predicate_is_none_without_conditions() -> None:
    assert where_predicate({}) is None


def test_build_projection_passes_records_through_without_fields() -> None:
    job = parse_job(
        {
            "name": "passthrough",
            "key": "id",
            "source": {"location": "a.json", "where": {"type": "user"}},
            "target": {"location": "b.json"},
        },
        path=Path("job.toml"),
    )

    projection = build_projection(job.source)

    assert projection.apply([{"id": "1", "type": "User"}, {"id": "2", "type": "group"}]) == [
        {"id": "1", "type": "User"}
    ]
