from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from setrecon.adapters.records import RecordSourceError, load_records

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


def test_load_records_reads_json_array(write_json: Callable[[str, object], Path]) -> None:
    path = write_json("members.json", [{"mail": "a@contoso.com"}, {"mail": "b@contoso.com"}])

    assert load_records(path) == [{"mail": "a@contoso.com"}, {"mail": "b@contoso.com"}]


def test_load_records_unwraps_graph_envelope(write_json: Callable[[str, object], Path]) -> None:
    path = write_json(
        "members.json",
        {"@odata.context": "https://graph.microsoft.com/v1.0/$metadata", "value": [{"id": "1"}]},
    )

    assert load_records(str(path)) == [{"id": "1"}]


def test_load_records_rejects_objects_without_value(
    write_json: Callable[[str, object], Path],
) -> None:
    path = write_json("members.json", {"items": []})

    with pytest.raises(RecordSourceError, match="'value'"):
        load_records(path)


def test_load_records_rejects_non_object_items(write_json: Callable[[str, object], Path]) -> None:
    path = write_json("members.json", [{"id": "1"}, "2"])

    with pytest.raises(RecordSourceError, match="item 1"):
        load_records(path)


def test_load_records_reports_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("[{", encoding="utf-8")

    with pytest.raises(RecordSourceError, match="invalid JSON"):
        load_records(path)


def test_load_records_reads_json_lines(tmp_path: Path) -> None:
    path = tmp_path / "contacts.jsonl"
    path.write_text('{"mail": "a@x"}\n\n{"mail": "b@x"}\n', encoding="utf-8")

    assert load_records(path) == [{"mail": "a@x"}, {"mail": "b@x"}]


def test_load_records_reads_csv_with_bom(tmp_path: Path) -> None:
    path = tmp_path / "hr.csv"
    path.write_text(
        '\ufeffUserPrincipalName,DisplayName\nann@contoso.com,"Smith, Ann"\n',
        encoding="utf-8",
    )

    assert load_records(path) == [
        {"UserPrincipalName": "ann@contoso.com", "DisplayName": "Smith, Ann"}
    ]


def test_load_records_rejects_empty_csv(tmp_path: Path) -> None:
    path = tmp_path / "empty.csv"
    path.write_text("", encoding="utf-8")

    with pytest.raises(RecordSourceError, match="header"):
        load_records(path)


def test_load_records_rejects_unknown_extension(tmp_path: Path) -> None:
    path = tmp_path / "members.xml"
    path.write_text("<members/>", encoding="utf-8")

    with pytest.raises(RecordSourceError, match="unsupported file type"):
        load_records(path)


def test_load_records_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(RecordSourceError, match="cannot read file"):
        load_records(tmp_path / "missing.json")
