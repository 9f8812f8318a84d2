from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from setrecon.domain.reconciliation import IssueLog

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture
def issue_log() -> IssueLog:
    return IssueLog()


@pytest.fixture
def write_json(tmp_path: Path) -> Callable[[str, object], Path]:
    def _write(name: str, payload: object) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def _clear_setrecon_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "SETRECON_ON_PROJECTION_ERROR",
        "SETRECON_ON_KEY_COLLISION",
        "SETRECON_LOG_LEVEL",
        "SETRECON_HTTP_TIMEOUT",
        "SETRECON_HTTP_RETRIES",
        "SETRECON_HTTP_TOKEN",
    ):
        monkeypatch.delenv(name, raising=False)
