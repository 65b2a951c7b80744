from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from aptintel.domain.aliases import AliasRegistry

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


@pytest.fixture
def registry() -> AliasRegistry:
    return AliasRegistry()


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "APTINTEL_SOURCE_PRIORITY",
        "APTINTEL_INFER_FIRST_SEEN",
        "APTINTEL_MAX_WORKERS",
        "APTINTEL_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def write_json_file(tmp_path: Path) -> Callable[[str, object], Path]:
    def _write(name: str, payload: object) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    return _write
