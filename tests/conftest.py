from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import pytest


TESTS_ROOT = Path(__file__).resolve().parent


class RecordingEmitter:
    """Diagnostic emitter keeping everything it receives."""

    debug_enabled = False

    def __init__(self) -> None:
        self.warnings: list[str] = []
        self.errors: list[str] = []
        self.events: list[tuple[str, dict[str, Any]]] = []

    def warning(self, message: str, exc: BaseException | None = None) -> None:
        self.warnings.append(message)

    def error(self, message: str, exc: BaseException | None = None) -> None:
        self.errors.append(message)

    def event(self, name: str, payload: Mapping[str, Any]) -> None:
        self.events.append((name, dict(payload)))

    def named(self, name: str) -> list[dict[str, Any]]:
        return [payload for event, payload in self.events if event == name]


@pytest.fixture
def emitter() -> RecordingEmitter:
    return RecordingEmitter()


@pytest.fixture
def data_dir() -> Path:
    return TESTS_ROOT / "data"


@pytest.fixture
def templates_dir() -> Path:
    return TESTS_ROOT / "templates"


@pytest.fixture
def alt_templates_dir() -> Path:
    return TESTS_ROOT / "templates-alt"


@pytest.fixture
def load_data(data_dir: Path):
    def _load(name: str) -> str:
        return (data_dir / name).read_text(encoding="utf-8")

    return _load
