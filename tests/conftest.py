from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.project_builder import ProjectBuilder


@pytest.fixture
def project_builder(tmp_path: Path) -> ProjectBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    return ProjectBuilder(tmp_path)


class RecordingLogger:
    """Stands in for logging.Logger and keeps every call."""

    def __init__(self) -> None:
        self.records: list[tuple[int, str, dict]] = []
        self.debug_messages: list[str] = []

    def log(self, level, msg, *args, **kwargs):  # type: ignore[no-untyped-def]
        self.records.append((level, msg % args, kwargs.get("extra", {})))

    def debug(self, msg, *args, **kwargs):  # type: ignore[no-untyped-def]
        self.debug_messages.append(msg % args)


@pytest.fixture
def recording_logger() -> RecordingLogger:
    return RecordingLogger()
