# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from reactive_tasks.config import Settings

from .fakes import RecordingHooks, RecordingListener


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings built explicitly rather than from the real environment,
    to keep unit tests isolated and deterministic.
    """
    return Settings(
        app_name="reactive-tasks-test",
        log_level="DEBUG",
        log_dir=tmp_path / "logs",
        log_to_file=False,
        demo_failing_delay_ms=0,
        demo_succeeding_delay_ms=0,
    )


@pytest.fixture()
def hooks() -> RecordingHooks:
    return RecordingHooks()


@pytest.fixture()
def listener() -> RecordingListener:
    return RecordingListener()
