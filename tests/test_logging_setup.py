# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from reactive_tasks.logging_setup import _ConsoleNoiseFilter, level_from_name, setup_logging


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_noise_filter_keeps_package_logs() -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("reactive_tasks.tasks.multi", logging.DEBUG))
    assert f.filter(_record("reactive_tasks", logging.INFO))


def test_noise_filter_limits_third_party() -> None:
    f = _ConsoleNoiseFilter()
    assert not f.filter(_record("asyncio", logging.INFO))
    assert f.filter(_record("asyncio", logging.WARNING))
    assert not f.filter(_record("py.warnings", logging.WARNING))
    assert not f.filter(_record("somelib", logging.WARNING))
    assert f.filter(_record("somelib", logging.ERROR))


def test_level_from_name() -> None:
    assert level_from_name("debug") == logging.DEBUG
    assert level_from_name("WARNING") == logging.WARNING
    assert level_from_name("nonsense") == logging.INFO


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    before, level = set(root.handlers), root.level
    yield
    for h in list(root.handlers):
        if h not in before:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    logging.captureWarnings(False)


def test_setup_logging_writes_file(tmp_path: Path, restore_root_logging) -> None:
    setup_logging(log_dir=tmp_path, log_to_file=True)
    logging.getLogger("reactive_tasks.test").debug("hello file")
    for h in logging.getLogger().handlers:
        h.flush()

    assert "hello file" in (tmp_path / "reactive_tasks.log").read_text("utf-8")


def test_setup_logging_without_file(tmp_path: Path, restore_root_logging) -> None:
    setup_logging(log_dir=tmp_path / "unused", log_to_file=False)

    assert not (tmp_path / "unused").exists()
    assert len(logging.getLogger().handlers) == 1
