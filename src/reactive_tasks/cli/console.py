# src/reactive_tasks/cli/console.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import Any

from ..tasks.multi import MultiTaskController
from ..tasks.single import SingleTaskController
from ..tasks.task_models import OperationFailure

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def describe_single(ctrl: SingleTaskController[Any]) -> str:
    if ctrl.has_error and ctrl.error is not None:
        return f"{ctrl.name}: {ctrl.status.value} error={ctrl.error.message!r}"
    return f"{ctrl.name}: {ctrl.status.value} data={ctrl.data!r}"


def describe_multi(ctrl: MultiTaskController) -> str:
    parts = []
    for key in ctrl.keys:
        err = ctrl.get_error(key)
        if err is not None:
            parts.append(f"{key}={ctrl.status_of(key).value}({err.message!r})")
        else:
            parts.append(f"{key}={ctrl.status_of(key).value}({ctrl.data_map[key]!r})")
    return f"{ctrl.name}: " + " ".join(parts)


class ConsoleStatePrinter:
    """
    Listener that prints one timestamped line per change notification.

    Stands in for a UI binding: it only reads state back from the controller.
    """

    def __init__(self, describe: Callable[[], str], write: Callable[[str], None] = print) -> None:
        self._describe = describe
        self._write = write
        self.lines: list[str] = []

    def __call__(self) -> None:
        line = f"[{_ts_local()}] {self._describe()}"
        self.lines.append(line)
        self._write(line)

    @classmethod
    def for_single(cls, ctrl: SingleTaskController[Any], write: Callable[[str], None] = print) -> ConsoleStatePrinter:
        return cls(lambda: describe_single(ctrl), write)

    @classmethod
    def for_multi(cls, ctrl: MultiTaskController, write: Callable[[str], None] = print) -> ConsoleStatePrinter:
        return cls(lambda: describe_multi(ctrl), write)


def print_error(key: str | None, failure: OperationFailure) -> None:
    print(f"[{_ts_local()}] [ERROR] {key or '-'}: {failure.message}")
