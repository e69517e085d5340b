# src/reactive_tasks/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class TaskStatus(StrEnum):
    """
    Lifecycle status of one tracked operation.

    IDLE -> RUNNING -> SUCCEEDED | FAILED -> RUNNING -> ...
    There is no terminal status.
    """

    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class OperationFailure(Exception):
    """
    The only failure kind a controller reports.

    Wraps whatever the producer raised. `message` is always a non-empty,
    human-readable string; `cause` keeps the original exception.
    """

    def __init__(self, message: str, *, cause: BaseException | None = None, key: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.key = key

    @classmethod
    def from_exception(cls, exc: BaseException, *, key: str | None = None) -> OperationFailure:
        if isinstance(exc, OperationFailure):
            failure = cls(exc.message, cause=exc.cause or exc, key=key)
        else:
            message = str(exc).strip() or type(exc).__name__
            failure = cls(message, cause=exc, key=key)
        failure.__cause__ = failure.cause
        return failure

    def __repr__(self) -> str:
        return f"OperationFailure({self.message!r}, key={self.key!r})"


class UnknownTaskKey(KeyError):
    """Raised when a key is not part of a controller's registry."""

    def __init__(self, key: Any) -> None:
        super().__init__(key)
        self.key = key

    def __str__(self) -> str:
        return f"Unknown task key: {self.key!r}"


@dataclass(slots=True)
class TaskSlot(Generic[T]):
    """
    Mutable state record of a single tracked operation.

    Notes:
    - `data` and `error` are never both set.
    - `start()` keeps the previous cycle's data/error until the new cycle
      finishes, so readers see the last good value during a refresh.
    """

    status: TaskStatus = TaskStatus.IDLE
    data: T | None = None
    error: OperationFailure | None = None

    @property
    def busy(self) -> bool:
        return self.status == TaskStatus.RUNNING

    @property
    def has_error(self) -> bool:
        return self.status == TaskStatus.FAILED

    @property
    def data_ready(self) -> bool:
        return self.status == TaskStatus.SUCCEEDED

    def start(self) -> None:
        self.status = TaskStatus.RUNNING

    def succeed(self, value: T) -> None:
        self.data = value
        self.error = None
        self.status = TaskStatus.SUCCEEDED

    def fail(self, failure: OperationFailure) -> None:
        self.data = None
        self.error = failure
        self.status = TaskStatus.FAILED

    def clear_data(self) -> None:
        """Drop stored data. A SUCCEEDED slot goes back to IDLE; RUNNING and FAILED are kept."""
        self.data = None
        if self.status == TaskStatus.SUCCEEDED:
            self.status = TaskStatus.IDLE

    def copy(self) -> TaskSlot[T]:
        return TaskSlot(status=self.status, data=self.data, error=self.error)
