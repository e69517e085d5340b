# src/reactive_tasks/core/ports.py

from __future__ import annotations

"""
Ports (callable shapes) used by the controllers.

Controllers depend on these Protocols instead of concrete consumers.
A UI binding, a console printer or a test fake can all subscribe the same way.
"""

from typing import TYPE_CHECKING, Any, Awaitable, Protocol, TypeVar

if TYPE_CHECKING:
    from ..tasks.task_models import OperationFailure

T_co = TypeVar("T_co", covariant=True)
T_contra = TypeVar("T_contra", contravariant=True)


class Producer(Protocol[T_co]):
    """
    Zero-argument operation tracked by a controller.

    Usually an `async def` function. Returning a plain value is accepted too;
    raising (before or after the first await) is reported as a failure.
    """

    def __call__(self) -> Awaitable[T_co] | T_co: ...


class Listener(Protocol):
    """Change callback. Reads state back from the controller."""

    def __call__(self) -> None: ...


class ErrorListener(Protocol):
    """Error callback: (key, failure). key is None for single controllers."""

    def __call__(self, key: str | None, failure: OperationFailure) -> None: ...


class DataHook(Protocol[T_contra]):
    def __call__(self, data: T_contra) -> None: ...


class ErrorHook(Protocol):
    def __call__(self, failure: OperationFailure) -> None: ...


class KeyedDataHook(Protocol):
    def __call__(self, key: str, data: Any) -> None: ...


class KeyedErrorHook(Protocol):
    def __call__(self, key: str, failure: OperationFailure) -> None: ...
