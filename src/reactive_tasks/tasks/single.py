# src/reactive_tasks/tasks/single.py

from __future__ import annotations

"""
Single-operation controller.

Wraps exactly one producer and one TaskSlot:
- run_operation() flips the slot to RUNNING and notifies before returning,
- the returned future resolves once the producer succeeded or failed,
- success stores data and calls on_data; failure stores an OperationFailure,
  calls on_error and emits the channel's error signal.

Overlapping runs are not de-duplicated: whichever finishes last wins.
"""

import asyncio
import logging
from collections.abc import Awaitable
from typing import Generic, TypeVar

from ..core.ports import DataHook, ErrorHook, Producer
from .controller_base import ControllerBase, resolve_producer
from .task_models import OperationFailure, TaskSlot, TaskStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SingleTaskController(ControllerBase, Generic[T]):
    def __init__(
        self,
        producer: Producer[T],
        *,
        on_data: DataHook[T] | None = None,
        on_error: ErrorHook | None = None,
        name: str = "",
    ) -> None:
        if not callable(producer):
            raise TypeError(f"producer must be callable, got {type(producer).__name__}")
        super().__init__(name=name)
        self._producer = producer
        self._on_data = on_data
        self._on_error = on_error
        self._slot: TaskSlot[T] = TaskSlot()
        self._last_run: asyncio.Task[T | None] | None = None

    # ---- read accessors ----

    @property
    def status(self) -> TaskStatus:
        return self._slot.status

    @property
    def data(self) -> T | None:
        return self._slot.data

    @property
    def error(self) -> OperationFailure | None:
        return self._slot.error

    @property
    def busy(self) -> bool:
        return self._slot.busy

    @property
    def has_error(self) -> bool:
        return self._slot.has_error

    @property
    def data_ready(self) -> bool:
        return self._slot.data_ready

    @property
    def slot(self) -> TaskSlot[T]:
        """Copy of the current slot; mutating it does not affect the controller."""
        return self._slot.copy()

    # ---- hooks (override in subclasses or inject at construction) ----

    def on_data(self, data: T) -> None:
        if self._on_data is not None:
            self._on_data(data)

    def on_error(self, failure: OperationFailure) -> None:
        if self._on_error is not None:
            self._on_error(failure)

    # ---- operations ----

    def run_operation(self) -> asyncio.Future[T | None]:
        """
        Start the producer.

        The slot is RUNNING (and listeners notified) when this returns.
        Await the returned future to wait for the outcome; it resolves to the data,
        or None if the producer failed. Cancelling it (e.g. a wait_for timeout)
        only stops the wait, never the producer. Needs a running event loop.
        """
        loop = asyncio.get_running_loop()
        self._source_stale = False
        self._slot.start()
        logger.debug("%s: run started", self.name)
        self._channel.notify_changed()
        self._last_run = self._spawn(loop, self._run_once())
        return asyncio.shield(self._last_run)

    def notify_source_changed(self, clear_old_data: bool = False) -> None:
        """
        Mark the producer's inputs as changed. Does not run and does not notify.

        clear_old_data=True also drops the stored data right away.
        """
        self._mark_stale()
        if clear_old_data:
            self._slot.clear_data()

    def ensure_data(self) -> Awaitable[T | None]:
        """
        Run only if there is no fresh successful result.

        Re-runs when the controller never ran, the last run failed, or the source
        was marked changed. Otherwise resolves immediately to the current data.
        """
        loop = asyncio.get_running_loop()
        if self._slot.data_ready and not self._source_stale:
            done: asyncio.Future[T | None] = loop.create_future()
            done.set_result(self._slot.data)
            return done
        if self._slot.busy and not self._source_stale and self._last_run is not None:
            return asyncio.shield(self._last_run)
        return self.run_operation()

    async def _run_once(self) -> T | None:
        try:
            value = await resolve_producer(self._producer)
        except Exception as exc:
            failure = OperationFailure.from_exception(exc)
            self._slot.fail(failure)
            logger.warning("%s: operation failed: %s", self.name, failure.message)
            self._call_hook(self.on_error, failure)
            self._channel.notify_error(None, failure)
            self._channel.notify_changed()
            return None

        self._slot.succeed(value)
        logger.debug("%s: operation succeeded", self.name)
        self._call_hook(self.on_data, value)
        self._channel.notify_changed()
        return value

    def __repr__(self) -> str:
        return f"<SingleTaskController name={self.name!r} status={self._slot.status.value}>"
