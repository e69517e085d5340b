# src/reactive_tasks/tasks/multi.py

from __future__ import annotations

"""
Multi-operation controller.

A fixed registry key -> producer, one TaskSlot per key.

run_operations():
- moves every key to RUNNING and notifies once for the whole batch,
- starts all producers concurrently, in registry order,
- settles each key on its own (own notification, own hooks),
- resolves once the slowest key has settled, whatever the outcomes.

A failing key never cancels or delays its siblings.
"""

import asyncio
import logging
from collections.abc import Awaitable, Iterable, Mapping
from types import MappingProxyType
from typing import Any

from ..core.ports import KeyedDataHook, KeyedErrorHook, Producer
from .controller_base import ControllerBase, resolve_producer
from .task_models import OperationFailure, TaskSlot, TaskStatus, UnknownTaskKey

logger = logging.getLogger(__name__)


class MultiTaskController(ControllerBase):
    def __init__(
        self,
        producers: Mapping[str, Producer[Any]],
        *,
        on_data: KeyedDataHook | None = None,
        on_error: KeyedErrorHook | None = None,
        name: str = "",
    ) -> None:
        if not producers:
            raise ValueError("producers must contain at least one key")
        for key, producer in producers.items():
            if not callable(producer):
                raise TypeError(f"producer for key {key!r} must be callable, got {type(producer).__name__}")

        super().__init__(name=name)
        self._producers: dict[str, Producer[Any]] = dict(producers)
        self._slots: dict[str, TaskSlot[Any]] = {key: TaskSlot() for key in self._producers}
        self._on_data = on_data
        self._on_error = on_error

    def _slot_for(self, key: str) -> TaskSlot[Any]:
        try:
            return self._slots[key]
        except KeyError:
            raise UnknownTaskKey(key) from None

    # ---- per-key read accessors ----

    @property
    def keys(self) -> tuple[str, ...]:
        return tuple(self._slots)

    def busy(self, key: str) -> bool:
        return self._slot_for(key).busy

    def has_error(self, key: str) -> bool:
        return self._slot_for(key).has_error

    def get_error(self, key: str) -> OperationFailure | None:
        slot = self._slot_for(key)
        return slot.error if slot.has_error else None

    def data_ready(self, key: str) -> bool:
        return self._slot_for(key).data_ready

    def status_of(self, key: str) -> TaskStatus:
        return self._slot_for(key).status

    def slot(self, key: str) -> TaskSlot[Any]:
        """Copy of the slot for key."""
        return self._slot_for(key).copy()

    # ---- aggregate read accessors ----

    @property
    def data_map(self) -> Mapping[str, Any]:
        """Read-only snapshot: key -> latest successful data (None if none)."""
        return MappingProxyType({key: slot.data for key, slot in self._slots.items()})

    @property
    def errors(self) -> Mapping[str, OperationFailure]:
        return MappingProxyType(
            {key: slot.error for key, slot in self._slots.items() if slot.has_error and slot.error is not None}
        )

    @property
    def any_busy(self) -> bool:
        return any(slot.busy for slot in self._slots.values())

    @property
    def any_error(self) -> bool:
        return any(slot.has_error for slot in self._slots.values())

    # ---- hooks (override in subclasses or inject at construction) ----

    def on_data(self, key: str, data: Any) -> None:
        if self._on_data is not None:
            self._on_data(key, data)

    def on_error(self, key: str, failure: OperationFailure) -> None:
        if self._on_error is not None:
            self._on_error(key, failure)

    # ---- operations ----

    def run_operations(self) -> asyncio.Future[Mapping[str, Any]]:
        """
        Start every producer.

        All keys are RUNNING (and listeners notified) when this returns.
        The returned future resolves to a data_map snapshot after every key settled.
        Cancelling it only stops the wait; the producers keep running.
        Needs a running event loop.
        """
        loop = asyncio.get_running_loop()
        self._source_stale = False
        for slot in self._slots.values():
            slot.start()
        logger.debug("%s: run started keys=%s", self.name, list(self._slots))
        self._channel.notify_changed()

        per_key = [self._spawn(loop, self._run_key(key, producer)) for key, producer in self._producers.items()]
        return asyncio.shield(self._spawn(loop, self._settle_all(per_key)))

    def notify_source_changed(self, clear_old_data: bool = False) -> None:
        """
        Mark every producer's inputs as changed. Does not run and does not notify.

        clear_old_data=True also drops all stored data right away.
        """
        self._mark_stale()
        if clear_old_data:
            for slot in self._slots.values():
                slot.clear_data()

    def ensure_data(self) -> Awaitable[Mapping[str, Any]]:
        """
        Run only if some key lacks a fresh successful result.

        Re-runs the whole registry when any key never succeeded, failed, or the
        source was marked changed; otherwise resolves immediately to data_map.
        """
        loop = asyncio.get_running_loop()
        fresh = not self._source_stale and all(slot.data_ready for slot in self._slots.values())
        if fresh:
            done: asyncio.Future[Mapping[str, Any]] = loop.create_future()
            done.set_result(self.data_map)
            return done
        return self.run_operations()

    async def _settle_all(self, per_key: Iterable[asyncio.Task[None]]) -> Mapping[str, Any]:
        await asyncio.shield(asyncio.gather(*per_key))
        logger.debug("%s: run finished errors=%s", self.name, sorted(self.errors))
        return self.data_map

    async def _run_key(self, key: str, producer: Producer[Any]) -> None:
        slot = self._slots[key]
        try:
            value = await resolve_producer(producer)
        except Exception as exc:
            failure = OperationFailure.from_exception(exc, key=key)
            slot.fail(failure)
            logger.warning("%s: operation %r failed: %s", self.name, key, failure.message)
            self._call_hook(self.on_error, key, failure)
            self._channel.notify_error(key, failure)
            self._channel.notify_changed()
            return

        slot.succeed(value)
        logger.debug("%s: operation %r succeeded", self.name, key)
        self._call_hook(self.on_data, key, value)
        self._channel.notify_changed()

    def __repr__(self) -> str:
        states = ", ".join(f"{k}={s.status.value}" for k, s in self._slots.items())
        return f"<MultiTaskController name={self.name!r} {states}>"
