# src/reactive_tasks/tasks/controller_base.py

from __future__ import annotations

"""
Plumbing shared by SingleTaskController and MultiTaskController.

- owns the NotificationChannel and delegates subscribe/unsubscribe to it,
- keeps strong references to in-flight asyncio tasks until they finish,
- invokes producers and consumer hooks without letting them crash the controller.
"""

import asyncio
import inspect
import logging
from collections.abc import Callable, Coroutine
from typing import Any, TypeVar

from ..core.channel import NotificationChannel
from ..core.ports import ErrorListener, Listener, Producer

logger = logging.getLogger(__name__)

R = TypeVar("R")


async def resolve_producer(producer: Producer[R]) -> R:
    """Call producer and await its result if it returned an awaitable."""
    result = producer()
    if inspect.isawaitable(result):
        return await result
    return result


class ControllerBase:
    def __init__(self, *, name: str = "") -> None:
        self.name = name or type(self).__name__
        self._channel = NotificationChannel(self.name)
        self._inflight: set[asyncio.Task[Any]] = set()
        self._source_stale = False

    # ---- notification surface ----

    @property
    def revision(self) -> int:
        """Number of change notifications emitted so far."""
        return self._channel.revision

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._channel.subscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._channel.unsubscribe(listener)

    def subscribe_errors(self, listener: ErrorListener) -> Callable[[], None]:
        return self._channel.subscribe_errors(listener)

    def unsubscribe_errors(self, listener: ErrorListener) -> None:
        self._channel.unsubscribe_errors(listener)

    def notify_listeners(self) -> None:
        self._channel.notify_changed()

    # ---- source staleness ----

    @property
    def source_stale(self) -> bool:
        return self._source_stale

    def _mark_stale(self) -> None:
        self._source_stale = True

    # ---- in-flight bookkeeping ----

    @property
    def inflight_count(self) -> int:
        return len(self._inflight)

    def _spawn(self, loop: asyncio.AbstractEventLoop, coro: Coroutine[Any, Any, R]) -> asyncio.Task[R]:
        task = loop.create_task(coro)
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    async def wait_idle(self) -> None:
        """Wait until every run started so far (and any started meanwhile) has finished."""
        while self._inflight:
            await asyncio.gather(*tuple(self._inflight), return_exceptions=True)

    # ---- hooks ----

    def _call_hook(self, hook: Callable[..., Any], *args: Any) -> None:
        try:
            hook(*args)
        except Exception:
            logger.exception("%s: hook %s failed", self.name, getattr(hook, "__name__", hook))
