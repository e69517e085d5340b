# src/reactive_tasks/core/observable.py

"""
Synchronous change-notification primitive.

ObservableState only knows *that* something changed, never *what* changed.
Listeners are zero-argument callables that read state back from their owner.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .ports import Listener

logger = logging.getLogger(__name__)


class ObservableState:
    """
    Revision counter + ordered set of listeners.

    - notify_listeners() calls every listener subscribed when the call starts,
      in subscription order, exactly once.
    - Listeners may subscribe/unsubscribe/notify from inside a callback.
    - A failing listener is logged and skipped; the others still run.
    """

    __slots__ = ("_listeners", "_revision", "_name")

    def __init__(self, name: str = "") -> None:
        # dict keeps insertion order and gives set semantics.
        self._listeners: dict[Listener, None] = {}
        self._revision = 0
        self._name = name

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def has_listeners(self) -> bool:
        return bool(self._listeners)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register listener and return a function that unsubscribes it."""
        if not callable(listener):
            raise TypeError(f"listener must be callable, got {type(listener).__name__}")
        self._listeners.setdefault(listener, None)

        def _unsubscribe() -> None:
            self.unsubscribe(listener)

        return _unsubscribe

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.pop(listener, None)

    def notify_listeners(self) -> None:
        self._revision += 1
        if not self._listeners:
            return

        for listener in tuple(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("Listener %r failed (state=%s rev=%d)", listener, self._name or "-", self._revision)
