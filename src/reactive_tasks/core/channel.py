# src/reactive_tasks/core/channel.py

from __future__ import annotations

"""
Notification channel owned by every controller.

Two independent signals:
- "state changed": fan-out through an ObservableState (no payload),
- "error occurred": (key, failure) pairs for consumers that show errors
  without diffing controller fields.

Controllers own a channel instead of inheriting a notifier.
"""

import logging
from collections.abc import Callable

from ..tasks.task_models import OperationFailure
from .observable import ObservableState
from .ports import ErrorListener, Listener

logger = logging.getLogger(__name__)


class NotificationChannel:
    def __init__(self, name: str = "") -> None:
        self._name = name
        self._changed = ObservableState(name)
        self._error_listeners: dict[ErrorListener, None] = {}

    @property
    def revision(self) -> int:
        return self._changed.revision

    @property
    def has_listeners(self) -> bool:
        return self._changed.has_listeners or bool(self._error_listeners)

    # ---- state changed ----

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self._changed.subscribe(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._changed.unsubscribe(listener)

    def notify_changed(self) -> None:
        self._changed.notify_listeners()

    # ---- error occurred ----

    def subscribe_errors(self, listener: ErrorListener) -> Callable[[], None]:
        if not callable(listener):
            raise TypeError(f"listener must be callable, got {type(listener).__name__}")
        self._error_listeners.setdefault(listener, None)

        def _unsubscribe() -> None:
            self.unsubscribe_errors(listener)

        return _unsubscribe

    def unsubscribe_errors(self, listener: ErrorListener) -> None:
        self._error_listeners.pop(listener, None)

    def notify_error(self, key: str | None, failure: OperationFailure) -> None:
        for listener in tuple(self._error_listeners):
            try:
                listener(key, failure)
            except Exception:
                logger.exception("Error listener %r failed (channel=%s key=%s)", listener, self._name or "-", key)
