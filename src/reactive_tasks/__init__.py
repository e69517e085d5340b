"""
Reactive state controllers for asynchronous producer operations.

Components:
- core/observable.py: ObservableState (revision counter + listeners)
- core/channel.py: NotificationChannel ("state changed" / "error occurred")
- tasks/task_models.py: TaskStatus, TaskSlot, OperationFailure, UnknownTaskKey
- tasks/single.py: SingleTaskController (one producer, one slot)
- tasks/multi.py: MultiTaskController (keyed producers run concurrently)
"""

from .core.channel import NotificationChannel
from .core.observable import ObservableState
from .tasks.multi import MultiTaskController
from .tasks.single import SingleTaskController
from .tasks.task_models import OperationFailure, TaskSlot, TaskStatus, UnknownTaskKey

__all__ = [
    "MultiTaskController",
    "NotificationChannel",
    "ObservableState",
    "OperationFailure",
    "SingleTaskController",
    "TaskSlot",
    "TaskStatus",
    "UnknownTaskKey",
]
