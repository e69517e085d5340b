# tests/test_task_models.py

from __future__ import annotations

import pytest

from reactive_tasks.tasks.task_models import OperationFailure, TaskSlot, TaskStatus, UnknownTaskKey


def test_new_slot_is_idle_and_empty() -> None:
    slot: TaskSlot[int] = TaskSlot()
    assert slot.status == TaskStatus.IDLE
    assert slot.data is None
    assert slot.error is None
    assert not slot.busy
    assert not slot.has_error
    assert not slot.data_ready


def test_start_keeps_previous_data_until_new_cycle_completes() -> None:
    slot: TaskSlot[int] = TaskSlot()
    slot.succeed(5)
    slot.start()

    assert slot.busy
    assert slot.data == 5

    slot.succeed(10)
    assert slot.data == 10
    assert not slot.busy


def test_start_keeps_previous_error() -> None:
    slot: TaskSlot[int] = TaskSlot()
    failure = OperationFailure("nope")
    slot.fail(failure)
    slot.start()

    assert slot.busy
    assert slot.error is failure


def test_fail_clears_data_and_succeed_clears_error() -> None:
    slot: TaskSlot[int] = TaskSlot()
    slot.succeed(1)
    slot.fail(OperationFailure("bad"))
    assert slot.data is None
    assert slot.error is not None
    assert slot.has_error

    slot.succeed(2)
    assert slot.error is None
    assert slot.data == 2


def test_copy_is_detached() -> None:
    slot: TaskSlot[int] = TaskSlot()
    slot.succeed(3)
    snapshot = slot.copy()
    snapshot.fail(OperationFailure("x"))

    assert slot.data == 3
    assert slot.status == TaskStatus.SUCCEEDED


def test_status_values_are_strings() -> None:
    assert TaskStatus.RUNNING == "running"
    assert [s.value for s in TaskStatus] == ["idle", "running", "succeeded", "failed"]


def test_failure_from_exception_keeps_message_and_cause() -> None:
    exc = ValueError("X failed")
    failure = OperationFailure.from_exception(exc, key="A")

    assert failure.message == "X failed"
    assert str(failure) == "X failed"
    assert failure.cause is exc
    assert failure.__cause__ is exc
    assert failure.key == "A"


def test_failure_from_exception_without_message_uses_type_name() -> None:
    failure = OperationFailure.from_exception(TimeoutError())
    assert failure.message == "TimeoutError"


def test_failure_from_failure_is_rekeyed() -> None:
    inner = OperationFailure("inner")
    failure = OperationFailure.from_exception(inner, key="k")

    assert failure.message == "inner"
    assert failure.key == "k"
    assert failure.cause is inner
    assert failure.__cause__ is inner


def test_rekeyed_failure_chains_original_cause() -> None:
    root = ValueError("root")
    inner = OperationFailure.from_exception(root, key="a")
    failure = OperationFailure.from_exception(inner, key="b")

    assert failure.cause is root
    assert failure.__cause__ is root


def test_clear_data_resets_succeeded_slot_to_idle() -> None:
    slot: TaskSlot[int] = TaskSlot()
    slot.succeed(4)
    slot.clear_data()

    assert slot.data is None
    assert slot.status == TaskStatus.IDLE
    assert not slot.data_ready


def test_clear_data_keeps_running_and_failed_status() -> None:
    running: TaskSlot[int] = TaskSlot()
    running.succeed(1)
    running.start()
    running.clear_data()
    assert running.status == TaskStatus.RUNNING
    assert running.data is None

    failed: TaskSlot[int] = TaskSlot()
    failed.fail(OperationFailure("bad"))
    failed.clear_data()
    assert failed.status == TaskStatus.FAILED
    assert failed.error is not None


def test_unknown_key_is_a_key_error() -> None:
    err = UnknownTaskKey("missing")
    assert isinstance(err, KeyError)
    assert "missing" in str(err)
