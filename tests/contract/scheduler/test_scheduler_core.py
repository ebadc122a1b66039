"""Contract tests for Scheduler implementations.

Real-time backends run these too, so delays are kept well apart and every
wait is generous; exact timings are pinned down in the ManualScheduler unit
tests.
"""

from __future__ import annotations

import threading

import pytest

from tests.helpers.scheduling import SchedulerUnderTest
from underbar.errors import InvalidIntervalError, SchedulerShutdownError

# pylint: disable=magic-value-comparison


def test_call_later_runs_once_with_args(subject: SchedulerUnderTest) -> None:
    """A one-shot runs exactly once, with its positional arguments."""
    calls = []
    subject.scheduler.call_later(10, lambda *args: calls.append(args), 1, "two")
    subject.run_for(200)
    subject.run_for(50)
    assert calls == [(1, "two")]


def test_call_later_waits_for_its_delay(subject: SchedulerUnderTest) -> None:
    """Nothing runs before the delay has elapsed."""
    calls = []
    subject.scheduler.call_later(2000, calls.append, "late")
    subject.run_for(20)
    assert not calls


def test_never_runs_synchronously(subject: SchedulerUnderTest) -> None:
    """A zero delay still defers the callback past the submitting call."""
    submitting = {"inside": False}
    seen = []
    caller = threading.current_thread()

    def callback() -> None:
        seen.append(
            submitting["inside"] and threading.current_thread() is caller
        )

    submitting["inside"] = True
    subject.scheduler.call_later(0, callback)
    subject.scheduler.call_later(-5, callback)
    submitting["inside"] = False
    subject.run_for(200)
    assert seen == [False, False]


def test_runs_in_due_time_order(subject: SchedulerUnderTest) -> None:
    """Shorter delays run before longer ones, whatever the submission order."""
    order = []
    subject.scheduler.call_later(150, order.append, "slow")
    subject.scheduler.call_later(10, order.append, "fast")
    subject.scheduler.call_later(80, order.append, "medium")
    subject.run_for(500)
    assert order == ["fast", "medium", "slow"]


def test_cancel_before_due_prevents_call(subject: SchedulerUnderTest) -> None:
    """A cancelled one-shot never runs; cancelling twice is harmless."""
    calls = []
    handle = subject.scheduler.call_later(100, calls.append, 1)
    assert not handle.cancelled
    handle.cancel()
    handle.cancel()
    assert handle.cancelled
    subject.run_for(300)
    assert not calls


def test_call_every_repeats(subject: SchedulerUnderTest) -> None:
    """A periodic callback keeps running until cancelled."""
    ticks = []
    handle = subject.scheduler.call_every(20, ticks.append, "tick")
    subject.run_for(400)
    handle.cancel()
    assert len(ticks) >= 3
    assert set(ticks) == {"tick"}


def test_call_every_waits_one_period_first(subject: SchedulerUnderTest) -> None:
    """The first tick comes one period after submission, not immediately."""
    ticks = []
    handle = subject.scheduler.call_every(2000, ticks.append, 1)
    subject.run_for(20)
    handle.cancel()
    assert not ticks


def test_cancel_stops_periodic(subject: SchedulerUnderTest) -> None:
    """No tick happens once cancellation has settled."""
    ticks = []
    handle = subject.scheduler.call_every(20, ticks.append, 1)
    subject.run_for(100)
    handle.cancel()
    subject.run_for(50)
    settled = len(ticks)
    subject.run_for(200)
    assert len(ticks) == settled


@pytest.mark.parametrize("period", [0, -10])
def test_call_every_rejects_non_positive_period(
    subject: SchedulerUnderTest, period: float
) -> None:
    """Periods must be positive."""
    with pytest.raises(InvalidIntervalError) as info:
        subject.scheduler.call_every(period, lambda: None)
    assert info.value.period_ms == period


def test_shutdown_cancels_outstanding_timers(subject: SchedulerUnderTest) -> None:
    """Pending one-shots and periodics are cancelled and never run."""
    calls = []
    once = subject.scheduler.call_later(100, calls.append, "once")
    every = subject.scheduler.call_every(50, calls.append, "every")
    subject.scheduler.shutdown()
    assert subject.scheduler.is_shutdown
    assert once.cancelled
    assert every.cancelled
    subject.run_for(300)
    assert not calls


def test_shutdown_is_idempotent_and_refuses_new_work(
    subject: SchedulerUnderTest,
) -> None:
    """A second shutdown is a no-op; submissions afterwards raise."""
    subject.scheduler.shutdown()
    subject.scheduler.shutdown()
    with pytest.raises(SchedulerShutdownError) as info:
        subject.scheduler.call_later(1, lambda: None)
    assert info.value.scheduler_name == subject.scheduler.name
    with pytest.raises(SchedulerShutdownError):
        subject.scheduler.call_every(10, lambda: None)
