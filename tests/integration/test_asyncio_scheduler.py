"""Integration tests for AsyncioScheduler on real event loops."""

from __future__ import annotations

import asyncio

import pytest

from underbar.adapters.schedulers import AsyncioScheduler
from underbar.functions import delay, throttle

# pylint: disable=magic-value-comparison


def test_uses_running_loop_when_none_given() -> None:
    """Without a loop argument, the loop running at submission time is used."""

    async def scenario() -> list[str]:
        scheduler = AsyncioScheduler()
        seen: list[str] = []
        scheduler.call_later(10, seen.append, "ran")
        await asyncio.sleep(0.1)
        scheduler.shutdown()
        return seen

    assert asyncio.run(scenario()) == ["ran"]


def test_submission_outside_a_loop_fails() -> None:
    """A loop-less scheduler needs a running loop to submit to."""
    scheduler = AsyncioScheduler()
    with pytest.raises(RuntimeError):
        scheduler.call_later(10, lambda: None)


def test_callback_runs_after_submitter_yields() -> None:
    """A zero delay runs only once the submitting coroutine awaits."""

    async def scenario() -> tuple[list[int], list[int]]:
        scheduler = AsyncioScheduler()
        seen: list[int] = []
        scheduler.call_later(0, seen.append, 1)
        before = list(seen)
        await asyncio.sleep(0.05)
        scheduler.shutdown()
        return before, seen

    before, after = asyncio.run(scenario())
    assert before == []
    assert after == [1]


def test_delay_and_throttle_on_event_loop() -> None:
    """The decorators work unchanged with an asyncio scheduler."""

    async def scenario() -> tuple[list[str], list[int]]:
        scheduler = AsyncioScheduler()
        delayed: list[str] = []
        delay(delayed.append, 20, "hello", scheduler=scheduler)

        calls: list[int] = []
        with throttle(calls.append, 100, scheduler=scheduler) as limited:
            limited(1)
            limited(2)
            await asyncio.sleep(0.15)
            limited(3)
            limited(4)
        scheduler.shutdown()
        return delayed, calls

    delayed, calls = asyncio.run(scenario())
    assert delayed == ["hello"]
    assert calls == [1, 3]


def test_shutdown_cancels_pending_loop_timers() -> None:
    """Timers armed on the loop are cancelled by shutdown."""

    async def scenario() -> list[int]:
        scheduler = AsyncioScheduler()
        seen: list[int] = []
        handle = scheduler.call_every(10, seen.append, 1)
        scheduler.call_later(20, seen.append, 2)
        scheduler.shutdown()
        await asyncio.sleep(0.1)
        assert handle.cancelled
        return seen

    assert asyncio.run(scenario()) == []
