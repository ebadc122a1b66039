"""Fixtures for Scheduler contract tests."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Iterator

import pytest

from tests.helpers.scheduling import SchedulerUnderTest
from underbar.adapters.schedulers import (
    AsyncioScheduler,
    ManualScheduler,
    ThreadScheduler,
)


@pytest.fixture(params=["manual", "thread", "asyncio"])
def subject(request: pytest.FixtureRequest) -> Iterator[SchedulerUnderTest]:
    """Return a fresh Scheduler for the requested backend.

    Supported params:
      - `"manual"` → ManualScheduler driven by `advance`
      - `"thread"` → ThreadScheduler driven by wall-clock sleeps
      - `"asyncio"` → AsyncioScheduler on a private event loop

    Each invocation builds a new scheduler and shuts it down afterwards.
    """

    match request.param:
        case "manual":
            manual = ManualScheduler()
            yield SchedulerUnderTest(manual, manual.advance)
            manual.shutdown()
        case "thread":
            threaded = ThreadScheduler(name="contract-thread")
            yield SchedulerUnderTest(threaded, lambda ms: time.sleep(ms / 1000.0))
            threaded.shutdown()
        case "asyncio":
            loop = asyncio.new_event_loop()
            on_loop = AsyncioScheduler(loop=loop, name="contract-asyncio")

            def run_for(ms: float) -> None:
                loop.run_until_complete(asyncio.sleep(ms / 1000.0))

            yield SchedulerUnderTest(on_loop, run_for)
            on_loop.shutdown()
            loop.close()
        case _:
            raise ValueError(f"unknown scheduler type: {request.param}")
