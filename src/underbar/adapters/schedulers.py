"""Concrete `Scheduler` implementations.

Exports
-------
- ThreadScheduler: real time, callbacks serialized on one daemon worker thread.
- AsyncioScheduler: real time, callbacks run on an asyncio event loop.
- ManualScheduler: virtual time driven by `ManualScheduler.advance`; meant
  for tests and deterministic simulations.

Key behaviors
-------------
- Timers are ordered by due time, then by submission order.
- Periodic timers keep a fixed rate: the next tick is due one period after the
  previous *due* time, not after the callback finished. Real-time schedulers
  skip ticks that were missed entirely; the manual scheduler never misses any.
- Cancellation is lazy for the heap-based schedulers: a cancelled entry stays
  queued and is discarded when it reaches the front.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from underbar.errors import InvalidIntervalError, SchedulerShutdownError
from underbar.interfaces.scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

# pylint: disable=too-few-public-methods

DEFAULT_THREAD_NAME = "underbar-scheduler"


def _callback_name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


def _check_period(period_ms: float) -> None:
    if period_ms <= 0:
        raise InvalidIntervalError(period_ms)


# ============================================================================
#                     Shared heap machinery (thread + manual)
# ============================================================================


class _Handle(TimerHandle):
    """Cancellation flag shared by a timer's queue entries."""

    def __init__(self, label: str) -> None:
        self._label = label
        self._cancelled = False

    def cancel(self) -> None:
        if not self._cancelled:
            self._cancelled = True
            logger.debug("Cancelled timer %s", self._label)

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def __repr__(self) -> str:
        state = "cancelled" if self._cancelled else "active"
        return f"<TimerHandle {self._label} {state}>"


@dataclass(order=True)
class _Entry:
    due_ms: float
    seq: int
    handle: _Handle = field(compare=False)
    callback: Callable[..., Any] = field(compare=False)
    args: tuple[Any, ...] = field(compare=False)
    period_ms: float | None = field(compare=False, default=None)


class _TimerQueue:
    """Min-heap of timer entries keyed by (due time, submission order).

    Not thread-safe; callers hold their own lock.
    """

    def __init__(self) -> None:
        self._heap: list[_Entry] = []
        self._seq = itertools.count()

    def push(
        self,
        due_ms: float,
        handle: _Handle,
        callback: Callable[..., Any],
        args: tuple[Any, ...],
        period_ms: float | None,
    ) -> None:
        heapq.heappush(
            self._heap,
            _Entry(due_ms, next(self._seq), handle, callback, args, period_ms),
        )

    def _drop_cancelled(self) -> None:
        while self._heap and self._heap[0].handle.cancelled:
            heapq.heappop(self._heap)

    def next_due(self) -> float | None:
        """Due time of the earliest live entry, or None if there is none."""
        self._drop_cancelled()
        return self._heap[0].due_ms if self._heap else None

    def pop_due(self, now_ms: float, *, skip_missed: bool) -> _Entry | None:
        """Pop the earliest live entry due at ``now_ms``, re-arming periodics."""
        self._drop_cancelled()
        if not self._heap or self._heap[0].due_ms > now_ms:
            return None
        entry = heapq.heappop(self._heap)
        if entry.period_ms is not None:
            next_due = entry.due_ms + entry.period_ms
            if skip_missed:
                while next_due <= now_ms:
                    next_due += entry.period_ms
            self.push(next_due, entry.handle, entry.callback, entry.args, entry.period_ms)
        return entry

    def cancel_all(self) -> None:
        for entry in self._heap:
            entry.handle.cancel()
        self._heap.clear()

    def live_count(self) -> int:
        return sum(1 for entry in self._heap if not entry.handle.cancelled)


# ============================================================================
#                               ThreadScheduler
# ============================================================================


class ThreadScheduler(Scheduler):
    """Real-time scheduler backed by a single daemon worker thread.

    Callbacks run one at a time on the worker, never on the submitting thread.
    The worker starts lazily on the first submission. A callback that raises is
    logged and does not stop the worker.

    Args:
        name: Name of the worker thread (also used in log messages).
        clock: Monotonic clock in seconds; injectable for tests.
    """

    def __init__(
        self,
        name: str = DEFAULT_THREAD_NAME,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.name = name
        self._clock = clock
        self._queue = _TimerQueue()
        self._condition = threading.Condition()
        self._shutdown = False
        self._worker: threading.Thread | None = None

    def _now_ms(self) -> float:
        return self._clock() * 1000.0

    def call_later(
        self, delay_ms: float, callback: Callable[..., Any], *args: Any
    ) -> TimerHandle:
        return self._submit(max(0.0, delay_ms), callback, args, None)

    def call_every(
        self, period_ms: float, callback: Callable[..., Any], *args: Any
    ) -> TimerHandle:
        _check_period(period_ms)
        return self._submit(period_ms, callback, args, period_ms)

    def _submit(
        self,
        delay_ms: float,
        callback: Callable[..., Any],
        args: tuple[Any, ...],
        period_ms: float | None,
    ) -> TimerHandle:
        label = _callback_name(callback)
        with self._condition:
            if self._shutdown:
                raise SchedulerShutdownError(self.name)
            handle = _Handle(label)
            self._queue.push(self._now_ms() + delay_ms, handle, callback, args, period_ms)
            if self._worker is None:
                self._worker = threading.Thread(
                    target=self._run, name=self.name, daemon=True
                )
                self._worker.start()
            self._condition.notify()
        logger.debug(
            "Scheduled %s on %s (delay=%sms, period=%s)",
            label,
            self.name,
            delay_ms,
            f"{period_ms}ms" if period_ms is not None else "none",
        )
        return handle

    def _run(self) -> None:
        while True:
            with self._condition:
                entry = None
                while entry is None:
                    if self._shutdown:
                        return
                    now_ms = self._now_ms()
                    entry = self._queue.pop_due(now_ms, skip_missed=True)
                    if entry is None:
                        due_ms = self._queue.next_due()
                        timeout = None if due_ms is None else (due_ms - now_ms) / 1000.0
                        self._condition.wait(timeout)
            try:
                entry.callback(*entry.args)
            except Exception:  # pylint: disable=broad-except
                logger.exception(
                    "Scheduled callback %s raised on %s",
                    _callback_name(entry.callback),
                    self.name,
                )

    def shutdown(self, wait: bool = True) -> None:
        """Cancel outstanding timers and stop the worker.

        Args:
            wait: Join the worker thread before returning (ignored when called
                from the worker itself).
        """
        with self._condition:
            if self._shutdown:
                return
            self._shutdown = True
            self._queue.cancel_all()
            self._condition.notify_all()
            worker = self._worker
        logger.debug("Scheduler %s shut down", self.name)
        if wait and worker is not None and worker is not threading.current_thread():
            worker.join()

    @property
    def is_shutdown(self) -> bool:
        return self._shutdown


# ============================================================================
#                               AsyncioScheduler
# ============================================================================


class _AsyncioTimer(TimerHandle):
    """A one-shot or periodic timer armed on an asyncio loop."""

    def __init__(  # pylint: disable=too-many-arguments
        self,
        loop: asyncio.AbstractEventLoop,
        callback: Callable[..., Any],
        args: tuple[Any, ...],
        delay_ms: float,
        period_ms: float | None,
        on_done: Callable[[_AsyncioTimer], None],
    ) -> None:
        self._loop = loop
        self._callback = callback
        self._args = args
        self._period_s = period_ms / 1000.0 if period_ms is not None else None
        self._on_done = on_done
        self._cancelled = False
        self._due = loop.time() + delay_ms / 1000.0
        self._timer = loop.call_at(self._due, self._fire)

    def _fire(self) -> None:
        if self._cancelled:
            return
        if self._period_s is not None:
            self._due += self._period_s
            now = self._loop.time()
            while self._due <= now:
                self._due += self._period_s
            self._timer = self._loop.call_at(self._due, self._fire)
        else:
            self._on_done(self)
        self._callback(*self._args)

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self._timer.cancel()
        self._on_done(self)
        logger.debug("Cancelled timer %s", _callback_name(self._callback))

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class AsyncioScheduler(Scheduler):
    """Real-time scheduler running callbacks on an asyncio event loop.

    Callbacks run on the loop's thread, strictly after the code that submitted
    them yields control back to the loop. Exceptions raised by callbacks go to
    the loop's exception handler.

    Args:
        loop: The loop to schedule on. When omitted, the loop running at
            submission time is used (``asyncio.get_running_loop()``).
        name: Name used in log and error messages.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop | None = None,
        name: str = "underbar-asyncio",
    ) -> None:
        self.name = name
        self._loop = loop
        self._timers: set[_AsyncioTimer] = set()
        self._shutdown = False

    def call_later(
        self, delay_ms: float, callback: Callable[..., Any], *args: Any
    ) -> TimerHandle:
        return self._submit(max(0.0, delay_ms), callback, args, None)

    def call_every(
        self, period_ms: float, callback: Callable[..., Any], *args: Any
    ) -> TimerHandle:
        _check_period(period_ms)
        return self._submit(period_ms, callback, args, period_ms)

    def _submit(
        self,
        delay_ms: float,
        callback: Callable[..., Any],
        args: tuple[Any, ...],
        period_ms: float | None,
    ) -> TimerHandle:
        if self._shutdown:
            raise SchedulerShutdownError(self.name)
        loop = self._loop if self._loop is not None else asyncio.get_running_loop()
        timer = _AsyncioTimer(
            loop, callback, args, delay_ms, period_ms, self._timers.discard
        )
        self._timers.add(timer)
        logger.debug(
            "Scheduled %s on %s (delay=%sms, period=%s)",
            _callback_name(callback),
            self.name,
            delay_ms,
            f"{period_ms}ms" if period_ms is not None else "none",
        )
        return timer

    def shutdown(self) -> None:
        if self._shutdown:
            return
        self._shutdown = True
        for timer in list(self._timers):
            timer.cancel()
        logger.debug("Scheduler %s shut down", self.name)

    @property
    def is_shutdown(self) -> bool:
        return self._shutdown


# ============================================================================
#                               ManualScheduler
# ============================================================================


class ManualScheduler(Scheduler):
    """Virtual-time scheduler driven explicitly by `advance`.

    Nothing runs until the owner advances the clock. Callbacks run on the
    thread calling `advance`, in due-time order, with `now_ms` set to each
    callback's due time while it runs. Exceptions from callbacks propagate
    out of `advance`.

    Note:
        Not thread-safe; intended for tests and single-threaded simulations.

    Example:
        >>> scheduler = ManualScheduler()
        >>> seen = []
        >>> _ = scheduler.call_later(50, seen.append, "tick")
        >>> scheduler.advance(49)
        >>> seen
        []
        >>> scheduler.advance(1)
        >>> seen
        ['tick']
    """

    def __init__(self, start_ms: float = 0.0, name: str = "underbar-manual") -> None:
        self.name = name
        self._now_ms = start_ms
        self._queue = _TimerQueue()
        self._shutdown = False

    @property
    def now_ms(self) -> float:
        """Current virtual time in milliseconds."""
        return self._now_ms

    @property
    def pending(self) -> int:
        """Number of live (not cancelled) timers."""
        return self._queue.live_count()

    def call_later(
        self, delay_ms: float, callback: Callable[..., Any], *args: Any
    ) -> TimerHandle:
        return self._submit(max(0.0, delay_ms), callback, args, None)

    def call_every(
        self, period_ms: float, callback: Callable[..., Any], *args: Any
    ) -> TimerHandle:
        _check_period(period_ms)
        return self._submit(period_ms, callback, args, period_ms)

    def _submit(
        self,
        delay_ms: float,
        callback: Callable[..., Any],
        args: tuple[Any, ...],
        period_ms: float | None,
    ) -> TimerHandle:
        if self._shutdown:
            raise SchedulerShutdownError(self.name)
        handle = _Handle(_callback_name(callback))
        self._queue.push(self._now_ms + delay_ms, handle, callback, args, period_ms)
        return handle

    def advance(self, ms: float) -> None:
        """Move the virtual clock forward by ``ms``, running what falls due.

        Callbacks scheduled by other callbacks run in the same call if they
        fall due before the target time.
        """
        target_ms = self._now_ms + max(0.0, ms)
        while (entry := self._queue.pop_due(target_ms, skip_missed=False)) is not None:
            self._now_ms = max(self._now_ms, entry.due_ms)
            entry.callback(*entry.args)
        self._now_ms = target_ms

    def shutdown(self) -> None:
        if self._shutdown:
            return
        self._shutdown = True
        self._queue.cancel_all()
        logger.debug("Scheduler %s shut down", self.name)

    @property
    def is_shutdown(self) -> bool:
        return self._shutdown
