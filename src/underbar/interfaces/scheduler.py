"""Scheduler port used by the time-based decorators.

`underbar.functions.delay` and `underbar.functions.throttle` never touch a
clock or an event loop directly. They submit work to a `Scheduler`, which
offers exactly two capabilities:

- run a callback once, after a delay (`Scheduler.call_later`);
- run a callback periodically until cancelled (`Scheduler.call_every`).

Contract shared by every implementation:

- Delays and periods are in milliseconds; negative delays count as zero.
- A callback never runs synchronously inside ``call_later``/``call_every``.
- Callbacks due at the same time run in submission order.
- A periodic callback first runs one period after submission.
- ``call_every`` rejects non-positive periods with `InvalidIntervalError`.
- After `Scheduler.shutdown`, outstanding timers are cancelled and new
  submissions raise `SchedulerShutdownError`.
"""

import abc
from collections.abc import Callable
from typing import Any

# pylint: disable=too-few-public-methods


class TimerHandle(abc.ABC):
    """Handle on a submitted timer."""

    @abc.abstractmethod
    def cancel(self) -> None:
        """Cancel the timer. Cancelling twice is a no-op."""

    @property
    @abc.abstractmethod
    def cancelled(self) -> bool:
        """Whether `cancel` has been called (or the scheduler shut down)."""


class Scheduler(abc.ABC):
    """Contract for a callback scheduler."""

    name: str

    @abc.abstractmethod
    def call_later(
        self, delay_ms: float, callback: Callable[..., Any], *args: Any
    ) -> TimerHandle:
        """Run ``callback(*args)`` once, no earlier than ``delay_ms`` from now.

        Args:
            delay_ms: Minimum delay in milliseconds.
            callback: The function to run.
            *args: Positional arguments for ``callback``.

        Returns:
            TimerHandle: A handle that can cancel the pending call.

        Raises:
            SchedulerShutdownError: If the scheduler has been shut down.
        """

    @abc.abstractmethod
    def call_every(
        self, period_ms: float, callback: Callable[..., Any], *args: Any
    ) -> TimerHandle:
        """Run ``callback(*args)`` every ``period_ms`` until cancelled.

        Args:
            period_ms: Period in milliseconds; must be positive.
            callback: The function to run on each tick.
            *args: Positional arguments for ``callback``.

        Returns:
            TimerHandle: A handle that stops further ticks when cancelled.

        Raises:
            InvalidIntervalError: If ``period_ms`` is not positive.
            SchedulerShutdownError: If the scheduler has been shut down.
        """

    @abc.abstractmethod
    def shutdown(self) -> None:
        """Cancel every outstanding timer and refuse further submissions."""

    @property
    @abc.abstractmethod
    def is_shutdown(self) -> bool:
        """Whether `shutdown` has been called."""
