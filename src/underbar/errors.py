"""Exceptions raised by UNDERBAR.

Misuse of the collection helpers (wrong shape, a non-callable where a
callable is expected, a missing method) is not translated: it surfaces as the
native ``TypeError``/``AttributeError``/``IndexError`` at the point of misuse.
The classes below cover the few conditions the library detects itself.
"""


class UnderbarError(Exception):
    """Base class for UNDERBAR errors."""


class UnserializableArgumentsError(UnderbarError, TypeError):
    """Raised when memoize cannot build a cache key for an argument.

    Attributes:
        value (object): The offending argument (or nested value).
        reason (str): Why the value cannot be encoded.
    """

    def __init__(self, value: object, reason: str) -> None:
        super().__init__(
            f"Cannot build a memoization key for {type(value).__name__} value: {reason}."
        )
        self.value = value
        self.reason = reason


class SchedulerShutdownError(UnderbarError, RuntimeError):
    """Raised when work is submitted to a scheduler that has been shut down."""

    def __init__(self, scheduler_name: str) -> None:
        super().__init__(f"Scheduler '{scheduler_name}' has been shut down.")
        self.scheduler_name = scheduler_name


class InvalidIntervalError(UnderbarError, ValueError):
    """Raised when a periodic timer is requested with a non-positive period.

    Attributes:
        period_ms (float): The rejected period, in milliseconds.
    """

    def __init__(self, period_ms: float) -> None:
        super().__init__(f"Periodic interval must be positive, got {period_ms} ms.")
        self.period_ms = period_ms
