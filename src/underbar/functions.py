"""Function decorators: `once`, `memoize`, `delay` and `throttle`.

Each decorator returns a new callable that changes *when* or *how often* the
wrapped function runs, never what it computes. The stateful wrappers are
small objects (`Once`, `Memoized`, `Throttled`) owning their state privately;
two wrappers never share state, even around the same function.

The time-based decorators go through a `Scheduler`
(`underbar.interfaces.scheduler`). They use the ``scheduler=`` argument when
given, and `underbar.config.get_default_scheduler` otherwise.
"""

from __future__ import annotations

import functools
import logging
import threading
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from underbar import config
from underbar.interfaces.scheduler import Scheduler, TimerHandle
from underbar.keys import argument_key

logger = logging.getLogger(__name__)

R = TypeVar("R")

# pylint: disable=too-few-public-methods


def _name(fn: Callable[..., Any]) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)


class _PerInstance:
    """Method support for wrappers whose state belongs to one instance.

    Looked up on an instance, the wrapper builds a fresh wrapper of the same
    class around the bound method and stores it in the instance's
    ``__dict__`` under the attribute name, so later lookups find it directly.
    Each instance therefore gets its own state.
    """

    _fn: Callable[..., Any]
    _attr_name: str | None = None

    def __set_name__(self, owner: type, name: str) -> None:
        self._attr_name = name

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        bound = type(self)(self._fn.__get__(instance, owner))
        vars(instance)[self._attr_name or self._fn.__name__] = bound
        return bound


# ============================================================================
#                                   once
# ============================================================================


class Once(_PerInstance, Generic[R]):
    """Callable that runs its function on the first call only.

    Every later call returns the first call's result, whatever its arguments.
    If the first call raises, nothing is cached and the next call tries again.
    Used on a method, it runs once per instance.
    """

    def __init__(self, fn: Callable[..., R]) -> None:
        functools.update_wrapper(self, fn)
        self._fn = fn
        self._called = False
        self._result: R | None = None

    def __call__(self, *args: Any, **kwargs: Any) -> R | None:
        if not self._called:
            self._result = self._fn(*args, **kwargs)
            self._called = True
        return self._result

    @property
    def called(self) -> bool:
        """Whether the wrapped function has run."""
        return self._called


def once(fn: Callable[..., R]) -> Once[R]:
    """Return a wrapper that calls ``fn`` at most once."""
    return Once(fn)


# ============================================================================
#                                  memoize
# ============================================================================


class Memoized(_PerInstance, Generic[R]):
    """Callable caching its function's results by argument key.

    Keys come from `underbar.keys.argument_key`, so equal-by-value arguments
    share an entry. An entry is written once and never replaced or evicted.
    The wrapped function is assumed to be referentially transparent.
    Used on a method, each instance gets its own cache and ``self`` is not
    part of the key.
    """

    def __init__(self, fn: Callable[..., R]) -> None:
        functools.update_wrapper(self, fn)
        self._fn = fn
        self._cache: dict[Any, R] = {}

    def __call__(self, *args: Any, **kwargs: Any) -> R:
        key = argument_key(args, kwargs)
        if key in self._cache:
            logger.debug("memoize hit for %s", _name(self._fn))
            return self._cache[key]
        logger.debug("memoize miss for %s", _name(self._fn))
        result = self._fn(*args, **kwargs)
        # a recursive call may have filled the entry already
        return self._cache.setdefault(key, result)

    @property
    def cache_size(self) -> int:
        """Number of cached argument keys."""
        return len(self._cache)


def memoize(fn: Callable[..., R]) -> Memoized[R]:
    """Return a wrapper that caches ``fn``'s result per distinct argument list.

    Raises (when the wrapper is called):
        UnserializableArgumentsError: If an argument is not a primitive or a
            plain container of primitives (functions, arbitrary objects and
            cyclic structures are rejected). ``fn`` is not called.
    """
    return Memoized(fn)


# ============================================================================
#                                   delay
# ============================================================================


def delay(
    fn: Callable[..., Any],
    wait_ms: float,
    *args: Any,
    scheduler: Scheduler | None = None,
    **kwargs: Any,
) -> None:
    """Call ``fn(*args, **kwargs)`` no earlier than ``wait_ms`` from now.

    Fire-and-forget: returns immediately, ``fn``'s return value is discarded
    and the call cannot be cancelled through this function.

    Note:
        ``scheduler`` is consumed by `delay` itself and never reaches ``fn``.
        To pass a keyword named ``scheduler`` to ``fn``, bind it first with
        ``functools.partial(fn, scheduler=...)``.

    Example:
        >>> delay(print, 500, "a", "b")  # prints "a b" after ~500 ms
    """
    target = scheduler if scheduler is not None else config.get_default_scheduler()
    if kwargs:
        target.call_later(wait_ms, functools.partial(fn, *args, **kwargs))
    else:
        target.call_later(wait_ms, fn, *args)


# ============================================================================
#                                  throttle
# ============================================================================


class Throttled(Generic[R]):
    """Callable running its function at most once per time window.

    A periodic timer with period ``wait_ms`` starts at construction and
    re-opens the window on each tick. The first call in an open window runs
    the function at once and closes the window; calls in a closed window are
    dropped (they return ``None`` and are neither queued nor retried).

    The timer holds a scheduler resource until `cancel` is called, the wrapper
    is used as a context manager and exits, or the scheduler shuts down.
    After cancellation the window never re-opens.

    Used on a method, the instance is bound as the first argument and the
    window is shared by every instance of the class, since one timer serves
    the one wrapper. Cancel it through the class attribute.
    """

    def __init__(
        self, fn: Callable[..., R], wait_ms: float, scheduler: Scheduler
    ) -> None:
        functools.update_wrapper(self, fn)
        self._fn = fn
        self._lock = threading.Lock()
        self._available = True
        self._timer: TimerHandle = scheduler.call_every(wait_ms, self._reopen)

    def _reopen(self) -> None:
        with self._lock:
            self._available = True

    def __call__(self, *args: Any, **kwargs: Any) -> R | None:
        with self._lock:
            if not self._available:
                logger.debug("throttle dropped call to %s", _name(self._fn))
                return None
            self._available = False
        return self._fn(*args, **kwargs)

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return functools.partial(self, instance)

    def cancel(self) -> None:
        """Release the periodic timer. Safe to call more than once."""
        self._timer.cancel()

    @property
    def cancelled(self) -> bool:
        """Whether the periodic timer has been released."""
        return self._timer.cancelled

    def __enter__(self) -> Throttled[R]:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.cancel()


def throttle(
    fn: Callable[..., R], wait_ms: float, *, scheduler: Scheduler | None = None
) -> Throttled[R]:
    """Return a wrapper letting at most one call to ``fn`` through per ``wait_ms``.

    The first call after construction always runs.

    Raises:
        InvalidIntervalError: If ``wait_ms`` is not positive.
    """
    target = scheduler if scheduler is not None else config.get_default_scheduler()
    return Throttled(fn, wait_ms, target)
