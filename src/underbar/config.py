"""Configuration utilities for UNDERBAR.

This module centralizes the library's process-wide settings. UNDERBAR reads no
environment variables and no files: configuration is programmatic only.

Currently configurable:
- the default `Scheduler` used by `underbar.functions.delay` and
  `underbar.functions.throttle` when no ``scheduler=`` is passed.
"""

import logging
import threading

from underbar.adapters.schedulers import ThreadScheduler
from underbar.interfaces.scheduler import Scheduler

logger = logging.getLogger(__name__)

DEFAULT_SCHEDULER_THREAD_NAME = "underbar-default-scheduler"  # pragma: no mutate

_lock = threading.Lock()
_default_scheduler: Scheduler | None = None


def get_default_scheduler() -> Scheduler:
    """Get the process-wide default scheduler.

    The first call creates a `ThreadScheduler` named
    `DEFAULT_SCHEDULER_THREAD_NAME` unless one was installed with
    `set_default_scheduler`. A default scheduler that has been shut down is
    replaced by a fresh one.

    Returns:
        The scheduler used by the time-based decorators by default.
    """
    global _default_scheduler  # pylint: disable=global-statement
    with _lock:
        if _default_scheduler is None or _default_scheduler.is_shutdown:
            _default_scheduler = ThreadScheduler(name=DEFAULT_SCHEDULER_THREAD_NAME)
            logger.debug("Created default scheduler %s", DEFAULT_SCHEDULER_THREAD_NAME)
        return _default_scheduler


def set_default_scheduler(scheduler: Scheduler | None) -> Scheduler | None:
    """Install ``scheduler`` as the process-wide default.

    The previous default is returned untouched; shutting it down is the
    caller's decision.

    Args:
        scheduler: The new default, or ``None`` to fall back to lazily creating
            a `ThreadScheduler` on next use.

    Returns:
        The previously installed scheduler, if any.
    """
    global _default_scheduler  # pylint: disable=global-statement
    with _lock:
        previous, _default_scheduler = _default_scheduler, scheduler
    logger.debug(
        "Default scheduler set to %s",
        getattr(scheduler, "name", None) if scheduler is not None else "<lazy>",
    )
    return previous
