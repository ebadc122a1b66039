"""Interfaces (ports) for UNDERBAR.

Defines the framework-free contracts the library depends on, currently the
`Scheduler` used by the time-based decorators. Concrete implementations live
in `underbar.adapters`.

Dependency rule: this package is independent and does not import any other
`underbar` module. It may be imported by `underbar.adapters`,
`underbar.config` and `underbar.functions`.
"""

from .scheduler import Scheduler, TimerHandle

__all__ = ["Scheduler", "TimerHandle"]
