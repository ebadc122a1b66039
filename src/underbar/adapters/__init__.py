"""Adapters (infrastructure) for UNDERBAR.

Provide concrete implementations of the ports in `underbar.interfaces`:
schedulers backed by a worker thread, an asyncio event loop, or a virtual
clock.

Dependency rule: may import `underbar.interfaces` and `underbar.errors`; the
collection helpers must not import this package.
"""

from .schedulers import AsyncioScheduler, ManualScheduler, ThreadScheduler

__all__ = ["AsyncioScheduler", "ManualScheduler", "ThreadScheduler"]
