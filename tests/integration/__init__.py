"""Integration tests.

Purpose
- Exercise the time-based decorators against real clocks: the ThreadScheduler
  worker thread and asyncio event loops.

Guidelines
- Use generous timing tolerances; assert ordering and counts, not exact instants.
- Always shut schedulers down (fixtures do it) so no worker outlives its test.
- Mark as 'integration' and keep them slower but reliable.
"""
