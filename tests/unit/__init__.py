"""Unit tests.

Purpose
- Verify a single module/class/function in isolation.

Guidelines
- No real time: drive the time-based decorators with `ManualScheduler`.
- Prefer behavior-centric assertions over implementation details.
- Keep tests small, fast, and deterministic.
"""
