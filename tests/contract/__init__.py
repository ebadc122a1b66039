"""Contract tests.

Purpose
- Define behavior/invariants once and run them against multiple implementations
  (ManualScheduler, ThreadScheduler, AsyncioScheduler) to keep them interchangeable.

Guidelines
- Parametrize implementations via fixtures.
- Assert only the public contract (inputs/outputs/effects), not internals.
- Express waits through the fixture's driver so virtual and real clocks share one suite.
"""
