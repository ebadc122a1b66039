"""UNDERBAR test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/class/function.
- contract/     : Shared behavior/invariants enforced across every Scheduler adapter.
- integration/  : Real-time interactions with threads and asyncio event loops.
- helpers/      : Shared utilities (no tests here).

General guidance
- Keep unit fast and deterministic; drive time with ManualScheduler, never sleep.
- Integration uses real clocks with generous tolerances.
- Contract parametrizes implementations to ensure consistent behavior.
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
"""
