"""Global pytest fixtures and default marks for UNDERBAR."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest

from underbar import config
from underbar.adapters.schedulers import ManualScheduler

TESTS_ROOT = Path(__file__).parent.resolve()

# top-level test folder -> marker applied to every test inside it
FOLDER_MARKERS = {
    "unit": pytest.mark.unit,
    "contract": pytest.mark.contract,
    "integration": pytest.mark.integration,
}


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Add the folder's default mark (`unit`, `contract`, `integration`) to each item."""
    for item in items:
        path = item.path.resolve()  # pytest>=8: pathlib.Path
        if TESTS_ROOT not in path.parents:
            continue
        folder = path.relative_to(TESTS_ROOT).parts[0]
        marker = FOLDER_MARKERS.get(folder)
        if marker is None:
            continue
        if not any(m.name == marker.name for m in item.iter_markers()):
            item.add_marker(marker)


@pytest.fixture
def manual_scheduler() -> Iterator[ManualScheduler]:
    """A fresh virtual-clock scheduler, shut down after the test."""
    scheduler = ManualScheduler()
    yield scheduler
    scheduler.shutdown()


@pytest.fixture
def default_scheduler(manual_scheduler: ManualScheduler) -> Iterator[ManualScheduler]:
    """Install ``manual_scheduler`` as the process-wide default for one test.

    The previous default is restored afterwards.
    """
    previous = config.set_default_scheduler(manual_scheduler)
    yield manual_scheduler
    config.set_default_scheduler(previous)
