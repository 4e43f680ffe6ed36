from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for settings, a controllable monotonic clock and a
   router that never registers a real interpreter exit hook.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Iterator, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from logrouter.core.dispatcher import LogRouter  # noqa: E402
from logrouter.domain.config import RouterSettings  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Helpers
# -----------------------------------------------------------------------------
class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeSurface:
    """In-memory display surface recording what it was asked to show."""

    def __init__(self) -> None:
        self.shown: List[List[Any]] = []
        self.visible = True
        self.destroyed = False

    def show_entries(self, entries: Any) -> None:
        self.shown.append(list(entries))

    def set_visible(self, visible: bool) -> None:
        self.visible = visible

    def is_visible(self) -> bool:
        return self.visible

    def destroy(self) -> None:
        self.destroyed = True

    @property
    def last_messages(self) -> List[str]:
        return [e.message for e in self.shown[-1]] if self.shown else []


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def surface() -> FakeSurface:
    return FakeSurface()


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    return tmp_path / "logs" / "game_log.txt"


@pytest.fixture
def settings(log_path: Path) -> RouterSettings:
    """
    Settings with every sink switched on and the file inside tmp_path.

    Returns:
        RouterSettings: A fresh settings instance.
    """
    return RouterSettings(
        console_enabled=True,
        file_enabled=True,
        screen_enabled=True,
        log_file_path=str(log_path),
        max_screen_lines=50,
        screen_display_seconds=5.0,
    )


@pytest.fixture
def hooks() -> List[Callable[[], None]]:
    """Collects teardown hooks instead of registering them with atexit."""
    return []


@pytest.fixture
def make_router(clock: FakeClock, hooks: List[Callable[[], None]]) -> Iterator[Callable[..., LogRouter]]:
    """
    Factory for routers wired to the fake clock and the hook collector.

    Every router built here is shut down at teardown.
    """
    created: List[LogRouter] = []

    def _make(router_settings: RouterSettings, **kwargs: Any) -> LogRouter:
        kwargs.setdefault("clock", clock)
        kwargs.setdefault("register_hook", hooks.append)
        router = LogRouter(router_settings, **kwargs)
        created.append(router)
        return router

    yield _make

    for router in created:
        router.shutdown()


@pytest.fixture
def router(make_router: Callable[..., LogRouter], settings: RouterSettings) -> LogRouter:
    return make_router(settings)
