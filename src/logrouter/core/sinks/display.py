from __future__ import annotations

"""
Transient Display Sink.

Keeps a bounded, time-expiring, ordered collection of entries feeding an
on-screen display surface. Capacity is enforced on every append by
evicting the oldest entries. Expiration only affects visibility: expired
entries are skipped when rendering but keep occupying the buffer until
evicted by size or cleared.
"""

import logging
import threading
import time
from collections import deque
from enum import Enum
from typing import Callable, Deque, Iterator, List, Optional, Protocol, Sequence

from logrouter.core.sinks.base import LogSink
from logrouter.domain import constants as const
from logrouter.domain.config import RouterSettings
from logrouter.domain.errors import SinkUnavailableError
from logrouter.domain.log_models import LogEntry

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# RING BUFFER
# -----------------------------------------------------------------------------

class RingBuffer:
    """
    Bounded FIFO of log entries in insertion order.

    ``len(buffer) <= max_entries`` holds after every append. A reduced
    capacity applies on the next append.
    """

    def __init__(self, max_entries: int = const.DEFAULT_MAX_SCREEN_LINES):
        self._entries: Deque[LogEntry] = deque()
        self._max_entries = _check_capacity(max_entries)
        self._lock = threading.Lock()

    @property
    def max_entries(self) -> int:
        return self._max_entries

    @max_entries.setter
    def max_entries(self, value: int) -> None:
        self._max_entries = _check_capacity(value)

    def __len__(self) -> int:
        return len(self._entries)

    def append(self, entry: LogEntry) -> List[LogEntry]:
        """
        Push an entry at the tail and evict from the head while over capacity.

        Args:
            entry: Entry to store.

        Returns:
            List[LogEntry]: Evicted entries, oldest first.
        """
        evicted: List[LogEntry] = []
        with self._lock:
            self._entries.append(entry)
            while len(self._entries) > self._max_entries:
                evicted.append(self._entries.popleft())
        return evicted

    def render(self, now: Optional[float] = None) -> Iterator[LogEntry]:
        """
        Lazily yield the entries still visible at ``now``, in insertion order.

        Nothing is removed from the buffer.

        Args:
            now: Monotonic time; the current monotonic clock by default.
        """
        current = time.monotonic() if now is None else now
        for entry in self.snapshot():
            if entry.is_visible(current):
                yield entry

    def snapshot(self) -> List[LogEntry]:
        """Copy of every stored entry, expired ones included."""
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


def _check_capacity(value: int) -> int:
    if isinstance(value, bool) or int(value) < 1:
        raise ValueError(f"Ring buffer capacity must be >= 1, received {value!r}.")
    return int(value)

# -----------------------------------------------------------------------------
# DISPLAY SURFACE CONTRACT
# -----------------------------------------------------------------------------

class DisplaySurface(Protocol):
    """External renderer of the visible entries (e.g. a GUI panel)."""

    def show_entries(self, entries: Sequence[LogEntry]) -> None:
        """Replace the displayed content with ``entries``."""

    def set_visible(self, visible: bool) -> None:
        """Show or hide the panel."""

    def is_visible(self) -> bool:
        """Current panel visibility."""

    def destroy(self) -> None:
        """Release the panel."""


def format_screen_line(entry: LogEntry) -> str:
    """
    Render an entry for the on-screen panel.

    ``[HH:MM:SS] <message>``; an error payload adds ``Exception:`` and the
    stack trace on the following lines.
    """
    text = f"[{entry.wall_time.strftime(const.SCREEN_STAMP_FORMAT)}] {entry.message}"
    if entry.error is not None:
        text = f"{text}\nException: {entry.error.summary}"
        if entry.error.stack_trace:
            text = f"{text}\n{entry.error.stack_trace}"
    return text

# -----------------------------------------------------------------------------
# DISPLAY SINK
# -----------------------------------------------------------------------------

class DisplayState(Enum):
    """Lifecycle states of the display sink."""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    TORN_DOWN = "torn_down"


class DisplaySink(LogSink):
    """
    Transient display sink.

    Buffer bookkeeping continues while no surface is attached; rendering
    to the surface resumes as soon as one is.
    """

    name = "display"

    def __init__(
            self,
            settings: RouterSettings,
            *,
            surface_factory: Optional[Callable[[], DisplaySurface]] = None,
            clock: Callable[[], float] = time.monotonic,
    ):
        self._settings = settings
        self._surface_factory = surface_factory
        self._factory_failed = False
        self._clock = clock
        self._surface: Optional[DisplaySurface] = None
        self._state = DisplayState.UNINITIALIZED
        self._visible = True
        self.buffer = RingBuffer(settings.max_screen_lines)

    # -------------------------------------------------------------------------
    # STATE
    # -------------------------------------------------------------------------

    @property
    def state(self) -> DisplayState:
        return self._state

    @property
    def surface(self) -> Optional[DisplaySurface]:
        return self._surface

    def is_enabled(self) -> bool:
        return self._settings.screen_active and self._state is not DisplayState.TORN_DOWN

    def attach_surface(self, surface: DisplaySurface) -> None:
        """Attach the panel that renders the buffer and refresh it."""
        if self._state is DisplayState.TORN_DOWN:
            raise SinkUnavailableError("Display sink has been torn down.")
        self._surface = surface
        self._state = DisplayState.INITIALIZED
        self._surface.set_visible(self._visible)
        self.refresh()

    # -------------------------------------------------------------------------
    # SINK API
    # -------------------------------------------------------------------------

    def emit(self, entry: LogEntry) -> None:
        if not self.is_enabled():
            return

        self.buffer.max_entries = self._settings.max_screen_lines
        self.buffer.append(entry)

        if self._surface is None:
            self._create_surface()
        self.refresh()

    def refresh(self, now: Optional[float] = None) -> None:
        """Push the visible entries to the surface; no-op without one."""
        if self._surface is None or not self._visible:
            return
        current = self._clock() if now is None else now
        self._surface.show_entries(list(self.buffer.render(current)))

    def visible_entries(self, now: Optional[float] = None) -> List[LogEntry]:
        current = self._clock() if now is None else now
        return list(self.buffer.render(current))

    def set_visible(self, visible: bool) -> None:
        """Show or hide the panel. Buffer contents are untouched."""
        self._visible = bool(visible)
        if self._surface is not None:
            self._surface.set_visible(self._visible)
            self.refresh()

    def is_visible(self) -> bool:
        if self._surface is not None:
            return self._surface.is_visible()
        return self._visible

    def toggle_visible(self) -> None:
        self.set_visible(not self.is_visible())

    def clear(self) -> None:
        self.buffer.clear()
        self.refresh()

    def close(self) -> None:
        """Detach and destroy the surface. Terminal."""
        surface, self._surface = self._surface, None
        self._state = DisplayState.TORN_DOWN
        if surface is not None:
            surface.destroy()

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _create_surface(self) -> None:
        if self._surface_factory is None or self._factory_failed:
            return
        try:
            surface = self._surface_factory()
        except Exception as e:
            self._factory_failed = True
            raise SinkUnavailableError(f"Failed to create display surface: {e}") from e
        self.attach_surface(surface)
