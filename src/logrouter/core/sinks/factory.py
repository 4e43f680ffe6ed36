from __future__ import annotations

"""
Sink Set Assembly.

Selects, once, which sink implementations exist for this process: the
real sink when its capability is compiled in, a NullSink otherwise.
Runtime switches are checked later by each sink on every call.
"""

import time
from dataclasses import dataclass
from typing import Callable, Iterator, Optional

from logrouter.core.sinks.base import LogSink, NullSink
from logrouter.core.sinks.console import ConsoleSink
from logrouter.core.sinks.display import DisplaySink, DisplaySurface
from logrouter.core.sinks.file_session import FileSink
from logrouter.domain.config import RouterSettings


@dataclass(frozen=True)
class SinkSet:
    """The three sinks of a router, in dispatch order."""
    console: LogSink
    file: LogSink
    display: LogSink

    def __iter__(self) -> Iterator[LogSink]:
        return iter((self.console, self.file, self.display))


def build_sinks(
        settings: RouterSettings,
        *,
        surface_factory: Optional[Callable[[], DisplaySurface]] = None,
        clock: Callable[[], float] = time.monotonic,
) -> SinkSet:
    """
    Build the sink set for the compiled capabilities in ``settings``.

    Args:
        settings: Router settings; only ``compiled`` is read here.
        surface_factory: Lazily creates the display surface on first use.
        clock: Monotonic clock used by the display sink for expiration.

    Returns:
        SinkSet: Real or stripped sinks.
    """
    compiled = settings.compiled
    console: LogSink = ConsoleSink(settings) if compiled.console else NullSink("console")
    file: LogSink = FileSink(settings) if compiled.file else NullSink("file")
    display: LogSink = (
        DisplaySink(settings, surface_factory=surface_factory, clock=clock)
        if compiled.screen
        else NullSink("display")
    )
    return SinkSet(console=console, file=file, display=display)
