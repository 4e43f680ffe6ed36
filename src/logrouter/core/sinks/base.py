from __future__ import annotations

"""
Base Definitions for Log Sinks.

Provides the abstract sink interface and the no-op implementation that
replaces a sink when it is not compiled into the current build.
"""

from abc import ABC, abstractmethod

from logrouter.domain.log_models import LogEntry


class LogSink(ABC):
    """
    Abstract destination for log entries.

    Implementations decide on their own whether they are enabled and own
    any degraded state after a failure. ``emit`` may raise a
    ``LogRouterError``; the dispatcher isolates every call.
    """

    name: str = "sink"

    @abstractmethod
    def is_enabled(self) -> bool:
        """True when the sink would act on an emitted entry right now."""

    @abstractmethod
    def emit(self, entry: LogEntry) -> None:
        """
        Deliver a log entry to the destination.

        Args:
            entry: The entry to deliver.
        """

    def close(self) -> None:
        """Release owned resources. Safe to call more than once."""


class NullSink(LogSink):
    """
    Stripped sink.

    Chosen once, when the sink set is built, for every sink that is not
    part of the compiled capability set. Never enabled, never acts.
    """

    def __init__(self, name: str):
        self.name = name

    def is_enabled(self) -> bool:
        return False

    def emit(self, entry: LogEntry) -> None:
        return None

    def __repr__(self) -> str:
        return f"NullSink({self.name!r})"
