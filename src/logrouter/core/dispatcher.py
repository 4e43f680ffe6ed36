from __future__ import annotations

"""
Log Dispatcher.

The routing façade: applies the verbosity gate, lazily initializes the
lifecycle on first use and fans every accepted entry out to the console,
file and display sinks. Each sink call is isolated; a failing sink is
reported to the sinks that still work and never reaches the caller.
"""

import atexit
import logging
import threading
import time
from typing import Any, Callable, List, Optional, Sequence, Union

from logrouter.core.lifecycle import LifecycleController
from logrouter.core.sinks.base import LogSink
from logrouter.core.sinks.display import DisplaySink, DisplaySurface
from logrouter.core.sinks.factory import SinkSet, build_sinks
from logrouter.core.validator import check_max_screen_lines, check_screen_display_seconds
from logrouter.domain import constants as const
from logrouter.domain.config import RouterSettings
from logrouter.domain.log_models import (
    ErrorPayload,
    LogEntry,
    LoggingCapabilities,
    Severity,
    create_entry,
)

logger = logging.getLogger(__name__)

ErrorLike = Union[BaseException, ErrorPayload, None]

_SINK_SWITCHES = {
    "console": "console_enabled",
    "file": "file_enabled",
    "screen": "screen_enabled",
}


class LogRouter:
    """
    Single entry point for application logging.

    Owns the router settings and the lifecycle controller, which in turn
    owns the file session and the ring buffer.
    """

    def __init__(
            self,
            settings: Optional[RouterSettings] = None,
            *,
            surface_factory: Optional[Callable[[], DisplaySurface]] = None,
            clock: Callable[[], float] = time.monotonic,
            register_hook: Callable[[Callable[[], None]], Any] = atexit.register,
            sinks: Optional[SinkSet] = None,
    ):
        self.settings = settings or RouterSettings()
        self._clock = clock
        sink_set = sinks or build_sinks(self.settings, surface_factory=surface_factory, clock=clock)
        self.lifecycle = LifecycleController(self.settings, sink_set, register_hook=register_hook)
        self._reporting = threading.local()

    # -------------------------------------------------------------------------
    # DISPATCH API
    # -------------------------------------------------------------------------

    def log(
            self,
            message: str,
            verbose: bool,
            severity: Severity = Severity.INFO,
            error: ErrorLike = None,
    ) -> None:
        """
        Route a message to every sink.

        Never raises for sink-level failures.

        Args:
            message: Text to log.
            verbose: When False the call is a no-op.
            severity: Message severity.
            error: Exception or payload attached to the entry.
        """
        if not verbose:
            return
        self._ensure_initialized()
        entry = self._make_entry(message, severity, error)
        self._dispatch(entry, list(self.lifecycle.sinks))

    def log_console_only(self, message: str, severity: Severity = Severity.INFO, error: ErrorLike = None) -> None:
        """Console sink only; bypasses the verbosity gate."""
        self._log_single(self.lifecycle.sinks.console, message, severity, error)

    def log_file_only(self, message: str, severity: Severity = Severity.INFO, error: ErrorLike = None) -> None:
        """File sink only; bypasses the verbosity gate."""
        self._log_single(self.lifecycle.sinks.file, message, severity, error)

    def log_screen_only(self, message: str, severity: Severity = Severity.INFO, error: ErrorLike = None) -> None:
        """Display sink only; bypasses the verbosity gate."""
        self._log_single(self.lifecycle.sinks.display, message, severity, error)

    # -------------------------------------------------------------------------
    # CONVENIENCE WRAPPERS
    # -------------------------------------------------------------------------

    def info(self, message: str, verbose: bool = True) -> None:
        self.log(message, verbose, Severity.INFO)

    def warning(self, message: str, verbose: bool = True) -> None:
        self.log(message, verbose, Severity.WARNING)

    def error(self, message: str, verbose: bool = True) -> None:
        self.log(message, verbose, Severity.ERROR)

    def assertion(self, message: str, verbose: bool = True) -> None:
        self.log(message, verbose, Severity.ASSERTION)

    def exception(self, exc: BaseException, message: Optional[str] = None, verbose: bool = True) -> None:
        """Log an exception; the message defaults to "Exception occurred"."""
        self.log(message or const.DEFAULT_EXCEPTION_MESSAGE, verbose, Severity.EXCEPTION, exc)

    # -------------------------------------------------------------------------
    # CONFIGURATION SURFACE
    # -------------------------------------------------------------------------

    def configure(
            self,
            file_logging: bool = False,
            screen_logging: bool = False,
            log_path: Optional[str] = None,
    ) -> None:
        """
        Set the file and screen switches and, optionally, the log path.

        An empty ``log_path`` keeps the current one.
        """
        self.settings.file_enabled = bool(file_logging)
        self.settings.screen_enabled = bool(screen_logging)
        if log_path:
            self.set_log_file_path(log_path)
        self.log(f"Logging configured - File: {file_logging}, Screen: {screen_logging}", True)

    def set_sink_enabled(self, sink: str, enabled: bool) -> None:
        """
        Toggle one runtime switch.

        Args:
            sink: ``"console"``, ``"file"`` or ``"screen"``.
            enabled: New switch value.

        Raises:
            ValueError: Unknown sink name.
        """
        attr = _SINK_SWITCHES.get(str(sink).strip().lower())
        if attr is None:
            raise ValueError(f"Unknown sink '{sink}'. Expected one of: {', '.join(_SINK_SWITCHES)}.")
        setattr(self.settings, attr, bool(enabled))

    def set_max_screen_lines(self, value: int) -> None:
        """Ring buffer capacity; applied on the next append."""
        self.settings.max_screen_lines = check_max_screen_lines(value)

    def set_screen_display_seconds(self, value: float) -> None:
        """On-screen lifetime of entries created from now on."""
        self.settings.screen_display_seconds = check_screen_display_seconds(value)

    def set_log_file_path(self, path: str) -> None:
        """
        Target path of the next file session.

        An empty path is accepted here and reported on first use.
        """
        self.settings.log_file_path = path or ""
        session = self.lifecycle.file_session
        if session is not None:
            session.retarget(self.settings.log_file_path)

    def capabilities(self) -> LoggingCapabilities:
        """Sinks that are compiled in and currently switched on."""
        return self.settings.enabled_capabilities()

    def compiled_capabilities(self) -> LoggingCapabilities:
        return self.settings.compiled

    # -------------------------------------------------------------------------
    # SINK CONTROLS
    # -------------------------------------------------------------------------

    def flush(self) -> None:
        """Flush the file session, if any. Failures are reported, not raised."""
        session = self.lifecycle.file_session
        if session is None:
            return
        try:
            session.flush()
        except Exception as e:
            self._report_failure(self.lifecycle.sinks.file, e, list(self.lifecycle.sinks))

    @property
    def display(self) -> Optional[DisplaySink]:
        return self.lifecycle.display

    def attach_display_surface(self, surface: DisplaySurface) -> None:
        if self.display is not None:
            self.display.attach_surface(surface)

    def set_screen_visible(self, visible: bool) -> None:
        if self.display is not None:
            self.display.set_visible(visible)

    def toggle_screen(self) -> None:
        if self.display is not None:
            self.display.toggle_visible()

    def clear_screen(self) -> None:
        if self.display is not None:
            self.display.clear()

    def refresh_screen(self, now: Optional[float] = None) -> None:
        if self.display is not None:
            self.display.refresh(now)

    def visible_screen_entries(self, now: Optional[float] = None) -> List[LogEntry]:
        if self.display is None:
            return []
        return self.display.visible_entries(now)

    # -------------------------------------------------------------------------
    # LIFECYCLE
    # -------------------------------------------------------------------------

    def initialize(self) -> bool:
        return self.lifecycle.initialize()

    def shutdown(self) -> None:
        """Deterministic teardown: footer written and file released on return."""
        self.lifecycle.shutdown()

    def __enter__(self) -> "LogRouter":
        self.initialize()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.shutdown()

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _ensure_initialized(self) -> None:
        if not self.lifecycle.is_initialized:
            self.lifecycle.initialize()

    def _make_entry(self, message: str, severity: Severity, error: ErrorLike) -> LogEntry:
        payload: Optional[ErrorPayload]
        if isinstance(error, BaseException):
            payload = ErrorPayload.from_exception(error)
        else:
            payload = error
        return create_entry(
            message,
            severity,
            payload,
            display_seconds=self.settings.screen_display_seconds,
            now=self._clock(),
        )

    def _log_single(self, sink: LogSink, message: str, severity: Severity, error: ErrorLike) -> None:
        self._ensure_initialized()
        entry = self._make_entry(message, severity, error)
        self._deliver(sink, entry, list(self.lifecycle.sinks))

    def _dispatch(self, entry: LogEntry, sinks: Sequence[LogSink]) -> None:
        for sink in sinks:
            self._deliver(sink, entry, sinks)

    def _deliver(self, sink: LogSink, entry: LogEntry, sinks: Sequence[LogSink]) -> None:
        try:
            sink.emit(entry)
        except Exception as e:
            self._report_failure(sink, e, sinks)

    def _report_failure(self, failed: LogSink, error: Exception, sinks: Sequence[LogSink]) -> None:
        """Best-effort report of a sink failure to the other enabled sinks."""
        logger.debug(f"Sink '{failed.name}' failed: {error}")
        if getattr(self._reporting, "active", False):
            return

        self._reporting.active = True
        try:
            notice = self._make_entry(f"Logging sink '{failed.name}' failed: {error}", Severity.ERROR, None)
            for sink in sinks:
                if sink is failed or not sink.is_enabled():
                    continue
                try:
                    sink.emit(notice)
                except Exception as e:
                    logger.debug(f"Failure report to sink '{sink.name}' failed: {e}")
        finally:
            self._reporting.active = False
