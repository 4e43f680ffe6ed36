from __future__ import annotations

"""
Durable File Sink.

Owns the append-mode file handle of one logging session. A session is
framed by exactly one start header and, on clean shutdown, exactly one
end footer. Every entry is written and flushed synchronously under the
session lock, so a concurrent close can never interleave with a
partially written line.
"""

import logging
import platform
import threading
from datetime import datetime
from enum import Enum
from typing import Callable, Iterable, List, Optional, TextIO

from logrouter.core.sinks.base import LogSink
from logrouter.domain import constants as const
from logrouter.domain.config import RouterSettings
from logrouter.domain.errors import ConfigurationInvalidError, SinkIOError
from logrouter.domain.log_models import LogEntry
from logrouter.infra.fs import ensure_parent_dir

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# FORMATTING
# -----------------------------------------------------------------------------

def format_entry_block(entry: LogEntry) -> str:
    """
    Render an entry in the durable file format.

    ``[yyyy-MM-dd HH:mm:ss.fff] [<Severity>] <message>``, followed by an
    ``Exception: <summary>`` line and the stack trace when the entry
    carries an error payload.

    Args:
        entry: The entry to render.

    Returns:
        str: One or more lines, without trailing newline.
    """
    stamp = entry.wall_time.strftime(const.ENTRY_STAMP_FORMAT)[:-3]
    lines = [f"[{stamp}] [{entry.severity.value}] {entry.message}"]
    if entry.error is not None:
        lines.append(f"Exception: {entry.error.summary}")
        if entry.error.stack_trace:
            lines.append(entry.error.stack_trace.rstrip("\n"))
    return "\n".join(lines)


def _session_stamp(clock: Callable[[], datetime]) -> str:
    return clock().strftime(const.SESSION_STAMP_FORMAT)

# -----------------------------------------------------------------------------
# FILE SESSION
# -----------------------------------------------------------------------------

class SessionState(Enum):
    """Lifecycle states of a FileSession."""

    CLOSED = "closed"
    OPEN = "open"
    FINISHED = "finished"
    DISABLED = "disabled"


class FileSession:
    """
    Session-scoped writer for the durable log file.

    ``CLOSED -> OPEN`` on the first write or ``ensure_open``; ``close`` moves
    an OPEN or never-opened session to FINISHED; ``CLOSED -> DISABLED`` when
    opening fails.
    FINISHED and DISABLED are only left through an explicit ``reset``.
    """

    def __init__(
            self,
            path: str,
            *,
            opener: Callable[..., TextIO] = open,
            clock: Callable[[], datetime] = datetime.now,
    ):
        self._path = path
        self._opener = opener
        self._clock = clock
        self._handle: Optional[TextIO] = None
        self._state = SessionState.CLOSED
        self._last_error: Optional[str] = None
        self._lock = threading.RLock()

    # -------------------------------------------------------------------------
    # STATE
    # -------------------------------------------------------------------------

    @property
    def path(self) -> str:
        return self._path

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is SessionState.OPEN

    @property
    def is_disabled(self) -> bool:
        return self._state is SessionState.DISABLED

    @property
    def last_error(self) -> Optional[str]:
        return self._last_error

    def retarget(self, path: str) -> None:
        """Change the target path; only effective before the session opens."""
        with self._lock:
            if self._state is SessionState.CLOSED:
                self._path = path

    # -------------------------------------------------------------------------
    # LIFECYCLE
    # -------------------------------------------------------------------------

    def ensure_open(self, metadata_lines: Iterable[str] = ()) -> bool:
        """
        Open the session if it has never been opened.

        Creates the parent directory, opens the file in append mode, writes
        the start header followed by the metadata lines and flushes.

        Args:
            metadata_lines: Header metadata supplied by the caller.

        Returns:
            bool: True when the session is open after the call.

        Raises:
            ConfigurationInvalidError: The path is empty (first failure only).
            SinkIOError: The file cannot be created (first failure only).
        """
        with self._lock:
            if self._state is SessionState.OPEN:
                return True
            if self._state is not SessionState.CLOSED:
                return False

            if not (self._path or "").strip():
                self._disable("Log file path is empty.")
                raise ConfigurationInvalidError("Log file path is empty.")

            handle: Optional[TextIO] = None
            try:
                ensure_parent_dir(self._path)
                handle = self._opener(self._path, "a", encoding="utf-8")
                separator = "\n" if handle.tell() > 0 else ""
                header: List[str] = [
                    separator + const.SESSION_START_TEMPLATE.format(stamp=_session_stamp(self._clock))
                ]
                header.extend(metadata_lines)
                handle.write("\n".join(header) + "\n\n")
                handle.flush()
            except (OSError, ValueError) as e:
                if handle is not None:
                    _close_quietly(handle)
                self._disable(f"Failed to open log file '{self._path}': {e}")
                raise SinkIOError(self._last_error) from e

            self._handle = handle
            self._state = SessionState.OPEN
            logger.debug(f"File logging initialized: {self._path}")
            return True

    def write_line(self, entry: LogEntry, metadata_lines: Iterable[str] = ()) -> bool:
        """
        Append one entry and flush it to disk.

        Opens the session on first use. After a failed open, or once the
        session is closed, this is a silent no-op.

        Args:
            entry: The entry to persist.
            metadata_lines: Header metadata used if the session opens now.

        Returns:
            bool: True when the entry reached the file.

        Raises:
            SinkIOError: First open failure, or a write failure (which also
                disables the session).
        """
        with self._lock:
            if not self.ensure_open(metadata_lines) or self._handle is None:
                return False
            try:
                self._handle.write(format_entry_block(entry) + "\n")
                self._handle.flush()
            except (OSError, ValueError) as e:
                self._release_handle()
                self._disable(f"Failed to write to log file '{self._path}': {e}")
                raise SinkIOError(self._last_error) from e
            return True

    def flush(self) -> None:
        """Flush buffered data of an open session."""
        with self._lock:
            if self._handle is None:
                return
            try:
                self._handle.flush()
            except (OSError, ValueError) as e:
                self._release_handle()
                self._disable(f"Failed to flush log file '{self._path}': {e}")
                raise SinkIOError(self._last_error) from e

    def close(self) -> bool:
        """
        Write the end footer, flush and release the handle.

        Subsequent calls are no-ops. A session that never opened moves
        straight to FINISHED without touching the file, so it cannot be
        opened later except through ``reset``.

        Returns:
            bool: True when this call wrote the footer.

        Raises:
            SinkIOError: The footer could not be written; the handle is
                released anyway.
        """
        with self._lock:
            if self._state is SessionState.CLOSED:
                self._state = SessionState.FINISHED
                return False
            if self._state is not SessionState.OPEN or self._handle is None:
                return False
            try:
                footer = const.SESSION_END_TEMPLATE.format(stamp=_session_stamp(self._clock))
                self._handle.write("\n" + footer + "\n")
                self._handle.flush()
            except (OSError, ValueError) as e:
                self._last_error = f"Failed to finalize log file '{self._path}': {e}"
                raise SinkIOError(self._last_error) from e
            finally:
                self._release_handle()
                self._state = SessionState.FINISHED
            return True

    def reset(self, path: Optional[str] = None) -> None:
        """
        Explicit re-initialization.

        Closes an open session (footer included), clears a disabled state
        and optionally retargets the path. The next write opens a new
        session.
        """
        with self._lock:
            try:
                self.close()
            finally:
                self._release_handle()
                self._state = SessionState.CLOSED
                self._last_error = None
                if path is not None:
                    self._path = path

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _disable(self, reason: str) -> None:
        self._state = SessionState.DISABLED
        self._last_error = reason
        logger.error(f"{reason} File logging disabled for this session.")

    def _release_handle(self) -> None:
        if self._handle is not None:
            _close_quietly(self._handle)
            self._handle = None


def _close_quietly(handle: TextIO) -> None:
    try:
        handle.close()
    except (OSError, ValueError):
        pass

# -----------------------------------------------------------------------------
# SINK ADAPTER
# -----------------------------------------------------------------------------

class FileSink(LogSink):
    """Durable file sink: gates on settings and injects header metadata."""

    name = "file"

    def __init__(self, settings: RouterSettings, session: Optional[FileSession] = None):
        self._settings = settings
        self.session = session or FileSession(settings.log_file_path)

    def is_enabled(self) -> bool:
        return self._settings.file_active and not self.session.is_disabled

    def emit(self, entry: LogEntry) -> None:
        if not self._settings.file_active:
            return
        self.session.retarget(self._settings.log_file_path)
        self.session.write_line(entry, self.metadata_lines())

    def metadata_lines(self) -> List[str]:
        """Header metadata describing the host process and the sink set."""
        s = self._settings
        return [
            f"Platform: {platform.platform()}",
            f"Python Version: {platform.python_version()}",
            f"Product Name: {s.product_name}",
            f"Version: {s.product_version}",
            f"Development Build: {s.development_build}",
            f"Logging Capabilities: {s.enabled_capabilities()}",
        ]

    def flush(self) -> None:
        self.session.flush()

    def close(self) -> None:
        self.session.close()
