from __future__ import annotations

"""
Log Domain Data Models.

Defines the value objects that travel from the dispatcher to every sink:
the severity enumeration, the structured error payload, the immutable
log entry and the capability set reported for diagnostics.
"""

import time
import traceback
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

# -----------------------------------------------------------------------------
# SEVERITY
# -----------------------------------------------------------------------------

class Severity(Enum):
    """
    Fixed set of message severities.

    The enum value is the exact label written between brackets in the
    durable log file.
    """

    INFO = "Info"
    WARNING = "Warning"
    ERROR = "Error"
    ASSERTION = "Assertion"
    EXCEPTION = "Exception"

    def __str__(self) -> str:
        return self.value

# -----------------------------------------------------------------------------
# PAYLOADS AND ENTRIES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ErrorPayload:
    """
    Structured error details attached to a log entry.

    Attributes:
        summary: One-line description (exception type and message).
        stack_trace: Formatted traceback text, possibly empty.
    """
    summary: str
    stack_trace: str = ""

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorPayload":
        """
        Translate a Python exception into a payload.

        Args:
            exc: Exception instance, raised or not.

        Returns:
            ErrorPayload: Summary ``"Type: message"`` and the formatted traceback.
        """
        summary = f"{type(exc).__name__}: {exc}" if str(exc) else type(exc).__name__
        trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return cls(summary=summary, stack_trace=trace.rstrip("\n"))


@dataclass(frozen=True)
class LogEntry:
    """
    Immutable record of a single log request.

    Attributes:
        message: Free text, may carry embedded markup.
        severity: Message severity.
        error: Optional structured error payload.
        created_at: Monotonic capture time in seconds.
        expires_at: Monotonic time after which the entry is hidden from
            the on-screen display; defaults to ``created_at``.
        wall_time: Local wall-clock capture time used for text stamps.
    """
    message: str
    severity: Severity = Severity.INFO
    error: Optional[ErrorPayload] = None
    created_at: float = field(default_factory=time.monotonic)
    expires_at: Optional[float] = None
    wall_time: datetime = field(default_factory=datetime.now)

    def __post_init__(self) -> None:
        if self.expires_at is None:
            object.__setattr__(self, "expires_at", self.created_at)
        if self.expires_at < self.created_at:
            raise ValueError(
                f"expires_at ({self.expires_at}) precedes created_at ({self.created_at})."
            )

    def is_visible(self, now: float) -> bool:
        """True while ``now`` has not passed the expiration time."""
        return now <= self.expires_at


def create_entry(
        message: str,
        severity: Severity = Severity.INFO,
        error: Optional[ErrorPayload] = None,
        display_seconds: float = 0.0,
        now: Optional[float] = None,
) -> LogEntry:
    """
    Build a log entry stamped with the current clocks.

    Args:
        message: Text to log.
        severity: Message severity.
        error: Optional error payload.
        display_seconds: On-screen lifetime; negative values count as zero.
        now: Monotonic capture time override (tests, replay).

    Returns:
        LogEntry: The stamped entry.
    """
    created = time.monotonic() if now is None else now
    return LogEntry(
        message=message if message is not None else "",
        severity=severity,
        error=error,
        created_at=created,
        expires_at=created + max(0.0, float(display_seconds)),
    )

# -----------------------------------------------------------------------------
# CAPABILITIES
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class LoggingCapabilities:
    """
    Set of sinks, in the stable order Console, File, Screen.

    Used both for the compiled-in sink set and for the currently enabled
    one returned by the capability query.
    """
    console: bool = False
    file: bool = False
    screen: bool = False

    def names(self) -> List[str]:
        enabled: List[str] = []
        if self.console:
            enabled.append("Console")
        if self.file:
            enabled.append("File")
        if self.screen:
            enabled.append("Screen")
        return enabled

    def __str__(self) -> str:
        enabled = self.names()
        return ", ".join(enabled) if enabled else "None"


ALL_CAPABILITIES = LoggingCapabilities(console=True, file=True, screen=True)
NO_CAPABILITIES = LoggingCapabilities()
