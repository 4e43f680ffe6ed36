from __future__ import annotations

"""
Persistent Console Sink.

Forwards entries to the ``logrouter.console`` logger of the standard
logging tree, which ``infra.logging`` routes to stderr.
"""

import logging
from typing import Dict, Optional

from logrouter.core.sinks.base import LogSink
from logrouter.domain.config import RouterSettings
from logrouter.domain.log_models import LogEntry, Severity

CONSOLE_LOGGER_NAME = "logrouter.console"

_SEVERITY_LEVELS: Dict[Severity, int] = {
    Severity.INFO: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
    Severity.ASSERTION: logging.ERROR,
    Severity.EXCEPTION: logging.ERROR,
}


class ConsoleSink(LogSink):
    """Console-equivalent sink backed by a stdlib logger."""

    name = "console"

    def __init__(self, settings: RouterSettings, logger: Optional[logging.Logger] = None):
        self._settings = settings
        self._logger = logger or logging.getLogger(CONSOLE_LOGGER_NAME)

    def is_enabled(self) -> bool:
        return self._settings.console_active

    def emit(self, entry: LogEntry) -> None:
        if not self.is_enabled():
            return

        level = _SEVERITY_LEVELS.get(entry.severity, logging.INFO)
        text = entry.message
        if entry.severity is Severity.ASSERTION:
            text = f"Assertion: {text}"

        if entry.error is not None:
            text = f"{text}\nException: {entry.error.summary}"
            if entry.error.stack_trace:
                text = f"{text}\n{entry.error.stack_trace}"

        self._logger.log(level, text)
