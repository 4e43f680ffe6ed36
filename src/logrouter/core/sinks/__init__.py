from __future__ import annotations

from .base import LogSink, NullSink
from .console import CONSOLE_LOGGER_NAME, ConsoleSink
from .display import (
    DisplaySink,
    DisplayState,
    DisplaySurface,
    RingBuffer,
    format_screen_line,
)
from .factory import SinkSet, build_sinks
from .file_session import FileSession, FileSink, SessionState, format_entry_block

__all__ = [
    "LogSink",
    "NullSink",
    "CONSOLE_LOGGER_NAME",
    "ConsoleSink",
    "DisplaySink",
    "DisplayState",
    "DisplaySurface",
    "RingBuffer",
    "format_screen_line",
    "SinkSet",
    "build_sinks",
    "FileSession",
    "FileSink",
    "SessionState",
    "format_entry_block",
]
