from __future__ import annotations

"""
Unit tests for the Console Sink and the stripped NullSink.

Verifies:
1. Severity to logging level mapping.
2. Assertion prefix and exception block rendering.
3. Runtime switch gating.
4. Stripped sinks never act.
"""

import logging

from logrouter.core.sinks.base import NullSink
from logrouter.core.sinks.console import CONSOLE_LOGGER_NAME, ConsoleSink
from logrouter.domain.log_models import ErrorPayload, Severity, create_entry


def _records(caplog):
    return [r for r in caplog.records if r.name == CONSOLE_LOGGER_NAME]


def test_severity_levels(settings, caplog) -> None:
    caplog.set_level(logging.DEBUG, logger=CONSOLE_LOGGER_NAME)
    sink = ConsoleSink(settings)

    for severity in Severity:
        sink.emit(create_entry(f"msg {severity}", severity))

    levels = [r.levelno for r in _records(caplog)]
    assert levels == [logging.INFO, logging.WARNING, logging.ERROR, logging.ERROR, logging.ERROR]


def test_assertion_prefix(settings, caplog) -> None:
    caplog.set_level(logging.INFO, logger=CONSOLE_LOGGER_NAME)

    ConsoleSink(settings).emit(create_entry("invariant broken", Severity.ASSERTION))

    assert _records(caplog)[0].getMessage() == "Assertion: invariant broken"


def test_exception_block(settings, caplog) -> None:
    caplog.set_level(logging.INFO, logger=CONSOLE_LOGGER_NAME)
    payload = ErrorPayload("ValueError: bad", "Traceback...\nValueError: bad")

    ConsoleSink(settings).emit(create_entry("Caught", Severity.EXCEPTION, payload))

    assert _records(caplog)[0].getMessage() == (
        "Caught\nException: ValueError: bad\nTraceback...\nValueError: bad"
    )


def test_exception_severity_without_payload_logs_message(settings, caplog) -> None:
    caplog.set_level(logging.INFO, logger=CONSOLE_LOGGER_NAME)

    ConsoleSink(settings).emit(create_entry("just text", Severity.EXCEPTION))

    assert _records(caplog)[0].getMessage() == "just text"


def test_disabled_console_is_silent(settings, caplog) -> None:
    caplog.set_level(logging.INFO, logger=CONSOLE_LOGGER_NAME)
    settings.console_enabled = False
    sink = ConsoleSink(settings)

    sink.emit(create_entry("hidden"))

    assert not sink.is_enabled()
    assert _records(caplog) == []


def test_null_sink_never_acts() -> None:
    sink = NullSink("file")

    assert sink.is_enabled() is False
    assert sink.emit(create_entry("x")) is None
    sink.close()
    assert repr(sink) == "NullSink('file')"
