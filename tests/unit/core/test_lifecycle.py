from __future__ import annotations

"""
Unit tests for the Lifecycle Controller.

Verifies:
1. One-time initialization and a single teardown hook registration.
2. Thread-safe initialization under concurrent first use.
3. Idempotent shutdown, also without prior initialization.
4. Sink close failures do not stop the remaining sinks.
"""

import logging
import threading

from logrouter.core.lifecycle import LifecycleController, LifecycleState
from logrouter.core.sinks import CONSOLE_LOGGER_NAME, SinkSet, build_sinks
from logrouter.core.sinks.base import LogSink


class _RecordingSink(LogSink):
    def __init__(self, name: str, fail_on_close: bool = False):
        self.name = name
        self.closed = 0
        self.fail_on_close = fail_on_close

    def is_enabled(self) -> bool:
        return True

    def emit(self, entry) -> None:
        pass

    def close(self) -> None:
        self.closed += 1
        if self.fail_on_close:
            raise RuntimeError("close failed")


def test_initialize_registers_hook_once(settings) -> None:
    hooks = []
    controller = LifecycleController(settings, build_sinks(settings), register_hook=hooks.append)

    assert controller.initialize() is True
    assert controller.initialize() is False

    assert hooks == [controller.shutdown]
    assert controller.state is LifecycleState.READY


def test_concurrent_initialize_runs_once(settings) -> None:
    hooks = []
    controller = LifecycleController(settings, build_sinks(settings), register_hook=hooks.append)
    results = []
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        results.append(controller.initialize())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count(True) == 1
    assert len(hooks) == 1


def test_initialize_announces_capabilities_on_console(settings, caplog) -> None:
    caplog.set_level(logging.INFO, logger=CONSOLE_LOGGER_NAME)
    settings.file_enabled = False
    controller = LifecycleController(settings, build_sinks(settings), register_hook=lambda fn: None)

    controller.initialize()

    messages = [r.getMessage() for r in caplog.records if r.name == CONSOLE_LOGGER_NAME]
    assert messages == ["Logging system initialized", "Enabled logging types: Console, Screen"]


def test_hook_failure_does_not_block_initialization(settings) -> None:
    def broken_hook(fn):
        raise RuntimeError("no atexit")

    controller = LifecycleController(settings, build_sinks(settings), register_hook=broken_hook)

    assert controller.initialize() is True
    assert controller.is_initialized


def test_shutdown_without_initialize(settings) -> None:
    sinks = SinkSet(_RecordingSink("console"), _RecordingSink("file"), _RecordingSink("display"))
    controller = LifecycleController(settings, sinks, register_hook=lambda fn: None)

    controller.shutdown()
    controller.shutdown()

    assert controller.state is LifecycleState.SHUTDOWN
    assert [s.closed for s in sinks] == [1, 1, 1]


def test_shutdown_continues_after_sink_failure(settings, caplog) -> None:
    sinks = SinkSet(
        _RecordingSink("console"),
        _RecordingSink("file", fail_on_close=True),
        _RecordingSink("display"),
    )
    controller = LifecycleController(settings, sinks, register_hook=lambda fn: None)
    controller.initialize()

    controller.shutdown()

    assert sinks.display.closed == 1
    assert "cleanup of the file sink" in caplog.text
    assert controller.is_shutdown
    assert controller.initialize() is False


def test_accessors_expose_real_sinks_only(settings) -> None:
    controller = LifecycleController(settings, build_sinks(settings), register_hook=lambda fn: None)
    assert controller.file_session is not None
    assert controller.display is not None

    stripped = SinkSet(_RecordingSink("console"), _RecordingSink("file"), _RecordingSink("display"))
    controller = LifecycleController(settings, stripped, register_hook=lambda fn: None)
    assert controller.file_session is None
    assert controller.display is None
