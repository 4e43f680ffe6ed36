from __future__ import annotations

"""
Sink Lifecycle Controller.

Owns the sink set of a router and governs its process-level lifecycle:
a guarded one-time initialization that registers exactly one teardown
hook, and a single shutdown that closes every sink (file footer and
handle release, display surface teardown).
"""

import atexit
import logging
import threading
from enum import Enum
from typing import Callable, Optional

from logrouter.core.sinks.display import DisplaySink
from logrouter.core.sinks.factory import SinkSet
from logrouter.core.sinks.file_session import FileSession, FileSink
from logrouter.domain.config import RouterSettings
from logrouter.domain.log_models import Severity, create_entry

logger = logging.getLogger(__name__)


class LifecycleState(Enum):
    """Router lifecycle states. SHUTDOWN is terminal."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    SHUTTING_DOWN = "shutting_down"
    SHUTDOWN = "shutdown"


class LifecycleController:
    """
    Guarded initialization and teardown of the sinks.

    ``initialize`` performs no sink work beyond a console announcement;
    the file session and display surface are created lazily by their
    sinks on first real use.
    """

    def __init__(
            self,
            settings: RouterSettings,
            sinks: SinkSet,
            *,
            register_hook: Callable[[Callable[[], None]], object] = atexit.register,
    ):
        self._settings = settings
        self._sinks = sinks
        self._register_hook = register_hook
        self._state = LifecycleState.UNINITIALIZED
        self._hook_registered = False
        self._lock = threading.Lock()

    # -------------------------------------------------------------------------
    # STATE
    # -------------------------------------------------------------------------

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def is_initialized(self) -> bool:
        return self._state is not LifecycleState.UNINITIALIZED

    @property
    def is_shutdown(self) -> bool:
        return self._state in (LifecycleState.SHUTTING_DOWN, LifecycleState.SHUTDOWN)

    @property
    def sinks(self) -> SinkSet:
        return self._sinks

    @property
    def file_session(self) -> Optional[FileSession]:
        """The single file session, or None when file logging is stripped."""
        file_sink = self._sinks.file
        return file_sink.session if isinstance(file_sink, FileSink) else None

    @property
    def display(self) -> Optional[DisplaySink]:
        """The single display sink, or None when screen logging is stripped."""
        display = self._sinks.display
        return display if isinstance(display, DisplaySink) else None

    # -------------------------------------------------------------------------
    # LIFECYCLE
    # -------------------------------------------------------------------------

    def initialize(self) -> bool:
        """
        Move to READY and register the teardown hook.

        Idempotent and safe to call from several threads.

        Returns:
            bool: True for the call that performed the initialization.
        """
        if self._state is not LifecycleState.UNINITIALIZED:
            return False

        with self._lock:
            if self._state is not LifecycleState.UNINITIALIZED:
                return False

            if not self._hook_registered:
                try:
                    self._register_hook(self.shutdown)
                    self._hook_registered = True
                except Exception as e:
                    logger.warning(f"Could not register logging teardown hook: {e}")

            self._state = LifecycleState.READY

        self._announce("Logging system initialized")
        self._announce(f"Enabled logging types: {self._settings.enabled_capabilities()}")
        return True

    def shutdown(self) -> None:
        """
        Close every sink exactly once.

        Returns only after the file footer has been flushed and the handle
        released. Safe when ``initialize`` never ran or failed halfway.
        """
        with self._lock:
            if self.is_shutdown:
                return
            self._state = LifecycleState.SHUTTING_DOWN

        for sink in self._sinks:
            try:
                sink.close()
            except Exception as e:
                logger.error(f"Error during logging cleanup of the {sink.name} sink: {e}")

        self._state = LifecycleState.SHUTDOWN
        self._announce("Logging cleanup completed")

    # -------------------------------------------------------------------------
    # PRIVATE HELPERS
    # -------------------------------------------------------------------------

    def _announce(self, message: str) -> None:
        """Status messages go to the console sink only."""
        try:
            self._sinks.console.emit(create_entry(message, Severity.INFO))
        except Exception as e:
            logger.debug(f"Console announcement failed: {e}")
