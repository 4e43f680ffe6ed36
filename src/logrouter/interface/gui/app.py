from __future__ import annotations

"""
GUI Demo Window.

Builds a CustomTkinter window with the on-screen log panel attached to
the process router, a row of buttons emitting each severity, and the
panel controls (toggle, clear). Expired entries disappear through a
periodic refresh of the display sink.
"""

import logging
import threading
from typing import Optional

import customtkinter as ctk

from logrouter.core.dispatcher import LogRouter
from logrouter.domain.log_models import Severity
from logrouter.interface.gui.screen_log import ScreenLogFrame
from logrouter.runtime import get_router

logger = logging.getLogger(__name__)

REFRESH_INTERVAL_MS = 250


def build_window(router: LogRouter) -> ctk.CTk:
    """
    Assemble the demo window and attach its panel to ``router``.

    Args:
        router: Router whose display sink feeds the panel.

    Returns:
        ctk.CTk: The root window, not yet running.
    """
    app = ctk.CTk()
    app.title("logrouter - Screen Log")
    app.geometry("900x520")
    app.grid_columnconfigure(0, weight=1)
    app.grid_rowconfigure(1, weight=1)

    # -----------------------------------------------------------------------------
    # CONTROLS
    # -----------------------------------------------------------------------------
    controls = ctk.CTkFrame(app, fg_color="transparent")
    controls.grid(row=0, column=0, sticky="ew", padx=10, pady=10)

    counter = {"n": 0}

    def emit(severity: Severity) -> None:
        counter["n"] += 1
        router.log(f"GUI Test {severity.value} #{counter['n']}", True, severity)

    def emit_exception() -> None:
        try:
            raise RuntimeError("Test exception from GUI")
        except RuntimeError as e:
            router.exception(e, "Exception from GUI")

    def emit_from_worker() -> None:
        threading.Thread(
            target=lambda: router.log("Message from background thread", True, Severity.INFO),
            daemon=True,
        ).start()

    buttons = [
        ("Test Log", lambda: emit(Severity.INFO)),
        ("Test Warning", lambda: emit(Severity.WARNING)),
        ("Test Error", lambda: emit(Severity.ERROR)),
        ("Test Assert", lambda: emit(Severity.ASSERTION)),
        ("Test Exception", emit_exception),
        ("Worker Thread", emit_from_worker),
        ("Toggle Screen Log", router.toggle_screen),
        ("Clear", router.clear_screen),
    ]
    for col, (label, command) in enumerate(buttons):
        ctk.CTkButton(controls, text=label, width=100, command=command).grid(row=0, column=col, padx=4)

    # -----------------------------------------------------------------------------
    # PANEL
    # -----------------------------------------------------------------------------
    panel = ScreenLogFrame(app)
    panel.grid(row=1, column=0, sticky="nsew", padx=10, pady=(0, 10))
    router.attach_display_surface(panel)

    def tick() -> None:
        router.refresh_screen()
        app.after(REFRESH_INTERVAL_MS, tick)

    app.after(REFRESH_INTERVAL_MS, tick)

    def on_closing() -> None:
        router.shutdown()
        app.destroy()

    app.protocol("WM_DELETE_WINDOW", on_closing)
    return app


def main(router: Optional[LogRouter] = None) -> None:
    """
    Launch the demo window on the given (or process) router.

    Screen logging is switched on for the session.
    """
    active = router or get_router()
    active.set_sink_enabled("screen", True)
    logger.info("GUI Lifecycle: Launching screen log demo window.")

    app = build_window(active)
    active.info("Screen log attached. Use the buttons to emit entries.")
    app.mainloop()
