from __future__ import annotations

"""
On-Screen Log Panel.

CustomTkinter implementation of the display surface. Receives snapshots
of the visible ring buffer entries from any thread through a queue and
renders the latest one on the Tk thread, colored by severity.
"""

import queue
from typing import Any, Dict, List, Sequence

import customtkinter as ctk

from logrouter.core.sinks.display import format_screen_line
from logrouter.domain.log_models import LogEntry, Severity

SEVERITY_COLORS: Dict[Severity, str] = {
    Severity.INFO: "#4CAF50",
    Severity.WARNING: "#FFC107",
    Severity.ERROR: "#F44336",
    Severity.ASSERTION: "#E040FB",
    Severity.EXCEPTION: "#00BCD4",
}

POLL_INTERVAL_MS = 100

# -----------------------------------------------------------------------------
# SCREEN LOG VIEW CLASS
# -----------------------------------------------------------------------------

class ScreenLogFrame(ctk.CTkFrame):
    """
    Read-only terminal-like panel showing the transient log entries.

    Implements the ``DisplaySurface`` protocol.
    """

    def __init__(self, master: Any, **kwargs: Any):
        """
        Initialize the panel.

        Args:
            master: Parent UI container.
        """
        super().__init__(master, corner_radius=10, border_width=2, border_color="#00CC00", **kwargs)
        self.grid_columnconfigure(0, weight=1)
        self.grid_rowconfigure(0, weight=1)

        self.textbox = ctk.CTkTextbox(self, state="disabled", font=("Consolas", 11), wrap="word")
        self.textbox.grid(row=0, column=0, sticky="nsew", padx=6, pady=6)
        for severity, color in SEVERITY_COLORS.items():
            self.textbox.tag_config(_tag_for(severity), foreground=color)

        self._pending: "queue.Queue[List[LogEntry]]" = queue.Queue()
        self._visible = True
        self._poll_job = self.after(POLL_INTERVAL_MS, self._poll)

    # -------------------------------------------------------------------------
    # DISPLAY SURFACE API
    # -------------------------------------------------------------------------

    def show_entries(self, entries: Sequence[LogEntry]) -> None:
        """Queue a snapshot for rendering on the Tk thread."""
        self._pending.put(list(entries))

    def set_visible(self, visible: bool) -> None:
        self._visible = bool(visible)
        if self._visible:
            self.grid()
        else:
            self.grid_remove()

    def is_visible(self) -> bool:
        return self._visible

    def destroy(self) -> None:
        if self._poll_job is not None:
            self.after_cancel(self._poll_job)
            self._poll_job = None
        super().destroy()

    # -------------------------------------------------------------------------
    # RENDERING
    # -------------------------------------------------------------------------

    def _poll(self) -> None:
        """Render only the most recent queued snapshot."""
        latest = None
        while True:
            try:
                latest = self._pending.get_nowait()
            except queue.Empty:
                break
        if latest is not None:
            self._render(latest)
        self._poll_job = self.after(POLL_INTERVAL_MS, self._poll)

    def _render(self, entries: Sequence[LogEntry]) -> None:
        self.textbox.configure(state="normal")
        self.textbox.delete("1.0", "end")
        for entry in entries:
            self.textbox.insert("end", format_screen_line(entry) + "\n", _tag_for(entry.severity))
        self.textbox.see("end")
        self.textbox.configure(state="disabled")


def _tag_for(severity: Severity) -> str:
    return f"log-{severity.value.lower()}"
