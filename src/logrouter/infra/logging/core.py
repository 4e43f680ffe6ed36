from __future__ import annotations

"""
Diagnostic Logging Bootstrap.

Installs the stderr output behind the console sink and the router's own
module loggers. Records are handed to a QueueListener thread so that a
GUI thread emitting a console entry never blocks on the stream.
"""

import atexit
import logging
import queue
import sys
from logging.handlers import QueueHandler, QueueListener
from typing import Optional

from logrouter.infra.logging.config import _LEVEL_MAP, LoggingConfig
from logrouter.infra.logging.handlers import (
    _create_console_handler,
    _is_our_handler,
    _tag_handler,
)

# Root logger attributes marking our installation
_CONFIGURED_FLAG_ATTR: str = "_logrouter_configured"
_QUEUE_LISTENER_ATTR: str = "_logrouter_queue_listener"


# ==============================================================================
# PUBLIC API
# ==============================================================================

def configure_logging(cfg: LoggingConfig, *, force: bool = False) -> logging.Logger:
    """
    Install the queued stderr handler on the root logger.

    A second call is a no-op unless ``force`` is set, in which case the
    previous listener is drained and replaced.

    Args:
        cfg: Level and console format.
        force: Replace an existing installation.

    Returns:
        logging.Logger: The root logger.
    """
    root = logging.getLogger()
    if getattr(root, _CONFIGURED_FLAG_ATTR, False) and not force:
        return root

    try:
        level = _LEVEL_MAP.get(str(cfg.level or "").strip().upper(), logging.INFO)
        root.setLevel(level)
        _detach(root)

        if cfg.console:
            formatter = logging.Formatter(cfg.console_fmt, datefmt=cfg.datefmt)
            records: queue.Queue[logging.LogRecord] = queue.Queue(-1)
            listener = QueueListener(
                records,
                _create_console_handler(level, formatter),
                respect_handler_level=True,
            )
            listener.start()

            queue_handler = QueueHandler(records)
            _tag_handler(queue_handler)
            root.addHandler(queue_handler)
            setattr(root, _QUEUE_LISTENER_ATTR, listener)
            atexit.register(_stop_listener, listener)

        setattr(root, _CONFIGURED_FLAG_ATTR, True)
        return root

    except Exception as e:
        # Direct stderr output without the listener thread
        _detach(root)
        fallback = logging.StreamHandler(sys.stderr)
        fallback.setFormatter(logging.Formatter("CRITICAL FALLBACK | %(levelname)s | %(message)s"))
        _tag_handler(fallback)
        root.addHandler(fallback)
        root.warning(f"Queued console logging unavailable ({e}). Writing to stderr directly.")
        return root


def shutdown_logging() -> None:
    """
    Drain the listener and remove every handler installed here.

    Leaves the root logger ready for a fresh ``configure_logging`` call.
    """
    root = logging.getLogger()
    _detach(root)
    if hasattr(root, _CONFIGURED_FLAG_ATTR):
        delattr(root, _CONFIGURED_FLAG_ATTR)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _detach(root: logging.Logger) -> None:
    """Stop our listener and drop our tagged handlers from ``root``."""
    _stop_listener(getattr(root, _QUEUE_LISTENER_ATTR, None))
    setattr(root, _QUEUE_LISTENER_ATTR, None)

    for handler in [h for h in root.handlers if _is_our_handler(h)]:
        root.removeHandler(handler)
        handler.close()


def _stop_listener(listener: Optional[QueueListener]) -> None:
    """Stop a listener once; a listener already joined (atexit after a reset) is skipped."""
    if listener is not None and getattr(listener, "_thread", None) is not None:
        listener.stop()
