from __future__ import annotations

"""
Logging Handlers and Low-Level Utilities.

Provides handler factories and the tagging mechanism that lets the
router distinguish its own handlers from those installed by the host
application or third-party libraries.
"""

import logging
import sys
from typing import IO, Optional

# Internal attribute used to tag and identify our own handlers
_HANDLER_TAG_ATTR: str = "_logrouter_handler"


# ==============================================================================
# INTERNAL LOGGING UTILITIES
# ==============================================================================

def _tag_handler(handler: logging.Handler) -> None:
    """
    Mark a handler as an internally-managed handler.

    Args:
        handler: The logging handler instance to tag.
    """
    try:
        setattr(handler, _HANDLER_TAG_ATTR, True)
    except Exception:
        pass


def _is_our_handler(handler: logging.Handler) -> bool:
    """
    Verify if a handler was initialized by this module.

    Args:
        handler: The handler to inspect.

    Returns:
        bool: True if the handler carries our internal tag.
    """
    return bool(getattr(handler, _HANDLER_TAG_ATTR, False))


def _create_console_handler(
        level_int: int,
        formatter: logging.Formatter,
        stream: Optional[IO[str]] = None,
) -> logging.StreamHandler:
    """
    Initialize a tagged stderr StreamHandler.

    Args:
        level_int: Numeric logging level.
        formatter: Pre-configured logging formatter.
        stream: Target stream, stderr by default.

    Returns:
        logging.StreamHandler: Configured handler.
    """
    sh = logging.StreamHandler(stream or sys.stderr)
    sh.setLevel(level_int)
    sh.setFormatter(formatter)
    _tag_handler(sh)
    return sh
