from __future__ import annotations

"""
Process-Scoped Router Accessor.

One router per process, created explicitly with ``init_router`` and
reached from anywhere with ``get_router``. ``reset_router`` shuts the
current router down, which keeps tests independent.
"""

import logging
import threading
from typing import Any, Optional

from logrouter.core.dispatcher import LogRouter
from logrouter.domain.config import RouterSettings

logger = logging.getLogger(__name__)

_router: Optional[LogRouter] = None
_router_lock = threading.Lock()


def init_router(settings: Optional[RouterSettings] = None, **kwargs: Any) -> LogRouter:
    """
    Create the process router, or return the existing one.

    Args:
        settings: Settings for a new router; ignored when one exists.
        **kwargs: Extra ``LogRouter`` constructor arguments.

    Returns:
        LogRouter: The process router.
    """
    global _router
    with _router_lock:
        if _router is None:
            _router = LogRouter(settings, **kwargs)
        elif settings is not None:
            logger.debug("init_router: router already exists; new settings ignored.")
        return _router


def get_router() -> LogRouter:
    """
    Return the process router, creating one with default settings if needed.
    """
    router = _router
    if router is not None:
        return router
    return init_router()


def reset_router() -> None:
    """Shut down and forget the process router."""
    global _router
    with _router_lock:
        router, _router = _router, None
    if router is not None:
        router.shutdown()
