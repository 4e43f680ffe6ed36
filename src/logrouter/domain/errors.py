from __future__ import annotations

"""
Sink Failure Taxonomy.

Errors raised at the sink boundary. The dispatcher catches all of them;
they never reach the caller of ``LogRouter.log``.
"""


class LogRouterError(Exception):
    """Base class for every failure raised by a sink."""


class SinkUnavailableError(LogRouterError):
    """A sink's backing resource (e.g. the display surface) does not exist yet."""


class SinkIOError(LogRouterError):
    """File create, write or flush failure."""


class ConfigurationInvalidError(SinkIOError):
    """Settings that only fail once used, such as an empty log path."""
