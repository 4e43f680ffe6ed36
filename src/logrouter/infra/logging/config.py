from __future__ import annotations

"""
Logging Configuration Models.

Defines the data structures and constants required to initialize the
diagnostic logging subsystem that backs the console sink and the
router's own internal messages.
"""

import logging
from dataclasses import dataclass
from typing import Dict

# Mapping of string identifiers to native logging constants
_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable specification for the diagnostic logging initialization.

    Attributes:
        level: Minimum severity level to capture.
        console: Flag to enable stderr stream output.
        console_fmt: Structural format for terminal output.
        datefmt: Chronological format for timestamp generation.
    """
    level: str = "INFO"
    console: bool = True

    console_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
    datefmt: str = "%H:%M:%S"
