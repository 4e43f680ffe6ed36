from __future__ import annotations

"""
Router Settings Domain.

Holds the process-wide sink enablement state (compiled-in sinks plus the
runtime switches and tunables) and handles persistence of user settings
as JSON in the user data directory.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from logrouter.domain import constants as const
from logrouter.domain.build_profiles import (
    BuildProfile,
    capabilities_for_build,
    parse_build_profile,
)
from logrouter.domain.log_models import ALL_CAPABILITIES, LoggingCapabilities
from logrouter.infra.fs import get_default_log_path, get_default_settings_path

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# SETTINGS MODEL
# -----------------------------------------------------------------------------

@dataclass
class RouterSettings:
    """
    Mutable sink enablement and tuning state.

    ``compiled`` is fixed when the sink set is built; every other field can
    be changed at runtime and is read again on the next use.

    Attributes:
        compiled: Sinks whose real implementation is linked in.
        console_enabled: Runtime switch for the console sink.
        file_enabled: Runtime switch for the durable file sink.
        screen_enabled: Runtime switch for the transient display sink.
        log_file_path: Target of the durable file sink.
        max_screen_lines: Ring buffer capacity (>= 1).
        screen_display_seconds: On-screen lifetime of an entry (>= 0).
        product_name: Header metadata.
        product_version: Header metadata.
        development_build: Header metadata.
    """
    compiled: LoggingCapabilities = ALL_CAPABILITIES

    console_enabled: bool = const.DEFAULT_CONSOLE_ENABLED
    file_enabled: bool = const.DEFAULT_FILE_ENABLED
    screen_enabled: bool = const.DEFAULT_SCREEN_ENABLED

    log_file_path: str = field(default_factory=get_default_log_path)
    max_screen_lines: int = const.DEFAULT_MAX_SCREEN_LINES
    screen_display_seconds: float = const.DEFAULT_SCREEN_DISPLAY_SECONDS

    product_name: str = const.PRODUCT_NAME
    product_version: str = const.PRODUCT_VERSION
    development_build: bool = True

    @property
    def console_active(self) -> bool:
        return self.compiled.console and self.console_enabled

    @property
    def file_active(self) -> bool:
        return self.compiled.file and self.file_enabled

    @property
    def screen_active(self) -> bool:
        return self.compiled.screen and self.screen_enabled

    def enabled_capabilities(self) -> LoggingCapabilities:
        """Sinks that are both compiled in and switched on."""
        return LoggingCapabilities(
            console=self.console_active,
            file=self.file_active,
            screen=self.screen_active,
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RouterSettings":
        """
        Build settings from a normalized settings dictionary.

        The compiled sink set is derived from ``build_profile`` and
        ``disable_file_logging_in_release``.

        Args:
            data: Output of ``validate_settings``.

        Returns:
            RouterSettings: The settings instance.
        """
        profile = parse_build_profile(data.get("build_profile"))
        compiled = capabilities_for_build(
            profile,
            bool(data.get("disable_file_logging_in_release", False)),
        )
        return cls(
            compiled=compiled,
            console_enabled=bool(data.get("console_enabled", const.DEFAULT_CONSOLE_ENABLED)),
            file_enabled=bool(data.get("file_enabled", const.DEFAULT_FILE_ENABLED)),
            screen_enabled=bool(data.get("screen_enabled", const.DEFAULT_SCREEN_ENABLED)),
            log_file_path=str(data.get("log_file_path") or get_default_log_path()),
            max_screen_lines=int(data.get("max_screen_lines", const.DEFAULT_MAX_SCREEN_LINES)),
            screen_display_seconds=float(
                data.get("screen_display_seconds", const.DEFAULT_SCREEN_DISPLAY_SECONDS)
            ),
            development_build=profile is not BuildProfile.RELEASE,
        )

# -----------------------------------------------------------------------------
# DEFAULTS
# -----------------------------------------------------------------------------

def get_default_settings() -> Dict[str, Any]:
    """
    Generate the default persisted settings structure.

    Returns:
        Dict[str, Any]: Default settings values.
    """
    return {
        # Runtime switches
        "console_enabled": const.DEFAULT_CONSOLE_ENABLED,
        "file_enabled": const.DEFAULT_FILE_ENABLED,
        "screen_enabled": const.DEFAULT_SCREEN_ENABLED,

        # Sink tuning
        "log_file_path": get_default_log_path(),
        "max_screen_lines": const.DEFAULT_MAX_SCREEN_LINES,
        "screen_display_seconds": const.DEFAULT_SCREEN_DISPLAY_SECONDS,

        # Build integration
        "build_profile": BuildProfile.EDITOR.value,
        "disable_file_logging_in_release": False,
    }

# -----------------------------------------------------------------------------
# PERSISTENCE LOGIC
# -----------------------------------------------------------------------------

def load_settings(path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load persisted settings merged over the defaults.

    A missing or corrupted file yields the defaults.

    Args:
        path: Settings file; defaults to ``<user data dir>/logrouter.json``.

    Returns:
        Dict[str, Any]: Raw (not yet validated) settings.
    """
    settings_path = path or get_default_settings_path()
    merged = get_default_settings()

    if not os.path.exists(settings_path):
        return merged

    try:
        with open(settings_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Settings file unreadable at '{settings_path}': {e}. Using defaults.")
        return merged

    if not isinstance(data, dict):
        logger.warning(f"Settings file at '{settings_path}' is not a JSON object. Using defaults.")
        return merged

    merged.update(data)
    return merged


def save_settings(data: Dict[str, Any], path: Optional[str] = None) -> bool:
    """
    Persist settings as JSON.

    Args:
        data: Settings to write.
        path: Settings file; defaults to ``<user data dir>/logrouter.json``.

    Returns:
        bool: True when the file was written.
    """
    settings_path = path or get_default_settings_path()
    try:
        parent = os.path.dirname(os.path.abspath(settings_path))
        os.makedirs(parent, exist_ok=True)
        with open(settings_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        return True
    except OSError as e:
        logger.error(f"Failed to save settings to '{settings_path}': {e}")
        return False
