from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Resolves the platform-provided writable directory used for the durable
log file and the persisted settings, and offers small directory helpers
shared by the file sink and the settings store.
"""

import os
from typing import Optional

from logrouter.domain.constants import DEFAULT_LOG_FILE_NAME, DEFAULT_SETTINGS_FILE_NAME

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "LogRouter"
UNIX_APP_DIR_NAME = ".logrouter"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Automatically creates the hierarchy if it does not exist.
    Standards:
    - Windows: %LOCALAPPDATA%/LogRouter
    - Linux/Mac: ~/.logrouter

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        try:
            home = os.path.expanduser("~")
            path = os.path.join(home, UNIX_APP_DIR_NAME)
        except Exception:
            path = os.path.abspath(UNIX_APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


def get_default_log_path(file_name: str = DEFAULT_LOG_FILE_NAME) -> str:
    """
    Resolve the default durable log file path.

    Args:
        file_name: Target log filename.

    Returns:
        str: Absolute path ``<user data dir>/logs/<file_name>``.
    """
    return os.path.join(get_user_data_dir(), "logs", file_name)


def get_default_settings_path() -> str:
    """Absolute path of the persisted settings JSON file."""
    return os.path.join(get_user_data_dir(), DEFAULT_SETTINGS_FILE_NAME)


def normalize_path(path: Optional[str]) -> str:
    """
    Expand ``~`` and environment variables and make the path absolute.

    Empty input stays empty so that callers can detect a missing path.
    """
    p = (path or "").strip()
    if not p:
        return ""
    return os.path.abspath(os.path.expandvars(os.path.expanduser(p)))

# -----------------------------------------------------------------------------
# DIRECTORY HELPERS
# -----------------------------------------------------------------------------

def ensure_parent_dir(path: str) -> None:
    """
    Create the parent directory hierarchy for a target file.

    Raises:
        OSError: If the hierarchy cannot be created.
    """
    parent = os.path.dirname(os.path.abspath(path))
    if parent and not os.path.isdir(parent):
        os.makedirs(parent, exist_ok=True)

