from __future__ import annotations

"""
Domain Constants.

Centralizes the default values shared by the router, the settings layer
and the interfaces: sink defaults, file framing markers and timestamp
formats used by the durable log file.
"""

# -----------------------------------------------------------------------------
# PRODUCT METADATA
# -----------------------------------------------------------------------------

PRODUCT_NAME = "logrouter"
PRODUCT_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# SINK DEFAULTS
# -----------------------------------------------------------------------------

DEFAULT_LOG_FILE_NAME = "game_log.txt"
DEFAULT_SETTINGS_FILE_NAME = "logrouter.json"

DEFAULT_MAX_SCREEN_LINES = 50
DEFAULT_SCREEN_DISPLAY_SECONDS = 5.0

DEFAULT_CONSOLE_ENABLED = True
DEFAULT_FILE_ENABLED = False
DEFAULT_SCREEN_ENABLED = False

# Environment variable consulted when no build profile is given explicitly
BUILD_PROFILE_ENV_VAR = "LOGROUTER_BUILD_PROFILE"

# -----------------------------------------------------------------------------
# FILE FRAMING
# -----------------------------------------------------------------------------

SESSION_START_TEMPLATE = "=== Log Session Started: {stamp} ==="
SESSION_END_TEMPLATE = "=== Log Session Ended: {stamp} ==="
SESSION_STAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

# Millisecond precision is obtained by trimming the microsecond field
ENTRY_STAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"
SCREEN_STAMP_FORMAT = "%H:%M:%S"

DEFAULT_EXCEPTION_MESSAGE = "Exception occurred"
