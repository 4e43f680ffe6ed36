from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema and translates the parsed
argparse namespace into settings overrides understood by the settings
validator.
"""

import argparse
from typing import Any, Dict

from logrouter.domain.build_profiles import BuildProfile
from logrouter.domain.log_models import Severity

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the logrouter CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="logrouter",
        description="Route log messages to console, file and on-screen sinks.",
    )

    # --- Messages ---
    p.add_argument(
        "-m", "--message",
        dest="messages",
        action="append",
        default=None,
        help="Message to log (repeatable). Without messages a demo sequence is logged.",
    )
    p.add_argument(
        "--severity",
        choices=[s.value.lower() for s in Severity],
        default=Severity.INFO.value.lower(),
        help="Severity applied to --message entries.",
    )

    # --- Sink Switches ---
    p.add_argument("--file", dest="file_enabled", action="store_true", default=None,
                   help="Enable the durable file sink.")
    p.add_argument("--no-file", dest="file_enabled", action="store_false",
                   help="Disable the durable file sink.")
    p.add_argument("--screen", dest="screen_enabled", action="store_true", default=None,
                   help="Enable the on-screen sink.")
    p.add_argument("--no-console", dest="console_enabled", action="store_false", default=None,
                   help="Disable the console sink.")

    # --- Sink Tuning ---
    p.add_argument("--log-path", dest="log_file_path", default=None,
                   help="Target file of the durable sink.")
    p.add_argument("--max-lines", dest="max_screen_lines", default=None,
                   help="On-screen ring buffer capacity (>= 1).")
    p.add_argument("--display-seconds", dest="screen_display_seconds", default=None,
                   help="On-screen lifetime of an entry in seconds (>= 0).")

    # --- Build Integration ---
    p.add_argument(
        "--profile",
        dest="build_profile",
        choices=[bp.value for bp in BuildProfile],
        default=None,
        help="Build profile selecting the compiled-in sinks.",
    )
    p.add_argument(
        "--disable-file-in-release",
        dest="disable_file_logging_in_release",
        action="store_true",
        default=None,
        help="Drop the file sink from release builds.",
    )

    # --- Settings Persistence ---
    p.add_argument("--settings", dest="settings_path", default=None,
                   help="Settings JSON file (defaults to the user data directory).")
    p.add_argument("--use-defaults", action="store_true",
                   help="Ignore persisted settings.")
    p.add_argument("--save-settings", action="store_true",
                   help="Persist the effective settings and exit.")
    p.add_argument("--dump-settings", action="store_true",
                   help="Print the effective settings and exit.")

    # --- Diagnostics ---
    p.add_argument("--capabilities", action="store_true",
                   help="Print the enabled sinks and exit.")
    p.add_argument("--json", dest="json_output", action="store_true",
                   help="JSON output for --capabilities.")
    p.add_argument("--gui", action="store_true",
                   help="Open the on-screen log demo window.")
    p.add_argument("--debug", action="store_true",
                   help="Elevate diagnostic logging verbosity to DEBUG.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into settings overrides.

    Only options that were given on the command line are returned.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Settings overrides subset.
    """
    keys = [
        "console_enabled", "file_enabled", "screen_enabled",
        "log_file_path", "max_screen_lines", "screen_display_seconds",
        "build_profile", "disable_file_logging_in_release",
    ]
    overrides: Dict[str, Any] = {}
    for key in keys:
        value = getattr(args, key, None)
        if value is not None:
            overrides[key] = value
    return overrides


def parse_severity(value: str) -> Severity:
    """Map a lower-case CLI severity name to the enum."""
    for severity in Severity:
        if severity.value.lower() == str(value).strip().lower():
            return severity
    return Severity.INFO
