from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: initialization of diagnostic logging,
resolution of the settings hierarchy (defaults, persisted JSON, build
profile environment variable and CLI overrides), router creation, and
either a capability report, the GUI demo or a logging run.
"""

import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from logrouter.core.dispatcher import LogRouter
from logrouter.core.validator import validate_settings
from logrouter.domain.build_profiles import profile_from_env
from logrouter.domain.config import (
    RouterSettings,
    get_default_settings,
    load_settings,
    save_settings,
)
from logrouter.domain.constants import BUILD_PROFILE_ENV_VAR
from logrouter.domain.log_models import Severity
from logrouter.infra.fs import normalize_path
from logrouter.infra.logging import LoggingConfig, configure_logging
from logrouter.interface.cli import args as cli_args
from logrouter.runtime import init_router

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 for success, non-zero for failure).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Diagnostic logging bootstrap
    log_level = "DEBUG" if args.debug else "INFO"
    configure_logging(LoggingConfig(level=log_level, console=True))

    logger.debug("CLI execution initiated. Resolving settings hierarchy...")

    # 3. Resolve base settings (Default vs Persistent state)
    settings_path = normalize_path(args.settings_path) or None
    if args.use_defaults:
        base = get_default_settings()
    else:
        base = load_settings(settings_path)

    # 4. Map and merge overrides (environment, then command line)
    overrides = cli_args.args_to_overrides(args)
    if "build_profile" not in overrides and os.environ.get(BUILD_PROFILE_ENV_VAR):
        overrides["build_profile"] = profile_from_env().value
    if overrides.get("log_file_path"):
        overrides["log_file_path"] = normalize_path(overrides["log_file_path"])
    raw = _merge_settings(base, overrides)

    # 5. Schema validation and normalization
    clean, warnings = validate_settings(raw, strict=False)
    for w in warnings:
        logger.warning(f"Settings Constraint: {w}")

    if args.dump_settings:
        print(json.dumps(clean, ensure_ascii=False, indent=2))
        return 0

    if args.save_settings:
        if not save_settings(clean, settings_path):
            print("ERROR: settings could not be saved.", file=sys.stderr)
            return 1
        print("Settings saved.")
        return 0

    # 6. Router creation
    router = init_router(RouterSettings.from_dict(clean))

    if args.capabilities:
        _print_capabilities(router, json_output=bool(args.json_output))
        return 0

    if args.gui:
        from logrouter.interface.gui.app import main as gui_main
        gui_main(router)
        return 0

    # 7. Logging run
    try:
        if args.messages:
            severity = cli_args.parse_severity(args.severity)
            for message in args.messages:
                router.log(message, True, severity)
        else:
            run_demo(router)
    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        return 130
    finally:
        router.shutdown()

    if router.settings.file_active:
        print(f"Log file: {router.settings.log_file_path}")
    return 0

# -----------------------------------------------------------------------------
# DEMO SEQUENCE
# -----------------------------------------------------------------------------

def run_demo(router: LogRouter) -> None:
    """
    Emit one entry per severity, including a caught exception.

    Args:
        router: Target router.
    """
    router.log("Application started", True)
    router.log("This is a test message", True, Severity.INFO)
    router.log("This is a warning", True, Severity.WARNING)
    router.log("This is an error", True, Severity.ERROR)
    router.assertion("This is an assertion")

    try:
        raise ValueError("Test exception")
    except ValueError as e:
        router.exception(e, "Caught an exception")

    router.log("Application shutting down", True)

# -----------------------------------------------------------------------------
# SETTINGS MERGING
# -----------------------------------------------------------------------------

def _merge_settings(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """
    Perform a shallow merge of override values into the base settings.

    Only known keys are merged.

    Args:
        base: The primary settings dictionary.
        overrides: New values to inject.

    Returns:
        Dict[str, Any]: The merged settings.
    """
    out = dict(base)
    for k in get_default_settings():
        if k in overrides and overrides[k] is not None:
            out[k] = overrides[k]
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _print_capabilities(router: LogRouter, *, json_output: bool) -> None:
    enabled = router.capabilities()
    compiled = router.compiled_capabilities()
    if json_output:
        print(json.dumps({
            "enabled": enabled.names(),
            "compiled": compiled.names(),
            "log_file_path": router.settings.log_file_path,
        }, ensure_ascii=False, indent=2))
        return

    print("=" * 50)
    print(f"Enabled logging types:  {enabled}")
    print(f"Compiled logging types: {compiled}")
    print(f"Log file:               {router.settings.log_file_path}")
    print("=" * 50)
