from __future__ import annotations

"""
Settings Validation Service.

Ensures that a raw settings dictionary (from JSON, the CLI or runtime
setters) conforms to the expected schema. Handles type coercion, range
checks and default value injection.
"""

import logging
import math
from typing import Any, Dict, List, Tuple

from logrouter.domain.build_profiles import BuildProfile
from logrouter.domain.config import get_default_settings

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_settings(
        settings: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a settings dictionary.

    An empty ``log_file_path`` is kept as-is: it is only reported by the
    file sink on first use.

    Args:
        settings: Raw settings data (usually a dictionary).
        strict: If True, raises exceptions on invalid input instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: Normalized settings and warnings.
    """
    warnings: List[str] = []
    defaults = get_default_settings()

    # 1. Base Type Validation
    if not isinstance(settings, dict):
        msg = f"Invalid settings type: expected dict, received {type(settings).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(settings)

    # 2. Schema Definition
    bool_fields = [
        "console_enabled", "file_enabled", "screen_enabled",
        "disable_file_logging_in_release",
    ]

    # 3. Field Processing & Normalization
    for field in bool_fields:
        merged[field] = _as_bool(merged.get(field), defaults[field], field, warnings, strict)

    merged["log_file_path"] = _as_path(merged.get("log_file_path"), warnings, strict)

    merged["max_screen_lines"] = _as_int_min(
        merged.get("max_screen_lines"), defaults["max_screen_lines"], 1,
        "max_screen_lines", warnings, strict,
    )
    merged["screen_display_seconds"] = _as_float_min(
        merged.get("screen_display_seconds"), defaults["screen_display_seconds"], 0.0,
        "screen_display_seconds", warnings, strict,
    )
    merged["build_profile"] = _as_profile(
        merged.get("build_profile"), defaults["build_profile"], warnings, strict,
    )

    return merged, warnings


def check_max_screen_lines(value: Any) -> int:
    """Strictly validate a ring buffer capacity (integer >= 1)."""
    return _as_int_min(value, 0, 1, "max_screen_lines", [], True)


def check_screen_display_seconds(value: Any) -> float:
    """Strictly validate an on-screen lifetime (float seconds >= 0)."""
    return _as_float_min(value, 0.0, 0.0, "screen_display_seconds", [], True)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _as_bool(value: Any, fallback: bool, field: str, warnings: List[str], strict: bool) -> bool:
    """Coerce various input types into native booleans."""
    if isinstance(value, bool):
        return value
    if value is None:
        return fallback

    if not strict:
        if isinstance(value, (int, float)) and value in (0, 1):
            warnings.append(f"Field '{field}' converted from number {value} to bool.")
            return bool(value)
        if isinstance(value, str):
            s = value.strip().lower()
            if s in ("true", "1", "yes", "y", "on"):
                warnings.append(f"Field '{field}' converted from '{value}' to True.")
                return True
            if s in ("false", "0", "no", "n", "off"):
                warnings.append(f"Field '{field}' converted from '{value}' to False.")
                return False

    msg = f"Invalid field '{field}': expected bool, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} Using fallback.")
    return fallback


def _as_path(value: Any, warnings: List[str], strict: bool) -> str:
    """Keep strings (stripped); anything else becomes an empty path."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()

    msg = f"Invalid field 'log_file_path': expected str, received {type(value).__name__}."
    if strict:
        raise TypeError(msg)
    warnings.append(f"{msg} File logging will fail on first use.")
    return ""


def _as_int_min(
        value: Any, fallback: int, minimum: int, field: str, warnings: List[str], strict: bool
) -> int:
    """Coerce to int and enforce a lower bound."""
    if isinstance(value, bool) or value is None:
        if strict:
            raise TypeError(f"Invalid field '{field}': expected int, received {type(value).__name__}.")
        return fallback

    try:
        number = int(value)
    except (TypeError, ValueError):
        msg = f"Invalid field '{field}': expected int, received {value!r}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if number < minimum:
        msg = f"Invalid field '{field}': {number} is below the minimum of {minimum}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Clamped.")
        return minimum
    return number


def _as_float_min(
        value: Any, fallback: float, minimum: float, field: str, warnings: List[str], strict: bool
) -> float:
    """Coerce to float and enforce a lower bound."""
    if isinstance(value, bool) or value is None:
        if strict:
            raise TypeError(f"Invalid field '{field}': expected float, received {type(value).__name__}.")
        return fallback

    try:
        number = float(value)
    except (TypeError, ValueError):
        msg = f"Invalid field '{field}': expected float, received {value!r}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback

    if math.isnan(number) or number < minimum:
        msg = f"Invalid field '{field}': {number} is below the minimum of {minimum}."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Clamped.")
        return minimum
    return number


def _as_profile(value: Any, fallback: str, warnings: List[str], strict: bool) -> str:
    """Validate a build profile name."""
    if value is None:
        return fallback
    try:
        return BuildProfile(str(value).strip().lower()).value
    except ValueError:
        msg = f"Invalid build profile '{value}'."
        if strict:
            raise ValueError(msg)
        warnings.append(f"{msg} Using fallback.")
        return fallback
