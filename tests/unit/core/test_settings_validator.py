from __future__ import annotations

"""
Unit tests for the Settings Validator.

Verifies:
1. Type coercion and fallback of boolean switches.
2. Range enforcement on the ring buffer capacity and display lifetime.
3. Strict mode exceptions.
4. Build profile validation.
"""

import pytest

from logrouter.core.validator import (
    check_max_screen_lines,
    check_screen_display_seconds,
    validate_settings,
)


def test_valid_settings_pass_without_warnings(tmp_path) -> None:
    raw = {
        "console_enabled": True,
        "file_enabled": True,
        "log_file_path": str(tmp_path / "x.txt"),
        "max_screen_lines": 5,
        "screen_display_seconds": 2.5,
        "build_profile": "development",
    }

    clean, warnings = validate_settings(raw)

    assert warnings == []
    assert clean["max_screen_lines"] == 5
    assert clean["screen_display_seconds"] == 2.5
    assert clean["build_profile"] == "development"


def test_non_dict_input_returns_defaults() -> None:
    clean, warnings = validate_settings(["not", "a", "dict"])

    assert clean["max_screen_lines"] == 50
    assert any("Invalid settings type" in w for w in warnings)


def test_non_dict_input_strict_raises() -> None:
    with pytest.raises(TypeError):
        validate_settings("nope", strict=True)


def test_bool_coercion_from_strings() -> None:
    clean, warnings = validate_settings({"file_enabled": "yes", "screen_enabled": "off"})

    assert clean["file_enabled"] is True
    assert clean["screen_enabled"] is False
    assert len(warnings) == 2


def test_numeric_strings_are_accepted_from_cli() -> None:
    clean, warnings = validate_settings({"max_screen_lines": "12", "screen_display_seconds": "0.5"})

    assert clean["max_screen_lines"] == 12
    assert clean["screen_display_seconds"] == 0.5
    assert warnings == []


def test_out_of_range_values_are_clamped() -> None:
    clean, warnings = validate_settings({"max_screen_lines": 0, "screen_display_seconds": -1})

    assert clean["max_screen_lines"] == 1
    assert clean["screen_display_seconds"] == 0.0
    assert len(warnings) == 2


def test_strict_mode_rejects_out_of_range() -> None:
    with pytest.raises(ValueError):
        validate_settings({"max_screen_lines": 0}, strict=True)


def test_garbage_number_falls_back() -> None:
    clean, warnings = validate_settings({"max_screen_lines": "many"})

    assert clean["max_screen_lines"] == 50
    assert any("max_screen_lines" in w for w in warnings)


def test_empty_log_path_is_kept() -> None:
    clean, warnings = validate_settings({"log_file_path": "  "})

    assert clean["log_file_path"] == ""
    assert warnings == []


def test_unknown_build_profile_falls_back() -> None:
    clean, warnings = validate_settings({"build_profile": "nightly"})

    assert clean["build_profile"] == "editor"
    assert warnings


# -----------------------------------------------------------------------------
# STRICT SETTER CHECKS
# -----------------------------------------------------------------------------

def test_check_max_screen_lines() -> None:
    assert check_max_screen_lines(3) == 3
    with pytest.raises(ValueError):
        check_max_screen_lines(0)
    with pytest.raises(TypeError):
        check_max_screen_lines(True)


def test_check_screen_display_seconds() -> None:
    assert check_screen_display_seconds(0) == 0.0
    with pytest.raises(ValueError):
        check_screen_display_seconds(-0.1)
    with pytest.raises(ValueError):
        check_screen_display_seconds(float("nan"))
