from __future__ import annotations

"""
Unit tests for the Settings Domain.

Verifies:
1. Default settings generation.
2. Resilience against corrupted or foreign settings files.
3. Persistence (Save/Load) without touching real user data.
4. Settings model construction from a normalized dictionary.
"""

import json
from unittest.mock import patch

from logrouter.domain.config import (
    RouterSettings,
    get_default_settings,
    load_settings,
    save_settings,
)
from logrouter.domain.log_models import ALL_CAPABILITIES, LoggingCapabilities


# -----------------------------------------------------------------------------
# PERSISTENCE
# -----------------------------------------------------------------------------

def test_load_missing_file_returns_defaults(tmp_path) -> None:
    settings = load_settings(str(tmp_path / "missing.json"))

    assert settings["console_enabled"] is True
    assert settings["file_enabled"] is False
    assert settings["screen_enabled"] is False
    assert settings["max_screen_lines"] == 50
    assert settings["screen_display_seconds"] == 5.0
    assert settings["build_profile"] == "editor"


def test_load_corrupted_file_returns_defaults(tmp_path, caplog) -> None:
    path = tmp_path / "logrouter.json"
    path.write_text("{ incomplete json ", encoding="utf-8")

    settings = load_settings(str(path))

    assert settings["max_screen_lines"] == 50
    assert "unreadable" in caplog.text


def test_load_non_object_returns_defaults(tmp_path) -> None:
    path = tmp_path / "logrouter.json"
    path.write_text("[1, 2, 3]", encoding="utf-8")

    assert load_settings(str(path))["file_enabled"] is False


def test_save_and_load_roundtrip(tmp_path) -> None:
    path = tmp_path / "nested" / "logrouter.json"
    data = get_default_settings()
    data.update({"file_enabled": True, "max_screen_lines": 10})

    assert save_settings(data, str(path)) is True
    assert json.loads(path.read_text(encoding="utf-8"))["max_screen_lines"] == 10

    loaded = load_settings(str(path))
    assert loaded["file_enabled"] is True
    assert loaded["max_screen_lines"] == 10


def test_partial_file_is_merged_over_defaults(tmp_path) -> None:
    path = tmp_path / "logrouter.json"
    path.write_text(json.dumps({"screen_enabled": True}), encoding="utf-8")

    loaded = load_settings(str(path))

    assert loaded["screen_enabled"] is True
    assert loaded["console_enabled"] is True


def test_save_failure_returns_false(tmp_path) -> None:
    with patch("builtins.open", side_effect=OSError("read-only")):
        assert save_settings({"a": 1}, str(tmp_path / "x.json")) is False


# -----------------------------------------------------------------------------
# SETTINGS MODEL
# -----------------------------------------------------------------------------

def test_from_dict_editor_profile(tmp_path) -> None:
    data = get_default_settings()
    data.update({"file_enabled": True, "log_file_path": str(tmp_path / "a.txt")})

    settings = RouterSettings.from_dict(data)

    assert settings.compiled == ALL_CAPABILITIES
    assert settings.file_active is True
    assert settings.screen_active is False
    assert settings.development_build is True
    assert settings.log_file_path == str(tmp_path / "a.txt")


def test_from_dict_release_profile_strips_switches(tmp_path) -> None:
    data = get_default_settings()
    data.update({
        "build_profile": "release",
        "console_enabled": True,
        "screen_enabled": True,
        "file_enabled": True,
        "log_file_path": str(tmp_path / "a.txt"),
    })

    settings = RouterSettings.from_dict(data)

    assert settings.compiled == LoggingCapabilities(file=True)
    assert settings.enabled_capabilities() == LoggingCapabilities(file=True)
    assert settings.development_build is False


def test_from_dict_empty_path_uses_default_location(tmp_path) -> None:
    default = str(tmp_path / "default.txt")
    with patch("logrouter.domain.config.get_default_log_path", return_value=default):
        settings = RouterSettings.from_dict({"log_file_path": ""})

    assert settings.log_file_path == default


def test_enabled_capabilities_requires_compiled_and_switch(settings) -> None:
    settings.compiled = LoggingCapabilities(console=True, file=False, screen=True)
    settings.screen_enabled = False

    assert settings.enabled_capabilities() == LoggingCapabilities(console=True)
