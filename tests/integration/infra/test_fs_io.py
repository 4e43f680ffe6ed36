from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates cross-platform data directory resolution, default file
locations, path normalization and parent directory creation.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from logrouter.infra.fs import (
    ensure_parent_dir,
    get_default_log_path,
    get_default_settings_path,
    get_user_data_dir,
    normalize_path,
)

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_windows() -> None:
    """TC-01: Verify resolution of %LOCALAPPDATA% on Windows systems."""
    mock_appdata = "C:/Users/Test/AppData/Local"
    with patch("os.name", "nt"):
        with patch.dict(os.environ, {"LOCALAPPDATA": mock_appdata}):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert "LogRouter" in path


def test_get_user_data_dir_unix() -> None:
    """TC-01: Verify resolution of ~/.logrouter on Unix-like systems."""
    mock_home = "/home/testuser"
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value=mock_home):
            with patch("os.makedirs"):
                path = get_user_data_dir()
                assert path.replace("\\", "/").endswith("/home/testuser/.logrouter")


def test_default_file_locations(tmp_path: Path) -> None:
    """TC-02: Verify the default log and settings files live in the data dir."""
    with patch("logrouter.infra.fs.get_user_data_dir", return_value=str(tmp_path)):
        assert get_default_log_path() == os.path.join(str(tmp_path), "logs", "game_log.txt")
        assert get_default_settings_path() == os.path.join(str(tmp_path), "logrouter.json")


def test_normalize_path_expansion() -> None:
    """TC-03: Verify expansion of environment variables and user shortcuts."""
    with patch.dict(os.environ, {"TEST_VAR": "my_folder"}):
        result = normalize_path(os.path.join("$TEST_VAR", "game_log.txt"))
        assert os.path.isabs(result)
        assert "my_folder" in result

    assert normalize_path("   ") == ""
    assert normalize_path(None) == ""

# -----------------------------------------------------------------------------
# DIRECTORY HELPERS
# -----------------------------------------------------------------------------

def test_ensure_parent_dir_creates_hierarchy(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "log.txt"

    ensure_parent_dir(str(target))

    assert (tmp_path / "a" / "b").is_dir()


def test_ensure_parent_dir_fails_under_file(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(OSError):
        ensure_parent_dir(str(blocker / "sub" / "log.txt"))
