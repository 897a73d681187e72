from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, cross-platform data directory resolution,
single-level folder creation, renames and exclusive note file writes.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from lanoma.infra.fs import (
    create_folder,
    get_user_data_dir,
    move_folder,
    normalize_path,
    write_file,
)

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_windows() -> None:
    """TC-01: Verify resolution of %LOCALAPPDATA% on Windows systems."""
    mock_appdata = "C:/Users/Test/AppData/Local"
    with patch("os.name", "nt"):
        with patch.dict(os.environ, {"LOCALAPPDATA": mock_appdata}):
            path = get_user_data_dir()
            assert "Lanoma" in path


def test_get_user_data_dir_unix() -> None:
    """TC-01: Verify resolution of ~/.lanoma on Unix-like systems."""
    mock_home = "/home/testuser"
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value=mock_home):
            path = get_user_data_dir()
            normalized_path = path.replace("\\", "/")
            assert normalized_path.endswith("/home/testuser/.lanoma")


def test_get_user_data_dir_has_no_side_effects(tmp_path: Path) -> None:
    with patch("os.path.expanduser", return_value=str(tmp_path)):
        path = get_user_data_dir()
    assert not os.path.exists(path)


def test_normalize_path_expansion() -> None:
    """TC-02: Verify expansion of environment variables and user shortcuts."""
    with patch.dict(os.environ, {"TEST_VAR": "my_folder"}):
        result = normalize_path("$TEST_VAR/shelf", "/fallback")
        assert result.replace("\\", "/").endswith("my_folder/shelf")
        assert os.path.isabs(result)


def test_normalize_path_fallback() -> None:
    """TC-03: Empty input reverts to the fallback."""
    assert normalize_path("", "/fallback") == os.path.abspath("/fallback")
    assert normalize_path(None, "/fallback") == os.path.abspath("/fallback")
    assert normalize_path("   ", "/fallback") == os.path.abspath("/fallback")

# -----------------------------------------------------------------------------
# MUTATION TESTS
# -----------------------------------------------------------------------------

def test_create_folder_is_single_level(tmp_path: Path) -> None:
    """TC-04: Missing parents are not created."""
    create_folder(str(tmp_path / "a"))
    assert (tmp_path / "a").is_dir()

    with pytest.raises(FileNotFoundError):
        create_folder(str(tmp_path / "missing" / "b"))

    with pytest.raises(FileExistsError):
        create_folder(str(tmp_path / "a"))


def test_move_folder_with_safety_suffix(tmp_path: Path) -> None:
    """TC-05: An existing destination is moved aside first."""
    src = tmp_path / "src"
    dst = tmp_path / "dst"
    src.mkdir()
    (src / "a.tex").write_text("new", encoding="utf-8")
    dst.mkdir()
    (dst / "a.tex").write_text("old", encoding="utf-8")

    move_folder(str(src), str(dst), safety_suffix="bak")

    assert not src.exists()
    assert (dst / "a.tex").read_text(encoding="utf-8") == "new"
    assert (tmp_path / "dst-bak" / "a.tex").read_text(encoding="utf-8") == "old"


def test_write_file_refuses_overwrite(tmp_path: Path) -> None:
    """TC-06: Existing files are only replaced when asked."""
    target = tmp_path / "note.tex"
    write_file(str(target), "first")

    with pytest.raises(FileExistsError):
        write_file(str(target), "second")
    assert target.read_text(encoding="utf-8") == "first"

    write_file(str(target), "third", overwrite=True)
    assert target.read_text(encoding="utf-8") == "third"
