from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Thin wrappers over 'os' used by the shelf services and the configuration
layer: user data directory resolution, path expansion, single-level
directory creation, atomic renames and note file creation.
"""

import os
from typing import Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "Lanoma"
UNIX_APP_DIR_NAME = ".lanoma"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for the default profile.

    Standards:
    - Windows: %LOCALAPPDATA%/Lanoma
    - Linux/Mac: ~/.lanoma

    The directory is not created here; 'lanoma init' exports it.

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        path = os.path.join(os.path.expanduser("~"), UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def normalize_path(path: Optional[str], fallback: str) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). Reverts to fallback if the input is empty.

    Args:
        path: Raw input path string.
        fallback: Default path to use when 'path' is empty.

    Returns:
        str: Normalized absolute path.
    """
    p = (path or "").strip()
    if not p:
        p = fallback
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)

# -----------------------------------------------------------------------------
# FILESYSTEM MUTATION API
# -----------------------------------------------------------------------------

def create_folder(path: str) -> None:
    """
    Create a single directory level.

    The parent must already exist; building a nested chain is the caller's
    job. Raises OSError (FileNotFoundError, PermissionError, ...) on failure.
    """
    os.mkdir(path)


def move_folder(src: str, dst: str, safety_suffix: Optional[str] = None) -> None:
    """
    Rename a directory.

    When 'safety_suffix' is given and 'dst' already exists, the existing
    destination is first moved aside to '<dst>-<suffix>'.

    Raises:
        OSError: If any rename fails (cross-device move, target exists...).
    """
    if safety_suffix and os.path.isdir(dst):
        os.rename(dst, f"{dst}-{safety_suffix}")
    os.rename(src, dst)


def write_file(path: str, content: str, overwrite: bool = False) -> None:
    """
    Write a text file, refusing to replace an existing one unless asked.

    Raises:
        FileExistsError: If the file exists and overwrite is False.
        OSError: On any other I/O failure.
    """
    mode = "w" if overwrite else "x"
    with open(path, mode, encoding="utf-8") as f:
        f.write(content)
