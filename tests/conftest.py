from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures for shelves, subjects and profile dictionaries.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from lanoma.core.services.shelf import Shelf  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def shelf_root(tmp_path: Path) -> Path:
    """Return an existing, empty shelf directory."""
    root = tmp_path / "shelf"
    root.mkdir()
    return root


@pytest.fixture
def shelf(shelf_root: Path) -> Shelf:
    return Shelf(str(shelf_root))


@pytest.fixture
def mock_profile_dict() -> Dict[str, Any]:
    """
    Return a valid, complete profile dictionary for testing.

    Reflects the structure defined in 'lanoma.domain.config'.
    """
    return {
        "version": "1.0.0",
        "name": "Tester",
        "command": "latexmk -pdf {{note}}",
        "thread_count": 2,
        "files": ["*.tex"],
        "master_note": "_master.tex",
    }
