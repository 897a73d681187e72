from __future__ import annotations

"""
Domain Constants.

Centralizes file names, default build settings and version stamps shared by
the configuration layer, the shelf services and the compilation pipeline.
"""

from typing import List

APP_NAME = "lanoma"
APP_VERSION = "0.1.0"
CURRENT_CONFIG_VERSION = "1.0.0"

# -----------------------------------------------------------------------------
# FILESYSTEM LAYOUT
# -----------------------------------------------------------------------------
NOTE_FILE_EXTENSION = ".tex"
SUBJECT_METADATA_FILE = "info.json"
PROFILE_METADATA_FILE = "profile.json"
DEFAULT_MASTER_NOTE_FILE = "_master.tex"

# -----------------------------------------------------------------------------
# COMPILATION DEFAULTS
# -----------------------------------------------------------------------------
NOTE_PLACEHOLDER = "{{note}}"
DEFAULT_COMPILE_COMMAND = f"latexmk -pdf {NOTE_PLACEHOLDER}"
DEFAULT_THREAD_COUNT = 4
DEFAULT_NOTE_PATTERNS: List[str] = [f"*{NOTE_FILE_EXTENSION}"]
