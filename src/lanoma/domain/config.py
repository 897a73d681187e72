from __future__ import annotations

"""
Configuration Domain Management.

Handles the persistent profile (build command, worker count and note file
patterns) stored as JSON in the profile directory, and the optional
per-subject metadata file that overrides it.
"""

import json
import logging
import os
from typing import Any, Dict, Optional

from lanoma.domain.constants import (
    CURRENT_CONFIG_VERSION,
    DEFAULT_COMPILE_COMMAND,
    DEFAULT_MASTER_NOTE_FILE,
    DEFAULT_NOTE_PATTERNS,
    DEFAULT_THREAD_COUNT,
    PROFILE_METADATA_FILE,
    SUBJECT_METADATA_FILE,
)
from lanoma.domain.errors import InvalidProfileError
from lanoma.infra.fs import create_folder, get_user_data_dir

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------
def get_default_profile_dir() -> str:
    return get_user_data_dir()


def get_default_config() -> Dict[str, Any]:
    """
    Generate the default profile configuration.

    Returns:
        Dict[str, Any]: Default configuration values.
    """
    return {
        "version": CURRENT_CONFIG_VERSION,
        "name": "",
        "command": DEFAULT_COMPILE_COMMAND,
        "thread_count": DEFAULT_THREAD_COUNT,
        "files": list(DEFAULT_NOTE_PATTERNS),
        "master_note": DEFAULT_MASTER_NOTE_FILE,
    }


def profile_metadata_path(profile_dir: str) -> str:
    return os.path.join(profile_dir, PROFILE_METADATA_FILE)


# -----------------------------------------------------------------------------
# Profile Persistence
# -----------------------------------------------------------------------------
def load_profile(profile_dir: str, *, strict: bool = False) -> Dict[str, Any]:
    """
    Load the profile configuration from disk, merged over the defaults.

    A missing or corrupted file yields the defaults unless 'strict' is set.

    Args:
        profile_dir: Directory holding profile.json.
        strict: Raise instead of falling back to defaults.

    Raises:
        InvalidProfileError: In strict mode, when the file is missing or
            cannot be parsed.
    """
    config = get_default_config()
    path = profile_metadata_path(profile_dir)

    if not os.path.isfile(path):
        if strict:
            raise InvalidProfileError(profile_dir, "is not initialized")
        logger.debug(f"Profile file not found at {path}. Using defaults.")
        return config

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        if strict:
            raise InvalidProfileError(profile_dir, f"could not be read ({e})") from e
        logger.error(f"Failed to load profile: {e}. Using defaults.")
        return config

    if not isinstance(data, dict):
        if strict:
            raise InvalidProfileError(profile_dir, "does not contain a JSON object")
        logger.warning("Corrupted profile file. Using defaults.")
        return config

    config.update(data)
    config["version"] = CURRENT_CONFIG_VERSION
    return config


def save_profile(profile_dir: str, config: Dict[str, Any]) -> None:
    """
    Persist the profile configuration.

    Raises:
        OSError: If the file cannot be written.
    """
    data = dict(config)
    data["version"] = CURRENT_CONFIG_VERSION
    with open(profile_metadata_path(profile_dir), "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=4)
    logger.debug(f"Profile saved to {profile_dir}")


def init_profile(profile_dir: str, name: Optional[str] = None) -> Dict[str, Any]:
    """
    Create the profile directory and its metadata file.

    Raises:
        InvalidProfileError: If a profile already exists there.
        OSError: If the directory or file cannot be created.
    """
    if os.path.isfile(profile_metadata_path(profile_dir)):
        raise InvalidProfileError(profile_dir, "already exists")

    if not os.path.isdir(profile_dir):
        create_folder(profile_dir)

    config = get_default_config()
    if name:
        config["name"] = name
    save_profile(profile_dir, config)
    return config


# -----------------------------------------------------------------------------
# Subject Metadata
# -----------------------------------------------------------------------------
def load_subject_config(subject_dir: str) -> Dict[str, Any]:
    """
    Read the optional metadata file of a subject.

    Missing or unreadable files yield an empty mapping: subject metadata
    only ever overrides profile values.
    """
    path = os.path.join(subject_dir, SUBJECT_METADATA_FILE)
    if not os.path.isfile(path):
        return {}

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning(f"Ignoring unreadable subject metadata {path}: {e}")
        return {}

    if not isinstance(data, dict):
        logger.warning(f"Ignoring subject metadata {path}: expected a JSON object.")
        return {}

    return data
