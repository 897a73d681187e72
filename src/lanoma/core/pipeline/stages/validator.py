from __future__ import annotations

"""
Configuration Validation Service.

Normalizes profile and subject configuration dictionaries before they reach
the batch planner: type coercion, thread count clamping and default value
injection.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from lanoma.domain.config import get_default_config
from lanoma.domain.constants import NOTE_PLACEHOLDER

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def validate_config(
        config: Any,
        *,
        strict: bool = False,
) -> Tuple[Dict[str, Any], List[str]]:
    """
    Validate and normalize a profile configuration dictionary.

    Args:
        config: Raw configuration data (usually a dictionary).
        strict: If True, raises exceptions on type mismatch instead of coercing.

    Returns:
        Tuple[Dict[str, Any], List[str]]: The normalized configuration and a
                                          list of warnings.
    """
    warnings: List[str] = []
    defaults = get_default_config()

    if not isinstance(config, dict):
        msg = f"Invalid config type: expected dict, received {type(config).__name__}."
        if strict:
            raise TypeError(msg)
        warnings.append(f"{msg} Using defaults.")
        logger.warning(msg)
        return defaults, warnings

    merged: Dict[str, Any] = dict(defaults)
    merged.update(config)

    for field in ("name", "command", "master_note"):
        merged[field] = _as_str(merged.get(field), defaults[field], field, warnings, strict)

    merged["thread_count"] = _as_thread_count(
        merged.get("thread_count"), defaults["thread_count"], warnings, strict
    )
    merged["files"] = _as_list_str(merged.get("files"), defaults["files"], "files", warnings, strict)

    if merged["command"] and NOTE_PLACEHOLDER not in merged["command"]:
        warnings.append(
            f"Command '{merged['command']}' has no {NOTE_PLACEHOLDER} placeholder; "
            "it will run unchanged for every note."
        )

    return merged, warnings


def validate_subject_config(config: Dict[str, Any]) -> Tuple[Dict[str, Any], List[str]]:
    """
    Keep only well-typed override keys of a subject metadata mapping.

    Unlike the profile, absent keys are not filled with defaults.
    """
    warnings: List[str] = []
    clean: Dict[str, Any] = {}

    if "name" in config:
        clean["name"] = _as_str(config["name"], "", "name", warnings, False)
    if "command" in config:
        command = _as_str(config["command"], "", "command", warnings, False)
        if command:
            clean["command"] = command
    if "files" in config:
        files = _as_list_str(config["files"], [], "files", warnings, False)
        if files:
            clean["files"] = files

    return clean, warnings


# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE COERCION
# -----------------------------------------------------------------------------

def _reject(
        msg: str,
        outcome: str,
        warnings: List[str],
        strict: bool,
        error: type[Exception] = TypeError,
) -> None:
    """Raise in strict mode, otherwise record the problem and what was done about it."""
    if strict:
        raise error(msg)
    warnings.append(f"{msg} {outcome}")


def _as_str(value: Any, fallback: str, field: str, warnings: List[str], strict: bool) -> str:
    if value is None:
        return fallback
    if not isinstance(value, str):
        _reject(
            f"Invalid field '{field}': expected str, received {type(value).__name__}.",
            "Using fallback.", warnings, strict,
        )
        return fallback
    return value.strip() or fallback


def _as_thread_count(value: Any, fallback: int, warnings: List[str], strict: bool) -> int:
    """Coerce the worker count into an int >= 1."""
    if value is None:
        return fallback

    count: Optional[int] = None
    # bool is an int subclass and never a meaningful count
    if isinstance(value, int) and not isinstance(value, bool):
        count = value
    elif isinstance(value, str) and not strict:
        try:
            count = int(value.strip())
        except ValueError:
            pass
        else:
            warnings.append(f"Field 'thread_count' converted from '{value}' to {count}.")

    if count is None:
        _reject(
            f"Invalid field 'thread_count': expected int, received {type(value).__name__}.",
            "Using fallback.", warnings, strict,
        )
        return fallback

    if count < 1:
        _reject(
            f"Field 'thread_count' must be at least 1, received {count}.",
            "Clamped to 1.", warnings, strict, ValueError,
        )
        return 1

    return count


def _as_list_str(value: Any, fallback: List[str], field: str, warnings: List[str], strict: bool) -> List[str]:
    """Turn a list (or, leniently, a CSV string) into trimmed non-empty strings."""
    if value is None:
        return list(fallback)

    if isinstance(value, str) and not strict:
        parts = [p.strip() for p in value.split(",")]
        patterns = [p for p in parts if p]
        if not patterns:
            return list(fallback)
        warnings.append(f"Field '{field}' converted from CSV string to list.")
        return patterns

    if not isinstance(value, list):
        _reject(
            f"Invalid field '{field}': expected list[str], received {type(value).__name__}.",
            "Using fallback.", warnings, strict,
        )
        return list(fallback)

    patterns = []
    for index, entry in enumerate(value):
        if not isinstance(entry, str):
            _reject(f"Invalid item in '{field}[{index}]': expected str.", "Item discarded.", warnings, strict)
        elif entry.strip():
            patterns.append(entry.strip())
    return patterns or list(fallback)
