from __future__ import annotations

from .components import CanonicalPath, ComponentKind, PathComponent, PathLike
from .differ import relative, relative_or_absolute
from .normalizer import normalize, normalize_text

__all__ = [
    "CanonicalPath",
    "ComponentKind",
    "PathComponent",
    "PathLike",
    "normalize",
    "normalize_text",
    "relative",
    "relative_or_absolute",
]
