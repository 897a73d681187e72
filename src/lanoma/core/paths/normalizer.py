from __future__ import annotations

"""
Lexical Path Normalizer.

Collapses '.' and '..' segments of a path without consulting the
filesystem. Unlike os.path.realpath, the result never depends on what
exists on disk, which makes it suitable for canonicalizing subject names
before they are created.
"""

from typing import List, Optional

from lanoma.core.paths.components import CanonicalPath, PathComponent, PathLike


def normalize(path: PathLike) -> Optional[CanonicalPath]:
    """
    Normalize a path lexically.

    '..' cancels the nearest preceding component unless the output is empty
    or already ends with '..', in which case it is kept (climbing above a
    relative root).

    Args:
        path: Raw path string or an already parsed path.

    Returns:
        Optional[CanonicalPath]: The collapsed path, or None when nothing
        remains of it.
    """
    stack: List[PathComponent] = []

    for component in CanonicalPath.of(path):
        if component.is_current_dir:
            continue

        if component.is_parent_dir:
            if not stack or stack[-1].is_parent_dir:
                stack.append(component)
            else:
                stack.pop()
            continue

        stack.append(component)

    normalized = CanonicalPath.from_components(stack)
    if not str(normalized):
        return None

    return normalized


def normalize_text(path: PathLike) -> str:
    """Return the rendered normalized form of a path, or '' when empty."""
    normalized = normalize(path)
    return str(normalized) if normalized is not None else ""
