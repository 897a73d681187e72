from __future__ import annotations

"""
Relative Path Computation.

Computes the path that leads from one lexical location to another, in the
spirit of os.path.relpath but without resolving anything against the
current working directory. Used to present compile results relative to
the shelf root.
"""

from typing import List, Optional

from lanoma.core.paths.components import CanonicalPath, PathComponent, PathLike


def relative(dst: PathLike, base: PathLike) -> Optional[CanonicalPath]:
    """
    Compute the path that, appended to 'base', designates 'dst'.

    Both inputs are expected to be normalized already. A rooted 'dst' with an
    unrooted 'base' is returned verbatim; the opposite combination has no
    relation. A '..' in 'base' at the point of divergence cannot be climbed
    past safely, so the relation is also reported as missing.

    Args:
        dst: Target location.
        base: Location the result is relative to.

    Returns:
        Optional[CanonicalPath]: The relative path (empty when both are the
        same), or None when no relation can be expressed.
    """
    dst_path = CanonicalPath.of(dst)
    base_path = CanonicalPath.of(base)

    if dst_path.is_absolute != base_path.is_absolute:
        return dst_path if dst_path.is_absolute else None

    dst_parts = list(dst_path)
    base_parts = list(base_path)
    out: List[PathComponent] = []

    i = 0
    while True:
        a = dst_parts[i] if i < len(dst_parts) else None
        b = base_parts[i] if i < len(base_parts) else None

        if a is None and b is None:
            break

        if b is None:
            out.extend(dst_parts[i:])
            break

        if a is None:
            out.append(PathComponent.parent_dir())
        elif not out and a == b:
            pass
        elif b.is_current_dir:
            out.append(a)
        elif b.is_parent_dir:
            return None
        else:
            # One '..' for the diverging base component and each one after it
            out.extend(PathComponent.parent_dir() for _ in base_parts[i:])
            out.extend(dst_parts[i:])
            break

        i += 1

    return CanonicalPath.from_components(out)


def relative_or_absolute(dst: PathLike, base: PathLike) -> str:
    """
    Render 'dst' relative to 'base' for display.

    Falls back to 'dst' itself when the two paths have no relation.
    """
    rel = relative(dst, base)
    if rel is None:
        return str(CanonicalPath.of(dst))
    return str(rel)
