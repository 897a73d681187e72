from __future__ import annotations

"""
Lexical Path Components.

Defines the component model shared by the normalizer and the differ. Paths
are handled purely as text split on '/', without touching the filesystem,
so that hierarchical names typed by users can be canonicalized before any
directory exists.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Tuple, Union

SEPARATOR = "/"
CURRENT_DIR_TEXT = "."
PARENT_DIR_TEXT = ".."


# -----------------------------------------------------------------------------
# COMPONENT MODEL
# -----------------------------------------------------------------------------

class ComponentKind(Enum):
    ROOT = "root"
    CURRENT_DIR = "current_dir"
    PARENT_DIR = "parent_dir"
    NAMED = "named"


@dataclass(frozen=True)
class PathComponent:
    """
    A single lexical path segment.

    Attributes:
        kind: Classification of the segment.
        text: Rendered form ('/', '.', '..' or the segment name).
    """
    kind: ComponentKind
    text: str

    @classmethod
    def root(cls) -> PathComponent:
        return cls(ComponentKind.ROOT, SEPARATOR)

    @classmethod
    def current_dir(cls) -> PathComponent:
        return cls(ComponentKind.CURRENT_DIR, CURRENT_DIR_TEXT)

    @classmethod
    def parent_dir(cls) -> PathComponent:
        return cls(ComponentKind.PARENT_DIR, PARENT_DIR_TEXT)

    @classmethod
    def named(cls, text: str) -> PathComponent:
        return cls(ComponentKind.NAMED, text)

    @property
    def is_named(self) -> bool:
        return self.kind is ComponentKind.NAMED

    @property
    def is_parent_dir(self) -> bool:
        return self.kind is ComponentKind.PARENT_DIR

    @property
    def is_current_dir(self) -> bool:
        return self.kind is ComponentKind.CURRENT_DIR

    @property
    def is_root(self) -> bool:
        return self.kind is ComponentKind.ROOT


@dataclass(frozen=True)
class CanonicalPath:
    """
    Ordered sequence of path components.

    The empty sequence is a valid value (e.g. the relation between a path
    and itself) and renders as the empty string.
    """
    components: Tuple[PathComponent, ...] = ()

    @classmethod
    def parse(cls, text: str) -> CanonicalPath:
        """
        Split a path-like string into components.

        A leading '/' becomes ROOT and a leading '.' becomes CURRENT_DIR.
        Interior '.' segments and empty segments (repeated or trailing
        separators) are discarded.
        """
        parsed = []
        if text.startswith(SEPARATOR):
            parsed.append(PathComponent.root())

        for index, segment in enumerate(text.split(SEPARATOR)):
            if not segment:
                continue
            if segment == CURRENT_DIR_TEXT:
                if index == 0:
                    parsed.append(PathComponent.current_dir())
                continue
            if segment == PARENT_DIR_TEXT:
                parsed.append(PathComponent.parent_dir())
            else:
                parsed.append(PathComponent.named(segment))

        return cls(tuple(parsed))

    @classmethod
    def of(cls, value: PathLike) -> CanonicalPath:
        """Coerce a string or an existing path into a CanonicalPath."""
        if isinstance(value, CanonicalPath):
            return value
        return cls.parse(value)

    @classmethod
    def from_components(cls, components: Iterable[PathComponent]) -> CanonicalPath:
        return cls(tuple(components))

    @property
    def is_absolute(self) -> bool:
        return bool(self.components) and self.components[0].is_root

    @property
    def is_empty(self) -> bool:
        return not self.components

    @property
    def parts(self) -> Tuple[str, ...]:
        return tuple(c.text for c in self.components)

    @property
    def last(self) -> str:
        return self.components[-1].text if self.components else ""

    def join(self, other: PathLike) -> CanonicalPath:
        """Append another path; an absolute 'other' replaces this one."""
        other_path = CanonicalPath.of(other)
        if other_path.is_absolute:
            return other_path
        return CanonicalPath(self.components + other_path.components)

    def prefixes(self) -> Iterator[CanonicalPath]:
        """Yield this path and every strict prefix of it, longest first."""
        for end in range(len(self.components), -1, -1):
            yield CanonicalPath(self.components[:end])

    def __iter__(self) -> Iterator[PathComponent]:
        return iter(self.components)

    def __str__(self) -> str:
        if not self.components:
            return ""
        if self.components[0].is_root:
            return SEPARATOR + SEPARATOR.join(c.text for c in self.components[1:])
        return SEPARATOR.join(c.text for c in self.components)


PathLike = Union[str, CanonicalPath]
