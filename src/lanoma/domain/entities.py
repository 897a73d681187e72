from __future__ import annotations

"""
Hierarchical Entity Models.

Subjects and notes are identified by free-form display names such as
'Bachelor I/Semester I/Calculus'. This module canonicalizes those names and
derives the slugged on-disk path for each of them. Entities are plain values:
whether they exist on a shelf is queried separately and never cached.
"""

import os
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional

from lanoma.core.paths import CanonicalPath, PathComponent, normalize
from lanoma.core.paths.components import SEPARATOR
from lanoma.domain.constants import NOTE_FILE_EXTENSION
from lanoma.domain.errors import InvalidEntityError

if TYPE_CHECKING:
    from lanoma.core.services.shelf import Shelf

_NON_ALNUM_RX = re.compile(r"[\W_]+")


# -----------------------------------------------------------------------------
# NAME CANONICALIZATION
# -----------------------------------------------------------------------------

def slugify(text: str) -> str:
    """
    Convert a display segment into its lowercase, hyphen-separated form.

    Runs of non-alphanumeric characters collapse into a single hyphen and
    leading/trailing hyphens are removed. Applying it twice is a no-op.

    Example:
        'Semester I' -> 'semester-i', '.Logs' -> 'logs'
    """
    return _NON_ALNUM_RX.sub("-", text.lower()).strip("-")


def canonical_name(raw: str) -> str:
    """
    Canonicalize a raw hierarchical name.

    Each segment is whitespace-trimmed and the result is collapsed
    lexically. Returns '' when nothing meaningful remains.
    """
    trimmed = SEPARATOR.join(segment.strip() for segment in raw.split(SEPARATOR))
    normalized = normalize(trimmed)
    if normalized is None:
        return ""
    return str(normalized)


# -----------------------------------------------------------------------------
# ENTITY MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class HierarchicalEntity:
    """
    A named node of the subject hierarchy.

    The constructor accepts any raw string and stores its canonical form, so
    two entities built from equivalent inputs compare equal.

    Attributes:
        full_name: Canonical display name with '/' separated segments.
    """
    full_name: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "full_name", canonical_name(self.full_name))

    @property
    def name(self) -> str:
        """Last segment of the full name, case and spacing preserved."""
        return CanonicalPath.parse(self.full_name).last

    @property
    def path(self) -> CanonicalPath:
        """Slugged relative path; '/' and '..' segments pass through."""
        return CanonicalPath.from_components(
            PathComponent.named(slugify(c.text)) if c.is_named else c
            for c in CanonicalPath.parse(self.full_name)
        )

    @property
    def is_blank(self) -> bool:
        return not self.full_name

    @property
    def is_valid(self) -> bool:
        """
        False for blank names, names without any named segment (such as
        '/' or '..') and names with a segment that slugs to ''.
        """
        if self.is_blank:
            return False
        named = [c for c in self.path if c.is_named]
        return bool(named) and all(c.text for c in named)

    def require_valid(self) -> None:
        if not self.is_valid:
            raise InvalidEntityError(self.full_name)

    def ancestors(self) -> List[HierarchicalEntity]:
        """
        Return this entity followed by each of its parents, deepest first.

        Example:
            'Bachelor I/Semester I/Calculus' ->
            ['Bachelor I/Semester I/Calculus', 'Bachelor I/Semester I', 'Bachelor I']
        """
        chain = []
        for prefix in CanonicalPath.parse(self.full_name).prefixes():
            entity = type(self)(str(prefix))
            if not entity.is_blank:
                chain.append(entity)
        return chain

    def stem(self) -> HierarchicalEntity:
        """Return the last segment as an entity of its own."""
        return type(self)(self.name)

    def resolve(self, shelf: Shelf) -> str:
        return os.path.join(shelf.root, str(self.path))

    def exists_in(self, shelf: Shelf) -> bool:
        return os.path.isdir(self.resolve(shelf))

    def __str__(self) -> str:
        return self.full_name


class Subject(HierarchicalEntity):
    """A directory of notes, possibly nested under other subjects."""


class Note(HierarchicalEntity):
    """
    A single document stored inside a subject directory.

    The file name is derived from the title: 'Taylor Series' is stored as
    'taylor-series.tex'.
    """

    @property
    def title(self) -> str:
        return self.name

    @property
    def file_name(self) -> str:
        return f"{slugify(self.name)}{NOTE_FILE_EXTENSION}"

    def path_in(self, subject: Subject) -> CanonicalPath:
        """Path of the note file relative to the shelf root."""
        note_path = self.path
        parent = CanonicalPath(note_path.components[:-1])
        return subject.path.join(parent).join(self.file_name)

    def resolve_in(self, subject: Subject, shelf: Shelf) -> str:
        return os.path.join(shelf.root, str(self.path_in(subject)))

    def exists_in_subject(self, subject: Subject, shelf: Shelf) -> bool:
        return os.path.isfile(self.resolve_in(subject, shelf))

    @classmethod
    def from_file_stem(cls, stem: str, subject: Subject, shelf: Shelf) -> Optional[Note]:
        """
        Build a note from a file found on disk.

        Only files whose stem is already in slug form are considered notes;
        anything else in the subject folder is ignored.
        """
        if not stem or slugify(stem) != stem:
            return None

        note = cls(stem)
        if not note.exists_in_subject(subject, shelf):
            return None

        return note
