from __future__ import annotations

"""
Shelf Resolution Service.

The shelf is the base directory every subject and note is resolved against.
It owns no entities: it only answers 'where on disk' and performs the
directory operations (export, relocation, subject creation and removal)
that the command layer needs.
"""

import logging
import os
import shutil
from typing import Iterable, List, Optional

from lanoma.domain.entities import HierarchicalEntity, Note, Subject
from lanoma.domain.errors import (
    InvalidShelfError,
    InvalidSubjectError,
    ShelfExportError,
    ShelfRelocationError,
    SubjectExportError,
    UnexportedShelfError,
)
from lanoma.infra.fs import create_folder, move_folder, write_file

logger = logging.getLogger(__name__)


class Shelf:
    """
    A single absolute base directory.

    A shelf is valid when its root exists as a directory. Constructing one
    does not touch the filesystem; use Shelf.from_path to require validity.
    """

    def __init__(self, root: str):
        self.root = os.path.abspath(root)

    @classmethod
    def from_path(cls, root: str) -> Shelf:
        """
        Open an existing shelf.

        Raises:
            InvalidShelfError: If 'root' is not an existing directory.
        """
        shelf = cls(root)
        if not shelf.is_valid():
            raise InvalidShelfError(shelf.root)
        return shelf

    def is_valid(self) -> bool:
        return os.path.isdir(self.root)

    def export(self) -> None:
        """
        Create the root directory if it is missing.

        Only the last level is created. A missing parent or a permission
        problem is fatal for the caller and is not retried.

        Raises:
            ShelfExportError: If the directory cannot be created.
        """
        if self.is_valid():
            return

        try:
            create_folder(self.root)
        except OSError as e:
            raise ShelfExportError(self.root, e) from e

        logger.info(f"Shelf exported at {self.root}")

    def relocate(self, new_root: str, backup_suffix: Optional[str] = None) -> str:
        """
        Move the shelf to a new root.

        The directory is renamed on disk only when the shelf is currently
        valid; otherwise just the stored root changes. With 'backup_suffix',
        an existing directory at the target is first moved aside to
        '<target>-<suffix>'.

        Returns:
            str: The previous root.

        Raises:
            ShelfRelocationError: If the rename fails. The caller may retry
                with a disambiguated target.
        """
        old_root = self.root
        target = os.path.abspath(new_root)

        if self.is_valid():
            try:
                move_folder(old_root, target, safety_suffix=backup_suffix)
            except OSError as e:
                raise ShelfRelocationError(old_root, target, e) from e

        self.root = target
        logger.info(f"Shelf relocated from {old_root} to {target}")
        return old_root

    def resolve(self, entity: HierarchicalEntity) -> str:
        return entity.resolve(self)

    def __repr__(self) -> str:
        return f"Shelf({self.root!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Shelf) and other.root == self.root

    def __hash__(self) -> int:
        return hash(self.root)


# -----------------------------------------------------------------------------
# SUBJECT OPERATIONS
# -----------------------------------------------------------------------------

def get_subject(name: str, shelf: Shelf) -> Subject:
    """
    Return the subject only if it exists on the shelf.

    Raises:
        InvalidEntityError: If the name is blank after normalization.
        InvalidSubjectError: If the subject directory is missing.
    """
    subject = Subject(name)
    subject.require_valid()
    if not subject.exists_in(shelf):
        raise InvalidSubjectError(subject.resolve(shelf))
    return subject


def find_subjects(names: Iterable[str], shelf: Shelf, strict: bool = True) -> List[Subject]:
    """
    Map raw names to subjects.

    In strict mode, names that are invalid or missing from the shelf are
    skipped. In loose mode, missing subjects are kept as plain values so the
    caller can create them; invalid names are always dropped.
    """
    subjects: List[Subject] = []
    for name in names:
        subject = Subject(name)
        if not subject.is_valid:
            logger.warning(f"Ignoring invalid subject name: {name!r}")
            continue
        if strict and not subject.exists_in(shelf):
            logger.debug(f"Subject {subject.full_name!r} not found on shelf.")
            continue
        subjects.append(subject)
    return subjects


def export_subject(subject: Subject, shelf: Shelf) -> bool:
    """
    Create the directory of a single subject.

    The parent subject must exist already. Exporting an existing subject is
    a no-op.

    Returns:
        bool: True if a directory was created.

    Raises:
        UnexportedShelfError: If the shelf root does not exist.
        SubjectExportError: If the directory cannot be created.
    """
    if not shelf.is_valid():
        raise UnexportedShelfError(shelf.root)

    subject.require_valid()
    if subject.exists_in(shelf):
        return False

    path = subject.resolve(shelf)
    try:
        create_folder(path)
    except OSError as e:
        raise SubjectExportError(path, e) from e

    logger.debug(f"Created subject directory {path}")
    return True


def subject_chain(subject: Subject) -> List[Subject]:
    """
    Return the subjects to export for 'subject', outermost first.

    Leading '..' and '/' prefixes only locate the chain and are never
    exported themselves.
    """
    subject.require_valid()
    return [
        ancestor for ancestor in reversed(subject.ancestors())
        if any(c.is_named for c in ancestor.path)
    ]


def export_subject_chain(subject: Subject, shelf: Shelf) -> List[Subject]:
    """
    Create a subject together with every missing parent subject.

    Returns:
        List[Subject]: Subjects that were newly created, outermost first.
    """
    created: List[Subject] = []
    for ancestor in subject_chain(subject):
        if export_subject(ancestor, shelf):
            created.append(ancestor)
    return created


def remove_subject(subject: Subject, shelf: Shelf) -> None:
    """
    Delete a subject directory together with its notes and sub-subjects.

    Raises:
        InvalidSubjectError: If the subject does not exist.
        OSError: If the removal fails part way.
    """
    subject.require_valid()
    path = subject.resolve(shelf)
    if not subject.exists_in(shelf):
        raise InvalidSubjectError(path)
    shutil.rmtree(path)
    logger.debug(f"Removed subject directory {path}")


def list_subjects(shelf: Shelf, parent: Optional[Subject] = None) -> List[str]:
    """
    Return the slug names of the subject directories directly under a parent.

    Hidden directories are skipped.
    """
    base = parent.resolve(shelf) if parent else shelf.root
    if not os.path.isdir(base):
        raise InvalidSubjectError(base)
    return sorted(
        entry.name for entry in os.scandir(base)
        if entry.is_dir() and not entry.name.startswith(".")
    )


# -----------------------------------------------------------------------------
# NOTE OPERATIONS
# -----------------------------------------------------------------------------

def create_note(note: Note, subject: Subject, shelf: Shelf, content: str = "", overwrite: bool = False) -> str:
    """
    Create the file of a note inside an existing subject.

    Returns:
        str: Absolute path of the created file.

    Raises:
        InvalidSubjectError: If the subject directory is missing.
        FileExistsError: If the note exists and overwrite is False.
    """
    note.require_valid()
    if not subject.exists_in(shelf):
        raise InvalidSubjectError(subject.resolve(shelf))

    path = note.resolve_in(subject, shelf)
    write_file(path, content, overwrite=overwrite)
    return path


def remove_note(note: Note, subject: Subject, shelf: Shelf) -> None:
    """
    Delete the file of a note.

    Raises:
        FileNotFoundError: If the note file does not exist.
    """
    os.remove(note.resolve_in(subject, shelf))
