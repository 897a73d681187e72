from __future__ import annotations

"""
Note Discovery Service.

Finds the notes stored directly inside a subject directory by matching file
names against glob patterns. Files whose stem is not already a note slug
(e.g. 'My Draft.tex' or build artifacts) are not treated as notes.
"""

import fnmatch
import logging
import os
from typing import Iterable, List

from lanoma.core.services.shelf import Shelf
from lanoma.domain.entities import Note, Subject
from lanoma.domain.errors import InvalidSubjectError

logger = logging.getLogger(__name__)


def find_notes(subject: Subject, shelf: Shelf, patterns: Iterable[str]) -> List[Note]:
    """
    List the notes of a subject matching any of the given patterns.

    Args:
        subject: Subject to inspect.
        shelf: Shelf the subject is resolved against.
        patterns: fnmatch-style file name patterns (e.g. '*.tex').

    Returns:
        List[Note]: Matching notes, sorted by file name.

    Raises:
        InvalidSubjectError: If the subject directory does not exist.
    """
    subject_path = subject.resolve(shelf)
    if not os.path.isdir(subject_path):
        raise InvalidSubjectError(subject_path)

    patterns = list(patterns)
    notes: List[Note] = []

    for file_name in sorted(os.listdir(subject_path)):
        if not any(fnmatch.fnmatch(file_name, p) for p in patterns):
            continue
        if not os.path.isfile(os.path.join(subject_path, file_name)):
            continue

        stem, _ext = os.path.splitext(file_name)
        note = Note.from_file_stem(stem, subject, shelf)
        if note is None:
            logger.debug(f"Skipping non-note file {file_name!r} in {subject.full_name!r}")
            continue
        notes.append(note)

    return notes
