from __future__ import annotations

"""
Compilation Batch Planner.

Turns subjects and notes into CompilationBatch values ready for the
dispatcher. Every batch compiles inside the directory of one subject, with
the command, worker count and note patterns resolved from (in order) the
caller's options, the subject metadata and the profile.
"""

import logging
import os
from typing import Any, Dict, Iterable, List, Optional, Tuple

from lanoma.core.pipeline.stages.validator import validate_subject_config
from lanoma.core.services.scanner import find_notes
from lanoma.core.services.shelf import Shelf
from lanoma.domain.compilation_models import (
    CompilableUnit,
    CompilationBatch,
    CompileOptions,
    UnitKind,
)
from lanoma.domain.config import load_subject_config
from lanoma.domain.constants import DEFAULT_MASTER_NOTE_FILE
from lanoma.domain.entities import Note, Subject

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def plan_note_batch(
        subject: Subject,
        notes: Iterable[Note],
        shelf: Shelf,
        options: Optional[CompileOptions] = None,
        profile: Optional[Dict[str, Any]] = None,
) -> CompilationBatch:
    """
    Build one batch with the given notes of a subject.

    Notes without a file on the shelf are left out with a warning, so the
    resulting batch may be empty.

    Args:
        subject: Subject owning the notes; its directory is the working dir.
        notes: Notes to compile, in the order they should be reported.
        shelf: Shelf the subject lives on.
        options: Caller overrides.
        profile: Validated profile configuration.

    Returns:
        CompilationBatch: The planned batch.
    """
    working_dir = subject.resolve(shelf)
    command, thread_count, _ = resolve_settings(subject, shelf, options, profile)

    units: List[CompilableUnit] = []
    for note in notes:
        if not note.exists_in_subject(subject, shelf):
            logger.warning(f"Note {note.full_name!r} not found in subject {subject.full_name!r}. Skipping.")
            continue
        units.append(note_unit(note, subject, shelf))

    return CompilationBatch(
        working_dir=working_dir,
        units=units,
        command=command,
        thread_count=thread_count,
    )


def plan_subject_batches(
        subjects: Iterable[Subject],
        shelf: Shelf,
        options: Optional[CompileOptions] = None,
        profile: Optional[Dict[str, Any]] = None,
) -> List[CompilationBatch]:
    """
    Build one batch per subject containing every note matched by its patterns.

    Subjects missing from the shelf still get a batch so the dispatcher can
    report them as fatal for that batch alone.
    """
    batches: List[CompilationBatch] = []
    for subject in subjects:
        command, thread_count, patterns = resolve_settings(subject, shelf, options, profile)

        if subject.exists_in(shelf):
            notes = find_notes(subject, shelf, patterns)
        else:
            notes = []
        logger.debug(f"Subject {subject.full_name!r}: {len(notes)} note(s) matched {patterns}.")

        batches.append(CompilationBatch(
            working_dir=subject.resolve(shelf),
            units=[note_unit(note, subject, shelf) for note in notes],
            command=command,
            thread_count=thread_count,
        ))
    return batches


def plan_master_batches(
        subjects: Iterable[Subject],
        shelf: Shelf,
        options: Optional[CompileOptions] = None,
        profile: Optional[Dict[str, Any]] = None,
) -> List[CompilationBatch]:
    """
    Build one single-unit batch per subject for its master note.

    The master note file name comes from the profile. Subjects without that
    file are skipped with a warning.
    """
    master_file = (profile or {}).get("master_note") or DEFAULT_MASTER_NOTE_FILE

    batches: List[CompilationBatch] = []
    for subject in subjects:
        working_dir = subject.resolve(shelf)
        source_path = os.path.join(working_dir, master_file)
        if not os.path.isfile(source_path):
            logger.warning(f"Subject {subject.full_name!r} has no master note ({master_file}). Skipping.")
            continue

        command, thread_count, _ = resolve_settings(subject, shelf, options, profile)
        unit = CompilableUnit(
            kind=UnitKind.MASTER_NOTE,
            identifier=subject.full_name,
            source_path=source_path,
            working_dir=working_dir,
        )
        batches.append(CompilationBatch(
            working_dir=working_dir,
            units=[unit],
            command=command,
            thread_count=thread_count,
        ))
    return batches


# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def note_unit(note: Note, subject: Subject, shelf: Shelf) -> CompilableUnit:
    return CompilableUnit(
        kind=UnitKind.NOTE,
        identifier=note.full_name,
        source_path=note.resolve_in(subject, shelf),
        working_dir=subject.resolve(shelf),
    )


def resolve_settings(
        subject: Subject,
        shelf: Shelf,
        options: Optional[CompileOptions],
        profile: Optional[Dict[str, Any]],
) -> Tuple[str, int, List[str]]:
    """
    Resolve command, thread count and note patterns for a subject.

    Caller options win over the subject metadata, which wins over the
    profile. The subject metadata cannot change the thread count.
    """
    opts = options or CompileOptions()
    prof = profile or {}

    subject_cfg, warnings = validate_subject_config(load_subject_config(subject.resolve(shelf)))
    for warning in warnings:
        logger.warning(f"Subject {subject.full_name!r} metadata: {warning}")

    command = opts.resolve_command(subject_cfg.get("command"), prof.get("command"))
    thread_count = opts.resolve_thread_count(prof.get("thread_count"))
    patterns = opts.resolve_files(subject_cfg.get("files"), prof.get("files"))
    return command, thread_count, patterns
