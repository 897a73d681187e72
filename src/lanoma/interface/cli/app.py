from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: initialization of logging, resolution of the
shelf and profile, dispatching of the subcommand and result rendering.
Structural errors are mapped to process exit codes; per-note build failures
only show up in the compile report.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from lanoma.core.paths import relative_or_absolute
from lanoma.core.pipeline.engine import run_compilation
from lanoma.core.pipeline.stages.planner import (
    plan_master_batches,
    plan_note_batch,
    plan_subject_batches,
    resolve_settings,
)
from lanoma.core.pipeline.stages.validator import validate_config
from lanoma.core.services.scanner import find_notes
from lanoma.core.services.shelf import (
    Shelf,
    create_note,
    export_subject,
    find_subjects,
    get_subject,
    list_subjects,
    remove_note,
    remove_subject,
    subject_chain,
)
from lanoma.domain.compilation_models import BatchOutcome
from lanoma.domain.config import get_default_profile_dir, init_profile, load_profile
from lanoma.domain.entities import Note
from lanoma.domain.errors import LanomaError
from lanoma.infra.fs import normalize_path
from lanoma.infra.logging import LoggingConfig, configure_logging, get_logger
from lanoma.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code (0 success, 1 a batch failed entirely,
             2 invalid input, 130 interrupted, other codes per error type).
    """
    if sys.platform == "win32":
        if hasattr(sys.stdout, "reconfigure"):
            sys.stdout.reconfigure(encoding="utf-8")
        if hasattr(sys.stderr, "reconfigure"):
            sys.stderr.reconfigure(encoding="utf-8")

    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Logging bootstrap (CLI-specific: Console stderr)
    configure_logging(LoggingConfig.for_cli(debug=args.debug, log_file=args.log_file))

    # 3. Location resolution
    shelf_root = normalize_path(args.shelf_path, os.getcwd())
    profile_dir = normalize_path(args.profile_path, get_default_profile_dir())
    logger.debug(f"CLI execution initiated. Shelf: {shelf_root} | Profile: {profile_dir}")

    # 4. Command execution phase
    try:
        if args.command == "init":
            return _cmd_init(args, shelf_root, profile_dir)

        shelf = Shelf.from_path(shelf_root)
        profile = _load_profile(profile_dir)

        if args.command == "add":
            return _cmd_add(args, shelf)
        if args.command == "remove":
            return _cmd_remove(args, shelf)
        if args.command == "list":
            return _cmd_list(args, shelf, profile)
        if args.command == "compile":
            return _cmd_compile(args, shelf, profile)
        if args.command == "master":
            return _cmd_master(args, shelf, profile)

        parser.error(f"unknown command {args.command!r}")
        return 2
    except LanomaError as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return e.exit_code
    except KeyboardInterrupt:
        msg = "Operation interrupted by user."
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return 130
    except Exception as e:
        msg = f"Unexpected failure: {e}"
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 1

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _cmd_init(args: Any, shelf_root: str, profile_dir: str) -> int:
    config = init_profile(profile_dir, args.name)
    shelf = Shelf(shelf_root)
    shelf.export()

    _emit(
        args,
        {"profile": profile_dir, "shelf": shelf.root, "config": config},
        [f"Profile at {profile_dir} successfully initialized.", f"Shelf ready at {shelf.root}."],
    )
    return 0


def _cmd_add(args: Any, shelf: Shelf) -> int:
    if args.kind == "subjects":
        created: List[str] = []
        for subject in find_subjects(args.subjects, shelf, strict=False):
            # Parents created before a failure stay on disk and are reported
            for ancestor in subject_chain(subject):
                try:
                    if export_subject(ancestor, shelf):
                        created.append(ancestor.full_name)
                except LanomaError as e:
                    logger.warning(f"Subject {subject.full_name!r} not created: {e}")
                    break

        if not created:
            print("No subjects have been created.", file=sys.stderr)
        _emit(
            args,
            {"created": created},
            _bullets("Here are the subjects that have been created in the shelf.", created) if created else [],
        )
        return 0

    subject = get_subject(args.subject, shelf)
    created_notes: List[str] = []
    for title in args.notes:
        note = Note(title)
        if not note.is_valid:
            logger.warning(f"Ignoring invalid note title: {title!r}")
            continue
        try:
            create_note(note, subject, shelf, overwrite=args.force)
        except FileExistsError:
            logger.warning(f"Note {note.full_name!r} already exists. Use --force to overwrite.")
            continue
        created_notes.append(note.full_name)

    if created_notes:
        lines = _bullets(f"Here are the notes created under the subject {subject.full_name!r}.", created_notes)
    else:
        lines = [f"No notes were created under the subject {subject.full_name!r}."]
    _emit(args, {"subject": subject.full_name, "created": created_notes}, lines)
    return 0


def _cmd_remove(args: Any, shelf: Shelf) -> int:
    removed: List[str] = []

    if args.kind == "subjects":
        for subject in find_subjects(args.subjects, shelf, strict=True):
            remove_subject(subject, shelf)
            removed.append(subject.full_name)
        _emit(args, {"removed": removed}, _bullets("Removed subjects:", removed))
        return 0

    subject = get_subject(args.subject, shelf)
    for title in args.notes:
        note = Note(title)
        if not note.is_valid:
            logger.warning(f"Ignoring invalid note title: {title!r}")
            continue
        try:
            remove_note(note, subject, shelf)
        except FileNotFoundError:
            logger.warning(f"Note {note.full_name!r} not found in {subject.full_name!r}.")
            continue
        removed.append(note.full_name)

    _emit(args, {"subject": subject.full_name, "removed": removed}, _bullets("Removed notes:", removed))
    return 0


def _cmd_list(args: Any, shelf: Shelf, profile: Dict[str, Any]) -> int:
    if args.kind == "notes":
        subject = get_subject(args.subject, shelf)
        _, _, patterns = resolve_settings(subject, shelf, None, profile)
        notes = [n.full_name for n in find_notes(subject, shelf, patterns)]
        _emit(args, {"subject": subject.full_name, "notes": notes}, _bullets(f"{subject.full_name}:", notes))
        return 0

    if not args.subjects:
        names = list_subjects(shelf)
        _emit(args, {"subjects": names}, [f"  - {n}" for n in names])
        return 0

    listing: Dict[str, List[str]] = {}
    lines: List[str] = []
    for name in args.subjects:
        parent = get_subject(name, shelf)
        children = list_subjects(shelf, parent)
        listing[parent.full_name] = children
        lines.extend(_bullets(f"{parent.full_name}:", children))
    _emit(args, {"subjects": listing}, lines)
    return 0


def _cmd_compile(args: Any, shelf: Shelf, profile: Dict[str, Any]) -> int:
    options = cli_args.args_to_options(args)

    if args.kind == "notes":
        subject = get_subject(args.subject, shelf)
        notes = []
        for title in args.notes:
            note = Note(title)
            if note.is_valid:
                notes.append(note)
            else:
                logger.warning(f"Ignoring invalid note title: {title!r}")
        batches = [plan_note_batch(subject, notes, shelf, options, profile)]
    else:
        subjects = find_subjects(args.subjects, shelf, strict=True)
        batches = plan_subject_batches(subjects, shelf, options, profile)

    return _report(args, shelf, run_compilation(batches))


def _cmd_master(args: Any, shelf: Shelf, profile: Dict[str, Any]) -> int:
    options = cli_args.args_to_options(args)
    subjects = find_subjects(args.subjects, shelf, strict=True)
    batches = plan_master_batches(subjects, shelf, options, profile)
    return _report(args, shelf, run_compilation(batches))

# -----------------------------------------------------------------------------
# CONFIGURATION
# -----------------------------------------------------------------------------

def _load_profile(profile_dir: str) -> Dict[str, Any]:
    raw = load_profile(profile_dir)
    clean, warnings = validate_config(raw, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")
    return clean

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _report(args: Any, shelf: Shelf, outcomes: List[BatchOutcome]) -> int:
    """
    Render the compile outcomes and derive the exit code.

    Partial failures still exit 0; a batch that failed entirely or could
    not run at all makes the run exit 1.
    """
    if args.json_output:
        payload = [
            dict(asdict(o), location=_location(o.working_dir, shelf), ok=o.ok)
            for o in outcomes
        ]
        print(json.dumps({"batches": payload}, ensure_ascii=False, indent=2))
    else:
        _print_human_report(shelf, outcomes)

    return 0 if all(o.ok for o in outcomes) else 1


def _print_human_report(shelf: Shelf, outcomes: List[BatchOutcome]) -> None:
    if not outcomes:
        print("Nothing to compile.")
        return

    for outcome in outcomes:
        print(f"At {_location(outcome.working_dir, shelf)}")
        if outcome.report is None:
            print(f"  ERROR: {outcome.error}")
            continue

        report = outcome.report
        if report.compiled:
            print("  Compiled:")
            for identifier in report.compiled:
                print(f"    - {identifier}")
        if report.failed:
            print("  Failed:")
            for identifier in report.failed:
                print(f"    - {identifier}")


def _location(working_dir: str, shelf: Shelf) -> str:
    return relative_or_absolute(working_dir, shelf.root) or "."


def _bullets(title: str, items: List[str]) -> List[str]:
    return [title] + [f"  - {item}" for item in items]


def _emit(args: Any, payload: Dict[str, Any], lines: List[str]) -> None:
    if args.json_output:
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return
    for line in lines:
        print(line)

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
