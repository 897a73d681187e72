from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line interface schema: global options (shelf, profile,
logging, output format) and the subcommand tree. Provides logic to translate
raw argparse namespaces into domain-compatible compile options.
"""

import argparse
from typing import List, Optional

from lanoma.domain.compilation_models import CompileOptions
from lanoma.domain.constants import APP_NAME, APP_VERSION

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the lanoma CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Manage hierarchical LaTeX notes and compile them in parallel.",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    # --- Location Management ---
    p.add_argument(
        "--shelf",
        dest="shelf_path",
        default=None,
        help="Base directory of the subjects. Defaults to the current directory.",
    )
    p.add_argument(
        "--profile",
        dest="profile_path",
        default=None,
        help="Profile directory. Defaults to the user data directory.",
    )

    # --- Configuration and Diagnostic Tools ---
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )

    # --- Format Selection ---
    p.add_argument(
        "--json",
        dest="json_output",
        action="store_true",
        help="Print results as JSON.",
    )

    commands = p.add_subparsers(dest="command", metavar="COMMAND")
    commands.required = True

    # --- init ---
    init = commands.add_parser("init", help="Create the profile and the shelf directory.")
    init.add_argument("--name", default=None, help="Name stored in the profile.")

    # --- add ---
    add = commands.add_parser("add", help="Create subjects or notes.")
    add.add_argument(
        "--force",
        action="store_true",
        help="Overwrite note files that already exist.",
    )
    _add_kind_parsers(add)

    # --- remove ---
    remove = commands.add_parser("remove", help="Delete subjects or notes.")
    _add_kind_parsers(remove)

    # --- list ---
    listing = commands.add_parser("list", help="List subjects or the notes of a subject.")
    list_kinds = listing.add_subparsers(dest="kind", metavar="KIND")
    list_kinds.required = True
    list_subjects = list_kinds.add_parser("subjects", help="List subjects, optionally under parents.")
    list_subjects.add_argument("subjects", nargs="*", metavar="SUBJECT")
    list_notes = list_kinds.add_parser("notes", help="List the notes of a subject.")
    list_notes.add_argument("subject", metavar="SUBJECT")

    # --- compile ---
    compile_cmd = commands.add_parser("compile", help="Compile notes or whole subjects.")
    _add_compile_options(compile_cmd)
    _add_kind_parsers(compile_cmd)

    # --- master ---
    master = commands.add_parser("master", help="Compile the master note of each subject.")
    _add_compile_options(master)
    master.add_argument("subjects", nargs="+", metavar="SUBJECT")

    return p


def _add_kind_parsers(parent: argparse.ArgumentParser) -> None:
    kinds = parent.add_subparsers(dest="kind", metavar="KIND")
    kinds.required = True

    subjects = kinds.add_parser("subjects", help="Operate on subjects.")
    subjects.add_argument("subjects", nargs="+", metavar="SUBJECT")

    notes = kinds.add_parser("notes", help="Operate on notes of one subject.")
    notes.add_argument("subject", metavar="SUBJECT")
    notes.add_argument("notes", nargs="+", metavar="TITLE")


def _add_compile_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--command",
        dest="compile_command",
        default=None,
        help="Build command template; '{{note}}' is replaced with the note path.",
    )
    parser.add_argument(
        "--thread-count",
        dest="thread_count",
        type=_positive_int,
        default=None,
        help="Maximum number of concurrent builds per subject.",
    )
    parser.add_argument(
        "--files",
        dest="files",
        default=None,
        help="Comma-separated glob patterns selecting the notes of a subject.",
    )

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_options(args: argparse.Namespace) -> CompileOptions:
    """
    Translate the argparse Namespace into compile options.

    Flags that were not given stay None so that subject and profile values
    apply.

    Args:
        args: Parsed command-line arguments.

    Returns:
        CompileOptions: Caller overrides for the compile run.
    """
    return CompileOptions(
        command=getattr(args, "compile_command", None) or None,
        thread_count=getattr(args, "thread_count", None),
        files=_split_csv(getattr(args, "files", None)) or None,
    )

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """
    Convert a comma-separated string into a list of sanitized strings.
    """
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, received {number}")
    return number
