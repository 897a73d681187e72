from __future__ import annotations

"""
Compilation Domain Data Models.

Defines the values exchanged between the batch planner, the parallel
dispatcher and the interface layer: compilable units, batches, the
optional compile options and the immutable per-batch report.
"""

import os
import shlex
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from lanoma.core.paths import relative_or_absolute
from lanoma.domain.constants import (
    DEFAULT_COMPILE_COMMAND,
    DEFAULT_NOTE_PATTERNS,
    DEFAULT_THREAD_COUNT,
    NOTE_PLACEHOLDER,
)

# -----------------------------------------------------------------------------
# UNITS & BATCHES
# -----------------------------------------------------------------------------

def quote_target(text: str, posix: Optional[bool] = None) -> str:
    """
    Quote a path for the shell that subprocess.run(shell=True) starts.

    POSIX systems get /bin/sh quoting. On Windows the command goes through
    cmd.exe, which only understands double quotes, so the path is always
    wrapped in them; '"' cannot occur in a Windows file name.

    Args:
        text: Path to quote.
        posix: Force a quoting flavour; defaults to the running platform.
    """
    if posix is None:
        posix = os.name != "nt"
    if posix:
        return shlex.quote(text)
    return f'"{text}"'


class UnitKind(Enum):
    """Kinds of documents the orchestrator knows how to compile."""
    NOTE = "note"
    MASTER_NOTE = "master_note"


@dataclass(frozen=True)
class CompilableUnit:
    """
    One document submitted to the external build tool.

    Attributes:
        kind: Document variant.
        identifier: Human-facing name used in reports (e.g. the note title).
        source_path: Absolute path to the source document.
        working_dir: Directory the build tool runs in.
    """
    kind: UnitKind
    identifier: str
    source_path: str
    working_dir: str

    @property
    def target(self) -> str:
        """Source path as seen from the working directory."""
        return relative_or_absolute(
            _posix(os.path.abspath(self.source_path)),
            _posix(os.path.abspath(self.working_dir)),
        )

    def render_command(self, template: str, posix: Optional[bool] = None) -> str:
        """
        Substitute the unit's target into a command template.

        Every '{{note}}' occurrence is replaced with the target quoted for the
        platform shell (see quote_target); a template without the placeholder
        is returned unchanged.
        """
        return template.replace(NOTE_PLACEHOLDER, quote_target(self.target, posix))


@dataclass(frozen=True)
class CompilationBatch:
    """
    Units sharing a working directory, a command template and a pool size.

    Attributes:
        working_dir: Absolute directory every unit is compiled in.
        units: Ordered units of the batch.
        command: Shell command template (see CompilableUnit.render_command).
        thread_count: Requested worker count; clamped to the unit count.
    """
    working_dir: str
    units: Tuple[CompilableUnit, ...] = ()
    command: str = DEFAULT_COMPILE_COMMAND
    thread_count: int = DEFAULT_THREAD_COUNT

    def __post_init__(self) -> None:
        object.__setattr__(self, "units", tuple(self.units))
        if int(self.thread_count) < 1:
            raise ValueError(f"thread_count must be >= 1, received {self.thread_count}.")

    @property
    def is_empty(self) -> bool:
        return not self.units

    @property
    def pool_size(self) -> int:
        return min(int(self.thread_count), len(self.units))


# -----------------------------------------------------------------------------
# REPORTS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CompileReport:
    """
    Immutable outcome of one batch.

    Every submitted unit appears exactly once in either 'compiled' or
    'failed', in submission order.
    """
    working_dir: str
    compiled: Tuple[str, ...] = ()
    failed: Tuple[str, ...] = ()

    @property
    def total(self) -> int:
        return len(self.compiled) + len(self.failed)

    @property
    def all_failed(self) -> bool:
        return self.total > 0 and not self.compiled


@dataclass(frozen=True)
class UnitResult:
    """Outcome of a single unit, produced by a worker thread."""
    identifier: str
    ok: bool
    command: str = ""
    returncode: Optional[int] = None
    error: str = ""


@dataclass(frozen=True)
class BatchOutcome:
    """
    Result of attempting one batch inside a multi-batch run.

    Exactly one of 'report' and 'error' is set.
    """
    working_dir: str
    report: Optional[CompileReport] = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return self.report is not None and not self.report.all_failed


def build_report(working_dir: str, results: Iterable[UnitResult]) -> CompileReport:
    """Partition unit results into a report, keeping their order."""
    compiled: List[str] = []
    failed: List[str] = []
    for res in results:
        (compiled if res.ok else failed).append(res.identifier)
    return CompileReport(working_dir=working_dir, compiled=tuple(compiled), failed=tuple(failed))


# -----------------------------------------------------------------------------
# OPTIONS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class CompileOptions:
    """
    Caller overrides for a compile run. Every field is optional.

    Attributes:
        command: Command template. Default: subject config, then profile,
            then 'latexmk -pdf {{note}}'.
        thread_count: Worker count. Default: profile value, then 4.
        files: Glob patterns selecting notes of a subject. Default: subject
            config, then profile, then ['*.tex'].
    """
    command: Optional[str] = None
    thread_count: Optional[int] = None
    files: Optional[List[str]] = field(default=None)

    def resolve_command(self, *fallbacks: Optional[str]) -> str:
        return _first_set(self.command, *fallbacks) or DEFAULT_COMPILE_COMMAND

    def resolve_thread_count(self, *fallbacks: Optional[int]) -> int:
        value = _first_set(self.thread_count, *fallbacks)
        return int(value) if value else DEFAULT_THREAD_COUNT

    def resolve_files(self, *fallbacks: Optional[List[str]]) -> List[str]:
        return list(_first_set(self.files, *fallbacks) or DEFAULT_NOTE_PATTERNS)


def _first_set(*values):
    for v in values:
        if v:
            return v
    return None


def _posix(path: str) -> str:
    return path.replace(os.sep, "/") if os.sep != "/" else path
