from __future__ import annotations

"""
Domain Exception Hierarchy.

Structural failures (invalid shelves, missing subjects, unreachable batch
directories) are raised as typed exceptions so that callers must handle
them explicitly. Per-note compile failures are never raised; they are
recorded in the compile report instead.
"""

from typing import Optional


class LanomaError(Exception):
    """
    Base class for every error raised by the library.

    Attributes:
        path: Filesystem location related to the failure, when known.
        exit_code: Process exit status the CLI uses for this error.
    """
    exit_code: int = 1

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


# -----------------------------------------------------------------------------
# INPUT ERRORS
# -----------------------------------------------------------------------------

class InvalidEntityError(LanomaError):
    """Raised when a subject or note name normalizes to nothing."""
    exit_code = 2

    def __init__(self, raw_name: str):
        super().__init__(f"'{raw_name}' is not a valid name.")
        self.raw_name = raw_name


# -----------------------------------------------------------------------------
# RESOLUTION ERRORS
# -----------------------------------------------------------------------------

class InvalidShelfError(LanomaError):
    exit_code = 2

    def __init__(self, path: str):
        super().__init__(f"The shelf at '{path}' is not an existing directory.", path)


class UnexportedShelfError(LanomaError):
    exit_code = 4

    def __init__(self, path: str):
        super().__init__(f"The shelf at '{path}' is not yet exported in the filesystem.", path)


class ShelfExportError(LanomaError):
    exit_code = 7

    def __init__(self, path: str, reason: OSError):
        super().__init__(f"Could not create the shelf at '{path}': {reason}", path)
        self.reason = reason


class ShelfRelocationError(LanomaError):
    exit_code = 7

    def __init__(self, path: str, target: str, reason: OSError):
        super().__init__(f"Could not move the shelf from '{path}' to '{target}': {reason}", path)
        self.target = target
        self.reason = reason


class InvalidSubjectError(LanomaError):
    exit_code = 5

    def __init__(self, path: str):
        super().__init__(f"The subject at '{path}' is missing.", path)


class SubjectExportError(LanomaError):
    exit_code = 7

    def __init__(self, path: str, reason: OSError):
        super().__init__(f"Could not create the subject at '{path}': {reason}", path)
        self.reason = reason


class InvalidProfileError(LanomaError):
    exit_code = 2

    def __init__(self, path: str, detail: str = "is not valid"):
        super().__init__(f"Profile at '{path}' {detail}.", path)


# -----------------------------------------------------------------------------
# ORCHESTRATION ERRORS
# -----------------------------------------------------------------------------

class OrchestratorError(LanomaError):
    """Base class for failures that abort a whole compilation batch."""
    exit_code = 8


class BatchDirectoryError(OrchestratorError):
    def __init__(self, path: str):
        super().__init__(f"Cannot enter the batch working directory '{path}'.", path)
