from __future__ import annotations

"""
Atomic Compilation Worker.

Runs the external build tool for a single compilable unit. Designed to be
executed inside a ThreadPoolExecutor: it never changes the process-wide
working directory and never raises for an ordinary build failure; every
outcome is returned as a UnitResult.
"""

import logging
import subprocess

from lanoma.domain.compilation_models import CompilableUnit, UnitResult

logger = logging.getLogger(__name__)

# Lines of build output kept in the log when a unit fails
_OUTPUT_TAIL_LINES = 15


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def compile_unit_task(unit: CompilableUnit, command_template: str, working_dir: str) -> UnitResult:
    """
    Execute the build command for one unit and classify the outcome.

    The command is rendered from the template, run through the shell with
    the batch working directory passed as 'cwd', and considered successful
    iff it exits with status 0.

    Args:
        unit: The document to compile.
        command_template: Shell command containing the '{{note}}' placeholder.
        working_dir: Directory of the batch, passed to the process as cwd.

    Returns:
        UnitResult: Success flag, the rendered command and failure details.
    """
    command = unit.render_command(command_template)
    logger.debug(f"[{unit.identifier}] running: {command} (cwd={working_dir})")

    try:
        completed = subprocess.run(
            command,
            shell=True,
            cwd=working_dir,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
            errors="replace",
        )
    except (OSError, subprocess.SubprocessError) as e:
        # Spawn failures and an unreachable working directory end up here
        logger.error(f"[{unit.identifier}] could not start build: {e}")
        return UnitResult(identifier=unit.identifier, ok=False, command=command, error=str(e))

    if completed.returncode == 0:
        logger.debug(f"[{unit.identifier}] compiled.")
        return UnitResult(
            identifier=unit.identifier,
            ok=True,
            command=command,
            returncode=completed.returncode,
        )

    tail = _tail(completed.stdout, completed.stderr)
    logger.warning(f"[{unit.identifier}] build exited with status {completed.returncode}.")
    if tail:
        logger.debug(f"[{unit.identifier}] output tail:\n{tail}")

    return UnitResult(
        identifier=unit.identifier,
        ok=False,
        command=command,
        returncode=completed.returncode,
        error=f"exit status {completed.returncode}",
    )


def _tail(stdout: str, stderr: str) -> str:
    lines = ((stdout or "") + (stderr or "")).splitlines()
    return "\n".join(lines[-_OUTPUT_TAIL_LINES:])
