from __future__ import annotations

"""
Unit tests for the Atomic Compilation Worker.

Verifies the decision-making process of `compile_unit_task`:
1. Command rendering and the working directory handed to the process.
2. Exit status classification.
3. Spawn failures captured as unit failures instead of exceptions.
"""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from lanoma.core.pipeline.stages.worker import compile_unit_task
from lanoma.domain.compilation_models import CompilableUnit, UnitKind


@pytest.fixture
def unit() -> CompilableUnit:
    return CompilableUnit(
        kind=UnitKind.NOTE,
        identifier="Limits",
        source_path="/shelf/calculus/limits.tex",
        working_dir="/shelf/calculus",
    )


def _completed(returncode: int, stdout: str = "", stderr: str = "") -> MagicMock:
    proc = MagicMock()
    proc.returncode = returncode
    proc.stdout = stdout
    proc.stderr = stderr
    return proc


def test_worker_runs_rendered_command_in_working_dir(unit: CompilableUnit) -> None:
    """TC-01: The shell receives the rendered command and the batch cwd."""
    with patch("lanoma.core.pipeline.stages.worker.subprocess.run", return_value=_completed(0)) as mock_run:
        result = compile_unit_task(unit, "latexmk -pdf {{note}}", "/shelf/calculus")

    args, kwargs = mock_run.call_args
    assert args[0] == "latexmk -pdf limits.tex"
    assert kwargs["shell"] is True
    assert kwargs["cwd"] == "/shelf/calculus"

    assert result.ok is True
    assert result.identifier == "Limits"
    assert result.returncode == 0


def test_worker_marks_nonzero_exit_as_failure(unit: CompilableUnit) -> None:
    """TC-02: Any non-zero status is a failed unit."""
    proc = _completed(12, stdout="! Undefined control sequence.\n", stderr="")
    with patch("lanoma.core.pipeline.stages.worker.subprocess.run", return_value=proc):
        result = compile_unit_task(unit, "latexmk -pdf {{note}}", "/shelf/calculus")

    assert result.ok is False
    assert result.returncode == 12
    assert "12" in result.error


@pytest.mark.parametrize("error", [
    FileNotFoundError("No such file or directory: '/shelf/calculus'"),
    PermissionError("denied"),
    subprocess.SubprocessError("boom"),
])
def test_worker_captures_spawn_errors(unit: CompilableUnit, error: Exception) -> None:
    """TC-03: OS level errors never escape the worker."""
    with patch("lanoma.core.pipeline.stages.worker.subprocess.run", side_effect=error):
        result = compile_unit_task(unit, "latexmk -pdf {{note}}", "/shelf/calculus")

    assert result.ok is False
    assert result.returncode is None
    assert result.error


def test_worker_runs_real_shell(tmp_path) -> None:
    """TC-04: A real shell invocation exits 0 when the target exists."""
    (tmp_path / "ok.tex").write_text("ok", encoding="utf-8")
    real_unit = CompilableUnit(
        kind=UnitKind.NOTE,
        identifier="ok",
        source_path=str(tmp_path / "ok.tex"),
        working_dir=str(tmp_path),
    )

    assert compile_unit_task(real_unit, "test -f {{note}}", str(tmp_path)).ok is True
    assert compile_unit_task(real_unit, "test -d {{note}}", str(tmp_path)).ok is False
