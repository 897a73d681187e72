from __future__ import annotations

"""
Integration tests for the Note Discovery Service.
"""

from pathlib import Path

import pytest

from lanoma.core.services.scanner import find_notes
from lanoma.core.services.shelf import Shelf
from lanoma.domain.entities import Note, Subject
from lanoma.domain.errors import InvalidSubjectError


@pytest.fixture
def calculus(shelf_root: Path) -> Subject:
    folder = shelf_root / "calculus"
    folder.mkdir()
    for name in ["limits.tex", "derivatives.tex", "My Draft.tex", "limits.pdf", "_master.tex", "notes.ltx"]:
        (folder / name).write_text("", encoding="utf-8")
    (folder / "figures.tex").mkdir()
    return Subject("Calculus")


def test_find_notes_default_pattern(shelf: Shelf, calculus: Subject) -> None:
    """TC-01: Only slug-named files matching the pattern are notes, sorted."""
    notes = find_notes(calculus, shelf, ["*.tex"])
    assert notes == [Note("derivatives"), Note("limits")]


def test_find_notes_multiple_patterns(shelf: Shelf, calculus: Subject) -> None:
    notes = find_notes(calculus, shelf, ["lim*.tex", "notes.*"])
    assert [n.full_name for n in notes] == ["limits"]


def test_find_notes_no_match(shelf: Shelf, calculus: Subject) -> None:
    assert find_notes(calculus, shelf, ["*.md"]) == []


def test_find_notes_missing_subject(shelf: Shelf) -> None:
    with pytest.raises(InvalidSubjectError):
        find_notes(Subject("Physics"), shelf, ["*.tex"])
