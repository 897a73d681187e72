from __future__ import annotations

"""
Unit tests for the Hierarchical Entity Models.

Verifies:
1. Slug generation and its idempotence.
2. Canonicalization of raw names (trimming, '.'/'..' collapse, blanks).
3. Derived name, path and ancestors.
4. Note file naming and on-disk lookup.
"""

from pathlib import Path

import pytest

from lanoma.core.services.shelf import Shelf
from lanoma.domain.entities import HierarchicalEntity, Note, Subject, canonical_name, slugify
from lanoma.domain.errors import InvalidEntityError


# -----------------------------------------------------------------------------
# SLUGS
# -----------------------------------------------------------------------------

@pytest.mark.parametrize("text, expected", [
    ("Semester I", "semester-i"),
    ("Calculus", "calculus"),
    ("  Linear   Algebra!! ", "linear-algebra"),
    ("C++ & Rust", "c-rust"),
    ("snake_case_name", "snake-case-name"),
    ("Álgebra Lineal", "álgebra-lineal"),
    ("...", ""),
])
def test_slugify(text: str, expected: str) -> None:
    """TC-01: Lowercase, non-alphanumeric runs collapsed to one hyphen."""
    assert slugify(text) == expected


@pytest.mark.parametrize("text", ["Semester I", "a--b", "-x-", "Über Größe 2", "MiXeD_case"])
def test_slugify_is_idempotent(text: str) -> None:
    """TC-02: Slugging a slug changes nothing."""
    once = slugify(text)
    assert slugify(once) == once


# -----------------------------------------------------------------------------
# CANONICALIZATION
# -----------------------------------------------------------------------------

def test_canonical_name_trims_and_collapses() -> None:
    """TC-03: Segments are trimmed and '.'/'..' are applied lexically."""
    assert canonical_name(" Bachelor I / ./Semester I/ ") == "Bachelor I/Semester I"
    assert canonical_name("Math/Old/../Calculus") == "Math/Calculus"


@pytest.mark.parametrize("raw", ["", "   ", ".", "a/..", " . / x/.. "])
def test_blank_names(raw: str) -> None:
    """TC-04: Names that normalize to nothing are blank and invalid."""
    entity = Subject(raw)
    assert entity.is_blank
    assert not entity.is_valid
    with pytest.raises(InvalidEntityError):
        entity.require_valid()


def test_name_that_slugs_to_nothing_is_invalid() -> None:
    """TC-05: A segment made only of punctuation cannot become a directory."""
    entity = Subject("Math/!!!")
    assert not entity.is_blank
    assert not entity.is_valid


@pytest.mark.parametrize("raw", ["/", "..", "../.."])
def test_names_without_named_segment_are_invalid(raw: str) -> None:
    entity = Subject(raw)
    assert not entity.is_blank
    assert not entity.is_valid


def test_equivalent_inputs_compare_equal() -> None:
    """TC-06: Equality is by canonical full name."""
    assert Subject("./Calculus/ ") == Subject("Calculus")
    assert hash(Subject("a/b/../c")) == hash(Subject("a/c"))


def test_construction_is_idempotent() -> None:
    """TC-07: Canonicalizing a canonical name is a no-op."""
    first = Subject("  Bachelor I/./Semester I/../Semester II ")
    assert Subject(first.full_name) == first


# -----------------------------------------------------------------------------
# DERIVED VALUES
# -----------------------------------------------------------------------------

def test_nested_subject_scenario() -> None:
    """TC-08: Display name, slugged path and ancestor chain."""
    subject = Subject("Bachelor I/Semester I")

    assert subject.full_name == "Bachelor I/Semester I"
    assert subject.name == "Semester I"
    assert str(subject.path) == "bachelor-i/semester-i"
    assert [s.full_name for s in subject.ancestors()] == ["Bachelor I/Semester I", "Bachelor I"]
    assert all(isinstance(s, Subject) for s in subject.ancestors())


def test_ancestors_of_deep_subject() -> None:
    subject = Subject("Bachelor I/Semester I/Calculus")
    assert [str(s.path) for s in subject.ancestors()] == [
        "bachelor-i/semester-i/calculus",
        "bachelor-i/semester-i",
        "bachelor-i",
    ]


def test_parent_markers_pass_through_path() -> None:
    """TC-09: A leading '..' survives and is not slugged."""
    subject = Subject("../Shared Notes")
    assert str(subject.path) == "../shared-notes"


def test_stem_and_resolve(tmp_path: Path) -> None:
    shelf = Shelf(str(tmp_path))
    subject = Subject("Bachelor I/Semester I")

    assert subject.stem() == Subject("Semester I")
    assert subject.resolve(shelf) == str(tmp_path / "bachelor-i" / "semester-i")
    assert not subject.exists_in(shelf)

    (tmp_path / "bachelor-i" / "semester-i").mkdir(parents=True)
    assert subject.exists_in(shelf)


def test_entity_is_immutable() -> None:
    entity = HierarchicalEntity("Calculus")
    with pytest.raises(AttributeError):
        entity.full_name = "Other"  # type: ignore[misc]


# -----------------------------------------------------------------------------
# NOTES
# -----------------------------------------------------------------------------

def test_note_file_naming() -> None:
    """TC-10: Notes are stored as '<slug>.tex' inside the subject path."""
    note = Note("Taylor Series")
    subject = Subject("Calculus I")

    assert note.title == "Taylor Series"
    assert note.file_name == "taylor-series.tex"
    assert str(note.path_in(subject)) == "calculus-i/taylor-series.tex"


def test_note_from_file_stem(tmp_path: Path) -> None:
    """TC-11: Only existing files with a slug stem map back to notes."""
    shelf = Shelf(str(tmp_path))
    subject = Subject("Calculus")
    (tmp_path / "calculus").mkdir()
    (tmp_path / "calculus" / "limits.tex").write_text("", encoding="utf-8")
    (tmp_path / "calculus" / "My Draft.tex").write_text("", encoding="utf-8")

    note = Note.from_file_stem("limits", subject, shelf)
    assert note is not None
    assert note.exists_in_subject(subject, shelf)

    assert Note.from_file_stem("My Draft", subject, shelf) is None
    assert Note.from_file_stem("missing", subject, shelf) is None
    assert Note.from_file_stem("", subject, shelf) is None
