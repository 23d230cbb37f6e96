"""Tests for Reference, Chapter and Verse construction.

Tests cover:
- Default filling for every reference shape
- Verse and chapter enumeration
- Invalid and unknown-book references
- Serialization
"""

from __future__ import annotations

import dataclasses
import time

import pytest

from scriptref.engine.librarian import ReferenceType
from scriptref.engine.models import (
    Chapter,
    Verse,
    book_reference,
    build_reference,
    chapter_range_reference,
    chapter_reference,
    verse_range_reference,
    verse_reference,
)


class TestVerse:
    """Tests for Verse.build()."""

    def test_keeps_book_form(self):
        verse = Verse.build("Matt", 2, 4)
        assert verse.book == "Matt"
        assert verse.book_number == 40
        assert verse.book_names.abbr == "MAT"
        assert verse.reference == "Matt 2:4"
        assert verse.is_valid
        assert verse.reference_type == ReferenceType.VERSE

    def test_out_of_range(self):
        verse = Verse.build("Genesis", 2, 26)
        assert not verse.is_valid
        assert verse.reference == "Genesis 2:26"

    def test_str(self):
        assert str(Verse.build("John", 3, 16)) == "John 3:16"


class TestChapter:
    """Tests for Chapter.build()."""

    def test_genesis_2(self):
        chapter = Chapter.build("Genesis", 2)
        assert chapter.reference == "Genesis 2"
        assert chapter.reference_type == ReferenceType.CHAPTER
        assert chapter.start_verse_number == 1
        assert chapter.end_verse_number == 25
        assert len(chapter.verses) == 25
        assert chapter.start_verse.reference == "Genesis 2:1"
        assert chapter.end_verse.reference == "Genesis 2:25"
        assert chapter.is_valid

    def test_unknown_book(self):
        chapter = Chapter.build("McDonald", 2)
        assert chapter.verses == ()
        assert chapter.end_verse_number is None
        assert chapter.end_verse is None
        assert not chapter.is_valid


class TestBookReference:
    """A book with no boundaries covers the whole book."""

    def test_genesis(self):
        ref = book_reference("Genesis")
        assert ref.book == "Genesis"
        assert ref.book_number == 1
        assert ref.reference == "Genesis"
        assert ref.start_chapter_number == 1
        assert ref.start_verse_number == 1
        assert ref.end_chapter_number == 50
        assert ref.end_verse_number == 26
        # Classified from the raw end chapter, which is absent
        assert ref.reference_type == ReferenceType.CHAPTER
        assert ref.is_valid
        assert len(ref.chapters) == 50
        assert len(ref.verses) == 1533

    def test_any_name_form_gives_canonical_book(self):
        for form in ["Genesis", "gen", "GEN", "Gn", "ge"]:
            ref = build_reference(form)
            assert ref.book == "Genesis"
            assert ref.book_names.osis == "Gen"


class TestChapterReference:
    """Tests for chapter_reference() and chapter_range_reference()."""

    def test_chapter(self):
        ref = chapter_reference("Genesis", 2)
        assert ref.start_chapter_number == 2
        assert ref.end_chapter_number == 2
        assert ref.start_verse_number == 1
        assert ref.end_verse_number == 25
        assert ref.reference == "Genesis 2"
        assert ref.reference_type == ReferenceType.CHAPTER
        assert ref.is_valid
        assert len(ref.chapters) == 1
        assert len(ref.verses) == 25

    def test_chapter_range(self):
        ref = chapter_range_reference("Genesis", 2, 3)
        assert ref.start_verse_number == 1
        assert ref.end_chapter_number == 3
        assert ref.end_verse_number == 24
        assert ref.reference == "Genesis 2-3"
        assert ref.reference_type == ReferenceType.CHAPTER_RANGE
        assert ref.is_valid
        assert [c.chapter_number for c in ref.chapters] == [2, 3]
        assert len(ref.verses) == 25 + 24
        assert ref.end_chapter.reference == "Genesis 3"

    def test_out_of_range_chapter(self):
        ref = chapter_reference("Genesis", 51)
        assert not ref.is_valid
        assert ref.reference == "Genesis 51"
        assert ref.chapters == ()
        assert ref.verses == ()


class TestVerseReference:
    """Tests for verse_reference() and verse_range_reference()."""

    def test_verse(self):
        ref = verse_reference("Genesis", 2, 1)
        assert ref.start_verse_number == 1
        assert ref.end_verse_number == 1
        assert ref.reference == "Genesis 2:1"
        assert ref.reference_type == ReferenceType.VERSE
        assert ref.is_valid
        assert [v.reference for v in ref.verses] == ["Genesis 2:1"]

    def test_verse_range(self):
        ref = verse_range_reference("Genesis", 2, 3, 4)
        assert ref.start_chapter_number == 2
        assert ref.end_chapter_number == 2
        assert ref.start_verse_number == 3
        assert ref.end_verse_number == 4
        assert ref.reference == "Genesis 2:3-4"
        assert ref.reference_type == ReferenceType.VERSE_RANGE
        assert ref.is_valid
        assert [v.verse_number for v in ref.verses] == [3, 4]
        assert ref.end_verse.reference == "Genesis 2:4"


class TestCrossChapterReference:
    """References spanning several chapters."""

    def test_genesis_2_3_to_4_5(self):
        ref = build_reference("Genesis", 2, 3, 4, 5)
        assert ref.reference == "Genesis 2:3 - 4:5"
        assert ref.reference_type == ReferenceType.CHAPTER_RANGE
        assert ref.is_valid
        assert [c.chapter_number for c in ref.chapters] == [2, 3, 4]
        # 23 verses of chapter 2, all 24 of chapter 3, 5 of chapter 4
        assert len(ref.verses) == 52
        assert ref.verses[0].reference == "Genesis 2:3"
        assert ref.verses[-1].reference == "Genesis 4:5"
        assert ref.start_verse.reference == "Genesis 2:3"
        assert ref.end_verse.reference == "Genesis 4:5"

    def test_end_verse_defaults_to_start_verse(self):
        ref = build_reference("John", 2, 3, 4)
        assert ref.end_verse_number == 3
        assert ref.end_verse.reference == "John 4:3"
        # Display still runs to the end of the last chapter
        assert ref.reference == "John 2:3 - 4:54"

    def test_end_chapter_far_past_book(self):
        start = time.perf_counter()
        ref = build_reference("John", 1, None, 3_000_000)
        elapsed = time.perf_counter() - start

        assert elapsed < 1.0
        assert not ref.is_valid
        assert [c.chapter_number for c in ref.chapters] == list(range(1, 22))
        # Every verse of John
        assert len(ref.verses) == 879
        assert ref.verses[-1].reference == "John 21:25"

    def test_start_chapter_past_book(self):
        ref = build_reference("John", 50, 1, 3_000_000)
        assert not ref.is_valid
        assert ref.chapters == ()
        assert ref.verses == ()

    def test_inverted(self):
        ref = build_reference("Genesis", 2, 3, 1, 2)
        assert not ref.is_valid
        assert ref.reference == "Genesis 2:3 - 1:2"
        assert ref.reference_type == ReferenceType.CHAPTER_RANGE
        assert ref.start_chapter_number == 2
        assert ref.end_chapter_number == 1
        assert ref.chapters == ()
        assert ref.verses == ()


class TestUnknownBook:
    """References to books missing from the catalog are built, not rejected."""

    def test_mcdonald(self):
        ref = build_reference("McDonald", 2, 4, 10)
        assert not ref.is_valid
        assert ref.book == "McDonald"
        assert ref.book_number is None
        assert ref.book_names is None
        assert ref.start_chapter_number == 2
        assert ref.end_chapter_number == 10
        assert ref.chapters == ()
        assert ref.verses == ()
        assert ref.reference == "McDonald 2:4 - 10"

    def test_book_only(self):
        ref = build_reference("Joseph")
        assert not ref.is_valid
        assert ref.reference == "Joseph"
        assert ref.end_chapter_number is None
        assert ref.end_chapter is None
        assert ref.end_verse is None


class TestReferenceValue:
    """Immutability and serialization."""

    def test_frozen(self):
        ref = verse_reference("John", 3, 16)
        with pytest.raises(dataclasses.FrozenInstanceError):
            ref.start_verse_number = 17

    def test_str(self):
        assert str(verse_range_reference("John", 4, 5, 10)) == "John 4:5-10"

    def test_to_dict(self):
        data = verse_range_reference("Genesis", 2, 3, 4).to_dict()
        assert data == {
            "book": "Genesis",
            "book_number": 1,
            "book_names": {"osis": "Gen", "abbr": "GEN", "name": "Genesis", "short": "Gn"},
            "reference": "Genesis 2:3-4",
            "reference_type": "verse_range",
            "start_chapter_number": 2,
            "start_verse_number": 3,
            "end_chapter_number": 2,
            "end_verse_number": 4,
            "chapter_count": 1,
            "verse_count": 2,
            "is_valid": True,
        }

    def test_to_dict_unknown_book(self):
        data = build_reference("McDonald", 2).to_dict()
        assert data["book_names"] is None
        assert data["book_number"] is None
        assert data["is_valid"] is False
