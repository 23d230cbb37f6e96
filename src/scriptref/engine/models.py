"""Reference, Chapter and Verse value objects.

Every object is fully computed at construction and immutable afterwards.
Build them through the ``build`` classmethods or the module-level helpers:

    build_reference("Genesis", 2, 3, 4, 5)   # Genesis 2:3 - 4:5
    chapter_reference("Genesis", 2)          # Genesis 2
    verse_range_reference("John", 4, 5, 10)  # John 4:5-10

A reference to a book that is not in the catalog is still built: its
``is_valid`` is False, ``book_number`` is None and its chapter and verse
lists are empty.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from scriptref.catalog import BookNames
from scriptref.engine.librarian import (
    ReferenceType,
    classify,
    get_book_names,
    last_chapter_number,
    last_verse_number,
    list_chapters,
    list_verses,
    render,
    resolve_book_number,
    validate,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Verse:
    """A single verse location."""

    book: str
    chapter_number: int | None
    verse_number: int
    book_number: int | None
    book_names: BookNames | None
    reference: str
    is_valid: bool
    reference_type: ReferenceType = ReferenceType.VERSE

    @classmethod
    def build(cls, book: str, chapter_number: int | None, verse_number: int) -> "Verse":
        """Build a verse. The book keeps the form it was given in ("Matt")."""
        return cls(
            book=book,
            chapter_number=chapter_number,
            verse_number=verse_number,
            book_number=resolve_book_number(book),
            book_names=get_book_names(book),
            reference=render(book, chapter_number, verse_number),
            is_valid=validate(book, chapter_number, verse_number),
        )

    def __str__(self) -> str:
        return self.reference

    def to_dict(self) -> dict:
        return {
            "book": self.book,
            "book_number": self.book_number,
            "chapter_number": self.chapter_number,
            "verse_number": self.verse_number,
            "reference": self.reference,
            "reference_type": self.reference_type.value,
            "is_valid": self.is_valid,
        }


@dataclass(frozen=True)
class Chapter:
    """A whole chapter with its verses."""

    book: str
    chapter_number: int
    book_names: BookNames | None
    reference: str
    start_verse_number: int
    end_verse_number: int | None
    start_verse: Verse
    end_verse: Verse | None
    verses: tuple[Verse, ...]
    is_valid: bool
    reference_type: ReferenceType = ReferenceType.CHAPTER

    @classmethod
    def build(cls, book: str, chapter_number: int) -> "Chapter":
        end_verse_number = last_verse_number(book, chapter_number)
        end_verse = (
            Verse.build(book, chapter_number, end_verse_number)
            if end_verse_number is not None
            else None
        )
        return cls(
            book=book,
            chapter_number=chapter_number,
            book_names=get_book_names(book),
            reference=render(book, chapter_number),
            start_verse_number=1,
            end_verse_number=end_verse_number,
            start_verse=Verse.build(book, chapter_number, 1),
            end_verse=end_verse,
            verses=tuple(list_verses(book, chapter_number) or ()),
            is_valid=validate(book, chapter_number),
        )

    def __str__(self) -> str:
        return self.reference

    def to_dict(self) -> dict:
        return {
            "book": self.book,
            "chapter_number": self.chapter_number,
            "reference": self.reference,
            "reference_type": self.reference_type.value,
            "start_verse_number": self.start_verse_number,
            "end_verse_number": self.end_verse_number,
            "verse_count": len(self.verses),
            "is_valid": self.is_valid,
        }


@dataclass(frozen=True)
class Reference:
    """A resolved reference: a book plus start and end chapter/verse boundaries.

    The ``*_number`` fields hold the effective boundaries after defaults are
    filled in; ``reference_type``, ``reference`` and ``is_valid`` are derived
    from the boundaries the caller actually gave.
    """

    book: str
    book_number: int | None
    book_names: BookNames | None
    reference: str
    reference_type: ReferenceType | None
    start_chapter_number: int
    end_chapter_number: int | None
    start_verse_number: int
    end_verse_number: int | None
    start_chapter: Chapter
    end_chapter: Chapter | None
    start_verse: Verse
    end_verse: Verse | None
    chapters: tuple[Chapter, ...]
    verses: tuple[Verse, ...]
    is_valid: bool

    @classmethod
    def build(
        cls,
        book: str,
        start_chapter: int | None = None,
        start_verse: int | None = None,
        end_chapter: int | None = None,
        end_verse: int | None = None,
    ) -> "Reference":
        """Resolve a book and optional boundaries into a full reference.

        Missing boundaries default as follows:
        - start chapter: 1
        - end chapter: the start chapter if one was given, else the book's
          last chapter
        - start verse: 1
        - end verse: the start verse if one was given, else the last verse
          of the end chapter

        Args:
            book: Any name form of the book ("Genesis", "Gen", "GEN", "Gn")
            start_chapter: First chapter
            start_verse: First verse, within start_chapter
            end_chapter: Last chapter
            end_verse: Last verse, within end_chapter

        Returns:
            Reference with every field populated
        """
        names = get_book_names(book)
        if names is None:
            logger.debug(f"Unknown book '{book}', building unresolved reference")
        name = names.name if names else book

        start_chapter_number = start_chapter if start_chapter is not None else 1
        if end_chapter is not None:
            end_chapter_number = end_chapter
        elif start_chapter is not None:
            end_chapter_number = start_chapter_number
        else:
            end_chapter_number = last_chapter_number(name)

        start_verse_number = start_verse if start_verse is not None else 1
        if end_verse is not None:
            end_verse_number = end_verse
        elif start_verse is not None:
            end_verse_number = start_verse
        elif end_chapter_number is not None:
            end_verse_number = last_verse_number(name, end_chapter_number)
        else:
            end_verse_number = None

        if start_verse is not None:
            start_verse_obj = Verse.build(name, start_chapter, start_verse)
        else:
            start_verse_obj = Verse.build(name, start_chapter_number, 1)

        if end_verse is not None:
            end_context = end_chapter if end_chapter is not None else start_chapter
        else:
            end_context = end_chapter_number
        end_verse_obj = (
            Verse.build(name, end_context, end_verse_number)
            if end_verse_number is not None
            else None
        )

        chapters: tuple[Chapter, ...] = ()
        verses: list[Verse] = []
        if end_chapter_number is not None:
            chapters = tuple(
                list_chapters(name, start_chapter_number, end_chapter_number) or ()
            )
            verses = _collect_verses(
                name,
                start_chapter_number,
                end_chapter_number,
                start_verse_number,
                end_verse_number,
            )

        return cls(
            book=name,
            book_number=resolve_book_number(name),
            book_names=names,
            reference=render(name, start_chapter, start_verse, end_chapter_number, end_verse),
            reference_type=classify(start_chapter_number, start_verse, end_chapter, end_verse),
            start_chapter_number=start_chapter_number,
            end_chapter_number=end_chapter_number,
            start_verse_number=start_verse_number,
            end_verse_number=end_verse_number,
            start_chapter=Chapter.build(name, start_chapter_number),
            end_chapter=(
                Chapter.build(name, end_chapter_number)
                if end_chapter_number is not None
                else None
            ),
            start_verse=start_verse_obj,
            end_verse=end_verse_obj,
            chapters=chapters,
            verses=tuple(verses),
            is_valid=validate(
                name, start_chapter_number, start_verse, end_chapter_number, end_verse
            ),
        )

    def __str__(self) -> str:
        return self.reference

    def to_dict(self) -> dict:
        """Summary form: scalar fields plus chapter and verse counts."""
        return {
            "book": self.book,
            "book_number": self.book_number,
            "book_names": self.book_names.to_dict() if self.book_names else None,
            "reference": self.reference,
            "reference_type": self.reference_type.value if self.reference_type else None,
            "start_chapter_number": self.start_chapter_number,
            "start_verse_number": self.start_verse_number,
            "end_chapter_number": self.end_chapter_number,
            "end_verse_number": self.end_verse_number,
            "chapter_count": len(self.chapters),
            "verse_count": len(self.verses),
            "is_valid": self.is_valid,
        }


def _collect_verses(
    book: str,
    start_chapter: int,
    end_chapter: int,
    start_verse: int,
    end_verse: int | None,
) -> list[Verse]:
    """Verses across a chapter range, trimmed at the first and last chapter.

    Only chapters that exist in the book are visited, however far the range
    runs past it.
    """
    chapter_count = last_chapter_number(book)
    if chapter_count is None:
        return []

    verses: list[Verse] = []
    for chapter in range(max(start_chapter, 1), min(end_chapter, chapter_count) + 1):
        first = start_verse if chapter == start_chapter else 1
        if chapter == end_chapter and end_verse is not None:
            last = end_verse
        else:
            last = last_verse_number(book, chapter)
        verses.extend(list_verses(book, chapter, first, last) or ())
    return verses


# ============================================================================
# Builders
# ============================================================================


def build_reference(
    book: str,
    start_chapter: int | None = None,
    start_verse: int | None = None,
    end_chapter: int | None = None,
    end_verse: int | None = None,
) -> Reference:
    """Build a Reference from a book and any subset of its boundaries."""
    return Reference.build(book, start_chapter, start_verse, end_chapter, end_verse)


def book_reference(book: str) -> Reference:
    """The whole book, e.g. "Genesis"."""
    return Reference.build(book)


def chapter_reference(book: str, chapter: int) -> Reference:
    """A single chapter, e.g. "Genesis 2"."""
    return Reference.build(book, start_chapter=chapter)


def verse_reference(book: str, chapter: int, verse: int) -> Reference:
    """A single verse, e.g. "Genesis 2:1"."""
    return Reference.build(book, start_chapter=chapter, start_verse=verse)


def chapter_range_reference(book: str, start_chapter: int, end_chapter: int) -> Reference:
    """Whole chapters, e.g. "Genesis 2-3"."""
    return Reference.build(book, start_chapter=start_chapter, end_chapter=end_chapter)


def verse_range_reference(
    book: str, chapter: int, start_verse: int, end_verse: int
) -> Reference:
    """Verses within one chapter, e.g. "Genesis 2:3-4"."""
    return Reference.build(
        book, start_chapter=chapter, start_verse=start_verse, end_verse=end_verse
    )
