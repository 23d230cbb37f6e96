"""Boundary resolution for scripture references.

Pure functions over the book catalog. Given a book token and optional
chapter/verse boundaries they resolve defaults, enumerate chapters and
verses, classify the reference, check it against the catalog and render the
canonical display string.

Book arguments may be any name form or a book number; they are resolved once
on entry to each function. Unknown books are never an error: lookups return
None and validation returns False.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Union

from scriptref.catalog import BookEntry, BookNames, get_catalog

if TYPE_CHECKING:
    from scriptref.engine.models import Chapter, Verse

BookLike = Union[str, int]


class ReferenceType(str, Enum):
    """Shape of a reference."""

    BOOK = "book"
    CHAPTER = "chapter"
    CHAPTER_RANGE = "chapter_range"
    VERSE = "verse"
    VERSE_RANGE = "verse_range"


# ============================================================================
# Book resolution
# ============================================================================


def resolve_book_number(book: BookLike | None) -> int | None:
    """Resolve a book token to its 1-based number.

    Ints pass through unchanged; their range is checked by validate().
    """
    if book is None or isinstance(book, bool):
        return None
    if isinstance(book, int):
        return book
    if not book.strip():
        return None
    return get_catalog().lookup(book)


def _book_entry(book: BookLike | None) -> BookEntry | None:
    number = resolve_book_number(book)
    if number is None:
        return None
    return get_catalog().get(number)


def is_known_book(book: str) -> bool:
    """True if book is a canonical name form. Variant spellings don't count."""
    return get_catalog().is_canonical(book)


def get_book_names(book: BookLike | None) -> BookNames | None:
    """OSIS code, abbreviation, full name and short form of a book."""
    entry = _book_entry(book)
    return entry.names if entry else None


# ============================================================================
# Chapter and verse lookups
# ============================================================================


def last_chapter_number(book: BookLike) -> int | None:
    """Number of chapters in the book."""
    entry = _book_entry(book)
    return entry.chapter_count if entry else None


def last_verse_number(book: BookLike, chapter: int | None = None) -> int | None:
    """Last verse number of a chapter.

    Without a chapter this falls back to the book's last chapter, so it
    returns that chapter's verse count rather than anything book-wide.
    """
    entry = _book_entry(book)
    if entry is None:
        return None
    if chapter is None:
        chapter = entry.chapter_count
    return entry.verse_count(chapter)


def last_verse(book: BookLike, chapter: int | None = None) -> Verse | None:
    """Verse object for the last verse of a chapter (default: last chapter)."""
    from scriptref.engine.models import Verse

    entry = _book_entry(book)
    if entry is None:
        return None
    if chapter is None:
        chapter = entry.chapter_count
    verse_number = entry.verse_count(chapter)
    if verse_number is None:
        return None
    return Verse.build(entry.name, chapter, verse_number)


def last_chapter(book: BookLike) -> Chapter | None:
    """Chapter object for the last chapter of the book."""
    from scriptref.engine.models import Chapter

    entry = _book_entry(book)
    if entry is None:
        return None
    return Chapter.build(entry.name, entry.chapter_count)


def list_chapters(
    book: BookLike, start: int | None = None, end: int | None = None
) -> list[Chapter] | None:
    """Chapters from start to end inclusive.

    start defaults to 1 and end to start. Bounds outside the book are pulled
    back to it. An inverted range returns None instead of being swapped.
    """
    from scriptref.engine.models import Chapter

    entry = _book_entry(book)
    if entry is None:
        return None

    start = 1 if start is None else start
    end = start if end is None else end
    if start > end:
        return None

    start = max(start, 1)
    end = min(end, entry.chapter_count)
    return [Chapter.build(entry.name, number) for number in range(start, end + 1)]


def list_verses(
    book: BookLike,
    chapter: int | None,
    start_verse: int | None = None,
    end_verse: int | None = None,
) -> list[Verse] | None:
    """Verses of one chapter from start_verse to end_verse inclusive.

    start_verse defaults to 1 and end_verse to the chapter's last verse.
    Returns None for an unknown book or chapter, or an inverted range.
    """
    from scriptref.engine.models import Verse

    entry = _book_entry(book)
    if entry is None or chapter is None:
        return None

    chapter_last_verse = entry.verse_count(chapter)
    if chapter_last_verse is None:
        return None

    start_verse = 1 if start_verse is None else start_verse
    end_verse = chapter_last_verse if end_verse is None else end_verse
    if start_verse > end_verse:
        return None

    return [
        Verse.build(entry.name, chapter, number)
        for number in range(start_verse, end_verse + 1)
    ]


# ============================================================================
# Reference shape, validity and display
# ============================================================================


def classify(
    start_chapter: int | None = None,
    start_verse: int | None = None,
    end_chapter: int | None = None,
    end_verse: int | None = None,
) -> ReferenceType | None:
    """Classify a reference from which boundaries are present.

    Returns None only for an end chapter with neither a start chapter nor a
    start verse, which has no meaningful shape.
    """
    if start_chapter is None and end_chapter is None:
        if start_verse is None:
            return ReferenceType.BOOK
        return ReferenceType.VERSE if end_verse is None else ReferenceType.VERSE_RANGE

    if start_chapter is not None:
        if end_chapter is None or end_chapter == start_chapter:
            if start_verse is None:
                return ReferenceType.CHAPTER
            if end_verse is None:
                return ReferenceType.VERSE
            return ReferenceType.VERSE_RANGE
        return ReferenceType.CHAPTER_RANGE

    if start_verse is not None:
        return ReferenceType.VERSE if end_verse is None else ReferenceType.VERSE_RANGE
    return None


def validate(
    book: BookLike,
    start_chapter: int | None = None,
    start_verse: int | None = None,
    end_chapter: int | None = None,
    end_verse: int | None = None,
) -> bool:
    """Check that every present boundary exists in the book and is ordered.

    Rules:
    - the book resolves to a number within the catalog
    - a start chapter lies within the book
    - an end chapter needs a start chapter and lies between it and the
      book's last chapter
    - a start verse needs a start chapter and lies within that chapter
    - an end verse needs an end chapter and lies within it; inside a single
      chapter it must not precede the start verse
    """
    number = resolve_book_number(book)
    catalog = get_catalog()
    if number is None or number < 1 or number > len(catalog):
        return False
    entry = catalog.get(number)
    if entry is None:
        return False

    if start_chapter is not None and entry.verse_count(start_chapter) is None:
        return False

    if end_chapter is not None:
        if start_chapter is None:
            return False
        if not start_chapter <= end_chapter <= entry.chapter_count:
            return False

    if start_verse is not None:
        if start_chapter is None:
            return False
        start_chapter_last = entry.verse_count(start_chapter)
        if start_chapter_last is None or not 1 <= start_verse <= start_chapter_last:
            return False

    if end_verse is not None:
        if end_chapter is None:
            return False
        end_chapter_last = entry.verse_count(end_chapter)
        if end_chapter_last is None or not 1 <= end_verse <= end_chapter_last:
            return False
        if (
            start_verse is not None
            and end_chapter == start_chapter
            and start_verse > end_verse
        ):
            return False

    return True


def render(
    book: str,
    start_chapter: int | None = None,
    start_verse: int | None = None,
    end_chapter: int | None = None,
    end_verse: int | None = None,
) -> str:
    """Render the canonical display string of a reference.

    Examples:
        >>> render("John", 2)
        'John 2'
        >>> render("Genesis", 2, 3, None, 4)
        'Genesis 2:3-4'
        >>> render("John", 2, 3, 4)
        'John 2:3 - 4:54'
        >>> render("John", 2, None, 4)
        'John 2-4'
    """
    if start_chapter is None:
        return book

    reference = f"{book} {start_chapter}"
    crosses_chapters = end_chapter is not None and end_chapter != start_chapter

    if start_verse is not None:
        reference += f":{start_verse}"
        if crosses_chapters:
            if end_verse is None:
                end_verse = last_verse_number(book, end_chapter)
            reference += f" - {end_chapter}"
            if end_verse is not None:
                reference += f":{end_verse}"
        elif end_verse is not None:
            reference += f"-{end_verse}"
        return reference

    if end_verse is not None:
        if crosses_chapters:
            return f"{reference}:1 - {end_chapter}:{end_verse}"
        return f"{reference}:1-{end_verse}"

    if crosses_chapters:
        reference += f"-{end_chapter}"
    return reference
