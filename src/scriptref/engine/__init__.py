"""Reference resolution and text scanning."""

from scriptref.engine.librarian import ReferenceType
from scriptref.engine.models import (
    Chapter,
    Reference,
    Verse,
    book_reference,
    build_reference,
    chapter_range_reference,
    chapter_reference,
    verse_range_reference,
    verse_reference,
)
from scriptref.engine.scanner import parse_references, scan_text

__all__ = [
    "ReferenceType",
    "Chapter",
    "Reference",
    "Verse",
    "book_reference",
    "build_reference",
    "chapter_range_reference",
    "chapter_reference",
    "verse_range_reference",
    "verse_reference",
    "parse_references",
    "scan_text",
]
