"""scriptref - find and resolve Bible references in free text."""

__version__ = "0.1.0"

from scriptref.catalog import get_catalog
from scriptref.engine import (
    Chapter,
    Reference,
    ReferenceType,
    Verse,
    book_reference,
    build_reference,
    chapter_range_reference,
    chapter_reference,
    parse_references,
    scan_text,
    verse_range_reference,
    verse_reference,
)

__all__ = [
    "__version__",
    "get_catalog",
    "Chapter",
    "Reference",
    "ReferenceType",
    "Verse",
    "book_reference",
    "build_reference",
    "chapter_range_reference",
    "chapter_reference",
    "parse_references",
    "scan_text",
    "verse_range_reference",
    "verse_reference",
]
