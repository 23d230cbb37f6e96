"""Book catalog loading and lookup.

Loads books.yaml: the 66 canonical books with their name forms and per-chapter
verse counts. The catalog is read once and never mutated afterwards.

Name forms per book:
- name: full English name ("1 Corinthians")
- osis: OSIS code ("1Cor")
- abbr: Paratext abbreviation ("1CO")
- short: short display form ("1 Cor")
- variants: curated alternate spellings ("i cor", "first corinthians")

Every form is matched case-insensitively with internal whitespace collapsed.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "books.yaml"

_WHITESPACE = re.compile(r"\s+")


class CatalogValidationError(Exception):
    """Raised when the book catalog file is malformed."""

    def __init__(self, message: str, book_key: str | None = None):
        self.book_key = book_key
        full_message = f"[{book_key}] {message}" if book_key else message
        super().__init__(full_message)


def normalize_token(token: str) -> str:
    """Lowercase a book token and collapse runs of whitespace."""
    return _WHITESPACE.sub(" ", token.strip()).lower()


@dataclass(frozen=True)
class BookNames:
    """The four canonical name forms of a book."""

    osis: str
    abbr: str
    name: str
    short: str

    def to_dict(self) -> dict:
        return {
            "osis": self.osis,
            "abbr": self.abbr,
            "name": self.name,
            "short": self.short,
        }


@dataclass(frozen=True)
class BookEntry:
    """A single book of the catalog."""

    number: int
    name: str
    osis: str
    abbr: str
    short: str
    verse_counts: tuple[int, ...]
    variants: tuple[str, ...] = ()

    @property
    def chapter_count(self) -> int:
        return len(self.verse_counts)

    @property
    def names(self) -> BookNames:
        return BookNames(osis=self.osis, abbr=self.abbr, name=self.name, short=self.short)

    @property
    def canonical_forms(self) -> tuple[str, ...]:
        """Name, OSIS, abbreviation and short form (no variants)."""
        return (self.name, self.osis, self.abbr, self.short)

    def verse_count(self, chapter: int) -> int | None:
        """Number of verses in a 1-indexed chapter, None if out of range."""
        if chapter < 1 or chapter > self.chapter_count:
            return None
        return self.verse_counts[chapter - 1]

    @classmethod
    def from_dict(cls, number: int, data: dict) -> "BookEntry":
        """Create a BookEntry from a books.yaml entry."""
        key = str(data.get("name") or f"book #{number}")

        for required in ("name", "osis", "abbr", "short", "verses"):
            if not data.get(required):
                raise CatalogValidationError(f"Missing required field: {required}", key)

        verses = data["verses"]
        if not isinstance(verses, list):
            raise CatalogValidationError("verses must be a list of integers", key)

        verse_counts = []
        for chapter, count in enumerate(verses, start=1):
            if not isinstance(count, int) or isinstance(count, bool) or count < 1:
                raise CatalogValidationError(
                    f"Chapter {chapter} has invalid verse count: {count!r}", key
                )
            verse_counts.append(count)

        chapters = data.get("chapters")
        if chapters is not None and chapters != len(verse_counts):
            raise CatalogValidationError(
                f"chapters says {chapters} but verses lists {len(verse_counts)}", key
            )

        variants = data.get("variants") or []
        if not isinstance(variants, list):
            raise CatalogValidationError("variants must be a list of strings", key)

        return cls(
            number=number,
            name=str(data["name"]),
            osis=str(data["osis"]),
            abbr=str(data["abbr"]),
            short=str(data["short"]),
            verse_counts=tuple(verse_counts),
            variants=tuple(str(v) for v in variants),
        )


@dataclass
class BookCatalog:
    """All books of the canon plus the name lookup tables built from them.

    Lookup tables:
        books_by_any_name: every known token (lowercased) -> book number
        canonical_books: name/OSIS/abbr/short only (lowercased) -> book number
    """

    books: tuple[BookEntry, ...] = ()
    path: Path | None = None
    books_by_any_name: dict[str, int] = field(default_factory=dict, init=False)
    canonical_books: dict[str, int] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        for entry in self.books:
            for form in entry.canonical_forms:
                self._register(self.canonical_books, form, entry)
                self._register(self.books_by_any_name, form, entry)
        # Variants never shadow a canonical form of another book
        for entry in self.books:
            for variant in entry.variants:
                self._register(self.books_by_any_name, variant, entry)

    @staticmethod
    def _register(table: dict[str, int], token: str, entry: BookEntry) -> None:
        key = normalize_token(token)
        if not key:
            return
        existing = table.get(key)
        if existing is None:
            table[key] = entry.number
        elif existing != entry.number:
            logger.warning(
                f"Book token '{token}' of {entry.name} already maps to book "
                f"{existing}, keeping the first entry"
            )

    def __len__(self) -> int:
        return len(self.books)

    def get(self, number: int) -> BookEntry | None:
        """Get a book by its 1-based number."""
        if number < 1 or number > len(self.books):
            return None
        return self.books[number - 1]

    def lookup(self, token: str) -> int | None:
        """Resolve any known name form to a book number."""
        return self.books_by_any_name.get(normalize_token(token))

    def is_canonical(self, token: str) -> bool:
        """True if token is a name, OSIS code, abbreviation or short form."""
        return normalize_token(token) in self.canonical_books

    @property
    def book_names_by_number(self) -> dict[int, BookNames]:
        return {entry.number: entry.names for entry in self.books}

    @property
    def verse_counts_by_book(self) -> dict[int, tuple[int, ...]]:
        return {entry.number: entry.verse_counts for entry in self.books}

    def tokens(self) -> list[str]:
        """All lookup tokens, longest first."""
        return sorted(self.books_by_any_name, key=lambda t: (-len(t), t))

    @classmethod
    def load(cls, path: Path | str | None = None) -> "BookCatalog":
        """Load the catalog from a YAML file.

        Args:
            path: Path to a books.yaml file. Defaults to the packaged catalog.

        Returns:
            Loaded and validated BookCatalog

        Raises:
            CatalogValidationError: If the catalog is malformed
            FileNotFoundError: If the catalog file does not exist
        """
        if path is None:
            path = DEFAULT_CATALOG_PATH
        if isinstance(path, str):
            path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Catalog not found: {path}")

        with open(path, "r", encoding="utf-8") as f:
            raw_data = yaml.safe_load(f)

        if not isinstance(raw_data, dict) or not isinstance(raw_data.get("books"), list):
            raise CatalogValidationError("Catalog must be a mapping with a 'books' list")

        books = []
        for number, value in enumerate(raw_data["books"], start=1):
            if not isinstance(value, dict):
                raise CatalogValidationError(f"Entry {number} is not a mapping")
            books.append(BookEntry.from_dict(number, value))

        catalog = cls(books=tuple(books), path=path)
        logger.info(
            f"Loaded {len(catalog)} books ({len(catalog.books_by_any_name)} tokens) "
            f"from {path}"
        )
        return catalog


@lru_cache(maxsize=None)
def get_catalog() -> BookCatalog:
    """Load the configured catalog once and share it."""
    from scriptref.config import Settings

    return BookCatalog.load(Settings().catalog_path)
