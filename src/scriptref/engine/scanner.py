"""Scripture reference detection in free text.

Finds every book token in a text, with an optional locant after it, and
builds a Reference for each match in left-to-right order.

Recognized forms:
- Book only: "Genesis", "jam"
- Chapter: "Psalm 23"
- Verse: "John 3:16", "James 1.2"
- Verse range: "John 4:5-10"
- Chapter range: "James 1 - 2", "James 1—2"
- Cross-chapter range: "James 1:2-2:4", "James 1 . 2 -  2 . 4"

A dotted verse followed by a bare dash number ("James 1.2 - 2") keeps
only the start chapter and verse.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache

from scriptref.catalog import get_catalog, normalize_token
from scriptref.engine.models import Reference, build_reference

logger = logging.getLogger(__name__)

# Range separators
DASHES = "-–—"

_LOCANT = (
    r"\s*"
    r"(?:(?P<start_chapter>\d+)"
    r"(?:\s*[:.]\s*(?P<start_verse>\d+))?"
    rf"(?:\s*[{DASHES}]\s*(?P<range_end>\d+)"
    r"(?:\s*[:.]\s*(?P<range_end_verse>\d+))?)?"
    r")?"
)


def _token_pattern(token: str) -> str:
    # Spaces inside multi-word tokens match any whitespace run
    return r"\s+".join(re.escape(part) for part in token.split())


@lru_cache(maxsize=None)
def book_pattern() -> re.Pattern[str]:
    """Compile the reference pattern from every catalog token, longest first.

    The token must not follow a letter or digit and must not be followed by
    a letter, so "Jos" never matches inside "Joseph".
    """
    tokens = get_catalog().tokens()
    alternation = "|".join(_token_pattern(token) for token in tokens)
    pattern = re.compile(
        rf"(?<![^\W_])(?P<book>{alternation})(?![^\W\d_]){_LOCANT}",
        re.IGNORECASE,
    )
    logger.debug(f"Compiled book pattern from {len(tokens)} tokens")
    return pattern


def match_boundaries(match: re.Match[str]) -> dict[str, int]:
    """Map a pattern match to build_reference keyword arguments.

    Which separators appear in the locant decide what the third number
    means: after a colon it ends a verse range, after a dot it is dropped,
    and without a verse it ends a chapter range.
    """
    start_chapter, start_verse, range_end, range_end_verse = (
        int(value.strip()) if value is not None else None
        for value in match.group(
            "start_chapter", "start_verse", "range_end", "range_end_verse"
        )
    )
    locant = match.string[match.end("book") : match.end()]

    if start_chapter is None:
        return {}
    if range_end is None:
        if start_verse is None:
            return {"start_chapter": start_chapter}
        return {"start_chapter": start_chapter, "start_verse": start_verse}

    if start_verse is None:
        if range_end_verse is None:
            return {"start_chapter": start_chapter, "end_chapter": range_end}
        return {
            "start_chapter": start_chapter,
            "end_chapter": range_end,
            "end_verse": range_end_verse,
        }

    if range_end_verse is not None:
        return {
            "start_chapter": start_chapter,
            "start_verse": start_verse,
            "end_chapter": range_end,
            "end_verse": range_end_verse,
        }

    if ":" not in locant and "." in locant:
        return {"start_chapter": start_chapter, "start_verse": start_verse}
    return {
        "start_chapter": start_chapter,
        "start_verse": start_verse,
        "end_verse": range_end,
    }


def scan_text(text: str) -> list[Reference]:
    """Find all scripture references in a text.

    Args:
        text: Free text, e.g. "I hope Matt 2:4 and James 5:1-5 get parsed"

    Returns:
        References in order of appearance (empty if none are found)
    """
    if not text:
        return []

    catalog = get_catalog()
    references = []
    for match in book_pattern().finditer(text):
        token = normalize_token(match.group("book"))
        if catalog.lookup(token) is None:
            logger.debug(f"Dropping match with unknown book token: {match.group(0)!r}")
            continue

        boundaries = match_boundaries(match)
        logger.debug(f"Matched {match.group(0).strip()!r} -> {token} {boundaries}")
        references.append(build_reference(token, **boundaries))

    return references


def parse_references(text: str) -> list[Reference]:
    """Alias of scan_text()."""
    return scan_text(text)
