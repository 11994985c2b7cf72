"""Query sanitization for full-text MATCH expressions.

The FTS engine's MATCH syntax reserves most ASCII punctuation as operators,
and escaping helpers meant for SQL string literals do not cover it. The
sanitizer drops those characters instead of escaping them.

The engine also cannot match an apostrophe, so a word like "I'm" would never
be found. Replacing the apostrophe with a space turns it into a word boundary
and the query still matches the surrounding tokens.
"""

from typing import Final

APOSTROPHE: Final = "'"

# ASCII punctuation/symbol bands around the digit and letter ranges (inclusive).
_BANNED_RANGES: Final = ((33, 47), (58, 64), (91, 96), (123, 126))

BANNED_CHARACTERS: Final[frozenset[str]] = frozenset(
    chr(code) for start, end in _BANNED_RANGES for code in range(start, end + 1)
)


def sanitize_query(raw: str) -> str:
    """Return raw with MATCH operator characters removed.

    Banned characters are dropped, except the apostrophe which becomes a
    space. Everything else (letters, digits, whitespace, non-ASCII) is copied
    unchanged: no case folding, whitespace collapsing or Unicode
    normalization.

    Args:
        raw: Text as typed by the user; may be empty.

    Returns:
        Sanitized query, never longer than raw. Empty input gives "".
    """
    out: list[str] = []
    for ch in raw:
        if ch not in BANNED_CHARACTERS:
            out.append(ch)
        elif ch == APOSTROPHE:
            out.append(" ")
    return "".join(out)


def is_blank_query(raw: str | None) -> bool:
    """True for None, the empty string, or whitespace-only text."""
    return not raw or raw.isspace()
