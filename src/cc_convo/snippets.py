"""Snippet extraction and query-term highlighting for search results."""

import re
from collections.abc import Iterable

from rich.text import Text

from cc_convo.config import HIGHLIGHT_MIN_WORD_LEN, HIGHLIGHT_STYLE, SNIPPET_CONTEXT_CHARS

ELLIPSIS = "..."


def find_first_occurrence(text: str, terms: Iterable[str]) -> int | None:
    """Offset of the earliest case-insensitive occurrence of any term."""
    best: int | None = None
    for term in terms:
        if not term:
            continue
        match = re.search(re.escape(term), text, re.IGNORECASE)
        if match and (best is None or match.start() < best):
            best = match.start()
    return best


def extract_snippet(
    text: str, terms: Iterable[str], context_chars: int = SNIPPET_CONTEXT_CHARS
) -> str:
    """Cut a window of text around the first query-term occurrence.

    The window spans ``context_chars`` characters either side of the
    match and is marked with an ellipsis on each truncated side. Without
    any occurrence, the start of the text is returned instead. Offsets
    count characters, not bytes, so a multi-byte character is never split.

    Args:
        text: The document text.
        terms: Lowercased query terms; matched as plain substrings.
        context_chars: Characters to keep before and after the match.
    """
    pos = find_first_occurrence(text, terms)

    if pos is None:
        window = 2 * context_chars
        snippet = text[:window].strip()
        return snippet + ELLIPSIS if len(text) > window else snippet

    start = max(0, pos - context_chars)
    end = min(len(text), pos + context_chars)
    snippet = text[start:end].strip()
    prefix = ELLIPSIS if start > 0 else ""
    suffix = ELLIPSIS if end < len(text) else ""
    return f"{prefix}{snippet}{suffix}"


def _is_whole_word(text: str, start: int, end: int) -> bool:
    before_ok = start == 0 or not text[start - 1].isalnum()
    after_ok = end >= len(text) or not text[end].isalnum()
    return before_ok and after_ok


def find_highlight_ranges(
    text: str, query: str, min_word_len: int = HIGHLIGHT_MIN_WORD_LEN
) -> list[tuple[int, int]]:
    """Find whole-word query matches as non-overlapping ``(start, end)`` ranges.

    Words shorter than ``min_word_len`` UTF-8 bytes are ignored, so a
    two-character CJK word still counts. Earlier query words claim text
    first, and within a word earlier occurrences win; any later candidate
    overlapping an accepted range is dropped. Ranges are character offsets.
    """
    words = [
        word for word in query.lower().split() if len(word.encode("utf-8")) >= min_word_len
    ]
    ranges: list[tuple[int, int]] = []

    for word in words:
        pattern = re.compile(re.escape(word), re.IGNORECASE)
        match = pattern.search(text)
        while match:
            start, end = match.span()
            if _is_whole_word(text, start, end) and not any(
                start < taken_end and end > taken_start for taken_start, taken_end in ranges
            ):
                ranges.append((start, end))
            # Step one character so overlapping occurrences are still considered
            match = pattern.search(text, start + 1)

    return ranges


def highlight_matches(text: str, query: str, style: str = HIGHLIGHT_STYLE) -> Text:
    """Highlight query terms in text as a styled Rich ``Text``.

    The text is never parsed as markup, so brackets and backslashes in the
    input come out unchanged.
    """
    highlighted = Text(text)
    for start, end in sorted(find_highlight_ranges(text, query)):
        highlighted.stylize(style, start, end)
    return highlighted
