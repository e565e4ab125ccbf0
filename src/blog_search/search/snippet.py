"""Highlighting and excerpt extraction for search result rendering.

These helpers operate on raw text and a raw query and are independent of
the engine's fuzzy scoring: highlighting is literal, case-insensitive and
never interprets the query as a pattern.

Smart Defaults:
- Excerpts try to start/end on sentence boundaries
- Falls back to word boundaries if no sentence found
- Highlights are wrapped in ``<mark>`` unless another tag is given
"""

from __future__ import annotations

from collections.abc import Sequence
import re


SENTENCE_END_PATTERN = re.compile(r"[.!?]\s+")
WORD_BOUNDARY_PATTERN = re.compile(r"\s+")


def _wrap(fragment: str, tag: str) -> str:
    return f"<{tag}>{fragment}</{tag}>"


def highlight_matches(text: str, query: str, tag: str = "mark") -> str:
    """Wrap every case-insensitive literal occurrence of ``query`` in ``tag``.

    Occurrences are found left to right without overlap and keep their
    original casing; all other text is preserved verbatim.

    Examples:
        >>> highlight_matches("Next.js is great", "next.js")
        '<mark>Next.js</mark> is great'
        >>> highlight_matches("A A A", "")
        'A A A'
    """
    if not query or not text:
        return text

    pattern = re.compile(re.escape(query), re.IGNORECASE)
    return pattern.sub(lambda match: _wrap(match.group(0), tag), text)


def highlight_spans(text: str, spans: Sequence[tuple[int, int]], tag: str = "mark") -> str:
    """Wrap the given ``[start, end)`` ranges of ``text`` in ``tag``.

    Intended for rendering engine match spans. Out-of-range, empty and
    overlapping spans are clamped or skipped rather than rejected.
    """
    if not text or not spans:
        return text

    pieces: list[str] = []
    cursor = 0
    for start, end in sorted(spans):
        start = max(start, cursor)
        end = min(end, len(text))
        if start >= end:
            continue
        pieces.append(text[cursor:start])
        pieces.append(_wrap(text[start:end], tag))
        cursor = end
    pieces.append(text[cursor:])
    return "".join(pieces)


def find_sentence_start(text: str, position: int, max_lookback: int = 200) -> int:
    """Find the start of the sentence containing the position.

    Args:
        text: The full text to search in.
        position: The position to find sentence start for.
        max_lookback: Maximum characters to look back.

    Returns:
        Index of sentence start, or position - max_lookback if not found.
    """
    if position == 0:
        return 0

    start_search = max(0, position - max_lookback)
    search_text = text[start_search:position]

    matches = list(SENTENCE_END_PATTERN.finditer(search_text))
    if matches:
        return start_search + matches[-1].end()

    if start_search == 0:
        return 0

    # No sentence boundary found, start after the first word break in range
    word_break = WORD_BOUNDARY_PATTERN.search(search_text)
    if word_break:
        return start_search + word_break.end()

    return start_search


def find_sentence_end(text: str, position: int, max_lookahead: int = 200) -> int:
    """Find the end of the sentence containing the position.

    Args:
        text: The full text to search in.
        position: The position to find sentence end for.
        max_lookahead: Maximum characters to look ahead.

    Returns:
        Index of sentence end, or position + max_lookahead if not found.
    """
    if position >= len(text):
        return len(text)

    end_search = min(len(text), position + max_lookahead)
    search_text = text[position:end_search]

    match = SENTENCE_END_PATTERN.search(search_text)
    if match:
        return position + match.end()

    if end_search == len(text):
        return end_search

    # No sentence boundary found, stop at the last word break in range
    words = list(WORD_BOUNDARY_PATTERN.finditer(search_text))
    if words:
        return position + words[-1].start()

    return end_search


def extract_sentence_snippet(
    text: str,
    match_position: int,
    match_length: int,
    max_chars: int = 300,
    surrounding_context: int = 100,
) -> str:
    """Extract a window around a match that respects sentence boundaries."""
    if not text:
        return ""

    initial_start = max(0, match_position - surrounding_context)
    initial_end = min(len(text), match_position + match_length + surrounding_context)

    sentence_start = find_sentence_start(text, initial_start, max_lookback=surrounding_context)
    sentence_end = find_sentence_end(text, initial_end, max_lookahead=surrounding_context)

    # If too long, trim to max_chars centered on match
    if sentence_end - sentence_start > max_chars:
        half_max = max_chars // 2
        center = match_position + (match_length // 2)
        sentence_start = max(0, center - half_max)
        sentence_end = min(len(text), sentence_start + max_chars)

    return text[sentence_start:sentence_end].strip()


def build_excerpt(
    text: str,
    query: str,
    max_chars: int = 300,
    surrounding_context: int = 100,
    tag: str = "mark",
) -> str:
    """Build a highlighted, sentence-aware excerpt of ``text`` for ``query``.

    Without an occurrence of the query the beginning of the text is
    returned unhighlighted.
    """
    if not text:
        return ""

    position = text.lower().find(query.lower()) if query else -1
    if position == -1:
        return text[:max_chars].strip()

    snippet = extract_sentence_snippet(
        text,
        position,
        len(query),
        max_chars=max_chars,
        surrounding_context=surrounding_context,
    )
    return highlight_matches(snippet, query, tag=tag)
