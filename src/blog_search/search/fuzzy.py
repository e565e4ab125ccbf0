"""Fuzzy matching for typo-tolerant post search.

This module provides edit distance calculation and term-vs-token scoring
for handling typos and partial words in search queries.

Smart Defaults (no per-site config needed):
- Max edit distance of 1 for short terms (3-5 chars)
- Max edit distance of 2 for longer terms (6+ chars)
- No fuzzy matching for very short terms (1-2 chars)
- Adjacent transpositions count as a single edit
- Exact tokens beat prefixes, prefixes beat infixes, infixes beat typos
"""

from __future__ import annotations

from dataclasses import dataclass


# Distance bands per hit kind. Each band stays below the next one so the
# ordering exact < prefix < infix < fuzzy holds for any term length.
PREFIX_SPREAD = 0.1
INFIX_BASE = 0.15
INFIX_SPREAD = 0.1
FUZZY_BASE = 0.2
FUZZY_SPREAD = 0.4


@dataclass(frozen=True)
class TermHit:
    """How a single query term matched a single token.

    ``start`` and ``length`` locate the matched part relative to the token
    start, so callers can turn a hit into a character span.
    """

    distance: float
    start: int
    length: int
    kind: str


def edit_distance(s1: str, s2: str, max_distance: int | None = None) -> int:
    """Calculate the optimal string alignment distance between two strings.

    This is Levenshtein distance extended with adjacent transpositions, so
    ``"djagno"`` is one edit away from ``"django"``.

    Args:
        s1: First string.
        s2: Second string.
        max_distance: If provided, return max_distance+1 early when
            distance is guaranteed to exceed this threshold.

    Returns:
        The minimum number of single-character edits (insertions,
        deletions, substitutions, adjacent swaps) needed to change s1
        into s2. If max_distance is set and exceeded, returns
        max_distance+1.

    Examples:
        >>> edit_distance("kitten", "sitting")
        3
        >>> edit_distance("hello", "hlelo")
        1
        >>> edit_distance("", "abc")
        3
    """
    if not s1:
        return len(s2)
    if not s2:
        return len(s1)

    if len(s1) > len(s2):
        s1, s2 = s2, s1

    m, n = len(s1), len(s2)

    if max_distance is not None and n - m > max_distance:
        return max_distance + 1

    # Three rows: transpositions look two rows back
    before_prev: list[int] = []
    prev_row = list(range(m + 1))

    for j in range(1, n + 1):
        curr_row = [j] + [0] * m
        row_min = j
        for i in range(1, m + 1):
            cost = 0 if s1[i - 1] == s2[j - 1] else 1
            value = min(
                prev_row[i] + 1,  # deletion
                curr_row[i - 1] + 1,  # insertion
                prev_row[i - 1] + cost,  # substitution
            )
            if i > 1 and j > 1 and s1[i - 1] == s2[j - 2] and s1[i - 2] == s2[j - 1]:
                value = min(value, before_prev[i - 2] + 1)  # transposition
            curr_row[i] = value
            row_min = min(row_min, value)

        if max_distance is not None and row_min > max_distance:
            return max_distance + 1

        before_prev, prev_row = prev_row, curr_row

    return prev_row[m]


def get_max_edit_distance(term_length: int) -> int:
    """Get the maximum allowed edit distance for a term based on its length.

    Smart defaults:
    - 1-2 chars: No fuzzy matching (too many false positives)
    - 3-5 chars: Max 1 edit
    - 6+ chars: Max 2 edits
    """
    if term_length <= 2:
        return 0
    if term_length <= 5:
        return 1
    return 2


def term_distance(term: str, token: str) -> TermHit | None:
    """Score how well a lowercased query term matches a lowercased token.

    Returns ``None`` when the term does not match the token at all.
    """
    if not term or not token:
        return None

    if term == token:
        return TermHit(0.0, 0, len(token), "exact")

    coverage = len(term) / len(token) if len(term) < len(token) else 1.0

    if token.startswith(term):
        return TermHit(PREFIX_SPREAD * (1 - coverage), 0, len(term), "prefix")

    position = token.find(term)
    if position != -1:
        return TermHit(INFIX_BASE + INFIX_SPREAD * (1 - coverage), position, len(term), "infix")

    max_distance = get_max_edit_distance(len(term))
    if max_distance == 0:
        return None

    best: TermHit | None = None
    # Whole token first, then the same-length prefix for typos in partial words
    candidates = [token]
    if len(token) > len(term):
        candidates.append(token[: len(term)])
    for candidate in candidates:
        if abs(len(candidate) - len(term)) > max_distance:
            continue
        distance = edit_distance(term, candidate, max_distance)
        if distance > max_distance:
            continue
        hit = TermHit(FUZZY_BASE + FUZZY_SPREAD * distance / len(term), 0, len(candidate), "fuzzy")
        if best is None or hit.distance < best.distance:
            best = hit
    return best
