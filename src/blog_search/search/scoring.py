"""Field scoring strategies for post search.

The engine asks a ``FieldScorer`` how well a parsed query matches one
analyzed field. The default ``FuzzyFieldScorer`` is distance-based:

- every query term is compared with every token of the field
  (see ``fuzzy.term_distance``), plus a small penalty for hits far from the
  start of the value
- the field distance is the mean of the best per-term distances, with
  missing terms counting as 1.0
- a field matches when that mean is within ``threshold``
- the field contributes ``max(distance, exact_floor) ** weight`` to the
  document score, which is the product over matched fields

Heavier fields therefore pull the product further towards zero, and an
exact hit in the title beats the same hit in the body.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
import math
from typing import Protocol

from blog_search.domain.model import Match
from blog_search.search.analyzers import get_analyzer
from blog_search.search.fuzzy import term_distance
from blog_search.search.index import IndexedField


DEFAULT_THRESHOLD = 0.4
DEFAULT_LOCATION_SPAN = 100
LOCATION_PENALTY = 0.05
# Exact hits would otherwise score 0 in every field and tie regardless of weight
EXACT_FLOOR = 0.001


@dataclass(frozen=True)
class QueryTerms:
    """Immutable snapshot of an analyzed query."""

    text: str
    terms: tuple[str, ...]

    def is_empty(self) -> bool:
        return not self.terms


@dataclass(frozen=True)
class FieldScore:
    """Outcome of scoring one field of one document."""

    field: str
    distance: float
    contribution: float
    matches: tuple[Match, ...]


class FieldScorer(Protocol):
    """Protocol implemented by field scoring strategies."""

    def score(
        self, query: QueryTerms, field: IndexedField, weight: float
    ) -> FieldScore | None:  # pragma: no cover - interface definition
        ...


def parse_query(query: str, *, min_query_length: int = 2, min_term_length: int = 2) -> QueryTerms:
    """Normalize and tokenize raw query text.

    The query is treated as literal text: punctuation only separates terms.
    Queries shorter than ``min_query_length`` once trimmed yield no terms.
    """
    normalized = query.strip().lower() if isinstance(query, str) else ""
    if len(normalized) < min_query_length:
        return QueryTerms(text=normalized, terms=())

    analyzer = get_analyzer("default", min_length=min_term_length)
    seen: set[str] = set()
    terms: list[str] = []
    for token in analyzer(normalized):
        if token.text in seen:
            continue
        seen.add(token.text)
        terms.append(token.text)
    return QueryTerms(text=normalized, terms=tuple(terms))


def merge_spans(spans: Iterable[tuple[int, int]]) -> tuple[tuple[int, int], ...]:
    """Sort spans and merge overlapping or touching ranges."""
    merged: list[tuple[int, int]] = []
    for start, end in sorted(spans):
        if end <= start:
            continue
        if merged and start <= merged[-1][1]:
            merged[-1] = (merged[-1][0], max(merged[-1][1], end))
        else:
            merged.append((start, end))
    return tuple(merged)


class FuzzyFieldScorer:
    """Typo-tolerant, location-aware field scorer."""

    def __init__(
        self,
        *,
        threshold: float = DEFAULT_THRESHOLD,
        location_span: int = DEFAULT_LOCATION_SPAN,
        exact_floor: float = EXACT_FLOOR,
    ) -> None:
        self.threshold = threshold
        self.location_span = max(1, location_span)
        self.exact_floor = exact_floor

    def _location_penalty(self, start_char: int) -> float:
        return LOCATION_PENALTY * min(1.0, start_char / self.location_span)

    def score(self, query: QueryTerms, field: IndexedField, weight: float) -> FieldScore | None:
        if query.is_empty() or field.is_empty:
            return None

        best = dict.fromkeys(query.terms, 1.0)
        spans_per_value: list[list[tuple[int, int]]] = [[] for _ in field.values]

        for value_idx, value in enumerate(field.values):
            for token in value.tokens:
                for term in query.terms:
                    hit = term_distance(term, token.text)
                    if hit is None:
                        continue
                    distance = min(1.0, hit.distance + self._location_penalty(token.start_char))
                    if distance > self.threshold:
                        continue
                    if distance < best[term]:
                        best[term] = distance
                    start = token.start_char + hit.start
                    spans_per_value[value_idx].append((start, min(token.end_char, start + hit.length)))

        field_distance = sum(best.values()) / len(best)
        if field_distance > self.threshold:
            return None

        matches = tuple(
            Match(field=field.name, matched_text=value.text, spans=merge_spans(spans))
            for value, spans in zip(field.values, spans_per_value)
            if spans
        )
        return FieldScore(
            field=field.name,
            distance=field_distance,
            contribution=max(field_distance, self.exact_floor) ** weight,
            matches=matches,
        )


def combine_field_scores(scores: Sequence[FieldScore]) -> float:
    """Aggregate matched field contributions into one relevance score in ``[0, 1]``."""
    if not scores:
        return 1.0
    product = math.prod(score.contribution for score in scores)
    return min(1.0, max(0.0, product))
