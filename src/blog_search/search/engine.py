"""Ranked fuzzy search over an in-memory blog post corpus."""

from __future__ import annotations

from collections.abc import Iterable
import logging
import threading

from blog_search.config import Settings
from blog_search.domain.model import Document, SearchResult
from blog_search.observability.metrics import (
    INDEX_BUILD_LATENCY,
    INDEX_DOC_COUNT,
    SEARCH_LATENCY,
    SEARCH_QUERIES,
    track_latency,
)
from blog_search.observability.tracing import create_span
from blog_search.search.index import CorpusIndex, build_index, replace_index
from blog_search.search.schema import SearchSchema
from blog_search.search.scoring import (
    FieldScore,
    FieldScorer,
    FuzzyFieldScorer,
    QueryTerms,
    combine_field_scores,
    parse_query,
)


logger = logging.getLogger(__name__)


class PostSearchEngine:
    """Score and rank posts against free-text queries.

    The engine owns a single reference to an immutable ``CorpusIndex``.
    ``search`` reads that reference once and works on the snapshot;
    ``update_index`` builds a complete replacement before publishing it, so
    a query never observes a half-built index.
    """

    def __init__(
        self,
        documents: Iterable[Document],
        settings: Settings | None = None,
        *,
        schema: SearchSchema | None = None,
        scorer: FieldScorer | None = None,
    ) -> None:
        self.settings = settings or Settings()
        self.scorer: FieldScorer = scorer or FuzzyFieldScorer(
            threshold=self.settings.match_threshold,
            location_span=self.settings.location_span,
        )
        self._write_lock = threading.Lock()
        self._index = self._build(documents, schema or self.settings.build_schema())

    @property
    def index(self) -> CorpusIndex:
        return self._index

    def _build(self, documents: Iterable[Document], schema: SearchSchema) -> CorpusIndex:
        with create_span("search.build_index"), track_latency(INDEX_BUILD_LATENCY):
            index = build_index(documents, schema, min_token_length=self.settings.min_match_char_length)
        INDEX_DOC_COUNT.set(len(index))
        return index

    def update_index(self, documents: Iterable[Document]) -> None:
        """Replace the whole corpus; subsequent searches see only ``documents``."""
        with self._write_lock, create_span("search.update_index"), track_latency(INDEX_BUILD_LATENCY):
            new_index = replace_index(self._index, documents)
            self._index = new_index
        INDEX_DOC_COUNT.set(len(new_index))
        logger.info("Search index replaced: %d documents", len(new_index))

    def search(self, query: str) -> list[SearchResult]:
        """Return up to ``max_results`` results, best (lowest score) first.

        Too-short queries, queries without scorable terms and empty corpora
        all produce an empty list.
        """
        index = self._index
        with create_span("search.query", attributes={"search.query_length": len(query or "")}) as span:
            with track_latency(SEARCH_LATENCY):
                parsed = parse_query(
                    query,
                    min_query_length=self.settings.min_query_length,
                    min_term_length=self.settings.min_match_char_length,
                )
                if parsed.is_empty():
                    SEARCH_QUERIES.labels(outcome="rejected").inc()
                    logger.debug("Rejected search query %r", query)
                    return []
                results = self._rank(index, parsed)

            span.set_attribute("search.result_count", len(results))
            SEARCH_QUERIES.labels(outcome="hit" if results else "empty").inc()
            logger.debug("Query %r matched %d documents", parsed.text, len(results))
            return results

    def _rank(self, index: CorpusIndex, query: QueryTerms) -> list[SearchResult]:
        ordered_fields = index.schema.fields_by_weight()
        ranked: list[tuple[float, int, SearchResult]] = []

        for position, entry in enumerate(index):
            fields_by_name = {indexed.name: indexed for indexed in entry.fields}
            scores: list[FieldScore] = []
            for search_field in ordered_fields:
                field_score = self.scorer.score(query, fields_by_name[search_field.name], search_field.weight)
                if field_score is not None:
                    scores.append(field_score)
            if not scores:
                continue

            relevance = combine_field_scores(scores)
            ranked.append(
                (
                    relevance,
                    position,
                    SearchResult(
                        document=entry.document,
                        matches=tuple(match for score in scores for match in score.matches),
                        relevance_score=relevance,
                    ),
                )
            )

        ranked.sort(key=lambda item: (item[0], item[1]))
        return [result for _, _, result in ranked[: self.settings.max_results]]


def create_search_index(documents: Iterable[Document], settings: Settings | None = None) -> PostSearchEngine:
    """Build a search engine over ``documents``."""
    return PostSearchEngine(documents, settings)
