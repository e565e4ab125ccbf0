"""In-memory corpus index for post search.

A ``CorpusIndex`` is an immutable snapshot: every document is analyzed once
per field at build time and the result is never mutated afterwards. Updates
happen by building a brand new index and swapping the reference, so readers
holding the old snapshot keep a consistent view.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
import logging

from blog_search.domain.model import Document
from blog_search.search.analyzers import Analyzer, Token, get_analyzer
from blog_search.search.schema import DEFAULT_SCHEMA, SearchField, SearchSchema


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexedValue:
    """One raw field value plus its analyzed tokens."""

    text: str
    tokens: tuple[Token, ...]


@dataclass(frozen=True)
class IndexedField:
    """All analyzed values of one field of one document."""

    name: str
    weight: float
    values: tuple[IndexedValue, ...]

    @property
    def is_empty(self) -> bool:
        return not any(value.tokens for value in self.values)


@dataclass(frozen=True)
class IndexedDocument:
    """A document with its fields analyzed in schema declaration order."""

    document: Document
    fields: tuple[IndexedField, ...]


@dataclass(frozen=True)
class CorpusIndex:
    """Immutable, field-weighted representation of a document corpus."""

    schema: SearchSchema
    entries: tuple[IndexedDocument, ...]
    min_token_length: int = 2

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[IndexedDocument]:
        return iter(self.entries)

    @property
    def is_empty(self) -> bool:
        return not self.entries

    @property
    def document_ids(self) -> tuple[str, ...]:
        return tuple(entry.document.id for entry in self.entries)


def _analyze_field(document: Document, search_field: SearchField, analyzer: Analyzer) -> IndexedField:
    values = tuple(
        IndexedValue(text=value, tokens=tuple(analyzer(value))) for value in document.field_values(search_field.name)
    )
    return IndexedField(name=search_field.name, weight=search_field.weight, values=values)


def build_index(
    documents: Iterable[Document],
    schema: SearchSchema | None = None,
    *,
    min_token_length: int = 2,
) -> CorpusIndex:
    """Analyze ``documents`` into a new corpus index.

    No validation is performed: empty corpora, empty field values and
    duplicate ids all produce a valid index. Duplicates are logged.
    """
    active_schema = schema or DEFAULT_SCHEMA
    analyzers = {
        search_field.name: get_analyzer(search_field.analyzer_name, min_length=min_token_length)
        for search_field in active_schema
    }

    docs = tuple(documents)
    entries = tuple(
        IndexedDocument(
            document=document,
            fields=tuple(
                _analyze_field(document, search_field, analyzers[search_field.name]) for search_field in active_schema
            ),
        )
        for document in docs
    )

    duplicates = sorted(doc_id for doc_id, count in Counter(doc.id for doc in docs).items() if count > 1)
    if duplicates:
        logger.warning("Corpus contains duplicate document ids: %s", ", ".join(duplicates))

    logger.info("Built corpus index with %d documents across %d fields", len(entries), len(active_schema))
    return CorpusIndex(schema=active_schema, entries=entries, min_token_length=min_token_length)


def replace_index(index: CorpusIndex, documents: Iterable[Document]) -> CorpusIndex:
    """Discard ``index`` and build a fresh one over ``documents`` with the same settings."""
    return build_index(documents, index.schema, min_token_length=index.min_token_length)
