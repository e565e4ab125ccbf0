"""Domain layer - search value objects with no infrastructure dependencies.

This layer contains:
- Document: an immutable snapshot of one blog post's searchable fields
- Match: which field matched and where
- SearchResult: a ranked document with its match provenance
"""

from blog_search.domain.model import Document, Match, SearchResult


__all__ = [
    "Document",
    "Match",
    "SearchResult",
]
