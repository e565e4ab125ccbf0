"""Fuzzy, field-weighted search for statically generated blogs."""

from blog_search.config import Settings
from blog_search.domain.model import Document, Match, SearchResult
from blog_search.search.engine import PostSearchEngine, create_search_index
from blog_search.search.snippet import build_excerpt, highlight_matches, highlight_spans


__all__ = [
    "Document",
    "Match",
    "PostSearchEngine",
    "SearchResult",
    "Settings",
    "build_excerpt",
    "create_search_index",
    "highlight_matches",
    "highlight_spans",
]
