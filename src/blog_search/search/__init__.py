"""
Post search package.

This package provides a pure-Python fuzzy search stack:
- schema: Field weight table
- analyzers: Tokenizers and filters (lowercase, min length)
- fuzzy: Edit distance and term-vs-token scoring
- index: Immutable corpus index snapshots
- scoring: Pluggable field scorers and score aggregation
- engine: Ranked search with atomic index replacement
- snippet: Highlighting and excerpts for rendering
"""
