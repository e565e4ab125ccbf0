"""
Field weight table for post search.

Each searchable attribute of a post is declared once with its relative
importance. Weights live in ``[0, 1]`` and do not need to sum to one: a
higher weight makes a hit in that field pull the relevance score further
towards zero.

Default table:
- title: 0.5
- excerpt: 0.3
- body: 0.2
- tags: 0.1
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field


SEARCHABLE_FIELDS: tuple[str, ...] = ("title", "excerpt", "body", "tags")


@dataclass(frozen=True)
class SearchField:
    """
    A weighted, searchable document field.

    Args:
        name: Document attribute name (one of ``SEARCHABLE_FIELDS``)
        weight: Relative importance in ``[0, 1]``
        analyzer_name: Analyzer used for field values (default: standard)
    """

    name: str
    weight: float
    analyzer_name: str | None = None

    def __post_init__(self) -> None:
        if self.name not in SEARCHABLE_FIELDS:
            msg = f"Unknown search field '{self.name}'. Available: {list(SEARCHABLE_FIELDS)}"
            raise ValueError(msg)
        if not 0.0 <= self.weight <= 1.0:
            msg = f"Weight for field '{self.name}' must be within [0, 1], got {self.weight}"
            raise ValueError(msg)


@dataclass(frozen=True)
class SearchSchema:
    """Ordered collection of weighted fields used to build a corpus index."""

    fields: tuple[SearchField, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        names = [f.name for f in self.fields]
        if len(names) != len(set(names)):
            msg = f"Duplicate field names in schema: {names}"
            raise ValueError(msg)

    def __iter__(self) -> Iterator[SearchField]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields)

    def get(self, name: str) -> SearchField | None:
        for search_field in self.fields:
            if search_field.name == name:
                return search_field
        return None

    def fields_by_weight(self) -> tuple[SearchField, ...]:
        """Return fields ordered by weight, heaviest first, ties by declaration order."""
        ranked = sorted(enumerate(self.fields), key=lambda item: (-item[1].weight, item[0]))
        return tuple(search_field for _, search_field in ranked)

    @classmethod
    def from_weights(cls, weights: Mapping[str, float]) -> SearchSchema:
        """Build a schema from a ``{field name: weight}`` mapping.

        Tags are matched per tag value, so they always use the keyword analyzer.
        """
        return cls(
            fields=tuple(
                SearchField(name=name, weight=float(weight), analyzer_name="keyword" if name == "tags" else None)
                for name, weight in weights.items()
            )
        )

    def to_dict(self) -> dict[str, float]:
        return {f.name: f.weight for f in self.fields}


DEFAULT_FIELD_WEIGHTS: Mapping[str, float] = {
    "title": 0.5,
    "excerpt": 0.3,
    "body": 0.2,
    "tags": 0.1,
}

DEFAULT_SCHEMA = SearchSchema.from_weights(DEFAULT_FIELD_WEIGHTS)
