"""Domain models for post search.

Following Cosmic Python principles:
- Value Objects are immutable (frozen=True)
- Domain logic lives in domain layer
- No infrastructure dependencies

Documents are read-only snapshots of blog posts. Search results carry the
matched document plus per-field provenance explaining why it was returned.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class Document(BaseModel):
    """Value object for one searchable blog post.

    ``id`` is the post slug and must be unique across a corpus; uniqueness is
    the content loader's responsibility and is not enforced here.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str = ""
    excerpt: str = ""
    body: str = ""
    tags: tuple[str, ...] = Field(default_factory=tuple)

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, str):
            return (value,)
        return value

    def field_values(self, name: str) -> tuple[str, ...]:
        """Return the raw values of a searchable field as a tuple."""
        if name == "tags":
            return self.tags
        return (getattr(self, name),)

    @classmethod
    def from_post(cls, post: Mapping[str, Any]) -> "Document":
        """Adapt a loaded post (slug + frontmatter + content) into a document.

        Example:
            >>> Document.from_post({"slug": "hello", "frontmatter": {"title": "Hello"}, "content": "Hi"}).title
            'Hello'
        """
        frontmatter = post.get("frontmatter") or {}
        tags = frontmatter.get("tags")
        return cls(
            id=str(post["slug"]),
            title=frontmatter.get("title") or "",
            excerpt=frontmatter.get("excerpt") or "",
            body=post.get("content") or "",
            tags=tuple(str(tag) for tag in tags) if isinstance(tags, (list, tuple)) else (),
        )


class Match(BaseModel):
    """Value object for one field-level hit inside a document.

    ``spans`` are half-open ``(start, end)`` offsets into ``matched_text``,
    ascending and non-overlapping.
    """

    model_config = ConfigDict(frozen=True)

    field: str
    matched_text: str
    spans: tuple[tuple[int, int], ...] = Field(default_factory=tuple)


class SearchResult(BaseModel):
    """Value object for a single ranked search result.

    ``relevance_score`` is distance-style: 0 is a perfect match and values
    approach 1 as relevance degrades.
    """

    model_config = ConfigDict(frozen=True)

    document: Document
    matches: tuple[Match, ...] = Field(default_factory=tuple)
    relevance_score: float = Field(ge=0.0, le=1.0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def relevance_percent(self) -> int:
        """Relevance as a display percentage (100 = perfect)."""
        return round((1 - self.relevance_score) * 100)

    @property
    def matched_fields(self) -> tuple[str, ...]:
        seen: list[str] = []
        for match in self.matches:
            if match.field not in seen:
                seen.append(match.field)
        return tuple(seen)
