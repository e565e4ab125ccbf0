"""Centralized configuration for blog-search using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from blog_search.search.schema import DEFAULT_FIELD_WEIGHTS, SearchSchema


class Settings(BaseSettings):
    """Strictly typed search configuration loaded from environment variables.

    Every variable is prefixed with ``BLOG_SEARCH_`` (e.g.
    ``BLOG_SEARCH_TITLE_WEIGHT=0.6``) and validated at construction time.
    """

    model_config = SettingsConfigDict(
        env_prefix="BLOG_SEARCH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    # Field weights
    title_weight: float = Field(default=DEFAULT_FIELD_WEIGHTS["title"], ge=0.0, le=1.0, description="Title weight")
    excerpt_weight: float = Field(
        default=DEFAULT_FIELD_WEIGHTS["excerpt"], ge=0.0, le=1.0, description="Excerpt weight"
    )
    body_weight: float = Field(default=DEFAULT_FIELD_WEIGHTS["body"], ge=0.0, le=1.0, description="Body weight")
    tags_weight: float = Field(default=DEFAULT_FIELD_WEIGHTS["tags"], ge=0.0, le=1.0, description="Tags weight")

    # Matching
    match_threshold: float = Field(
        default=0.4,
        ge=0.0,
        le=1.0,
        description="Maximum field distance still counted as a match (0 = exact only)",
    )
    max_results: int = Field(default=20, ge=1, description="Maximum number of results returned per query")
    min_query_length: int = Field(default=2, ge=1, description="Minimum trimmed query length")
    min_match_char_length: int = Field(default=2, ge=1, description="Minimum length of a scored token")
    location_span: int = Field(
        default=100,
        ge=1,
        description="Characters after which a hit receives the full location penalty",
    )

    # Logging
    log_level: str = Field(default="info", description="Logging level")
    log_json: bool = Field(default=True, description="Emit structured JSON logs")

    def field_weights(self) -> dict[str, float]:
        return {
            "title": self.title_weight,
            "excerpt": self.excerpt_weight,
            "body": self.body_weight,
            "tags": self.tags_weight,
        }

    def build_schema(self) -> SearchSchema:
        """Return the field weight table for the configured weights."""
        return SearchSchema.from_weights(self.field_weights())
