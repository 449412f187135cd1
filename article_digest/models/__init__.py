"""
Pydantic models for article-digest.

``ArticleResult`` is the unit produced by the pipeline, persisted by the
history stores and consumed by the exporters.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field, field_validator

from article_digest.utils import is_valid_url

DEFAULT_TITLE = "Untitled Article"
FALLBACK_TITLE = "Article Summary"


def utc_timestamp() -> str:
    """Current time as an ISO-8601 string."""
    return datetime.now(timezone.utc).isoformat()


class ArticleResult(BaseModel):
    """Processed article: summary plus optional enrichments."""

    url: str
    title: str = DEFAULT_TITLE
    summary: str
    insights: str = Field(default="", description="Empty means not generated")
    sentiment: str = Field(default="", description="Empty means not generated")
    translation: str = Field(
        default="",
        description="Replaced on each retranslation; starts empty",
    )
    timestamp: str = Field(default_factory=utc_timestamp)

    @field_validator("url")
    @classmethod
    def _check_url(cls, v: str) -> str:
        if not is_valid_url(v):
            raise ValueError("url must be an absolute http or https URL")
        return v

    def with_translation(self, translation: str) -> "ArticleResult":
        """Copy of this result with ``translation`` replaced."""
        return self.model_copy(update={"translation": translation})

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match over url and summary."""
        needle = query.lower()
        return needle in self.url.lower() or needle in self.summary.lower()


__all__ = [
    "ArticleResult",
    "DEFAULT_TITLE",
    "FALLBACK_TITLE",
    "utc_timestamp",
]
