"""
Failure reasons for article processing.

The pipeline absorbs every provider-level failure except the ones listed
here; each reason carries the message shown to the user.
"""

from __future__ import annotations

from enum import Enum


class FailureReason(str, Enum):
    """Why ``ArticlePipeline.process_article`` gave up."""

    INVALID_URL = "invalid_url"
    FALLBACK_FAILED = "fallback_failed"
    SUMMARIZATION_FAILED = "summarization_failed"

    @property
    def message(self) -> str:
        """User-facing description of the failure."""
        return _MESSAGES[self]


_MESSAGES = {
    FailureReason.INVALID_URL: (
        "Invalid URL format. Please enter a valid article URL "
        "starting with http:// or https://"
    ),
    FailureReason.FALLBACK_FAILED: (
        "Unable to summarize article: the article content could not be extracted."
    ),
    FailureReason.SUMMARIZATION_FAILED: (
        "Unable to summarize article: all summarization providers failed."
    ),
}
