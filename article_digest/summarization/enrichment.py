"""EnrichmentService - insights, sentiment and translation.

All three operations share one contract: ask the chat-completion provider for
a specific JSON shape, format the parsed fields for display, hand back the
raw response when the shape is wrong, and replace provider failures with a
fixed message. None of them raise.
"""
from __future__ import annotations

import logging
from typing import Optional

from .client import RapidAPIClient
from .prompt_builder import PromptBuilder, language_name
from .response_parser import (
    InsightsOutput,
    ResponseParser,
    SentimentOutput,
    TranslationOutput,
)

logger = logging.getLogger(__name__)

INSIGHTS_NEEDS_KEY = (
    "Insights feature requires RapidAPI key. "
    "Please add RAPIDAPI_KEY to your environment."
)
SENTIMENT_NEEDS_KEY = "Sentiment analysis requires RapidAPI key."
TRANSLATION_NEEDS_KEY = "Translation feature requires RapidAPI key."

INSIGHTS_UNAVAILABLE = "Unable to generate insights at this time."
SENTIMENT_UNAVAILABLE = "Unable to analyze sentiment at this time."
TRANSLATION_UNAVAILABLE = "Unable to translate at this time."


def format_insights(parsed: InsightsOutput) -> str:
    return "\n\n".join(f"• {insight}" for insight in parsed.insights)


def format_sentiment(parsed: SentimentOutput) -> str:
    emotions = ", ".join(parsed.key_emotions or []) or "N/A"
    return (
        f"**Sentiment:** {parsed.sentiment} ({parsed.confidence or 'Unknown'} confidence)\n\n"
        f"**Analysis:** {parsed.explanation or 'N/A'}\n\n"
        f"**Key Emotions:** {emotions}"
    )


def format_translation(parsed: TranslationOutput, target_language: str) -> str:
    return (
        f"**Translation to {parsed.target_language or target_language}:**\n\n"
        f"{parsed.translation}\n\n"
        f"*Original language: {parsed.original_language or 'Unknown'} | "
        f"Confidence: {parsed.confidence or 'Unknown'}*"
    )


class EnrichmentService:
    """Generates display-ready enrichment text for an article."""

    def __init__(
        self,
        client: RapidAPIClient,
        prompt_builder: Optional[PromptBuilder] = None,
        response_parser: Optional[ResponseParser] = None,
    ):
        self.client = client
        self.prompt_builder = prompt_builder or PromptBuilder()
        self.response_parser = response_parser or ResponseParser()

    @property
    def is_enabled(self) -> bool:
        """Enrichments need the primary credential."""
        return self.client.has_credential

    async def generate_insights(self, content: str) -> str:
        """3-5 bullet insights for ``content``."""
        if not self.is_enabled:
            return INSIGHTS_NEEDS_KEY
        try:
            response = await self.client.chat_complete(
                self.prompt_builder.build_insights(content)
            )
        except Exception as e:
            logger.error("Error generating insights", extra={"error": str(e)})
            return INSIGHTS_UNAVAILABLE

        parsed = self.response_parser.parse_insights(response)
        if parsed is None:
            return response
        return format_insights(parsed)

    async def analyze_sentiment(self, content: str) -> str:
        """Labelled sentiment analysis for ``content``."""
        if not self.is_enabled:
            return SENTIMENT_NEEDS_KEY
        try:
            response = await self.client.chat_complete(
                self.prompt_builder.build_sentiment(content)
            )
        except Exception as e:
            logger.error("Error analyzing sentiment", extra={"error": str(e)})
            return SENTIMENT_UNAVAILABLE

        parsed = self.response_parser.parse_sentiment(response)
        if parsed is None:
            return response
        return format_sentiment(parsed)

    async def translate_text(self, text: str, target_language: str) -> str:
        """Translate ``text`` into the language with code ``target_language``."""
        if not self.is_enabled:
            return TRANSLATION_NEEDS_KEY

        target_name = language_name(target_language)
        try:
            response = await self.client.chat_complete(
                self.prompt_builder.build_translation(text, target_name)
            )
        except Exception as e:
            logger.error(
                "Error translating text",
                extra={"target_language": target_language, "error": str(e)},
            )
            return TRANSLATION_UNAVAILABLE

        parsed = self.response_parser.parse_translation(response)
        if parsed is None:
            return response
        return format_translation(parsed, target_name)
