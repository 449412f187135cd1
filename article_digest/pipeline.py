"""ArticlePipeline - orchestrator for article processing.

Drives URL cleaning, extraction, summarization and enrichment. Only three
failures escape ``process_article`` (see ``FailureReason``); every other
provider failure is absorbed into a degraded but successful result.
"""
from __future__ import annotations

import asyncio
import logging
from typing import Optional, Tuple

import httpx

from article_digest.config import DigestSettings, get_settings
from article_digest.exceptions import (
    InvalidUrl,
    ProcessingFailed,
    ProviderError,
    SummarizationFailed,
)
from article_digest.models import DEFAULT_TITLE, FALLBACK_TITLE, ArticleResult
from article_digest.status import FailureReason
from article_digest.summarization import (
    EnrichmentService,
    OpenAIChatClient,
    PromptBuilder,
    RapidAPIClient,
    ResponseParser,
    SummaryService,
    create_summary_service,
)
from article_digest.utils import sanitize_url

logger = logging.getLogger(__name__)

CONTENT_KEYS = ("content", "text")
TITLE_KEYS = ("title",)

FALLBACK_INSIGHTS = "Unable to generate insights without full content."
FALLBACK_SENTIMENT = "Unable to analyze sentiment without full content."
ENRICHMENT_INSIGHTS_FAILED = "Unable to generate insights."
ENRICHMENT_SENTIMENT_FAILED = "Unable to analyze sentiment."


class ArticlePipeline:
    """Turns an article URL into an ``ArticleResult``.

    Dependencies are injected; use ``create_pipeline`` to build one from
    settings.
    """

    def __init__(
        self,
        client: RapidAPIClient,
        summary_service: SummaryService,
        enrichment_service: EnrichmentService,
        response_parser: Optional[ResponseParser] = None,
    ):
        self.client = client
        self.summary_service = summary_service
        self.enrichment_service = enrichment_service
        self.response_parser = response_parser or ResponseParser()

    @property
    def has_credential(self) -> bool:
        return self.client.has_credential

    async def process_article(
        self,
        raw_url: str,
        style: str = "balanced",
        language: str = "en",
    ) -> ArticleResult:
        """Extract, summarize and enrich the article at ``raw_url``.

        Args:
            raw_url: URL as typed or pasted by the user
            style: Summary style key
            language: Language the summary should be written in

        Returns:
            Processed article; ``translation`` is always empty

        Raises:
            ProcessingFailed: Invalid URL, failed extraction fallback, or
                no provider could summarize the content
        """
        try:
            url = sanitize_url(raw_url)
        except InvalidUrl as e:
            logger.warning("Rejected article URL", extra={"url": raw_url})
            raise ProcessingFailed(FailureReason.INVALID_URL, str(e)) from e

        logger.info(
            "Processing article",
            extra={"url": url, "style": style, "language": language},
        )

        try:
            payload = await self.client.extract(url)
        except Exception as e:
            logger.warning(
                "Direct extraction failed, trying fallback summary",
                extra={"url": url, "error": str(e)},
            )
            return await self._process_fallback(url, language)

        content = self.response_parser.extract_field(payload, CONTENT_KEYS)
        title = self.response_parser.extract_field(payload, TITLE_KEYS) or DEFAULT_TITLE

        try:
            summary = await self.summary_service.generate(content, style, language)
        except SummarizationFailed as e:
            logger.error("Summarization failed", extra={"url": url, "error": str(e)})
            raise ProcessingFailed(FailureReason.SUMMARIZATION_FAILED, str(e)) from e

        insights, sentiment = "", ""
        if self.has_credential and content:
            insights, sentiment = await self._enrich(url, content)

        result = ArticleResult(
            url=url,
            title=title,
            summary=summary,
            insights=insights,
            sentiment=sentiment,
            translation="",
        )
        logger.info(
            "Completed article processing",
            extra={"url": url, "summary_length": len(summary)},
        )
        return result

    async def retranslate(self, result: ArticleResult, language: str) -> ArticleResult:
        """Translate the summary of ``result`` into ``language``.

        Returns ``result`` itself when it has no summary, otherwise a copy
        with ``translation`` replaced.
        """
        if not result.summary:
            return result
        translation = await self.enrichment_service.translate_text(
            result.summary, language
        )
        return result.with_translation(translation)

    async def _process_fallback(self, url: str, language: str) -> ArticleResult:
        try:
            summary = await self._fallback_summary(url, language)
        except Exception as e:
            logger.error("Fallback summary failed", extra={"url": url, "error": str(e)})
            raise ProcessingFailed(FailureReason.FALLBACK_FAILED, str(e)) from e

        return ArticleResult(
            url=url,
            title=FALLBACK_TITLE,
            summary=summary,
            insights=FALLBACK_INSIGHTS,
            sentiment=FALLBACK_SENTIMENT,
            translation="",
        )

    async def _fallback_summary(self, url: str, language: str) -> str:
        """Extract once more and summarize the text with the plain summarizer."""
        payload = await self.client.extract(url)
        text = self.response_parser.extract_field(payload, CONTENT_KEYS)
        if not text:
            raise ProviderError("No article content found to summarize")
        return await self.summary_service.summarize_plain(text, language)

    async def _enrich(self, url: str, content: str) -> Tuple[str, str]:
        """Run insights and sentiment concurrently; both finish before returning."""
        insights, sentiment = await asyncio.gather(
            self.enrichment_service.generate_insights(content),
            self.enrichment_service.analyze_sentiment(content),
            return_exceptions=True,
        )
        if isinstance(insights, BaseException) or isinstance(sentiment, BaseException):
            error = insights if isinstance(insights, BaseException) else sentiment
            logger.warning(
                "Error generating additional features",
                extra={"url": url, "error": str(error)},
            )
            return ENRICHMENT_INSIGHTS_FAILED, ENRICHMENT_SENTIMENT_FAILED
        return insights, sentiment


def create_pipeline(
    settings: Optional[DigestSettings] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> ArticlePipeline:
    """Factory function to create a configured ArticlePipeline.

    Args:
        settings: Settings instance, uses cached settings if not provided
        http_client: Optional shared httpx client for every provider call

    Returns:
        Configured ArticlePipeline
    """
    if settings is None:
        settings = get_settings()

    client = RapidAPIClient.from_settings(settings, http_client=http_client)
    secondary = OpenAIChatClient.from_settings(settings, http_client=http_client)
    prompt_builder = PromptBuilder()
    response_parser = ResponseParser()

    summary_service = create_summary_service(
        client,
        secondary=secondary,
        prompt_builder=prompt_builder,
        response_parser=response_parser,
    )
    enrichment_service = EnrichmentService(client, prompt_builder, response_parser)

    logger.debug(
        "Pipeline configured",
        extra={
            "has_credential": client.has_credential,
            "summary_providers": summary_service.chain.names,
        },
    )
    return ArticlePipeline(client, summary_service, enrichment_service, response_parser)
