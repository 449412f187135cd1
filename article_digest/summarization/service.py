"""SummaryService - summary generation over a provider chain."""
from __future__ import annotations

import logging
from typing import Optional

from .client import OpenAIChatClient, RapidAPIClient
from .prompt_builder import PromptBuilder
from .providers import (
    ChatCompletionProvider,
    ProviderChain,
    SummaryRequest,
    TextSummarizerProvider,
)
from .response_parser import ResponseParser

logger = logging.getLogger(__name__)


class SummaryService:
    """Produces a summary string for article content.

    The chain decides which provider answers; this class only shapes the
    request. ``generate`` either returns a string or raises
    ``SummarizationFailed``.
    """

    def __init__(
        self,
        chain: ProviderChain,
        text_summarizer: TextSummarizerProvider,
    ):
        """Initialize summary service.

        Args:
            chain: Strategies tried in order by ``generate``
            text_summarizer: Credential-free summarizer used directly by
                the extraction fallback path
        """
        self.chain = chain
        self.text_summarizer = text_summarizer

    async def generate(
        self, content: str, style: str = "balanced", language: str = "en"
    ) -> str:
        """Summarize ``content`` in the given style and language.

        Raises:
            SummarizationFailed: Every provider in the chain failed
        """
        logger.info(
            "Generating summary",
            extra={
                "style": style,
                "language": language,
                "content_length": len(content),
                "providers": self.chain.names,
            },
        )
        return await self.chain.summarize(
            SummaryRequest(content=content, style=style, language=language)
        )

    async def summarize_plain(self, text: str, language: str = "en") -> str:
        """Summarize with the plain-text summarizer only.

        Raises:
            ProviderFailure: The summarizer call failed
        """
        return await self.text_summarizer.summarize(
            SummaryRequest(content=text, language=language)
        )


def create_summary_service(
    client: RapidAPIClient,
    secondary: Optional[OpenAIChatClient] = None,
    prompt_builder: Optional[PromptBuilder] = None,
    response_parser: Optional[ResponseParser] = None,
) -> SummaryService:
    """Factory function to create a configured SummaryService.

    With a primary credential the chain is chat-completion, then the
    secondary chat client when configured, then the plain-text summarizer.
    Without one only the plain-text summarizer is used.

    Args:
        client: RapidAPI client
        secondary: Optional OpenAI-compatible client
        prompt_builder: Prompt builder shared with enrichments
        response_parser: Response parser shared with enrichments

    Returns:
        Configured SummaryService
    """
    prompt_builder = prompt_builder or PromptBuilder()
    text_summarizer = TextSummarizerProvider(client, response_parser)

    providers = []
    if client.has_credential:
        providers.append(ChatCompletionProvider(client, prompt_builder))
        if secondary is not None:
            providers.append(
                ChatCompletionProvider(secondary, prompt_builder, name="openai")
            )
    providers.append(text_summarizer)

    return SummaryService(ProviderChain(providers), text_summarizer)
