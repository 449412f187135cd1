"""Summary provider strategies and the fallback chain that runs them."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Protocol

from article_digest.exceptions import SummarizationFailed

from .client import RapidAPIClient
from .prompt_builder import PromptBuilder
from .response_parser import ResponseParser

logger = logging.getLogger(__name__)

SUMMARY_KEYS = ("summary", "text")
NO_SUMMARY = "Unable to generate summary"


@dataclass
class SummaryRequest:
    """Input shared by every summary strategy."""

    content: str
    style: str = "balanced"
    language: str = "en"


class ChatCompleter(Protocol):
    async def chat_complete(self, prompt: str) -> str: ...


class SummaryProvider(ABC):
    """Abstract base class for summary strategies.

    ``summarize`` returns a display-ready string or raises
    ``ProviderFailure``; it never returns None.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for identification."""

    @abstractmethod
    async def summarize(self, request: SummaryRequest) -> str:
        """Summarize ``request.content``.

        Raises:
            ProviderFailure: The provider could not produce a summary
        """


class ChatCompletionProvider(SummaryProvider):
    """Summarizes through a chat-completion endpoint using the style prompt."""

    def __init__(
        self,
        client: ChatCompleter,
        prompt_builder: Optional[PromptBuilder] = None,
        name: str = "chat-completion",
    ):
        self.client = client
        self.prompt_builder = prompt_builder or PromptBuilder()
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    async def summarize(self, request: SummaryRequest) -> str:
        prompt = self.prompt_builder.build_summary(
            request.content, request.style, request.language
        )
        return await self.client.chat_complete(prompt)


class TextSummarizerProvider(SummaryProvider):
    """Plain-text summarizer; works without a credential."""

    def __init__(
        self,
        client: RapidAPIClient,
        response_parser: Optional[ResponseParser] = None,
    ):
        self.client = client
        self.response_parser = response_parser or ResponseParser()

    @property
    def name(self) -> str:
        return "text-summarizer"

    async def summarize(self, request: SummaryRequest) -> str:
        payload = await self.client.summarize_text(request.content, request.language)
        return self.response_parser.extract_field(payload, SUMMARY_KEYS) or NO_SUMMARY


class ProviderChain:
    """Ordered list of summary strategies tried in sequence.

    The first strategy that returns wins. A failing strategy is logged and
    the next one is tried; when all fail ``SummarizationFailed`` is raised.
    """

    def __init__(self, providers: List[SummaryProvider]):
        """Initialize provider chain.

        Args:
            providers: Strategies in priority order (first = preferred)
        """
        if not providers:
            raise ValueError("Provider chain requires at least one provider")
        self.providers = providers

    @property
    def names(self) -> List[str]:
        return [p.name for p in self.providers]

    async def summarize(self, request: SummaryRequest) -> str:
        """Summarize using the first strategy that succeeds.

        Raises:
            SummarizationFailed: Every strategy failed
        """
        errors: List[str] = []
        for provider in self.providers:
            logger.debug("Trying provider", extra={"provider": provider.name})
            try:
                result = await provider.summarize(request)
            except Exception as e:
                logger.warning(
                    "Provider failed, trying next",
                    extra={"provider": provider.name, "error": str(e)},
                )
                errors.append(f"{provider.name}: {e}")
                continue

            logger.info("Provider succeeded", extra={"provider": provider.name})
            return result

        logger.error("All providers failed for summary generation")
        raise SummarizationFailed("; ".join(errors))
