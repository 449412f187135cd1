"""
Summarization module for article-digest.

Provides the provider HTTP clients, prompt building, response
normalization, the summary provider chain and enrichment generation.
"""

from .client import OpenAIChatClient, RapidAPIClient
from .enrichment import EnrichmentService
from .prompt_builder import LANGUAGE_NAMES, STYLE_PROMPTS, PromptBuilder, language_name
from .providers import (
    ChatCompletionProvider,
    ProviderChain,
    SummaryProvider,
    SummaryRequest,
    TextSummarizerProvider,
)
from .response_parser import ResponseParser
from .service import SummaryService, create_summary_service

__all__ = [
    "OpenAIChatClient",
    "RapidAPIClient",
    "EnrichmentService",
    "LANGUAGE_NAMES",
    "STYLE_PROMPTS",
    "PromptBuilder",
    "language_name",
    "ChatCompletionProvider",
    "ProviderChain",
    "SummaryProvider",
    "SummaryRequest",
    "TextSummarizerProvider",
    "ResponseParser",
    "SummaryService",
    "create_summary_service",
]
