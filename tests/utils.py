"""Test helper functions for article-digest tests."""

from __future__ import annotations

import json
from typing import Callable

from article_digest.pipeline import ArticlePipeline
from article_digest.summarization import (
    EnrichmentService,
    PromptBuilder,
    ResponseParser,
    create_summary_service,
)


def chat_router(
    summary: str = "S",
    insights: object = ("Point one", "Point two", "Point three"),
    sentiment: object = None,
    translation: object = None,
) -> Callable[[str], object]:
    """
    Build a fake chat-completion handler that answers by prompt kind.

    Each answer may be a string, an exception, or (for the enrichments) a
    value serialised into the JSON shape the prompt asks for.
    """
    if sentiment is None:
        sentiment = {
            "sentiment": "Positive",
            "confidence": "High",
            "explanation": "Upbeat coverage",
            "key_emotions": ["joy", "hope"],
        }
    if translation is None:
        translation = {
            "original_language": "English",
            "target_language": "Spanish",
            "translation": "Hola",
            "confidence": "High",
        }

    def render(answer: object) -> object:
        if isinstance(answer, (str, BaseException)):
            return answer
        if isinstance(answer, tuple):
            return json.dumps({"insights": list(answer)})
        return json.dumps(answer)

    def handler(prompt: str) -> object:
        if prompt.startswith("Analyze the following article"):
            return render(insights)
        if prompt.startswith("Analyze the sentiment"):
            return render(sentiment)
        if prompt.startswith("Translate the following text"):
            return render(translation)
        return render(summary)

    return handler


def build_pipeline(client, secondary=None) -> ArticlePipeline:
    prompt_builder = PromptBuilder()
    parser = ResponseParser()
    summary_service = create_summary_service(
        client, secondary=secondary, prompt_builder=prompt_builder, response_parser=parser
    )
    enrichment = EnrichmentService(client, prompt_builder, parser)
    return ArticlePipeline(client, summary_service, enrichment, parser)
