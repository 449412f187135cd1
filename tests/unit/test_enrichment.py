"""Unit tests for insights, sentiment and translation generation."""
import json

import pytest

from article_digest.exceptions import HttpError, ProviderError
from article_digest.summarization import EnrichmentService
from article_digest.summarization.enrichment import (
    INSIGHTS_NEEDS_KEY,
    INSIGHTS_UNAVAILABLE,
    SENTIMENT_NEEDS_KEY,
    SENTIMENT_UNAVAILABLE,
    TRANSLATION_NEEDS_KEY,
    TRANSLATION_UNAVAILABLE,
)
from fakes.providers import FakeRapidAPIClient


def service_answering(answer):
    client = FakeRapidAPIClient(chat=lambda prompt: answer)
    return EnrichmentService(client), client


class TestWithoutCredential:
    @pytest.mark.asyncio
    async def test_placeholders_without_network_calls(self):
        client = FakeRapidAPIClient(has_credential=False)
        service = EnrichmentService(client)

        assert await service.generate_insights("Body") == INSIGHTS_NEEDS_KEY
        assert await service.analyze_sentiment("Body") == SENTIMENT_NEEDS_KEY
        assert await service.translate_text("Body", "es") == TRANSLATION_NEEDS_KEY
        assert client.call_count == 0


class TestInsights:
    @pytest.mark.asyncio
    async def test_formats_bullets(self):
        service, client = service_answering(json.dumps({"insights": ["First", "Second", "Third"]}))

        result = await service.generate_insights("Body")

        assert result == "• First\n\n• Second\n\n• Third"
        assert "3-5 key insights" in client.chat_calls[0]
        assert client.chat_calls[0].endswith("Article content:\nBody")

    @pytest.mark.asyncio
    async def test_fenced_json_is_accepted(self):
        service, _ = service_answering('Here:\n```json\n{"insights": ["Only one"]}\n```')
        assert await service.generate_insights("Body") == "• Only one"

    @pytest.mark.asyncio
    async def test_shape_mismatch_returns_raw_response(self):
        service, _ = service_answering("The article argues three things.")
        assert await service.generate_insights("Body") == "The article argues three things."

    @pytest.mark.asyncio
    async def test_provider_failure_returns_fixed_message(self):
        service, _ = service_answering(ProviderError("rate limited", status=429))
        assert await service.generate_insights("Body") == INSIGHTS_UNAVAILABLE


class TestSentiment:
    @pytest.mark.asyncio
    async def test_formats_labelled_text(self):
        service, _ = service_answering(json.dumps({
            "sentiment": "Negative",
            "confidence": "Medium",
            "explanation": "Layoffs dominate the story",
            "key_emotions": ["fear", "anger"],
        }))

        result = await service.analyze_sentiment("Body")

        assert result == (
            "**Sentiment:** Negative (Medium confidence)\n\n"
            "**Analysis:** Layoffs dominate the story\n\n"
            "**Key Emotions:** fear, anger"
        )

    @pytest.mark.asyncio
    async def test_missing_emotions_shown_as_na(self):
        service, _ = service_answering(json.dumps({
            "sentiment": "Neutral",
            "confidence": "Low",
            "explanation": "Factual report",
        }))
        assert (await service.analyze_sentiment("Body")).endswith("**Key Emotions:** N/A")

    @pytest.mark.asyncio
    async def test_numeric_confidence_is_formatted(self):
        service, _ = service_answering(json.dumps({
            "sentiment": "Positive",
            "confidence": 0.9,
            "explanation": "Upbeat launch coverage",
            "key_emotions": ["joy"],
        }))

        result = await service.analyze_sentiment("Body")

        assert result.startswith("**Sentiment:** Positive (0.9 confidence)")

    @pytest.mark.asyncio
    async def test_shape_mismatch_returns_raw_response(self):
        service, _ = service_answering('{"mood": "happy"}')
        assert await service.analyze_sentiment("Body") == '{"mood": "happy"}'

    @pytest.mark.asyncio
    async def test_provider_failure_returns_fixed_message(self):
        service, _ = service_answering(HttpError(502))
        assert await service.analyze_sentiment("Body") == SENTIMENT_UNAVAILABLE


class TestTranslation:
    @pytest.mark.asyncio
    async def test_formats_translation_and_uses_language_name(self):
        service, client = service_answering(json.dumps({
            "original_language": "English",
            "target_language": "Spanish",
            "translation": "Hola mundo",
            "confidence": "High",
        }))

        result = await service.translate_text("Hello world", "es")

        assert result == (
            "**Translation to Spanish:**\n\nHola mundo\n\n"
            "*Original language: English | Confidence: High*"
        )
        assert client.chat_calls[0].startswith("Translate the following text to Spanish.")
        assert '"target_language": "Spanish"' in client.chat_calls[0]

    @pytest.mark.asyncio
    async def test_unknown_code_passes_through(self):
        service, client = service_answering(json.dumps({"translation": "Hallo"}))

        result = await service.translate_text("Hello", "nl")

        assert client.chat_calls[0].startswith("Translate the following text to nl.")
        assert result.startswith("**Translation to nl:**\n\nHallo")

    @pytest.mark.asyncio
    async def test_provider_failure_returns_fixed_message(self):
        service, _ = service_answering(ProviderError("down"))
        assert await service.translate_text("Hello", "fr") == TRANSLATION_UNAVAILABLE

    @pytest.mark.asyncio
    async def test_numeric_confidence_is_formatted(self):
        service, _ = service_answering(json.dumps({"translation": "Bonjour", "confidence": 95}))

        result = await service.translate_text("Hello", "fr")

        assert result.endswith("Confidence: 95*")


@pytest.mark.asyncio
async def test_failures_are_logged_with_structured_error(caplog):
    service, _ = service_answering(ProviderError("rate limited", status=429))

    with caplog.at_level("ERROR", logger="article_digest.summarization.enrichment"):
        await service.translate_text("Hello", "fr")

    record = caplog.records[-1]
    assert record.getMessage() == "Error translating text"
    assert "rate limited" in record.error
    assert record.target_language == "fr"
