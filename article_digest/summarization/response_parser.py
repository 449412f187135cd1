"""Response normalization for provider payloads."""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

logger = logging.getLogger(__name__)

_JSON_FENCE = re.compile(r"```json\s*([\s\S]*?)\s*```")
_ANY_FENCE = re.compile(r"```\s*([\s\S]*?)\s*```")

ModelT = TypeVar("ModelT", bound=BaseModel)


class InsightsOutput(BaseModel):
    """Expected shape of an insights response."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    insights: List[str]

    @field_validator("insights")
    @classmethod
    def _non_empty(cls, v: List[str]) -> List[str]:
        items = [item.strip() for item in v if item and item.strip()]
        if not items:
            raise ValueError("insights must not be empty")
        return items


class SentimentOutput(BaseModel):
    """Expected shape of a sentiment response."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    sentiment: str
    confidence: Optional[str] = None
    explanation: Optional[str] = None
    key_emotions: Optional[List[str]] = None

    @field_validator("sentiment")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("sentiment must not be empty")
        return v.strip()


class TranslationOutput(BaseModel):
    """Expected shape of a translation response."""

    model_config = ConfigDict(coerce_numbers_to_str=True)

    original_language: Optional[str] = None
    target_language: Optional[str] = None
    translation: str
    confidence: Optional[str] = None

    @field_validator("translation")
    @classmethod
    def _non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("translation must not be empty")
        return v


class ResponseParser:
    """Normalizes heterogeneously shaped provider responses.

    Chat-completion providers often wrap the JSON they were asked for in
    prose or markdown fences; nothing downstream may crash on that.
    """

    def extract_field(self, payload: Optional[Mapping[str, Any]], keys: Sequence[str]) -> str:
        """Return the first present, non-empty string among ``keys``.

        Args:
            payload: Decoded provider JSON
            keys: Candidate keys, in priority order

        Returns:
            Field value, or ``""`` when no candidate holds a non-empty string
        """
        if not payload:
            return ""
        for key in keys:
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value
        return ""

    def extract_embedded_json(self, text: Optional[str]) -> Optional[Dict[str, Any]]:
        """Extract a JSON object from ``text``.

        Heuristics:
        - If the whole text is JSON, parse it directly
        - Otherwise parse the first ```json fenced block
        - Otherwise parse the first bare ``` fenced block

        Returns:
            Parsed object, or None if no JSON object could be recovered
        """
        if not text:
            return None

        parsed = self._loads(text)
        if parsed is not None:
            return parsed

        match = _JSON_FENCE.search(text) or _ANY_FENCE.search(text)
        if match:
            return self._loads(match.group(1))
        return None

    def parse_insights(self, text: str) -> Optional[InsightsOutput]:
        return self._parse_as(InsightsOutput, text, label="insights")

    def parse_sentiment(self, text: str) -> Optional[SentimentOutput]:
        return self._parse_as(SentimentOutput, text, label="sentiment")

    def parse_translation(self, text: str) -> Optional[TranslationOutput]:
        return self._parse_as(TranslationOutput, text, label="translation")

    def _parse_as(self, model: Type[ModelT], text: str, *, label: str) -> Optional[ModelT]:
        """Validate embedded JSON against ``model``; None on contract violation."""
        data = self.extract_embedded_json(text)
        if data is None:
            logger.warning("Model output contained no JSON object", extra={"label": label})
            return None
        try:
            return model.model_validate(data)
        except ValidationError:
            logger.warning(
                "Model output failed schema validation",
                extra={"label": label},
            )
            return None

    @staticmethod
    def _loads(raw: str) -> Optional[Dict[str, Any]]:
        try:
            value = json.loads(raw.strip())
        except ValueError:
            return None
        return value if isinstance(value, dict) else None
