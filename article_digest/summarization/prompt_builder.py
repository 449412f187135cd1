"""Prompt building for summaries and enrichments."""
from __future__ import annotations

from textwrap import dedent

STYLE_PROMPTS = {
    "brief": "Provide a very brief summary in 2-3 sentences.",
    "detailed": "Provide a comprehensive and detailed summary covering all key points.",
    "balanced": "Provide a well-balanced summary that captures the main ideas concisely.",
    "bulletpoints": "Provide a summary in clear bullet points highlighting key information.",
}
DEFAULT_STYLE = "balanced"

LANGUAGE_NAMES = {
    "es": "Spanish",
    "fr": "French",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "ru": "Russian",
    "ja": "Japanese",
    "ko": "Korean",
    "zh": "Chinese",
    "hi": "Hindi",
    "ar": "Arabic",
}


def language_name(code: str) -> str:
    """Display name for a language code; unknown codes pass through."""
    return LANGUAGE_NAMES.get(code, code)


class PromptBuilder:
    """Builds the prompts sent to chat-completion providers.

    Enrichment prompts spell out the exact JSON shape expected back so the
    response parser can validate it.
    """

    def build_summary(self, content: str, style: str, language: str) -> str:
        instruction = STYLE_PROMPTS.get(style, STYLE_PROMPTS[DEFAULT_STYLE])
        return (
            f"{instruction} Please summarize the following article content "
            f"in {language}:\n\n{content}"
        )

    def build_insights(self, content: str) -> str:
        shape = dedent(
            """
            {
              "insights": [
                "First key insight",
                "Second key insight",
                "Third key insight"
              ]
            }
            """
        ).strip()
        return (
            "Analyze the following article and provide 3-5 key insights or takeaways.\n\n"
            f"Please respond with a JSON object in this format:\n{shape}\n\n"
            f"Article content:\n{content}"
        )

    def build_sentiment(self, content: str) -> str:
        shape = dedent(
            """
            {
              "sentiment": "Positive|Negative|Neutral",
              "confidence": "High|Medium|Low",
              "explanation": "Brief explanation of why this sentiment was assigned",
              "key_emotions": ["emotion1", "emotion2"]
            }
            """
        ).strip()
        return (
            "Analyze the sentiment of the following article content.\n\n"
            f"Please respond with a JSON object in this format:\n{shape}\n\n"
            f"Article content:\n{content}"
        )

    def build_translation(self, text: str, target_language: str) -> str:
        """Build a translation prompt.

        Args:
            text: Text to translate
            target_language: Display name of the target language
        """
        shape = dedent(
            f"""
            {{
              "original_language": "detected language",
              "target_language": "{target_language}",
              "translation": "the translated text",
              "confidence": "High|Medium|Low"
            }}
            """
        ).strip()
        return (
            f"Translate the following text to {target_language}.\n\n"
            f"Please respond with a JSON object in this format:\n{shape}\n\n"
            f"Text to translate:\n{text}"
        )
