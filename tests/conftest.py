from __future__ import annotations

import pytest

from fakes.providers import FakeRapidAPIClient


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep the developer's environment and .env out of settings."""
    monkeypatch.chdir(tmp_path)
    for var in (
        "RAPIDAPI_KEY",
        "RAPID_API_ARTICLE_KEY",
        "VITE_RAPID_API_ARTICLE_KEY",
        "OPENAI_API_KEY",
        "VITE_OPENAI_API_KEY",
        "SUMMARY_STYLE",
        "SUMMARY_LANGUAGE",
        "DATA_DIR",
        "HISTORY_LIMIT",
        "LOG_LEVEL",
        "LOG_FORMAT",
        "PROVIDERS__TIMEOUT",
        "PROVIDERS__CHAT_BASE_URL",
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def article_payload() -> dict:
    return {
        "title": "T",
        "content": "Researchers announced a breakthrough in battery storage.",
    }


@pytest.fixture
def no_key_client(article_payload) -> FakeRapidAPIClient:
    """
    Client without a credential; only extraction and the plain summarizer answer.
    """
    return FakeRapidAPIClient(
        extract=[article_payload],
        summarize=[{"summary": "Plain summary"}],
        has_credential=False,
    )
