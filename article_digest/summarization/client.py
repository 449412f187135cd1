"""HTTP clients for the extraction, summarization and chat-completion APIs.

Each method issues exactly one request. Retries and fallbacks are decided
by the callers in ``service`` and ``article_digest.pipeline``.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from article_digest.config import DigestSettings, ProviderSettings
from article_digest.exceptions import HttpError, ProviderError

logger = logging.getLogger(__name__)

NO_RESPONSE = "No response received"
CHAT_RESPONSE_KEYS = ("result", "content", "message")


def _error_message(response: httpx.Response) -> str:
    """Upstream ``error.message`` from a failed response, if any."""
    try:
        body = response.json()
    except ValueError:
        return "Unknown error"
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        if isinstance(error, str) and error:
            return error
        if isinstance(body.get("message"), str) and body["message"]:
            return body["message"]
    return "Unknown error"


def _json_mapping(response: httpx.Response) -> Dict[str, Any]:
    """Decode a JSON object body; anything else is a provider failure."""
    try:
        data = response.json()
    except ValueError as e:
        raise ProviderError(f"Invalid JSON from provider: {e}") from e
    if not isinstance(data, dict):
        raise ProviderError("Provider returned a non-object JSON payload")
    return data


class RapidAPIClient:
    """Async client for the RapidAPI article and chat-completion endpoints."""

    def __init__(
        self,
        providers: ProviderSettings,
        api_key: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize client.

        Args:
            providers: Endpoint configuration
            api_key: RapidAPI key, sent as ``X-RapidAPI-Key`` when present
            http_client: Shared client; one per call is created when omitted
        """
        self.providers = providers
        self.api_key = api_key
        self._http_client = http_client

    @classmethod
    def from_settings(
        cls,
        settings: DigestSettings,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> "RapidAPIClient":
        key = settings.rapidapi_key.get_secret_value() if settings.rapidapi_key else None
        return cls(settings.providers, api_key=key, http_client=http_client)

    @property
    def has_credential(self) -> bool:
        return bool(self.api_key)

    def _headers(self, base_url: str, json_body: bool = False) -> Dict[str, str]:
        headers = {"X-RapidAPI-Host": ProviderSettings.host_of(base_url)}
        if self.api_key:
            headers["X-RapidAPI-Key"] = self.api_key
        if json_body:
            headers["Content-Type"] = "application/json"
        return headers

    async def _request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Send one request; transport errors become ``ProviderError``."""
        try:
            if self._http_client is not None:
                return await self._http_client.request(method, url, **kwargs)
            async with httpx.AsyncClient(timeout=self.providers.timeout) as client:
                return await client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning(
                "Provider request failed",
                extra={"url": url, "error": str(e)},
            )
            raise ProviderError(f"Request to {url} failed: {e}") from e

    async def extract(self, url: str) -> Dict[str, Any]:
        """Fetch readable article content for ``url``.

        Args:
            url: Article URL

        Returns:
            Provider JSON payload (shape varies)

        Raises:
            HttpError: Non-2xx response
        """
        base = self.providers.extractor_base_url
        response = await self._request(
            "GET",
            f"{base}/extract",
            params={"url": url},
            headers=self._headers(base),
        )
        if not response.is_success:
            raise HttpError(response.status_code)
        return _json_mapping(response)

    async def summarize_text(self, text: str, lang: str = "en") -> Dict[str, Any]:
        """Summarize plain text with the extractor's summarizer endpoint.

        Raises:
            HttpError: Non-2xx response
        """
        base = self.providers.extractor_base_url
        response = await self._request(
            "POST",
            f"{base}/summarize-text",
            json={"text": text, "lang": lang},
            headers=self._headers(base, json_body=True),
        )
        if not response.is_success:
            raise HttpError(
                response.status_code,
                f"Failed to summarize text: {response.status_code}",
            )
        return _json_mapping(response)

    async def chat_complete(self, prompt: str) -> str:
        """Send a single user message to the chat-completion endpoint.

        Returns:
            First non-empty of ``result``/``content``/``message``, else
            ``"No response received"``

        Raises:
            ProviderError: Non-2xx response, carrying the upstream message
        """
        base = self.providers.chat_base_url
        response = await self._request(
            "POST",
            f"{base}/chatgpt",
            json={
                "messages": [{"role": "user", "content": prompt}],
                "web_access": False,
            },
            headers=self._headers(base, json_body=True),
        )
        if not response.is_success:
            raise ProviderError(_error_message(response), status=response.status_code)

        data = _json_mapping(response)
        for key in CHAT_RESPONSE_KEYS:
            value = data.get(key)
            if isinstance(value, str) and value:
                return value
        return NO_RESPONSE


class OpenAIChatClient:
    """OpenAI-compatible chat client used behind the RapidAPI one."""

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str = "gpt-4o-mini",
        timeout: float = 60.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.model = model
        self.timeout = timeout
        self._http_client = http_client

    @classmethod
    def from_settings(
        cls,
        settings: DigestSettings,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> Optional["OpenAIChatClient"]:
        """Build a client, or None when no secondary credential is set."""
        if settings.openai_api_key is None:
            return None
        return cls(
            base_url=settings.providers.openai_base_url,
            api_key=settings.openai_api_key.get_secret_value(),
            model=settings.providers.openai_model,
            timeout=settings.providers.timeout,
            http_client=http_client,
        )

    async def chat_complete(self, prompt: str) -> str:
        """Generate a completion for a single user prompt.

        Raises:
            ProviderError: Transport failure, non-2xx status or malformed body
        """
        url = f"{self.base_url}/v1/chat/completions"
        payload = {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": 0.3,
        }
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }
        try:
            if self._http_client is not None:
                response = await self._http_client.post(url, json=payload, headers=headers)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            raise ProviderError(f"Request to {url} failed: {e}") from e

        if not response.is_success:
            raise ProviderError(_error_message(response), status=response.status_code)

        data = _json_mapping(response)
        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise ProviderError("Malformed chat completion response") from e
        return content or NO_RESPONSE
