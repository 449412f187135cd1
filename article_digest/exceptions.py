"""Exception hierarchy for article-digest."""

from __future__ import annotations

from typing import Optional

from article_digest.status import FailureReason


class DigestError(Exception):
    """Base class for every error raised by this package."""


class InvalidUrl(DigestError, ValueError):
    """User input is not a clean absolute http(s) URL."""


class ProviderFailure(DigestError):
    """A single remote provider call failed."""


class HttpError(ProviderFailure):
    """Provider answered with a non-2xx status."""

    def __init__(self, status: int, message: str = ""):
        self.status = status
        super().__init__(message or f"HTTP error! status: {status}")


class ProviderError(ProviderFailure):
    """Provider reported a structured failure, or could not be reached."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.message = message
        self.status = status
        if status is not None:
            super().__init__(f"Provider error! status: {status}, message: {message}")
        else:
            super().__init__(message)


class SummarizationFailed(DigestError):
    """Every summarization strategy failed."""


class ProcessingFailed(DigestError):
    """The only failure surfaced to callers of ``process_article``."""

    def __init__(self, reason: FailureReason, detail: str = ""):
        self.reason = reason
        self.detail = detail
        message = reason.message
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
