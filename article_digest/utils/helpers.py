"""
Utility functions for article-digest.

Provides URL cleaning for user input and filename sanitizing for exports.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from article_digest.exceptions import InvalidUrl

ALLOWED_SCHEMES: tuple[str, ...] = ("http", "https")

HTML_PASTE_MESSAGE = (
    "Invalid URL format. Please paste a clean article URL "
    "(e.g., https://example.com/article)"
)
BAD_SCHEME_MESSAGE = (
    "Invalid URL format. Please enter a valid article URL "
    "starting with http:// or https://"
)


def is_valid_url(value: str) -> bool:
    """Return True for a parseable absolute http(s) URL with a host."""
    try:
        parsed = urlsplit(value)
        host = parsed.hostname
    except ValueError:
        return False
    return parsed.scheme in ALLOWED_SCHEMES and bool(host)


def sanitize_url(raw: str) -> str:
    """Clean a pasted URL into a well-formed absolute http(s) URL.

    Args:
        raw: User input

    Returns:
        Cleaned URL

    Raises:
        InvalidUrl: Input contains markup or is not an http(s) URL
    """
    cleaned = (raw or "").strip()

    # Pasted HTML rather than a link
    if "<" in cleaned or ">" in cleaned:
        raise InvalidUrl(HTML_PASTE_MESSAGE)

    if cleaned.startswith("www."):
        cleaned = "https://" + cleaned

    if not is_valid_url(cleaned):
        raise InvalidUrl(BAD_SCHEME_MESSAGE)

    return cleaned


def sanitize_filename(name: str) -> str:
    """Return a safe filename by keeping [A-Za-z0-9._-] and trimming length.

    Runs of replaced characters collapse to a single underscore, leading
    dots are stripped to avoid hidden files, and an empty result falls back
    to ``article``.

    Args:
        name: Original title or identifier

    Returns:
        Sanitized filename safe for filesystem use
    """
    safe = re.sub(r"[^A-Za-z0-9._-]+", "_", name.strip())
    safe = safe.lstrip(".").strip("_")
    if not safe:
        safe = "article"
    return safe[:200]
