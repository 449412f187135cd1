"""
Utility functions for article-digest.
"""

from article_digest.utils.helpers import (
    is_valid_url,
    sanitize_filename,
    sanitize_url,
)

__all__ = [
    "is_valid_url",
    "sanitize_filename",
    "sanitize_url",
]
