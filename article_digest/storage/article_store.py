"""
Article History Storage Abstraction

Provides a unified interface for the local history of processed articles.
Entries are kept newest first, keyed by URL, and capped at a fixed size.
Implementations: InMemoryArticleStore, LocalJsonArticleStore.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from article_digest.models import ArticleResult

DEFAULT_HISTORY_LIMIT = 20


class ArticleStore(ABC):
    """
    Abstract base class for article history stores.

    Subclasses provide ``_read`` and ``_write``; the history rules
    (ordering, URL uniqueness, size cap, search) live here.
    """

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT):
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self.limit = limit

    @abstractmethod
    def _read(self) -> List[ArticleResult]:
        """Return stored articles, newest first."""

    @abstractmethod
    def _write(self, articles: List[ArticleResult]) -> None:
        """Replace stored articles."""

    def add(self, article: ArticleResult) -> None:
        """Store ``article`` as the newest entry, replacing one with the same URL."""
        others = [a for a in self._read() if a.url != article.url]
        self._write([article, *others][: self.limit])

    def remove(self, url: str) -> bool:
        """Remove the entry for ``url``. Returns True if one was removed."""
        articles = self._read()
        remaining = [a for a in articles if a.url != url]
        if len(remaining) == len(articles):
            return False
        self._write(remaining)
        return True

    def get(self, url: str) -> Optional[ArticleResult]:
        for article in self._read():
            if article.url == url:
                return article
        return None

    def list(self) -> List[ArticleResult]:
        """All stored articles, newest first."""
        return self._read()

    def search(self, query: str) -> List[ArticleResult]:
        """Articles whose URL or summary contains ``query`` (case-insensitive)."""
        articles = self._read()
        if not query:
            return articles
        return [a for a in articles if a.matches(query)]

    def clear(self) -> None:
        self._write([])

    def __len__(self) -> int:
        return len(self._read())
