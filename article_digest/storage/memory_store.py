"""
In-Memory Article Store

Keeps history in a list. Useful for tests and short-lived sessions.
"""

from typing import List

from article_digest.models import ArticleResult

from .article_store import DEFAULT_HISTORY_LIMIT, ArticleStore


class InMemoryArticleStore(ArticleStore):
    """History held in process memory; lost on exit."""

    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT):
        super().__init__(limit)
        self._articles: List[ArticleResult] = []

    def _read(self) -> List[ArticleResult]:
        return list(self._articles)

    def _write(self, articles: List[ArticleResult]) -> None:
        self._articles = list(articles)
