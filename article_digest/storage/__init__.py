"""
Storage module for article-digest.

Provides the article history store interface and its implementations.
"""

from article_digest.storage.article_store import DEFAULT_HISTORY_LIMIT, ArticleStore
from article_digest.storage.local_json_store import LocalJsonArticleStore
from article_digest.storage.memory_store import InMemoryArticleStore

__all__ = [
    "DEFAULT_HISTORY_LIMIT",
    "ArticleStore",
    "InMemoryArticleStore",
    "LocalJsonArticleStore",
]
