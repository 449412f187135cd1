"""
article-digest: summarize web articles through third-party AI providers.

Contains:
- config: Pydantic settings and logging setup
- pipeline: ArticlePipeline orchestrating extraction, summary and enrichment
- summarization: provider clients, prompts, response parsing, fallback chain
- storage: local history of processed articles
- export: Markdown, text and JSON export
"""

from article_digest.exceptions import ProcessingFailed
from article_digest.models import ArticleResult
from article_digest.pipeline import ArticlePipeline, create_pipeline
from article_digest.status import FailureReason

__version__ = "0.1.0"

__all__ = [
    "ArticlePipeline",
    "ArticleResult",
    "FailureReason",
    "ProcessingFailed",
    "create_pipeline",
]
