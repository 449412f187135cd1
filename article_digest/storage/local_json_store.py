"""
Local JSON File Article Store

Persists history to a single JSON file on the local filesystem.
"""

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List

from pydantic import ValidationError

from article_digest.models import ArticleResult

from .article_store import DEFAULT_HISTORY_LIMIT, ArticleStore

logger = logging.getLogger(__name__)


class LocalJsonArticleStore(ArticleStore):
    """
    History stored as a JSON array in ``path``.

    The file is rewritten through a temporary file and ``os.replace`` so a
    crash mid-write never leaves a truncated history behind.
    """

    def __init__(self, path: Path, limit: int = DEFAULT_HISTORY_LIMIT):
        """
        Initialize local JSON store.

        Args:
            path: History file; parent directories are created on first write
            limit: Maximum number of articles kept
        """
        super().__init__(limit)
        self.path = Path(path)

    def _read(self) -> List[ArticleResult]:
        if not self.path.exists():
            return []
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.error(
                "Failed to read history file",
                extra={"path": str(self.path), "error": str(e)},
            )
            return []
        if not isinstance(raw, list):
            logger.error(
                "History file does not contain a list",
                extra={"path": str(self.path)},
            )
            return []

        articles = []
        for entry in raw:
            try:
                articles.append(ArticleResult.model_validate(entry))
            except ValidationError:
                logger.warning(
                    "Skipping malformed history entry",
                    extra={"path": str(self.path)},
                )
        return articles

    def _write(self, articles: List[ArticleResult]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = json.dumps(
            [a.model_dump() for a in articles], ensure_ascii=False, indent=2
        )
        fd, tmp_name = tempfile.mkstemp(
            dir=self.path.parent, prefix=".history-", suffix=".json"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(data)
            os.replace(tmp_name, self.path)
        except OSError:
            Path(tmp_name).unlink(missing_ok=True)
            raise
