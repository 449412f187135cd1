"""Export of processed articles to Markdown, plain text and JSON."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable, Dict

from article_digest.models import ArticleResult
from article_digest.utils import sanitize_filename

logger = logging.getLogger(__name__)

_SECTIONS = (
    ("Summary", "summary"),
    ("Key Insights", "insights"),
    ("Sentiment Analysis", "sentiment"),
    ("Translation", "translation"),
)


def to_markdown(article: ArticleResult) -> str:
    lines = [
        f"# {article.title}",
        "",
        f"**Source:** {article.url}",
        f"**Generated:** {article.timestamp}",
    ]
    for heading, field in _SECTIONS:
        value = getattr(article, field)
        if value:
            lines += ["", f"## {heading}", "", value]
    return "\n".join(lines) + "\n"


def to_text(article: ArticleResult) -> str:
    lines = [
        article.title,
        "=" * len(article.title),
        f"Source: {article.url}",
        f"Generated: {article.timestamp}",
    ]
    for heading, field in _SECTIONS:
        value = getattr(article, field)
        if value:
            lines += ["", heading.upper(), "-" * len(heading), value]
    return "\n".join(lines) + "\n"


def to_json(article: ArticleResult) -> str:
    return json.dumps(article.model_dump(), ensure_ascii=False, indent=2)


EXPORTERS: Dict[str, tuple[str, Callable[[ArticleResult], str]]] = {
    "markdown": ("md", to_markdown),
    "text": ("txt", to_text),
    "json": ("json", to_json),
}


def export_article(article: ArticleResult, fmt: str, output_dir: Path) -> Path:
    """Write ``article`` to ``output_dir`` in the requested format.

    Args:
        article: Processed article
        fmt: One of ``markdown``, ``text``, ``json``
        output_dir: Target directory, created if missing

    Returns:
        Path of the written file

    Raises:
        ValueError: Unknown format
    """
    try:
        extension, render = EXPORTERS[fmt]
    except KeyError:
        raise ValueError(
            f"Unsupported export format '{fmt}'; choose from {', '.join(EXPORTERS)}"
        ) from None

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / f"{sanitize_filename(article.title)}.{extension}"
    path.write_text(render(article), encoding="utf-8")

    logger.info("Exported article", extra={"path": str(path), "format": fmt})
    return path
