"""
Command line front end for article-digest.

Usage:
  python -m article_digest summarize https://example.com/article \
      --style bulletpoints --language en --translate es --export markdown --save

  python -m article_digest history --search climate
  python -m article_digest history --remove https://example.com/article
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from article_digest.config import SUMMARY_STYLES, DigestSettings, configure_logging, get_settings
from article_digest.exceptions import ProcessingFailed
from article_digest.export import EXPORTERS, export_article, to_text
from article_digest.models import ArticleResult
from article_digest.pipeline import ArticlePipeline, create_pipeline
from article_digest.storage import ArticleStore, LocalJsonArticleStore

logger = logging.getLogger(__name__)


def build_parser(settings: DigestSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="article-digest",
        description="Summarize web articles through third-party AI providers.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    summarize = sub.add_parser("summarize", help="Process an article URL")
    summarize.add_argument("url")
    summarize.add_argument("--style", choices=SUMMARY_STYLES, default=settings.default_style)
    summarize.add_argument("--language", default=settings.default_language)
    summarize.add_argument("--translate", metavar="CODE", help="Also translate the summary")
    summarize.add_argument("--export", choices=sorted(EXPORTERS), help="Write the result to a file")
    summarize.add_argument("--output-dir", type=Path, default=Path.cwd())
    summarize.add_argument("--save", action="store_true", help="Add the result to local history")

    history = sub.add_parser("history", help="Show or edit local history")
    history.add_argument("--search", metavar="QUERY", default="")
    history.add_argument("--remove", metavar="URL")
    return parser


async def run_summarize(
    args: argparse.Namespace,
    pipeline: ArticlePipeline,
    store: ArticleStore,
) -> ArticleResult:
    result = await pipeline.process_article(args.url, args.style, args.language)
    if args.translate:
        result = await pipeline.retranslate(result, args.translate)
    if args.save:
        store.add(result)
    return result


def run_history(args: argparse.Namespace, store: ArticleStore) -> int:
    if args.remove:
        if not store.remove(args.remove):
            print(f"No history entry for {args.remove}", file=sys.stderr)
            return 1
        print(f"Removed {args.remove}")
        return 0

    articles = store.search(args.search)
    if not articles:
        print("No articles found.")
    for article in articles:
        print(f"{article.timestamp}  {article.title}\n    {article.url}")
    return 0


def main(argv: Optional[Sequence[str]] = None, settings: Optional[DigestSettings] = None) -> int:
    settings = settings or get_settings()
    configure_logging(settings)
    args = build_parser(settings).parse_args(argv)
    store = LocalJsonArticleStore(settings.history_path, limit=settings.history_limit)

    if args.command == "history":
        return run_history(args, store)

    pipeline = create_pipeline(settings)
    try:
        result = asyncio.run(run_summarize(args, pipeline, store))
    except ProcessingFailed as e:
        logger.debug("Processing failed", extra={"reason": e.reason.value})
        print(f"Error: {e.reason.message}", file=sys.stderr)
        return 1

    if args.export:
        path = export_article(result, args.export, args.output_dir)
        print(f"Exported as {path}")
    else:
        print(to_text(result))
    return 0
