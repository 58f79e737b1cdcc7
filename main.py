#!/usr/bin/env python3
"""
Root entry: scan data/articles exports -> causal graph layout -> JSON / HTML / XMind / PNG.
Supports --input (one export file) and --article (one slug).
"""
from __future__ import annotations

import argparse
import logging
import re
import sys
import time
from pathlib import Path

_ROOT = Path(__file__).resolve().parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from src.config import load_env, get_data_dir, get_output_dir, get_log_level
from src.graph import FlowGraph, auto_layout, build_layout
from src.store import ArticleInfo, list_articles, load_article
from src.render import build_xmind, render_layout_png, render_layout_to_html, write_layout_preview_html

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


def _safe_slug(name: str) -> str:
    """Turn an article slug into a filesystem-safe directory name."""
    s = re.sub(r'[/\\:*?"<>|]', "", name)
    s = s.strip() or "unnamed"
    s = re.sub(r"\s+", "_", s)
    return s[:200]


def _log_article_not_found(slug: str, data_dir: Path) -> None:
    logger.error("Article '%s' not found. No export in %s has that slug.", slug, data_dir)
    logger.error("Put <slug>.json in the data directory or pass --input PATH.")


def _layout_article(article: ArticleInfo, use_auto_layout: bool = False) -> FlowGraph:
    graph = build_layout(article.nodes)
    if use_auto_layout:
        graph = FlowGraph(nodes=tuple(auto_layout(graph.nodes)), edges=graph.edges)
    return graph


def _export_article(
    article: ArticleInfo,
    output_root: Path,
    *,
    use_xmind: bool = False,
    use_png: bool = False,
    use_auto_layout: bool = False,
) -> FlowGraph:
    """Lay out one article and write its outputs to output_root/<slug>/."""
    t0 = time.perf_counter()
    safe_name = _safe_slug(article.slug)
    out_dir = output_root / safe_name
    out_dir.mkdir(parents=True, exist_ok=True)

    graph = _layout_article(article, use_auto_layout)
    logger.info(
        "  Layout: %d nodes, %d edges in %.3fs",
        len(graph.nodes), len(graph.edges), time.perf_counter() - t0,
    )
    (out_dir / "layout.json").write_text(graph.to_json(), encoding="utf-8")

    try:
        render_layout_to_html(graph, out_dir / "layout.html", title=article.title)
        logger.info("  layout.html")
    except Exception as e:
        logger.warning("  Failed to write layout.html: %s", e)
    try:
        write_layout_preview_html(graph, out_dir / ".debug" / "layout_preview.html")
        logger.info("  .debug: layout_preview.html")
    except Exception as e:
        logger.warning("  Failed to write layout_preview.html: %s", e)
    if use_png:
        try:
            render_layout_png(graph, out_dir / "layout.png")
            logger.info("  layout.png")
        except Exception as e:
            logger.warning("  PNG preview failed: %s", e)
    if use_xmind:
        try:
            xmind_path = build_xmind(graph, out_dir / f"{safe_name}.xmind", sheet_title=article.title)
            logger.info("  XMind: %s", xmind_path.name)
        except Exception as e:
            logger.warning("  XMind export failed: %s", e)
    return graph


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Lay out article causal graphs (data/articles/*.json) and export JSON, HTML, XMind, PNG."
    )
    parser.add_argument(
        "--input",
        metavar="FILE",
        default=None,
        help="Process a single export file (post detail JSON or a list of node rows) instead of the data directory",
    )
    parser.add_argument(
        "--article",
        metavar="SLUG",
        default=None,
        help="Process only the article with this slug. Fails with a friendly message if not found.",
    )
    parser.add_argument(
        "--xmind",
        action="store_true",
        help="Also export each graph to <slug>.xmind (mind map)",
    )
    parser.add_argument(
        "--png",
        action="store_true",
        help="Also write a raster preview layout.png",
    )
    parser.add_argument(
        "--auto-layout",
        action="store_true",
        help="Re-snap the computed layout to the grid by column before exporting",
    )
    args = parser.parse_args(argv)

    load_env()
    level = get_log_level()
    if isinstance(logging.getLevelName(level), int):
        logging.getLogger().setLevel(level)
    else:
        logger.warning("Unknown LOG_LEVEL %s, keeping INFO", level)
    data_dir = get_data_dir()
    output_root = get_output_dir()
    output_root.mkdir(parents=True, exist_ok=True)

    if args.input is not None:
        try:
            articles = [load_article(args.input)]
        except (FileNotFoundError, ValueError) as e:
            logger.error("%s", e)
            return 1
    else:
        if not data_dir.is_dir():
            data_dir.mkdir(parents=True, exist_ok=True)
            logger.info("Created data directory: %s", data_dir)
        logger.info("Data dir: %s, output root: %s", data_dir, output_root)
        articles = list_articles(data_dir)

    if args.article is not None:
        articles = [a for a in articles if a.slug == args.article]
        if not articles:
            _log_article_not_found(args.article, data_dir)
            return 1
    if not articles:
        logger.warning("No article exports found")
        return 0

    total = len(articles)
    for idx, article in enumerate(articles):
        logger.info(
            "Article %d/%d: %s (%d nodes%s)",
            idx + 1, total, article.slug, len(article.nodes), ", premium" if article.is_premium else "",
        )
        try:
            _export_article(
                article,
                output_root,
                use_xmind=args.xmind,
                use_png=args.png,
                use_auto_layout=args.auto_layout,
            )
        except Exception as e:
            logger.warning("  Export failed for %s: %s", article.slug, e)

    logger.info("Done. Output: %s", output_root)
    return 0


if __name__ == "__main__":
    sys.exit(main())
