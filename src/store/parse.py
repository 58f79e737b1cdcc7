"""
Read article exports from the content store: post detail JSON with butterfly_nodes.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from ..graph import CausalNode

logger = logging.getLogger(__name__)


@dataclass
class ArticleInfo:
    """One article and its causal nodes."""
    slug: str
    title: str
    path: Path | None = None
    is_premium: bool = False
    nodes: list[CausalNode] = field(default_factory=list)


def parse_node_row(row: Any) -> CausalNode | None:
    """Turn a store row (id, label, type, parent_id, ...) into a CausalNode; None if unusable."""
    if not isinstance(row, Mapping):
        return None
    raw_id = row.get("id")
    if raw_id is None or str(raw_id).strip() == "":
        return None
    parent = row.get("parent_id")
    return CausalNode(
        id=str(raw_id),
        label="" if row.get("label") is None else str(row["label"]),
        kind="event" if row.get("type") is None else str(row["type"]),
        parent_id=str(parent) if parent not in (None, "") else None,
    )


def _parse_rows(rows: list[Any], source: Path) -> list[CausalNode]:
    nodes: list[CausalNode] = []
    for i, row in enumerate(rows):
        node = parse_node_row(row)
        if node is None:
            logger.warning("Skipping node row %d in %s: missing id", i, source.name)
            continue
        nodes.append(node)
    return nodes


def load_article(path: Path | str) -> ArticleInfo:
    """
    Load one export file: either a post detail object
    {"slug", "title", "is_premium", "butterfly_nodes": [...]} or a bare list of node rows.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Article export not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e

    if isinstance(data, list):
        return ArticleInfo(slug=path.stem, title=path.stem, path=path, nodes=_parse_rows(data, path))
    if not isinstance(data, dict):
        raise ValueError(f"Expected an object or a list in {path}, got {type(data).__name__}")

    rows = data.get("butterfly_nodes") or []
    if not isinstance(rows, list):
        raise ValueError(f"butterfly_nodes must be a list in {path}")
    slug = str(data.get("slug") or path.stem)
    return ArticleInfo(
        slug=slug,
        title=str(data.get("title") or slug),
        path=path,
        is_premium=bool(data.get("is_premium", False)),
        nodes=_parse_rows(rows, path),
    )


def list_articles(data_dir: Path) -> list[ArticleInfo]:
    data_dir = Path(data_dir)
    if not data_dir.is_dir():
        return []

    articles: list[ArticleInfo] = []
    for path in sorted(data_dir.glob("*.json")):
        try:
            articles.append(load_article(path))
        except (ValueError, OSError) as e:
            logger.warning("Skipping %s: %s", path.name, e)
    return articles


def get_article(data_dir: Path, slug: str) -> ArticleInfo | None:
    for article in list_articles(data_dir):
        if article.slug == slug:
            return article
    return None
