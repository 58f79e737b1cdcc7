"""Store: read article exports (post detail JSON with causal node rows)."""
from .parse import ArticleInfo, parse_node_row, load_article, list_articles, get_article

__all__ = [
    "ArticleInfo",
    "parse_node_row",
    "load_article",
    "list_articles",
    "get_article",
]
