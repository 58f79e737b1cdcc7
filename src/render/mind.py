"""
Export a FlowGraph to an XMind mind map; edges become parent-child topics.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any

from ..graph import FlowGraph, LayoutNode


def topic_title(node: LayoutNode) -> str:
    """Topic text; ticker nodes show the symbol in front when it adds something."""
    label = node.data.label.strip() or node.id
    ticker = node.data.ticker
    if node.render_kind == "ticker" and ticker and ticker != node.data.label:
        return f"{ticker} | {label}"
    return label


def _forest(graph: FlowGraph) -> tuple[list[LayoutNode], dict[str, list[LayoutNode]]]:
    """(roots, children by parent id), both in placement order."""
    parent_of = {e.target: e.source for e in graph.edges}
    roots: list[LayoutNode] = []
    children: dict[str, list[LayoutNode]] = {}
    for n in graph.nodes:
        parent = parent_of.get(n.id)
        if parent is None:
            roots.append(n)
        else:
            children.setdefault(parent, []).append(n)
    return roots, children


def build_xmind(
    graph: FlowGraph,
    out_path: Path | str,
    *,
    sheet_title: str = "Butterfly Map",
) -> Path:
    """
    Build an XMind mind map from a layout.
    A single root becomes the central topic; several roots hang off a central topic
    titled sheet_title. Nodes only reachable through a cycle are attached to the center.
    """
    try:
        from py_xmind16 import Workbook
    except ImportError as e:
        raise ImportError("py-xmind16 is required for --xmind. Install with: pip install py-xmind16") from e

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)

    workbook = Workbook()
    sheet = workbook.create_sheet(sheet_title)
    root = sheet.get_root_topic()

    if not graph.nodes:
        root.title = "(No content)"
        workbook.save(str(out_path))
        return out_path

    roots, children = _forest(graph)
    visited: set[str] = set()
    # (topic to attach under, node)
    stack: list[tuple[Any, LayoutNode]] = []
    if len(roots) == 1:
        root.title = topic_title(roots[0])
        visited.add(roots[0].id)
        stack.extend((root, c) for c in reversed(children.get(roots[0].id, [])))
    else:
        root.title = sheet_title
        stack.extend((root, r) for r in reversed(roots))

    def drain() -> None:
        while stack:
            parent_topic, node = stack.pop()
            if node.id in visited:
                continue
            visited.add(node.id)
            sub = parent_topic.add_subtopic(topic_title(node))
            for child in reversed(children.get(node.id, [])):
                if child.id not in visited:
                    stack.append((sub, child))

    drain()
    for n in graph.nodes:
        if n.id not in visited:
            stack.append((root, n))
            drain()

    workbook.save(str(out_path))
    return out_path


def _walk_topics(xmind_path: Path | str) -> list[tuple[str | None, str]]:
    """(parent title, title) for every titled topic, depth first, parents before children."""
    from py_xmind16 import Workbook

    w = Workbook.load(str(xmind_path))
    out: list[tuple[str | None, str]] = []

    for sheet in (w.get_sheet(i) for i in range(w.sheet_count)):
        if not sheet.root_topic:
            continue
        stack: list[tuple[str | None, Any]] = [(None, sheet.root_topic)]
        while stack:
            parent_title, topic = stack.pop()
            t = getattr(topic, "title", None)
            if not t:
                continue
            current = str(t).strip()
            out.append((parent_title, current))
            children = getattr(topic, "subtopics", []) or []
            stack.extend((current, st) for st in reversed(list(children)))
    return out


def load_xmind_topic_titles(xmind_path: Path | str) -> list[str]:
    """All topic titles in traversal order (for tests)."""
    return [title for _, title in _walk_topics(xmind_path)]


def load_xmind_parent_child_pairs(xmind_path: Path | str) -> list[tuple[str, str]]:
    """(parent_title, child_title) for each link (for validation)."""
    return [(p, t) for p, t in _walk_topics(xmind_path) if p is not None]
