"""
Rebuild the causal forest from a flat node list and place it on a column grid.

Roots sit in column 0; every other node goes one column right of its parent
(breadth-first depth). Within a column nodes are ordered by label, so the same
input always yields the same layout.
"""
from __future__ import annotations

import logging
import math
from collections import deque
from typing import Iterable

from .ticker import extract_ticker
from .types import CausalNode, FlowGraph, LayoutEdge, LayoutNode, Position, RenderData

logger = logging.getLogger(__name__)

ORIGIN_X = 120
ORIGIN_Y = 80
COLUMN_SPACING = 320
ROW_SPACING = 140


def to_render_kind(kind: str) -> str:
    """Map content-store kind to render kind; unknown kinds render as triggers."""
    if kind == "ticker":
        return "ticker"
    if kind == "impact":
        return "impact"
    return "trigger"


def grid_position(depth: int, index: int) -> Position:
    return Position(ORIGIN_X + depth * COLUMN_SPACING, ORIGIN_Y + index * ROW_SPACING)


def depth_of(node: LayoutNode) -> int:
    """Column index of a placed node (nearest column, halves round up)."""
    return math.floor((node.position.x - ORIGIN_X) / COLUMN_SPACING + 0.5)


def _assign_depths(
    nodes: list[CausalNode],
    by_id: dict[str, CausalNode],
    children: dict[str, list[CausalNode]],
) -> tuple[dict[str, int], int, int]:
    """BFS from every root; returns (depth by id, root count, unreached count)."""
    roots = [n for n in nodes if not n.parent_id or n.parent_id not in by_id]
    depth_by_id: dict[str, int] = {}
    queue: deque[str] = deque()
    for r in roots:
        depth_by_id[r.id] = 0
        queue.append(r.id)

    while queue:
        current = queue.popleft()
        depth = depth_by_id[current]
        for child in children.get(current, ()):
            if child.id in depth_by_id:
                continue
            depth_by_id[child.id] = depth + 1
            queue.append(child.id)

    # Nodes only reachable through a cycle never get a depth above; pin them to column 0.
    unreached = 0
    for n in nodes:
        if n.id not in depth_by_id:
            depth_by_id[n.id] = 0
            unreached += 1
    return depth_by_id, len(roots), unreached


def _place(groups: dict[int, list], make_node) -> list[LayoutNode]:
    placed: list[LayoutNode] = []
    for depth in sorted(groups):
        column = groups[depth]
        if len(column) > 1:
            column.sort(key=lambda n: n[0])
        for index, (_, item) in enumerate(column):
            placed.append(make_node(item, grid_position(depth, index)))
    return placed


def build_layout(nodes: Iterable[CausalNode]) -> FlowGraph:
    """
    Position every causal node and emit one edge per resolvable parent link.

    Never raises on odd topology: dangling parents make extra roots, nodes cut off
    by a cycle land in column 0, and no node is ever dropped.
    """
    nodes = list(nodes)
    by_id: dict[str, CausalNode] = {}
    children: dict[str, list[CausalNode]] = {}
    for n in nodes:
        by_id[n.id] = n
        if n.parent_id:
            children.setdefault(n.parent_id, []).append(n)

    depth_by_id, root_count, unreached = _assign_depths(nodes, by_id, children)

    groups: dict[int, list[tuple[str, CausalNode]]] = {}
    for n in nodes:
        groups.setdefault(depth_by_id[n.id], []).append((n.label, n))

    def make_node(n: CausalNode, position: Position) -> LayoutNode:
        render_kind = to_render_kind(n.kind)
        ticker = None
        if render_kind == "ticker":
            ticker = extract_ticker(n.label) or n.label
        return LayoutNode(
            id=n.id,
            render_kind=render_kind,
            position=position,
            data=RenderData(label=n.label, ticker=ticker),
        )

    placed = _place(groups, make_node)
    edges = [
        LayoutEdge.between(n.parent_id, n.id)
        for n in nodes
        if n.parent_id and n.parent_id in by_id
    ]
    logger.debug(
        "Layout: %d nodes, %d edges, %d roots, %d unreached",
        len(placed), len(edges), root_count, unreached,
    )
    return FlowGraph(nodes=tuple(placed), edges=tuple(edges))


def auto_layout(nodes: Iterable[LayoutNode]) -> list[LayoutNode]:
    """
    Snap already-placed nodes back onto the grid: keep each node's column,
    re-sort every column by label and restack it from the top.
    """
    groups: dict[int, list[tuple[str, LayoutNode]]] = {}
    for n in nodes:
        groups.setdefault(depth_of(n), []).append((n.data.label, n))

    def make_node(n: LayoutNode, position: Position) -> LayoutNode:
        return LayoutNode(id=n.id, render_kind=n.render_kind, position=position, data=n.data)

    return _place(groups, make_node)
