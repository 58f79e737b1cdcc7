"""
Causal node input and renderable layout output (nodes, edges, positions).
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

NODE_KINDS = ("root", "event", "impact", "ticker")
RENDER_KINDS = ("trigger", "impact", "ticker")


@dataclass(frozen=True)
class CausalNode:
    """One row of an article's cause-effect chain, as supplied by the content store."""
    id: str
    label: str
    kind: str = "event"
    parent_id: str | None = None


@dataclass(frozen=True)
class Position:
    x: int
    y: int


@dataclass(frozen=True)
class RenderData:
    label: str
    ticker: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"label": self.label}
        if self.ticker is not None:
            data["ticker"] = self.ticker
        return data


@dataclass(frozen=True)
class LayoutNode:
    """Positioned node; render_kind is one of RENDER_KINDS."""
    id: str
    render_kind: str
    position: Position
    data: RenderData

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "type": self.render_kind,
            "position": {"x": self.position.x, "y": self.position.y},
            "data": self.data.to_dict(),
        }


@dataclass(frozen=True)
class LayoutEdge:
    id: str
    source: str
    target: str
    animated: bool = True

    @classmethod
    def between(cls, source: str, target: str) -> LayoutEdge:
        return cls(id=f"e-{source}-{target}", source=source, target=target)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "animated": self.animated,
        }


@dataclass(frozen=True)
class FlowGraph:
    """Layout result handed to a renderer: nodes in placement order, edges in input order."""
    nodes: tuple[LayoutNode, ...] = ()
    edges: tuple[LayoutEdge, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }

    def to_json(self, *, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)
