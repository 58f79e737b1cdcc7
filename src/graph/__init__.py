"""Causal graph: flat node list -> positioned nodes and edges; ticker extraction."""
from .types import (
    NODE_KINDS,
    RENDER_KINDS,
    CausalNode,
    FlowGraph,
    LayoutEdge,
    LayoutNode,
    Position,
    RenderData,
)
from .ticker import extract_ticker
from .layout import auto_layout, build_layout, depth_of, to_render_kind

__all__ = [
    "NODE_KINDS",
    "RENDER_KINDS",
    "CausalNode",
    "FlowGraph",
    "LayoutEdge",
    "LayoutNode",
    "Position",
    "RenderData",
    "extract_ticker",
    "auto_layout",
    "build_layout",
    "depth_of",
    "to_render_kind",
]
