"""Render: FlowGraph -> SVG/HTML canvas, XMind mind map, debug table and PNG preview."""
from .html import build_svg, render_layout_to_html, render_layout_to_svg
from .mind import build_xmind, load_xmind_topic_titles, load_xmind_parent_child_pairs
from .preview import write_layout_preview_html, render_layout_png

__all__ = [
    "build_svg",
    "render_layout_to_html",
    "render_layout_to_svg",
    "build_xmind",
    "load_xmind_topic_titles",
    "load_xmind_parent_child_pairs",
    "write_layout_preview_html",
    "render_layout_png",
]
