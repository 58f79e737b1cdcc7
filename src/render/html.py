"""
Render a FlowGraph to a standalone SVG canvas or an HTML page wrapping it.
"""
from __future__ import annotations

import html
from pathlib import Path

from ..graph import FlowGraph, LayoutNode

NODE_WIDTH = 180
NODE_HEIGHT = 80
MARGIN = 120

_KIND_STYLE = {
    "trigger": {"stroke": "#3b82f6", "dash": "", "caption": "EVENT TRIGGER"},
    "impact": {"stroke": "#ca8a04", "dash": "6 4", "caption": "CONSEQUENCE"},
    "ticker": {"stroke": "#166534", "dash": "", "caption": "TICKER"},
}


def _esc(s: str) -> str:
    return html.escape(str(s))


def _clip(text: str, limit: int = 26) -> str:
    return text if len(text) <= limit else text[: limit - 1] + "…"


def canvas_size(graph: FlowGraph) -> tuple[int, int]:
    if not graph.nodes:
        return 2 * MARGIN + NODE_WIDTH, 2 * MARGIN + NODE_HEIGHT
    max_x = max(n.position.x for n in graph.nodes)
    max_y = max(n.position.y for n in graph.nodes)
    return max_x + NODE_WIDTH + MARGIN, max_y + NODE_HEIGHT + MARGIN


def _render_node_svg(node: LayoutNode) -> str:
    style = _KIND_STYLE.get(node.render_kind, _KIND_STYLE["trigger"])
    x, y = node.position.x, node.position.y
    dash = f' stroke-dasharray="{style["dash"]}"' if style["dash"] else ""
    parts = [
        f'<g class="node node-{_esc(node.render_kind)}" data-id="{_esc(node.id)}">',
        f'<rect x="{x}" y="{y}" width="{NODE_WIDTH}" height="{NODE_HEIGHT}" rx="6" fill="#000" stroke="{style["stroke"]}" stroke-width="1.5"{dash}/>',
        f'<text x="{x + 12}" y="{y + 18}" font-size="10" font-family="monospace" fill="{style["stroke"]}">{style["caption"]}</text>',
    ]
    if node.render_kind == "ticker":
        parts.append(
            f'<text x="{x + 12}" y="{y + 44}" font-size="18" font-weight="bold" fill="#22c55e">{_esc(_clip(node.data.ticker or "", 12))}</text>'
        )
        parts.append(
            f'<text x="{x + 12}" y="{y + 64}" font-size="11" fill="#ccc">{_esc(_clip(node.data.label))}</text>'
        )
    else:
        parts.append(
            f'<text x="{x + 12}" y="{y + 44}" font-size="13" font-weight="bold" fill="#fff">{_esc(_clip(node.data.label))}</text>'
        )
    parts.append("</g>")
    return "".join(parts)


def _render_edges_svg(graph: FlowGraph) -> str:
    pos = {n.id: n.position for n in graph.nodes}
    out = []
    for edge in graph.edges:
        src, dst = pos.get(edge.source), pos.get(edge.target)
        if src is None or dst is None:
            continue
        x1, y1 = src.x + NODE_WIDTH, src.y + NODE_HEIGHT // 2
        x2, y2 = dst.x, dst.y + NODE_HEIGHT // 2
        mid = (x1 + x2) / 2
        css = "edge edge-animated" if edge.animated else "edge"
        out.append(
            f'<path class="{css}" data-id="{_esc(edge.id)}" d="M{x1},{y1} C{mid},{y1} {mid},{y2} {x2},{y2}" fill="none" stroke="#666" stroke-width="1.5" marker-end="url(#arrow)"/>'
        )
    return "\n".join(out)


def build_svg(graph: FlowGraph) -> str:
    """SVG markup for the whole graph (edges under nodes)."""
    width, height = canvas_size(graph)
    nodes_svg = "\n".join(_render_node_svg(n) for n in graph.nodes)
    return f'''<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {width} {height}" width="{width}" height="{height}">
  <defs>
    <marker id="arrow" markerWidth="10" markerHeight="10" refX="9" refY="3" orient="auto">
      <path d="M0,0 L10,3 L0,6 z" fill="#666"/>
    </marker>
  </defs>
  <rect width="100%" height="100%" fill="#0a0a0a"/>
  <g id="edges">{_render_edges_svg(graph)}</g>
  <g id="nodes">{nodes_svg}</g>
</svg>
'''


def render_layout_to_svg(graph: FlowGraph, out_path: Path | str) -> Path:
    """Write the graph as an SVG file."""
    out_path = Path(out_path)
    svg = '<?xml version="1.0" encoding="UTF-8"?>\n' + build_svg(graph)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(svg, encoding="utf-8")
    return out_path


def render_layout_to_html(graph: FlowGraph, out_path: Path | str, *, title: str = "Butterfly Map") -> Path:
    out_path = Path(out_path)
    html_content = f"""<!DOCTYPE html>
<html lang="zh-CN">
<head>
<meta charset="UTF-8"/>
<meta name="viewport" content="width=device-width, initial-scale=1"/>
<title>{_esc(title)}</title>
<style>
  body {{ margin: 0; background: #000; color: #eee; font-family: sans-serif; }}
  header {{ padding: 0.75rem 1rem; border-bottom: 1px solid #333; font-size: 0.9rem; }}
  header .meta {{ color: #888; margin-left: 1rem; font-family: monospace; }}
  .canvas {{ overflow: auto; }}
  .edge-animated {{ stroke-dasharray: 5 5; animation: flow 1s linear infinite; }}
  @keyframes flow {{ to {{ stroke-dashoffset: -10; }} }}
</style>
</head>
<body>
<header>{_esc(title)}<span class="meta">{len(graph.nodes)} nodes / {len(graph.edges)} edges</span></header>
<div class="canvas">
{build_svg(graph)}
</div>
</body>
</html>
"""
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(html_content, encoding="utf-8")
    return out_path
