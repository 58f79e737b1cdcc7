"""
Layout debug: 1) HTML table of computed depths and positions; 2) PNG raster preview.
"""
from __future__ import annotations

import html
from pathlib import Path

from ..config import get_preview_font_path
from ..graph import FlowGraph, depth_of
from .html import NODE_HEIGHT, NODE_WIDTH, canvas_size

_FILL = {
    "trigger": (59, 130, 246),
    "impact": (202, 138, 4),
    "ticker": (34, 197, 94),
}

_SYSTEM_FONTS = [
    "/System/Library/Fonts/PingFang.ttc",
    "/System/Library/Fonts/Supplemental/Arial Unicode.ttf",
    "/usr/share/fonts/truetype/noto/NotoSansCJK-Regular.ttc",
    "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
]

# Upper bound on preview canvas area (pixels).
MAX_PREVIEW_PIXELS = 40_000_000


def _esc(s: str) -> str:
    return html.escape(str(s))


def write_layout_preview_html(graph: FlowGraph, out_path: Path | str) -> Path:
    """
    Write layout_preview.html: one row per placed node (id, kind, depth, x, y, label, ticker)
    followed by the edge list.
    """
    out_path = Path(out_path)
    parts = []
    parts.append("""<!DOCTYPE html>
<html lang="zh-CN">
<head>
<meta charset="UTF-8"/>
<meta name="viewport" content="width=device-width, initial-scale=1"/>
<title>Layout positions</title>
<style>
  body { font-family: sans-serif; margin: 1rem; background: #fafafa; }
  h1 { font-size: 1.2rem; }
  h2 { font-size: 1rem; margin-top: 1.5rem; }
  table { border-collapse: collapse; width: 100%; max-width: 900px; background: #fff; box-shadow: 0 1px 3px rgba(0,0,0,0.1); }
  th, td { border: 1px solid #ddd; padding: 0.4rem 0.6rem; text-align: left; }
  th { background: #333; color: #fff; }
  tr:nth-child(even) { background: #f9f9f9; }
  .num { font-variant-numeric: tabular-nums; }
</style>
</head>
<body>
<h1>Layout positions</h1>
""")
    parts.append(f"<h2>Nodes ({len(graph.nodes)})</h2>")
    parts.append("""<table>
<thead><tr><th>#</th><th>id</th><th>kind</th><th>depth</th><th>x</th><th>y</th><th>label</th><th>ticker</th></tr></thead>
<tbody>
""")
    for i, n in enumerate(graph.nodes):
        parts.append(
            f'<tr><td class="num">{i}</td><td>{_esc(n.id)}</td><td>{_esc(n.render_kind)}</td>'
            f'<td class="num">{depth_of(n)}</td><td class="num">{n.position.x}</td><td class="num">{n.position.y}</td>'
            f'<td>{_esc(n.data.label)}</td><td>{_esc(n.data.ticker or "")}</td></tr>\n'
        )
    parts.append("</tbody></table>\n")
    parts.append(f"<h2>Edges ({len(graph.edges)})</h2>")
    parts.append("<table>\n<thead><tr><th>id</th><th>source</th><th>target</th></tr></thead>\n<tbody>\n")
    for e in graph.edges:
        parts.append(f"<tr><td>{_esc(e.id)}</td><td>{_esc(e.source)}</td><td>{_esc(e.target)}</td></tr>\n")
    parts.append("</tbody></table>\n")
    parts.append("</body></html>")
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text("".join(parts), encoding="utf-8")
    return out_path


def _load_font(size: int):
    from PIL import ImageFont

    candidates = []
    configured = get_preview_font_path()
    if configured is not None:
        candidates.append(str(configured))
    candidates.extend(_SYSTEM_FONTS)
    for try_path in candidates:
        try:
            return ImageFont.truetype(try_path, size)
        except (OSError, IOError):
            continue
    try:
        return ImageFont.load_default()
    except Exception:
        return None


def render_layout_png(graph: FlowGraph, out_path: Path | str, *, scale: float = 0.5) -> Path:
    """
    Draw node boxes and straight parent-child connectors at layout positions; save as PNG.
    scale shrinks the canvas (large graphs get very tall).
    """
    from PIL import Image, ImageDraw

    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")
    out_path = Path(out_path)
    width, height = canvas_size(graph)
    w, h = max(1, int(width * scale)), max(1, int(height * scale))
    if w * h > MAX_PREVIEW_PIXELS:
        raise ValueError(f"Preview of {w}x{h} px is too large; lower scale")
    img = Image.new("RGB", (w, h), (10, 10, 10))
    draw = ImageDraw.Draw(img)
    font = _load_font(max(8, int(13 * scale)))

    def box(x: int, y: int) -> tuple[int, int, int, int]:
        return (int(x * scale), int(y * scale), int((x + NODE_WIDTH) * scale), int((y + NODE_HEIGHT) * scale))

    pos = {n.id: n.position for n in graph.nodes}
    for e in graph.edges:
        src, dst = pos.get(e.source), pos.get(e.target)
        if src is None or dst is None:
            continue
        start = (int((src.x + NODE_WIDTH) * scale), int((src.y + NODE_HEIGHT / 2) * scale))
        end = (int(dst.x * scale), int((dst.y + NODE_HEIGHT / 2) * scale))
        draw.line([start, end], fill=(102, 102, 102), width=1)

    for n in graph.nodes:
        x0, y0, x1, y1 = box(n.position.x, n.position.y)
        draw.rectangle((x0, y0, x1, y1), fill=(0, 0, 0), outline=_FILL.get(n.render_kind, _FILL["trigger"]))
        text = n.data.ticker if n.render_kind == "ticker" and n.data.ticker else n.data.label
        if not text:
            continue
        at = (x0 + int(10 * scale), y0 + int(10 * scale))
        if font:
            draw.text(at, text, fill=(255, 255, 255), font=font)
        else:
            draw.text(at, text, fill=(255, 255, 255))

    out_path.parent.mkdir(parents=True, exist_ok=True)
    img.save(out_path, "PNG")
    return out_path
