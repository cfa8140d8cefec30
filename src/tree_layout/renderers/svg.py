"""SVG renderer — renders a positioned LayoutNode tree to an SVG string."""

from __future__ import annotations

from tree_layout.config import TreeStyle
from tree_layout.layout.types import LayoutNode, Point
from tree_layout.types import EdgeStyle, NodeShape

# ─── Constants ──────────────────────────────────────────────────────────────

FONT_SIZE = 14
LINE_HEIGHT = 18
FONT_FAMILY = "monospace"
PADDING = 20  # canvas margin in pixels
CONTOUR_STROKE = 'fill="none" stroke="#d33" stroke-width="1" stroke-dasharray="4 2" opacity="0.7"'


def _escape(s: str) -> str:
    return s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def _num(v: float) -> str:
    text = f"{v:.2f}".rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


# ─── Shape Rendering ────────────────────────────────────────────────────────


def _render_node(ln: LayoutNode, style: TreeStyle) -> str:
    ns = style.node
    paint = f'fill="{ns.fill_color}" stroke="{ns.stroke_color}" stroke-width="{_num(ns.stroke_width)}"'
    x, y = ln.x - ln.width / 2, ln.y - ln.height / 2
    w, h = ln.width, ln.height

    if ns.shape == NodeShape.Circle:
        shape_svg = f'<circle cx="{_num(ln.x)}" cy="{_num(ln.y)}" r="{_num(min(w, h) / 2)}" {paint}/>'
    elif ns.shape == NodeShape.Ellipse:
        shape_svg = f'<ellipse cx="{_num(ln.x)}" cy="{_num(ln.y)}" rx="{_num(w / 2)}" ry="{_num(h / 2)}" {paint}/>'
    else:
        r = min(w, h) / 4 if ns.shape == NodeShape.RoundedRectangle else 0
        shape_svg = (
            f'<rect x="{_num(x)}" y="{_num(y)}" width="{_num(w)}" height="{_num(h)}" rx="{_num(r)}" {paint}/>'
        )

    font = f'font-family="{FONT_FAMILY}" font-size="{FONT_SIZE}"'
    lines = ln.label.split("\n")
    start_y = ln.y - (len(lines) - 1) * LINE_HEIGHT / 2
    tspans = "".join(
        f'<tspan x="{_num(ln.x)}" y="{_num(start_y + i * LINE_HEIGHT)}">{_escape(line)}</tspan>'
        for i, line in enumerate(lines)
    )
    label_svg = f'<text text-anchor="middle" dominant-baseline="central" {font}>{tspans}</text>'
    return f"{shape_svg}\n{label_svg}"


# ─── Edge Rendering ─────────────────────────────────────────────────────────


def _render_edges(parent: LayoutNode, style: TreeStyle) -> list[str]:
    if not parent.children:
        return []
    es = style.edge
    stroke = f'fill="none" stroke="{es.color}" stroke-width="{_num(es.width)}"'
    px, py = parent.x, parent.y + parent.height / 2

    if es.style == EdgeStyle.OrgChart:
        bar_y = (py + min(c.y - c.height / 2 for c in parent.children)) / 2
        xs = [c.x for c in parent.children]
        parts = [
            f'<polyline points="{_num(px)},{_num(py)} {_num(px)},{_num(bar_y)}" {stroke}/>',
            f'<polyline points="{_num(min(xs + [px]))},{_num(bar_y)} {_num(max(xs + [px]))},{_num(bar_y)}" {stroke}/>',
        ]
        for c in parent.children:
            top = c.y - c.height / 2
            parts.append(f'<polyline points="{_num(c.x)},{_num(bar_y)} {_num(c.x)},{_num(top)}" {stroke}/>')
        return parts

    parts = []
    for c in parent.children:
        cx, cy = c.x, c.y - c.height / 2
        if es.style == EdgeStyle.StraightArrow:
            parts.append(
                f'<line x1="{_num(px)}" y1="{_num(py)}" x2="{_num(cx)}" y2="{_num(cy)}" '
                f'{stroke} marker-end="url(#arrowhead)"/>'
            )
        else:
            my = (py + cy) / 2
            d = f"M {_num(px)} {_num(py)} C {_num(px)} {_num(my)}, {_num(cx)} {_num(my)}, {_num(cx)} {_num(cy)}"
            parts.append(f'<path d="{d}" {stroke}/>')
    return parts


def _contour_points(ln: LayoutNode) -> list[Point]:
    if ln.contour is None:
        return []
    outline = ln.contour.left + list(reversed(ln.contour.right))
    return [Point(p.x + ln.x, p.y + ln.y) for p in outline]


def _render_contour(ln: LayoutNode) -> str:
    pts = " ".join(f"{_num(p.x)},{_num(p.y)}" for p in _contour_points(ln))
    return f'<polygon points="{pts}" {CONTOUR_STROKE}/>' if pts else ""


# ─── Public Renderer ────────────────────────────────────────────────────────


class SvgRenderer:
    """SVG renderer — consumes a positioned tree, produces an SVG string."""

    def __init__(self, style: TreeStyle | None = None, show_contours: bool = False) -> None:
        self.style = style if style is not None else TreeStyle()
        self.show_contours = show_contours

    def render(self, root: LayoutNode) -> str:
        nodes = list(root.iter_nodes())
        min_x = min(n.x - n.width / 2 for n in nodes)
        max_x = max(n.x + n.width / 2 for n in nodes)
        min_y = min(n.y - n.height / 2 for n in nodes)
        max_y = max(n.y + n.height / 2 for n in nodes)
        if self.show_contours:
            outline = [p for n in nodes for p in _contour_points(n)]
            if outline:
                min_x = min(min_x, min(p.x for p in outline))
                max_x = max(max_x, max(p.x for p in outline))

        dx, dy = PADDING - min_x, PADDING - min_y
        svg_w = max_x - min_x + PADDING * 2
        svg_h = max_y - min_y + PADDING * 2
        arrow = self.style.edge.arrow_size

        parts = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{_num(svg_w)}" height="{_num(svg_h)}" '
            f'viewBox="0 0 {_num(svg_w)} {_num(svg_h)}">',
            "<defs>",
            f'  <marker id="arrowhead" markerWidth="{_num(arrow)}" markerHeight="{_num(arrow * 0.7)}" '
            f'refX="{_num(arrow)}" refY="{_num(arrow * 0.35)}" orient="auto">',
            f'    <polygon points="0 0, {_num(arrow)} {_num(arrow * 0.35)}, 0 {_num(arrow * 0.7)}" '
            f'fill="{self.style.edge.color}"/>',
            "  </marker>",
            "</defs>",
            f'<rect width="{_num(svg_w)}" height="{_num(svg_h)}" fill="white"/>',
            f'<g transform="translate({_num(dx)},{_num(dy)})">',
        ]

        # Edges (behind nodes)
        for ln in nodes:
            parts.extend(_render_edges(ln, self.style))

        if self.show_contours:
            for ln in nodes:
                if ln.children:
                    parts.append(_render_contour(ln))

        # Nodes (on top)
        for ln in nodes:
            parts.append(_render_node(ln, self.style))

        parts.append("</g>")
        parts.append("</svg>")
        return "\n".join(p for p in parts if p)
