"""SVG serializers: outline (cut-ready) documents and stroke previews."""
from xml.sax.saxutils import escape, quoteattr

from shared.types import MazeModel, Decoration
from shared.svg import fmt_num, view_box_attr, contours_to_path_d
from export.pathparse import SCALE
from export.outline import (
    OutlineSet, CORRIDORS, BOUNDARY, CENTER_HOLE, ENTRY_HOLE, WEDGE, WEDGE_HOLE,
)
from export.wedge import Wedge

CUT_STROKE = "#000000"
WEDGE_STROKE = "#FF0000"
HAIRLINE = 0.1

# (shape class, comment, stroke)
_OUTLINE_LAYERS = [
    (CORRIDORS, "Corridor outlines (merged, no overlaps)", CUT_STROKE),
    (BOUNDARY, "Outer boundary", CUT_STROKE),
    (CENTER_HOLE, "Center hole", CUT_STROKE),
    (ENTRY_HOLE, "Entry hole", CUT_STROKE),
    (WEDGE, "Entry wedge (cut from middle layer)", WEDGE_STROKE),
    (WEDGE_HOLE, "Wedge screw hole", WEDGE_STROKE),
]

_DISK_FILL = "#1f2937"
_CUT_FILL = "#f3f4f6"
_SOLUTION = "#ef4444"


def _svg_open(diameter: float) -> list[str]:
    d = f"{diameter:g}"
    return [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{d}mm" height="{d}mm"'
        f' viewBox="{view_box_attr(diameter)}">',
    ]


def render_outline_svg(outline: OutlineSet, diameter: float, scale: int = SCALE) -> str:
    """Outline SVG: one stroke-only closed <path> per non-empty shape class."""
    out = _svg_open(diameter)
    for shape, comment, stroke in _OUTLINE_LAYERS:
        contours = outline.contours(shape)
        if not contours:
            continue
        d = contours_to_path_d(contours, scale)
        out.append(f'  <!-- {comment} -->')
        out.append(f'  <path id="{shape}" d="{d}" fill="none" stroke="{stroke}"'
                   f' stroke-width="{HAIRLINE}"/>')
    out.append('</svg>')
    return "\n".join(out)


def _points_d(points) -> str:
    head, *rest = points
    parts = [f"M {fmt_num(head[0], 3)} {fmt_num(head[1], 3)}"]
    parts += [f"L {fmt_num(x, 3)} {fmt_num(y, 3)}" for x, y in rest]
    parts.append("Z")
    return " ".join(parts)


def render_preview_svg(model: MazeModel, show_solution: bool = False,
                       wedge: Wedge | None = None, decoration: Decoration | None = None,
                       title: str | None = None) -> str:
    """Stroke preview: disk, stroked corridors, holes, wedge, solution, decoration."""
    cfg = model.config
    radius = cfg.diameter / 2
    hr = fmt_num(cfg.hole_radius)
    sx, sy = (fmt_num(v) for v in model.start_point)
    join = "round" if cfg.corner_rounding else "miter"

    out = _svg_open(cfg.diameter)
    if title:
        out.append(f'  <title>{escape(title)}</title>')
    out.append(f'  <circle cx="0" cy="0" r="{fmt_num(radius)}" fill="{_DISK_FILL}" stroke="none"/>')
    out.append(f'  <path id="corridors" d="{model.corridor_path}" fill="none" stroke="{_CUT_FILL}"'
               f' stroke-width="{fmt_num(cfg.corridor_width)}" stroke-linecap="round"'
               f' stroke-linejoin="{join}"/>')
    out.append(f'  <circle id="entry_hole" cx="{sx}" cy="{sy}" r="{hr}" fill="{_CUT_FILL}"/>')
    out.append(f'  <circle id="center_hole" cx="0" cy="0" r="{hr}" fill="{_CUT_FILL}"/>')
    if wedge is not None:
        out.append('  <g id="wedge_preview">')
        out.append(f'    <path d="{_points_d(wedge.outline)}" fill="rgba(239, 68, 68, 0.2)"'
                   f' stroke="{_SOLUTION}" stroke-width="0.5" stroke-dasharray="3,2"/>')
        out.append(f'    <path d="{_points_d(wedge.screw_hole)}" fill="none"'
                   f' stroke="{_SOLUTION}" stroke-width="0.3"/>')
        out.append('  </g>')
    if show_solution:
        out.append(f'  <path id="solution" d="{model.solution_path}" fill="none" stroke="{_SOLUTION}"'
                   f' stroke-width="{fmt_num(cfg.corridor_width * 0.4)}" stroke-linecap="round"'
                   f' stroke-linejoin="round" opacity="0.9"/>')
    if decoration is not None:
        size = fmt_num(cfg.hole_radius * 2)
        out.append(f'  <g transform="translate(-{hr}, -{hr})">')
        out.append(f'    <svg x="0" y="0" width="{size}" height="{size}"'
                   f' viewBox={quoteattr(decoration.view_box)}>')
        out.append(f'      <path d={quoteattr(decoration.path)} fill="{_DISK_FILL}"/>')
        out.append('    </svg>')
        out.append('  </g>')
    out.append('</svg>')
    return "\n".join(out)
