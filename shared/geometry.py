"""Pure geometry functions: angles, arcs, polygons, and rotations."""
import math

import numpy as np

from .types import Point

TWO_PI = 2 * math.pi

# ============================================================
# Scalar Helpers
# ============================================================
def round_half_up(x: float) -> int:
    """Round to nearest integer, halves away from -inf (floor(x + 0.5))."""
    return int(math.floor(x + 0.5))

def wrap_angle(a: float) -> float:
    """Normalize an angle into (-pi, pi]."""
    return math.pi - (math.pi - a) % TWO_PI

def polar(r: float, theta: float) -> Point:
    return (r * math.cos(theta), r * math.sin(theta))

# ============================================================
# Arcs
# ============================================================
def arc_center_params(
    p1: Point, rx: float, ry: float, x_rot_deg: float,
    large_arc: int, sweep: int, p2: Point,
) -> tuple[float, float, float, float, float, float, float] | None:
    """Endpoint-to-center conversion of an SVG elliptical arc.

    Follows the SVG implementation notes (F.6.5/F.6.6): radii are made
    positive and scaled up when too small to span the chord.
    Returns (cx, cy, rx, ry, phi, theta1, dtheta), or None when the arc is
    degenerate (coincident endpoints or a zero radius).
    """
    if p1 == p2:
        return None
    rx = abs(rx); ry = abs(ry)
    if rx == 0 or ry == 0:
        return None
    phi = math.radians(x_rot_deg % 360.0)
    cos_p, sin_p = math.cos(phi), math.sin(phi)

    # Step 1: transformed midpoint
    dx = (p1[0] - p2[0]) / 2; dy = (p1[1] - p2[1]) / 2
    x1p = cos_p*dx + sin_p*dy
    y1p = -sin_p*dx + cos_p*dy

    # Radii correction
    lam = (x1p*x1p)/(rx*rx) + (y1p*y1p)/(ry*ry)
    if lam > 1:
        s = math.sqrt(lam); rx *= s; ry *= s

    # Step 2: transformed center
    rx2, ry2 = rx*rx, ry*ry
    num = rx2*ry2 - rx2*y1p*y1p - ry2*x1p*x1p
    den = rx2*y1p*y1p + ry2*x1p*x1p
    co = math.sqrt(max(0.0, num / den))
    if large_arc == sweep:
        co = -co
    cxp = co * (rx*y1p) / ry
    cyp = co * -(ry*x1p) / rx

    # Step 3: center in user space
    cx = cos_p*cxp - sin_p*cyp + (p1[0] + p2[0]) / 2
    cy = sin_p*cxp + cos_p*cyp + (p1[1] + p2[1]) / 2

    # Step 4: start angle and sweep extent
    theta1 = math.atan2((y1p - cyp) / ry, (x1p - cxp) / rx)
    dtheta = math.atan2((-y1p - cyp) / ry, (-x1p - cxp) / rx) - theta1
    if not sweep and dtheta > 0:
        dtheta -= TWO_PI
    elif sweep and dtheta < 0:
        dtheta += TWO_PI
    return cx, cy, rx, ry, phi, theta1, dtheta

def flatten_arc(
    p1: Point, rx: float, ry: float, x_rot_deg: float,
    large_arc: int, sweep: int, p2: Point, segments_per_arc: int = 32,
) -> list[Point]:
    """Approximate an SVG arc by line segments.

    Returns the points after *p1* (the end point is always last). The segment
    count scales with the swept angle: *segments_per_arc* per pi radians.
    """
    if p1 == p2:
        return []
    params = arc_center_params(p1, rx, ry, x_rot_deg, large_arc, sweep, p2)
    if params is None:
        return [p2]
    cx, cy, rx, ry, phi, theta1, dtheta = params
    cos_p, sin_p = math.cos(phi), math.sin(phi)
    n = max(1, math.ceil(abs(dtheta) / (math.pi / segments_per_arc)))
    out = []
    for i in range(1, n):
        t = theta1 + dtheta * i / n
        xr = rx * math.cos(t); yr = ry * math.sin(t)
        out.append((cos_p*xr - sin_p*yr + cx, sin_p*xr + cos_p*yr + cy))
    out.append(p2)
    return out

# ============================================================
# Intersection Tests
# ============================================================
def _orient(a, b, c) -> int:
    v = (b[0]-a[0])*(c[1]-a[1]) - (b[1]-a[1])*(c[0]-a[0])
    return (v > 0) - (v < 0)

def _on_segment(a, b, p) -> bool:
    return (min(a[0], b[0]) <= p[0] <= max(a[0], b[0])
            and min(a[1], b[1]) <= p[1] <= max(a[1], b[1]))

def segments_intersect(p1, p2, p3, p4) -> bool:
    """True if closed segments p1-p2 and p3-p4 share any point."""
    d1 = _orient(p3, p4, p1); d2 = _orient(p3, p4, p2)
    d3 = _orient(p1, p2, p3); d4 = _orient(p1, p2, p4)
    if d1 != d2 and d3 != d4:
        return True
    if d1 == 0 and _on_segment(p3, p4, p1): return True
    if d2 == 0 and _on_segment(p3, p4, p2): return True
    if d3 == 0 and _on_segment(p1, p2, p3): return True
    if d4 == 0 and _on_segment(p1, p2, p4): return True
    return False

def dedupe_consecutive(points: list) -> list:
    """Drop points equal to their predecessor."""
    out = []
    for p in points:
        if not out or p != out[-1]:
            out.append(p)
    return out

def polyline_self_intersects(points: list, closed: bool) -> bool:
    """True if any two non-adjacent edges of the polyline touch or cross.

    Consecutive duplicate points are ignored; a closing duplicate of the
    first point is ignored for closed polylines.
    """
    pts = dedupe_consecutive(points)
    if closed and len(pts) > 1 and pts[0] == pts[-1]:
        pts.pop()
    n = len(pts)
    edges = [(pts[i], pts[i+1]) for i in range(n-1)]
    if closed and n > 2:
        edges.append((pts[-1], pts[0]))
    m = len(edges)
    for i in range(m):
        for j in range(i+2, m):
            if closed and i == 0 and j == m-1:
                continue  # share pts[0]
            if segments_intersect(*edges[i], *edges[j]):
                return True
    return False

# ============================================================
# Transforms
# ============================================================
def rotation_matrix(angle: float) -> np.ndarray:
    c, s = math.cos(angle), math.sin(angle)
    return np.array([[c, -s], [s, c]])

def rotate_points(pts, angle: float) -> np.ndarray:
    """Rotate (N, 2) points about the origin by *angle* radians (CCW, y up)."""
    arr = np.asarray(pts, dtype=float).reshape(-1, 2)
    return arr @ rotation_matrix(angle).T

def regular_polygon(cx: float, cy: float, r: float, n: int) -> np.ndarray:
    """Vertices of a regular n-gon inscribed in a circle, starting at angle 0."""
    ang = np.arange(n) * (2 * np.pi / n)
    return np.column_stack((cx + r*np.cos(ang), cy + r*np.sin(ang)))
