# src/vertex_run/game/geometry.py
from __future__ import annotations
from typing import Tuple

Point = Tuple[float, float]
Triangle = Tuple[Point, Point, Point]


def _same_side(p: Point, a: Point, b: Point, c: Point) -> bool:
    """True if p and c lie on the same side of line ab (touching the line counts)."""
    (px, py), (ax, ay), (bx, by), (cx, cy) = p, a, b, c
    cp1 = (bx - ax) * (py - ay) - (by - ay) * (px - ax)
    cp2 = (bx - ax) * (cy - ay) - (by - ay) * (cx - ax)
    return cp1 * cp2 >= 0


def point_in_triangle(p: Point, a: Point, b: Point, c: Point) -> bool:
    """Same-side test against each edge of abc; points on an edge are inside."""
    return (_same_side(p, a, b, c)
            and _same_side(p, b, c, a)
            and _same_side(p, c, a, b))


def rect_rect(ax: float, ay: float, aw: float, ah: float,
              bx: float, by: float, bw: float, bh: float) -> bool:
    """Axis-aligned overlap; shared edges do not count."""
    return ax < bx + bw and ax + aw > bx and ay < by + bh and ay + ah > by


def spans_overlap(a_left: float, a_right: float, b_left: float, b_right: float) -> bool:
    """Open-interval overlap on one axis."""
    return a_right > b_left and a_left < b_right
