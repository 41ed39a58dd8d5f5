"""Line-segment and rectangle primitives shared by metrics and routing."""

from __future__ import annotations

import math
from typing import Optional

from ..types import Point

PARALLEL_EPSILON = 1e-6


def segment_intersection(
    a1: Point,
    a2: Point,
    b1: Point,
    b2: Point,
    tolerance: float = 0.5,
) -> Optional[Point]:
    """
    Intersection point of segments a1-a2 and b1-b2.

    Uses the determinant form of the line-line intersection and then checks
    that the point lies within both segments' bounding boxes (padded by
    ``tolerance``). Near-parallel pairs are rejected.

    Returns:
        (x, y) of the intersection, or None.
    """
    x1, y1 = a1
    x2, y2 = a2
    x3, y3 = b1
    x4, y4 = b2

    denom = (x1 - x2) * (y3 - y4) - (y1 - y2) * (x3 - x4)
    if abs(denom) < PARALLEL_EPSILON:
        return None

    det1 = x1 * y2 - y1 * x2
    det2 = x3 * y4 - y3 * x4

    ix = (det1 * (x3 - x4) - (x1 - x2) * det2) / denom
    iy = (det1 * (y3 - y4) - (y1 - y2) * det2) / denom

    if ix < min(x1, x2) - tolerance or ix > max(x1, x2) + tolerance:
        return None
    if iy < min(y1, y2) - tolerance or iy > max(y1, y2) + tolerance:
        return None
    if ix < min(x3, x4) - tolerance or ix > max(x3, x4) + tolerance:
        return None
    if iy < min(y3, y4) - tolerance or iy > max(y3, y4) + tolerance:
        return None

    return (ix, iy)


def point_on_segment(p: Point, s1: Point, s2: Point, tolerance: float = 0.5) -> bool:
    """Check whether p lies on segment s1-s2 within ``tolerance`` pixels."""
    px, py = p
    x1, y1 = s1
    x2, y2 = s2

    if px < min(x1, x2) - tolerance or px > max(x1, x2) + tolerance:
        return False
    if py < min(y1, y2) - tolerance or py > max(y1, y2) + tolerance:
        return False

    dx = x2 - x1
    dy = y2 - y1
    cross = abs((px - x1) * dy - (py - y1) * dx)
    return cross <= tolerance * math.hypot(dx, dy)


def rects_overlap(
    x1: float,
    y1: float,
    w1: float,
    h1: float,
    x2: float,
    y2: float,
    w2: float,
    h2: float,
    margin: float = 0.0,
) -> bool:
    """Axis-aligned overlap test between two top-left/size rectangles, with margin."""
    return not (
        x1 + w1 + margin < x2
        or x2 + w2 + margin < x1
        or y1 + h1 + margin < y2
        or y2 + h2 + margin < y1
    )


__all__ = [
    "segment_intersection",
    "point_on_segment",
    "rects_overlap",
]
