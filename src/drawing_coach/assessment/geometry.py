"""Plane geometry helpers shared by the analyzers."""

from __future__ import annotations

import math
from typing import List, Sequence

from drawing_coach.data_models import Bounds, Point


def point_distance(p1: Point, p2: Point) -> float:
    dx = p1.x - p2.x
    dy = p1.y - p2.y
    return math.sqrt(dx * dx + dy * dy)


def centroid(points: Sequence[Point]) -> Point:
    """Mean position of the points; the origin for an empty sequence."""
    if not points:
        return Point(x=0.0, y=0.0)
    sum_x = sum(p.x for p in points)
    sum_y = sum(p.y for p in points)
    return Point(x=sum_x / len(points), y=sum_y / len(points))


def bounding_box(points: Sequence[Point]) -> Bounds:
    if not points:
        return Bounds(x=0.0, y=0.0, width=0.0, height=0.0)
    min_x = min(p.x for p in points)
    min_y = min(p.y for p in points)
    max_x = max(p.x for p in points)
    max_y = max(p.y for p in points)
    return Bounds(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)


def lerp(p1: Point, p2: Point, t: float) -> Point:
    """Linear interpolation from `p1` (t=0) to `p2` (t=1)."""
    return Point(x=p1.x + t * (p2.x - p1.x), y=p1.y + t * (p2.y - p1.y))


def polyline_length(points: Sequence[Point]) -> float:
    return sum(point_distance(points[i - 1], points[i]) for i in range(1, len(points)))


def turn_angle(prev: Point, curr: Point, nxt: Point) -> float | None:
    """
    Angle in radians between the motion vectors prev->curr and curr->nxt.

    Returns None when either vector has zero length; the cosine is clamped to
    [-1, 1] before `acos` so rounding noise cannot leave the domain.
    """
    dx1 = curr.x - prev.x
    dy1 = curr.y - prev.y
    dx2 = nxt.x - curr.x
    dy2 = nxt.y - curr.y
    len1 = math.sqrt(dx1 * dx1 + dy1 * dy1)
    len2 = math.sqrt(dx2 * dx2 + dy2 * dy2)
    if len1 == 0 or len2 == 0:
        return None
    cos_angle = max(-1.0, min(1.0, (dx1 * dx2 + dy1 * dy2) / (len1 * len2)))
    return math.acos(cos_angle)


def turn_angles(points: Sequence[Point]) -> List[float]:
    """Turn angles at every interior point, skipping stationary samples."""
    angles: List[float] = []
    for i in range(1, len(points) - 1):
        angle = turn_angle(points[i - 1], points[i], points[i + 1])
        if angle is not None:
            angles.append(angle)
    return angles


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round .5 away from negative infinity, the way scores are shown to learners."""
    return int(math.floor(value + 0.5))
