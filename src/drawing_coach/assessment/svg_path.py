"""
Sampling of SVG path data into polylines.

Only the commands exercise authors use are understood: M, L, H, V, Q, C and Z,
absolute or lowercase-relative. Curves are flattened at a fixed number of
uniformly spaced parameter values. Unknown commands and commands with too few
numeric arguments are skipped and logged at debug level.
"""

from __future__ import annotations

import re
from typing import List

from drawing_coach.data_models import Point
from drawing_coach.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_CURVE_SEGMENTS = 10

_COMMAND_RE = re.compile(r"[MLHVCSQTAZ][^MLHVCSQTAZ]*", re.IGNORECASE)
_NUMBER_RE = re.compile(r"[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")

# Number of arguments each command consumes per segment.
_ARITY = {"M": 2, "L": 2, "H": 1, "V": 1, "Q": 4, "C": 6, "Z": 0}


def sample_quadratic_bezier(p0: Point, p1: Point, p2: Point, segments: int) -> List[Point]:
    points: List[Point] = []
    for i in range(segments + 1):
        t = i / segments
        mt = 1 - t
        points.append(
            Point(
                x=mt * mt * p0.x + 2 * mt * t * p1.x + t * t * p2.x,
                y=mt * mt * p0.y + 2 * mt * t * p1.y + t * t * p2.y,
            )
        )
    return points


def sample_cubic_bezier(
    p0: Point, p1: Point, p2: Point, p3: Point, segments: int
) -> List[Point]:
    points: List[Point] = []
    for i in range(segments + 1):
        t = i / segments
        mt = 1 - t
        a = mt * mt * mt
        b = 3 * mt * mt * t
        c = 3 * mt * t * t
        d = t * t * t
        points.append(
            Point(
                x=a * p0.x + b * p1.x + c * p2.x + d * p3.x,
                y=a * p0.y + b * p1.y + c * p2.y + d * p3.y,
            )
        )
    return points


def _parse_args(text: str) -> List[float]:
    return [float(token) for token in _NUMBER_RE.findall(text)]


def parse_path(path_data: str, segments: int = DEFAULT_CURVE_SEGMENTS) -> List[Point]:
    """
    Convert SVG path data into the sequence of points it visits.

    `M` starts a subpath and remembers its start for `Z`; `Z` appends that
    start only when the current point differs from it. Each curve contributes
    `segments` points (its start is the current point and is not repeated).

    >>> [(p.x, p.y) for p in parse_path("M 0 0 L 10 0")]
    [(0.0, 0.0), (10.0, 0.0)]
    """
    points: List[Point] = []
    current_x = current_y = 0.0
    start_x = start_y = 0.0

    for command in _COMMAND_RE.findall(path_data or ""):
        letter = command[0]
        kind = letter.upper()
        relative = letter != kind
        args = _parse_args(command[1:])
        arity = _ARITY.get(kind)

        if arity is None:
            logger.debug("svg_path.unsupported_command", command=letter)
            continue
        if len(args) < arity:
            logger.debug("svg_path.missing_arguments", command=letter, args=args)
            continue

        base_x = current_x if relative else 0.0
        base_y = current_y if relative else 0.0

        if kind == "M":
            current_x = base_x + args[0]
            current_y = base_y + args[1]
            start_x, start_y = current_x, current_y
            points.append(Point(x=current_x, y=current_y))
        elif kind == "L":
            current_x = base_x + args[0]
            current_y = base_y + args[1]
            points.append(Point(x=current_x, y=current_y))
        elif kind == "H":
            current_x = base_x + args[0]
            points.append(Point(x=current_x, y=current_y))
        elif kind == "V":
            current_y = base_y + args[0]
            points.append(Point(x=current_x, y=current_y))
        elif kind == "Q":
            control = Point(x=base_x + args[0], y=base_y + args[1])
            end = Point(x=base_x + args[2], y=base_y + args[3])
            samples = sample_quadratic_bezier(
                Point(x=current_x, y=current_y), control, end, segments
            )
            points.extend(samples[1:])
            current_x, current_y = end.x, end.y
        elif kind == "C":
            control1 = Point(x=base_x + args[0], y=base_y + args[1])
            control2 = Point(x=base_x + args[2], y=base_y + args[3])
            end = Point(x=base_x + args[4], y=base_y + args[5])
            samples = sample_cubic_bezier(
                Point(x=current_x, y=current_y), control1, control2, end, segments
            )
            points.extend(samples[1:])
            current_x, current_y = end.x, end.y
        elif kind == "Z":
            if current_x != start_x or current_y != start_y:
                points.append(Point(x=start_x, y=start_y))
                current_x, current_y = start_x, start_y

    return points
