"""Shape analysis: bounds, aspect ratio, closedness, corners and ellipse fit."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence

from drawing_coach.config.schema import ScoringConfig
from drawing_coach.data_models import Bounds, Point, ShapeConfig, ShapeMetrics, StrokeData
from drawing_coach.data_models.exercise import POLYGON_SHAPES, ROUND_SHAPES
from drawing_coach.utils.logging import get_logger

from .geometry import bounding_box, centroid, clamp, point_distance, round_half_up, turn_angle

logger = get_logger(__name__)

# Penalty per corner of difference between detected and expected corner counts.
CORNER_COUNT_PENALTY = 20
CLOSEDNESS_GAP_RATIO = 0.15


@dataclass(frozen=True)
class CornerMatch:
    matched: int
    accuracy: int


def calculate_closedness(points: Sequence[Point], max_gap: float) -> float:
    """100 when the last point meets the first, falling linearly to 0 at `max_gap`."""
    if len(points) < 3:
        return 100.0
    gap = point_distance(points[0], points[-1])
    if max_gap <= 0:
        return 100.0 if gap == 0 else 0.0
    return clamp(100 * (1 - gap / max_gap))


def simplify_corners(corners: Sequence[Point], min_distance: float) -> List[Point]:
    """Drop corners closer than `min_distance` to the previously kept one."""
    if len(corners) <= 2:
        return list(corners)
    simplified = [corners[0]]
    for corner in corners[1:]:
        if point_distance(corner, simplified[-1]) >= min_distance:
            simplified.append(corner)
    return simplified


def detect_corners(
    points: Sequence[Point],
    angle_threshold: float = math.pi / 4,
    merge_distance: float = 20.0,
) -> List[Point]:
    """
    Corner candidates of a drawn polyline.

    The first and last points are always candidates; interior points whose
    turn angle reaches `angle_threshold` are added, then candidates closer
    than `merge_distance` to the previous kept one are merged away.
    """
    if len(points) < 3:
        return list(points)
    corners = [points[0]]
    for i in range(1, len(points) - 1):
        angle = turn_angle(points[i - 1], points[i], points[i + 1])
        if angle is not None and angle >= angle_threshold:
            corners.append(points[i])
    corners.append(points[-1])
    return simplify_corners(corners, merge_distance)


def match_corners(
    detected: Sequence[Point], expected: Sequence[Point], tolerance: float
) -> CornerMatch:
    """
    Greedy nearest-neighbour matching of expected corners to detected ones.

    Expected corners are visited in order; each claims its closest unused
    detected corner if that lies within `tolerance`. Accuracy falls linearly
    with the mean matched distance and is 0 when nothing matched.
    """
    if not expected:
        return CornerMatch(matched=0, accuracy=100)

    matched = 0
    total_distance = 0.0
    used: set[int] = set()
    for target in expected:
        best_distance = math.inf
        best_index = -1
        for index, corner in enumerate(detected):
            if index in used:
                continue
            distance = point_distance(corner, target)
            if distance < best_distance:
                best_distance = distance
                best_index = index
        if best_index != -1 and best_distance <= tolerance:
            matched += 1
            used.add(best_index)
            total_distance += best_distance

    avg_distance = total_distance / matched if matched else tolerance
    accuracy = max(0.0, 100 * (1 - avg_distance / tolerance))
    return CornerMatch(matched=matched, accuracy=round_half_up(accuracy))


def calculate_roundness(points: Sequence[Point], center: Point) -> float:
    """Map the coefficient of variation of radii around `center` to 0-100 (CV 0.5 scores 0)."""
    if len(points) < 3:
        return 0.0
    distances = [point_distance(p, center) for p in points]
    mean = sum(distances) / len(distances)
    if mean == 0:
        return 0.0
    variance = sum((d - mean) ** 2 for d in distances) / len(distances)
    cv = math.sqrt(variance) / mean
    return clamp(100 * (1 - cv * 2))


def match_ellipse(
    points: Sequence[Point],
    center: Point,
    radius_x: float,
    radius_y: float,
    tolerance: float,
) -> float:
    """Average distance from each point to the ellipse point at the same polar angle, as 0-100."""
    if len(points) < 3:
        return 0.0
    total_error = 0.0
    for p in points:
        angle = math.atan2(p.y - center.y, p.x - center.x)
        expected = Point(
            x=center.x + radius_x * math.cos(angle),
            y=center.y + radius_y * math.sin(angle),
        )
        total_error += point_distance(p, expected)
    avg_error = total_error / len(points)
    return clamp(100 * (1 - avg_error / tolerance))


def calculate_bounds_match(user: Bounds, target: Bounds, tolerance: float) -> float:
    """
    Combined position and size error relative to the target's mean side,
    expressed against `tolerance` percent.
    """
    position_error = math.sqrt((user.x - target.x) ** 2 + (user.y - target.y) ** 2)
    size_error = abs(user.width - target.width) + abs(user.height - target.height)
    avg_target_size = (target.width + target.height) / 2
    if avg_target_size == 0 or tolerance <= 0:
        return 0.0
    normalized = (position_error + size_error) / (avg_target_size * 3)
    return clamp(100 * (1 - normalized / (tolerance / 100)))


def calculate_aspect_ratio_match(user: Bounds, target: Bounds) -> float:
    if target.width == 0 or user.width == 0:
        return 0.0
    ratio_diff = abs(target.height / target.width - user.height / user.width)
    return clamp(100 * (1 - ratio_diff))


class ShapeAnalyzer:
    """Scores a drawn polygon or ellipse against its target shape."""

    def __init__(self, config: ScoringConfig | None = None):
        self.config = config or ScoringConfig()

    def analyze(self, stroke_data: StrokeData, config: ShapeConfig) -> ShapeMetrics:
        points = stroke_data.all_points()
        if len(points) < 3:
            logger.debug("shape.too_few_points", points=len(points))
            return ShapeMetrics.empty()

        user_bounds = bounding_box(points)
        target = config.target_bounds

        bounds_match = calculate_bounds_match(user_bounds, target, config.tolerance * 10)
        aspect_ratio = calculate_aspect_ratio_match(user_bounds, target)
        max_gap = max(target.width, target.height) * CLOSEDNESS_GAP_RATIO
        closedness = calculate_closedness(points, max_gap)

        corner_accuracy: float | None = None
        roundness: float | None = None
        detected_count = 0
        matched_count = 0

        if config.shape_type in ROUND_SHAPES:
            if config.center and config.radius_x and config.radius_y:
                roundness = match_ellipse(
                    points,
                    config.center,
                    config.radius_x,
                    config.radius_y,
                    config.tolerance * 5,
                )
            else:
                roundness = calculate_roundness(points, centroid(points))
            shape_match = (bounds_match + roundness + closedness) / 3
        elif config.shape_type in POLYGON_SHAPES and config.expected_corners is not None:
            detected = detect_corners(
                points,
                math.radians(self.config.corner_angle_degrees),
                self.config.corner_merge_distance,
            )
            match = match_corners(detected, config.expected_corners, config.tolerance * 3)
            count_score = max(
                0, 100 - abs(len(detected) - len(config.expected_corners)) * CORNER_COUNT_PENALTY
            )
            corner_accuracy = (match.accuracy + count_score) / 2
            detected_count = len(detected)
            matched_count = match.matched
            shape_match = (bounds_match + corner_accuracy + closedness) / 3
        else:
            shape_match = (bounds_match + aspect_ratio + closedness) / 3

        metrics = ShapeMetrics(
            shape_match=round_half_up(shape_match),
            aspect_ratio=round_half_up(aspect_ratio),
            closedness=round_half_up(closedness),
            bounds_match=round_half_up(bounds_match),
            corner_accuracy=corner_accuracy,
            roundness=roundness,
            detected_corners=detected_count,
            matched_corners=matched_count,
        )
        logger.debug(
            "shape.analyzed",
            shape_type=config.shape_type,
            **metrics.model_dump(exclude={"kind"}),
        )
        return metrics

    def calculate_score(self, metrics: ShapeMetrics) -> int:
        """Shape match weighs 50, closedness 30 and the shape-specific measure 20."""
        weighted = metrics.shape_match * 50 + metrics.closedness * 30
        if metrics.corner_accuracy is not None:
            weighted += metrics.corner_accuracy * 20
        elif metrics.roundness is not None:
            weighted += metrics.roundness * 20
        else:
            weighted += metrics.aspect_ratio * 20
        return round_half_up(weighted / 100)
