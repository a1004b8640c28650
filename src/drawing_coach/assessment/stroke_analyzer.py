"""Line-tracing analysis: DTW path accuracy, smoothness and completeness."""

from __future__ import annotations

import math
from typing import List, Sequence

from drawing_coach.config.schema import ScoringConfig
from drawing_coach.data_models import LineConfig, LineMetrics, Point, StrokeData
from drawing_coach.utils.logging import get_logger

from .dtw import dtw
from .geometry import clamp, lerp, point_distance, polyline_length, round_half_up, turn_angles
from .svg_path import parse_path

logger = get_logger(__name__)

# Angle variance of a visibly jagged line; smooth lines sit well below 0.1.
MAX_ANGLE_VARIANCE = 0.5


def resample_points(points: Sequence[Point], num_points: int) -> List[Point]:
    """
    Resample a polyline to `num_points` points spaced evenly by arc length.

    Sequences with fewer than two points come back unchanged and a polyline
    of zero length collapses to its first point. The first and last samples
    are always the original endpoints.
    """
    if len(points) < 2:
        return list(points)

    total_length = polyline_length(points)
    if total_length == 0:
        return [points[0]]

    interval = total_length / (num_points - 1)
    resampled: List[Point] = [points[0]]
    accumulated = 0.0
    prev = points[0]

    for point in points[1:]:
        if len(resampled) >= num_points:
            break
        segment = point_distance(prev, point)
        if segment == 0:
            continue
        while len(resampled) < num_points and accumulated + segment >= interval * len(resampled):
            t = (interval * len(resampled) - accumulated) / segment
            resampled.append(lerp(prev, point, t))
        accumulated += segment
        prev = point

    if len(resampled) == num_points:
        resampled[-1] = points[-1]
    while len(resampled) < num_points:
        resampled.append(points[-1])
    return resampled


def calculate_smoothness(points: Sequence[Point]) -> int:
    """
    Score 0-100 from the spread of turn angles along a stroke.

    Fewer than three points (or no measurable turns) score 100: there is no
    turning to judge.
    """
    if len(points) < 3:
        return 100
    angles = turn_angles(points)
    if not angles:
        return 100
    mean = sum(angles) / len(angles)
    variance = sum((angle - mean) ** 2 for angle in angles) / len(angles)
    smoothness = 100 * (1 - math.sqrt(variance) / math.sqrt(MAX_ANGLE_VARIANCE))
    return round_half_up(max(0.0, smoothness))


def calculate_completeness(
    user_points: Sequence[Point], target_points: Sequence[Point], tolerance: float
) -> int:
    """Percentage of target points that have at least one user point within `tolerance`."""
    if not target_points:
        return 100
    covered = 0
    for target in target_points:
        if any(point_distance(target, user) <= tolerance for user in user_points):
            covered += 1
    return round_half_up(covered / len(target_points) * 100)


def path_accuracy(avg_deviation: float, tolerance: float) -> float:
    """Full marks up to half the tolerance, zero from twice the tolerance, linear between."""
    if math.isinf(avg_deviation):
        return 0.0
    return clamp(100 * (1 - (avg_deviation - tolerance / 2) / (tolerance * 1.5)))


class StrokeAnalyzer:
    """Scores freehand tracing of a target SVG path."""

    def __init__(self, config: ScoringConfig | None = None):
        self.config = config or ScoringConfig()

    def analyze(self, stroke_data: StrokeData, config: LineConfig) -> LineMetrics:
        target_points = parse_path(config.target_path, self.config.bezier_segments)
        user_points = stroke_data.all_points()

        if not user_points or not target_points:
            logger.debug(
                "line.empty_input",
                user_points=len(user_points),
                target_points=len(target_points),
            )
            return LineMetrics.empty()

        num_samples = max(
            self.config.min_resample_points, min(len(target_points), len(user_points))
        )
        resampled_target = resample_points(target_points, num_samples)
        resampled_user = resample_points(user_points, num_samples)

        result = dtw(resampled_user, resampled_target)
        if result.path:
            total = sum(
                point_distance(resampled_user[i], resampled_target[j]) for i, j in result.path
            )
            avg_deviation = total / len(result.path)
        else:
            avg_deviation = math.inf

        accuracy = path_accuracy(avg_deviation, config.tolerance)

        stroke_scores = [
            calculate_smoothness(stroke.points)
            for stroke in stroke_data.strokes
        ]
        smoothness = sum(stroke_scores) / len(stroke_scores) if stroke_scores else 0.0

        completeness = calculate_completeness(user_points, target_points, config.tolerance)

        metrics = LineMetrics(
            path_accuracy=round_half_up(accuracy),
            smoothness=round_half_up(smoothness),
            completeness=completeness,
            avg_deviation=(
                avg_deviation
                if math.isinf(avg_deviation)
                else round_half_up(avg_deviation * 10) / 10
            ),
        )
        logger.debug(
            "line.analyzed",
            samples=num_samples,
            dtw_distance=result.distance,
            avg_deviation=metrics.avg_deviation,
        )
        return metrics

    def calculate_score(self, metrics: LineMetrics) -> int:
        score = (
            metrics.path_accuracy * 0.5
            + metrics.smoothness * 0.25
            + metrics.completeness * 0.25
        )
        return round_half_up(clamp(score))
