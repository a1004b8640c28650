"""Tests for shape metrics: closedness, corners, roundness and composite scores."""

from __future__ import annotations

import math

import pytest

from conftest import make_stroke_data, points, square_outline
from drawing_coach.assessment.geometry import centroid
from drawing_coach.assessment.shape_analyzer import (
    ShapeAnalyzer,
    calculate_aspect_ratio_match,
    calculate_bounds_match,
    calculate_closedness,
    calculate_roundness,
    detect_corners,
    match_corners,
    match_ellipse,
    simplify_corners,
)
from drawing_coach.data_models import Bounds, Point, ShapeConfig, ShapeMetrics


def circle_outline(cx: float, cy: float, radius: float, steps: int = 36):
    """Closed circle sampled every 360/steps degrees, ending where it started."""
    return [
        (cx + radius * math.cos(2 * math.pi * i / steps), cy + radius * math.sin(2 * math.pi * i / steps))
        for i in range(steps + 1)
    ]


@pytest.fixture
def analyzer():
    return ShapeAnalyzer()


@pytest.fixture
def circle_config():
    return ShapeConfig(
        shape_type="circle",
        target_bounds=Bounds(x=200, y=100, width=200, height=200),
        center=Point(x=300, y=200),
        radius_x=100,
        radius_y=100,
        tolerance=10,
    )


def test_closed_triangle_scores_full_closedness():
    triangle = points([(0, 0), (100, 0), (50, 80), (0, 0)])
    assert calculate_closedness(triangle, 15) == 100


def test_gap_of_max_gap_scores_zero_closedness():
    triangle = points([(0, 0), (100, 0), (50, 80), (15, 0)])
    assert calculate_closedness(triangle, 15) == 0


def test_closedness_is_maximal_with_too_few_points():
    assert calculate_closedness(points([(0, 0), (50, 50)]), 15) == 100


def test_identical_corners_match_perfectly():
    corners = points([(0, 0), (10, 0), (10, 10), (0, 10)])
    match = match_corners(corners, corners, 5)
    assert match.matched == 4
    assert match.accuracy == 100


def test_corner_matching_is_greedy_over_expected_order():
    """The first expected corner claims the only detected corner even if it fits the second better."""
    detected = points([(3, 0)])
    expected = points([(0, 0), (3, 1)])
    match = match_corners(detected, expected, 10)
    assert match.matched == 1
    assert match.accuracy == 70


def test_unmatched_corners_score_zero():
    match = match_corners(points([(100, 100)]), points([(0, 0)]), 5)
    assert match.matched == 0
    assert match.accuracy == 0


def test_no_expected_corners_is_a_perfect_match():
    match = match_corners(points([(1, 1)]), [], 5)
    assert (match.matched, match.accuracy) == (0, 100)


def test_detect_corners_on_a_square():
    """Sharp turns become corners; the start and end points are always kept."""
    corners = detect_corners(points(square_outline(0, 0, 100)))
    assert [(p.x, p.y) for p in corners] == [(0, 0), (100, 0), (100, 100), (0, 100), (0, 0)]


def test_simplify_corners_merges_close_candidates():
    merged = simplify_corners(points([(0, 0), (5, 0), (50, 0), (52, 0), (100, 0)]), 20)
    assert [(p.x, p.y) for p in merged] == [(0, 0), (50, 0), (100, 0)]


def test_roundness_of_a_circle():
    circle = points(circle_outline(0, 0, 50)[:-1])
    assert calculate_roundness(circle, centroid(circle)) == pytest.approx(100, abs=1e-6)


def test_roundness_of_a_flat_line_is_low():
    line = points([(0, 0), (50, 0), (100, 0), (150, 0)])
    assert calculate_roundness(line, centroid(line)) < 50


def test_match_ellipse_on_a_matching_circle():
    circle = points(circle_outline(300, 200, 80))
    assert match_ellipse(circle, Point(x=300, y=200), 80, 80, 50) == pytest.approx(100, abs=1e-6)


def test_match_ellipse_penalises_wrong_radius():
    circle = points(circle_outline(300, 200, 80))
    assert match_ellipse(circle, Point(x=300, y=200), 100, 100, 50) == pytest.approx(60)


def test_bounds_and_aspect_ratio_match():
    target = Bounds(x=0, y=0, width=100, height=100)
    assert calculate_bounds_match(target, target, 100) == 100
    assert calculate_aspect_ratio_match(target, target) == 100
    tall = Bounds(x=0, y=0, width=50, height=100)
    assert calculate_aspect_ratio_match(tall, target) == 0


def test_square_with_expected_corners(analyzer, square_config):
    """An exact square detects one extra corner (the closing point), costing 20 count points."""
    stroke_data = make_stroke_data(square_outline(200, 100, 200))
    metrics = analyzer.analyze(stroke_data, square_config)
    assert metrics.detected_corners == 5
    assert metrics.matched_corners == 4
    assert metrics.corner_accuracy == 90
    assert metrics.bounds_match == 100
    assert metrics.closedness == 100
    assert metrics.shape_match == 97
    assert metrics.roundness is None
    assert analyzer.calculate_score(metrics) == 97


def test_polygon_without_expected_corners_uses_aspect_ratio(analyzer, square_config):
    config = square_config.model_copy(update={"expected_corners": None})
    metrics = analyzer.analyze(make_stroke_data(square_outline(200, 100, 200)), config)
    assert metrics.corner_accuracy is None
    assert metrics.aspect_ratio == 100
    assert metrics.shape_match == 100
    assert analyzer.calculate_score(metrics) == 100


def test_empty_expected_corners_still_use_corner_scoring(analyzer, square_config):
    """Five detected corners against none expected: match accuracy 100, count score 0."""
    config = square_config.model_copy(update={"expected_corners": []})
    metrics = analyzer.analyze(make_stroke_data(square_outline(200, 100, 200)), config)
    assert metrics.detected_corners == 5
    assert metrics.matched_corners == 0
    assert metrics.corner_accuracy == 50
    assert metrics.shape_match == 83
    assert analyzer.calculate_score(metrics) == 82


def test_circle_against_configured_ellipse(analyzer, circle_config):
    metrics = analyzer.analyze(make_stroke_data(circle_outline(300, 200, 100)), circle_config)
    assert metrics.roundness == pytest.approx(100, abs=1e-6)
    assert metrics.closedness == 100
    assert metrics.bounds_match == 100
    assert analyzer.calculate_score(metrics) == 100


def test_circle_without_radii_falls_back_to_roundness(analyzer, circle_config):
    config = circle_config.model_copy(update={"radius_x": 0})
    square = make_stroke_data(square_outline(200, 100, 200))
    metrics = analyzer.analyze(square, config)
    assert metrics.roundness is not None
    assert metrics.roundness < 100


def test_open_circle_loses_closedness(analyzer, circle_config):
    half_circle = circle_outline(300, 200, 100)[:19]
    metrics = analyzer.analyze(make_stroke_data(half_circle), circle_config)
    assert metrics.closedness == 0


def test_too_few_points_give_empty_metrics(analyzer, square_config):
    metrics = analyzer.analyze(make_stroke_data([(0, 0), (10, 10)]), square_config)
    assert metrics == ShapeMetrics.empty()
    assert analyzer.calculate_score(metrics) == 0
