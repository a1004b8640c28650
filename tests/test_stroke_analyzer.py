"""Tests for line-tracing metrics and scores."""

from __future__ import annotations

import math

import pytest

from conftest import make_stroke_data, points
from drawing_coach.assessment.stroke_analyzer import (
    StrokeAnalyzer,
    calculate_completeness,
    calculate_smoothness,
    path_accuracy,
)
from drawing_coach.assessment.svg_path import parse_path
from drawing_coach.data_models import LineConfig, LineMetrics, Point


def horizontal_line(y: float, count: int = 50):
    return [(100 + i * 400 / (count - 1), y) for i in range(count)]


@pytest.fixture
def analyzer():
    return StrokeAnalyzer()


def test_tracing_the_target_scores_high(analyzer, line_config):
    """A straight stroke drawn on the target line scores near-perfect."""
    stroke_data = make_stroke_data(horizontal_line(200))
    metrics = analyzer.analyze(stroke_data, line_config)
    assert metrics.path_accuracy >= 90
    assert metrics.completeness == 100
    assert metrics.smoothness >= 99
    assert metrics.avg_deviation == pytest.approx(0.0, abs=0.1)
    assert analyzer.calculate_score(metrics) >= 85


def test_offset_line_loses_accuracy_and_completeness(analyzer, line_config):
    """A parallel stroke 30px away is 1.5x tolerance off and misses both target points."""
    metrics = analyzer.analyze(make_stroke_data(horizontal_line(230)), line_config)
    assert metrics.avg_deviation == pytest.approx(30.0)
    assert metrics.path_accuracy == 33
    assert metrics.completeness == 0
    assert metrics.smoothness == 100
    assert analyzer.calculate_score(metrics) == 42


def test_empty_attempt_scores_zero(analyzer, line_config):
    metrics = analyzer.analyze(make_stroke_data(), line_config)
    assert metrics == LineMetrics.empty()
    assert math.isinf(metrics.avg_deviation)
    assert analyzer.calculate_score(metrics) == 0


def test_empty_target_path_scores_zero(analyzer):
    config = LineConfig(
        target_path="",
        tolerance=20,
        start_point=Point(x=0, y=0),
        end_point=Point(x=1, y=1),
    )
    metrics = analyzer.analyze(make_stroke_data(horizontal_line(200)), config)
    assert metrics.path_accuracy == 0
    assert metrics.completeness == 0


def test_tracing_a_curve(analyzer):
    """Drawing exactly along the sampled curve is fully accurate."""
    config = LineConfig(
        target_path="M 100 300 Q 300 50 500 300",
        tolerance=25,
        start_point=Point(x=100, y=300),
        end_point=Point(x=500, y=300),
    )
    curve = [(p.x, p.y) for p in parse_path(config.target_path)]
    metrics = analyzer.analyze(make_stroke_data(curve), config)
    assert metrics.path_accuracy == 100
    assert metrics.completeness == 100


def test_multi_stroke_attempt_is_compared_as_one_path(analyzer, line_config):
    """Two halves of the line drawn as separate strokes still cover the target."""
    line = horizontal_line(200)
    metrics = analyzer.analyze(make_stroke_data(line[:25], line[25:]), line_config)
    assert metrics.path_accuracy >= 90
    assert metrics.completeness == 100


def test_smoothness_is_averaged_over_strokes(analyzer, line_config):
    """Each stroke is scored on its own; a straight stroke (100) and a jagged one (0) average to 50."""
    stroke_data = make_stroke_data(horizontal_line(200), [(0, 0), (10, 0), (20, 0), (20, 10)])
    metrics = analyzer.analyze(stroke_data, line_config)
    assert metrics.smoothness == 50


def test_path_accuracy_window():
    """Full marks to half the tolerance, zero from twice the tolerance, linear between."""
    assert path_accuracy(0, 20) == 100
    assert path_accuracy(10, 20) == 100
    assert path_accuracy(25, 20) == pytest.approx(50)
    assert path_accuracy(40, 20) == 0
    assert path_accuracy(100, 20) == 0
    assert path_accuracy(math.inf, 20) == 0


def test_smoothness_of_straight_and_short_strokes():
    assert calculate_smoothness(points([(0, 0), (10, 0), (20, 0), (30, 0)])) == 100
    assert calculate_smoothness(points([(0, 0), (10, 0)])) == 100


def test_constant_turning_counts_as_smooth():
    """Smoothness measures the spread of turn angles, not their size."""
    staircase = points([(0, 0), (10, 0), (10, 10), (20, 10), (20, 20)])
    assert calculate_smoothness(staircase) == 100


def test_jagged_stroke_scores_zero_smoothness():
    jagged = points([(0, 0), (10, 0), (20, 0), (20, 10)])
    assert calculate_smoothness(jagged) == 0


def test_completeness_counts_target_points_near_the_user():
    target = points([(0, 0), (100, 0)])
    assert calculate_completeness(points([(1, 1)]), target, 5) == 50
    assert calculate_completeness(points([(1, 1), (99, 0)]), target, 5) == 100
    assert calculate_completeness(points([(50, 50)]), target, 5) == 0
