"""Tests for sampling SVG path data into points."""

from __future__ import annotations

import pytest

from drawing_coach.assessment.svg_path import parse_path


def coords(path_data: str, **kwargs):
    return [(p.x, p.y) for p in parse_path(path_data, **kwargs)]


def test_straight_line():
    """A move and a line give exactly their two endpoints."""
    assert coords("M 0 0 L 10 0") == [(0.0, 0.0), (10.0, 0.0)]


def test_quadratic_curve_is_sampled_into_ten_segments():
    """A quadratic curve contributes ten points after the current point."""
    result = coords("M 0 0 Q 5 10 10 0")
    assert len(result) == 11
    assert result[0] == (0.0, 0.0)
    assert result[-1] == (10.0, 0.0)
    assert result[5] == pytest.approx((5.0, 5.0))


def test_cubic_curve_midpoint():
    """The cubic midpoint sits at the weighted average of its control points."""
    result = coords("M 0 0 C 0 10 10 10 10 0")
    assert len(result) == 11
    assert result[-1] == (10.0, 0.0)
    assert result[5] == pytest.approx((5.0, 7.5))


def test_segment_count_is_configurable():
    assert len(parse_path("M 0 0 Q 5 10 10 0", segments=4)) == 5


def test_relative_commands_and_close():
    """Relative commands move from the current point and z returns to the subpath start."""
    result = coords("m 10 10 l 5 0 v 5 h -5 z")
    assert result == [(10.0, 10.0), (15.0, 10.0), (15.0, 15.0), (10.0, 15.0), (10.0, 10.0)]


def test_close_does_not_repeat_start_when_already_there():
    assert coords("M 0 0 L 10 0 L 0 0 Z") == [(0.0, 0.0), (10.0, 0.0), (0.0, 0.0)]


def test_close_uses_latest_subpath_start():
    result = coords("M 0 0 L 10 0 M 50 50 L 60 50 Z")
    assert result[-1] == (50.0, 50.0)


def test_comma_separated_compact_arguments():
    assert coords("M0,0L10,5") == [(0.0, 0.0), (10.0, 5.0)]


def test_malformed_command_is_skipped():
    """A line with a missing coordinate is ignored instead of raising."""
    assert coords("M 0 0 L 10 X L 20 0") == [(0.0, 0.0), (20.0, 0.0)]


def test_unsupported_arc_is_skipped():
    assert coords("M 0 0 A 5 5 0 0 1 10 0 L 20 0") == [(0.0, 0.0), (20.0, 0.0)]


def test_empty_path():
    assert parse_path("") == []
