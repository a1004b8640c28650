"""Shared fixtures and builders for assessment tests."""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import pytest

from drawing_coach.data_models import (
    Bounds,
    ColorConfig,
    ColorRegion,
    Dot,
    DotsConfig,
    Exercise,
    LineConfig,
    Point,
    Rgb,
    ShapeConfig,
    Stroke,
    StrokeData,
    StrokePoint,
)
from drawing_coach.utils.logging import configure_logging

Coords = Sequence[Tuple[float, float]]


@pytest.fixture(autouse=True, scope="session")
def quiet_logging():
    """Keep analyzer debug events out of test output."""
    configure_logging("WARNING")


def make_stroke(coords: Coords, stroke_id: str = "s1") -> Stroke:
    return Stroke(
        id=stroke_id,
        points=[
            StrokePoint(x=x, y=y, pressure=0.5, timestamp_ms=index * 16.0)
            for index, (x, y) in enumerate(coords)
        ],
    )


def make_stroke_data(*strokes: Coords) -> StrokeData:
    return StrokeData(
        strokes=[make_stroke(coords, f"s{index}") for index, coords in enumerate(strokes)],
        start_time=0.0,
        end_time=1000.0,
    )


def points(coords: Iterable[Tuple[float, float]]) -> List[Point]:
    return [Point(x=x, y=y) for x, y in coords]


def square_outline(x: float, y: float, size: float, step: float = 10.0) -> List[Tuple[float, float]]:
    """Clockwise square starting and ending at its top-left corner, sampled every `step`."""
    corners = [(x, y), (x + size, y), (x + size, y + size), (x, y + size), (x, y)]
    outline: List[Tuple[float, float]] = []
    for (x0, y0), (x1, y1) in zip(corners, corners[1:]):
        count = int(round(max(abs(x1 - x0), abs(y1 - y0)) / step))
        for i in range(count):
            outline.append((x0 + (x1 - x0) * i / count, y0 + (y1 - y0) * i / count))
    outline.append((x, y))
    return outline


@pytest.fixture
def line_config():
    """Horizontal line tracing config from the kindergarten catalogue."""
    return LineConfig(
        target_path="M 100 200 L 500 200",
        tolerance=20,
        start_point=Point(x=100, y=200),
        end_point=Point(x=500, y=200),
    )


@pytest.fixture
def line_exercise(line_config):
    return Exercise(id="k-line-straight-1", unit="line", title="Straight Line", config=line_config, passing_score=70)


@pytest.fixture
def dots_config():
    """Three dots in a row that must be connected in order."""
    return DotsConfig(
        dots=[
            Dot(id="1", x=100, y=100),
            Dot(id="2", x=200, y=100),
            Dot(id="3", x=300, y=100),
        ],
        require_order=True,
        dot_radius=10,
    )


@pytest.fixture
def square_config():
    return ShapeConfig(
        shape_type="square",
        target_bounds=Bounds(x=200, y=100, width=200, height=200),
        expected_corners=points([(200, 100), (400, 100), (400, 300), (200, 300)]),
        tolerance=10,
    )


@pytest.fixture
def red_region_config():
    """Single 10x10 region at (10, 10) that should be filled red."""
    return ColorConfig(
        regions=[
            ColorRegion(
                id="apple",
                name="apple",
                bounds=Bounds(x=10, y=10, width=10, height=10),
                target_color=Rgb(r=255, g=0, b=0),
            )
        ],
        tolerance=30,
    )


@pytest.fixture
def color_exercise(red_region_config):
    return Exercise(id="k-color-apple-1", unit="color", title="Red Apple", config=red_region_config, passing_score=60)
