from __future__ import annotations

from typing import Any, List, Mapping

from pydantic import AliasChoices, Field, ValidationError

from drawing_coach.errors import InvalidInputError

from .geometry import ContentModel, Point, Rgb


class StrokePoint(Point):
    """Single pointer sample captured while drawing."""

    pressure: float = Field(0.5, ge=0)
    timestamp_ms: float = Field(
        0.0, validation_alias=AliasChoices("timestamp_ms", "timestampMs", "timestamp")
    )


class Stroke(ContentModel):
    """One pointer-down to pointer-up gesture."""

    id: str
    points: List[StrokePoint] = Field(default_factory=list)
    color: Rgb = Field(default_factory=lambda: Rgb(r=0, g=0, b=0))
    size: float = Field(3.0, gt=0)


class StrokeData(ContentModel):
    """All strokes of one exercise attempt in draw order."""

    strokes: List[Stroke] = Field(default_factory=list)
    start_time: float = 0.0
    end_time: float = 0.0

    def all_points(self) -> List[Point]:
        """Flatten every stroke into one sequence of plain points, keeping draw order."""
        return [
            Point(x=sample.x, y=sample.y)
            for stroke in self.strokes
            for sample in stroke.points
        ]

    @property
    def point_count(self) -> int:
        return sum(len(stroke.points) for stroke in self.strokes)


def parse_stroke_data(data: Mapping[str, Any]) -> StrokeData:
    """Validate captured stroke data, surfacing corrupt samples as `InvalidInputError`."""
    try:
        return StrokeData.model_validate(data)
    except ValidationError as exc:
        raise InvalidInputError(f"Invalid stroke data: {exc}") from exc
