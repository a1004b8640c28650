from __future__ import annotations

import math
from typing import Annotated, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .exercise import FeedbackHints, Unit
from .geometry import Rgb


class ResultModel(BaseModel):
    """Immutable base for engine output. Infinity is allowed (no comparison possible)."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, alias_generator=to_camel)


class LineMetrics(ResultModel):
    kind: Literal["line"] = "line"
    path_accuracy: int = 0
    smoothness: int = 0
    completeness: int = 0
    avg_deviation: float = math.inf  # pixels

    @classmethod
    def empty(cls) -> "LineMetrics":
        return cls()


class ShapeMetrics(ResultModel):
    kind: Literal["shape"] = "shape"
    shape_match: int = 0
    aspect_ratio: int = 0
    closedness: int = 0
    bounds_match: int = 0
    corner_accuracy: Optional[float] = None  # polygons with expected corners
    roundness: Optional[float] = None  # circles and ovals
    detected_corners: int = 0
    matched_corners: int = 0

    @classmethod
    def empty(cls) -> "ShapeMetrics":
        return cls()


class DotsMetrics(ResultModel):
    kind: Literal["dots"] = "dots"
    dots_hit: int = 0
    total_dots: int = 0
    order_accuracy: int = 0
    connection_accuracy: int = 0
    hit_order: List[str] = Field(default_factory=list)


class RegionScore(ResultModel):
    """Per-region color result."""

    region_id: str
    score: int
    coverage: int = 0
    delta_e: Optional[float] = None
    user_color: Optional[Rgb] = None


class ColorMetrics(ResultModel):
    kind: Literal["color"] = "color"
    color_accuracy: int = 0
    coverage: int = 0
    region_scores: List[RegionScore] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "ColorMetrics":
        return cls()


AssessmentMetrics = Annotated[
    Union[LineMetrics, ShapeMetrics, DotsMetrics, ColorMetrics],
    Field(discriminator="kind"),
]


class LocalAssessment(ResultModel):
    """Score, typed metrics and pass flag for one submitted attempt."""

    score: int = Field(ge=0, le=100)
    metrics: AssessmentMetrics
    passed: bool


class FeedbackRequest(ResultModel):
    """Everything a natural-language feedback generator needs about an attempt."""

    exercise_id: str
    exercise_type: Unit
    exercise_title: str
    local_score: int
    local_metrics: AssessmentMetrics
    attempt_number: int
    feedback_hints: FeedbackHints
    grade_level: str = "kindergarten"


class FeedbackResponse(ResultModel):
    encouragement: str
    specific_praise: List[str] = Field(default_factory=list)
    improvement_tips: List[str] = Field(default_factory=list)
    next_step_hint: Optional[str] = None


class FullAssessment(ResultModel):
    """Local assessment combined with feedback, as handed to progress persistence."""

    score: int
    metrics: AssessmentMetrics
    passed: bool
    feedback: FeedbackResponse
    attempt_number: int
    timestamp: float  # epoch milliseconds
