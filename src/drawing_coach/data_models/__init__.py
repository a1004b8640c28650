from .assessment import (
    AssessmentMetrics,
    ColorMetrics,
    DotsMetrics,
    FeedbackRequest,
    FeedbackResponse,
    FullAssessment,
    LineMetrics,
    LocalAssessment,
    RegionScore,
    ShapeMetrics,
)
from .exercise import (
    ColorConfig,
    ColorRegion,
    Dot,
    DotsConfig,
    Exercise,
    ExerciseConfig,
    FeedbackHints,
    LineConfig,
    ShapeConfig,
    parse_exercise,
    parse_exercise_config,
)
from .geometry import Bounds, Point, Rgb
from .strokes import Stroke, StrokeData, StrokePoint, parse_stroke_data

__all__ = [
    "AssessmentMetrics",
    "Bounds",
    "ColorConfig",
    "ColorMetrics",
    "ColorRegion",
    "Dot",
    "DotsConfig",
    "DotsMetrics",
    "Exercise",
    "ExerciseConfig",
    "FeedbackHints",
    "FeedbackRequest",
    "FeedbackResponse",
    "FullAssessment",
    "LineConfig",
    "LineMetrics",
    "LocalAssessment",
    "Point",
    "RegionScore",
    "Rgb",
    "ShapeConfig",
    "ShapeMetrics",
    "Stroke",
    "StrokeData",
    "StrokePoint",
    "parse_exercise",
    "parse_exercise_config",
    "parse_stroke_data",
]
