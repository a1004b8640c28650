from __future__ import annotations

from typing import Annotated, Any, List, Literal, Mapping, Optional, Union

from pydantic import Field, TypeAdapter, ValidationError, field_validator

from drawing_coach.errors import ConfigError

from .geometry import Bounds, ContentModel, Point, Rgb

Unit = Literal["dot", "line", "shape", "color"]
ShapeType = Literal["triangle", "square", "diamond", "rectangle", "circle", "oval"]
POLYGON_SHAPES = ("triangle", "square", "diamond", "rectangle")
ROUND_SHAPES = ("circle", "oval")


class ExerciseConfigBase(ContentModel):
    canvas_width: int = Field(600, gt=0)
    canvas_height: int = Field(400, gt=0)
    background_color: Optional[str] = None  # CSS color, white when unset


class LineConfig(ExerciseConfigBase):
    """Trace a target path given as SVG path data."""

    type: Literal["line"] = "line"
    line_type: Literal["straight", "curved", "wavy", "zigzag", "broken", "spiral"] = "straight"
    target_path: str
    guide_stroke_width: float = Field(3.0, gt=0)
    tolerance: float = Field(gt=0, description="Allowed deviation in pixels.")
    start_point: Point
    end_point: Point
    guide_style: Optional[Literal["dashed", "dotted", "solid"]] = None
    multi_line: bool = False


class Dot(ContentModel):
    id: str
    x: float
    y: float
    label: Optional[str] = None
    is_start: bool = False
    is_end: bool = False


class DotsConfig(ExerciseConfigBase):
    """Connect the configured dots, optionally in list order."""

    type: Literal["dots"] = "dots"
    dots: List[Dot] = Field(default_factory=list)
    require_order: bool = True
    dot_radius: float = Field(gt=0)
    resulting_shape: Optional[str] = None
    background_image: Optional[str] = None

    @field_validator("dots")
    def dot_ids_are_unique(cls, value: List[Dot]) -> List[Dot]:
        seen: set[str] = set()
        for dot in value:
            if dot.id in seen:
                raise ValueError(f"Duplicate dot id: {dot.id}")
            seen.add(dot.id)
        return value


class ShapeConfig(ExerciseConfigBase):
    """Draw a polygon or ellipse inside a target bounding box."""

    type: Literal["shape"] = "shape"
    shape_type: ShapeType
    target_bounds: Bounds
    expected_corners: Optional[List[Point]] = None
    center: Optional[Point] = None
    radius_x: Optional[float] = Field(None, ge=0)
    radius_y: Optional[float] = Field(None, ge=0)
    tolerance: float = Field(gt=0)
    show_guide: bool = True


class ColorRegion(ContentModel):
    id: str
    name: str = ""
    bounds: Bounds
    target_color: Rgb
    outline_path: Optional[str] = None


class ColorConfig(ExerciseConfigBase):
    """Fill regions of the canvas with target colors."""

    type: Literal["color"] = "color"
    color_type: Literal["fill", "match", "wheel"] = "fill"
    regions: List[ColorRegion] = Field(default_factory=list)
    tolerance: float = Field(gt=0, description="Delta-E at which a color scores zero.")


ExerciseConfig = Annotated[
    Union[LineConfig, DotsConfig, ShapeConfig, ColorConfig],
    Field(discriminator="type"),
]

_config_adapter: TypeAdapter[ExerciseConfig] = TypeAdapter(ExerciseConfig)


class FeedbackHints(ContentModel):
    """Authoring hints handed to feedback generation."""

    skill_name: str = "drawing"
    common_mistakes: List[str] = Field(default_factory=list)
    success_criteria: str = ""
    encouragement_phrases: Optional[List[str]] = None


class Exercise(ContentModel):
    """A single authored exercise with its scoring configuration and pass threshold."""

    id: str
    unit: Unit
    lesson_id: str = ""
    title: str = ""
    instructions: str = ""
    difficulty: int = Field(1, ge=1, le=3)
    config: ExerciseConfig
    passing_score: float = Field(70, ge=0, le=100)
    feedback_hints: FeedbackHints = Field(default_factory=FeedbackHints)
    order: int = 0


def parse_exercise_config(data: Mapping[str, Any]) -> ExerciseConfig:
    """Validate a tagged exercise config, raising `ConfigError` for unknown tags or bad fields."""
    try:
        return _config_adapter.validate_python(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid exercise config: {exc}") from exc


def parse_exercise(data: Mapping[str, Any]) -> Exercise:
    """Validate an authored exercise record."""
    try:
        return Exercise.model_validate(data)
    except ValidationError as exc:
        exercise_id = data.get("id", "<unknown>") if isinstance(data, Mapping) else "<unknown>"
        raise ConfigError(f"Invalid exercise {exercise_id!r}: {exc}") from exc
