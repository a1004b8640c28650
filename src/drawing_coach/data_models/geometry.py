from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ContentModel(BaseModel):
    """Immutable base for authored content and captured input; rejects NaN and infinities."""

    model_config = ConfigDict(
        frozen=True,
        allow_inf_nan=False,
        populate_by_name=True,
        alias_generator=to_camel,
    )


class Point(ContentModel):
    """Plane coordinate in the exercise canvas space."""

    x: float
    y: float


class Bounds(ContentModel):
    """Axis-aligned rectangle given by its top-left corner and size."""

    x: float
    y: float
    width: float = Field(ge=0)
    height: float = Field(ge=0)


class Rgb(ContentModel):
    """sRGB color with 0-255 channels."""

    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)
