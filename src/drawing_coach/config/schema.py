from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class ScoringConfig(BaseModel):
    """Numeric tuning for the local analyzers; defaults match the authored exercise tolerances."""

    bezier_segments: int = Field(10, ge=1, description="Line segments per sampled Bezier curve.")
    min_resample_points: int = Field(50, ge=2, description="Lower bound on DTW sample count.")
    corner_angle_degrees: float = Field(45.0, gt=0, lt=180)
    corner_merge_distance: float = Field(20.0, ge=0)
    color_bin_size: int = Field(32, ge=1, le=256)

    @field_validator("color_bin_size")
    def bin_size_divides_channel(cls, value: int) -> int:
        """Reject bin sizes that would leave a ragged last bucket."""
        if 256 % value != 0:
            raise ValueError("color_bin_size must divide 256")
        return value


class PathsConfig(BaseModel):
    """Filesystem locations for authored exercise content."""

    exercises_file: Path = Field(Path("data/exercises/kindergarten.yaml"))


class LoggingConfig(BaseModel):
    """Controls for engine logging output and format."""

    level: str = Field("INFO")
    json_output: bool = False


class Settings(BaseModel):
    """Top-level project configuration aggregating all sub-settings."""

    project_name: str = Field("Drawing Coach")
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
