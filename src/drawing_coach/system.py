from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional

from drawing_coach.assessment import (
    AssessmentOrchestrator,
    PixelBuffer,
    assess_locally,
    fallback_help_tips,
)
from drawing_coach.assessment.orchestrator import FeedbackProvider
from drawing_coach.config import Settings, load_settings
from drawing_coach.content import index_exercises, load_exercises
from drawing_coach.data_models import Exercise, FullAssessment, LocalAssessment, StrokeData
from drawing_coach.errors import ConfigError
from drawing_coach.utils.logging import configure_logging, get_logger

logger = get_logger(__name__)


class DrawingCoach:
    """
    Facade wiring settings, logging, exercise content and the orchestrator.

    Hosts (a drawing UI, a grading service, the CLI) build one coach from
    configuration and call `assess` per submitted attempt. Scoring itself is
    delegated to the pure analyzers in `drawing_coach.assessment`; the coach
    only holds the attempt counter and the exercise catalogue.

    Attributes
    ----------
    settings : Settings
        Validated configuration, usually from `config/default.yaml`.
    orchestrator : AssessmentOrchestrator
        Attempt counter and feedback wiring around `assess_locally`.
    exercises : Dict[str, Exercise]
        Catalogue keyed by exercise id; empty until `load_catalogue` runs.
    """

    def __init__(
        self,
        settings: Settings,
        feedback_provider: Optional[FeedbackProvider] = None,
    ):
        self.settings = settings
        configure_logging(settings.logging.level, settings.logging.json_output)
        self.orchestrator = AssessmentOrchestrator(
            scoring=settings.scoring, feedback_provider=feedback_provider
        )
        self.exercises: Dict[str, Exercise] = {}

    @classmethod
    def from_config(
        cls,
        config_path: str | Path | None = None,
        feedback_provider: Optional[FeedbackProvider] = None,
    ) -> "DrawingCoach":
        """Load settings (see `load_settings`) and build a coach from them."""
        return cls(load_settings(config_path), feedback_provider=feedback_provider)

    def load_catalogue(self, path: Path | None = None) -> Dict[str, Exercise]:
        """Replace the exercise catalogue with the contents of `path` (default from settings)."""
        source = path or self.settings.paths.exercises_file
        self.exercises = index_exercises(load_exercises(source))
        logger.info("catalogue.loaded", path=str(source), exercises=len(self.exercises))
        return self.exercises

    def get_exercise(self, exercise_id: str) -> Exercise:
        try:
            return self.exercises[exercise_id]
        except KeyError as exc:
            raise ConfigError(f"Unknown exercise id: {exercise_id}") from exc

    def assess(
        self,
        exercise: Exercise | str,
        stroke_data: StrokeData,
        snapshot: Optional[PixelBuffer] = None,
    ) -> FullAssessment:
        """Score an attempt and attach feedback; `exercise` may be an id from the catalogue."""
        if isinstance(exercise, str):
            exercise = self.get_exercise(exercise)
        return self.orchestrator.assess(exercise, stroke_data, snapshot)

    def assess_locally(
        self,
        exercise: Exercise,
        stroke_data: StrokeData,
        snapshot: Optional[PixelBuffer] = None,
    ) -> LocalAssessment:
        """Score without counting an attempt or generating feedback."""
        return assess_locally(exercise, stroke_data, snapshot, self.settings.scoring)

    def help_tips(self, exercise: Exercise | str) -> Dict[str, Any]:
        """Tips shown when a learner asks for help before submitting."""
        if isinstance(exercise, str):
            exercise = self.get_exercise(exercise)
        return fallback_help_tips(exercise.unit, exercise.feedback_hints)
