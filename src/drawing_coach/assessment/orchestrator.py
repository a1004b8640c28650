from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Optional

from structlog.contextvars import bound_contextvars

from drawing_coach.config.schema import ScoringConfig
from drawing_coach.data_models import (
    ColorConfig,
    ColorMetrics,
    DotsConfig,
    Exercise,
    FeedbackRequest,
    FeedbackResponse,
    FullAssessment,
    LineConfig,
    LocalAssessment,
    ShapeConfig,
    StrokeData,
)
from drawing_coach.errors import ConfigError
from drawing_coach.utils.logging import get_logger

from .color_analyzer import ColorAnalyzer
from .dots_analyzer import DotsAnalyzer
from .feedback import fallback_feedback
from .pixels import PixelBuffer
from .shape_analyzer import ShapeAnalyzer
from .stroke_analyzer import StrokeAnalyzer

logger = get_logger(__name__)

FeedbackProvider = Callable[[FeedbackRequest], FeedbackResponse]


def assess_locally(
    exercise: Exercise,
    stroke_data: StrokeData,
    snapshot: Optional[PixelBuffer] = None,
    scoring: Optional[ScoringConfig] = None,
) -> LocalAssessment:
    """
    Route an attempt to the analyzer for its exercise type and wrap the result.

    A color exercise without a raster snapshot scores 0 with empty metrics and
    does not pass. An unrecognised config type raises `ConfigError`.
    """
    scoring = scoring or ScoringConfig()
    config = exercise.config

    if isinstance(config, LineConfig):
        analyzer = StrokeAnalyzer(scoring)
        line_metrics = analyzer.analyze(stroke_data, config)
        score = analyzer.calculate_score(line_metrics)
        metrics = line_metrics
    elif isinstance(config, DotsConfig):
        dots = DotsAnalyzer()
        dots_metrics = dots.analyze(stroke_data, config)
        score = dots.calculate_score(dots_metrics)
        metrics = dots_metrics
    elif isinstance(config, ShapeConfig):
        shapes = ShapeAnalyzer(scoring)
        shape_metrics = shapes.analyze(stroke_data, config)
        score = shapes.calculate_score(shape_metrics)
        metrics = shape_metrics
    elif isinstance(config, ColorConfig):
        if snapshot is None:
            logger.info("assessment.missing_snapshot", exercise_id=exercise.id)
            return LocalAssessment(score=0, metrics=ColorMetrics.empty(), passed=False)
        colors = ColorAnalyzer(scoring)
        color_metrics = colors.analyze(snapshot, config)
        score = colors.calculate_score(color_metrics)
        metrics = color_metrics
    else:
        raise ConfigError(f"Unsupported exercise config type: {type(config).__name__}")

    return LocalAssessment(
        score=score, metrics=metrics, passed=score >= exercise.passing_score
    )


class AssessmentOrchestrator:
    """
    Counts attempts per exercise, runs the local assessment and attaches feedback.

    The attempt counter is the only mutable state and is guarded by a lock so
    one orchestrator can serve several UI contexts at once. Feedback comes
    from the optional `feedback_provider` (typically an LLM client living
    outside this package); when it is missing or raises, rule-based feedback
    is used so every attempt still gets a response.
    """

    def __init__(
        self,
        scoring: Optional[ScoringConfig] = None,
        feedback_provider: Optional[FeedbackProvider] = None,
        grade_level: str = "kindergarten",
    ):
        self.scoring = scoring or ScoringConfig()
        self.feedback_provider = feedback_provider
        self.grade_level = grade_level
        self._attempt_counts: Dict[str, int] = {}
        self._lock = threading.Lock()

    def _next_attempt(self, exercise_id: str) -> int:
        with self._lock:
            count = self._attempt_counts.get(exercise_id, 0) + 1
            self._attempt_counts[exercise_id] = count
        return count

    def assess(
        self,
        exercise: Exercise,
        stroke_data: StrokeData,
        snapshot: Optional[PixelBuffer] = None,
    ) -> FullAssessment:
        attempt = self._next_attempt(exercise.id)
        with bound_contextvars(exercise_id=exercise.id, attempt=attempt):
            local = assess_locally(exercise, stroke_data, snapshot, self.scoring)
            logger.info("assessment.completed", score=local.score, passed=local.passed)
            feedback = self._feedback(exercise, local, attempt)
        return FullAssessment(
            score=local.score,
            metrics=local.metrics,
            passed=local.passed,
            feedback=feedback,
            attempt_number=attempt,
            timestamp=time.time() * 1000,
        )

    def _feedback(
        self, exercise: Exercise, local: LocalAssessment, attempt: int
    ) -> FeedbackResponse:
        if self.feedback_provider is None:
            return fallback_feedback(local.score, exercise.feedback_hints)
        request = FeedbackRequest(
            exercise_id=exercise.id,
            exercise_type=exercise.unit,
            exercise_title=exercise.title,
            local_score=local.score,
            local_metrics=local.metrics,
            attempt_number=attempt,
            feedback_hints=exercise.feedback_hints,
            grade_level=self.grade_level,
        )
        try:
            return self.feedback_provider(request)
        except Exception as exc:
            logger.warning("assessment.feedback_failed", error=str(exc))
            return fallback_feedback(local.score, exercise.feedback_hints)

    def get_attempt_count(self, exercise_id: str) -> int:
        with self._lock:
            return self._attempt_counts.get(exercise_id, 0)

    def reset_attempt_count(self, exercise_id: str) -> None:
        with self._lock:
            self._attempt_counts.pop(exercise_id, None)

    def reset_all_attempt_counts(self) -> None:
        with self._lock:
            self._attempt_counts.clear()
