"""
Drawing Coach: local assessment engine for children's drawing exercises.

Scores line tracing, connect-the-dots, shape drawing and color-fill attempts
against authored exercise content and returns a 0-100 score with typed
metrics for feedback generation and progress tracking.
"""

from .assessment import AssessmentOrchestrator, PixelBuffer, assess_locally
from .config.loader import load_settings
from .errors import AssessmentError, ConfigError, InvalidInputError
from .system import DrawingCoach

__all__ = [
    "AssessmentError",
    "AssessmentOrchestrator",
    "ConfigError",
    "DrawingCoach",
    "InvalidInputError",
    "PixelBuffer",
    "assess_locally",
    "load_settings",
]
