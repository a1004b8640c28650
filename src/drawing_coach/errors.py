from __future__ import annotations


class AssessmentError(Exception):
    """Base class for errors raised by the assessment engine."""


class ConfigError(AssessmentError, ValueError):
    """Exercise content or settings that cannot be interpreted."""


class InvalidInputError(AssessmentError, ValueError):
    """Captured drawing input that is corrupt (non-finite numbers, bad raster sizes)."""
