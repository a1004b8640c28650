from .loader import load_settings
from .schema import LoggingConfig, PathsConfig, ScoringConfig, Settings

__all__ = ["load_settings", "LoggingConfig", "PathsConfig", "ScoringConfig", "Settings"]
