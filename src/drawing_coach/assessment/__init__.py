from .color_analyzer import ColorAnalyzer
from .color_science import color_difference, delta_e_2000, delta_e_to_score, rgb_to_lab
from .dots_analyzer import DotsAnalyzer
from .dtw import DtwResult, dtw
from .feedback import fallback_feedback, fallback_help_tips
from .orchestrator import AssessmentOrchestrator, assess_locally
from .pixels import PixelBuffer
from .shape_analyzer import ShapeAnalyzer
from .stroke_analyzer import StrokeAnalyzer, resample_points
from .svg_path import parse_path

__all__ = [
    "AssessmentOrchestrator",
    "ColorAnalyzer",
    "DotsAnalyzer",
    "DtwResult",
    "PixelBuffer",
    "ShapeAnalyzer",
    "StrokeAnalyzer",
    "assess_locally",
    "color_difference",
    "delta_e_2000",
    "delta_e_to_score",
    "dtw",
    "fallback_feedback",
    "fallback_help_tips",
    "parse_path",
    "resample_points",
    "rgb_to_lab",
]
