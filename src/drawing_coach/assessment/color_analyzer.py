"""Color-fill analysis: dominant color per region, Delta-E match and coverage."""

from __future__ import annotations

from typing import Optional

import numpy as np

from drawing_coach.config.schema import ScoringConfig
from drawing_coach.data_models import Bounds, ColorConfig, ColorMetrics, ColorRegion, RegionScore, Rgb
from drawing_coach.utils.logging import get_logger

from .color_science import color_difference, delta_e_to_score
from .geometry import clamp, round_half_up
from .pixels import PixelBuffer

logger = get_logger(__name__)

OPAQUE_ALPHA = 128
# Pixels brighter than this on every channel are canvas background for color binning.
BACKGROUND_LEVEL = 240
# Slightly stricter threshold for counting a pixel as painted.
COVERAGE_BACKGROUND_LEVEL = 245


def _mean_rgb(pixels: np.ndarray) -> Rgb:
    sums = pixels[:, :3].astype(np.int64).sum(axis=0)
    count = len(pixels)
    return Rgb(
        r=round_half_up(sums[0] / count),
        g=round_half_up(sums[1] / count),
        b=round_half_up(sums[2] / count),
    )


def average_color_in_region(buffer: PixelBuffer, bounds: Bounds) -> Optional[Rgb]:
    """Mean color of the opaque pixels inside `bounds`, or None if there are none."""
    region = buffer.region(bounds)
    opaque = region[region[:, 3] >= OPAQUE_ALPHA]
    if len(opaque) == 0:
        return None
    return _mean_rgb(opaque)


def dominant_color_in_region(
    buffer: PixelBuffer, bounds: Bounds, bin_size: int = 32
) -> Optional[Rgb]:
    """
    Average color of the most populated color bin inside `bounds`.

    Pixels are binned per channel in steps of `bin_size`, skipping transparent
    and near-white background pixels. When two bins tie, the one whose first
    pixel appears earliest in row-major order wins.
    """
    region = buffer.region(bounds)
    rgb = region[:, :3].astype(np.int64)
    painted = (region[:, 3] >= OPAQUE_ALPHA) & ~np.all(rgb > BACKGROUND_LEVEL, axis=1)
    pixels = region[painted]
    if len(pixels) == 0:
        return None

    levels = 256 // bin_size
    bins = rgb[painted] // bin_size
    keys = (bins[:, 0] * levels + bins[:, 1]) * levels + bins[:, 2]
    _, first_index, inverse, counts = np.unique(
        keys, return_index=True, return_inverse=True, return_counts=True
    )
    candidates = np.flatnonzero(counts == counts.max())
    winner = candidates[np.argmin(first_index[candidates])]
    return _mean_rgb(pixels[inverse.reshape(-1) == winner])


def calculate_coverage(buffer: PixelBuffer, bounds: Bounds) -> int:
    """Percentage of pixels in `bounds` that are opaque and not near-white, whatever their hue."""
    region = buffer.region(bounds)
    if len(region) == 0:
        return 0
    rgb = region[:, :3]
    filled = (region[:, 3] >= OPAQUE_ALPHA) & ~np.all(rgb > COVERAGE_BACKGROUND_LEVEL, axis=1)
    return round_half_up(int(filled.sum()) / len(region) * 100)


class ColorAnalyzer:
    """Scores region fills against target colors using CIEDE2000."""

    def __init__(self, config: ScoringConfig | None = None):
        self.config = config or ScoringConfig()

    def analyze_region(
        self, buffer: PixelBuffer, region: ColorRegion, tolerance: float
    ) -> RegionScore:
        user_color = dominant_color_in_region(buffer, region.bounds, self.config.color_bin_size)
        coverage = calculate_coverage(buffer, region.bounds)
        if user_color is None:
            return RegionScore(region_id=region.id, score=0, coverage=coverage)
        delta_e = color_difference(user_color, region.target_color)
        return RegionScore(
            region_id=region.id,
            score=delta_e_to_score(delta_e, tolerance),
            coverage=coverage,
            delta_e=round(delta_e, 2),
            user_color=user_color,
        )

    def analyze(self, buffer: PixelBuffer, config: ColorConfig) -> ColorMetrics:
        if not config.regions:
            return ColorMetrics.empty()

        region_scores = [
            self.analyze_region(buffer, region, config.tolerance) for region in config.regions
        ]
        # Unweighted by region area.
        color_accuracy = sum(r.score for r in region_scores) / len(region_scores)
        coverage = sum(r.coverage for r in region_scores) / len(region_scores)

        metrics = ColorMetrics(
            color_accuracy=round_half_up(color_accuracy),
            coverage=round_half_up(coverage),
            region_scores=region_scores,
        )
        logger.debug(
            "color.analyzed",
            regions=len(region_scores),
            color_accuracy=metrics.color_accuracy,
            coverage=metrics.coverage,
        )
        return metrics

    def calculate_score(self, metrics: ColorMetrics) -> int:
        return round_half_up(clamp(metrics.color_accuracy * 0.7 + metrics.coverage * 0.3))
