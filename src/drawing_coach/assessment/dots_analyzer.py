"""Connect-the-dots scoring by hit-testing stroke samples against dot positions."""

from __future__ import annotations

import math
from typing import Dict, List

from drawing_coach.data_models import DotsConfig, DotsMetrics, StrokeData
from drawing_coach.utils.logging import get_logger

from .geometry import round_half_up

logger = get_logger(__name__)


def find_hit_order(stroke_data: StrokeData, config: DotsConfig) -> List[str]:
    """
    Ids of dots in the order they were first touched.

    Each sample marks at most one not-yet-hit dot within `dot_radius`; a hit
    dot stays hit. With `require_order`, a candidate is only accepted when it
    directly follows the last accepted dot in the configured list (the first
    hit may be any dot); out-of-order candidates are ignored, not penalised.
    """
    index_of: Dict[str, int] = {dot.id: index for index, dot in enumerate(config.dots)}
    hit: set[str] = set()
    order: List[str] = []

    for point in stroke_data.all_points():
        for dot in config.dots:
            if dot.id in hit:
                continue
            if math.hypot(point.x - dot.x, point.y - dot.y) > config.dot_radius:
                continue
            if config.require_order and order and index_of[dot.id] != index_of[order[-1]] + 1:
                continue
            hit.add(dot.id)
            order.append(dot.id)
            break
    return order


def order_accuracy(hit_order: List[str], config: DotsConfig) -> int:
    """
    Share of hits that come later in the configured list than the previous hit.

    Nothing hit scores 0; any hits without an order requirement score 100.
    """
    if not hit_order:
        return 0
    if not config.require_order:
        return 100
    index_of = {dot.id: index for index, dot in enumerate(config.dots)}
    in_order = sum(
        1
        for i, dot_id in enumerate(hit_order)
        if i == 0 or index_of[dot_id] > index_of[hit_order[i - 1]]
    )
    return round_half_up(in_order / len(hit_order) * 100)


class DotsAnalyzer:
    """Scores connect-the-dots attempts."""

    def analyze(self, stroke_data: StrokeData, config: DotsConfig) -> DotsMetrics:
        hit_order = find_hit_order(stroke_data, config)
        total = len(config.dots)
        hit_rate = len(hit_order) / total * 100 if total else 0.0

        metrics = DotsMetrics(
            dots_hit=len(hit_order),
            total_dots=total,
            order_accuracy=order_accuracy(hit_order, config),
            # Approximated from the hit rate; connecting paths are not checked.
            connection_accuracy=round_half_up(hit_rate),
            hit_order=hit_order,
        )
        logger.debug("dots.analyzed", hit_order=hit_order, total=total)
        return metrics

    def calculate_score(self, metrics: DotsMetrics) -> int:
        hit_rate = metrics.dots_hit / metrics.total_dots * 100 if metrics.total_dots else 0.0
        return round_half_up(
            hit_rate * 0.5 + metrics.order_accuracy * 0.3 + metrics.connection_accuracy * 0.2
        )
