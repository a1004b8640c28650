"""Dynamic time warping between two point sequences."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

import numpy as np

from drawing_coach.data_models import Point


@dataclass(frozen=True)
class DtwResult:
    """Cumulative alignment cost and the index pairs of the optimal warping path."""

    distance: float
    path: List[Tuple[int, int]] = field(default_factory=list)


def pairwise_distances(seq_a: Sequence[Point], seq_b: Sequence[Point]) -> np.ndarray:
    """Euclidean distance matrix of shape (len(seq_a), len(seq_b))."""
    a = np.array([(p.x, p.y) for p in seq_a], dtype=float).reshape(-1, 2)
    b = np.array([(p.x, p.y) for p in seq_b], dtype=float).reshape(-1, 2)
    dx = a[:, None, 0] - b[None, :, 0]
    dy = a[:, None, 1] - b[None, :, 1]
    return np.sqrt(dx * dx + dy * dy)


def dtw(seq_a: Sequence[Point], seq_b: Sequence[Point]) -> DtwResult:
    """
    Align two sequences with classic O(n*m) dynamic time warping.

    The first row and column of the cost matrix are running sums; every other
    cell adds its local distance to the cheapest of its three predecessors.
    Backtracking from the last cell prefers the diagonal, then the cell above
    (i-1), then the cell to the left (j-1) when costs tie. An empty sequence
    yields an infinite distance and an empty path.
    """
    n = len(seq_a)
    m = len(seq_b)
    if n == 0 or m == 0:
        return DtwResult(distance=math.inf, path=[])

    local = pairwise_distances(seq_a, seq_b).tolist()
    cost = [[math.inf] * m for _ in range(n)]

    cost[0][0] = local[0][0]
    for i in range(1, n):
        cost[i][0] = cost[i - 1][0] + local[i][0]
    for j in range(1, m):
        cost[0][j] = cost[0][j - 1] + local[0][j]

    for i in range(1, n):
        row, prev_row, local_row = cost[i], cost[i - 1], local[i]
        for j in range(1, m):
            row[j] = local_row[j] + min(prev_row[j], row[j - 1], prev_row[j - 1])

    i, j = n - 1, m - 1
    path: List[Tuple[int, int]] = [(i, j)]
    while i > 0 or j > 0:
        if i == 0:
            j -= 1
        elif j == 0:
            i -= 1
        else:
            up = cost[i - 1][j]
            left = cost[i][j - 1]
            diagonal = cost[i - 1][j - 1]
            best = min(up, left, diagonal)
            if diagonal == best:
                i -= 1
                j -= 1
            elif up == best:
                i -= 1
            else:
                j -= 1
        path.append((i, j))

    path.reverse()
    return DtwResult(distance=cost[n - 1][m - 1], path=path)
