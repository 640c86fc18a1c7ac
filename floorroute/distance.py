from __future__ import annotations
import math
from typing import List, Sequence

from .waypoint import Waypoint

DEFAULT_FLOOR_PENALTY = 0.02

DistanceMatrix = List[List[float]]


def distance(a: Waypoint, b: Waypoint, floor_penalty: float = DEFAULT_FLOOR_PENALTY) -> float:
    """Planar distance plus a flat cost per floor changed.

    The floor term does not model vertical travel; it only biases tours
    towards finishing one floor before moving to the next. A negative
    penalty inverts that incentive and is rejected by RouteConfig.
    """
    dx = a.x - b.x
    dy = a.y - b.y
    return math.sqrt(dx * dx + dy * dy) + floor_penalty * abs(a.floor - b.floor)


def distance_matrix(waypoints: Sequence[Waypoint], floor_penalty: float = DEFAULT_FLOOR_PENALTY) -> DistanceMatrix:
    n = len(waypoints)
    D = [[0.0]*n for _ in range(n)]
    for i in range(n):
        for j in range(i+1, n):
            d = distance(waypoints[i], waypoints[j], floor_penalty)
            D[i][j] = D[j][i] = d
    return D


def tour_length(D: DistanceMatrix, tour: Sequence[int], return_to_start: bool) -> float:
    """Sum of consecutive edges, plus the closing edge back to tour[0] if requested."""
    length = 0.0
    for k in range(len(tour) - 1):
        length += D[tour[k]][tour[k+1]]
    if return_to_start and len(tour) > 1:
        length += D[tour[-1]][tour[0]]
    return length
