from __future__ import annotations
import math
from typing import List, Tuple

from .distance import DistanceMatrix


def nearest_neighbor(D: DistanceMatrix, return_to_start: bool = False) -> Tuple[List[int], float]:
    """Greedy tour from index 0, always stepping to the closest unvisited point.

    Candidates are scanned in ascending index order with a strict `<`, so the
    lowest index wins ties. The closing edge (when `return_to_start`) is
    counted in the length but not appended to the tour.
    """
    n = len(D)
    if n <= 1:
        return [0], 0.0

    visited = [False] * n
    visited[0] = True
    tour = [0]
    total = 0.0
    current = 0
    for _ in range(n - 1):
        nearest = -1
        nearest_dist = math.inf
        row = D[current]
        for j in range(n):
            if not visited[j] and row[j] < nearest_dist:
                nearest = j
                nearest_dist = row[j]
        tour.append(nearest)
        visited[nearest] = True
        total += nearest_dist
        current = nearest

    if return_to_start:
        total += D[current][0]
    return tour, total
