from __future__ import annotations
import logging
from typing import List, Optional, Sequence, Tuple

from .distance import DistanceMatrix, tour_length

logger = logging.getLogger(__name__)


def two_opt(D: DistanceMatrix, tour: Sequence[int], return_to_start: bool = False,
            max_passes: Optional[int] = None,
            history: Optional[List[Tuple[List[int], float]]] = None) -> Tuple[List[int], float]:
    """First-improvement 2-opt until a full pass finds no shorter tour.

    Segments [i..j] with 1 <= i < j <= n-1 are reversed, so tour[0] never
    moves. An improving candidate is adopted immediately and the same pass
    keeps scanning from (i, j) onwards; the result therefore depends on the
    ascending scan order but is fully deterministic.

    `max_passes` caps the number of passes (None means run to a local
    optimum). Every accepted move is appended to `history` when given.
    """
    n = len(tour)
    best_tour = list(tour)
    best_length = tour_length(D, best_tour, return_to_start)

    passes = 0
    improved = True
    while improved:
        if max_passes is not None and passes >= max_passes:
            logger.debug("2-opt stopped after %d passes (cap reached), length=%.6f", passes, best_length)
            break
        improved = False
        accepted = 0
        for i in range(1, n - 1):
            for j in range(i + 1, n):
                candidate = best_tour[:i] + best_tour[i:j+1][::-1] + best_tour[j+1:]
                length = tour_length(D, candidate, return_to_start)
                if length < best_length:
                    best_tour = candidate
                    best_length = length
                    improved = True
                    accepted += 1
                    if history is not None:
                        history.append((list(candidate), length))
        passes += 1
        logger.debug("2-opt pass %d: %d moves accepted, length=%.6f", passes, accepted, best_length)

    return best_tour, best_length
