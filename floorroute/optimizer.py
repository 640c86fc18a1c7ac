from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .distance import DEFAULT_FLOOR_PENALTY, distance_matrix
from .errors import InvalidConfigError
from .nearest_neighbor import nearest_neighbor
from .two_opt import two_opt
from .waypoint import WaypointLike, validate_waypoints

logger = logging.getLogger(__name__)

# tours with more points than this get 2-opt refinement
REFINE_THRESHOLD = 10


@dataclass(frozen=True)
class RouteConfig:
    floor_penalty: float = DEFAULT_FLOOR_PENALTY  # added per floor changed
    return_to_start: bool = False                 # closed tour if True
    max_passes: Optional[int] = None              # 2-opt pass cap; None = until no improvement

    def __post_init__(self):
        if isinstance(self.floor_penalty, bool) or not isinstance(self.floor_penalty, (int, float)):
            raise InvalidConfigError(f"floor_penalty must be a number, got {self.floor_penalty!r}")
        if not math.isfinite(self.floor_penalty) or self.floor_penalty < 0:
            raise InvalidConfigError(f"floor_penalty must be finite and >= 0, got {self.floor_penalty!r}")
        if not isinstance(self.return_to_start, bool):
            raise InvalidConfigError(f"return_to_start must be a bool, got {self.return_to_start!r}")
        if self.max_passes is not None:
            if isinstance(self.max_passes, bool) or not isinstance(self.max_passes, int) or self.max_passes < 0:
                raise InvalidConfigError(f"max_passes must be an int >= 0 or None, got {self.max_passes!r}")


@dataclass
class TourResult:
    order: List[int]
    length: float


def solve_tsp(waypoints: Iterable[WaypointLike], config: Optional[RouteConfig] = None) -> TourResult:
    """Order the waypoints into a short tour starting at waypoints[0].

    Nearest-neighbor construction, then 2-opt refinement when there are more
    than REFINE_THRESHOLD points. Identical input and config always give the
    same order and the same length, bit for bit.

    Raises EmptyRouteError / InvalidWaypointError for unusable input.
    """
    cfg = config or RouteConfig()
    points = validate_waypoints(waypoints)
    n = len(points)
    if n == 1:
        return TourResult(order=[0], length=0.0)

    D = distance_matrix(points, cfg.floor_penalty)
    tour, length = nearest_neighbor(D, cfg.return_to_start)
    logger.debug("nearest neighbor: n=%d length=%.6f", n, length)
    if n > REFINE_THRESHOLD:
        tour, length = two_opt(D, tour, cfg.return_to_start, max_passes=cfg.max_passes)
        logger.debug("2-opt: n=%d length=%.6f", n, length)
    return TourResult(order=tour, length=length)
