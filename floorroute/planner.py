"""Turn a list of requested unit names into a rendered route.

This is the thin layer the map application sits on: it resolves names
against the units placed on a map, runs the optimizer and packages the
ordered names, the length score and the path polyline.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from .errors import UnknownWaypointError
from .optimizer import RouteConfig, solve_tsp
from .waypoint import Waypoint, WaypointLike, as_waypoint

logger = logging.getLogger(__name__)

# fallback image size when the map's natural size is unknown
DEFAULT_IMAGE_SIZE = (800, 600)


@dataclass
class PathPoint:
    id: str
    x: float
    y: float
    floor: int = 0


@dataclass
class RouteResult:
    route: List[str]
    length: float
    path: List[PathPoint] = field(default_factory=list)

    @property
    def score(self) -> float:
        """Length rounded to two decimals, as shown to users."""
        return round(self.length, 2)

    def to_dict(self) -> dict:
        return {
            "route": list(self.route),
            "length": self.length,
            "score": self.score,
            "path": [{"id": p.id, "x": p.x, "y": p.y, "floor": p.floor} for p in self.path],
        }


def parse_unit_list(text: str) -> List[str]:
    """Split a comma-separated unit list, dropping blanks and repeated names."""
    names = []
    for part in text.split(","):
        name = part.strip()
        if name and name not in names:
            names.append(name)
    return names


def resolve_waypoints(directory: Union[Mapping[str, WaypointLike], Iterable[WaypointLike]],
                      ids: Sequence[str]) -> List[Waypoint]:
    """Look up `ids` in the directory, keeping the requested order.

    Raises UnknownWaypointError listing every id that is not found.
    """
    if isinstance(directory, Mapping):
        index = {k: as_waypoint(v) for k, v in directory.items()}
    else:
        index = {}
        for item in directory:
            wp = as_waypoint(item)
            index[wp.id] = wp
    missing = [i for i in ids if i not in index]
    if missing:
        raise UnknownWaypointError(missing)
    return [index[i] for i in ids]


def plan_route(directory, request: Union[str, Sequence[str]],
               config: Optional[RouteConfig] = None) -> RouteResult:
    """Resolve the requested units and compute their visiting order.

    `request` is either a comma-separated string or a sequence of ids; the
    first id is the fixed start of the route.
    """
    ids = parse_unit_list(request) if isinstance(request, str) else list(request)
    points = resolve_waypoints(directory, ids)
    result = solve_tsp(points, config)
    ordered = [points[i] for i in result.order]
    logger.info("Planned route over %d units, length %.4f", len(ordered), result.length)
    return RouteResult(
        route=[wp.id for wp in ordered],
        length=result.length,
        path=[PathPoint(wp.id, wp.x, wp.y, wp.floor) for wp in ordered],
    )


def scale_path(path: Sequence[PathPoint], width: Optional[float] = None,
               height: Optional[float] = None) -> List[Tuple[float, float]]:
    """Normalized path coordinates to image pixels."""
    w = width or DEFAULT_IMAGE_SIZE[0]
    h = height or DEFAULT_IMAGE_SIZE[1]
    return [(p.x * w, p.y * h) for p in path]
