from __future__ import annotations
import json
import math
import numbers
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional, Union

import pandas as pd

from .errors import EmptyRouteError, InvalidWaypointError

# the original map tool stores placed units under "unit" rather than "id"
ID_KEYS = ("id", "unit")


@dataclass
class Waypoint:
    """A named point in normalized map space ([0, 1] on both axes), tagged with a floor."""
    id: str
    x: float
    y: float
    floor: int = 0

    def __post_init__(self):
        if not isinstance(self.id, str) or not self.id.strip():
            raise InvalidWaypointError(f"Waypoint id must be a non-empty string, got {self.id!r}")
        for axis in ("x", "y"):
            value = getattr(self, axis)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise InvalidWaypointError(f"Waypoint {self.id!r}: {axis} must be a number, got {value!r}")
            value = float(value)
            if not math.isfinite(value):
                raise InvalidWaypointError(f"Waypoint {self.id!r}: {axis} must be finite, got {value!r}")
            setattr(self, axis, value)
        if isinstance(self.floor, bool) or not isinstance(self.floor, numbers.Integral):
            raise InvalidWaypointError(f"Waypoint {self.id!r}: floor must be an integer, got {self.floor!r}")
        self.floor = int(self.floor)

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "Waypoint":
        ident = next((data[k] for k in ID_KEYS if k in data), None)
        if ident is None:
            raise InvalidWaypointError(f"Waypoint is missing an id: {dict(data)!r}")
        try:
            x, y = data["x"], data["y"]
        except KeyError as exc:
            raise InvalidWaypointError(f"Waypoint {ident!r} is missing coordinate {exc.args[0]!r}") from exc
        floor = data.get("floor")
        return Waypoint(id=ident, x=x, y=y, floor=0 if floor is None else floor)

    def to_dict(self) -> dict:
        return {"id": self.id, "x": self.x, "y": self.y, "floor": self.floor}


WaypointLike = Union[Waypoint, Mapping[str, Any]]


def as_waypoint(item: WaypointLike) -> Waypoint:
    if isinstance(item, Waypoint):
        return item
    if isinstance(item, Mapping):
        return Waypoint.from_dict(item)
    raise InvalidWaypointError(f"Expected a Waypoint or a mapping, got {type(item).__name__}")


def validate_waypoints(items: Iterable[WaypointLike]) -> List[Waypoint]:
    """Coerce to Waypoint objects and check the list can be routed.

    Raises EmptyRouteError for an empty list and InvalidWaypointError for
    malformed entries or duplicate ids.
    """
    waypoints = [as_waypoint(it) for it in items]
    if not waypoints:
        raise EmptyRouteError("At least one waypoint is required to build a route.")
    seen = set()
    for wp in waypoints:
        if wp.id in seen:
            raise InvalidWaypointError(f"Duplicate waypoint id {wp.id!r}")
        seen.add(wp.id)
    return waypoints


def random_waypoints(n: int, seed: Optional[int] = None, n_floors: int = 1,
                     prefix: str = "W") -> List[Waypoint]:
    if n_floors < 1:
        raise ValueError("n_floors must be >= 1")
    rng = random.Random(seed)
    width = len(str(max(n - 1, 0)))
    return [Waypoint(id=f"{prefix}{k:0{width}d}", x=rng.random(), y=rng.random(),
                     floor=rng.randrange(n_floors))
            for k in range(n)]


def load_waypoints(path: Union[str, Path]) -> List[Waypoint]:
    """Read waypoints from a CSV (columns id/unit, x, y, optional floor) or JSON file.

    JSON may be a list of objects or an object with a "waypoints" list.
    """
    path = Path(path)
    if path.suffix.lower() == ".json":
        with open(path) as f:
            data = json.load(f)
        if isinstance(data, Mapping):
            data = data.get("waypoints", [])
        return validate_waypoints(data)

    df = pd.read_csv(path, dtype={k: str for k in ID_KEYS}, skipinitialspace=True)
    if "floor" in df.columns:
        floors = df["floor"].fillna(0)
        if not pd.api.types.is_numeric_dtype(floors) or (floors % 1 != 0).any():
            raise InvalidWaypointError(f"{path}: floor must be an integer, got {df['floor'].tolist()!r}")
        df["floor"] = floors.astype(int)
    return validate_waypoints(df.to_dict(orient="records"))


def save_waypoints(waypoints: Iterable[Waypoint], path: Union[str, Path]):
    path = Path(path)
    rows = [wp.to_dict() for wp in waypoints]
    if path.suffix.lower() == ".json":
        with open(path, "w") as f:
            json.dump({"waypoints": rows}, f, indent=2)
    else:
        pd.DataFrame.from_records(rows, columns=["id", "x", "y", "floor"]).to_csv(path, index=False)
