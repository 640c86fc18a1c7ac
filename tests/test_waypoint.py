import json

import pytest

from floorroute import InvalidWaypointError, Waypoint, load_waypoints, random_waypoints, save_waypoints
from floorroute.waypoint import validate_waypoints


def test_defaults_and_coercion():
    wp = Waypoint("A", 0, 1)
    assert wp.floor == 0
    assert isinstance(wp.x, float) and isinstance(wp.y, float)
    assert Waypoint("B", 0.5, 0.5, -2).floor == -2


@pytest.mark.parametrize("kwargs", [
    dict(id="", x=0.1, y=0.1),
    dict(id="   ", x=0.1, y=0.1),
    dict(id=5, x=0.1, y=0.1),
    dict(id="a", x=float("nan"), y=0.1),
    dict(id="a", x=0.1, y=float("inf")),
    dict(id="a", x="0.1", y=0.1),
    dict(id="a", x=0.1, y=0.1, floor=1.5),
    dict(id="a", x=0.1, y=0.1, floor=True),
])
def test_invalid_waypoints(kwargs):
    with pytest.raises(InvalidWaypointError):
        Waypoint(**kwargs)


def test_from_dict():
    assert Waypoint.from_dict({"unit": "Cafe", "x": 0.2, "y": 0.3}) == Waypoint("Cafe", 0.2, 0.3, 0)
    assert Waypoint.from_dict({"id": "A", "x": 0.2, "y": 0.3, "floor": None}).floor == 0
    with pytest.raises(InvalidWaypointError, match="missing an id"):
        Waypoint.from_dict({"x": 0.2, "y": 0.3})
    with pytest.raises(InvalidWaypointError, match="'y'"):
        Waypoint.from_dict({"id": "A", "x": 0.2})


def test_validate_rejects_other_types():
    with pytest.raises(InvalidWaypointError):
        validate_waypoints([("A", 0.1, 0.2)])


def test_random_waypoints_reproducible():
    a = random_waypoints(12, seed=1, n_floors=3)
    b = random_waypoints(12, seed=1, n_floors=3)
    assert a == b
    assert len({wp.id for wp in a}) == 12
    assert all(0.0 <= wp.x <= 1.0 and 0.0 <= wp.y <= 1.0 for wp in a)
    assert {wp.floor for wp in a} <= {0, 1, 2}


def test_load_csv(tmp_path):
    path = tmp_path / "units.csv"
    path.write_text("id,x,y,floor\n007,0.1,0.2,1\nCafe,0.3,0.4,\n")
    wps = load_waypoints(path)
    assert [(wp.id, wp.floor) for wp in wps] == [("007", 1), ("Cafe", 0)]
    assert (wps[1].x, wps[1].y) == (pytest.approx(0.3), pytest.approx(0.4))


def test_load_json(tmp_path):
    path = tmp_path / "units.json"
    path.write_text(json.dumps({"waypoints": [{"unit": "Cafe", "x": 0.5, "y": 0.5}, {"id": "Gym", "x": 0.1, "y": 0.9, "floor": 2}]}))
    assert load_waypoints(path) == [Waypoint("Cafe", 0.5, 0.5, 0), Waypoint("Gym", 0.1, 0.9, 2)]


@pytest.mark.parametrize("name", ["units.csv", "units.json"])
def test_save_then_load(tmp_path, name):
    wps = random_waypoints(5, seed=2, n_floors=2)
    save_waypoints(wps, tmp_path / name)
    loaded = load_waypoints(tmp_path / name)
    assert [(wp.id, wp.floor) for wp in loaded] == [(wp.id, wp.floor) for wp in wps]
    assert [(wp.x, wp.y) for wp in loaded] == [(pytest.approx(wp.x), pytest.approx(wp.y)) for wp in wps]


def test_load_rejects_duplicates(tmp_path):
    path = tmp_path / "units.csv"
    path.write_text("id,x,y\nA,0.1,0.2\nA,0.3,0.4\n")
    with pytest.raises(InvalidWaypointError):
        load_waypoints(path)


@pytest.mark.parametrize("floor", ["1.5", "two", "inf"])
def test_load_csv_rejects_non_integer_floor(tmp_path, floor):
    path = tmp_path / "units.csv"
    path.write_text(f"id,x,y,floor\nA,0.1,0.2,{floor}\nB,0.3,0.4,2\n")
    with pytest.raises(InvalidWaypointError, match="floor"):
        load_waypoints(path)


def test_load_csv_accepts_whole_float_floor(tmp_path):
    path = tmp_path / "units.csv"
    path.write_text("id,x,y,floor\nA,0.1,0.2,1.0\nB,0.3,0.4,\n")
    assert [wp.floor for wp in load_waypoints(path)] == [1, 0]
