import json

import pytest

import plan_route as plan_route_cli
from floorroute import EmptyRouteError, RouteConfig, UnknownWaypointError, save_waypoints
from floorroute.planner import PathPoint, parse_unit_list, plan_route, resolve_waypoints, scale_path


def test_parse_unit_list():
    assert parse_unit_list(" A, B ,,C, A ,") == ["A", "B", "C"]
    assert parse_unit_list("") == []


def test_resolve_keeps_requested_order(unit_square):
    wps = resolve_waypoints(unit_square, ["C", "A"])
    assert [wp.id for wp in wps] == ["C", "A"]


def test_resolve_reports_all_missing(unit_square):
    with pytest.raises(UnknownWaypointError) as exc:
        resolve_waypoints(unit_square, ["A", "Z", "B", "Y"])
    assert exc.value.missing == ["Z", "Y"]
    assert "Z, Y" in str(exc.value)
    assert isinstance(exc.value, KeyError)


def test_resolve_from_mapping():
    directory = {"Cafe": {"id": "Cafe", "x": 0.2, "y": 0.2}, "Gym": {"id": "Gym", "x": 0.8, "y": 0.2, "floor": 1}}
    assert [wp.floor for wp in resolve_waypoints(directory, ["Gym", "Cafe"])] == [1, 0]


def test_plan_route(unit_square):
    result = plan_route(unit_square, "A, D, C, B", RouteConfig(floor_penalty=0.0))
    # D is requested before B, so it wins the tie from A
    assert result.route == ["A", "D", "C", "B"]
    assert result.length == pytest.approx(3.0)
    assert result.score == 3.0
    assert [(p.x, p.y) for p in result.path] == [(0.0, 0.0), (0.0, 1.0), (1.0, 1.0), (1.0, 0.0)]


def test_plan_route_to_dict(unit_square):
    out = plan_route(unit_square, ["B", "C"]).to_dict()
    assert out["route"] == ["B", "C"]
    assert out["score"] == 1.0
    assert out["path"][1] == {"id": "C", "x": 1.0, "y": 1.0, "floor": 0}
    json.dumps(out)


def test_plan_route_empty_request(unit_square):
    with pytest.raises(EmptyRouteError):
        plan_route(unit_square, " , ")


def test_score_rounds():
    from floorroute.planner import RouteResult
    assert RouteResult(route=["a", "b"], length=1.23456).score == 1.23


def test_scale_path():
    path = [PathPoint("a", 0.5, 0.25), PathPoint("b", 1.0, 1.0)]
    assert scale_path(path) == [(400.0, 150.0), (800.0, 600.0)]
    assert scale_path(path, 1000, 2000) == [(500.0, 500.0), (1000.0, 2000.0)]


def test_cli(tmp_path, capsys, unit_square):
    path = tmp_path / "units.json"
    save_waypoints(unit_square, path)
    assert plan_route_cli.main([str(path), "--units", "A,B,C", "--floor-penalty", "0", "--width", "100", "--height", "100"]) == 0
    out = json.loads(capsys.readouterr().out)
    assert out["route"] == ["A", "B", "C"]
    assert out["pixels"][2] == [100.0, 100.0]


def test_cli_unknown_unit(tmp_path, capsys, unit_square):
    path = tmp_path / "units.json"
    save_waypoints(unit_square, path)
    assert plan_route_cli.main([str(path), "--units", "A,Nope"]) == 1
    assert "Nope" in capsys.readouterr().err
