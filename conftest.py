import pytest

from floorroute import Waypoint


@pytest.fixture
def unit_square():
    return [
        Waypoint("A", 0.0, 0.0, 0),
        Waypoint("B", 1.0, 0.0, 0),
        Waypoint("C", 1.0, 1.0, 0),
        Waypoint("D", 0.0, 1.0, 0),
    ]
