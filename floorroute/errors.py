from __future__ import annotations


class RouteError(Exception):
    """Base class for every error raised by floorroute."""


class InvalidWaypointError(RouteError, ValueError):
    """A waypoint (or the waypoint list) cannot be routed."""


class EmptyRouteError(InvalidWaypointError):
    """No waypoints were given; a tour needs at least a start point."""


class InvalidConfigError(RouteError, ValueError):
    pass


class UnknownWaypointError(RouteError, KeyError):
    """A requested waypoint id is not in the directory."""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(f"Unknown waypoint(s): {', '.join(self.missing)}")

    def __str__(self) -> str:
        return self.args[0]
