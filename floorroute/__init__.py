from .errors import RouteError, InvalidWaypointError, EmptyRouteError, InvalidConfigError, UnknownWaypointError
from .waypoint import Waypoint, load_waypoints, save_waypoints, random_waypoints
from .distance import distance, distance_matrix, tour_length
from .nearest_neighbor import nearest_neighbor
from .two_opt import two_opt
from .optimizer import RouteConfig, TourResult, solve_tsp, REFINE_THRESHOLD
from .planner import RouteResult, PathPoint, plan_route, parse_unit_list, resolve_waypoints, scale_path
from .experiments import run_parameter_sweep, run_repeated_trials
