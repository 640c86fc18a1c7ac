# plan_route.py
# Compute a route through units placed on a map.
#
# Usage:
#   python plan_route.py units.csv --units "Entrance, Shoe Shop, Cafe"
#   python plan_route.py units.json --closed --floor-penalty 0.1 --width 1600 --height 1200
#
import argparse
import json
import logging
import sys

from floorroute import RouteConfig, RouteError, load_waypoints
from floorroute.planner import plan_route, scale_path


def main(argv=None):
    p = argparse.ArgumentParser(description="Order map units into a short walking route.")
    p.add_argument("waypoints", help="CSV or JSON file of units (id or unit, x, y, floor)")
    p.add_argument("--units", help="comma-separated units to visit; the first is the start (default: all)")
    p.add_argument("--floor-penalty", type=float, default=0.02)
    p.add_argument("--closed", action="store_true", help="return to the first unit")
    p.add_argument("--max-passes", type=int, default=None, help="cap on 2-opt passes")
    p.add_argument("--width", type=float, default=None, help="map image width for pixel path output")
    p.add_argument("--height", type=float, default=None, help="map image height for pixel path output")
    p.add_argument("--log-level", default="WARNING")
    args = p.parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    try:
        directory = load_waypoints(args.waypoints)
        cfg = RouteConfig(floor_penalty=args.floor_penalty, return_to_start=args.closed,
                          max_passes=args.max_passes)
        request = args.units if args.units else [wp.id for wp in directory]
        result = plan_route(directory, request, cfg)
    except RouteError as exc:
        print(f"Route error: {exc}", file=sys.stderr)
        return 1

    out = result.to_dict()
    if args.width or args.height:
        out["pixels"] = scale_path(result.path, args.width, args.height)
    print(json.dumps(out, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
