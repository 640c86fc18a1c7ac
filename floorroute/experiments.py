from __future__ import annotations
import csv
import itertools
import logging
import os
import statistics
import time
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from .distance import distance_matrix
from .nearest_neighbor import nearest_neighbor
from .optimizer import RouteConfig, solve_tsp
from .waypoint import random_waypoints

logger = logging.getLogger(__name__)

# sweepable keys that describe the instance rather than the RouteConfig
INSTANCE_KEYS = ("n", "n_floors")


def run_repeated_trials(n: int, cfg: RouteConfig, n_runs: int = 10, base_seed: int = 42,
                        n_floors: int = 1):
    """Solve `n_runs` random instances and compare against nearest neighbor alone.

    Returns (stats, details) where details holds one
    (nn_length, length, elapsed_sec, order) tuple per run.
    """
    nn_lengths = []
    lengths = []
    times = []
    orders = []
    for r in range(n_runs):
        points = random_waypoints(n, seed=base_seed + r, n_floors=n_floors)
        _, nn_len = nearest_neighbor(distance_matrix(points, cfg.floor_penalty), cfg.return_to_start)
        start = time.perf_counter()
        res = solve_tsp(points, cfg)
        times.append(time.perf_counter() - start)
        nn_lengths.append(nn_len)
        lengths.append(res.length)
        orders.append(res.order)
        logger.debug("trial %d (n=%d): nn=%.4f final=%.4f", r, n, nn_len, res.length)

    gains = [(a - b) / a if a > 0 else 0.0 for a, b in zip(nn_lengths, lengths)]
    stats = {
        "n": n,
        "n_floors": n_floors,
        "mean_nn_length": statistics.mean(nn_lengths),
        "mean_length": statistics.mean(lengths),
        "std_length": statistics.stdev(lengths) if len(lengths) > 1 else 0.0,
        "min_length": min(lengths),
        "max_length": max(lengths),
        "mean_improvement": statistics.mean(gains),
        "mean_time": statistics.mean(times),
        "n_runs": n_runs,
    }
    return stats, list(zip(nn_lengths, lengths, times, orders))


def run_parameter_sweep(param_grid: Dict[str, List[Any]], base_cfg: Optional[RouteConfig] = None,
                        n: int = 30, n_floors: int = 1, n_runs: int = 5, base_seed: int = 100,
                        csv_path: Optional[str] = None):
    """Grid over RouteConfig fields plus the instance keys `n` and `n_floors`."""
    base_cfg = base_cfg or RouteConfig()
    keys = sorted(param_grid.keys())
    unknown = set(keys) - set(asdict(base_cfg)) - set(INSTANCE_KEYS)
    if unknown:
        raise ValueError(f"Unknown sweep parameters: {sorted(unknown)}")
    rows = []
    for values in itertools.product(*[param_grid[k] for k in keys]):
        point = dict(zip(keys, values))
        cfg = RouteConfig(**{**asdict(base_cfg), **{k: v for k, v in point.items() if k not in INSTANCE_KEYS}})
        stats, _ = run_repeated_trials(point.get("n", n), cfg, n_runs=n_runs, base_seed=base_seed,
                                       n_floors=point.get("n_floors", n_floors))
        row = {**point, **{k: v for k, v in stats.items() if k not in point}}
        rows.append(row)
        if csv_path is not None:
            write_header = not os.path.exists(csv_path)
            with open(csv_path, "a", newline="") as f:
                w = csv.DictWriter(f, fieldnames=row.keys())
                if write_header:
                    w.writeheader()
                w.writerow(row)
    return rows
