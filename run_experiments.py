# run_experiments.py
import os, json, argparse, logging
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt

from floorroute import RouteConfig
from floorroute.experiments import run_repeated_trials, run_parameter_sweep

OUTDIR = os.path.dirname(os.path.abspath(__file__))


def ensure(path: str) -> str:
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    return path


def plot_scatter(details_by_size, save_path):
    """Final length over nearest-neighbor length per run, one column per instance size."""
    plt.figure()
    sizes = list(details_by_size.keys())
    rng = np.random.default_rng(0)
    for i, n in enumerate(sizes, start=1):
        ratios = [L / nn if nn > 0 else 1.0 for (nn, L, t, order) in details_by_size[n]]
        x = rng.normal(loc=i, scale=0.03, size=len(ratios))
        plt.plot(x, ratios, "o")
    plt.axhline(1.0, color="grey", linewidth=0.8, linestyle="--")
    plt.xticks(range(1, len(sizes) + 1), [f"n={n}" for n in sizes])
    plt.ylabel("Route length / nearest-neighbor length")
    plt.title("2-opt gain across runs")
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def plot_sweep(df, save_path):
    plt.figure()
    for n, grp in df.groupby("n"):
        grp = grp.sort_values("floor_penalty")
        plt.plot(grp["floor_penalty"], grp["mean_length"], "-o", label=f"n={n}")
    plt.xlabel("Floor penalty")
    plt.ylabel("Mean route length")
    plt.title("Floor penalty sweep")
    plt.legend()
    ensure(save_path)
    plt.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close()


def main():
    ap = argparse.ArgumentParser()
    ap.add_argument("--sizes", type=int, nargs="+", default=[8, 20, 40])
    ap.add_argument("--floors", type=int, default=3)
    ap.add_argument("--runs", type=int, default=5)
    ap.add_argument("--floor-penalty", type=float, default=0.02)
    ap.add_argument("--closed", action="store_true", help="tours return to their start")
    ap.add_argument("--outdir", default=OUTDIR)
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    cfg = RouteConfig(floor_penalty=args.floor_penalty, return_to_start=args.closed)

    # repeated trials
    records = []
    details_by_size = {}
    for n in args.sizes:
        stats, details = run_repeated_trials(n, cfg, n_runs=args.runs, n_floors=args.floors)
        print(f"n={n}", json.dumps(stats, indent=2))
        records.append(stats)
        details_by_size[n] = details

    # summary CSV + scatter plot
    df_summary = pd.DataFrame.from_records(records)
    df_summary.to_csv(ensure(os.path.join(args.outdir, "results_summary.csv")), index=False)
    plot_scatter(details_by_size, os.path.join(args.outdir, "results_distribution.png"))

    # floor penalty sweep
    grid = {"n": args.sizes, "floor_penalty": [0.0, 0.02, 0.1, 0.5]}
    rows = run_parameter_sweep(
        grid, base_cfg=cfg, n_floors=args.floors,
        n_runs=3, base_seed=500, csv_path=os.path.join(args.outdir, "floor_penalty_grid.csv")
    )
    plot_sweep(pd.DataFrame.from_records(rows), os.path.join(args.outdir, "floor_penalty_sweep.png"))
    print("Grid search evaluated:", len(rows))


if __name__ == "__main__":
    main()
