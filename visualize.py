import os, argparse, logging
import matplotlib.pyplot as plt
import imageio

from floorroute import REFINE_THRESHOLD, RouteConfig, distance_matrix, nearest_neighbor, two_opt, load_waypoints, random_waypoints
from floorroute.planner import plan_route

logger = logging.getLogger("visualize")


def floor_colors(waypoints):
    floors = sorted({wp.floor for wp in waypoints})
    cmap = plt.get_cmap("tab10")
    return {f: cmap(k % 10) for k, f in enumerate(floors)}


def draw_route(ax, waypoints, order, title, closed=False):
    """Markers colored by floor, route drawn in visiting order (image y axis points down)."""
    colors = floor_colors(waypoints)
    for f, c in colors.items():
        pts = [wp for wp in waypoints if wp.floor == f]
        ax.plot([p.x for p in pts], [p.y for p in pts], "o", color=c, label=f"floor {f}")
    if len(order) > 1:
        seq = list(order) + ([order[0]] if closed else [])
        ax.plot([waypoints[i].x for i in seq], [waypoints[i].y for i in seq], "-", color="black", linewidth=1)
    start = waypoints[order[0]]
    ax.plot([start.x], [start.y], "s", color="red", markersize=9)
    ax.set_title(title, pad=10)
    ax.set_xlim(-0.05, 1.05)
    ax.set_ylim(1.05, -0.05)
    ax.set_aspect("equal", adjustable="box")
    ax.legend(loc="upper right", fontsize=8)


def plot_route(waypoints, cfg, save_path):
    result = plan_route(waypoints, [wp.id for wp in waypoints], cfg)
    index = {wp.id: k for k, wp in enumerate(waypoints)}
    order = [index[rid] for rid in result.route]
    fig, ax = plt.subplots(figsize=(6, 6))
    draw_route(ax, waypoints, order, f"Route score {result.score}", closed=cfg.return_to_start)
    fig.tight_layout()
    fig.savefig(save_path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    print("Route:", " -> ".join(result.route))
    print("Saved:", save_path)


def refinement_history(waypoints, cfg):
    """Nearest-neighbor tour followed by every accepted 2-opt move, as solve_tsp would make them."""
    D = distance_matrix(waypoints, cfg.floor_penalty)
    nn_tour, nn_len = nearest_neighbor(D, cfg.return_to_start)
    history = [(nn_tour, nn_len)]
    if len(waypoints) > REFINE_THRESHOLD:
        two_opt(D, nn_tour, cfg.return_to_start, max_passes=cfg.max_passes, history=history)
    return history


def make_gif(waypoints, cfg, outdir, step=1):
    """One frame per `step` accepted 2-opt moves, starting from the nearest-neighbor tour."""
    history = refinement_history(waypoints, cfg)
    frames_idx = list(range(0, len(history), step))
    if frames_idx[-1] != len(history) - 1:
        frames_idx.append(len(history) - 1)

    frames = []
    for k in frames_idx:
        tour, L = history[k]
        fig, ax = plt.subplots(figsize=(5, 5))
        draw_route(ax, waypoints, tour, f"2-opt move {k}\nlength={L:.4f}", closed=cfg.return_to_start)
        fig.tight_layout()
        frame_path = os.path.join(outdir, f"two_opt_frame_{k:03d}.png")
        fig.savefig(frame_path, dpi=100)
        plt.close(fig)
        frames.append(frame_path)

    gif_path = os.path.join(outdir, "two_opt_progress.gif")
    with imageio.get_writer(gif_path, mode="I", duration=0.6) as writer:
        for fp in frames:
            writer.append_data(imageio.v2.imread(fp))
    print("Saved:", gif_path)


def main():
    p = argparse.ArgumentParser()
    p.add_argument("--waypoints", help="CSV or JSON waypoint file; random waypoints if omitted")
    p.add_argument("--n", type=int, default=25, help="number of random waypoints")
    p.add_argument("--floors", type=int, default=2)
    p.add_argument("--seed", type=int, default=321)
    p.add_argument("--floor-penalty", type=float, default=0.02)
    p.add_argument("--closed", action="store_true")
    p.add_argument("--outdir", default="viz")
    p.add_argument("--gif", action="store_true", help="also render the 2-opt progress as a GIF")
    p.add_argument("--step", type=int, default=1, help="frame every k accepted moves")
    p.add_argument("--log-level", default="WARNING")
    args = p.parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(name)s %(levelname)s %(message)s")

    if args.waypoints:
        waypoints = load_waypoints(args.waypoints)
    else:
        waypoints = random_waypoints(args.n, seed=args.seed, n_floors=args.floors)
    logger.info("Loaded %d waypoints", len(waypoints))
    cfg = RouteConfig(floor_penalty=args.floor_penalty, return_to_start=args.closed)

    os.makedirs(args.outdir, exist_ok=True)
    plot_route(waypoints, cfg, os.path.join(args.outdir, "route.png"))
    if args.gif:
        make_gif(waypoints, cfg, args.outdir, step=args.step)


if __name__ == "__main__":
    main()
