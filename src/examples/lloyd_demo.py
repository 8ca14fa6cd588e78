"""
Demo of Lloyd's k-means on the demonstration datasets.

This example shows how to:
1. Generate one of the synthetic 2D datasets
2. Drive the clustering run step by step, pausing between iterations
3. Watch the centroids converge in a matplotlib window
"""

import argparse
import matplotlib.pyplot as plt

# Add parent directory to path for imports
import sys
sys.path.append('..')

from lloydviz.algorithms.driver import IterationDriver, DEFAULT_INTERVAL, DEFAULT_MAX_ITER
from lloydviz.datasets import DATASETS, load_dataset
from lloydviz.visualization import LivePlot, plot_point_groups

CANVAS_WIDTH = 800
CANVAS_HEIGHT = 600


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Watch k-means centroids converge.")
    parser.add_argument('--data', choices=sorted(DATASETS), default='random')
    parser.add_argument('-k', '--n-clusters', type=int, default=3)
    parser.add_argument('--blobs', type=int, default=4,
                        help="number of blobs for the 'random' dataset")
    parser.add_argument('--max-iter', type=int, default=DEFAULT_MAX_ITER)
    parser.add_argument('--interval', type=float, default=DEFAULT_INTERVAL,
                        help="seconds between iterations")
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument('-v', '--verbose', action='count', default=0)
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)

    groups = load_dataset(args.data, CANVAS_WIDTH, CANVAS_HEIGHT,
                          n_clusters=args.blobs, rng=args.seed)

    fig, ax = plt.subplots(figsize=(8, 6))
    plot_point_groups(groups, ax=ax, width=CANVAS_WIDTH, height=CANVAS_HEIGHT)
    ax.set_title(f"{args.data} dataset")
    plt.pause(args.interval)

    live = LivePlot(CANVAS_WIDTH, CANVAS_HEIGHT, ax=ax, pause=args.interval)

    # Stepped from this thread so matplotlib stays on the main thread
    driver = IterationDriver(live, CANVAS_WIDTH, CANVAS_HEIGHT,
                             random_state=args.seed, autostart=False,
                             verbose=args.verbose)
    handle = driver.start_run(args.n_clusters, args.max_iter, groups)

    while driver.step(handle):
        if not plt.fignum_exists(fig.number):
            driver.cancel_run(handle)
            break

    print(f"Run finished: {handle.status.value} after {handle.n_iter} iterations")
    if handle.state is not None:
        for k, (centroid, size) in enumerate(zip(handle.state.centroid_points(),
                                                 handle.state.cluster_sizes())):
            print(f"  Cluster {k}: {size:5d} points, centroid ({centroid.x:.2f}, {centroid.y:.2f})")

    if plt.fignum_exists(fig.number):
        plt.show()


if __name__ == "__main__":
    main()
