"""
Cluster visualization utilities.

Draws a ClusteringState the way the demo canvas does: every cluster in
its own hue, centroids as larger black dots. ``LivePlot`` can be handed
to the iteration driver directly as its state callback.
"""

from typing import Optional, List, Tuple
import matplotlib.pyplot as plt
from matplotlib.colors import hsv_to_rgb
import numpy as np

from ..base.data_structures import ClusteringState


FINISHED_TITLE = "Converged or reached maximum iterations"


def cluster_colors(n_clusters: int) -> List[Tuple[float, float, float]]:
    """One RGB color per cluster, hues spread evenly around the wheel.

    Cluster ``i`` gets hue ``i * 360 / K`` at full saturation and half
    lightness (identical to HSV with full value).
    """
    return [tuple(hsv_to_rgb((i / n_clusters, 1.0, 1.0))) for i in range(n_clusters)]


def plot_clustering_state(state: ClusteringState,
                          ax: Optional[plt.Axes] = None,
                          width: Optional[float] = None,
                          height: Optional[float] = None,
                          colors: Optional[List] = None,
                          point_size: float = 9,
                          centroid_size: float = 36,
                          invert_y: bool = True,
                          title: Optional[str] = None) -> plt.Axes:
    """Plot one iteration of a run.

    Args:
        state: State to draw
        ax: Matplotlib axes (created if None)
        width: Canvas width, fixes the x limits when given
        height: Canvas height, fixes the y limits when given
        colors: One color per cluster (hue wheel by default)
        point_size: Marker area of data points
        centroid_size: Marker area of centroids
        invert_y: Put the origin top-left like a screen canvas
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))

    if colors is None:
        colors = cluster_colors(state.n_clusters)

    for k, cluster in enumerate(state.clusters):
        if len(cluster) == 0:
            continue
        pts = cluster.detach().cpu().numpy()
        ax.scatter(pts[:, 0], pts[:, 1],
                   color=colors[k],
                   s=point_size,
                   linewidths=0,
                   label=f'Cluster {k}')

    centers = state.centroids.detach().cpu().numpy()
    ax.scatter(centers[:, 0], centers[:, 1],
               c='black',
               s=centroid_size,
               label='Centroids',
               zorder=10)

    if width is not None:
        ax.set_xlim(0, width)
    if height is not None:
        ax.set_ylim(0, height)
    if invert_y and not ax.yaxis_inverted():
        ax.invert_yaxis()
    ax.set_aspect('equal', adjustable='box')

    if title:
        ax.set_title(title)

    return ax


class LivePlot:
    """Redraws a figure on every state update of a run.

    Pass an instance as ``on_state_update`` to an IterationDriver that is
    stepped from the main thread; matplotlib is not thread-safe.
    """

    def __init__(self, width: float, height: float,
                 ax: Optional[plt.Axes] = None,
                 pause: float = 0.001):
        if ax is None:
            fig, ax = plt.subplots(figsize=(8, 6))
        self.ax = ax
        self.width = width
        self.height = height
        self.pause = pause
        self.n_updates = 0
        self.last_state: Optional[ClusteringState] = None
        self.finished = False

    def __call__(self, state: ClusteringState, terminal: bool) -> None:
        self.ax.clear()
        if terminal:
            title = FINISHED_TITLE
        else:
            title = f"Currently running, on iteration {state.iteration}"
        plot_clustering_state(state, ax=self.ax, width=self.width,
                              height=self.height, title=title)

        self.n_updates += 1
        self.last_state = state
        self.finished = terminal

        if self.pause > 0:
            plt.pause(self.pause)

    def reset(self) -> None:
        """Clear the canvas, e.g. when a new dataset is selected."""
        self.ax.clear()
        self.n_updates = 0
        self.last_state = None
        self.finished = False


def plot_point_groups(point_groups: List[np.ndarray],
                      ax: Optional[plt.Axes] = None,
                      width: Optional[float] = None,
                      height: Optional[float] = None,
                      point_size: float = 9) -> plt.Axes:
    """Draw raw input points in black, before any clustering."""
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))

    pts = np.concatenate([np.asarray(g, dtype=float).reshape(-1, 2) for g in point_groups])
    ax.scatter(pts[:, 0], pts[:, 1], c='black', s=point_size, linewidths=0)

    if width is not None:
        ax.set_xlim(0, width)
    if height is not None:
        ax.set_ylim(0, height)
    if not ax.yaxis_inverted():
        ax.invert_yaxis()
    ax.set_aspect('equal', adjustable='box')
    return ax
