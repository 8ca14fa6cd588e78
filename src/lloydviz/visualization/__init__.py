"""Visualization utilities for clustering runs."""

from .plot_clusters import (
    cluster_colors,
    plot_clustering_state,
    plot_point_groups,
    LivePlot,
    FINISHED_TITLE
)

__all__ = [
    'cluster_colors',
    'plot_clustering_state',
    'plot_point_groups',
    'LivePlot',
    'FINISHED_TITLE'
]
