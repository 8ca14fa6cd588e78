"""Clustering algorithm and iteration driver."""

from .driver import (
    IterationDriver,
    RunHandle,
    RunStatus,
    DEFAULT_INTERVAL,
    DEFAULT_MAX_ITER
)
from .kmeans import KMeans, within_cluster_sum_of_squares

__all__ = [
    'IterationDriver',
    'RunHandle',
    'RunStatus',
    'DEFAULT_INTERVAL',
    'DEFAULT_MAX_ITER',
    'KMeans',
    'within_cluster_sum_of_squares'
]
