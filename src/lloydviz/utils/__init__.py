"""Utility functions for the k-means engine."""

from .convergence import (
    DEFAULT_TOL,
    CentroidShift,
    centroids_converged
)

from .validation import (
    flatten_point_groups,
    check_n_clusters,
    check_max_iter,
    check_bounds,
    check_centroids,
    check_random_state,
    data_extent
)

__all__ = [
    # Convergence
    'DEFAULT_TOL',
    'CentroidShift',
    'centroids_converged',

    # Validation
    'flatten_point_groups',
    'check_n_clusters',
    'check_max_iter',
    'check_bounds',
    'check_centroids',
    'check_random_state',
    'data_extent'
]
