"""Distance computations for 2D k-means."""

from .euclidean import euclidean_distances, pairwise_shift

__all__ = [
    'euclidean_distances',
    'pairwise_shift'
]
