"""Centroid update strategies."""

from .mean import MeanUpdater, recompute_centroids

__all__ = [
    'MeanUpdater',
    'recompute_centroids'
]
