"""Assignment strategies for k-means."""

from .hard import HardAssignment, nearest_centroid, split_by_label, assign_points

__all__ = [
    'HardAssignment',
    'nearest_centroid',
    'split_by_label',
    'assign_points'
]
