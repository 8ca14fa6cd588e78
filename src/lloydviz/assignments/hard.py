"""
Hard assignment of points to their nearest centroid.

Every point goes to exactly one cluster. When several centroids are
equally near, the one with the lowest index wins.
"""

from typing import List
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy
from ..distances.euclidean import euclidean_distances


def nearest_centroid(points: Tensor, centroids: Tensor) -> Tensor:
    """Index of the closest centroid for every point.

    Args:
        points: (n, 2) data points
        centroids: (K, 2) centroids

    Returns:
        (n,) tensor of cluster indices
    """
    distances = euclidean_distances(points, centroids)
    # argmin returns the first minimal index, i.e. lowest index on ties
    return torch.argmin(distances, dim=1)


def split_by_label(points: Tensor, labels: Tensor, n_clusters: int) -> List[Tensor]:
    """Group points into exactly K clusters according to labels.

    Clusters with no members come back as (0, 2) tensors; points keep
    their relative input order inside each cluster.
    """
    return [points[labels == k] for k in range(n_clusters)]


def assign_points(points: Tensor, centroids: Tensor) -> List[Tensor]:
    """Partition points into K clusters around the given centroids."""
    labels = nearest_centroid(points, centroids)
    return split_by_label(points, labels, centroids.shape[0])


class HardAssignment(AssignmentStrategy):
    """Hard (discrete) assignment to nearest centroid.

    Each point is assigned to exactly one cluster based on minimum
    Euclidean distance.
    """

    def compute_assignments(self, points: Tensor, centroids: Tensor,
                            **kwargs) -> Tensor:
        """Assign each point to nearest centroid.

        Args:
            points: (n, 2) data points
            centroids: (K, 2) current centroids
            **kwargs: Ignored

        Returns:
            (n,) tensor of cluster indices
        """
        return nearest_centroid(points, centroids)
