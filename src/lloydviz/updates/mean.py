"""
Mean update strategy for centroid-based clustering.
"""

from typing import List
from torch import Tensor

from ..base.interfaces import ParameterUpdater


def recompute_centroids(clusters: List[Tensor], previous_centroids: Tensor) -> Tensor:
    """New centroids as the coordinate-wise mean of each cluster.

    An empty cluster keeps its previous centroid unchanged, so the
    centroid sequence never shrinks and no slot is re-randomized.

    Args:
        clusters: K tensors of shape (n_i, 2)
        previous_centroids: (K, 2) centroids before the update

    Returns:
        (K, 2) tensor of new centroids
    """
    if len(clusters) != previous_centroids.shape[0]:
        raise ValueError(f"Got {len(clusters)} clusters for "
                         f"{previous_centroids.shape[0]} centroids")

    centroids = previous_centroids.clone()
    for k, cluster in enumerate(clusters):
        if len(cluster) == 0:
            # No points assigned - keep current centroid
            continue
        centroids[k] = cluster.to(centroids.dtype).mean(dim=0)

    return centroids


class MeanUpdater(ParameterUpdater):
    """Updates centroids by computing the mean of assigned points."""

    def update(self, clusters: List[Tensor], previous_centroids: Tensor,
               **kwargs) -> Tensor:
        """Update all centroids.

        Args:
            clusters: Points assigned to each cluster
            previous_centroids: Centroids from the previous iteration
            **kwargs: Ignored
        """
        return recompute_centroids(clusters, previous_centroids)
