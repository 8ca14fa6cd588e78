"""
Euclidean distance in the plane.

The only metric the engine uses: sqrt((x1 - x2)^2 + (y1 - y2)^2).
"""

import torch
from torch import Tensor


def euclidean_distances(points: Tensor, centroids: Tensor,
                        squared: bool = False) -> Tensor:
    """Distance from every point to every centroid.

    Args:
        points: (n, 2) tensor of points
        centroids: (K, 2) tensor of centroids
        squared: Return squared distances instead

    Returns:
        (n, K) tensor of distances
    """
    diff = points.unsqueeze(1) - centroids.unsqueeze(0)
    squared_distances = torch.sum(diff * diff, dim=2)

    if squared:
        return squared_distances
    return torch.sqrt(squared_distances)


def pairwise_shift(previous: Tensor, current: Tensor) -> Tensor:
    """Row-wise distance between two index-aligned (K, 2) tensors."""
    if previous.shape != current.shape:
        raise ValueError(f"Shape mismatch: {tuple(previous.shape)} vs "
                         f"{tuple(current.shape)}")
    diff = current - previous
    return torch.sqrt(torch.sum(diff * diff, dim=1))
