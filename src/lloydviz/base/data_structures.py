"""
Core data structures for the 2D k-means engine.

Points are plain coordinate pairs; clusters and centroids are stored as
tensors so the engine can work on all of them at once. A ClusteringState
bundles everything one iteration of Lloyd's algorithm produces.
"""

from typing import Optional, List, Tuple, Sequence
import torch
from torch import Tensor
from dataclasses import dataclass


DEFAULT_DTYPE = torch.float64


@dataclass(frozen=True)
class Point:
    """An immutable (x, y) coordinate pair. No bounds are enforced."""

    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @classmethod
    def from_tensor(cls, row: Tensor) -> 'Point':
        """Build a point from a length-2 tensor."""
        assert row.shape == (2,)
        return cls(float(row[0]), float(row[1]))


def points_to_tensor(points: Sequence[Point],
                     dtype: torch.dtype = DEFAULT_DTYPE) -> Tensor:
    """Stack a sequence of Points into an (n, 2) tensor."""
    if len(points) == 0:
        return torch.zeros(0, 2, dtype=dtype)
    return torch.tensor([p.as_tuple() for p in points], dtype=dtype)


def tensor_to_points(points: Tensor) -> List[Point]:
    """Convert an (n, 2) tensor into a list of Points."""
    return [Point.from_tensor(row) for row in points]


def empty_clusters(n_clusters: int,
                   dtype: torch.dtype = DEFAULT_DTYPE) -> List[Tensor]:
    """Allocate K empty (0, 2) clusters."""
    return [torch.zeros(0, 2, dtype=dtype) for _ in range(n_clusters)]


@dataclass
class ClusteringState:
    """Complete state threaded through one run of Lloyd's algorithm.

    Centroid ``i`` owns cluster ``i``; the two sequences always have the
    same length K. The driver that created a state is its only mutator.
    """

    centroids: Tensor        # (K, 2) current centroids
    clusters: List[Tensor]   # K tensors of shape (n_i, 2)
    iteration: int = 0

    # Per-point cluster index in input order, None before the first pass
    labels: Optional[Tensor] = None
    converged: bool = False

    def __post_init__(self):
        """Validate that centroids and clusters stay index-aligned."""
        assert self.centroids.dim() == 2 and self.centroids.shape[1] == 2
        assert len(self.clusters) == self.centroids.shape[0]
        assert self.iteration >= 0

    @property
    def n_clusters(self) -> int:
        return self.centroids.shape[0]

    @property
    def n_points(self) -> int:
        """Total number of points across all clusters."""
        return sum(len(cluster) for cluster in self.clusters)

    def centroid_points(self) -> List[Point]:
        """Centroids as a list of Points."""
        return tensor_to_points(self.centroids)

    def cluster_points(self, cluster_idx: int) -> List[Point]:
        """Members of a single cluster as Points."""
        return tensor_to_points(self.clusters[cluster_idx])

    def cluster_sizes(self) -> List[int]:
        return [len(cluster) for cluster in self.clusters]

    def copy(self) -> 'ClusteringState':
        """Deep copy, so collaborators can keep a snapshot."""
        return ClusteringState(
            centroids=self.centroids.clone(),
            clusters=[cluster.clone() for cluster in self.clusters],
            iteration=self.iteration,
            labels=None if self.labels is None else self.labels.clone(),
            converged=self.converged
        )
