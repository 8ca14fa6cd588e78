"""
Core interfaces for the components of Lloyd's k-means.

Each phase of an iteration (initialize, assign, update, converge) is a
pluggable strategy, so the iteration driver only depends on these
abstract base classes.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, List
from torch import Tensor


class InitializationStrategy(ABC):
    """Abstract base class for centroid initialization strategies."""

    @abstractmethod
    def initialize(self, n_clusters: int, **kwargs) -> Tensor:
        """Produce initial centroids.

        Args:
            n_clusters: Number of centroids K to produce
            **kwargs: Strategy-specific parameters

        Returns:
            (K, 2) tensor of initial centroids
        """
        pass


class AssignmentStrategy(ABC):
    """Abstract base class for point-to-cluster assignment strategies."""

    @abstractmethod
    def compute_assignments(self, points: Tensor, centroids: Tensor,
                            **kwargs) -> Tensor:
        """Compute cluster assignments for points.

        Args:
            points: (n, 2) tensor of data points
            centroids: (K, 2) tensor of current centroids
            **kwargs: Strategy-specific parameters

        Returns:
            (n,) tensor of cluster indices
        """
        pass


class ParameterUpdater(ABC):
    """Abstract base class for centroid update strategies."""

    @abstractmethod
    def update(self, clusters: List[Tensor], previous_centroids: Tensor,
               **kwargs) -> Tensor:
        """Compute new centroids from freshly assigned clusters.

        Args:
            clusters: K tensors of shape (n_i, 2)
            previous_centroids: (K, 2) centroids before this update
            **kwargs: Update-specific parameters

        Returns:
            (K, 2) tensor of new centroids
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if the algorithm has converged.

        Args:
            current_state: Dictionary describing the current iteration

        Returns:
            True if converged, False otherwise
        """
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []
