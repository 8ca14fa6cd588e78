"""
Convergence criteria for Lloyd's k-means.

A run has converged once no centroid moves by tol or more between two
consecutive iterations. The check is all-or-nothing across centroids.
"""

from typing import Dict, Any
import torch
from torch import Tensor

from ..base.interfaces import ConvergenceCriterion
from ..distances.euclidean import pairwise_shift


DEFAULT_TOL = 1e-5


def centroids_converged(previous: Tensor, current: Tensor,
                        tol: float = DEFAULT_TOL) -> bool:
    """True iff every centroid moved strictly less than tol.

    Args:
        previous: (K, 2) centroids before the update
        current: (K, 2) centroids after the update, index-aligned

    Returns:
        Whether all K centroids are within tolerance of their old position
    """
    shifts = pairwise_shift(previous, current)
    return bool(torch.all(shifts < tol))


class CentroidShift(ConvergenceCriterion):
    """Convergence based on how far each centroid moved in one iteration."""

    def __init__(self, tol: float = DEFAULT_TOL):
        """
        Args:
            tol: Distance every centroid must stay under
        """
        super().__init__()
        if tol <= 0:
            raise ValueError(f"tol must be positive, got {tol}")
        self.tol = tol

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Compare 'previous_centroids' against 'centroids'."""
        previous = current_state['previous_centroids']
        current = current_state['centroids']

        shifts = pairwise_shift(previous, current)
        converged = bool(torch.all(shifts < self.tol))

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'max_shift': float(shifts.max()) if shifts.numel() else 0.0,
            'converged': converged
        })

        return converged
