"""
Initialization from previous centroids or custom starting points.

Useful for warm starts and for reproducing a run exactly.
"""

from typing import Union, Sequence, Any
import numpy as np
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..base.data_structures import ClusteringState, DEFAULT_DTYPE
from ..utils.validation import check_centroids


class FromPreviousInit(InitializationStrategy):
    """Initialize from fixed centroids.

    Accepts either:
    - A (K, 2) tensor or array of centroids
    - A sequence of Points or (x, y) pairs
    - A ClusteringState from a previous run
    """

    def __init__(self, initial_state: Union[Tensor, np.ndarray, ClusteringState, Sequence[Any]]):
        """
        Args:
            initial_state: Previous solution to use for initialization
        """
        if isinstance(initial_state, ClusteringState):
            centroids = initial_state.centroids
        else:
            centroids = initial_state
        self.centroids = check_centroids(centroids, dtype=DEFAULT_DTYPE)

    def initialize(self, n_clusters: int, **kwargs) -> Tensor:
        """Return a copy of the stored centroids.

        Raises:
            InvalidArgument: If the stored centroids do not number n_clusters
        """
        return check_centroids(self.centroids, n_clusters=n_clusters).clone()
