"""
Separated random initialization.

Draws centroids uniformly inside the bounding rectangle and rejects any
candidate that lands too close to a centroid already placed, so runs do
not start with coincident or overlapping centroids.
"""

from typing import Optional, Tuple
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy
from ..base.data_structures import DEFAULT_DTYPE
from ..base.exceptions import DegenerateInitialization
from ..utils.validation import check_n_clusters, check_bounds


SEPARATION_DIVISOR = 5
DEFAULT_MAX_ATTEMPTS = 10000


def default_min_separation(width: float, height: float) -> float:
    """Minimum centroid spacing: a fifth of the shorter side."""
    return min(width, height) / SEPARATION_DIVISOR


def separated_random_centroids(n_clusters: int,
                               width: float,
                               height: float,
                               min_separation: Optional[float] = None,
                               max_attempts: int = DEFAULT_MAX_ATTEMPTS,
                               integer_coords: bool = True,
                               origin: Tuple[float, float] = (0.0, 0.0),
                               generator: Optional[torch.Generator] = None,
                               dtype: torch.dtype = DEFAULT_DTYPE) -> Tensor:
    """Place K centroids uniformly in the rectangle, pairwise separated.

    The rectangle spans [x0, x0 + width) x [y0, y0 + height) with
    ``origin = (x0, y0)``; the canvas case is the default origin (0, 0).

    Args:
        n_clusters: Number of centroids K
        width: Width of the bounding rectangle
        height: Height of the bounding rectangle
        min_separation: Minimum distance between any two centroids
            (defaults to min(width, height) / 5)
        max_attempts: Candidates drawn per centroid before giving up
        integer_coords: Snap candidates down to the integer pixel grid
        origin: Lower-left corner of the rectangle
        generator: Optional torch generator for reproducibility
        dtype: Data type of the result

    Returns:
        (K, 2) tensor of centroids

    Raises:
        InvalidArgument: If K or the rectangle is invalid
        DegenerateInitialization: If a centroid cannot be placed within
            max_attempts draws
    """
    check_n_clusters(n_clusters)
    check_bounds(width, height)
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be positive, got {max_attempts}")

    if min_separation is None:
        min_separation = default_min_separation(width, height)

    scale = torch.tensor([width, height], dtype=dtype)
    offset = torch.tensor(origin, dtype=dtype)
    centroids = torch.zeros(n_clusters, 2, dtype=dtype)

    for k in range(n_clusters):
        for _ in range(max_attempts):
            candidate = offset + torch.rand(2, generator=generator, dtype=dtype) * scale
            if integer_coords:
                candidate = torch.floor(candidate)

            if k == 0:
                break
            diff = centroids[:k] - candidate.unsqueeze(0)
            nearest = torch.sqrt(torch.sum(diff * diff, dim=1)).min()
            if nearest >= min_separation:
                break
        else:
            raise DegenerateInitialization(n_clusters, k, max_attempts, min_separation)

        centroids[k] = candidate

    return centroids


class SeparatedRandomInit(InitializationStrategy):
    """Uniform random centroids with a minimum pairwise separation.

    Candidates are resampled until they are at least ``min_separation``
    from every centroid accepted so far. Retries are bounded per centroid;
    callers that pick K too large for the rectangle get a
    DegenerateInitialization instead of an endless loop.
    """

    def __init__(self, width: float, height: float,
                 min_separation: Optional[float] = None,
                 max_attempts: int = DEFAULT_MAX_ATTEMPTS,
                 integer_coords: bool = True,
                 origin: Tuple[float, float] = (0.0, 0.0),
                 generator: Optional[torch.Generator] = None,
                 dtype: torch.dtype = DEFAULT_DTYPE):
        check_bounds(width, height)
        self.width = width
        self.height = height
        self.min_separation = (default_min_separation(width, height)
                               if min_separation is None else min_separation)
        self.max_attempts = max_attempts
        self.integer_coords = integer_coords
        self.origin = origin
        self.generator = generator
        self.dtype = dtype

    def initialize(self, n_clusters: int, **kwargs) -> Tensor:
        """Initialize K separated centroids.

        Args:
            n_clusters: Number of centroids
            **kwargs: Ignored

        Returns:
            (K, 2) tensor of centroids
        """
        return separated_random_centroids(
            n_clusters,
            self.width,
            self.height,
            min_separation=self.min_separation,
            max_attempts=self.max_attempts,
            integer_coords=self.integer_coords,
            origin=self.origin,
            generator=self.generator,
            dtype=self.dtype
        )
