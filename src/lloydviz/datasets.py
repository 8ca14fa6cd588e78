"""
Synthetic 2D point sets for the k-means demonstration.

Every generator returns a list of point groups, each an (n_i, 2) float
array. Groups only reflect how the points were generated; the clustering
engine flattens them.

Intended usage:
    >>> groups = make_mickey(800, 600, rng=0)
    >>> [g.shape for g in groups]
    [(1500, 2), (200, 2), (200, 2)]
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Tuple, Union
import numpy as np
import torch

from .base.exceptions import InvalidArgument
from .initialization.separated_random import separated_random_centroids
from .utils.validation import check_bounds, check_n_clusters

NDArray = np.ndarray
RandomLike = Union[None, int, np.random.Generator]


def _rng(rng: RandomLike) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


def points_in_disc(
    n_points: int,
    center: Tuple[float, float],
    radius: float,
    width: float,
    height: float,
    rng: RandomLike = None,
) -> NDArray:
    """
    Draw points uniformly inside a disc, clamped to the canvas.

    The radius is scaled by sqrt(u) so density is uniform over the area.
    Points falling outside [0, width] x [0, height] are clamped onto its
    border.

    Returns
    -------
    (n_points, 2) ndarray, float64
    """
    gen = _rng(rng)
    angle = gen.random(n_points) * 2 * np.pi
    r = np.sqrt(gen.random(n_points)) * radius

    x = np.clip(center[0] + r * np.cos(angle), 0.0, width)
    y = np.clip(center[1] + r * np.sin(angle), 0.0, height)
    return np.column_stack([x, y])


def make_separated_blobs(
    n_clusters: int,
    width: float,
    height: float,
    n_per: int = 250,
    radius: float = 75.0,
    rng: RandomLike = None,
) -> List[NDArray]:
    """
    Disc-shaped blobs around separated random centers.

    Blob centers are placed the same way initial centroids are, so they
    sit at least min(width, height) / 5 apart.

    Parameters
    ----------
    n_clusters : int
        Number of blobs.
    n_per : int, default=250
        Points per blob.
    radius : float, default=75
        Blob radius.
    """
    check_n_clusters(n_clusters)
    check_bounds(width, height)
    gen = _rng(rng)

    generator = torch.Generator()
    generator.manual_seed(int(gen.integers(0, 2**31 - 1)))
    centers = separated_random_centroids(n_clusters, width, height, generator=generator)

    return [
        points_in_disc(n_per, (float(cx), float(cy)), radius, width, height, rng=gen)
        for cx, cy in centers.tolist()
    ]


def make_mickey(
    width: float,
    height: float,
    head_radius: float = 200.0,
    head_points: int = 1500,
    ear_radius: float = 80.0,
    ear_points: int = 200,
    rng: RandomLike = None,
) -> List[NDArray]:
    """
    A large head centered on the canvas with two ears on top.

    Ears sit 0.8 * head_radius left/right of and above the head center.
    Returns [head, left_ear, right_ear].
    """
    check_bounds(width, height)
    gen = _rng(rng)

    cx, cy = width / 2, height / 2
    offset = head_radius * 0.8

    head = points_in_disc(head_points, (cx, cy), head_radius, width, height, rng=gen)
    left = points_in_disc(ear_points, (cx - offset, cy - offset), ear_radius,
                          width, height, rng=gen)
    right = points_in_disc(ear_points, (cx + offset, cy - offset), ear_radius,
                           width, height, rng=gen)
    return [head, left, right]


def make_uniform_scatter(
    width: float,
    height: float,
    n_points: int = 1500,
    rng: RandomLike = None,
) -> List[NDArray]:
    """
    Points scattered uniformly over the canvas, each in its own group.

    A jitter of U(-0.5, 0.5) is added on both axes, so points may land
    just outside the canvas.
    """
    check_bounds(width, height)
    gen = _rng(rng)

    xy = gen.random((n_points, 2)) * np.array([width, height])
    xy += gen.random((n_points, 2)) - 0.5
    return [row.reshape(1, 2) for row in xy]


DATASETS: Dict[str, Callable[..., List[NDArray]]] = {
    'random': make_separated_blobs,
    'mickey': make_mickey,
    'uniform': make_uniform_scatter,
}


def load_dataset(
    name: str,
    width: float,
    height: float,
    n_clusters: Optional[int] = None,
    rng: RandomLike = None,
) -> List[NDArray]:
    """
    Generate one of the named datasets.

    'random' needs n_clusters (the number of blobs); the other datasets
    ignore it.

    Raises
    ------
    InvalidArgument
        For an unknown name or a missing n_clusters.
    """
    if name not in DATASETS:
        raise InvalidArgument(f"Unknown dataset {name!r}; expected one of {sorted(DATASETS)}")

    if name == 'random':
        if n_clusters is None:
            raise InvalidArgument("The 'random' dataset needs n_clusters")
        return make_separated_blobs(n_clusters, width, height, rng=rng)

    return DATASETS[name](width, height, rng=rng)
