"""
Input validation and conversion utilities.

Turns the point groups handed over by data sources into a single flat
(n, 2) tensor and checks the scalar arguments of a clustering request.
"""

from typing import Optional, Union, Sequence, Any, Tuple
import math
import numbers
import torch
from torch import Tensor
import numpy as np

from ..base.data_structures import Point, DEFAULT_DTYPE
from ..base.exceptions import InvalidArgument


PointGroups = Union[Tensor, np.ndarray, Sequence[Any]]


def _group_to_tensor(group: Any, dtype: torch.dtype) -> Tensor:
    """Convert one input group into an (n, 2) tensor."""
    if isinstance(group, Tensor):
        X = group.to(dtype=dtype)
    elif isinstance(group, np.ndarray):
        try:
            X = torch.as_tensor(np.ascontiguousarray(group)).to(dtype=dtype)
        except (TypeError, ValueError) as e:
            raise InvalidArgument(f"Cannot convert array to coordinates: {e}")
    elif isinstance(group, Point):
        X = torch.tensor([group.as_tuple()], dtype=dtype)
    elif isinstance(group, (list, tuple)):
        if len(group) == 0:
            return torch.zeros(0, 2, dtype=dtype)
        try:
            rows = [p.as_tuple() if isinstance(p, Point) else tuple(p) for p in group]
            X = torch.tensor(rows, dtype=dtype)
        except (TypeError, ValueError) as e:
            raise InvalidArgument(f"Cannot convert point group to coordinates: {e}")
    else:
        raise InvalidArgument(f"Cannot convert {type(group)} to points")

    if X.dim() == 1 and X.numel() == 2:
        X = X.unsqueeze(0)
    if X.dim() != 2 or X.shape[1] != 2:
        raise InvalidArgument(f"Expected points of shape (n, 2), got {tuple(X.shape)}")
    return X


def _is_flat_pair(item: Any) -> bool:
    return (isinstance(item, (list, tuple)) and len(item) == 2
            and all(isinstance(v, numbers.Real) and not isinstance(v, bool)
                    for v in item))


def flatten_point_groups(point_groups: PointGroups,
                         dtype: torch.dtype = DEFAULT_DTYPE) -> Tensor:
    """Flatten input point groups into one (n, 2) tensor.

    Grouping carries no meaning for clustering; points keep their input
    order, group by group.

    Args:
        point_groups: An (n, 2) tensor/array, or a sequence of groups where
            each group is a tensor, an array, a list of Points or (x, y)
            pairs, or a single Point
        dtype: Target data type

    Returns:
        (n, 2) tensor of points

    Raises:
        InvalidArgument: If the input is empty, malformed or non-finite
    """
    if isinstance(point_groups, (Tensor, np.ndarray)):
        X = _group_to_tensor(point_groups, dtype)
    elif isinstance(point_groups, (list, tuple)):
        if len(point_groups) > 0 and all(
                isinstance(item, Point) or _is_flat_pair(item) for item in point_groups):
            # A flat list of points rather than a list of groups
            X = _group_to_tensor(list(point_groups), dtype)
        else:
            groups = [_group_to_tensor(group, dtype) for group in point_groups]
            X = torch.cat(groups, dim=0) if groups else torch.zeros(0, 2, dtype=dtype)
    else:
        raise InvalidArgument(f"Cannot convert {type(point_groups)} to points")

    if X.shape[0] == 0:
        raise InvalidArgument("Input point set is empty")

    if torch.isnan(X).any():
        raise InvalidArgument("Input contains NaN values")
    if torch.isinf(X).any():
        raise InvalidArgument("Input contains infinite values")

    return X


def check_n_clusters(n_clusters: int) -> None:
    """Validate the number of clusters K.

    Empty clusters are legal, so K may exceed the number of points.

    Raises:
        InvalidArgument: If K is not a positive integer
    """
    if isinstance(n_clusters, bool) or not isinstance(n_clusters, (int, np.integer)):
        raise InvalidArgument(f"n_clusters must be int, got {type(n_clusters)}")

    if n_clusters < 1:
        raise InvalidArgument(f"n_clusters must be positive, got {n_clusters}")


def check_max_iter(max_iter: int) -> None:
    """Validate the iteration cap."""
    if isinstance(max_iter, bool) or not isinstance(max_iter, (int, np.integer)):
        raise InvalidArgument(f"max_iter must be int, got {type(max_iter)}")

    if max_iter <= 0:
        raise InvalidArgument(f"max_iter must be positive, got {max_iter}")


def check_bounds(width: float, height: float) -> None:
    """Validate the bounding rectangle used for initialization."""
    for name, value in (('width', width), ('height', height)):
        if not isinstance(value, (int, float, np.number)) or not math.isfinite(value):
            raise InvalidArgument(f"{name} must be a finite number, got {value!r}")
        if value <= 0:
            raise InvalidArgument(f"{name} must be positive, got {value}")


def check_centroids(centroids: Union[Tensor, np.ndarray, Sequence[Any]],
                    n_clusters: Optional[int] = None,
                    dtype: torch.dtype = DEFAULT_DTYPE) -> Tensor:
    """Convert caller-supplied centroids to a (K, 2) tensor and check K."""
    C = _group_to_tensor(centroids, dtype)

    if C.shape[0] == 0:
        raise InvalidArgument("At least one centroid is required")

    if n_clusters is not None and C.shape[0] != n_clusters:
        raise InvalidArgument(f"Initial centers has {C.shape[0]} clusters, "
                              f"but n_clusters={n_clusters}")
    return C


def check_random_state(random_state: Optional[Union[int, torch.Generator]]) -> Optional[torch.Generator]:
    """Create generator from random state.

    Args:
        random_state: Seed or generator

    Returns:
        Generator or None
    """
    if random_state is None:
        return None
    elif isinstance(random_state, (int, np.integer)):
        generator = torch.Generator()
        generator.manual_seed(int(random_state))
        return generator
    elif isinstance(random_state, torch.Generator):
        return random_state
    else:
        raise TypeError(f"random_state must be int or Generator, got {type(random_state)}")


def data_extent(points: Tensor) -> Tuple[Tuple[float, float], float, float]:
    """Bounding rectangle [min x, max x] x [min y, max y] of a point set.

    Each side is at least 1 so the rectangle is never degenerate.

    Returns:
        (origin, width, height) where origin is the lower-left corner
    """
    lower = points.min(dim=0).values
    upper = points.max(dim=0).values
    width = max(1.0, float(upper[0] - lower[0]))
    height = max(1.0, float(upper[1] - lower[1]))
    return (float(lower[0]), float(lower[1])), width, height
