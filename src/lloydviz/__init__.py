"""
lloydviz: a visual demonstration of Lloyd's k-means clustering in 2D.

The package contains the iterative clustering engine (centroid
initialization, nearest-centroid assignment, mean update, convergence
test), an iteration driver that reports every intermediate state to a
presentation callback, and a few collaborators around it:
- an offline KMeans estimator
- synthetic demo datasets (blobs, "Mickey", uniform scatter)
- matplotlib rendering

Example usage:
    >>> from lloydviz import IterationDriver, make_mickey
    >>>
    >>> groups = make_mickey(800, 600, rng=0)
    >>> states = []
    >>> driver = IterationDriver(lambda s, done: states.append(s), 800, 600)
    >>> handle = driver.start_run(3, 100, groups)
    >>> handle.status.is_terminal
    True
"""

__version__ = '0.1.0'

# Import main algorithms
from .algorithms.driver import IterationDriver, RunHandle, RunStatus
from .algorithms.kmeans import KMeans

# Engine
from .initialization import SeparatedRandomInit, FromPreviousInit, separated_random_centroids
from .assignments import HardAssignment, assign_points
from .updates import MeanUpdater, recompute_centroids
from .utils.convergence import CentroidShift, centroids_converged

# Datasets
from .datasets import (
    make_separated_blobs,
    make_mickey,
    make_uniform_scatter,
    load_dataset
)

# Convenience imports
from .base import (
    Point,
    ClusteringState,
    LloydVizError,
    InvalidArgument,
    DegenerateInitialization
)

__all__ = [
    # Driver and estimator
    'IterationDriver',
    'RunHandle',
    'RunStatus',
    'KMeans',

    # Engine
    'SeparatedRandomInit',
    'FromPreviousInit',
    'separated_random_centroids',
    'HardAssignment',
    'assign_points',
    'MeanUpdater',
    'recompute_centroids',
    'CentroidShift',
    'centroids_converged',

    # Datasets
    'make_separated_blobs',
    'make_mickey',
    'make_uniform_scatter',
    'load_dataset',

    # Core data structures
    'Point',
    'ClusteringState',

    # Errors
    'LloydVizError',
    'InvalidArgument',
    'DegenerateInitialization',

    # Version
    '__version__'
]
