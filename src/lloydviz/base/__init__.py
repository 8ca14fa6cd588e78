"""Base classes, data structures and errors for the k-means engine."""

from .interfaces import (
    InitializationStrategy,
    AssignmentStrategy,
    ParameterUpdater,
    ConvergenceCriterion
)

from .data_structures import (
    DEFAULT_DTYPE,
    Point,
    ClusteringState,
    points_to_tensor,
    tensor_to_points,
    empty_clusters
)

from .exceptions import (
    LloydVizError,
    InvalidArgument,
    DegenerateInitialization
)

__all__ = [
    # Interfaces
    'InitializationStrategy',
    'AssignmentStrategy',
    'ParameterUpdater',
    'ConvergenceCriterion',

    # Data structures
    'DEFAULT_DTYPE',
    'Point',
    'ClusteringState',
    'points_to_tensor',
    'tensor_to_points',
    'empty_clusters',

    # Errors
    'LloydVizError',
    'InvalidArgument',
    'DegenerateInitialization'
]
