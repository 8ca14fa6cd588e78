"""Initialization strategies for k-means centroids."""

from .separated_random import (
    SeparatedRandomInit,
    separated_random_centroids,
    default_min_separation,
    SEPARATION_DIVISOR,
    DEFAULT_MAX_ATTEMPTS
)
from .from_previous import FromPreviousInit

__all__ = [
    'SeparatedRandomInit',
    'separated_random_centroids',
    'default_min_separation',
    'SEPARATION_DIVISOR',
    'DEFAULT_MAX_ATTEMPTS',
    'FromPreviousInit'
]
