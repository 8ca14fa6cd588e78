"""
Error types raised by the clustering engine and iteration driver.

All failures are reported synchronously at the point of request; nothing
is raised from the middle of a run.
"""


class LloydVizError(Exception):
    """Base class for all errors raised by this package."""


class InvalidArgument(LloydVizError, ValueError):
    """A request was rejected because one of its arguments is unusable.

    Raised for K < 1, an empty point set, a non-positive iteration cap,
    malformed coordinates or a non-positive bounding rectangle.
    """


class DegenerateInitialization(LloydVizError, RuntimeError):
    """Centroid initialization could not place K separated centroids.

    The rejection sampler gave up after its attempt budget; K is too large
    for the bounding rectangle and the minimum separation.
    """

    def __init__(self, n_clusters: int, n_placed: int, max_attempts: int,
                 min_separation: float):
        self.n_clusters = n_clusters
        self.n_placed = n_placed
        self.max_attempts = max_attempts
        self.min_separation = min_separation
        super().__init__(
            f"Placed only {n_placed} of {n_clusters} centroids at least "
            f"{min_separation:.3f} apart after {max_attempts} attempts; "
            f"reduce n_clusters or the minimum separation"
        )
