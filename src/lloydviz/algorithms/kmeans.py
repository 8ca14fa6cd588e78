"""
K-means clustering estimator.

Offline, sklearn-style front end that runs the iteration driver
synchronously and keeps every intermediate state in ``history_``.
"""

from typing import Optional, List, Union
import warnings
import numpy as np
import torch
from torch import Tensor

from ..base.data_structures import ClusteringState, DEFAULT_DTYPE
from ..assignments.hard import nearest_centroid
from ..distances.euclidean import euclidean_distances
from ..initialization.separated_random import SeparatedRandomInit
from ..initialization.from_previous import FromPreviousInit
from ..utils.convergence import DEFAULT_TOL
from ..utils.validation import (
    PointGroups, flatten_point_groups, check_random_state, data_extent
)
from .driver import IterationDriver, RunStatus, DEFAULT_MAX_ITER


def within_cluster_sum_of_squares(points: Tensor, centroids: Tensor,
                                  labels: Tensor) -> float:
    """K-means objective: sum of squared distances to the owning centroid."""
    distances = euclidean_distances(points, centroids, squared=True)
    return float(torch.gather(distances, 1, labels.unsqueeze(1)).sum())


class KMeans:
    """Lloyd's k-means on 2D points.

    Parameters
    ----------
    n_clusters : int
        Number of clusters
    width, height : float, optional
        Canvas [0, width) x [0, height) for centroid initialization.
        When both are omitted, centroids are drawn inside the bounding box
        [min x, max x] x [min y, max y] of the data passed to ``fit``.
    init : str or array-like, default='separated'
        Initialization method:
        - 'separated' : uniform random centroids, pairwise separated by
          min(width, height) / 5
        - array of shape (n_clusters, 2) : use as initial centers
    max_iter : int, default=100
        Maximum number of iterations
    tol : float, default=1e-5
        Convergence tolerance on how far each centroid moves
    verbose : int, default=0
        Verbosity level
    random_state : int, optional
        Random seed for reproducibility

    Attributes
    ----------
    cluster_centers_ : Tensor of shape (n_clusters, 2)
        Cluster centroids
    labels_ : Tensor of shape (n_samples,)
        Cluster assignments for training data
    inertia_ : float
        Sum of squared distances to nearest cluster center
    n_iter_ : int
        Number of iterations run
    converged_ : bool
        Whether the centroids stopped moving before max_iter
    history_ : list of ClusteringState
        State after every iteration
    """

    def __init__(self,
                 n_clusters: int,
                 width: Optional[float] = None,
                 height: Optional[float] = None,
                 init: Union[str, Tensor, np.ndarray, list] = 'separated',
                 max_iter: int = DEFAULT_MAX_ITER,
                 tol: float = DEFAULT_TOL,
                 verbose: int = 0,
                 random_state: Optional[int] = None):
        self.n_clusters = n_clusters
        self.width = width
        self.height = height
        self.init = init
        self.max_iter = max_iter
        self.tol = tol
        self.verbose = verbose
        self.random_state = random_state

        self.fitted_ = False
        self.labels_ = None
        self.n_iter_ = 0
        self.converged_ = False
        self.history_: List[ClusteringState] = []

    def _create_initialization(self, X: Tensor):
        origin, width, height = data_extent(X)
        # An explicit width/height describes a canvas anchored at (0, 0)
        if self.width is not None or self.height is not None:
            origin = (0.0, 0.0)
            upper = X.max(dim=0).values
            width = self.width if self.width is not None else max(1.0, float(upper[0]))
            height = self.height if self.height is not None else max(1.0, float(upper[1]))

        if isinstance(self.init, str):
            if self.init != 'separated':
                raise ValueError(f"Unknown init method: {self.init}")
            # Data coordinates are not pixels, so no integer snapping
            initialization = SeparatedRandomInit(
                width, height, integer_coords=False, origin=origin,
                generator=check_random_state(self.random_state)
            )
        else:
            # Custom initial centers provided
            initialization = FromPreviousInit(self.init)

        return initialization, width, height

    def _record(self, state: ClusteringState, terminal: bool) -> None:
        self.history_.append(state)

    def fit(self, X: PointGroups, y=None) -> 'KMeans':
        """Fit K-means clustering.

        Parameters
        ----------
        X : array-like of shape (n_samples, 2) or sequence of point groups
            Training data
        y : Ignored
            Not used, present for API consistency

        Returns
        -------
        self : KMeans
            Fitted estimator
        """
        X = flatten_point_groups(X, dtype=DEFAULT_DTYPE)
        initialization, width, height = self._create_initialization(X)

        self.history_ = []
        driver = IterationDriver(
            self._record,
            width,
            height,
            tol=self.tol,
            initialization=initialization,
            verbose=self.verbose
        )

        if self.verbose:
            print(f"Initializing {self.n_clusters} clusters...")

        handle = driver.start_run(self.n_clusters, self.max_iter, X)

        final_state = self.history_[-1]
        self._centers = final_state.centroids
        self.labels_ = final_state.labels
        self.n_iter_ = final_state.iteration
        self.converged_ = handle.status is RunStatus.CONVERGED
        self._inertia = within_cluster_sum_of_squares(X, self._centers, self.labels_)

        if self.verbose and not self.converged_:
            warnings.warn(f"Failed to converge after {self.max_iter} iterations")

        self.fitted_ = True
        return self

    def fit_predict(self, X: PointGroups, y=None) -> Tensor:
        """Fit and return labels."""
        self.fit(X, y)
        return self.labels_

    def predict(self, X: PointGroups) -> Tensor:
        """Predict the closest cluster for each point.

        Parameters
        ----------
        X : array-like of shape (n_samples, 2)
            New data to predict

        Returns
        -------
        labels : Tensor of shape (n_samples,)
            Cluster labels
        """
        if not self.fitted_:
            raise RuntimeError("Model must be fitted before calling predict")

        X = flatten_point_groups(X, dtype=DEFAULT_DTYPE)
        return nearest_centroid(X, self._centers)

    def score(self, X: PointGroups, y=None) -> float:
        """Opposite of the value of X on the K-means objective."""
        labels = self.predict(X)
        X = flatten_point_groups(X, dtype=DEFAULT_DTYPE)
        return -within_cluster_sum_of_squares(X, self._centers, labels)

    @property
    def cluster_centers_(self) -> Tensor:
        """Get cluster centers."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self._centers

    @property
    def inertia_(self) -> float:
        """Get final objective value."""
        if not self.fitted_:
            raise RuntimeError("Model must be fitted first")
        return self._inertia
