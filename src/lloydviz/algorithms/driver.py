"""
Iteration driver for Lloyd's k-means.

Owns the ClusteringState of a run and advances it one iteration at a
time, handing every intermediate state to a presentation callback.

A run moves through ``IDLE -> RUNNING -> {CONVERGED, MAX_ITERATIONS_REACHED}``.
Cancelling a running run drops its state and sends it back to ``IDLE``
without any further callbacks. At most one run per driver is active;
starting a new run cancels the one in flight.

Steps can be driven three ways:
- synchronously inside ``start_run`` (``interval=None``, the default),
- manually by the caller through ``step`` (``autostart=False``),
- on a background timer, one step every ``interval`` seconds.
"""

from enum import Enum
from typing import Optional, Callable, Any
import threading
import time
import torch
from torch import Tensor

from ..base.interfaces import (
    InitializationStrategy, AssignmentStrategy, ParameterUpdater,
    ConvergenceCriterion
)
from ..base.data_structures import ClusteringState, empty_clusters, DEFAULT_DTYPE
from ..assignments.hard import HardAssignment, split_by_label
from ..updates.mean import MeanUpdater
from ..initialization.separated_random import SeparatedRandomInit
from ..utils.convergence import CentroidShift, DEFAULT_TOL
from ..utils.validation import (
    PointGroups, flatten_point_groups, check_n_clusters, check_max_iter,
    check_bounds, check_random_state
)


DEFAULT_INTERVAL = 0.5
DEFAULT_MAX_ITER = 100

StateCallback = Callable[[ClusteringState, bool], Any]


class RunStatus(Enum):
    """Lifecycle of a single clustering run."""

    IDLE = 'idle'
    RUNNING = 'running'
    CONVERGED = 'converged'
    MAX_ITERATIONS_REACHED = 'max_iterations_reached'

    @property
    def is_terminal(self) -> bool:
        return self in (RunStatus.CONVERGED, RunStatus.MAX_ITERATIONS_REACHED)


class RunHandle:
    """Handle to one run started by an IterationDriver.

    The handle owns the run's ClusteringState; only the driver that
    created it mutates it.
    """

    def __init__(self, run_id: int, n_clusters: int, max_iter: int,
                 points: Tensor, state: ClusteringState):
        self.run_id = run_id
        self.n_clusters = n_clusters
        self.max_iter = max_iter
        self.points = points
        self.state: Optional[ClusteringState] = state
        self.status = RunStatus.RUNNING
        self.cancelled = False
        self.started_at = time.time()

        self._done = threading.Event()
        self._timer: Optional[threading.Timer] = None

    @property
    def is_running(self) -> bool:
        return self.status is RunStatus.RUNNING

    @property
    def converged(self) -> bool:
        return self.status is RunStatus.CONVERGED

    @property
    def n_iter(self) -> int:
        """Iterations completed so far (0 once cancelled)."""
        return 0 if self.state is None else self.state.iteration

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the run finishes or is cancelled.

        Returns:
            False if the timeout expired first
        """
        return self._done.wait(timeout)

    def _finish(self, status: RunStatus) -> None:
        self.status = status
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        self._done.set()

    def __repr__(self) -> str:
        return (f"RunHandle(run_id={self.run_id}, n_clusters={self.n_clusters}, "
                f"status={self.status.value}, n_iter={self.n_iter})")


class IterationDriver:
    """Runs Lloyd's algorithm and reports every iteration.

    Parameters
    ----------
    on_state_update : callable
        Called as ``on_state_update(state, terminal)`` after every step.
        ``terminal`` is True on the last call of a run that converged or
        hit its iteration cap. Never called after a cancellation.
    width, height : float
        Bounding rectangle for the default centroid initialization
    tol : float, default=1e-5
        Every centroid must move less than this for convergence
    interval : float, optional
        Seconds between steps on a background timer. None runs the whole
        run synchronously inside ``start_run``.
    initialization : InitializationStrategy, optional
        Defaults to SeparatedRandomInit over the bounding rectangle
    random_state : int or torch.Generator, optional
        Seed for the default initialization
    autostart : bool, default=True
        With ``interval=None``, False leaves stepping to the caller
    verbose : int, default=0
        Verbosity level (0=silent, 1=progress, 2=detailed)
    """

    def __init__(self,
                 on_state_update: StateCallback,
                 width: float,
                 height: float,
                 tol: float = DEFAULT_TOL,
                 interval: Optional[float] = None,
                 initialization: Optional[InitializationStrategy] = None,
                 random_state: Optional[int] = None,
                 autostart: bool = True,
                 verbose: int = 0,
                 dtype: torch.dtype = DEFAULT_DTYPE):
        check_bounds(width, height)
        if interval is not None and interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")

        self.on_state_update = on_state_update
        self.width = width
        self.height = height
        self.tol = tol
        self.interval = interval
        self.autostart = autostart
        self.verbose = verbose
        self.dtype = dtype

        if initialization is None:
            initialization = SeparatedRandomInit(
                width, height,
                generator=check_random_state(random_state),
                dtype=dtype
            )
        self.initialization_strategy: InitializationStrategy = initialization
        self.assignment_strategy: AssignmentStrategy = HardAssignment()
        self.update_strategy: ParameterUpdater = MeanUpdater()
        self.convergence_criterion: ConvergenceCriterion = CentroidShift(tol=tol)

        self._lock = threading.RLock()
        self._active: Optional[RunHandle] = None
        self._run_counter = 0

    @property
    def active_run(self) -> Optional[RunHandle]:
        """The run currently in progress, if any."""
        return self._active

    def start_run(self, n_clusters: int, max_iter: int,
                  point_groups: PointGroups) -> RunHandle:
        """Begin a new run, cancelling any run still in flight.

        Args:
            n_clusters: Number of clusters K
            max_iter: Maximum number of iterations
            point_groups: Input points; grouping is ignored

        Returns:
            Handle of the new run

        Raises:
            InvalidArgument: If K < 1, max_iter < 1 or there are no points
            DegenerateInitialization: If K separated centroids cannot be placed
        """
        check_n_clusters(n_clusters)
        check_max_iter(max_iter)
        points = flatten_point_groups(point_groups, dtype=self.dtype)

        with self._lock:
            # A request refused by initialization leaves the active run alone
            centroids = self.initialization_strategy.initialize(n_clusters)
            centroids = centroids.to(self.dtype)

            if self._active is not None:
                self._cancel_locked(self._active)

            state = ClusteringState(
                centroids=centroids,
                clusters=empty_clusters(n_clusters, dtype=self.dtype),
                iteration=0
            )

            self._run_counter += 1
            handle = RunHandle(self._run_counter, int(n_clusters), int(max_iter),
                               points, state)
            self._active = handle
            self.convergence_criterion.reset()

            if self.verbose:
                print(f"Run {handle.run_id}: {n_clusters} clusters, "
                      f"{points.shape[0]} points, max_iter={max_iter}")

            if self.interval is not None:
                self._schedule(handle)

        if self.interval is None and self.autostart:
            self.run_to_completion(handle)

        return handle

    def cancel_run(self, handle: RunHandle) -> None:
        """Stop a running run; its state is discarded. No-op once finished."""
        with self._lock:
            self._cancel_locked(handle)

    def step(self, handle: RunHandle) -> bool:
        """Advance a run by exactly one iteration.

        Returns:
            True if the run is still running afterwards
        """
        with self._lock:
            if handle.status is not RunStatus.RUNNING:
                return False

            state = handle.state
            iter_start_time = time.time()

            # Assignment step against the current centroids
            labels = self.assignment_strategy.compute_assignments(
                handle.points, state.centroids
            )
            clusters = split_by_label(handle.points, labels, handle.n_clusters)

            # Snapshot for the convergence check, then update
            previous_centroids = state.centroids
            centroids = self.update_strategy.update(clusters, previous_centroids)

            iteration = state.iteration + 1
            converged = self.convergence_criterion.check({
                'iteration': iteration,
                'previous_centroids': previous_centroids,
                'centroids': centroids
            })
            terminal = converged or iteration >= handle.max_iter

            new_state = ClusteringState(
                centroids=centroids,
                clusters=clusters,
                iteration=iteration,
                labels=labels,
                converged=converged
            )
            handle.state = new_state

            if self.verbose >= 2:
                shift = self.convergence_criterion.history[-1]['max_shift']
                print(f"Iteration {iteration:3d}: max shift = {shift:.6f} "
                      f"({time.time() - iter_start_time:.3f}s)")

            self.on_state_update(new_state, terminal)

            # The callback may have cancelled or replaced this run
            if handle.status is not RunStatus.RUNNING:
                return False

            if terminal:
                status = (RunStatus.CONVERGED if converged
                          else RunStatus.MAX_ITERATIONS_REACHED)
                handle._finish(status)
                if self._active is handle:
                    self._active = None
                if self.verbose:
                    if converged:
                        print(f"Converged at iteration {iteration}")
                    else:
                        print(f"Reached maximum of {handle.max_iter} iterations")
                return False

            return True

    def run_to_completion(self, handle: RunHandle) -> RunHandle:
        """Step a run on the calling thread until it stops."""
        while self.step(handle):
            pass

        if self.verbose and handle.status.is_terminal:
            print(f"Total run time: {time.time() - handle.started_at:.3f}s")
        return handle

    def _schedule(self, handle: RunHandle) -> None:
        timer = threading.Timer(self.interval, self._tick, args=(handle,))
        timer.daemon = True
        handle._timer = timer
        timer.start()

    def _tick(self, handle: RunHandle) -> None:
        try:
            more = self.step(handle)
        except Exception:
            self.cancel_run(handle)
            raise

        with self._lock:
            if more and handle.status is RunStatus.RUNNING:
                self._schedule(handle)

    def _cancel_locked(self, handle: RunHandle) -> None:
        if handle.status is not RunStatus.RUNNING:
            return

        handle.cancelled = True
        handle.state = None
        handle._finish(RunStatus.IDLE)
        if self._active is handle:
            self._active = None

        if self.verbose:
            print(f"Run {handle.run_id} cancelled")
