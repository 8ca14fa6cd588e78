# tests/utils.py
"""
Small, reusable helpers used across the lloydviz test suite.

Functions:
- assert_partition(state, points): every input point sits in exactly one cluster.
- assert_assignment_optimal(points, labels, centroids): no point is closer to another centroid.
- labels_equal_up_to_perm(y1, y2, K): label vectors agree after relabelling.
- time_block(label, meta=None): context manager that prints wall-clock time with optional metadata.
- print_timing(label, seconds, **meta): convenience printer for timings (used by time_block).
"""

from __future__ import annotations

import itertools
import json
import time
from contextlib import contextmanager
from typing import Any, Dict

import numpy as np
import torch


def _sorted_rows(X: torch.Tensor) -> np.ndarray:
    arr = X.detach().cpu().numpy().reshape(-1, 2)
    order = np.lexsort((arr[:, 1], arr[:, 0]))
    return arr[order]


def assert_partition(state, points: torch.Tensor) -> None:
    """
    Clusters of a state form a total, disjoint partition of the points.

    Compares the multiset of clustered points with the multiset of input
    points, and checks the labels agree with cluster membership.
    """
    assert len(state.clusters) == state.centroids.shape[0]
    assert sum(len(c) for c in state.clusters) == len(points)

    clustered = torch.cat(list(state.clusters), dim=0)
    assert np.array_equal(_sorted_rows(clustered), _sorted_rows(points))

    if state.labels is not None:
        for k, cluster in enumerate(state.clusters):
            assert torch.equal(points[state.labels == k], cluster)


def assert_assignment_optimal(points: torch.Tensor, labels: torch.Tensor,
                              centroids: torch.Tensor, atol: float = 1e-12) -> None:
    """Each point's own centroid is at least as close as every other centroid."""
    diff = points.unsqueeze(1) - centroids.unsqueeze(0)
    D = torch.sqrt((diff * diff).sum(dim=2))
    own = D[torch.arange(len(points)), labels]
    assert torch.all(own <= D.min(dim=1).values + atol)


def labels_equal_up_to_perm(y1: np.ndarray, y2: np.ndarray, K: int) -> bool:
    """Return True if y2 can be permuted to equal y1 exactly."""
    y1 = np.asarray(y1)
    y2 = np.asarray(y2)
    for perm in itertools.permutations(range(K)):
        mapping = np.array(perm)
        if np.array_equal(y1, mapping[y2]):
            return True
    return False


@contextmanager
def time_block(label: str, meta: Dict[str, Any] | None = None):
    """
    Context manager to time a block and print a single-line summary.

    Example
    -------
    >>> with time_block("fit", {"n": 400, "K": 2}):
    ...     model.fit(X)

    Output
    ------
    [timing] fit {"n":400,"K":2} 0.123s
    """
    t0 = time.perf_counter()
    try:
        yield
    finally:
        dt = time.perf_counter() - t0
        print_timing(label, dt, **(meta or {}))


def print_timing(label: str, seconds: float, **meta: Any) -> None:
    """
    Print timing in a compact, machine-readable single line.

    Example:
    [timing] fit {"n":400,"K":2} 0.123s
    """
    meta_str = ""
    if meta:
        # Compact JSON to make it easy to parse if needed
        try:
            meta_str = " " + json.dumps(meta, separators=(",", ":"))
        except TypeError:
            meta_str = " " + repr(meta)
    print(f"[timing] {label}{meta_str} {seconds:.3f}s")
