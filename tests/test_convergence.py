# tests/test_convergence.py
"""
Convergence criterion behavior.

Covers:
- centroids_converged: strict all-or-nothing check against tol
- CentroidShift: same predicate through the criterion interface, plus history

All tests run on CPU; these are pure logic checks.
"""

from __future__ import annotations

import pytest
import torch

from lloydviz.utils.convergence import CentroidShift, centroids_converged, DEFAULT_TOL


def _c(rows):
    return torch.tensor(rows, dtype=torch.float64)


def test_default_tolerance():
    assert DEFAULT_TOL == 1e-5
    assert CentroidShift().tol == 1e-5


def test_fixed_point_converges():
    C = _c([[0.0, 0.5], [10.0, 0.5]])
    assert centroids_converged(C, C.clone()) is True


def test_small_moves_converge_large_do_not():
    prev = _c([[0.0, 0.0], [10.0, 0.0]])
    assert centroids_converged(prev, prev + 5e-6) is True
    assert centroids_converged(prev, prev + _c([[2e-5, 0.0], [0.0, 0.0]])) is False


def test_all_centroids_must_settle():
    prev = _c([[0.0, 0.0], [10.0, 0.0], [20.0, 0.0]])
    new = prev.clone()
    new[2, 1] = 1.0  # only one centroid moves
    assert centroids_converged(prev, new) is False


def test_custom_tolerance():
    prev = _c([[0.0, 0.0]])
    new = _c([[0.3, 0.4]])  # moved by 0.5
    assert centroids_converged(prev, new, tol=1.0) is True
    assert centroids_converged(prev, new, tol=0.4) is False


def test_shape_mismatch_raises():
    with pytest.raises(ValueError):
        centroids_converged(_c([[0.0, 0.0]]), _c([[0.0, 0.0], [1.0, 1.0]]))


def test_centroid_shift_history_and_reset():
    crit = CentroidShift(tol=1e-3)

    prev = _c([[0.0, 0.0], [5.0, 5.0]])
    moved = _c([[0.0, 3.0], [5.0, 5.0]])

    assert crit.check({"iteration": 1, "previous_centroids": prev, "centroids": moved}) is False
    assert crit.check({"iteration": 2, "previous_centroids": moved, "centroids": moved}) is True

    assert [h["iteration"] for h in crit.history] == [1, 2]
    assert crit.history[0]["max_shift"] == pytest.approx(3.0)
    assert crit.history[1]["max_shift"] == 0.0
    assert crit.history[1]["converged"] is True

    crit.reset()
    assert crit.history == []


def test_centroid_shift_rejects_nonpositive_tol():
    with pytest.raises(ValueError):
        CentroidShift(tol=0.0)
