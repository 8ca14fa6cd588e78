# tests/test_driver.py
"""
Iteration driver state machine.

Covers:
- request validation (nothing starts, no callback)
- the order of one step and the terminal flag
- cancellation (no further callbacks, state dropped)
- one active run per driver
- timer-paced runs
"""

from __future__ import annotations

import threading
import time

import pytest
import torch

from lloydviz.algorithms.driver import IterationDriver, RunStatus
from lloydviz.base.exceptions import InvalidArgument, DegenerateInitialization
from lloydviz.initialization import FromPreviousInit, SeparatedRandomInit

from conftest import StateRecorder
from data_gen import four_point_scenario, random_points
from utils import assert_partition, assert_assignment_optimal


def _scenario_driver(callback, **kwargs):
    _, init = four_point_scenario()
    return IterationDriver(callback, 20, 20, initialization=FromPreviousInit(init), **kwargs)


@pytest.mark.parametrize("k,max_iter,groups", [
    (0, 10, [[(0.0, 0.0)]]),
    (-2, 10, [[(0.0, 0.0)]]),
    (2, 0, [[(0.0, 0.0)]]),
    (2, 10, []),
    (2, 10, [[], []]),
])
def test_invalid_requests_start_nothing(recorder, k, max_iter, groups):
    driver = IterationDriver(recorder, 800, 600)
    with pytest.raises(InvalidArgument):
        driver.start_run(k, max_iter, groups)
    assert driver.active_run is None
    assert recorder.calls == []


def test_degenerate_initialization_surfaces_synchronously(recorder):
    init = SeparatedRandomInit(50, 50, max_attempts=20)
    driver = IterationDriver(recorder, 50, 50, initialization=init)
    with pytest.raises(DegenerateInitialization):
        driver.start_run(500, 10, random_points(20, 50, 50, seed=0))
    assert driver.active_run is None
    assert recorder.calls == []


def test_synchronous_run_reports_every_step(recorder):
    points, _ = four_point_scenario()
    driver = _scenario_driver(recorder)

    handle = driver.start_run(2, 100, points)

    assert handle.status is RunStatus.CONVERGED
    assert handle.converged
    assert handle.wait(timeout=0)
    assert recorder.terminal_flags == [False, True]
    assert [s.iteration for s in recorder.states] == [1, 2]
    assert driver.active_run is None
    assert handle.state is recorder.states[-1]
    assert handle.state.converged


def test_states_are_consistent_with_previous_centroids(recorder, seed_all):
    points = random_points(400, seed=seed_all)
    init = random_points(6, seed=seed_all + 1)
    driver = IterationDriver(recorder, 800, 600, initialization=FromPreviousInit(init))

    driver.start_run(6, 100, points)

    previous = init
    for state in recorder.states:
        assert_partition(state, points)
        # Assignment used the centroids from before this step
        assert_assignment_optimal(points, state.labels, previous)
        previous = state.centroids

    # Exactly one terminal call, and it is the last one
    assert recorder.terminal_flags.count(True) == 1
    assert recorder.terminal_flags[-1] is True


def test_initial_state_before_first_step(recorder):
    points, init = four_point_scenario()
    driver = _scenario_driver(recorder, autostart=False)

    handle = driver.start_run(2, 10, points)

    assert handle.is_running
    assert handle.n_iter == 0
    assert torch.equal(handle.state.centroids, init)
    assert [len(c) for c in handle.state.clusters] == [0, 0]
    assert recorder.calls == []


def test_manual_stepping(recorder):
    points, _ = four_point_scenario()
    driver = _scenario_driver(recorder, autostart=False)
    handle = driver.start_run(2, 10, points)

    assert driver.step(handle) is True
    assert handle.n_iter == 1
    assert driver.step(handle) is False
    assert handle.status is RunStatus.CONVERGED

    # Stepping a finished run does nothing
    assert driver.step(handle) is False
    assert len(recorder.calls) == 2


def test_cancel_between_steps(recorder):
    points, _ = four_point_scenario()
    driver = _scenario_driver(recorder, autostart=False)
    handle = driver.start_run(2, 10, points)

    driver.step(handle)
    driver.cancel_run(handle)

    assert handle.cancelled
    assert handle.status is RunStatus.IDLE
    assert handle.state is None
    assert handle.wait(timeout=0)
    assert driver.active_run is None
    assert driver.step(handle) is False
    assert recorder.terminal_flags == [False]


def test_cancel_from_inside_callback():
    points = random_points(300, seed=1)
    calls = []
    holder = {}

    def on_update(state, terminal):
        calls.append(terminal)
        holder['driver'].cancel_run(holder['handle'])

    driver = IterationDriver(on_update, 800, 600, random_state=0, autostart=False)
    holder['driver'] = driver
    holder['handle'] = handle = driver.start_run(4, 100, points)

    driver.run_to_completion(handle)

    assert calls == [False]
    assert handle.cancelled


def test_cancel_finished_run_is_noop(recorder):
    points, _ = four_point_scenario()
    driver = _scenario_driver(recorder)
    handle = driver.start_run(2, 10, points)

    driver.cancel_run(handle)
    assert handle.status is RunStatus.CONVERGED
    assert not handle.cancelled
    assert handle.state is not None


def test_new_run_cancels_run_in_flight():
    points, _ = four_point_scenario()
    first, second = StateRecorder(), StateRecorder()
    callbacks = [first]

    driver = _scenario_driver(lambda s, t: callbacks[-1](s, t), autostart=False)
    h1 = driver.start_run(2, 10, points)
    driver.step(h1)

    callbacks.append(second)
    h2 = driver.start_run(2, 10, points)

    assert h1.cancelled and h1.state is None
    assert driver.active_run is h2
    assert h2.run_id == h1.run_id + 1

    driver.run_to_completion(h2)
    assert len(first.calls) == 1
    assert second.terminal_flags == [False, True]


def test_refused_request_keeps_run_in_flight(recorder):
    points, _ = four_point_scenario()
    driver = _scenario_driver(recorder, autostart=False)
    h1 = driver.start_run(2, 10, points)

    # Two fixed centroids cannot seed three clusters
    with pytest.raises(InvalidArgument):
        driver.start_run(3, 10, points)

    assert h1.status is RunStatus.RUNNING
    assert not h1.cancelled and h1.state is not None
    assert driver.active_run is h1

    driver.run_to_completion(h1)
    assert h1.status is RunStatus.CONVERGED
    assert recorder.terminal_flags == [False, True]


def test_degenerate_request_keeps_run_in_flight(recorder):
    init = SeparatedRandomInit(50, 50, max_attempts=20,
                               generator=torch.Generator().manual_seed(0))
    driver = IterationDriver(recorder, 50, 50, initialization=init, autostart=False)
    points = random_points(20, 50, 50, seed=0)
    h1 = driver.start_run(2, 10, points)

    with pytest.raises(DegenerateInitialization):
        driver.start_run(500, 10, points)

    assert h1.is_running
    assert driver.active_run is h1


def test_max_iterations_reached(recorder):
    points, _ = four_point_scenario()
    driver = _scenario_driver(recorder)

    handle = driver.start_run(2, 1, points)

    assert handle.status is RunStatus.MAX_ITERATIONS_REACHED
    assert not handle.converged
    assert recorder.terminal_flags == [True]
    assert recorder.states[0].converged is False


def test_verbose_output(capsys):
    points, _ = four_point_scenario()
    driver = _scenario_driver(lambda s, t: None, verbose=2)
    driver.start_run(2, 10, points)

    out = capsys.readouterr().out
    assert "Run 1: 2 clusters, 4 points" in out
    assert "Iteration   1: max shift = 0.500000" in out
    assert "Converged at iteration 2" in out


def test_interval_must_be_positive():
    with pytest.raises(ValueError):
        IterationDriver(lambda s, t: None, 800, 600, interval=0)


def test_paced_run_completes_in_background(recorder):
    points, _ = four_point_scenario()
    driver = _scenario_driver(recorder, interval=0.01)

    handle = driver.start_run(2, 10, points)
    assert handle.wait(timeout=5.0)

    assert handle.status is RunStatus.CONVERGED
    assert recorder.terminal_flags == [False, True]


def test_paced_run_cancel_stops_callbacks():
    points, _ = four_point_scenario()
    first_step = threading.Event()
    calls = []

    def on_update(state, terminal):
        calls.append(terminal)
        first_step.set()

    driver = _scenario_driver(on_update, interval=0.2)
    handle = driver.start_run(2, 10, points)

    assert first_step.wait(timeout=5.0)
    driver.cancel_run(handle)
    n_calls = len(calls)
    time.sleep(0.5)

    assert handle.cancelled
    assert len(calls) == n_calls == 1
