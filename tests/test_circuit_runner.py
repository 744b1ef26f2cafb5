"""Batch and step-by-step circuit execution."""

import numpy as np
import pytest

from pypaoa import (
    InvalidParameter,
    build_circuit,
    generate_random_regular_graph,
    random_params,
    run_circuit,
    run_circuit_step_by_step,
)
from pypaoa.circuit_runner import sample_state


def test_sample_state_picks_first_cumulative_hit():
    probs = np.array([0.0, 0.25, 0.75, 0.0])

    assert sample_state(probs, 0.1) == 1
    assert sample_state(probs, 0.25) == 1
    assert sample_state(probs, 0.26) == 2
    assert sample_state(probs, 0.99) == 2


def test_sample_state_falls_back_to_last_state():
    assert sample_state(np.zeros(4), 0.5) == 3


def test_deterministic_gate():
    # p = 1: input 00 always goes to 01
    circuit = build_circuit('reduced', [(0, 1)], [1.0], 1)
    results = run_circuit([0, 0], circuit, 10, rng=0)

    assert results.shape == (10, 2)
    assert np.all(results == [0, 1])


def test_batch_results_are_bits():
    rng = np.random.default_rng(8)
    graph = generate_random_regular_graph(10, 3, rng=rng)
    circuit = build_circuit('standard', graph, random_params('standard', 2, graph.n_edges, rng), 2)

    results = run_circuit(np.zeros(10, dtype=np.uint8), circuit, 50, rng=rng)

    assert results.shape == (50, 10)
    assert results.dtype == np.uint8
    assert set(np.unique(results)) <= {0, 1}


def test_every_reduced_gate_cuts_its_edge():
    circuit = build_circuit('reduced', [(0, 1)], [0.3], 1)
    results = run_circuit([1, 1], circuit, 100, rng=3)

    assert np.all(results[:, 0] != results[:, 1])


def test_empty_circuit_returns_start():
    circuit = build_circuit('reduced', [], [], 2)
    results = run_circuit([1, 0, 1], circuit, 4, rng=1)

    assert np.all(results == [1, 0, 1])


def make_circuit(seed):
    rng = np.random.default_rng(seed)
    graph = generate_random_regular_graph(8, 3, rng=rng)
    params = random_params('reduced', 2, graph.n_edges, rng)

    return build_circuit('reduced', graph, params, 2)


def test_step_trace_length_and_chaining():
    circuit = make_circuit(4)
    steps = list(run_circuit_step_by_step(np.zeros(8, dtype=np.uint8), circuit, rng=4))

    assert len(steps) == len(circuit)
    for previous, step in zip(steps, steps[1:]):
        assert np.array_equal(previous.bits_after, step.bits_before)


def test_step_info_contents():
    circuit = make_circuit(5)
    start = np.array([1, 0, 1, 1, 0, 0, 1, 0], dtype=np.uint8)

    for gate, step in zip(circuit, run_circuit_step_by_step(start, circuit, rng=5)):
        i, j = step.active_edge
        assert step.active_edge == gate.bit_indices
        assert np.array_equal(step.matrix, gate.matrix)
        assert step.input_state == 2 * step.bits_before[i] + step.bits_before[j]
        assert step.output_state == 2 * step.bits_after[i] + step.bits_after[j]
        assert np.array_equal(step.probs, gate.matrix[:, step.input_state])
        others = [k for k in range(8) if k not in (i, j)]
        assert np.array_equal(step.bits_before[others], step.bits_after[others])


@pytest.mark.parametrize("seed", [0, 1, 2, 3])
def test_step_trace_matches_batch(seed):
    circuit = make_circuit(seed)
    start = np.array([0, 1, 0, 1, 0, 1, 0, 1], dtype=np.uint8)

    batch = run_circuit(start, circuit, 1, rng=np.random.default_rng(seed))
    steps = list(run_circuit_step_by_step(start, circuit, rng=np.random.default_rng(seed)))

    assert np.array_equal(steps[-1].bits_after, batch[0])


def test_stepper_is_single_pass():
    circuit = make_circuit(6)
    stepper = run_circuit_step_by_step(np.zeros(8, dtype=np.uint8), circuit, rng=6)

    first = next(stepper)
    assert len(stepper) == len(circuit) - 1
    rest = list(stepper)
    assert len(rest) == len(circuit) - 1
    assert list(stepper) == []
    with pytest.raises(StopIteration):
        next(stepper)
    assert first.bits_before.sum() == 0


def test_steps_do_not_alias_starting_bits():
    circuit = make_circuit(7)
    start = np.zeros(8, dtype=np.uint8)

    steps = list(run_circuit_step_by_step(start, circuit, rng=7))
    steps[0].bits_after[:] = 1

    assert start.sum() == 0
    assert not np.all(steps[1].bits_before == 1)


def test_short_assignment_is_rejected_by_both_modes():
    circuit = build_circuit('reduced', [(0, 5)], [0.5], 1)

    with pytest.raises(InvalidParameter):
        run_circuit([0, 0], circuit, 3, rng=0)
    with pytest.raises(InvalidParameter):
        run_circuit_step_by_step([0, 0], circuit, rng=0)
